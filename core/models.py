#!/usr/bin/env python3
"""
Data Models Module
Defines the strict data structures (Blueprints) for the application.
AnalysisReport is the wire contract shared by the Analysis and Translation calls.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any
from enum import Enum

from core.errors import MalformedResponseError


class Language(str, Enum):
    """
    Report languages. English is always the source language.
    """
    ENGLISH = "English"
    HINDI = "Hindi"
    GUJARATI = "Gujarati"

    @property
    def native_label(self) -> str:
        return _NATIVE_LABELS[self]

    @classmethod
    def from_string(cls, value: str) -> 'Language':
        """Accepts 'Hindi', 'hindi' or a Language; raises ValueError for anything else."""
        if isinstance(value, cls):
            return value
        for lang in cls:
            if lang.value.lower() == str(value).strip().lower():
                return lang
        raise ValueError(f"Unsupported language: {value}")


_NATIVE_LABELS = {
    Language.ENGLISH: "English",
    Language.HINDI: "हिन्दी",
    Language.GUJARATI: "ગુજરાતી",
}


class WorkflowStatus(str, Enum):
    IDLE = "idle"
    EXTRACTING = "extracting"
    ANALYZING = "analyzing"
    TRANSLATING = "translating"
    READY = "ready"
    ERRORED = "errored"

    @property
    def is_settled(self) -> bool:
        return self in (WorkflowStatus.READY, WorkflowStatus.ERRORED)


# camelCase wire key -> attribute name, in display order
REPORT_FIELDS = {
    "simpleSummary": "simple_summary",
    "keyFindings": "key_findings",
    "possibleCauses": "possible_causes",
    "cureAndCare": "cure_and_care",
    "actionSteps": "action_steps",
}


@dataclass(frozen=True)
class AnalysisReport:
    """
    Structured, patient-friendly analysis of one medical report.
    """
    simple_summary: str
    key_findings: List[str]
    possible_causes: List[str]
    cure_and_care: List[str]
    action_steps: List[str]

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to the camelCase dictionary the AI schema uses"""
        data: Dict[str, Any] = {"simpleSummary": self.simple_summary}
        for key, attr in REPORT_FIELDS.items():
            if key != "simpleSummary":
                data[key] = list(getattr(self, attr))
        return data

    @classmethod
    def from_dict(cls, data: Any) -> 'AnalysisReport':
        """
        Build a report from parsed JSON. Every field is required.
        Raises MalformedResponseError when the shape is wrong.
        """
        if not isinstance(data, dict):
            raise MalformedResponseError(f"Expected a JSON object, got {type(data).__name__}")

        missing = [key for key in REPORT_FIELDS if data.get(key) is None]
        if missing:
            raise MalformedResponseError(f"Missing fields: {', '.join(missing)}")

        summary = data["simpleSummary"]
        if not isinstance(summary, str):
            raise MalformedResponseError("simpleSummary must be a string")

        values = {"simple_summary": summary.strip()}
        for key, attr in REPORT_FIELDS.items():
            if key == "simpleSummary":
                continue
            items = data[key]
            if not isinstance(items, list) or not all(isinstance(i, str) for i in items):
                raise MalformedResponseError(f"{key} must be a list of strings")
            values[attr] = [i.strip() for i in items]

        return cls(**values)


@dataclass
class UploadedFile:
    """
    The report the user picked. Only the controller holds a reference.
    """
    name: str
    mime_type: str
    data: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class WorkflowState:
    """
    Everything the presentation layer needs to render one session.
    """
    selected_file: Optional[UploadedFile] = None
    original_analysis: Optional[AnalysisReport] = None
    translated_analysis: Optional[AnalysisReport] = None
    translated_language: Optional[Language] = None
    current_language: Language = Language.ENGLISH
    is_busy: bool = False
    status_message: str = ""
    last_error: Optional[str] = None
    status: WorkflowStatus = WorkflowStatus.IDLE

    @property
    def _shows_translation(self) -> bool:
        return (self.current_language != Language.ENGLISH
                and self.translated_analysis is not None
                and self.translated_language == self.current_language)

    @property
    def displayed_analysis(self) -> Optional[AnalysisReport]:
        """Translated report when it matches the current language, else the original"""
        return self.translated_analysis if self._shows_translation else self.original_analysis

    @property
    def displayed_language(self) -> Language:
        return self.current_language if self._shows_translation else Language.ENGLISH
