#!/usr/bin/env python3
"""
Report Analyzer & Translator
The two schema-bound AI calls: plain text -> AnalysisReport, and
AnalysisReport -> AnalysisReport in another language.
"""

import json
from typing import Any, Dict

from core.errors import CollaboratorFailure
from core.models import AnalysisReport, Language
from core.parser import ResponseParser
from core.service import OpenAIService
from utils.helpers import safe_log

INVALID_ANALYSIS_MESSAGE = "The AI returned an invalid analysis format. Please try again."
INVALID_TRANSLATION_MESSAGE = "The AI returned an invalid translation format. Please try again."


def _string_list(description: str) -> Dict[str, Any]:
    return {"type": "array", "items": {"type": "string"}, "description": description}


ANALYSIS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "simpleSummary": {
            "type": "string",
            "description": "A simple, one-paragraph summary of the report for a non-medical person.",
        },
        "keyFindings": _string_list(
            "A bulleted list of the most important medical findings, problems, or diseases detected."),
        "possibleCauses": _string_list(
            "A bulleted list of possible causes or risk factors related to the key findings."),
        "cureAndCare": _string_list(
            "A bulleted list of general cure and care suggestions in simple, non-medical language."),
        "actionSteps": _string_list(
            "A bulleted list of recommended next steps for the patient."),
    },
    "required": ["simpleSummary", "keyFindings", "possibleCauses", "cureAndCare", "actionSteps"],
    "additionalProperties": False,
}

ANALYSIS_PROMPT = """Analyze the following medical report text and provide a structured analysis. The target audience is a patient with little to no medical knowledge, so use simple and clear language.

Medical Report Text:
---
{text}
---

Provide the analysis in the specified JSON format."""

TRANSLATION_PROMPT = """Translate all the string values in the following JSON object to {language}. Keep the JSON structure and keys exactly the same.

JSON to translate:
---
{payload}
---

Return ONLY the translated JSON object."""


class ReportAnalyzer:
    """Analysis collaborator"""

    def __init__(self, service: OpenAIService):
        self.service = service

    async def analyze(self, text: str) -> AnalysisReport:
        messages = [{"role": "user", "content": ANALYSIS_PROMPT.format(text=text)}]
        success, raw, error = await self.service.get_completion(
            messages, task_name="Analysis", response_schema=ANALYSIS_SCHEMA
        )
        if not success:
            raise CollaboratorFailure(error)

        report = ResponseParser.parse_report(raw, INVALID_ANALYSIS_MESSAGE)
        safe_log(f"Analyzer: {len(report.key_findings)} findings, {len(report.action_steps)} action steps")
        return report


class ReportTranslator:
    """Translation collaborator"""

    def __init__(self, service: OpenAIService):
        self.service = service

    async def translate(self, report: AnalysisReport, language: Language) -> AnalysisReport:
        payload = json.dumps(report.to_dict(), indent=2, ensure_ascii=False)
        messages = [{
            "role": "user",
            "content": TRANSLATION_PROMPT.format(language=language.value, payload=payload),
        }]
        success, raw, error = await self.service.get_completion(
            messages, task_name=f"Translation ({language.value})", response_schema=ANALYSIS_SCHEMA
        )
        if not success:
            raise CollaboratorFailure(error)

        return ResponseParser.parse_report(raw, INVALID_TRANSLATION_MESSAGE)
