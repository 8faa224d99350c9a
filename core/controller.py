#!/usr/bin/env python3
"""
Workflow Controller
Owns the WorkflowState of one session and sequences the AI collaborators:
upload -> extract -> analyze -> (optional) translate.

Every state change goes through _transition(), which validates the move
against TRANSITIONS and publishes the new state to the listener.
Each operation captures a generation number when it starts; results that
come back after a newer operation (or a reset) began are dropped.
"""

from typing import Callable, Optional, Protocol, Union

from core.config import Settings
from core.errors import (
    ConfigurationError,
    ExtractionEmptyError,
    InvalidTransitionError,
)
from core.models import (
    AnalysisReport,
    Language,
    UploadedFile,
    WorkflowState,
    WorkflowStatus,
)
from utils.helpers import safe_log

CONFIGURATION_MESSAGE = "API key is not configured. Please set the OPENAI_API_KEY environment variable."
EMPTY_TEXT_MESSAGE = "Could not extract any text from the file. Please try a clearer document."
UNKNOWN_ANALYSIS_MESSAGE = "An unknown error occurred during analysis."
UNKNOWN_TRANSLATION_MESSAGE = "An unknown error occurred during translation."

EXTRACTING_MESSAGE = "Extracting text…"
ANALYZING_MESSAGE = "Analyzing report…"
TRANSLATING_MESSAGE = "Translating the report to {language}…"

BUSY_STATES = (WorkflowStatus.EXTRACTING, WorkflowStatus.ANALYZING, WorkflowStatus.TRANSLATING)

# Legal moves. Reset (-> IDLE) is legal from anywhere and not listed.
TRANSITIONS = {
    WorkflowStatus.IDLE: {WorkflowStatus.EXTRACTING, WorkflowStatus.ERRORED},
    WorkflowStatus.EXTRACTING: {WorkflowStatus.EXTRACTING, WorkflowStatus.ANALYZING, WorkflowStatus.ERRORED},
    WorkflowStatus.ANALYZING: {WorkflowStatus.EXTRACTING, WorkflowStatus.READY, WorkflowStatus.ERRORED},
    WorkflowStatus.TRANSLATING: {WorkflowStatus.EXTRACTING, WorkflowStatus.TRANSLATING,
                                 WorkflowStatus.READY, WorkflowStatus.ERRORED},
    WorkflowStatus.READY: {WorkflowStatus.EXTRACTING, WorkflowStatus.TRANSLATING, WorkflowStatus.ERRORED},
    WorkflowStatus.ERRORED: {WorkflowStatus.EXTRACTING, WorkflowStatus.TRANSLATING,
                             WorkflowStatus.READY, WorkflowStatus.ERRORED},
}


class Extractor(Protocol):
    async def extract(self, file: UploadedFile) -> str: ...


class Analyzer(Protocol):
    async def analyze(self, text: str) -> AnalysisReport: ...


class Translator(Protocol):
    async def translate(self, report: AnalysisReport, language: Language) -> AnalysisReport: ...


StateListener = Callable[[WorkflowState], None]


class WorkflowController:

    def __init__(self,
                 settings: Settings,
                 extractor: Optional[Extractor] = None,
                 analyzer: Optional[Analyzer] = None,
                 translator: Optional[Translator] = None,
                 on_change: Optional[StateListener] = None):
        self.settings = settings
        self.on_change = on_change
        self._extractor = extractor
        self._analyzer = analyzer
        self._translator = translator
        self._state = WorkflowState()
        self._generation = 0

    # --- Read access for the presentation layer ---

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def displayed_analysis(self) -> Optional[AnalysisReport]:
        return self._state.displayed_analysis

    def is_translation_available(self, language: Union[Language, str]) -> bool:
        language = Language.from_string(language)
        if language == Language.ENGLISH:
            return self._state.original_analysis is not None
        return (self._state.translated_analysis is not None
                and self._state.translated_language == language)

    # --- Operations ---

    async def select_file(self, file: UploadedFile) -> None:
        """Start the extract -> analyze sequence for a newly chosen report."""
        generation = self._next_generation()
        state = self._state

        try:
            self._check_configuration()
        except ConfigurationError as e:
            # Keep the file so the UI still switches to the analysis view
            state.selected_file = file
            self._record_failure(e, CONFIGURATION_MESSAGE)
            self._transition(WorkflowStatus.ERRORED)
            return

        state.selected_file = file
        state.original_analysis = None
        state.translated_analysis = None
        state.translated_language = None
        state.current_language = Language.ENGLISH
        state.last_error = None
        self._transition(WorkflowStatus.EXTRACTING, EXTRACTING_MESSAGE)

        outcome = WorkflowStatus.ERRORED
        try:
            extractor, analyzer, _ = self._collaborators()

            text = await extractor.extract(file)
            if self._is_stale(generation, "Extraction"):
                return
            if not text or not text.strip():
                raise ExtractionEmptyError(EMPTY_TEXT_MESSAGE)

            self._transition(WorkflowStatus.ANALYZING, ANALYZING_MESSAGE)
            report = await analyzer.analyze(text)
            if self._is_stale(generation, "Analysis"):
                return

            state.original_analysis = report
            state.last_error = None
            outcome = WorkflowStatus.READY
            safe_log(f"Controller: Analysis ready for {file.name}")

        except InvalidTransitionError:
            raise
        except Exception as e:
            if not self._is_stale(generation, "Analysis failure"):
                self._record_failure(e, UNKNOWN_ANALYSIS_MESSAGE)
        finally:
            if generation == self._generation:
                self._transition(outcome)

    async def change_language(self, language: Union[Language, str]) -> None:
        """Switch the displayed language, translating on demand."""
        language = Language.from_string(language)
        state = self._state

        if state.original_analysis is None:
            return

        state.current_language = language

        if language == Language.ENGLISH:
            self._publish()
            return

        if state.translated_analysis is not None and state.translated_language == language:
            safe_log(f"Controller: Using cached {language.value} translation")
            if state.status == WorkflowStatus.ERRORED:
                # A failed translation into another language no longer applies
                state.last_error = None
                self._transition(WorkflowStatus.READY)
            else:
                self._publish()
            return

        generation = self._next_generation()
        original = state.original_analysis
        state.last_error = None
        self._transition(WorkflowStatus.TRANSLATING, TRANSLATING_MESSAGE.format(language=language.value))

        outcome = WorkflowStatus.ERRORED
        try:
            _, _, translator = self._collaborators()
            translated = await translator.translate(original, language)
            if self._is_stale(generation, "Translation"):
                return

            # Single slot: a new language replaces whatever was cached
            state.translated_analysis = translated
            state.translated_language = language
            state.last_error = None
            outcome = WorkflowStatus.READY

        except InvalidTransitionError:
            raise
        except Exception as e:
            if not self._is_stale(generation, "Translation failure"):
                self._record_failure(e, UNKNOWN_TRANSLATION_MESSAGE)
                state.current_language = Language.ENGLISH
        finally:
            if generation == self._generation:
                self._transition(outcome)

    def reset(self) -> None:
        """Back to a blank session. In-flight results will be discarded."""
        self._next_generation()
        self._state = WorkflowState()
        self._transition(WorkflowStatus.IDLE)

    # --- State machine ---

    def _transition(self, status: WorkflowStatus, message: str = "") -> None:
        current = self._state.status
        if status != WorkflowStatus.IDLE and status not in TRANSITIONS[current]:
            raise InvalidTransitionError(f"Cannot move from {current.value} to {status.value}")

        self._state.status = status
        self._state.is_busy = status in BUSY_STATES
        self._state.status_message = message if self._state.is_busy else ""
        self._publish()

    def _publish(self) -> None:
        if self.on_change is not None:
            self.on_change(self._state)

    # --- Internals ---

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _is_stale(self, generation: int, step: str) -> bool:
        if generation != self._generation:
            safe_log(f"Controller: Discarding stale {step} result (gen {generation} < {self._generation})", "WARNING")
            return True
        return False

    def _check_configuration(self) -> None:
        if not self.settings.is_configured:
            raise ConfigurationError(CONFIGURATION_MESSAGE)

    def _record_failure(self, error: Exception, fallback: str) -> None:
        message = str(error).strip() or fallback
        safe_log(f"Controller: {type(error).__name__} - {message}", "ERROR")
        self._state.last_error = message

    def _collaborators(self):
        if self._extractor is None or self._analyzer is None or self._translator is None:
            # Default OpenAI-backed collaborators share one service
            from core.analyzer import ReportAnalyzer, ReportTranslator
            from core.extractor import DocumentExtractor
            from core.service import OpenAIService

            service = OpenAIService(self.settings)
            self._extractor = self._extractor or DocumentExtractor(service)
            self._analyzer = self._analyzer or ReportAnalyzer(service)
            self._translator = self._translator or ReportTranslator(service)
        return self._extractor, self._analyzer, self._translator
