#!/usr/bin/env python3
"""
Error Taxonomy
Every failure the workflow can surface to the user. The controller converts
all of them (except InvalidTransitionError) into a plain message string.
"""


class MediAssistError(Exception):
    """Base class for all application errors"""


class ConfigurationError(MediAssistError):
    """API credential is missing"""


class UnsupportedFileTypeError(MediAssistError):
    """Uploaded file is not a PDF, image or text file"""


class ExtractionEmptyError(MediAssistError):
    """Extraction produced no usable text"""


class CollaboratorFailure(MediAssistError):
    """Network or model error while talking to the AI service"""


class MalformedResponseError(MediAssistError):
    """The AI returned output that violates the report schema"""


class InvalidTransitionError(MediAssistError):
    """Workflow state machine was asked to make an illegal move"""
