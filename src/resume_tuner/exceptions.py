"""Exception hierarchy for resume-tuner."""

from __future__ import annotations


class ResumeTunerError(Exception):
    """Base class for all resume-tuner errors."""


class ValidationError(ResumeTunerError):
    """User input rejected before any network work happens."""


class InvalidFileTypeError(ValidationError):
    def __init__(self, content_type: str | None, file_name: str | None = None):
        self.content_type = content_type
        self.file_name = file_name
        super().__init__("Please upload a valid PDF file.")


class FileTooLargeError(ValidationError):
    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"File is too large ({size / 1024 / 1024:.1f}MB); limit is {limit // (1024 * 1024)}MB.")


class EmptyFileError(ValidationError):
    def __init__(self, file_name: str | None = None):
        self.file_name = file_name
        super().__init__("The selected file is empty.")


class MissingInputError(ValidationError):
    def __init__(self):
        super().__init__("Please upload a resume and enter a job description.")


class EmptyModelOutputError(ResumeTunerError):
    """The model responded without any text."""

    def __init__(self, model: str | None = None):
        self.model = model
        super().__init__("No text response generated from the model.")


class ExportError(ResumeTunerError):
    """PDF generation failed."""
