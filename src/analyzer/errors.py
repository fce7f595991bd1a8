"""
Exceptions raised by the analysis pipeline.

Each carries the HTTP status and public message the API reports for it.
"""


class AnalyzerError(Exception):
    """Base class for analysis failures."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.message)
        self.detail = detail


class UnsupportedFileTypeError(AnalyzerError):
    """Declared MIME type is neither PDF nor DOCX."""

    status_code = 400
    message = "Unsupported file format"


class ExtractionError(AnalyzerError):
    """Text could not be extracted from the uploaded document."""

    status_code = 500
    message = "Text extraction failed"


class CompletionError(AnalyzerError):
    """The completion service failed or returned nothing."""

    status_code = 502
    message = "Completion service error"
