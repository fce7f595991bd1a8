# Shared module for common utilities, models, and configuration
from .config import Settings, get_settings
from .log import setup_logging
from .models import (
    DOCX_MIME_TYPE,
    PDF_MIME_TYPE,
    AnalysisResult,
    ErrorResponse,
    Job,
    LeaderboardEntry,
)

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "AnalysisResult",
    "ErrorResponse",
    "Job",
    "LeaderboardEntry",
    "PDF_MIME_TYPE",
    "DOCX_MIME_TYPE",
]
