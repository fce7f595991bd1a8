"""
Analyzer Service - LLM-based CV scoring.

Extracts text from a PDF/DOCX CV and asks a chat model for a 0-100 match
score and a short profile summary against a job description.
"""

from .completion import CompletionClient
from .errors import (
    AnalyzerError,
    CompletionError,
    ExtractionError,
    UnsupportedFileTypeError,
)
from .extractor import DOCX_MIME_TYPE, PDF_MIME_TYPE, TextExtractor
from .parser import parse_completion
from .prompts import build_scoring_prompt
from .service import CVAnalyzer

__all__ = [
    "CVAnalyzer",
    "CompletionClient",
    "TextExtractor",
    "parse_completion",
    "build_scoring_prompt",
    "PDF_MIME_TYPE",
    "DOCX_MIME_TYPE",
    "AnalyzerError",
    "CompletionError",
    "ExtractionError",
    "UnsupportedFileTypeError",
]
