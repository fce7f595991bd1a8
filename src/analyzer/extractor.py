"""
Text extraction from uploaded CV files.

One strategy per supported format, selected by the declared MIME type.
Documents are read from bytes in memory.
"""

import re
import unicodedata
from abc import ABC, abstractmethod
from io import BytesIO
from typing import Optional

import pdfplumber
from docx import Document
from loguru import logger

from shared.models import DOCX_MIME_TYPE, PDF_MIME_TYPE

from .errors import ExtractionError, UnsupportedFileTypeError


class ExtractionStrategy(ABC):
    """Extracts plain text from one document format."""

    @abstractmethod
    def extract(self, data: bytes) -> str:
        """Return the raw text of the document."""


class PdfExtractionStrategy(ExtractionStrategy):
    """Extract text from PDF files using pdfplumber."""

    def extract(self, data: bytes) -> str:
        parts = []
        with pdfplumber.open(BytesIO(data)) as pdf:
            for page in pdf.pages:
                text = page.extract_text()
                if text:
                    parts.append(text)
        return "\n\n".join(parts)


class DocxExtractionStrategy(ExtractionStrategy):
    """Extract raw text from DOCX files using python-docx."""

    def extract(self, data: bytes) -> str:
        doc = Document(BytesIO(data))
        parts = [p.text for p in doc.paragraphs if p.text.strip()]
        for table in doc.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    parts.append(" ".join(cells))
        return "\n\n".join(parts)


def clean_text(text: str, max_chars: Optional[int] = None) -> str:
    """Normalize unicode and collapse excessive whitespace."""
    if not text or not text.strip():
        return ""
    t = unicodedata.normalize("NFC", text)
    t = re.sub(r"[ \t]+", " ", t)
    t = re.sub(r"\n\s*\n\s*\n", "\n\n", t)
    t = t.strip()
    if max_chars and len(t) > max_chars:
        t = t[:max_chars]
    return t


class TextExtractor:
    """Picks an extraction strategy by MIME type and cleans the result."""

    def __init__(
        self,
        strategies: Optional[dict[str, ExtractionStrategy]] = None,
        max_chars: Optional[int] = None,
    ):
        self.strategies = strategies or {
            PDF_MIME_TYPE: PdfExtractionStrategy(),
            DOCX_MIME_TYPE: DocxExtractionStrategy(),
        }
        self.max_chars = max_chars

    def supports(self, mime_type: Optional[str]) -> bool:
        return mime_type in self.strategies

    def strategy_for(self, mime_type: Optional[str]) -> ExtractionStrategy:
        """Return the strategy for a MIME type or raise UnsupportedFileTypeError."""
        strategy = self.strategies.get(mime_type or "")
        if strategy is None:
            raise UnsupportedFileTypeError(f"MIME type not supported: {mime_type}")
        return strategy

    def extract(self, data: bytes, mime_type: Optional[str]) -> str:
        """
        Extract and clean text from a document.

        Raises:
            UnsupportedFileTypeError: MIME type has no strategy
            ExtractionError: the parsing library failed or found no text
        """
        strategy = self.strategy_for(mime_type)
        try:
            raw = strategy.extract(data)
        except Exception as e:
            logger.error(f"Extraction failed for {mime_type}: {e}")
            raise ExtractionError(str(e)) from e

        text = clean_text(raw, self.max_chars)
        if not text:
            raise ExtractionError("No text found in document")

        logger.debug(f"Extracted {len(text)} characters ({mime_type})")
        return text
