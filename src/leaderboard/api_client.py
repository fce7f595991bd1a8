"""
HTTP client for the CV analysis API.
"""

import mimetypes
from pathlib import Path
from typing import Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from shared.config import Settings, get_settings
from shared.models import DOCX_MIME_TYPE, PDF_MIME_TYPE, AnalysisResult

ANALYZE_PATH = "/api/analyze"

# Not every platform's mimetypes table knows .docx
_KNOWN_TYPES = {
    ".pdf": PDF_MIME_TYPE,
    ".docx": DOCX_MIME_TYPE,
}


class AnalyzeRequestError(Exception):
    """The analysis request failed or returned a non-OK response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def guess_mime_type(path: Path) -> str:
    """MIME type declared for an upload, based on the file extension."""
    known = _KNOWN_TYPES.get(path.suffix.lower())
    if known:
        return known
    guessed, _ = mimetypes.guess_type(path.name)
    return guessed or "application/octet-stream"


class AnalyzeClient:
    """Client for POST /api/analyze."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self.base_url = base_url or self.settings.api_url
        self.transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.settings.api_timeout_seconds,
                transport=self.transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def analyze(self, path: Path, job_description: str) -> AnalysisResult:
        """
        Upload a CV file for scoring against a job description.

        Raises:
            AnalyzeRequestError: network failure, non-OK status or bad body
        """
        client = await self._get_client()
        mime_type = guess_mime_type(path)
        logger.info(f"Uploading {path.name} ({mime_type})")

        try:
            response = await client.post(
                ANALYZE_PATH,
                data={"jobDescription": job_description},
                files={"cv": (path.name, path.read_bytes(), mime_type)},
            )
        except httpx.HTTPError as e:
            raise AnalyzeRequestError(f"Request failed: {e}") from e

        if not response.is_success:
            raise AnalyzeRequestError(
                _error_message(response), status_code=response.status_code
            )

        try:
            return AnalysisResult.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise AnalyzeRequestError(f"Invalid response body: {e}") from e


def _error_message(response: httpx.Response) -> str:
    try:
        error = response.json().get("error")
    except (ValueError, AttributeError):
        error = None
    return f"{response.status_code}: {error or response.reason_phrase}"
