"""
CV analysis pipeline: extract text, build prompt, call the model, parse.
"""

import asyncio
from typing import Optional

from loguru import logger

from shared.config import Settings, get_settings
from shared.models import AnalysisResult

from .completion import CompletionClient
from .extractor import TextExtractor
from .parser import parse_completion
from .prompts import build_scoring_prompt


class CVAnalyzer:
    """Scores one CV document against a job description."""

    def __init__(
        self,
        extractor: Optional[TextExtractor] = None,
        completion_client: Optional[CompletionClient] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.extractor = extractor or TextExtractor(max_chars=self.settings.max_cv_chars)
        self.completion_client = completion_client or CompletionClient(self.settings)

    def supports(self, mime_type: Optional[str]) -> bool:
        """Whether documents of this MIME type can be analysed."""
        return self.extractor.supports(mime_type)

    async def analyze(
        self,
        data: bytes,
        mime_type: Optional[str],
        job_description: str,
    ) -> AnalysisResult:
        """
        Analyze a CV document against a job description.

        Returns:
            AnalysisResult with match score and profile summary
        """
        cv_text = await asyncio.to_thread(self.extractor.extract, data, mime_type)

        structured = self.settings.structured_output
        prompt = build_scoring_prompt(job_description, cv_text, structured=structured)
        output = await self.completion_client.complete(prompt, json_output=structured)

        result = parse_completion(output)
        logger.info(f"Analysis complete: score={result.match_score}")
        return result
