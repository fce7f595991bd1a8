"""
Parsing of completion text into a match score and profile summary.

A JSON object matching ScoreResponse is preferred. Free text falls back to
the first-number / remaining-lines heuristic.
"""

import json
import math
import re
from typing import Any, Optional

from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator

from shared.models import AnalysisResult

MIN_SCORE = 0
MAX_SCORE = 100

_FENCE_START = re.compile(r"^```(?:json)?\s*")
_FENCE_END = re.compile(r"\s*```$")
_DIGITS = re.compile(r"\d+")


def clamp_score(score: int) -> int:
    """Clamp a score into [0, 100]."""
    if not MIN_SCORE <= score <= MAX_SCORE:
        logger.warning(f"Invalid score {score}, clamping to range {MIN_SCORE}-{MAX_SCORE}")
        score = max(MIN_SCORE, min(MAX_SCORE, score))
    return score


class ScoreResponse(BaseModel):
    """Structured completion payload."""

    match_score: int = Field(..., description="Match score (0-100)")
    profile_summary: str = Field(default="")

    @field_validator("match_score", mode="before")
    @classmethod
    def _round(cls, value: Any) -> Any:
        if isinstance(value, float) and math.isfinite(value):
            return round(value)
        return value

    @field_validator("match_score")
    @classmethod
    def _clamp(cls, value: int) -> int:
        return clamp_score(value)


def parse_structured(text: str) -> Optional[ScoreResponse]:
    """Return the validated JSON payload, or None if the text is not one."""
    raw = (text or "").strip()
    if raw.startswith("```"):
        raw = _FENCE_START.sub("", raw)
        raw = _FENCE_END.sub("", raw)
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None
    try:
        return ScoreResponse.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Structured completion failed validation: {e}")
        return None


def parse_heuristic(text: str) -> AnalysisResult:
    """
    Score is the first run of digits in the text (0 if none).
    Summary is every line after the first, joined with single spaces.
    """
    text = text or ""
    match = _DIGITS.search(text)
    score = int(match.group()) if match else 0
    summary = " ".join(text.split("\n")[1:])
    return AnalysisResult(match_score=clamp_score(score), profile_summary=summary)


def parse_completion(text: str) -> AnalysisResult:
    """Parse completion text, preferring the structured format."""
    structured = parse_structured(text)
    if structured is not None:
        return AnalysisResult(
            match_score=structured.match_score,
            profile_summary=structured.profile_summary.strip(),
        )

    logger.debug("Completion is not structured, using heuristic parser")
    return parse_heuristic(text)
