"""
Pydantic models for Jobs, leaderboard entries and analysis results.

Field aliases follow the JSON wire/storage format (camelCase).
"""

from pydantic import BaseModel, ConfigDict, Field

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)


class Job(BaseModel):
    """Hiring requisition used as scoring context."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Time-based job ID (epoch milliseconds)")
    title: str = Field(..., description="Job title")
    description: str = Field(default="", description="Free-text job description")


class LeaderboardEntry(BaseModel):
    """One analysed CV for a job."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    file_name: str = Field(..., alias="fileName", description="Original CV file name")
    score: int = Field(default=0, description="Match score (0-100)")
    summary: str = Field(default="", description="Profile summary from the LLM")


class AnalysisResult(BaseModel):
    """Response body of POST /api/analyze."""

    model_config = ConfigDict(populate_by_name=True)

    match_score: int = Field(default=0, alias="matchScore")
    profile_summary: str = Field(default="", alias="profileSummary")

    def to_entry(self, file_name: str) -> LeaderboardEntry:
        """Convert to a leaderboard entry for the given file."""
        return LeaderboardEntry(
            file_name=file_name,
            score=self.match_score,
            summary=self.profile_summary,
        )


class ErrorResponse(BaseModel):
    """Error body returned by the API."""

    error: str
