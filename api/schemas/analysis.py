"""Request and response schemas for analysis, results and LLM endpoints."""

from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator


def _normalize_url(v: str) -> str:
    v = v.strip()
    if "://" not in v:
        v = f"https://{v}"
    parsed = urlparse(v)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("Invalid URL format")
    return v


class AnalyzeRequest(BaseModel):
    """Analyze one page."""

    url: str = Field(..., min_length=1, max_length=2048)
    include_content: bool = Field(True, description="Include extracted content in the report")

    @field_validator("url")
    @classmethod
    def normalize_url(cls, v: str) -> str:
        """Default to https when no scheme is given."""
        return _normalize_url(v)


class ResultSummary(BaseModel):
    """Index entry for a stored report."""

    id: str
    url: str | None = None
    analyzed_at: str | None = None
    overall_score: int | None = None
    seo_score: int | None = None
    geo_score: int | None = None


class DeletedResponse(BaseModel):
    deleted: int


class EnhanceRequest(BaseModel):
    """Run LLM enhancement for a stored report."""

    result_id: str = Field(..., min_length=1, max_length=64)
    text: str | None = Field(None, description="Page text; defaults to the stored content")


class SimulateQueryRequest(BaseModel):
    """Ask the model whether it would cite a page for a query."""

    query: str = Field(..., min_length=1, max_length=500)
    url: str = Field(..., min_length=1, max_length=2048)
    text: str = Field(..., min_length=1)
    geo_score: int | None = Field(
        None, ge=0, le=800, description="Used for a heuristic answer when no LLM is configured"
    )

    @field_validator("url")
    @classmethod
    def normalize_url(cls, v: str) -> str:
        return _normalize_url(v)
