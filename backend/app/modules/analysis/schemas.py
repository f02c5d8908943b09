"""Document analysis API schemas.

Request/response payloads are camelCase on the wire (the document
management front-end speaks camelCase); Python attributes stay snake_case.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.modules.analysis.categories import DEFAULT_CATEGORY, Classification, Priority


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Inbound
# ---------------------------------------------------------------------------


class AnalysisRequest(_CamelModel):
    """One document to analyze. Immutable for the lifetime of the request."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    filename: str = Field(..., min_length=1, description="Original filename incl. extension")
    declared_category: str = Field(
        DEFAULT_CATEGORY, description="Category chosen by the uploader"
    )
    title: str = Field("", description="Document title; defaults to the filename")
    file_type_label: str = Field(
        "Unknown Document", description="e.g. 'PDF Document', 'Excel Spreadsheet'"
    )
    file_size: int = Field(0, ge=0, description="Size of the uploaded file in bytes")

    @field_validator("declared_category")
    @classmethod
    def _blank_category_is_default(cls, value: str) -> str:
        return value.strip() or DEFAULT_CATEGORY

    @property
    def display_title(self) -> str:
        return self.title or self.filename


# ---------------------------------------------------------------------------
# Outbound
# ---------------------------------------------------------------------------


class DocumentAnalysis(_CamelModel):
    """Final analysis payload returned to the document management app."""

    summary: str
    suggested_tags: list[str]
    suggested_category: str | None = None
    suggested_classification: Classification
    classification_confidence: float = Field(..., ge=0.0, le=1.0)
    content_type: str
    language: str
    readability_score: float = Field(..., ge=0.0, le=1.0)
    sentiment_score: float = Field(..., ge=0.0, le=1.0)
    sentiment_label: str
    key_topics: list[str]
    security_risks: list[str]
    priority: Priority
    insights: list[str]
    file_size: int
    file_name: str
    analysis_method: str
    ai_providers: list[str]
    hybrid_analysis_used: bool
    warnings: list[str]


class AnalyzeResponse(_CamelModel):
    success: bool = True
    analysis: DocumentAnalysis
    analyzed_at: str = Field(..., description="ISO-8601 UTC timestamp")


class ProviderStatus(_CamelModel):
    provider: str
    model: str
    configured: bool
    cooling_down: bool
    cooldown_remaining_s: int
    quota_exceeded: bool


class ProvidersResponse(_CamelModel):
    providers: list[ProviderStatus]
