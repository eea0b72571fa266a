"""Pydantic schemas for API request/response.

Field names are snake_case in Python and camelCase on the wire.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ScrapeRequest(BaseModel):
    """Request body for POST /api/scrape."""

    url: str | None = None

    @field_validator("url", mode="before")
    @classmethod
    def normalize_url_field(cls, value: object) -> str | None:
        if value is None:
            return None
        return str(value)


class PageSpeedRequest(ScrapeRequest):
    """Request body for POST /api/pagespeed and POST /api/audit."""

    strategy: str | None = None


class SecurityStatusSchema(CamelModel):
    https_enforced: bool = False
    status_code: int | None = None
    is_secure: bool = False


class ImageAltIssueSchema(CamelModel):
    src: str
    index: int


class KeywordEntrySchema(CamelModel):
    word: str
    count: int


class ScrapeResponse(CamelModel):
    """Response for POST /api/scrape."""

    url: str
    title: str
    title_length: int
    meta_description: str
    meta_description_length: int
    h1_count: int
    h1_tags: list[str]
    images_without_alt: list[ImageAltIssueSchema]
    images_without_alt_count: int
    has_viewport_meta: bool
    has_canonical: bool
    security_status: SecurityStatusSchema
    keyword_analysis: list[KeywordEntrySchema]
    timestamp: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str


class CoreWebVitalsSchema(CamelModel):
    lcp: float | None = None
    lcp_display_value: str | None = None
    cls: float | None = None
    cls_display_value: str | None = None
    fid: float | None = None
    fid_display_value: str | None = None
    fcp: float | None = None
    fcp_display_value: str | None = None
    si: float | None = None
    si_display_value: str | None = None


class DiagnosticItemSchema(CamelModel):
    id: str
    title: str
    description: str = ""
    display_value: str = ""
    category: str = "performance"
    score: float = 0


class PageSpeedResponse(CamelModel):
    """Response for POST /api/pagespeed."""

    performance: int
    seo: int
    accessibility: int
    best_practices: int
    core_web_vitals: CoreWebVitalsSchema
    diagnostics: list[DiagnosticItemSchema]


class AuditResultSchema(CamelModel):
    """Unified audit: response for POST /api/audit, request for POST /api/recommendations."""

    id: str = ""
    url: str
    date: str = ""
    score: int = Field(default=0, ge=0, le=100)
    performance: int = Field(default=0, ge=0, le=100)
    seo: int = Field(default=0, ge=0, le=100)
    accessibility: int = Field(default=0, ge=0, le=100)
    best_practices: int = Field(default=0, ge=0, le=100)
    core_web_vitals: CoreWebVitalsSchema = Field(default_factory=CoreWebVitalsSchema)
    diagnostics: list[DiagnosticItemSchema] = Field(default_factory=list)
    issues_count: int = Field(default=0, ge=0)


class RecommendationsResponse(BaseModel):
    recommendations: list[str]
