"""Data models and types used across the backend.

Pydantic request/response schemas are in schemas.py.
Types for scraper, PageSpeed and audit output live here.
"""

from typing import TypedDict


class SecurityStatus(TypedDict):
    """Outcome of the HEAD probe; degrades to insecure when the probe fails."""

    https_enforced: bool
    status_code: int | None
    is_secure: bool


class ImageAltIssue(TypedDict):
    src: str
    index: int


class KeywordEntry(TypedDict):
    word: str
    count: int


class PageSignals(TypedDict):
    """Structural SEO signals extracted from one HTML document."""

    title: str
    title_length: int
    meta_description: str
    meta_description_length: int
    h1_count: int
    h1_tags: list[str]
    images_without_alt: list[ImageAltIssue]
    images_without_alt_count: int
    has_viewport_meta: bool
    has_canonical: bool


class ScrapeResult(PageSignals):
    """Full payload returned by POST /api/scrape."""

    url: str
    security_status: SecurityStatus
    keyword_analysis: list[KeywordEntry]
    timestamp: str


class CoreWebVitals(TypedDict):
    lcp: float | None
    lcp_display_value: str | None
    cls: float | None
    cls_display_value: str | None
    fid: float | None
    fid_display_value: str | None
    fcp: float | None
    fcp_display_value: str | None
    si: float | None
    si_display_value: str | None


class DiagnosticItem(TypedDict):
    id: str
    title: str
    description: str
    display_value: str
    category: str
    score: float


class PageSpeedMetrics(TypedDict):
    """Category scores (0-100), Core Web Vitals and failed audits from PageSpeed."""

    performance: int
    seo: int
    accessibility: int
    best_practices: int
    core_web_vitals: CoreWebVitals
    diagnostics: list[DiagnosticItem]


class AuditResult(TypedDict):
    """On-page scrape and PageSpeed metrics merged into one audit."""

    id: str
    url: str
    date: str
    score: int
    performance: int
    seo: int
    accessibility: int
    best_practices: int
    core_web_vitals: CoreWebVitals
    diagnostics: list[DiagnosticItem]
    issues_count: int
