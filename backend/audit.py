"""Merge an on-page scrape and PageSpeed metrics into one audit result."""

import uuid

from models import AuditResult, PageSpeedMetrics, ScrapeResult
from pagespeed import round_half_up
from scraper import utc_timestamp

TITLE_LENGTH_RANGE = (30, 60)
META_DESCRIPTION_LENGTH_RANGE = (120, 160)
PERFORMANCE_THRESHOLD = 90


def _outside(value: int, bounds: tuple[int, int]) -> bool:
    low, high = bounds
    return value < low or value > high


def count_issues(scrape: ScrapeResult, pagespeed: PageSpeedMetrics) -> int:
    """One issue per failed on-page check plus one per PageSpeed diagnostic."""
    checks = [
        _outside(scrape["title_length"], TITLE_LENGTH_RANGE),
        _outside(scrape["meta_description_length"], META_DESCRIPTION_LENGTH_RANGE),
        scrape["h1_count"] == 0,
        scrape["images_without_alt_count"] > 0,
        pagespeed["performance"] < PERFORMANCE_THRESHOLD,
    ]
    return sum(checks) + len(pagespeed["diagnostics"])


def build_audit_result(scrape: ScrapeResult, pagespeed: PageSpeedMetrics) -> AuditResult:
    scores = [
        pagespeed["performance"],
        pagespeed["seo"],
        pagespeed["accessibility"],
        pagespeed["best_practices"],
    ]
    return {
        "id": uuid.uuid4().hex,
        "url": scrape["url"],
        "date": utc_timestamp(),
        "score": round_half_up(sum(scores) / len(scores)),
        "performance": pagespeed["performance"],
        "seo": pagespeed["seo"],
        "accessibility": pagespeed["accessibility"],
        "best_practices": pagespeed["best_practices"],
        "core_web_vitals": pagespeed["core_web_vitals"],
        "diagnostics": pagespeed["diagnostics"],
        "issues_count": count_issues(scrape, pagespeed),
    }
