"""
Google PageSpeed Insights client.

- Optional API key (PAGESPEED_API_KEY); requests without a key share Google's anonymous quota
- Upstream status codes mapped to API errors (400, 401, 403, 429, other)
- Category scores converted from 0..1 to 0..100
- Core Web Vitals and failed audits ("diagnostics") extracted from the Lighthouse result

Exactly one request per call; no retries and no caching.
"""

import logging
import math
from typing import Any

import requests

from config import Settings
from errors import PageSpeedError
from models import CoreWebVitals, DiagnosticItem, PageSpeedMetrics
from scraper import SessionFactory

logger = logging.getLogger(__name__)

BASE_URL = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"
PSI_CATEGORIES = ["performance", "seo", "accessibility", "best-practices"]
STRATEGIES = {"mobile", "desktop"}
MAX_DIAGNOSTICS = 10

# Core Web Vitals output key -> Lighthouse audit id
VITALS_AUDITS = {
    "lcp": "largest-contentful-paint",
    "cls": "cumulative-layout-shift",
    "fid": "max-potential-fid",
    "fcp": "first-contentful-paint",
    "si": "speed-index",
}

STATUS_ERRORS = {
    400: (400, "400: Bad Request - The URL may be invalid. Please check the URL and try again."),
    401: (502, "401: Invalid API key. Please check PAGESPEED_API_KEY in your .env file."),
    403: (502, "403: API key disabled. Please check your Google Cloud Console."),
    429: (429, "429: Rate limit exceeded. Please wait a moment and try again."),
}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _category_score(categories: dict, name: str) -> int:
    score = _as_dict(categories.get(name)).get("score")
    if not isinstance(score, (int, float)):
        raise PageSpeedError(
            "Failed to fetch complete audit data from Google PageSpeed API. "
            "Please check the URL and try again.",
            details=f"Missing '{name}' category score",
        )
    return round_half_up(score * 100)


def _core_web_vitals(audits: dict) -> CoreWebVitals:
    vitals: dict = {}
    for key, audit_id in VITALS_AUDITS.items():
        audit = _as_dict(audits.get(audit_id))
        numeric = audit.get("numericValue")
        display = audit.get("displayValue")
        vitals[key] = float(numeric) if isinstance(numeric, (int, float)) else None
        vitals[f"{key}_display_value"] = str(display) if display else None
    return vitals


def _diagnostic_category(audit_id: str, details_type: str | None) -> str:
    if details_type == "opportunity":
        return "performance"
    for category in ("seo", "accessibility", "best-practices"):
        if category in audit_id:
            return category
    return "performance"


def _diagnostics(audits: dict) -> list[DiagnosticItem]:
    out: list[DiagnosticItem] = []
    for audit_id, raw in audits.items():
        audit = _as_dict(raw)
        score = audit.get("score")
        if not isinstance(score, (int, float)):
            score = None
        details_type = _as_dict(audit.get("details")).get("type")

        failed = score is not None and score < 1
        if not (failed or details_type in ("opportunity", "table")):
            continue
        if score == 1:
            continue

        out.append(
            {
                "id": audit_id,
                "title": str(audit.get("title") or audit_id),
                "description": str(audit.get("description") or ""),
                "display_value": str(audit.get("displayValue") or ""),
                "category": _diagnostic_category(audit_id, details_type),
                "score": score * 100 if score is not None else 0,
            }
        )
        if len(out) >= MAX_DIAGNOSTICS:
            break
    return out


def summarize_pagespeed(payload: dict) -> PageSpeedMetrics:
    """Reduce a raw PageSpeed Insights response to scores, vitals and diagnostics."""
    lighthouse = _as_dict(_as_dict(payload).get("lighthouseResult"))
    categories = _as_dict(lighthouse.get("categories"))
    audits = _as_dict(lighthouse.get("audits"))

    return {
        "performance": _category_score(categories, "performance"),
        "seo": _category_score(categories, "seo"),
        "accessibility": _category_score(categories, "accessibility"),
        "best_practices": _category_score(categories, "best-practices"),
        "core_web_vitals": _core_web_vitals(audits),
        "diagnostics": _diagnostics(audits),
    }


class PageSpeedClient:
    def __init__(self, settings: Settings, session_factory: SessionFactory | None = None):
        self.settings = settings
        self._session_factory = session_factory or requests.Session

    def _params(self, url: str, strategy: str) -> list[tuple[str, str]]:
        params = [("url", url), ("strategy", strategy)]
        params.extend(("category", c) for c in PSI_CATEGORIES)
        if self.settings.pagespeed_api_key:
            params.append(("key", self.settings.pagespeed_api_key))
        return params

    def fetch_raw(self, url: str, strategy: str | None = None) -> dict:
        strategy = (strategy or self.settings.pagespeed_strategy).lower()
        if strategy not in STRATEGIES:
            raise PageSpeedError(f"Unsupported strategy '{strategy}'. Use 'mobile' or 'desktop'.", status_code=400)
        if not self.settings.pagespeed_api_key:
            logger.info("PageSpeed API key not configured; using anonymous quota.")

        session = self._session_factory()
        try:
            resp = session.get(
                BASE_URL,
                params=self._params(url, strategy),
                timeout=self.settings.pagespeed_timeout_seconds,
            )
        except requests.Timeout as exc:
            logger.warning("PSI request timed out for %s: %s", url, exc)
            raise PageSpeedError("PageSpeed API took too long to respond.", status_code=504) from exc
        except requests.RequestException as exc:
            logger.warning("PSI network error for %s: %s", url, exc)
            raise PageSpeedError("Could not reach the PageSpeed API.", details=str(exc)) from exc
        finally:
            session.close()

        if resp.status_code in STATUS_ERRORS:
            status_code, message = STATUS_ERRORS[resp.status_code]
            logger.error("PSI %s for %s", resp.status_code, url)
            raise PageSpeedError(message, status_code=status_code)
        if not resp.ok:
            logger.error("PSI HTTP %s for %s", resp.status_code, url)
            raise PageSpeedError(f"PageSpeed API error ({resp.status_code})", details=resp.text)

        try:
            return resp.json()
        except ValueError as exc:
            raise PageSpeedError("PageSpeed API returned invalid JSON.", details=str(exc)) from exc

    def analyze(self, url: str, strategy: str | None = None) -> PageSpeedMetrics:
        return summarize_pagespeed(self.fetch_raw(url, strategy))
