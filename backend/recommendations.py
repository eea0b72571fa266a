"""
Plain-English SEO recommendations for an audit result, written by Claude.

Claude API key must be defined in a .env file in the backend root:

ANTHROPIC_API_KEY=your_real_key_here
"""

import logging
import re
from datetime import datetime
from typing import Callable

from anthropic import Anthropic, APIError, AuthenticationError, PermissionDeniedError, RateLimitError

from config import Settings
from errors import RecommendationError

logger = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 3
MIN_RECOMMENDATION_LENGTH = 10
TEMPERATURE = 0.2

SYSTEM_MESSAGE = "You are an expert SEO auditor. Answer with short, concrete, actionable bullet points."

FALLBACK_RECOMMENDATIONS = [
    "Optimize your title tag to 50-60 characters",
    "Add meta description between 150-160 characters",
    "Include alt text for all images",
]

MISSING_KEY_MESSAGE = "Invalid or missing API key. Please check your .env configuration."
QUOTA_MESSAGE = "API quota exceeded. Please try again later or check your billing."

_BULLET_PREFIX = re.compile(r"^[\d.)\-*•]+\s*")


def _format_date(value: str) -> str:
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return str(value)
    return parsed.strftime("%m/%d/%Y")


def _seconds(value: float | None) -> str:
    return f"{value / 1000:.2f}s" if value else "N/A"


def format_audit_prompt(audit: dict) -> str:
    """Render an audit result as the metrics block sent to the model."""
    vitals = audit.get("core_web_vitals") or {}
    cls_value = vitals.get("cls")
    fid_value = vitals.get("fid")
    cls_text = f"{cls_value:.3f}" if cls_value else "N/A"
    fid_text = f"{fid_value:.0f}ms" if fid_value else "N/A"
    return f"""
URL: {audit.get("url", "")}
Date: {_format_date(audit.get("date", ""))}
Overall Score: {audit.get("score", 0)}%

Performance Metrics:
- Performance: {audit.get("performance", 0)}%
- SEO: {audit.get("seo", 0)}%
- Accessibility: {audit.get("accessibility", 0)}%
- Best Practices: {audit.get("best_practices", 0)}%

Core Web Vitals:
- LCP: {_seconds(vitals.get("lcp"))}
- CLS: {cls_text}
- FID: {fid_text}
- FCP: {_seconds(vitals.get("fcp"))}

Issues Found: {audit.get("issues_count", 0)}

Please provide 3 actionable recommendations to improve this website's SEO performance. Focus on specific, practical steps that can be implemented.
"""


def build_user_message(metrics: str) -> str:
    return (
        f"I just scanned a website and got these metrics: {metrics}\n\n"
        "Write a 3-bullet-point summary of the most critical issues and exactly how a developer "
        "should fix them. Keep each bullet point concise but actionable."
    )


def parse_recommendations(text: str) -> list[str]:
    """Split model output into at most three cleaned bullet points."""
    recommendations: list[str] = []
    for line in (text or "").splitlines():
        if not line.strip():
            continue
        cleaned = _BULLET_PREFIX.sub("", line.strip()).strip()
        if len(cleaned) > MIN_RECOMMENDATION_LENGTH:
            recommendations.append(cleaned)

    if not recommendations:
        return list(FALLBACK_RECOMMENDATIONS)
    return recommendations[:MAX_RECOMMENDATIONS]


def _extract_response_text(response: object) -> str:
    content = ""
    for block in getattr(response, "content", []) or []:
        text = getattr(block, "text", None)
        if text:
            content += text
    return content.strip()


class RecommendationService:
    def __init__(self, settings: Settings, client_factory: Callable[..., Anthropic] = Anthropic):
        self.settings = settings
        self._client_factory = client_factory

    def recommend(self, audit: dict) -> list[str]:
        api_key = self.settings.anthropic_api_key
        if not api_key:
            logger.error("ANTHROPIC_API_KEY not found in environment.")
            raise RecommendationError(MISSING_KEY_MESSAGE, status_code=503)

        client = self._client_factory(api_key=api_key, max_retries=0)
        user_message = build_user_message(format_audit_prompt(audit))
        try:
            response = client.messages.create(
                model=self.settings.claude_model,
                max_tokens=self.settings.claude_max_tokens,
                system=SYSTEM_MESSAGE,
                messages=[{"role": "user", "content": user_message}],
                temperature=TEMPERATURE,
            )
        except (AuthenticationError, PermissionDeniedError) as exc:
            logger.error("Claude rejected the API key: %s", exc)
            raise RecommendationError(MISSING_KEY_MESSAGE) from exc
        except RateLimitError as exc:
            logger.warning("Claude quota exceeded: %s", exc)
            raise RecommendationError(QUOTA_MESSAGE, status_code=429) from exc
        except APIError as exc:
            logger.warning("Claude request failed, using fallback recommendations: %s", exc)
            return list(FALLBACK_RECOMMENDATIONS)

        return parse_recommendations(_extract_response_text(response))
