"""Error taxonomy for the audit API.

Every error knows the HTTP status it maps to and renders the JSON envelope
returned to the client: {"error": <message>, "details": <optional text>}.
"""


class AuditError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    default_message = "Unexpected error"

    def __init__(self, message: str | None = None, details: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        self.details = details
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_payload(self) -> dict:
        payload = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class MissingInput(AuditError):
    status_code = 400
    default_message = "URL is required"


class InvalidUrlFormat(AuditError):
    status_code = 400
    default_message = "Invalid URL format. Please enter a valid URL (e.g., https://example.com)"


class UpstreamUnreachable(AuditError):
    status_code = 502
    default_message = (
        "Cannot connect to the website. Please check if the URL is correct "
        "and the website is accessible."
    )


class UpstreamTimeout(AuditError):
    status_code = 504
    default_message = "The website took too long to respond. Please try again or use a different URL."


class FetchFailed(AuditError):
    status_code = 502
    default_message = "Failed to fetch the website. Please check if the URL is correct."


class UnexpectedFailure(AuditError):
    status_code = 500
    default_message = "Failed to scrape the website"


class PageSpeedError(AuditError):
    status_code = 502
    default_message = "PageSpeed API request failed."


class RecommendationError(AuditError):
    status_code = 502
    default_message = "Could not generate recommendations."
