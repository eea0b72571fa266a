"""URL validation and normalization for user-submitted audit targets."""

from urllib.parse import urlsplit

from errors import InvalidUrlFormat, MissingInput

DEFAULT_SCHEME = "https://"
ALLOWED_SCHEMES = {"http", "https"}
FORBIDDEN_HOST_CHARS = set(" \t\r\n#%/:<>?@[\\]^|")

INVALID_URL_MESSAGE = "Invalid URL format. Please enter a valid URL (e.g., https://example.com)"
INVALID_DOMAIN_MESSAGE = "Invalid URL format. Please enter a valid domain (e.g., example.com)"


def _strict_hostname(url: str) -> str | None:
    """Return the parsed hostname, or None when the URL does not parse strictly."""
    try:
        parts = urlsplit(url)
        # Accessing .port validates it.
        parts.port
    except ValueError:
        return None

    if parts.scheme not in ALLOWED_SCHEMES or not parts.netloc:
        return None

    hostname = parts.hostname
    if not hostname:
        return None
    if any(ch in FORBIDDEN_HOST_CHARS for ch in hostname):
        return None
    try:
        hostname.encode("idna")
    except UnicodeError:
        return None
    return hostname


def normalize_url(raw: str | None) -> str:
    """
    Turn raw user input into an absolute http(s) URL.

    Missing schemes default to https. Bare words such as "test" are rejected;
    the hostname must contain a dot or be exactly "localhost".
    """
    if not raw:
        raise MissingInput()

    candidate = raw.strip()
    if not candidate:
        raise InvalidUrlFormat(INVALID_URL_MESSAGE)
    if not candidate.startswith(("http://", "https://")):
        candidate = DEFAULT_SCHEME + candidate

    hostname = _strict_hostname(candidate)
    if hostname is None:
        raise InvalidUrlFormat(INVALID_URL_MESSAGE)
    if "." not in hostname and hostname != "localhost":
        raise InvalidUrlFormat(INVALID_DOMAIN_MESSAGE)

    return candidate


def is_https(url: str) -> bool:
    return urlsplit(url).scheme == "https"
