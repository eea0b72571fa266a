import pytest

from errors import InvalidUrlFormat, MissingInput
from urls import is_https, normalize_url


def test_missing_scheme_defaults_to_https():
    assert normalize_url("example.com") == "https://example.com"
    assert normalize_url("  shop.example.com/path?q=1  ") == "https://shop.example.com/path?q=1"


@pytest.mark.parametrize("url", ["http://example.com", "https://example.com/a", "http://localhost:3000/"])
def test_existing_scheme_is_preserved(url):
    assert normalize_url(url) == url


def test_localhost_is_accepted():
    assert normalize_url("localhost") == "https://localhost"


@pytest.mark.parametrize("raw", [None, ""])
def test_missing_input(raw):
    with pytest.raises(MissingInput) as excinfo:
        normalize_url(raw)
    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "URL is required"


def test_bare_word_is_rejected():
    with pytest.raises(InvalidUrlFormat) as excinfo:
        normalize_url("test")
    assert "valid domain" in excinfo.value.message


@pytest.mark.parametrize(
    "raw",
    ["   ", "https://", "https://exa mple.com", "https://example.com:notaport", "https://[::1"],
)
def test_malformed_urls_are_rejected(raw):
    with pytest.raises(InvalidUrlFormat):
        normalize_url(raw)


def test_scheme_prefix_check_is_case_sensitive():
    # "HTTP://" is not a recognised prefix, so https:// is prepended and the host becomes "http".
    with pytest.raises(InvalidUrlFormat):
        normalize_url("HTTP://example.com")


def test_is_https():
    assert is_https("https://example.com")
    assert not is_https("http://example.com")
