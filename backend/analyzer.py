"""HTML analyzer: extract structural on-page SEO signals from a document.

Every extraction is independent and tolerant: a missing element yields its
default value instead of raising, and malformed markup is parsed as-is.
"""

from bs4 import BeautifulSoup

from models import ImageAltIssue, PageSignals

NON_VISIBLE_TAGS = ["script", "style", "noscript", "template"]


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def _attr_text(tag, name: str) -> str:
    # Multi-valued attributes (rel, class) come back as lists.
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def _images_without_alt(soup: BeautifulSoup) -> list[ImageAltIssue]:
    issues: list[ImageAltIssue] = []
    for index, img in enumerate(soup.find_all("img")):
        alt = _attr_text(img, "alt")
        if alt.strip():
            continue
        src = _attr_text(img, "src") or _attr_text(img, "data-src") or ""
        issues.append({"src": src, "index": index})
    return issues


def analyze_html(html: str | BeautifulSoup) -> PageSignals:
    """Return title, meta description, h1, image alt, viewport and canonical signals."""
    soup = html if isinstance(html, BeautifulSoup) else parse_html(html)

    # --- Title ---
    title_tag = soup.find("title")
    title = title_tag.get_text().strip() if title_tag else ""

    # --- Meta description ---
    meta_desc_tag = soup.find("meta", attrs={"name": "description"})
    meta_description = _attr_text(meta_desc_tag, "content") if meta_desc_tag else ""

    # --- Headings ---
    h1_tags = [h.get_text().strip() for h in soup.find_all("h1")]

    # --- Images ---
    images_without_alt = _images_without_alt(soup)

    # --- Viewport / canonical ---
    has_viewport_meta = soup.find("meta", attrs={"name": "viewport"}) is not None
    # rel is multi-valued in bs4; only an exact "canonical" counts.
    has_canonical = soup.find(lambda tag: tag.name == "link" and _attr_text(tag, "rel") == "canonical") is not None

    return {
        "title": title,
        "title_length": len(title),
        "meta_description": meta_description,
        "meta_description_length": len(meta_description),
        "h1_count": len(h1_tags),
        "h1_tags": h1_tags,
        "images_without_alt": images_without_alt,
        "images_without_alt_count": len(images_without_alt),
        "has_viewport_meta": has_viewport_meta,
        "has_canonical": has_canonical,
    }


def extract_visible_text(soup: BeautifulSoup) -> str:
    """
    Return the visible body text, pieces separated by spaces.

    Removes script/style-like elements from `soup` in place, so call it after
    the structural extraction. Documents without a <body> fall back to the
    whole tree minus <head>.
    """
    root = soup.body
    if root is None:
        root = soup
        for tag in soup.find_all(["head", "title"]):
            tag.decompose()

    for tag in root.find_all(NON_VISIBLE_TAGS):
        tag.decompose()

    return root.get_text(separator=" ")
