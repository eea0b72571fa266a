from analyzer import analyze_html, extract_visible_text, parse_html
from conftest import PAGE_HTML


def test_minimal_document():
    html = "<html><head><title>T</title></head><body><h1>A</h1><h1>B</h1></body></html>"
    signals = analyze_html(html)
    assert signals["title"] == "T"
    assert signals["title_length"] == 1
    assert signals["h1_count"] == 2
    assert signals["h1_tags"] == ["A", "B"]
    assert signals["meta_description"] == ""
    assert signals["meta_description_length"] == 0
    assert signals["has_viewport_meta"] is False
    assert signals["has_canonical"] is False


def test_full_page_signals():
    signals = analyze_html(PAGE_HTML)
    assert signals["title"] == "Fresh Coffee Beans Delivered"
    assert signals["title_length"] == 28
    assert signals["meta_description"] == "Roasted coffee beans shipped weekly."
    assert signals["meta_description_length"] == 36
    assert signals["has_viewport_meta"] is True
    assert signals["has_canonical"] is True


def test_no_images():
    signals = analyze_html("<html><body><p>text only</p></body></html>")
    assert signals["images_without_alt"] == []
    assert signals["images_without_alt_count"] == 0


def test_image_indices_count_all_images():
    html = '<body><img src="a.png"><img src="b.png" alt="B"><img src="c.png" alt=""></body>'
    signals = analyze_html(html)
    assert signals["images_without_alt"] == [{"src": "a.png", "index": 0}, {"src": "c.png", "index": 2}]
    assert signals["images_without_alt_count"] == 2


def test_whitespace_alt_is_flagged_and_src_falls_back_to_data_src():
    html = '<img data-src="lazy.jpg" alt=" "><img src="" data-src="other.jpg"><img>'
    issues = analyze_html(html)["images_without_alt"]
    assert issues == [
        {"src": "lazy.jpg", "index": 0},
        {"src": "other.jpg", "index": 1},
        {"src": "", "index": 2},
    ]


def test_h1_text_is_trimmed_and_may_be_empty():
    html = "<h1>  Hello <span>world</span> </h1><h1></h1>"
    signals = analyze_html(html)
    assert signals["h1_tags"] == ["Hello world", ""]


def test_first_title_wins():
    assert analyze_html("<title>One</title><title>Two</title>")["title"] == "One"


def test_malformed_markup_does_not_raise():
    signals = analyze_html("<html><body><h1>Open<p>unclosed</div></span><img src=x.png></h1></body>")
    assert signals["h1_count"] == 1


def test_empty_document():
    signals = analyze_html("")
    assert signals["title"] == ""
    assert signals["h1_tags"] == []


def test_visible_text_skips_scripts_and_styles():
    soup = parse_html(PAGE_HTML)
    text = extract_visible_text(soup)
    assert "Coffee lovers" in text
    assert "tracking" not in text
    assert "Fresh Coffee Beans Delivered" not in text


def test_visible_text_without_body_ignores_title():
    soup = parse_html("<title>Ignored</title><p>widget</p><p>gadget</p>")
    text = extract_visible_text(soup)
    assert "Ignored" not in text
    assert text.split() == ["widget", "gadget"]


def test_canonical_needs_the_exact_rel_value():
    assert analyze_html('<link rel="canonical alternate" href="/a">')["has_canonical"] is False
    assert analyze_html('<link rel="alternate" href="/a"><link rel="canonical" href="/b">')["has_canonical"] is True
