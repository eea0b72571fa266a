import pytest
import requests

from config import Settings

PAGE_HTML = """<!doctype html>
<html>
<head>
  <title>  Fresh Coffee Beans Delivered  </title>
  <meta name="description" content="Roasted coffee beans shipped weekly.">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <link rel="canonical" href="https://shop.example.com/">
</head>
<body>
  <h1>Coffee beans</h1>
  <p>Our coffee is roasted daily. Coffee lovers choose our beans.</p>
  <img src="/hero.jpg">
  <img src="/logo.png" alt="Shop logo">
  <img data-src="/lazy.jpg" alt="  ">
  <script>var tracking = "tracking tracking tracking";</script>
</body>
</html>
"""


class FakeRaw:
    """Body stream behind a fake response; `on_read` runs before every chunk is handed out."""

    def __init__(self, body: bytes, chunk_size: int | None = None, on_read=None):
        self.body = body
        self.chunk_size = chunk_size
        self.on_read = on_read
        self.closed = False

    def read1(self, amt=-1, decode_content=None):
        if self.on_read:
            self.on_read()
        size = min(amt, self.chunk_size or amt)
        chunk, self.body = self.body[:size], self.body[size:]
        return chunk

    def close(self):
        self.closed = True


def make_response(
    status: int = 200,
    body: str = "",
    url: str = "https://example.com/",
    reason: str = "OK",
    headers: dict | None = None,
    raw: FakeRaw | None = None,
):
    response = requests.Response()
    response.status_code = status
    response.reason = reason
    response.url = url
    response._content = body.encode("utf-8")
    response.raw = raw or FakeRaw(response._content)
    response.headers["Content-Type"] = "text/html"
    response.headers.update(headers or {})
    return response


def redirect(location: str, url: str = "https://example.com/", status: int = 301):
    return make_response(status, url=url, reason="Moved", headers={"Location": location})


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FakeSession:
    """Stands in for requests.Session.

    Each result is a response or an exception to raise; a list is consumed one call at a time.
    """

    def __init__(self, head=None, get=None):
        self.head_result = head
        self.get_result = get
        self.calls = []
        self.closed = False
        self.max_redirects = 30

    def _resolve(self, result):
        if isinstance(result, list):
            result = result.pop(0) if result else None
        if isinstance(result, BaseException):
            raise result
        if result is None:
            raise AssertionError("unexpected request")
        return result

    def head(self, url, **kwargs):
        self.calls.append(("HEAD", url, kwargs))
        return self._resolve(self.head_result)

    def get(self, url, **kwargs):
        self.calls.append(("GET", url, kwargs))
        return self._resolve(self.get_result)

    def close(self):
        self.closed = True


def no_network():
    raise AssertionError("no network call expected")


def psi_payload(performance=0.91, seo=1.0, accessibility=0.88, best_practices=0.75, audits=None):
    if audits is None:
        audits = {
            "largest-contentful-paint": {"score": 0.5, "numericValue": 2500.0, "displayValue": "2.5 s"},
            "cumulative-layout-shift": {"score": 1, "numericValue": 0.1, "displayValue": "0.1"},
            "max-potential-fid": {"score": 1, "numericValue": 120.0, "displayValue": "120 ms"},
            "first-contentful-paint": {"score": 1, "numericValue": 900.0, "displayValue": "0.9 s"},
            "render-blocking-resources": {
                "score": None,
                "title": "Eliminate render-blocking resources",
                "displayValue": "Potential savings of 300 ms",
                "details": {"type": "opportunity"},
            },
        }
    return {
        "lighthouseResult": {
            "categories": {
                "performance": {"score": performance},
                "seo": {"score": seo},
                "accessibility": {"score": accessibility},
                "best-practices": {"score": best_practices},
            },
            "audits": audits,
        }
    }


@pytest.fixture
def settings():
    return Settings(request_timeout_seconds=2.0, max_redirects=3)
