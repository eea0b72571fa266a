"""Page scraper: validate a URL, probe it, fetch it and extract SEO signals.

Pipeline per request (strictly sequential, no shared state):
validate -> security probe -> fetch -> parse/analyze -> rank keywords -> assemble.
Only the fetch stage may fail the request; the probe degrades silently.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Callable
from urllib.parse import urljoin

import charset_normalizer
import requests
import urllib3

from analyzer import analyze_html, extract_visible_text, parse_html
from config import Settings
from errors import FetchFailed, UnexpectedFailure, UpstreamTimeout, UpstreamUnreachable
from keywords import KeywordRanker
from models import ScrapeResult, SecurityStatus
from urls import is_https, normalize_url

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], requests.Session]

CHUNK_SIZE = 64 * 1024


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds, e.g. 2024-05-01T12:00:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _request_headers(settings: Settings) -> dict:
    return {
        "User-Agent": settings.user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    }


class _HttpStage:
    """Shared plumbing for stages that talk to the target site.

    A stage gets `request_timeout_seconds` in total, measured from its first
    request: redirect hops and body reads all draw on the same budget.
    """

    def __init__(
        self,
        settings: Settings,
        session_factory: SessionFactory | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings
        self._session_factory = session_factory or requests.Session
        self._clock = clock

    def _open_session(self) -> requests.Session:
        session = self._session_factory()
        session.max_redirects = self.settings.max_redirects
        return session

    def _deadline(self) -> float:
        return self._clock() + self.settings.request_timeout_seconds

    def _remaining(self, deadline: float) -> float:
        remaining = deadline - self._clock()
        if remaining <= 0:
            raise requests.Timeout(f"No response within {self.settings.request_timeout_seconds}s")
        return remaining

    def _send(self, session: requests.Session, method: str, url: str, headers: dict, deadline: float) -> requests.Response:
        """Issue `method` and follow redirects by hand so every hop shares the deadline."""
        send = getattr(session, method)
        for _ in range(self.settings.max_redirects + 1):
            response = send(
                url,
                headers=headers,
                timeout=self._remaining(deadline),
                allow_redirects=False,
                stream=True,
            )
            if not response.is_redirect:
                return response
            url = urljoin(response.url or url, response.headers["Location"])
            response.close()
        raise requests.TooManyRedirects(f"Exceeded {self.settings.max_redirects} redirects.")

    def _read_body(self, response: requests.Response, deadline: float) -> bytes:
        body = bytearray()
        try:
            while True:
                self._remaining(deadline)
                chunk = response.raw.read1(CHUNK_SIZE, decode_content=True)
                if not chunk:
                    return bytes(body)
                body.extend(chunk)
        except urllib3.exceptions.TimeoutError as exc:
            raise requests.Timeout(str(exc)) from exc
        except urllib3.exceptions.HTTPError as exc:
            raise requests.ConnectionError(str(exc)) from exc


def _decode_body(body: bytes) -> str:
    best = charset_normalizer.from_bytes(body).best()
    return body.decode(best.encoding if best else "utf-8", errors="replace")


class SecurityProber(_HttpStage):
    """HEAD probe recording the status code and whether the URL is served over https."""

    def default_status(self, url: str) -> SecurityStatus:
        return {"https_enforced": is_https(url), "status_code": None, "is_secure": False}

    def probe(self, url: str) -> SecurityStatus:
        status = self.default_status(url)
        deadline = self._deadline()
        session = self._open_session()
        try:
            response = self._send(session, "head", url, {"User-Agent": self.settings.user_agent}, deadline)
            response.close()
        except (requests.RequestException, ValueError, OSError) as exc:
            logger.warning("Security check error for %s: %s", url, exc)
            return status
        finally:
            session.close()

        status["status_code"] = response.status_code
        status["is_secure"] = response.status_code == 200 and status["https_enforced"]
        return status


class PageFetcher(_HttpStage):
    """GET the page and classify transport failures into API errors."""

    def fetch(self, url: str) -> str:
        deadline = self._deadline()
        session = self._open_session()
        try:
            response = self._send(session, "get", url, _request_headers(self.settings), deadline)
            try:
                response.raise_for_status()
                return _decode_body(self._read_body(response, deadline))
            finally:
                response.close()
        # Timeout must be checked first: ConnectTimeout is also a ConnectionError.
        except requests.Timeout as exc:
            logger.warning("Fetch timed out for %s: %s", url, exc)
            raise UpstreamTimeout() from exc
        except requests.ConnectionError as exc:
            logger.warning("Fetch could not connect to %s: %s", url, exc)
            raise UpstreamUnreachable() from exc
        except (requests.RequestException, ValueError, OSError) as exc:
            logger.warning("Fetch failed for %s: %s", url, exc)
            raise FetchFailed(details=str(exc)) from exc
        finally:
            session.close()


class PageScraper:
    """Run the full scrape pipeline for one submitted URL."""

    def __init__(
        self,
        settings: Settings,
        session_factory: SessionFactory | None = None,
        ranker: KeywordRanker | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.prober = SecurityProber(settings, session_factory, clock)
        self.fetcher = PageFetcher(settings, session_factory, clock)
        self.ranker = ranker or KeywordRanker()

    def scrape(self, raw_url: str | None) -> ScrapeResult:
        url = normalize_url(raw_url)
        security_status = self.prober.probe(url)
        html = self.fetcher.fetch(url)

        try:
            soup = parse_html(html)
            signals = analyze_html(soup)
            keyword_analysis = self.ranker.rank(extract_visible_text(soup))
            return {
                "url": url,
                **signals,
                "security_status": security_status,
                "keyword_analysis": keyword_analysis,
                "timestamp": utc_timestamp(),
            }
        except Exception as exc:
            logger.exception("Scraping error for %s", url)
            raise UnexpectedFailure(details=str(exc)) from exc
