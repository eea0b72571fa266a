"""Sparkles SEO Audit API – FastAPI app and endpoints."""

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from audit import build_audit_result
from config import Settings, get_settings
from errors import AuditError
from pagespeed import PageSpeedClient
from recommendations import RecommendationService
from schemas import (
    AuditResultSchema,
    HealthResponse,
    PageSpeedRequest,
    PageSpeedResponse,
    RecommendationsResponse,
    ScrapeRequest,
    ScrapeResponse,
)
from scraper import PageScraper, utc_timestamp
from urls import normalize_url

_settings = get_settings()
logging.basicConfig(
    level=_settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Sparkles SEO Audit API",
    description="On-page SEO scraping, PageSpeed metrics and AI recommendations",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(_settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AuditError)
def audit_error_handler(request: Request, exc: AuditError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(str(err.get("msg", "")) for err in exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body", "details": details})


def get_scraper(settings: Settings = Depends(get_settings)) -> PageScraper:
    return PageScraper(settings)


def get_pagespeed_client(settings: Settings = Depends(get_settings)) -> PageSpeedClient:
    return PageSpeedClient(settings)


def get_recommendation_service(settings: Settings = Depends(get_settings)) -> RecommendationService:
    return RecommendationService(settings)


@app.post("/api/scrape", response_model=ScrapeResponse)
def scrape(body: ScrapeRequest, scraper: PageScraper = Depends(get_scraper)) -> ScrapeResponse:
    """
    Pipeline: validate URL -> security probe -> fetch -> analyze HTML -> rank keywords.
    """
    result = scraper.scrape(body.url)
    return ScrapeResponse(**result)


@app.get("/api/health", response_model=HealthResponse)
def health() -> HealthResponse:
    """Health check for deployment."""
    return HealthResponse(status="ok", timestamp=utc_timestamp())


@app.post("/api/pagespeed", response_model=PageSpeedResponse)
def pagespeed(body: PageSpeedRequest, client: PageSpeedClient = Depends(get_pagespeed_client)) -> PageSpeedResponse:
    """Return PageSpeed Insights category scores, Core Web Vitals and diagnostics."""
    url = normalize_url(body.url)
    return PageSpeedResponse(**client.analyze(url, body.strategy))


@app.post("/api/audit", response_model=AuditResultSchema)
def audit(
    body: PageSpeedRequest,
    scraper: PageScraper = Depends(get_scraper),
    client: PageSpeedClient = Depends(get_pagespeed_client),
) -> AuditResultSchema:
    """Scrape the page, fetch PageSpeed metrics and merge both into one audit."""
    scraped = scraper.scrape(body.url)
    metrics = client.analyze(scraped["url"], body.strategy)
    result = build_audit_result(scraped, metrics)
    logger.info(
        "Audit %s for %s: score=%s issues=%s",
        result["id"],
        result["url"],
        result["score"],
        result["issues_count"],
    )
    return AuditResultSchema(**result)


@app.post("/api/recommendations", response_model=RecommendationsResponse)
def recommendations(
    body: AuditResultSchema,
    service: RecommendationService = Depends(get_recommendation_service),
) -> RecommendationsResponse:
    """Ask Claude for three actionable fixes for an audit result."""
    return RecommendationsResponse(recommendations=service.recommend(body.model_dump()))
