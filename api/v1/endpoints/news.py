# api/v1/endpoints/news.py
from fastapi import APIRouter, Query, Request
from loguru import logger
from prometheus_client import Counter
from starlette.concurrency import run_in_threadpool

from core.exceptions import ScraperException

router = APIRouter()

NEWS_REQUESTS = Counter('news_requests_total', 'Total number of /news requests')
NEWS_ERRORS = Counter('news_errors_total', 'Total number of failed /news requests')


@router.get("/news", response_model_exclude_none=True)
async def get_news(
    req: Request,
    diagnostics: bool = Query(False, description="Include per-section diagnostics"),
):
    """Fetch the homepage and return its section-tagged article list."""
    NEWS_REQUESTS.inc()
    try:
        html = await req.app.state.fetcher.fetch()
        # parsing is CPU-bound; keep it off the event loop
        result = await run_in_threadpool(req.app.state.extractor.extract, html, diagnostics)
    except ScraperException as exc:
        NEWS_ERRORS.inc()
        logger.error(f"News request failed: {exc.error}")
        raise
    return result.to_dict()
