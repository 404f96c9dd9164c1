# services/extractor/aggregator.py
"""
Runs every section extractor over one parsed homepage and assembles the
``ExtractionResult``.

The only fatal condition is HTML that cannot be loaded at all.  After that
each section is best-effort: one broken section costs its own records and
nothing else.
"""

import time
from typing import Dict, List, Optional

from bs4 import BeautifulSoup
from loguru import logger
from prometheus_client import Counter, Histogram

from core.config import settings
from core.exceptions import DocumentLoadError
from models.news import ExtractionResult, NewsRecord, NewsSection

from .config_loader import SectionRecipe, get_section_recipes
from .diagnostics import DiagnosticsCollector
from .section_extractor import SectionExtractor

RECORDS_EXTRACTED = Counter(
    'news_records_extracted_total', 'Records emitted per section', ['section']
)
SECTION_FAILURES = Counter(
    'news_section_failures_total', 'Sections aborted by an unexpected error', ['section']
)
EXTRACTION_DURATION = Histogram(
    'news_extraction_duration_seconds', 'Time spent parsing and extracting one homepage'
)


def load_document(html: str) -> BeautifulSoup:
    """Parse ``html`` or raise ``DocumentLoadError``."""
    if not isinstance(html, str):
        raise DocumentLoadError(f"Expected HTML text, got {type(html).__name__}")
    if not html.strip():
        raise DocumentLoadError("Empty HTML document")
    try:
        return BeautifulSoup(html, "html.parser")
    except Exception as exc:  # pylint: disable=broad-except
        raise DocumentLoadError(f"Unparseable HTML document: {exc}") from exc


class NewsExtractor:
    """
    Holds the section recipes; ``extract`` is a pure function of its input.

    Instances keep no per-call state, so one extractor can serve concurrent
    requests – every call parses its own tree and owns its own diagnostics.
    """

    def __init__(
        self,
        recipes: Optional[Dict[NewsSection, SectionRecipe]] = None,
        base_origin: Optional[str] = None,
    ):
        self.base_origin = base_origin or settings.BASE_ORIGIN
        recipes = recipes if recipes is not None else get_section_recipes()
        self.extractors: List[SectionExtractor] = [
            SectionExtractor(section, recipes[section], self.base_origin)
            for section in NewsSection
            if section in recipes
        ]

    def extract(self, html: str, with_diagnostics: bool = False) -> ExtractionResult:
        start = time.perf_counter()
        soup = load_document(html)
        diagnostics = DiagnosticsCollector()
        records: List[NewsRecord] = []

        for extractor in self.extractors:
            section = extractor.section
            try:
                section_records = extractor.extract(soup, diagnostics)
            except Exception as exc:  # pylint: disable=broad-except
                SECTION_FAILURES.labels(section=section.value).inc()
                diagnostics.aborted(section, exc)
                logger.exception(f"[{section.value}] extraction aborted: {exc}")
                continue

            records.extend(section_records)
            RECORDS_EXTRACTED.labels(section=section.value).inc(len(section_records))
            logger.debug(f"[{section.value}] {len(section_records)} records")

        EXTRACTION_DURATION.observe(time.perf_counter() - start)
        logger.info(f"Extracted {len(records)} news records")
        return ExtractionResult.from_records(
            records, diagnostics.snapshot() if with_diagnostics else None
        )


def extract_news(
    html: str,
    base_origin: Optional[str] = None,
    with_diagnostics: bool = False,
) -> ExtractionResult:
    """One-shot helper using the configured recipes."""
    return NewsExtractor(base_origin=base_origin).extract(html, with_diagnostics)
