# services/extractor/section_extractor.py
"""
Generic runner for one section recipe.

Every homepage region is the same loop – find items, resolve fields, drop
items without a title or link, absolutize URLs – so a single class runs all
of them; the differences live in ``configs/sections.yaml``.
"""

from typing import List, Optional

from bs4 import BeautifulSoup, Tag
from loguru import logger

from models.news import FailureReason, NewsRecord, NewsSection

from .config_loader import SectionRecipe
from .diagnostics import DiagnosticsCollector
from .field_resolver import resolve_attribute
from .url_normalizer import normalize_url


class SectionExtractor:
    """Turns one ``SectionRecipe`` into ``NewsRecord`` objects."""

    def __init__(self, section: NewsSection, recipe: SectionRecipe, base_origin: str):
        self.section = section
        self.recipe = recipe
        self.base_origin = base_origin

    # ------------------------------------------------------------------
    # Item discovery
    # ------------------------------------------------------------------
    def _items_under(self, roots: List[Tag]) -> List[Tag]:
        """Items below ``roots`` in document order, each element at most once."""
        if self.recipe.items is None:
            return roots

        seen = set()
        items: List[Tag] = []
        for root in roots:
            for item in root.select(self.recipe.items):
                if id(item) not in seen:
                    seen.add(id(item))
                    items.append(item)
        return items

    # ------------------------------------------------------------------
    # Per-item field mapping
    # ------------------------------------------------------------------
    def _build_record(
        self,
        item: Tag,
        index: int,
        diagnostics: DiagnosticsCollector,
        category: Optional[str] = None,
    ) -> Optional[NewsRecord]:
        fields = self.recipe.fields
        title = resolve_attribute(item, fields.title)
        link = resolve_attribute(item, fields.link)

        if not title or not link:
            reason = FailureReason.MISSING_TITLE if not title else FailureReason.MISSING_LINK
            diagnostics.failed(self.section, index, reason, category)
            logger.debug(f"[{self.section.value}] item {index} skipped: {reason.value}")
            return None

        image = resolve_attribute(item, fields.image)
        read_more = resolve_attribute(item, fields.read_more_link)

        return NewsRecord(
            section=self.section,
            category=category,
            title=title,
            link=normalize_url(link, self.base_origin),
            image=normalize_url(image, self.base_origin),
            read_more_link=normalize_url(read_more, self.base_origin),
        )

    def _run_items(
        self,
        items: List[Tag],
        diagnostics: DiagnosticsCollector,
        category: Optional[str] = None,
        offset: int = 0,
    ) -> List[NewsRecord]:
        diagnostics.found(self.section, len(items))
        records: List[NewsRecord] = []
        for index, item in enumerate(items, start=offset):
            record = self._build_record(item, index, diagnostics, category)
            if record is not None:
                records.append(record)
                diagnostics.parsed(self.section)
        return records

    # ------------------------------------------------------------------
    # Public entry point
    # ------------------------------------------------------------------
    def extract(self, soup: BeautifulSoup, diagnostics: DiagnosticsCollector) -> List[NewsRecord]:
        """Records for this section in document order (possibly none)."""
        diagnostics.start(self.section)
        roots = soup.select(self.recipe.root)

        if not self.recipe.is_grouped:
            return self._run_items(self._items_under(roots), diagnostics)

        # Two levels: each root is a named group of items.
        records: List[NewsRecord] = []
        offset = 0
        for group in roots:
            name = resolve_attribute(group, self.recipe.category)
            if not name:
                diagnostics.group_skipped(self.section)
                logger.debug(f"[{self.section.value}] group without a name skipped")
                continue
            items = self._items_under([group])
            records.extend(self._run_items(items, diagnostics, category=name, offset=offset))
            offset += len(items)
        return records
