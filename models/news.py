# models/news.py
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NewsSection(str, Enum):
    """Homepage regions, declared in processing order."""

    TOP_STORY = "top_story"
    LEFT_LIST = "left_list"
    RIGHT_LIST = "right_list"
    ANIMAL_HUSBANDRY = "animal_husbandry"
    HEALTH_LIFESTYLE = "health_lifestyle"
    CATEGORIES = "categories"
    TRENDING = "trending"
    LATEST_NEWS = "latest_news"


class FailureReason(str, Enum):
    MISSING_TITLE = "missing_title"
    MISSING_LINK = "missing_link"


def _is_absolute(url: str) -> bool:
    return url.startswith(("http://", "https://"))


class NewsRecord(BaseModel):
    """
    One article reference pulled off the homepage.

    Records are frozen: the extractor builds them once both ``title`` and
    ``link`` resolved, and nothing touches them afterwards.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    section: NewsSection
    category: Optional[str] = None
    title: str = Field(..., min_length=1)
    link: str
    image: Optional[str] = None
    read_more_link: Optional[str] = Field(default=None, alias="readMoreLink")

    @field_validator("title", "category", mode="before")
    @classmethod
    def _strip(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("link")
    @classmethod
    def _require_absolute_link(cls, v: str) -> str:
        if not _is_absolute(v):
            raise ValueError(f"link is not an absolute URL: {v!r}")
        return v

    @field_validator("image", "read_more_link")
    @classmethod
    def _optional_absolute(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not _is_absolute(v):
            raise ValueError(f"not an absolute URL: {v!r}")
        return v

    def to_dict(self) -> Dict:
        """JSON-ready dict; absent optional fields are dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ExtractionFailure(BaseModel):
    """A candidate item that did not become a record."""

    model_config = ConfigDict(frozen=True)

    index: int
    reason: FailureReason
    category: Optional[str] = None


class SectionDiagnostics(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    elements_found: int = Field(default=0, alias="elementsFound")
    elements_parsed: int = Field(default=0, alias="elementsParsed")
    failures: List[ExtractionFailure] = Field(default_factory=list)
    groups_skipped: int = Field(default=0, alias="groupsSkipped")
    error: Optional[str] = None


class ExtractionResult(BaseModel):
    """Everything one extraction call produces."""

    model_config = ConfigDict(frozen=True)

    data: List[NewsRecord] = Field(default_factory=list)
    count: int = 0
    diagnostics: Optional[Dict[NewsSection, SectionDiagnostics]] = None

    @classmethod
    def from_records(
        cls,
        records: List[NewsRecord],
        diagnostics: Optional[Dict[NewsSection, SectionDiagnostics]] = None,
    ) -> "ExtractionResult":
        return cls(data=list(records), count=len(records), diagnostics=diagnostics)

    def for_section(self, section: NewsSection) -> List[NewsRecord]:
        return [r for r in self.data if r.section == section]

    def to_dict(self) -> Dict:
        """Success payload served by ``GET /api/news``."""
        payload: Dict = {
            "status": "success",
            "count": self.count,
            "data": [record.to_dict() for record in self.data],
        }
        if self.diagnostics is not None:
            payload["diagnostics"] = {
                section.value: diag.model_dump(mode="json", by_alias=True)
                for section, diag in self.diagnostics.items()
            }
        return payload
