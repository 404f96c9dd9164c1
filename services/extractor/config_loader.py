# services/extractor/config_loader.py
"""
Loads the section recipes from ``configs/sections.yaml`` and validates them
with Pydantic models.  The file can contain a top‑level ``sections`` key or
just the mapping of section names → recipe dictionaries.

Public API:
* ``get_section_recipe(section)`` – returns a validated ``SectionRecipe`` or
  raises ``SectionNotConfiguredError``.
* ``get_section_recipes()`` – every configured recipe, in processing order.
* ``list_configured_sections()`` – convenience helper for UI/CLI.
"""

from pathlib import Path
from typing import Dict, List, Optional

import soupsieve
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from core.config import settings
from models.news import NewsSection


# ----------------------------------------------------------------------
# Pydantic schemas
# ----------------------------------------------------------------------
def _compile_css(css: str) -> str:
    """Fail at load time, not mid-extraction, on a broken selector."""
    try:
        soupsieve.compile(css)
    except soupsieve.SelectorSyntaxError as exc:
        raise ValueError(f"Invalid CSS selector {css!r}: {exc}") from exc
    return css


class FieldLocation(BaseModel):
    """
    One candidate location for a field.

    ``css`` is relative to the item element (empty → the item itself).
    ``attr`` names the attribute to read; when omitted the element text is used.
    """
    css: str = ""
    attr: Optional[str] = None

    @field_validator("css")
    @classmethod
    def _valid_css(cls, v: str) -> str:
        v = v.strip()
        return _compile_css(v) if v else v


class FieldMap(BaseModel):
    """Output field → ordered candidate locations."""
    title: List[FieldLocation] = Field(min_length=1)
    link: List[FieldLocation] = Field(min_length=1)
    image: List[FieldLocation] = Field(default_factory=list)
    read_more_link: List[FieldLocation] = Field(default_factory=list)


class SectionRecipe(BaseModel):
    """
    How to pull one section out of the homepage.

    Without ``items`` every ``root`` match is an item.  With ``category``
    every ``root`` match is a named group whose ``items`` carry that name.
    """
    root: str
    items: Optional[str] = None
    category: List[FieldLocation] = Field(default_factory=list)
    fields: FieldMap

    @field_validator("root", "items")
    @classmethod
    def _valid_selector(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _compile_css(v.strip())

    @property
    def is_grouped(self) -> bool:
        return bool(self.category)


class AllSections(BaseModel):
    """Top‑level container – maps section name → its recipe."""
    sections: Dict[NewsSection, SectionRecipe]


# ----------------------------------------------------------------------
# Errors
# ----------------------------------------------------------------------
class SectionConfigError(RuntimeError):
    """The recipe file is missing or does not match the schema."""


class SectionNotConfiguredError(KeyError):
    """Raised when a section has no recipe in sections.yaml."""

    def __init__(self, section: NewsSection):
        super().__init__(f"Section '{section.value}' not configured.")
        self.section = section


# ----------------------------------------------------------------------
# Internal helpers & caching
# ----------------------------------------------------------------------
_cached_all: Optional[AllSections] = None


def _load_yaml(path: Path) -> dict:
    """Read the YAML file and return the inner ``sections`` mapping."""
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise SectionConfigError(f"Cannot read section recipes from {path}: {exc}") from exc
    return raw.get("sections", raw)


def load_sections(path: Optional[Path] = None) -> AllSections:
    """Parse and validate a recipe file without touching the cache."""
    path = Path(path or settings.SECTIONS_CONFIG_PATH)
    try:
        return AllSections(sections=_load_yaml(path))
    except ValidationError as exc:
        raise SectionConfigError(f"Invalid section recipes in {path}:\n{exc}") from exc


def _load_all() -> AllSections:
    global _cached_all
    if _cached_all is None:
        _cached_all = load_sections()
    return _cached_all


def clear_cache() -> None:
    """Forget the cached recipes so the next call re-reads the file."""
    global _cached_all
    _cached_all = None


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------
def get_section_recipe(section: NewsSection) -> SectionRecipe:
    """
    Return the validated ``SectionRecipe`` for ``section``.

    Raises
    ------
    SectionNotConfiguredError
        If the section is not present in the YAML.
    SectionConfigError
        If the YAML is missing or does not conform to the schema.
    """
    try:
        return _load_all().sections[section]
    except KeyError as exc:
        raise SectionNotConfiguredError(section) from exc


def get_section_recipes() -> Dict[NewsSection, SectionRecipe]:
    """Configured recipes ordered by ``NewsSection`` declaration order."""
    configured = _load_all().sections
    return {s: configured[s] for s in NewsSection if s in configured}


def list_configured_sections() -> List[NewsSection]:
    return list(get_section_recipes())
