# services/extractor/field_resolver.py
"""
Pull one value off a tree node by trying candidate locations in order.

The homepage is inconsistent about where a value lives (an image may carry
``data-src``, ``data-lazy-src`` or only ``src`` depending on section and load
state), so every field is described as an ordered list of locations and the
first non-blank hit wins.
"""

from typing import Iterable, Optional, Union

from bs4 import Tag
from loguru import logger

from .config_loader import FieldLocation


def _read(element: Tag, attr: Optional[str]) -> Optional[str]:
    if attr is None:
        # collapse the whitespace runs that indentation leaves inside anchors
        value: Union[str, list, None] = " ".join(element.get_text(" ").split())
    else:
        value = element.get(attr)
        # multi-valued attributes such as ``class`` come back as lists
        if isinstance(value, list):
            value = " ".join(value)
    if value is None:
        return None
    value = value.strip()
    return value or None


def resolve_attribute(
    node: Optional[Tag], locations: Iterable[FieldLocation]
) -> Optional[str]:
    """
    Return the first non-empty value found at ``locations`` under ``node``.

    An empty ``css`` reads ``node`` itself.  A missing node, a selector that
    matches nothing, or a blank value all just move on to the next location;
    ``None`` means nothing was found.
    """
    if node is None:
        return None

    for loc in locations:
        if loc.css:
            try:
                element = node.select_one(loc.css)
            except Exception as exc:  # pylint: disable=broad-except
                logger.debug(f"Selector {loc.css!r} failed: {exc}")
                continue
        else:
            element = node

        if element is None:
            continue

        value = _read(element, loc.attr)
        if value:
            return value
    return None
