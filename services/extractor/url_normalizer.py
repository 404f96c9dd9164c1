# services/extractor/url_normalizer.py
from typing import Optional

_SCHEMES = ("http://", "https://")


def normalize_url(path: Optional[str], base_origin: str) -> Optional[str]:
    """
    Make ``path`` absolute against ``base_origin``.

    The site emits root-relative paths (``/news/...``) for its own links and
    images, so plain concatenation is enough; already absolute URLs pass
    through untouched.
    """
    if path is None:
        return None
    if path.startswith(_SCHEMES):
        return path
    return f"{base_origin}{path}"
