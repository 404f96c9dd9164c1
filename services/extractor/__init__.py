from .aggregator import NewsExtractor, extract_news, load_document
from .field_resolver import resolve_attribute
from .url_normalizer import normalize_url

__all__ = [
    'NewsExtractor',
    'extract_news',
    'load_document',
    'normalize_url',
    'resolve_attribute',
]
