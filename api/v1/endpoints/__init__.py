from . import health, news

__all__ = ['health', 'news']
