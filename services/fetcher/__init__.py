from .homepage_fetcher import HomepageFetcher

__all__ = ['HomepageFetcher']
