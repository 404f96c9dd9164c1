# tests/conftest.py
"""
A trimmed-down copy of the homepage markup.  Each section is its own snippet
so tests can drop one and check that nothing else moves.
"""

import pytest

from services.extractor import NewsExtractor
from services.extractor import config_loader

TOP_STORY = """
  <div class="top-story">
    <a href="/news/top-1" title="Top story headline">
      <img src="/img/placeholder.gif" data-src="/img/top-1.jpg">
    </a>
  </div>
"""

LEFT_LIST = """
  <div class="home-top-news-lst-lft">
    <div class="news-item"><a href="/news/left-1" title="Left one"><img src="/img/left-1.jpg"></a></div>
    <div class="news-item"><a href="https://cdn.example.com/left-2" title="Left two"></a></div>
    <div class="news-item"><a href="/news/left-3"></a></div>
  </div>
"""

RIGHT_LIST = """
  <div class="home-top-news-lst-rt">
    <div class="news-item">
      <a href="/news/right-1" title="Right one"><img src="/img/ph.gif" data-lazy-src="/img/right-1.jpg"></a>
    </div>
  </div>
"""

ANIMAL_HUSBANDRY = """
  <div class="h-item">
    <h2><a href="/animal/1" title="Cattle care"></a></h2>
    <div class="img"><a href="/animal/1"><img src="/img/animal-1.jpg"></a></div>
  </div>
  <div class="h-item">
    <h2><a title="No link here"></a></h2>
  </div>
"""

HEALTH_LIFESTYLE = """
  <div class="h-title">
    <a href="/health/1">  Healthy living  </a>
    <div class="img"><img src="/img/health-1.jpg"></div>
    <a class="btn-link" href="/health/1/more">Read more</a>
  </div>
"""

CATEGORIES = """
<div class="home-cat">
  <div class="cat-flex">
    <div class="cat-h"><a href="/weather" title="Weather">Weather</a></div>
    <ul class="list-unstyled">
      <li><h2><a href="/weather/1" title="Rain expected"></a></h2><img src="/img/w1.jpg"></li>
      <li><h2><a href="/weather/2" title="Heatwave"></a></h2></li>
    </ul>
  </div>
  <div class="cat-flex">
    <div class="cat-h"><a href="/market" title="Market">Market</a></div>
    <ul class="list-unstyled">
      <li><h2><a href="/market/1" title="Onion prices"></a></h2></li>
      <li><h2><a title="Missing link"></a></h2></li>
    </ul>
  </div>
  <div class="cat-flex">
    <ul class="list-unstyled"><li><h2><a href="/orphan/1" title="Orphan"></a></h2></li></ul>
  </div>
</div>
"""

TRENDING = """
<div class="trending-articles">
  <ul class="list-unstyled">
    <li><a href="/trending/1" title="Trending one"><img data-src="/img/t1.jpg"></a></li>
    <li><a href="/trending/2" title="Trending two"></a></li>
  </ul>
</div>
"""

LATEST_NEWS = """
<div class="latest-news">
  <ul class="list-unstyled">
    <li><a href="/latest/1" title="Latest one"></a></li>
  </ul>
</div>
"""

SNIPPETS = {
    "top_story": TOP_STORY,
    "left_list": LEFT_LIST,
    "right_list": RIGHT_LIST,
    "animal_husbandry": ANIMAL_HUSBANDRY,
    "health_lifestyle": HEALTH_LIFESTYLE,
    "categories": CATEGORIES,
    "trending": TRENDING,
    "latest_news": LATEST_NEWS,
}

# records each section yields from the full fixture
EXPECTED_COUNTS = {
    "top_story": 1,
    "left_list": 2,
    "right_list": 1,
    "animal_husbandry": 1,
    "health_lifestyle": 1,
    "categories": 3,
    "trending": 2,
    "latest_news": 1,
}

BASE = "https://odia.krishijagran.com"


def build_homepage(*omit: str) -> str:
    """Assemble the fixture page, leaving out the named sections."""
    part = {name: ("" if name in omit else html) for name, html in SNIPPETS.items()}
    return f"""<!DOCTYPE html>
<html><head><title>Krishi Jagran</title></head>
<body>
<div class="row h-t-20">
{part["top_story"]}{part["left_list"]}{part["right_list"]}
</div>
<div class="weather-home">
{part["animal_husbandry"]}{part["health_lifestyle"]}
</div>
{part["categories"]}
{part["trending"]}
{part["latest_news"]}
</body></html>
"""


@pytest.fixture(autouse=True)
def _fresh_recipes():
    config_loader.clear_cache()
    yield
    config_loader.clear_cache()


@pytest.fixture
def homepage_html() -> str:
    return build_homepage()


@pytest.fixture
def extractor() -> NewsExtractor:
    return NewsExtractor(base_origin=BASE)
