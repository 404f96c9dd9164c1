# tests/test_news_models.py
import pytest
from pydantic import ValidationError

from models.news import (
    ExtractionResult,
    NewsRecord,
    NewsSection,
    SectionDiagnostics,
)

LINK = "https://odia.krishijagran.com/news/1"


def test_minimal_record_serialises_without_optional_fields():
    record = NewsRecord(section=NewsSection.TRENDING, title="Headline", link=LINK)
    assert record.to_dict() == {"section": "trending", "title": "Headline", "link": LINK}


def test_read_more_link_uses_camel_case_alias():
    record = NewsRecord(
        section="health_lifestyle",
        title="Yoga",
        link=LINK,
        readMoreLink=LINK + "/more",
    )
    assert record.read_more_link == LINK + "/more"
    assert record.to_dict()["readMoreLink"] == LINK + "/more"


def test_records_are_frozen():
    record = NewsRecord(section=NewsSection.TOP_STORY, title="Headline", link=LINK)
    with pytest.raises(ValidationError):
        record.title = "changed"


@pytest.mark.parametrize("title", ["", "   "])
def test_blank_title_is_rejected(title):
    with pytest.raises(ValidationError):
        NewsRecord(section=NewsSection.TOP_STORY, title=title, link=LINK)


def test_relative_link_is_rejected():
    with pytest.raises(ValidationError):
        NewsRecord(section=NewsSection.TOP_STORY, title="Headline", link="/news/1")


def test_relative_image_is_rejected():
    with pytest.raises(ValidationError):
        NewsRecord(section=NewsSection.TOP_STORY, title="Headline", link=LINK, image="/img.jpg")


def test_unknown_section_is_rejected():
    with pytest.raises(ValidationError):
        NewsRecord(section="sports", title="Headline", link=LINK)


def test_result_payload_shape():
    record = NewsRecord(section=NewsSection.LATEST_NEWS, title="Headline", link=LINK)
    result = ExtractionResult.from_records(
        [record], {NewsSection.LATEST_NEWS: SectionDiagnostics(elements_found=1, elements_parsed=1)}
    )

    payload = result.to_dict()
    assert payload["status"] == "success"
    assert payload["count"] == 1
    assert payload["data"] == [record.to_dict()]
    assert payload["diagnostics"]["latest_news"]["elementsFound"] == 1
    assert payload["diagnostics"]["latest_news"]["groupsSkipped"] == 0
