from datetime import datetime, timezone
from typing import List

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from falak.news.model import NewsCategory, RawItem, SourceConfig


FIXED_NOW = datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)


class RecordingSleep:
    """Async stand-in for asyncio.sleep that only records the requested delays."""

    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class FailingChatModel:
    """Chat model whose every call fails like an unreachable API."""

    def __init__(self):
        self.calls = 0

    async def ainvoke(self, prompt, *args, **kwargs):
        self.calls += 1
        raise ConnectionError("generative API unreachable")


def translation_json(title_en: str, title_ms: str = "Tajuk", summary_en: str = "Summary.", summary_ms: str = "Ringkasan.") -> str:
    return (
        '{"title_en": "%s", "title_ms": "%s", "summary_en": "%s", "summary_ms": "%s"}'
        % (title_en, title_ms, summary_en, summary_ms)
    )


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def make_item():
    def factory(title: str, snippet: str = "", link: str = "", **kwargs) -> RawItem:
        return RawItem(title=title, snippet=snippet, link=link or f"https://example.com/{abs(hash(title))}", **kwargs)
    return factory


@pytest.fixture
def astronomy_source():
    return SourceConfig(
        name="NASA",
        feed_url="https://www.nasa.gov/rss/dyn/breaking_news.rss",
        category=NewsCategory.ASTRONOMY,
        limit=2,
    )


@pytest.fixture
def fake_llm():
    def factory(responses: List[str]) -> FakeListChatModel:
        return FakeListChatModel(responses=responses)
    return factory


@pytest.fixture
def failing_llm():
    return FailingChatModel()
