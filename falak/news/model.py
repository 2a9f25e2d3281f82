from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional


class NewsCategory(Enum):
    """Categories a news source can be filed under."""
    ASTRONOMY = "astronomy"
    WEATHER = "weather"
    ISLAMIC = "islamic"
    AI = "ai"


@dataclass(frozen=True)
class SourceConfig:
    """A feed the pipeline pulls from on every run."""
    name: str
    feed_url: str
    category: NewsCategory
    limit: int  # max articles saved from this source per run
    keywords: Optional[FrozenSet[str]] = None

    def __post_init__(self):
        if self.limit < 0:
            raise ValueError(f"Source {self.name} has negative limit {self.limit}")


@dataclass
class RawItem:
    """A single feed entry as read from the RSS/Atom document."""
    title: str
    snippet: str = ""
    link: str = ""
    enclosure_url: Optional[str] = None
    media_content_url: Optional[str] = None
    media_thumbnail_url: Optional[str] = None
    content_html: str = ""


@dataclass(frozen=True)
class EnrichedArticle:
    """An article ready to be written, with English and Malay text."""
    title_en: str
    title_ms: str
    summary_en: str
    summary_ms: str
    source_name: str
    category: NewsCategory
    image_url: str
    link: str
    publish_date: str  # ISO date, YYYY-MM-DD


@dataclass
class PersistedArticle:
    """An article read back from a generated markdown file."""
    filename: str
    title_en: str
    title_ms: str
    date: str
    source: str
    category: str
    image: str
    link: str
    body: str
