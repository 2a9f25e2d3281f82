from typing import Dict, Iterable, Tuple

from falak.news.model import NewsCategory, SourceConfig
from falak.logging_config import create_logger


DIGEST_SOURCES: Tuple[SourceConfig, ...] = (
    SourceConfig(
        name="NASA",
        feed_url="https://www.nasa.gov/rss/dyn/breaking_news.rss",
        category=NewsCategory.ASTRONOMY,
        limit=2,
    ),
    SourceConfig(
        name="Space.com",
        feed_url="https://www.space.com/feeds/all",
        category=NewsCategory.ASTRONOMY,
        limit=1,
    ),
    SourceConfig(
        name="NASA Earth",
        feed_url="https://earthobservatory.nasa.gov/feeds/image-of-the-day.rss",
        category=NewsCategory.WEATHER,
        limit=1,
    ),
    SourceConfig(
        name="EarthSky",
        feed_url="https://earthsky.org/space/feed/",
        category=NewsCategory.ASTRONOMY,
        limit=1,
    ),
)

# Islamic coverage comes from a general news feed, so it is narrowed by keyword.
LANDING_SOURCES: Tuple[SourceConfig, ...] = (
    SourceConfig(
        name="NASA",
        feed_url="https://www.nasa.gov/rss/dyn/breaking_news.rss",
        category=NewsCategory.ASTRONOMY,
        limit=2,
    ),
    SourceConfig(
        name="NASA Earth",
        feed_url="https://earthobservatory.nasa.gov/feeds/image-of-the-day.rss",
        category=NewsCategory.WEATHER,
        limit=1,
    ),
    SourceConfig(
        name="Al Jazeera",
        feed_url="https://www.aljazeera.com/xml/rss/all.xml",
        category=NewsCategory.ISLAMIC,
        limit=1,
        keywords=frozenset({
            "islam", "muslim", "mosque", "ramadan", "hajj", "eid",
            "quran", "hilal", "moon sighting", "mecca", "makkah",
        }),
    ),
    SourceConfig(
        name="TechCrunch AI",
        feed_url="https://techcrunch.com/category/artificial-intelligence/feed/",
        category=NewsCategory.AI,
        limit=1,
    ),
)

AGENT_SOURCES: Tuple[SourceConfig, ...] = (
    SourceConfig(
        name="NASA",
        feed_url="https://www.nasa.gov/rss/dyn/breaking_news.rss",
        category=NewsCategory.ASTRONOMY,
        limit=2,
    ),
)


class FeedSourceRegistry:
    """Registry of the static source lists, keyed by pipeline variant."""

    _variants: Dict[str, Tuple[SourceConfig, ...]] = {}
    logger = create_logger("FeedSourceRegistry")

    @classmethod
    def register(cls, variant: str, sources: Iterable[SourceConfig]) -> None:
        sources = tuple(sources)
        names = [source.name for source in sources]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate source names in variant '{variant}': {names}")

        if variant in cls._variants:
            cls.logger.warning(f"Overriding sources registered for variant '{variant}'")
        cls._variants[variant] = sources

    @classmethod
    def get_sources(cls, variant: str) -> Tuple[SourceConfig, ...]:
        if variant not in cls._variants:
            raise ValueError(f"Unknown source variant '{variant}'. Available variants: {sorted(cls._variants)}")
        return cls._variants[variant]

    @classmethod
    def get_variants(cls) -> Tuple[str, ...]:
        return tuple(sorted(cls._variants))


FeedSourceRegistry.register("digest", DIGEST_SOURCES)
FeedSourceRegistry.register("landing", LANDING_SOURCES)
FeedSourceRegistry.register("agent", AGENT_SOURCES)
