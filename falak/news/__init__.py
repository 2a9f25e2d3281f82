# Import core models
from .model import NewsCategory, SourceConfig, RawItem, EnrichedArticle, PersistedArticle

from .source.registry import FeedSourceRegistry

from .image import extract_image

__all__ = [
    "NewsCategory",
    "SourceConfig",
    "RawItem",
    "EnrichedArticle",
    "PersistedArticle",
    "FeedSourceRegistry",
    "extract_image",
]
