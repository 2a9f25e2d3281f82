from .relevance import is_relevant
from .dedup import normalize_title, is_duplicate, SeenTitlesLog

__all__ = [
    "is_relevant",
    "normalize_title",
    "is_duplicate",
    "SeenTitlesLog",
]
