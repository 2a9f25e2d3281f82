from typing import Iterable, Optional

from falak.news.model import RawItem


def is_relevant(item: RawItem, keywords: Optional[Iterable[str]] = None) -> bool:
    """
    Keyword gate for sources that carry off-topic items.

    With no keywords every item passes; otherwise an item passes when any
    keyword appears (case-insensitive) in its title or snippet.
    """
    if not keywords:
        return True

    text = f"{item.title} {item.snippet}".lower()
    return any(keyword.lower() in text for keyword in keywords)
