import re
from typing import Iterable, List


NORMALIZED_TITLE_LENGTH = 30
_NON_ALNUM = re.compile(r'[^a-z0-9]')


def normalize_title(title: str) -> str:
    """Lowercase, keep only [a-z0-9], truncate to the comparison prefix."""
    return _NON_ALNUM.sub('', (title or '').lower())[:NORMALIZED_TITLE_LENGTH]


def is_duplicate(title: str, seen_titles: Iterable[str]) -> bool:
    """
    Whether title matches any already seen title.

    Two titles match when either normalized form contains the other. This
    catches truncated and lightly retitled entries, and will also match
    unrelated titles that normalize to a short common prefix.
    """
    normalized = normalize_title(title)
    for seen in seen_titles:
        seen_normalized = normalize_title(seen)
        if normalized in seen_normalized or seen_normalized in normalized:
            return True
    return False


class SeenTitlesLog:
    """Titles saved during the current run, in save order."""

    def __init__(self):
        self._titles: List[str] = []

    def add(self, title: str) -> None:
        self._titles.append(title)

    def contains_duplicate(self, title: str) -> bool:
        return is_duplicate(title, self._titles)

    @property
    def titles(self) -> List[str]:
        return list(self._titles)

    def __len__(self) -> int:
        return len(self._titles)
