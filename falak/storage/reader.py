import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from falak.news.model import PersistedArticle
from falak.storage.writer import ARTICLE_EXTENSION
from falak.logging_config import create_logger


FRONTMATTER_DELIMITER = "---"
MIN_DELIMITED_PARTS = 3

_SURROUNDING_QUOTE = re.compile(r'^["\']|["\']$')

logger = create_logger("ArticleReader")


def _parse_frontmatter(block: str) -> Dict[str, str]:
    frontmatter = {}
    for line in block.strip().split("\n"):
        key, sep, value = line.partition(":")
        if not sep or not key.strip():
            continue
        value = _SURROUNDING_QUOTE.sub("", value.strip())
        frontmatter[key.strip()] = value.replace('\\"', '"')
    return frontmatter


def parse_article_file(filepath: Union[str, Path]) -> Optional[PersistedArticle]:
    """
    Read a generated article back into its metadata and body.

    The body is the first paragraph after the metadata block. Returns None
    when the file cannot be read as UTF-8 text or does not start with a
    delimited metadata block.
    """
    filepath = Path(filepath)
    try:
        content = filepath.read_text(encoding="utf-8")
    except (UnicodeDecodeError, OSError) as e:
        logger.warning(f"Cannot read article file {filepath.name}: {e}")
        return None
    content = content.replace("\r\n", "\n").replace("\r", "\n")

    parts = content.split(FRONTMATTER_DELIMITER)
    if len(parts) < MIN_DELIMITED_PARTS or parts[0].strip():
        return None

    frontmatter = _parse_frontmatter(parts[1])
    body = FRONTMATTER_DELIMITER.join(parts[2:]).strip().split("\n\n")[0]

    return PersistedArticle(
        filename=filepath.name,
        title_en=frontmatter.get("title_en", ""),
        title_ms=frontmatter.get("title_ms", ""),
        date=frontmatter.get("date", ""),
        source=frontmatter.get("source", ""),
        category=frontmatter.get("category", ""),
        image=frontmatter.get("image", ""),
        link=frontmatter.get("link", ""),
        body=body,
    )


def list_article_files(output_dir: Union[str, Path]) -> List[Path]:
    """Generated article files, newest first (file names start with the date)."""
    output_dir = Path(output_dir)
    if not output_dir.is_dir():
        return []

    files = [
        entry for entry in output_dir.iterdir()
        if entry.is_file() and entry.name.endswith(ARTICLE_EXTENSION) and not entry.name.startswith(".")
    ]
    return sorted(files, key=lambda entry: entry.name, reverse=True)


def select_latest_article(output_dir: Union[str, Path], preferred_categories: Iterable[str]) -> Optional[PersistedArticle]:
    """
    Pick the article to publish.

    The newest well-formed article in a preferred category wins; otherwise the
    newest well-formed article of any category. Malformed files are skipped.
    """
    preferred = set(preferred_categories)
    fallback = None

    for filepath in list_article_files(output_dir):
        article = parse_article_file(filepath)
        if article is None:
            logger.warning(f"Skipping malformed article file: {filepath.name}")
            continue

        if article.category in preferred:
            return article
        if fallback is None:
            fallback = article

    return fallback
