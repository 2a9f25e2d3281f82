import asyncio
from typing import Any, List, Optional

import aiohttp
import feedparser
from bs4 import BeautifulSoup

from falak.config import CONFIG
from falak.news.model import RawItem
from falak.logging_config import logger


class FeedFetchError(Exception):
    """The feed could not be downloaded or parsed."""
    pass


def html_to_text(html: str) -> str:
    """Strip markup from an item summary, collapsing whitespace."""
    if not html:
        return ""
    soup = BeautifulSoup(html, 'html.parser')
    return " ".join(soup.get_text(separator=" ").split())


def _first_url(entries: Any, key: str) -> Optional[str]:
    for entry in entries or []:
        url = entry.get(key)
        if url:
            return str(url)
    return None


def entry_to_raw_item(entry: Any) -> RawItem:
    """Map a feedparser entry onto the fields the pipeline reads."""
    summary_html = str(entry.get('summary', '') or '')

    content_html = ""
    for content in entry.get('content', []) or []:
        if content.get('value'):
            content_html = str(content['value'])
            break
    if not content_html:
        content_html = summary_html

    return RawItem(
        title=str(entry.get('title', '') or '').strip(),
        snippet=html_to_text(summary_html),
        link=str(entry.get('link', '') or ''),
        enclosure_url=_first_url(entry.get('enclosures'), 'href'),
        media_content_url=_first_url(entry.get('media_content'), 'url'),
        media_thumbnail_url=_first_url(entry.get('media_thumbnail'), 'url'),
        content_html=content_html,
    )


def parse_feed_document(document: str, url: str = "") -> List[RawItem]:
    """Parse an RSS/Atom document into raw items, in feed order."""
    feed = feedparser.parse(document)

    if not feed.entries:
        if feed.get('bozo'):
            raise FeedFetchError(f"Unparsable feed {url}: {feed.get('bozo_exception')}")
        logger.warning(f"No entries found in RSS feed for {url}")
        return []

    return [entry_to_raw_item(entry) for entry in feed.entries]


async def fetch_feed(url: str, timeout: Optional[float] = None) -> List[RawItem]:
    """Download a feed and return its items using aiohttp and feedparser."""
    client_timeout = aiohttp.ClientTimeout(total=timeout or CONFIG.FEED_FETCH_TIMEOUT_SECONDS)
    try:
        async with aiohttp.ClientSession(timeout=client_timeout) as session:
            async with session.get(url) as response:
                if response.status != 200:
                    raise FeedFetchError(f"HTTP {response.status} when fetching {url}")

                rss_content = await response.text()
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise FeedFetchError(f"Error fetching {url}: {e}") from e

    items = parse_feed_document(rss_content, url)
    logger.info(f"Fetched {len(items)} items from feed url: {url}")
    return items
