import re

from falak.news.model import RawItem


IMG_SRC_PATTERN = re.compile(r'<img[^>]+src=["\']([^"\']+)["\']', re.IGNORECASE)


def extract_image(item: RawItem) -> str:
    """Best-effort image URL for a feed item, or an empty string.

    Checks the enclosure, then media:content, then media:thumbnail, then the
    first <img> tag in the item's HTML content.
    """
    for url in (item.enclosure_url, item.media_content_url, item.media_thumbnail_url):
        if url:
            return url

    match = IMG_SRC_PATTERN.search(item.content_html or "")
    if match:
        return match.group(1)

    return ""
