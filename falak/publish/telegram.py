import asyncio
import json
from typing import Any, Callable, Dict

import aiohttp

from falak.news.model import PersistedArticle
from falak.logging_config import create_logger


BODY_EXCERPT_LENGTH = 200

CATEGORY_ICONS = {
    "astronomy": "🔭",
    "ai": "🤖",
    "islamic": "🕌",
    "weather": "🌍",
}
DEFAULT_ICON = "📰"

CATEGORY_HASHTAGS = {
    "astronomy": "#Astronomy #Space #NASA",
    "ai": "#AI #Technology",
    "islamic": "#Islamic #Muslim",
    "weather": "#Earth #Climate",
}
DEFAULT_HASHTAGS = "#News"


class PublishError(Exception):
    """The chat platform did not accept the message."""
    pass


def format_message(article: PersistedArticle, site_name: str, site_url: str) -> str:
    """Telegram Markdown post for an article."""
    icon = CATEGORY_ICONS.get(article.category, DEFAULT_ICON)
    hashtags = CATEGORY_HASHTAGS.get(article.category, DEFAULT_HASHTAGS)

    msg = f"{icon} *{article.title_en}*\n\n"
    msg += f"{article.body[:BODY_EXCERPT_LENGTH]}...\n\n"
    msg += f"🔗 {article.link}\n\n"
    msg += f"_Source: {article.source}_\n"
    msg += f"{hashtags}\n\n"
    msg += f"via [{site_name}]({site_url})"
    return msg


class TelegramClient:
    """Minimal Bot API client for posting to a channel."""

    def __init__(
        self,
        bot_token: str,
        chat_id: str,
        api_base_url: str = "https://api.telegram.org",
        session_factory: Callable[[], Any] = aiohttp.ClientSession,
    ):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.api_base_url = api_base_url.rstrip("/")
        self.session_factory = session_factory
        self.logger = create_logger("TelegramClient")

    @property
    def send_message_url(self) -> str:
        return f"{self.api_base_url}/bot{self.bot_token}/sendMessage"

    def build_payload(self, text: str) -> Dict[str, Any]:
        return {
            "chat_id": self.chat_id,
            "text": text,
            "parse_mode": "Markdown",
            "disable_web_page_preview": False,
        }

    async def send_message(self, text: str) -> Dict[str, Any]:
        """
        Post a message; a single attempt.

        Raises:
            PublishError: on a non-200 response or a network failure.
        """
        try:
            async with self.session_factory() as session:
                async with session.post(self.send_message_url, json=self.build_payload(text)) as response:
                    body = await response.text()
                    if response.status != 200:
                        raise PublishError(f"API error ({response.status}): {body}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise PublishError(f"Failed to reach Telegram: {e}") from e

        self.logger.info("Posted to Telegram!")
        try:
            return json.loads(body)
        except json.JSONDecodeError:
            return {"ok": True, "raw": body}
