import asyncio
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

from falak.agent.translator import ArticleTranslator
from falak.config import CONFIG
from falak.news.source.registry import FeedSourceRegistry
from falak.news.source.rss.feed_reader import FeedFetchError, fetch_feed
from falak.pipeline import FeedFetcher, NewsAgent, NewsCollector, Pacer
from falak.publish.telegram import PublishError, TelegramClient, format_message
from falak.storage.cleanup import clean_output_dir
from falak.storage.reader import select_latest_article
from falak.storage.writer import AgentArticleWriter, ArticleWriter
from falak.logging_config import logger

from ..state import FetchNewsState, NewsAgentState, PublishState


Sleep = Callable[[float], Awaitable[None]]


async def prepare_output_dir_node(state: FetchNewsState):
    """Create the output directory, emptying it first for the landing page."""
    if state["clean_output_dir"]:
        removed = clean_output_dir(state["output_dir"])
        return {"removed_files": removed}

    Path(state["output_dir"]).mkdir(parents=True, exist_ok=True)
    return {"removed_files": []}


def collect_articles_node(llm: Optional[Any], article_delay: float, fetcher: FeedFetcher = fetch_feed, sleep: Sleep = asyncio.sleep):
    async def node(state: FetchNewsState):
        collector = NewsCollector(
            sources=FeedSourceRegistry.get_sources(state["variant"]),
            translator=ArticleTranslator(llm),
            writer=ArticleWriter(state["output_dir"]),
            pacer=Pacer(article_delay=article_delay, source_delay=CONFIG.SOURCE_DELAY_SECONDS, sleep=sleep),
            fetcher=fetcher,
        )
        report = await collector.run()
        return {"report": report}

    return node


def run_agent_node(llm: Optional[Any], article_delay: float, fetcher: FeedFetcher = fetch_feed, sleep: Sleep = asyncio.sleep):
    async def node(state: NewsAgentState):
        source = FeedSourceRegistry.get_sources("agent")[0]
        agent = NewsAgent(
            source=source,
            translator=ArticleTranslator(llm),
            writer=AgentArticleWriter(state["output_dir"], site_name=source.name),
            pacer=Pacer(article_delay=article_delay, sleep=sleep),
            fetcher=fetcher,
            limit=state["limit"],
        )
        try:
            report = await agent.run()
        except FeedFetchError as e:
            logger.error(f"❌ Error fetching news: {e}")
            return {"error_message": str(e)}
        return {"report": report}

    return node


async def select_article_node(state: PublishState):
    article = select_latest_article(state["output_dir"], CONFIG.PUBLISH_PREFERRED_CATEGORIES)
    if article is None:
        logger.info("No articles found")
        return {"article": None}

    logger.info(f"Selected: {article.title_en} ({article.filename})")
    return {"article": article}


async def format_message_node(state: PublishState):
    message = format_message(state["article"], CONFIG.SITE_NAME, CONFIG.SITE_URL)
    logger.info(f"Message:\n{message}")
    return {"message": message}


def send_message_node(client: TelegramClient):
    async def node(state: PublishState):
        try:
            response = await client.send_message(state["message"])
        except PublishError as e:
            logger.error(f"❌ Failed to post: {e}")
            return {"error_message": str(e)}
        return {"response": response}

    return node
