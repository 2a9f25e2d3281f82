import asyncio
from dataclasses import asdict
from typing import Optional

from langgraph.graph import StateGraph, END

from falak.config import CONFIG, get_llm
from falak.news.source.rss.feed_reader import fetch_feed
from falak.pipeline import FeedFetcher
from .state import FetchNewsState
from .nodes.news_manager import Sleep, collect_articles_node, prepare_output_dir_node


def create_fetch_news_workflow(llm, article_delay: float, fetcher: FeedFetcher = fetch_feed, sleep: Sleep = asyncio.sleep):
    workflow = StateGraph(FetchNewsState)

    workflow.add_node("prepare_output_dir", prepare_output_dir_node)
    workflow.add_node("collect_articles", collect_articles_node(llm, article_delay, fetcher=fetcher, sleep=sleep))

    workflow.set_entry_point("prepare_output_dir")
    workflow.add_edge("prepare_output_dir", "collect_articles")
    workflow.add_edge("collect_articles", END)

    return workflow.compile()


async def execute_fetch_news_workflow(
    variant: str = "digest",
    output_dir: Optional[str] = None,
    clean_output_dir: bool = False,
    skip_enrichment: bool = False,
    article_delay: Optional[float] = None,
    fetcher: FeedFetcher = fetch_feed,
    sleep: Sleep = asyncio.sleep,
    llm=None,
):
    output_dir = output_dir or CONFIG.NEWS_OUTPUT_DIR
    if article_delay is None:
        article_delay = CONFIG.LANDING_ARTICLE_DELAY_SECONDS if variant == "landing" else CONFIG.ARTICLE_DELAY_SECONDS

    # Resolve the model up front so a missing key fails the run before any fetch.
    if llm is None and not skip_enrichment:
        llm = get_llm()

    initial_state: FetchNewsState = {
        "variant": variant,
        "output_dir": output_dir,
        "clean_output_dir": clean_output_dir,
        "removed_files": [],
        "report": None,
        "error_message": None,
    }

    result = await create_fetch_news_workflow(llm, article_delay, fetcher=fetcher, sleep=sleep).ainvoke(initial_state)
    report = result["report"]
    return {
        "variant": variant,
        "output_dir": output_dir,
        "removed_files": result["removed_files"],
        **asdict(report),
        "error_message": result["error_message"],
    }
