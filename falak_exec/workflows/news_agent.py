import asyncio
from dataclasses import asdict
from typing import Optional

from langgraph.graph import StateGraph, END

from falak.config import CONFIG, get_llm
from falak.news.source.rss.feed_reader import fetch_feed
from falak.pipeline import FeedFetcher
from .state import NewsAgentState
from .nodes.news_manager import Sleep, run_agent_node


def create_news_agent_workflow(llm, article_delay: float, fetcher: FeedFetcher = fetch_feed, sleep: Sleep = asyncio.sleep):
    workflow = StateGraph(NewsAgentState)

    workflow.add_node("run_agent", run_agent_node(llm, article_delay, fetcher=fetcher, sleep=sleep))

    workflow.set_entry_point("run_agent")
    workflow.add_edge("run_agent", END)

    return workflow.compile()


async def execute_news_agent_workflow(
    output_dir: Optional[str] = None,
    limit: Optional[int] = None,
    fetcher: FeedFetcher = fetch_feed,
    sleep: Sleep = asyncio.sleep,
    llm=None,
):
    output_dir = output_dir or CONFIG.NEWS_OUTPUT_DIR
    llm = llm or get_llm()

    initial_state: NewsAgentState = {
        "output_dir": output_dir,
        "limit": limit,
        "report": None,
        "error_message": None,
    }

    result = await create_news_agent_workflow(llm, CONFIG.AGENT_ARTICLE_DELAY_SECONDS, fetcher=fetcher, sleep=sleep).ainvoke(initial_state)
    report = result["report"]
    return {
        "output_dir": output_dir,
        **(asdict(report) if report else {}),
        "error_message": result["error_message"],
    }
