from typing import Optional

from langgraph.graph import StateGraph, END

from falak.config import CONFIG
from falak.publish.telegram import TelegramClient
from .state import PublishState
from .nodes.news_manager import format_message_node, select_article_node, send_message_node


def continue_after_select(state: PublishState):
    return "format_message" if state["article"] is not None else END


def create_publish_workflow(client: Optional[TelegramClient]):
    workflow = StateGraph(PublishState)

    workflow.add_node("select_article", select_article_node)
    workflow.add_node("format_message", format_message_node)

    workflow.set_entry_point("select_article")
    workflow.add_conditional_edges("select_article", continue_after_select, ["format_message", END])  # type: ignore

    # Without a client (dry run) the workflow stops once the message is formatted.
    if client is None:
        workflow.add_edge("format_message", END)
    else:
        workflow.add_node("send_message", send_message_node(client))
        workflow.add_edge("format_message", "send_message")
        workflow.add_edge("send_message", END)

    return workflow.compile()


async def execute_publish_workflow(output_dir: Optional[str] = None, dry_run: bool = False, client: Optional[TelegramClient] = None):
    output_dir = output_dir or CONFIG.NEWS_OUTPUT_DIR

    if client is None and not dry_run:
        client = TelegramClient(
            bot_token=CONFIG.require("TELEGRAM_BOT_TOKEN"),
            chat_id=CONFIG.require("TELEGRAM_CHANNEL_ID"),
            api_base_url=CONFIG.TELEGRAM_API_BASE_URL,
        )

    initial_state: PublishState = {
        "output_dir": output_dir,
        "dry_run": dry_run,
        "article": None,
        "message": None,
        "response": None,
        "error_message": None,
    }

    result = await create_publish_workflow(None if dry_run else client).ainvoke(initial_state)
    article = result["article"]
    return {
        "output_dir": output_dir,
        "dry_run": dry_run,
        "published_file": article.filename if article else None,
        "message": result["message"],
        "sent": result["response"] is not None,
        "error_message": result["error_message"],
    }
