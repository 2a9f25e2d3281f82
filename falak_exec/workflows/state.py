from typing import Any, Dict, List, Optional, TypedDict

from falak.news.model import PersistedArticle
from falak.pipeline import AgentReport, CollectionReport


class BaseState(TypedDict):
    error_message: Optional[str]


class FetchNewsState(BaseState):
    """State for the multi-source fetch workflow."""
    variant: str
    output_dir: str
    clean_output_dir: bool
    removed_files: List[str]
    report: Optional[CollectionReport]


class NewsAgentState(BaseState):
    """State for the single-feed agent workflow."""
    output_dir: str
    limit: Optional[int]
    report: Optional[AgentReport]


class PublishState(BaseState):
    """State for the publish-latest workflow."""
    output_dir: str
    dry_run: bool
    article: Optional[PersistedArticle]
    message: Optional[str]
    response: Optional[Dict[str, Any]]
