from .writer import ArticleWriter, AgentArticleWriter, slugify, render_article_markdown
from .cleanup import clean_output_dir
from .reader import parse_article_file, list_article_files, select_latest_article

__all__ = [
    "ArticleWriter",
    "AgentArticleWriter",
    "slugify",
    "render_article_markdown",
    "clean_output_dir",
    "parse_article_file",
    "list_article_files",
    "select_latest_article",
]
