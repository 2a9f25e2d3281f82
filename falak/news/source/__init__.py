from .registry import FeedSourceRegistry, DIGEST_SOURCES, LANDING_SOURCES, AGENT_SOURCES

__all__ = ["FeedSourceRegistry", "DIGEST_SOURCES", "LANDING_SOURCES", "AGENT_SOURCES"]
