from .prompts import AIPrompt, SystemPrompt
from .translator import ArticleTranslator, EnrichmentResult, TranslationResult, AgentSummary

__all__ = [
    "AIPrompt",
    "SystemPrompt",
    "ArticleTranslator",
    "EnrichmentResult",
    "TranslationResult",
    "AgentSummary",
]
