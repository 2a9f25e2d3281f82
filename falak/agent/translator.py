import json
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type, TypeVar

from langchain_core.language_models import BaseLanguageModel
from pydantic import BaseModel, Field

from falak.agent.prompts import AIPrompt, SystemPrompt
from falak.news.model import NewsCategory, RawItem
from falak.logging_config import create_logger


PROMPT_CONTENT_MAX_LENGTH = 300
FALLBACK_SUMMARY_MAX_LENGTH = 150

ModelT = TypeVar("ModelT", bound=BaseModel)


class TranslationResult(BaseModel):
    title_en: str = Field(min_length=1, description="English title, max 80 chars")
    title_ms: str = Field(description="Malay title, max 80 chars")
    summary_en: str = Field(description="English summary, max 150 chars")
    summary_ms: str = Field(description="Malay summary, max 150 chars")


class AgentSummary(BaseModel):
    title_ms: str = Field(description="Translated title in natural conversational Malay")
    summary_ms: str = Field(description="Engaging Malay summary, 150-200 words in 2-3 paragraphs")
    keywords: List[str] = Field(default_factory=list, description="Malay keywords for the article")


@dataclass
class EnrichmentResult:
    """Outcome of one enrichment call: the decoded payload, or a fallback built from the feed item."""
    payload: Any
    is_fallback: bool = False
    error: Optional[str] = None


_OBJECT_START = re.compile(r'\{')


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Return the first complete JSON object embedded in free text, if any."""
    decoder = json.JSONDecoder()
    for match in _OBJECT_START.finditer(text or ""):
        try:
            obj, _ = decoder.raw_decode(text, match.start())
        except json.JSONDecodeError:
            continue
        if isinstance(obj, dict):
            return obj
    return None


def decode_structured(text: str, model: Type[ModelT]) -> ModelT:
    """Decode model output into a pydantic model; raises ValueError when it cannot."""
    data = extract_json_object(text)
    if data is None:
        raise ValueError(f"No JSON object found in response: {text[:100]!r}")
    return model.model_validate(data)


def response_text(response: Any) -> str:
    """Plain text of a chat model response (str content or a list of content parts)."""
    content = getattr(response, "content", response)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(str(part.get("text", "")))
        return "".join(parts)
    return str(content)


class ArticleTranslator:
    """
    Translates and summarizes feed items into English and Malay through a chat model.

    One model call per item and no retries; any failure yields a fallback
    result built from the item's own text.
    """

    def __init__(self, llm_model: Optional[BaseLanguageModel], system_prompt: Optional[SystemPrompt] = None):
        self.llm = llm_model
        self.system_prompt = system_prompt or SystemPrompt()
        self.logger = create_logger("ArticleTranslator")

    def build_translation_prompt(self, item: RawItem, category: NewsCategory) -> str:
        content = (item.snippet or item.title)[:PROMPT_CONTENT_MAX_LENGTH]

        prompt = AIPrompt(self.system_prompt)
        prompt.add_task_prompt(f"""
Translate this {category.value} news article. Return ONLY valid JSON, nothing else.

Title: {item.title}
Content: {content}

Return this exact format:
{{"title_en":"English title max 80 chars","title_ms":"Tajuk Melayu max 80 chars","summary_en":"English summary max 150 chars","summary_ms":"Ringkasan Melayu max 150 chars"}}
""")
        return prompt.get_prompt()

    def build_agent_prompt(self, item: RawItem) -> str:
        prompt = AIPrompt(self.system_prompt)
        prompt.add_task_prompt(f"""
Translate this astronomy/space news to natural Bahasa Malaysia and create a summary.

Original Title: {item.title}
Content: {item.snippet or 'No content'}

Return ONLY valid JSON (no markdown formatting, no code blocks):
{{
  "title_ms": "Translated title in natural conversational Malay",
  "summary_ms": "Engaging summary in Malay (150-200 words, 2-3 paragraphs). Make it interesting for Malaysian readers.",
  "keywords": ["kata kunci 1", "kata kunci 2", "kata kunci 3"]
}}
""")
        return prompt.get_prompt()

    @staticmethod
    def fallback_translation(item: RawItem) -> TranslationResult:
        summary = (item.snippet or "")[:FALLBACK_SUMMARY_MAX_LENGTH]
        return TranslationResult(
            title_en=item.title,
            title_ms=item.title,
            summary_en=summary,
            summary_ms=summary,
        )

    @staticmethod
    def fallback_agent_summary(item: RawItem) -> AgentSummary:
        return AgentSummary(
            title_ms=item.title,
            summary_ms=item.snippet or "",
            keywords=[],
        )

    async def _generate(self, prompt: str, model: Type[ModelT]) -> ModelT:
        response = await self.llm.ainvoke(prompt)
        return decode_structured(response_text(response), model)

    async def translate(self, item: RawItem, category: NewsCategory) -> EnrichmentResult:
        """Bilingual title and short summaries for the digest and landing pages."""
        if self.llm is None:
            return EnrichmentResult(payload=self.fallback_translation(item), is_fallback=True, error="enrichment disabled")

        try:
            translation = await self._generate(self.build_translation_prompt(item, category), TranslationResult)
            return EnrichmentResult(payload=translation)
        except Exception as e:
            self.logger.error(f"Translation error for \"{item.title[:50]}\": {e}")
            return EnrichmentResult(payload=self.fallback_translation(item), is_fallback=True, error=str(e))

    async def summarize(self, item: RawItem) -> EnrichmentResult:
        """Malay title, long summary and keywords for the single-feed agent."""
        if self.llm is None:
            return EnrichmentResult(payload=self.fallback_agent_summary(item), is_fallback=True, error="enrichment disabled")

        try:
            summary = await self._generate(self.build_agent_prompt(item), AgentSummary)
            return EnrichmentResult(payload=summary)
        except Exception as e:
            self.logger.error(f"Summary error for \"{item.title[:50]}\": {e}")
            return EnrichmentResult(payload=self.fallback_agent_summary(item), is_fallback=True, error=str(e))
