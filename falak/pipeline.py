import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Awaitable, Callable, Dict, List, Optional, Sequence

from falak.agent.translator import ArticleTranslator, TranslationResult
from falak.feed.dedup import SeenTitlesLog
from falak.feed.relevance import is_relevant
from falak.news.image import extract_image
from falak.news.model import EnrichedArticle, RawItem, SourceConfig
from falak.news.source.rss.feed_reader import fetch_feed
from falak.storage.writer import AgentArticleWriter, ArticleWriter
from falak.logging_config import create_logger
from falak.utils.time import today_iso


FeedFetcher = Callable[[str], Awaitable[List[RawItem]]]
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Pacer:
    """Fixed delays between enrichment calls and between sources."""
    article_delay: float = 1.5
    source_delay: float = 0.0
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    async def after_article(self) -> None:
        if self.article_delay > 0:
            await self.sleep(self.article_delay)

    async def after_source(self) -> None:
        if self.source_delay > 0:
            await self.sleep(self.source_delay)


@dataclass
class CollectionReport:
    total_saved: int = 0
    saved_files: List[str] = field(default_factory=list)
    saved_per_source: Dict[str, int] = field(default_factory=dict)
    failed_sources: List[Dict[str, str]] = field(default_factory=list)
    skipped_duplicates: int = 0
    skipped_irrelevant: int = 0
    skipped_existing: int = 0
    enrichment_fallbacks: int = 0


def build_article(item: RawItem, translation: TranslationResult, source: SourceConfig, publish_date: str) -> EnrichedArticle:
    return EnrichedArticle(
        title_en=translation.title_en,
        title_ms=translation.title_ms,
        summary_en=translation.summary_en,
        summary_ms=translation.summary_ms,
        source_name=source.name,
        category=source.category,
        image_url=extract_image(item),
        link=item.link,
        publish_date=publish_date,
    )


class NewsCollector:
    """
    Multi-source collection run: fetch, filter, dedup, enrich, write.

    Sources are processed one at a time in registry order. A source that
    fails is logged and skipped; the run always carries on to the next one.
    """

    def __init__(
        self,
        sources: Sequence[SourceConfig],
        translator: ArticleTranslator,
        writer: ArticleWriter,
        pacer: Optional[Pacer] = None,
        fetcher: FeedFetcher = fetch_feed,
        clock: Clock = utc_now,
    ):
        self.sources = tuple(sources)
        self.translator = translator
        self.writer = writer
        self.pacer = pacer or Pacer()
        self.fetcher = fetcher
        self.clock = clock
        self.logger = create_logger("NewsCollector")

    async def run(self) -> CollectionReport:
        report = CollectionReport()
        seen = SeenTitlesLog()

        for index, source in enumerate(self.sources):
            self.logger.info(f"📡 Fetching from {source.name}...")
            try:
                items = await self.fetcher(source.feed_url)
                saved = await self._collect_source(source, items, seen, report)
                report.saved_per_source[source.name] = saved
                self.logger.info(f"✅ Saved {saved}/{source.limit} from {source.name}")
            except Exception as e:
                self.logger.error(f"❌ Error processing {source.name}: {e}")
                report.failed_sources.append({"source": source.name, "error": str(e)})

            if index < len(self.sources) - 1:
                await self.pacer.after_source()

        self.logger.info(f"🎉 Total saved: {report.total_saved}")
        return report

    async def _collect_source(self, source: SourceConfig, items: List[RawItem], seen: SeenTitlesLog, report: CollectionReport) -> int:
        saved = 0
        for item in items:
            if saved >= source.limit:
                break

            if not item.title:
                continue

            if not is_relevant(item, source.keywords):
                self.logger.debug(f"   Off-topic: {item.title[:40]}...")
                report.skipped_irrelevant += 1
                continue

            if seen.contains_duplicate(item.title):
                self.logger.info(f"   ⏭️ Duplicate: {item.title[:40]}...")
                report.skipped_duplicates += 1
                continue

            self.logger.info(f"   📝 Processing: {item.title[:50]}...")
            result = await self.translator.translate(item, source.category)
            if result.is_fallback:
                report.enrichment_fallbacks += 1

            article = build_article(item, result.payload, source, today_iso(self.clock()))
            saved_title = self.writer.save(article)
            if saved_title is not None:
                seen.add(saved_title)
                saved += 1
                report.total_saved += 1
                report.saved_files.append(self.writer.filename_for(article))
            else:
                report.skipped_existing += 1

            await self.pacer.after_article()

        return saved


@dataclass
class AgentReport:
    processed: int = 0
    saved_files: List[str] = field(default_factory=list)
    skipped: List[Dict[str, str]] = field(default_factory=list)


class NewsAgent:
    """
    Single-feed agent: the first few items of one feed, each rendered as a full Malay article page.

    Items whose enrichment falls back are skipped, since the page would
    otherwise carry untranslated text.
    """

    def __init__(
        self,
        source: SourceConfig,
        translator: ArticleTranslator,
        writer: AgentArticleWriter,
        pacer: Optional[Pacer] = None,
        fetcher: FeedFetcher = fetch_feed,
        limit: Optional[int] = None,
        clock: Clock = utc_now,
    ):
        self.source = source
        self.translator = translator
        self.writer = writer
        self.pacer = pacer or Pacer(article_delay=2.0)
        self.fetcher = fetcher
        self.limit = source.limit if limit is None else limit
        if self.limit < 0:
            raise ValueError(f"Agent limit must not be negative, got {self.limit}")
        self.clock = clock
        self.logger = create_logger("NewsAgent")

    async def run(self) -> AgentReport:
        self.logger.info(f"📰 Fetching latest news from {self.source.name}...")
        items = await self.fetcher(self.source.feed_url)

        articles = items[:self.limit]
        self.logger.info(f"✅ Found {len(articles)} articles to process")

        report = AgentReport(processed=len(articles))
        for i, item in enumerate(articles):
            self.logger.info(f"📝 [Article {i + 1}/{len(articles)}] {item.title[:60]}")

            result = await self.translator.summarize(item)
            if result.is_fallback:
                self.logger.warning(f"⚠️ AI response invalid - skipping \"{item.title[:60]}\"")
                report.skipped.append({"title": item.title, "error": result.error or ""})
                continue

            summary = result.payload
            self.logger.info(f"   ✅ Translation: {summary.title_ms[:60]}")
            content = self.writer.render(
                title_ms=summary.title_ms,
                summary_ms=summary.summary_ms,
                keywords=summary.keywords,
                original_title=item.title,
                link=item.link,
                published=self.clock().astimezone(timezone.utc).date(),
            )
            filepath = self.writer.save(i, content)
            report.saved_files.append(filepath.name)

            if i < len(articles) - 1:
                await self.pacer.after_article()

        return report
