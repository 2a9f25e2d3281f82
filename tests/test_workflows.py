import pytest

from falak.news.source.registry import FeedSourceRegistry
from falak.news.source.rss.feed_reader import FeedFetchError
from falak.publish.telegram import TelegramClient
from falak.storage.writer import ArticleWriter
from falak_exec.cli import setup_argparser
from falak_exec.controller import run_workflow
from falak_exec.workflows.fetch_news import execute_fetch_news_workflow
from falak_exec.workflows.news_agent import execute_news_agent_workflow
from falak_exec.workflows.publish_latest import execute_publish_workflow

from tests.test_pipeline import FakeFetcher
from tests.test_storage import make_article
from tests.test_telegram import FakeSession


class TestFetchNewsWorkflow:

    @pytest.mark.asyncio
    async def test_digest_run_saves_untranslated_articles(self, tmp_path, make_item, recording_sleep):
        sources = FeedSourceRegistry.get_sources("digest")
        feeds = {source.feed_url: [] for source in sources}
        feeds[sources[0].feed_url] = [make_item("Webb spots galaxy", "Deep field image."), make_item("Artemis crew named", "Four astronauts.")]
        feeds[sources[1].feed_url] = RuntimeError("connection reset")

        result = await execute_fetch_news_workflow(
            variant="digest",
            output_dir=str(tmp_path / "news"),
            skip_enrichment=True,
            article_delay=0.25,
            fetcher=FakeFetcher(feeds),
            sleep=recording_sleep,
        )

        assert result["error_message"] is None
        assert result["total_saved"] == 2
        assert result["failed_sources"] == [{"source": sources[1].name, "error": "connection reset"}]
        assert sorted(p.name.split("-", 3)[3] for p in (tmp_path / "news").iterdir()) == ["artemis-crew-named.md", "webb-spots-galaxy.md"]
        assert recording_sleep.calls == [0.25, 0.25]

    @pytest.mark.asyncio
    async def test_landing_run_replaces_previous_articles(self, tmp_path, make_item, recording_sleep):
        output_dir = tmp_path / "news"
        output_dir.mkdir()
        (output_dir / ".gitkeep").write_text("", encoding="utf-8")
        (output_dir / "2026-01-01-stale.md").write_text("old", encoding="utf-8")

        sources = FeedSourceRegistry.get_sources("landing")
        feeds = {source.feed_url: [] for source in sources}
        islamic = next(source for source in sources if source.keywords)
        feeds[islamic.feed_url] = [make_item("Markets close higher"), make_item("Eid prayers held at national mosque")]

        result = await execute_fetch_news_workflow(
            variant="landing",
            output_dir=str(output_dir),
            clean_output_dir=True,
            skip_enrichment=True,
            fetcher=FakeFetcher(feeds),
            sleep=recording_sleep,
        )

        assert result["removed_files"] == ["2026-01-01-stale.md"]
        assert result["total_saved"] == 1
        names = sorted(p.name for p in output_dir.iterdir())
        assert names[0] == ".gitkeep"
        assert names[1].endswith("-eid-prayers-held-at-national-mosque.md")
        assert recording_sleep.calls == [3.0]

    @pytest.mark.asyncio
    async def test_missing_model_key_fails_before_fetching(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MODEL_NAME", "gemini-2.0-flash")
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        fetcher = FakeFetcher({})

        exit_code = await run_workflow(
            command_name="fetch-news",
            input_data={},
            workflow_func=lambda: execute_fetch_news_workflow(output_dir=str(tmp_path), fetcher=fetcher),
        )

        assert exit_code == 1
        assert fetcher.calls == []


class TestNewsAgentWorkflow:

    @pytest.mark.asyncio
    async def test_fetch_failure_is_reported_as_error(self, tmp_path, fake_llm):
        source = FeedSourceRegistry.get_sources("agent")[0]
        fetcher = FakeFetcher({source.feed_url: FeedFetchError("HTTP 503 when fetching")})

        result = await execute_news_agent_workflow(str(tmp_path), fetcher=fetcher, llm=fake_llm(["{}"]))

        assert result["error_message"] == "HTTP 503 when fetching"
        assert list(tmp_path.iterdir()) == []

        exit_code = await run_workflow(
            "news-agent", {}, lambda: execute_news_agent_workflow(str(tmp_path), fetcher=fetcher, llm=fake_llm(["{}"]))
        )
        assert exit_code == 1


class TestPublishWorkflow:

    @pytest.fixture
    def client_session(self):
        return FakeSession()

    @pytest.fixture
    def client(self, client_session):
        return TelegramClient("123:abc", "@falaktech", session_factory=client_session)

    @pytest.mark.asyncio
    async def test_no_articles_sends_nothing(self, tmp_path, client, client_session):
        result = await execute_publish_workflow(str(tmp_path), client=client)

        assert result["published_file"] is None
        assert result["sent"] is False
        assert client_session.posts == []

    @pytest.mark.asyncio
    async def test_posts_latest_preferred_article(self, tmp_path, client, client_session, monkeypatch):
        monkeypatch.setenv("PUBLISH_PREFERRED_CATEGORIES", "astronomy,ai")
        writer = ArticleWriter(tmp_path)
        writer.save(make_article("Webb spots galaxy", publish_date="2026-10-17"))
        (tmp_path / "2026-10-18-corrupt.md").write_text("no metadata here", encoding="utf-8")

        result = await execute_publish_workflow(str(tmp_path), client=client)

        assert result["published_file"] == "2026-10-17-webb-spots-galaxy.md"
        assert result["sent"] is True
        assert len(client_session.posts) == 1
        assert client_session.posts[0]["json"]["text"].startswith("🔭 *Webb spots galaxy*")

    @pytest.mark.asyncio
    async def test_dry_run_formats_without_credentials(self, tmp_path, monkeypatch):
        monkeypatch.delenv("TELEGRAM_BOT_TOKEN", raising=False)
        monkeypatch.delenv("TELEGRAM_CHANNEL_ID", raising=False)
        ArticleWriter(tmp_path).save(make_article("Aurora tonight"))

        result = await execute_publish_workflow(str(tmp_path), dry_run=True)

        assert result["sent"] is False
        assert "*Aurora tonight*" in result["message"]

    @pytest.mark.asyncio
    async def test_rejected_post_fails_the_run(self, tmp_path):
        ArticleWriter(tmp_path).save(make_article("Aurora tonight"))
        client = TelegramClient("123:abc", "@falaktech", session_factory=FakeSession(status=401, body='{"ok": false}'))

        result = await execute_publish_workflow(str(tmp_path), client=client)

        assert result["sent"] is False
        assert "401" in result["error_message"]

        exit_code = await run_workflow("post-telegram", {}, lambda: execute_publish_workflow(str(tmp_path), client=client))
        assert exit_code == 1

    @pytest.mark.asyncio
    async def test_missing_credentials_exit_non_zero(self, tmp_path, monkeypatch):
        monkeypatch.delenv("TELEGRAM_BOT_TOKEN", raising=False)
        monkeypatch.setenv("TELEGRAM_CHANNEL_ID", "@falaktech")

        exit_code = await run_workflow("post-telegram", {}, lambda: execute_publish_workflow(str(tmp_path)))

        assert exit_code == 1


class TestController:

    @pytest.mark.asyncio
    async def test_successful_result_exits_zero(self):
        async def workflow():
            return {"total_saved": 0, "failed_sources": [{"source": "NASA", "error": "timeout"}], "error_message": None}

        assert await run_workflow("fetch-news", {}, workflow) == 0

    @pytest.mark.asyncio
    async def test_reported_error_exits_non_zero(self):
        async def workflow():
            return {"error_message": "something went wrong"}

        assert await run_workflow("fetch-news", {}, workflow) == 1


class TestCli:

    def test_agent_limit_must_not_be_negative(self):
        parser = setup_argparser()

        assert parser.parse_args(["news-agent", "--limit", "3"]).limit == 3
        with pytest.raises(SystemExit):
            parser.parse_args(["news-agent", "--limit", "-1"])
