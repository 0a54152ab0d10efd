"""Tests for rendering retries and page acquisition."""

import asyncio

import pytest

from analyzer.crawler.acquire import PageAcquirer, validate_url
from analyzer.crawler.render import (
    RedirectHop,
    RenderedPage,
    fetch_rendered_page,
    is_transient_error,
)
from api.config import Settings
from api.exceptions import AcquisitionError

URL = "https://example.com/guide"


class FakeRenderer:
    """Renderer that raises queued errors before returning a page."""

    def __init__(self, errors: list[BaseException] | None = None, page: RenderedPage | None = None):
        self.errors = list(errors or [])
        self.page = page or RenderedPage(
            url=URL,
            final_url=URL,
            status_code=200,
            markup="<html><body><h1>Guide</h1></body></html>",
            headers={"Content-Type": "text/html"},
            load_time_ms=120,
        )
        self.calls = 0

    async def render(self, url: str, timeout_ms: int) -> RenderedPage:
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.page


class RecordingSleep:
    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def test_is_transient_error() -> None:
    assert is_transient_error(RuntimeError("net::ERR_CONNECTION_RESET at https://x")) is True
    assert is_transient_error(RuntimeError("Target closed")) is True
    assert is_transient_error(ConnectionResetError()) is True
    assert is_transient_error(RuntimeError("net::ERR_NAME_NOT_RESOLVED")) is False


class TestFetchRenderedPage:
    """Tests for the navigation retry policy."""

    @pytest.mark.asyncio
    async def test_success_first_attempt(self) -> None:
        renderer = FakeRenderer()
        page = await fetch_rendered_page(URL, renderer, sleep=RecordingSleep())
        assert page.status_code == 200
        assert renderer.calls == 1

    @pytest.mark.asyncio
    async def test_retries_transient_errors_with_linear_backoff(self) -> None:
        renderer = FakeRenderer(
            errors=[RuntimeError("net::ERR_CONNECTION_RESET"), RuntimeError("socket hang up")]
        )
        sleep = RecordingSleep()

        page = await fetch_rendered_page(
            URL, renderer, max_attempts=3, retry_delay=1.0, sleep=sleep
        )

        assert page.final_url == URL
        assert renderer.calls == 3
        assert sleep.delays == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_exhausted_retries_raise_network(self) -> None:
        renderer = FakeRenderer(errors=[RuntimeError("frame was detached")] * 3)
        sleep = RecordingSleep()

        with pytest.raises(AcquisitionError) as exc_info:
            await fetch_rendered_page(URL, renderer, max_attempts=3, sleep=sleep)

        assert exc_info.value.reason == "network"
        assert renderer.calls == 3
        assert len(sleep.delays) == 2

    @pytest.mark.asyncio
    async def test_non_transient_error_not_retried(self) -> None:
        renderer = FakeRenderer(errors=[RuntimeError("net::ERR_NAME_NOT_RESOLVED")])

        with pytest.raises(AcquisitionError) as exc_info:
            await fetch_rendered_page(URL, renderer, sleep=RecordingSleep())

        assert exc_info.value.reason == "network"
        assert renderer.calls == 1

    @pytest.mark.asyncio
    async def test_timeout_classified(self) -> None:
        renderer = FakeRenderer(errors=[TimeoutError("Navigation timeout of 30000 ms exceeded")])

        with pytest.raises(AcquisitionError) as exc_info:
            await fetch_rendered_page(URL, renderer, sleep=RecordingSleep())

        assert exc_info.value.reason == "timeout"

    @pytest.mark.asyncio
    async def test_redirect_loop_classified(self) -> None:
        renderer = FakeRenderer(errors=[RuntimeError("net::ERR_TOO_MANY_REDIRECTS")])

        with pytest.raises(AcquisitionError) as exc_info:
            await fetch_rendered_page(URL, renderer, sleep=RecordingSleep())

        assert exc_info.value.reason == "too_many_redirects"


class TestValidateUrl:
    def test_accepts_http_and_https(self) -> None:
        assert validate_url(" https://example.com/a ") == "https://example.com/a"
        assert validate_url("http://example.com") == "http://example.com"

    @pytest.mark.parametrize("url", ["example.com", "ftp://example.com/file", "https://", ""])
    def test_rejects_invalid(self, url: str) -> None:
        with pytest.raises(AcquisitionError) as exc_info:
            validate_url(url)
        assert exc_info.value.reason == "invalid_url"


class TestPageAcquirer:
    """Tests for concurrent page and robots.txt acquisition."""

    @pytest.mark.asyncio
    async def test_acquire_combines_page_and_robots(self) -> None:
        page = RenderedPage(
            url=URL,
            final_url="https://example.com/guide/",
            status_code=200,
            markup="<html></html>",
            headers={"Last-Modified": "Mon, 02 Jun 2025 10:00:00 GMT"},
            redirects=[RedirectHop(URL, "https://example.com/guide/", 301)],
            load_time_ms=250,
        )

        async def fetch(robots_url: str, timeout: float) -> str | None:
            return "User-agent: GPTBot\nDisallow: /"

        acquirer = PageAcquirer(
            renderer=FakeRenderer(page=page), fetch_text=fetch, settings=Settings()
        )
        acquired = await acquirer.acquire(URL)

        assert acquired.final_url == "https://example.com/guide/"
        assert acquired.headers == {"last-modified": "Mon, 02 Jun 2025 10:00:00 GMT"}
        assert acquired.redirects[0].status == 301
        assert acquired.robots is not None
        assert acquired.robots.is_allowed("GPTBot") is False
        assert acquired.to_dict()["redirects"] == [
            {"from": URL, "to": "https://example.com/guide/", "status": 301}
        ]

    @pytest.mark.asyncio
    async def test_cross_origin_redirect_uses_final_robots(self) -> None:
        final = "https://www.example.org/guide"
        page = RenderedPage(
            url=URL,
            final_url=final,
            status_code=200,
            markup="<html></html>",
            redirects=[RedirectHop(URL, final, 301)],
            load_time_ms=90,
        )
        robots_files = {
            "https://example.com/robots.txt": "User-agent: *\nAllow: /",
            "https://www.example.org/robots.txt": "User-agent: GPTBot\nDisallow: /guide",
        }
        requested: list[str] = []

        async def fetch(robots_url: str, timeout: float) -> str | None:
            requested.append(robots_url)
            return robots_files[robots_url]

        acquirer = PageAcquirer(
            renderer=FakeRenderer(page=page), fetch_text=fetch, settings=Settings()
        )
        acquired = await acquirer.acquire(URL)

        assert acquired.robots.robots_url == "https://www.example.org/robots.txt"
        assert acquired.robots.path == "/guide"
        assert acquired.robots.is_allowed("GPTBot") is False
        assert requested[-1] == "https://www.example.org/robots.txt"

    @pytest.mark.asyncio
    async def test_same_origin_redirect_evaluates_final_path(self) -> None:
        final = "https://example.com/private/guide"
        page = RenderedPage(
            url=URL,
            final_url=final,
            status_code=200,
            markup="<html></html>",
            redirects=[RedirectHop(URL, final, 302)],
            load_time_ms=90,
        )
        requested: list[str] = []

        async def fetch(robots_url: str, timeout: float) -> str | None:
            requested.append(robots_url)
            return "User-agent: *\nDisallow: /private/"

        acquirer = PageAcquirer(
            renderer=FakeRenderer(page=page), fetch_text=fetch, settings=Settings()
        )
        acquired = await acquirer.acquire(URL)

        assert requested == ["https://example.com/robots.txt"]
        assert acquired.robots.path == "/private/guide"
        assert acquired.robots.is_allowed("Googlebot") is False

    @pytest.mark.asyncio
    async def test_invalid_url_fails_before_fetching(self) -> None:
        renderer = FakeRenderer()
        acquirer = PageAcquirer(renderer=renderer, settings=Settings())

        with pytest.raises(AcquisitionError):
            await acquirer.acquire("not a url")
        assert renderer.calls == 0

    @pytest.mark.asyncio
    async def test_render_failure_cancels_robots_check(self) -> None:
        started = asyncio.Event()
        cancelled = asyncio.Event()

        async def slow_fetch(robots_url: str, timeout: float) -> str | None:
            started.set()
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.set()
                raise
            return None

        class FailingRenderer:
            async def render(self, url: str, timeout_ms: int) -> RenderedPage:
                await started.wait()
                raise RuntimeError("net::ERR_NAME_NOT_RESOLVED")

        acquirer = PageAcquirer(
            renderer=FailingRenderer(),
            fetch_text=slow_fetch,
            settings=Settings(),
            sleep=RecordingSleep(),
        )

        with pytest.raises(AcquisitionError):
            await acquirer.acquire(URL)

        await asyncio.wait_for(cancelled.wait(), timeout=1.0)
        assert cancelled.is_set()
