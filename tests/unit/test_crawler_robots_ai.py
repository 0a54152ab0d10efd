"""Tests for per-agent crawl access."""

import asyncio
from functools import partial

import httpx
import pytest

from analyzer.crawler.robots_ai import (
    TRACKED_AGENTS,
    RobotsFetchError,
    allow_all,
    check_robots_access,
    evaluate_robots_access,
    fetch_robots_txt,
    robots_url_for,
)

URL = "https://example.com/blog/post?page=2"

BLOCK_OAI = """
User-agent: OAI-SearchBot
Disallow: /

User-agent: *
Allow: /
"""


class TestEvaluateRobotsAccess:
    """Tests for evaluate_robots_access."""

    def test_every_tracked_agent_reported(self) -> None:
        access = evaluate_robots_access(BLOCK_OAI, URL)
        assert set(access.agents) == set(TRACKED_AGENTS)

    def test_blocked_agent(self) -> None:
        access = evaluate_robots_access(BLOCK_OAI, URL)
        assert access.is_allowed("OAI-SearchBot") is False
        assert access.rule_for("OAI-SearchBot") == "Disallow: /"
        assert access.is_allowed("GPTBot") is True
        assert access.blocked_agents == ["OAI-SearchBot"]
        assert access.found is True

    def test_path_includes_query(self) -> None:
        access = evaluate_robots_access("User-agent: *\nDisallow: /blog/post?page=", URL)
        assert access.path == "/blog/post?page=2"
        assert access.is_allowed("Googlebot") is False

    def test_missing_file_allows_all(self) -> None:
        access = evaluate_robots_access(None, URL)
        assert access.found is False
        assert access.blocked_agents == []
        assert all(a.allowed for a in access.agents.values())

    def test_unknown_agent_allowed(self) -> None:
        access = evaluate_robots_access(BLOCK_OAI, URL)
        assert access.is_allowed("SomeOtherBot") is True

    def test_global_deny_flag(self) -> None:
        access = evaluate_robots_access("User-agent: *\nDisallow: /", URL)
        assert access.global_deny is True
        assert len(access.blocked_agents) == len(TRACKED_AGENTS)

    def test_to_dict(self) -> None:
        data = evaluate_robots_access(BLOCK_OAI, URL).to_dict()
        assert data["robots_url"] == "https://example.com/robots.txt"
        assert data["agents"]["OAI-SearchBot"]["owner"] == "OpenAI"
        assert data["blocked_agents"] == ["OAI-SearchBot"]


def test_robots_url_for() -> None:
    assert robots_url_for("https://example.com/a/b?c=1") == "https://example.com/robots.txt"
    assert robots_url_for("http://example.com:8080/x") == "http://example.com:8080/robots.txt"


def test_allow_all_records_error() -> None:
    access = allow_all(URL, fetch_error="timeout")
    assert access.fetch_error == "timeout"
    assert access.blocked_agents == []


class TestCheckRobotsAccess:
    """Tests for the fail-open fetch wrapper."""

    @pytest.mark.asyncio
    async def test_uses_fetched_content(self) -> None:
        requested = []

        async def fetch(robots_url: str, timeout: float) -> str | None:
            requested.append(robots_url)
            return BLOCK_OAI

        access = await check_robots_access(URL, timeout=1.0, fetch_text=fetch)

        assert requested == ["https://example.com/robots.txt"]
        assert access.is_allowed("OAI-SearchBot") is False

    @pytest.mark.asyncio
    async def test_not_found_allows_all(self) -> None:
        async def fetch(robots_url: str, timeout: float) -> str | None:
            return None

        access = await check_robots_access(URL, fetch_text=fetch)
        assert access.found is False
        assert access.blocked_agents == []
        assert access.fetch_error is None

    @pytest.mark.asyncio
    async def test_timeout_fails_open(self) -> None:
        async def fetch(robots_url: str, timeout: float) -> str | None:
            await asyncio.sleep(5)
            return "User-agent: *\nDisallow: /"

        access = await check_robots_access(URL, timeout=0.01, fetch_text=fetch)
        assert access.fetch_error == "timeout"
        assert access.blocked_agents == []

    @pytest.mark.asyncio
    async def test_error_fails_open(self) -> None:
        async def fetch(robots_url: str, timeout: float) -> str | None:
            raise ConnectionError("connection refused")

        access = await check_robots_access(URL, fetch_text=fetch)
        assert access.fetch_error == "connection refused"
        assert all(a.allowed for a in access.agents.values())


def robots_fetcher(status_code: int, body: str = ""):
    """fetch_text backed by a MockTransport answering every request with ``status_code``."""
    transport = httpx.MockTransport(lambda request: httpx.Response(status_code, text=body))
    return partial(fetch_robots_txt, transport=transport)


class TestFetchRobotsTxt:
    """Tests for robots.txt status handling over HTTP."""

    @pytest.mark.asyncio
    async def test_ok_returns_body(self) -> None:
        fetch = robots_fetcher(200, BLOCK_OAI)
        assert await fetch("https://example.com/robots.txt", 1.0) == BLOCK_OAI

    @pytest.mark.asyncio
    async def test_not_found_returns_none(self) -> None:
        fetch = robots_fetcher(404)
        assert await fetch("https://example.com/robots.txt", 1.0) is None

    @pytest.mark.asyncio
    async def test_server_error_raises(self) -> None:
        fetch = robots_fetcher(503)
        with pytest.raises(RobotsFetchError) as exc_info:
            await fetch("https://example.com/robots.txt", 1.0)
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [403, 500, 503])
    async def test_non_200_recorded_as_fetch_error(self, status_code: int) -> None:
        access = await check_robots_access(URL, fetch_text=robots_fetcher(status_code))

        assert access.found is False
        assert access.fetch_error == f"HTTP {status_code}"
        assert access.blocked_agents == []

    @pytest.mark.asyncio
    async def test_transport_error_recorded(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        fetch = partial(fetch_robots_txt, transport=httpx.MockTransport(refuse))
        access = await check_robots_access(URL, fetch_text=fetch)

        assert access.fetch_error == "connection refused"
        assert access.found is False
