"""Per-agent crawl access from robots.txt.

Evaluates the page's own path for each tracked search and AI crawler. The
robots.txt fetch fails open: a missing file, a non-200 answer, a timeout or
any transport error means every agent is allowed. Absence of the file must
not be confused with denial.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from urllib.parse import urljoin, urlparse

import httpx
import structlog

from analyzer.crawler.robots import RobotsFile

logger = structlog.get_logger(__name__)

# fetch_text(robots_url, timeout_seconds) -> body or None
TextFetcher = Callable[[str, float], Awaitable[str | None]]

DEFAULT_FETCH_USER_AGENT = "PageLensBot/1.0"

# Agents whose access is reported for every page. Search crawlers feed the
# indexes most answer engines cite from; the rest crawl for AI products directly.
TRACKED_AGENTS: dict[str, dict[str, str]] = {
    "Googlebot": {
        "owner": "Google",
        "purpose": "Google Search index, also used by AI Overviews and Gemini",
        "kind": "search",
    },
    "Bingbot": {
        "owner": "Microsoft",
        "purpose": "Bing index, also used by Copilot and ChatGPT search",
        "kind": "search",
    },
    "OAI-SearchBot": {
        "owner": "OpenAI",
        "purpose": "ChatGPT search results and citations",
        "kind": "ai_search",
    },
    "ChatGPT-User": {
        "owner": "OpenAI",
        "purpose": "Live browsing on behalf of ChatGPT users",
        "kind": "ai_user",
    },
    "GPTBot": {
        "owner": "OpenAI",
        "purpose": "OpenAI model training",
        "kind": "ai_training",
    },
    "Claude-SearchBot": {
        "owner": "Anthropic",
        "purpose": "Claude search results and citations",
        "kind": "ai_search",
    },
    "ClaudeBot": {
        "owner": "Anthropic",
        "purpose": "Anthropic model training",
        "kind": "ai_training",
    },
    "PerplexityBot": {
        "owner": "Perplexity",
        "purpose": "Perplexity answer index",
        "kind": "ai_search",
    },
    "Google-Extended": {
        "owner": "Google",
        "purpose": "Gemini training and grounding opt-out token",
        "kind": "ai_training",
    },
    "CCBot": {
        "owner": "Common Crawl",
        "purpose": "Open web corpus used by many model builders",
        "kind": "ai_training",
    },
}


@dataclass(frozen=True)
class AgentAccess:
    """Access decision for one tracked agent."""

    agent: str
    allowed: bool
    rule: str | None = None
    source: str = "none"

    def to_dict(self) -> dict:
        return {
            "agent": self.agent,
            "allowed": self.allowed,
            "rule": self.rule,
            "source": self.source,
            "owner": TRACKED_AGENTS.get(self.agent, {}).get("owner"),
        }


@dataclass(frozen=True)
class RobotsAccess:
    """robots.txt verdicts for every tracked agent on one page."""

    robots_url: str = ""
    path: str = "/"
    found: bool = False
    fetch_error: str | None = None
    global_deny: bool = False
    sitemaps: tuple[str, ...] = ()
    agents: dict[str, AgentAccess] = field(default_factory=dict)

    def is_allowed(self, agent: str) -> bool:
        """Unknown agents and missing files are allowed."""
        access = self.agents.get(agent)
        return True if access is None else access.allowed

    def rule_for(self, agent: str) -> str | None:
        access = self.agents.get(agent)
        return access.rule if access else None

    @property
    def blocked_agents(self) -> list[str]:
        return [name for name, access in self.agents.items() if not access.allowed]

    def to_dict(self) -> dict:
        return {
            "robots_url": self.robots_url,
            "path": self.path,
            "found": self.found,
            "fetch_error": self.fetch_error,
            "global_deny": self.global_deny,
            "sitemaps": list(self.sitemaps),
            "agents": {name: access.to_dict() for name, access in self.agents.items()},
            "blocked_agents": self.blocked_agents,
        }


def robots_url_for(url: str) -> str:
    """Location of the robots.txt governing ``url``."""
    parsed = urlparse(url)
    return urljoin(f"{parsed.scheme}://{parsed.netloc}", "/robots.txt")


def _path_for(url: str) -> str:
    parsed = urlparse(url)
    path = parsed.path or "/"
    if parsed.query:
        path = f"{path}?{parsed.query}"
    return path


def allow_all(url: str, fetch_error: str | None = None) -> RobotsAccess:
    """Access record used when no rules apply."""
    return evaluate_robots_access(None, url, fetch_error=fetch_error)


def evaluate_robots_access(
    content: str | None,
    url: str,
    agents: list[str] | None = None,
    fetch_error: str | None = None,
) -> RobotsAccess:
    """
    Evaluate robots.txt content for the path of ``url``.

    Args:
        content: robots.txt body, or None when it could not be fetched
        url: The analyzed page URL
        agents: Agent names to evaluate (defaults to TRACKED_AGENTS)
        fetch_error: Reason the fetch failed, recorded for diagnostics

    Returns:
        RobotsAccess with one AgentAccess per agent
    """
    names = agents or list(TRACKED_AGENTS)
    path = _path_for(url)
    robots = RobotsFile.parse(content) if content else RobotsFile()

    decisions = {}
    for name in names:
        decision = robots.decide(name, path)
        decisions[name] = AgentAccess(
            agent=name,
            allowed=decision.allowed,
            rule=decision.rule,
            source=decision.source,
        )

    access = RobotsAccess(
        robots_url=robots_url_for(url),
        path=path,
        found=content is not None,
        fetch_error=fetch_error,
        global_deny=robots.global_deny,
        sitemaps=tuple(robots.sitemaps),
        agents=decisions,
    )

    if access.blocked_agents:
        logger.info(
            "robots_agents_blocked",
            url=url,
            blocked=access.blocked_agents,
            global_deny=access.global_deny,
        )
    return access


class RobotsFetchError(Exception):
    """robots.txt answered with a status that is neither 200 nor 404."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"HTTP {status_code}")


async def fetch_robots_txt(
    robots_url: str,
    timeout: float,
    user_agent: str = DEFAULT_FETCH_USER_AGENT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str | None:
    """
    Fetch robots.txt content. Returns None when the file does not exist.

    Raises:
        RobotsFetchError: any status other than 200 or 404
        httpx.HTTPError: timeout or transport failure
    """
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        response = await client.get(
            robots_url,
            headers={"User-Agent": user_agent},
            follow_redirects=True,
        )

    if response.status_code == 200:
        return response.text
    if response.status_code == 404:
        return None
    raise RobotsFetchError(response.status_code)


async def load_robots_txt(
    robots_url: str,
    timeout: float = 5.0,
    fetch_text: TextFetcher | None = None,
) -> tuple[str | None, str | None]:
    """
    Fetch one robots.txt, returning ``(content, fetch_error)``.

    Never raises. ``content`` is None both for a missing file and for a
    failed fetch; only the latter sets ``fetch_error``.
    """
    fetch = fetch_text or fetch_robots_txt
    try:
        content = await asyncio.wait_for(fetch(robots_url, timeout), timeout=timeout)
    except (TimeoutError, httpx.TimeoutException):
        logger.warning("robots_txt_fetch_timeout", url=robots_url, timeout=timeout)
        return None, "timeout"
    except Exception as e:
        logger.warning("robots_txt_fetch_error", url=robots_url, error=str(e))
        return None, str(e) or type(e).__name__

    if content is None:
        logger.debug("robots_txt_not_found", url=robots_url)
    return content, None


async def check_robots_access(
    url: str,
    timeout: float = 5.0,
    fetch_text: TextFetcher | None = None,
) -> RobotsAccess:
    """
    Fetch robots.txt once and evaluate every tracked agent for ``url``.

    Never raises: any fetch problem yields an allow-all result with
    ``fetch_error`` set.
    """
    content, fetch_error = await load_robots_txt(robots_url_for(url), timeout, fetch_text)
    return evaluate_robots_access(content, url, fetch_error=fetch_error)
