"""Page acquisition: rendered page and robots.txt, fetched concurrently."""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from functools import partial
from urllib.parse import urlparse

import structlog

from analyzer.crawler.render import (
    PageRenderer,
    RedirectHop,
    Renderer,
    RendererConfig,
    fetch_rendered_page,
)
from analyzer.crawler.robots_ai import (
    RobotsAccess,
    TextFetcher,
    evaluate_robots_access,
    fetch_robots_txt,
    load_robots_txt,
    robots_url_for,
)
from api.config import Settings, get_settings
from api.exceptions import AcquisitionError

logger = structlog.get_logger(__name__)


@dataclass
class AcquiredPage:
    """Raw acquisition output handed to extraction."""

    url: str
    final_url: str
    status_code: int
    load_time_ms: int
    markup: str
    headers: dict[str, str] = field(default_factory=dict)
    redirects: list[RedirectHop] = field(default_factory=list)
    robots: RobotsAccess | None = None

    def to_dict(self) -> dict:
        return {
            "status_code": self.status_code,
            "load_time_ms": self.load_time_ms,
            "redirects": [hop.to_dict() for hop in self.redirects],
            "final_url": self.final_url,
        }


def validate_url(url: str) -> str:
    """Return ``url`` stripped, or raise if it is not an absolute http(s) URL."""
    candidate = url.strip()
    parsed = urlparse(candidate)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise AcquisitionError(url, "invalid_url", f"Not an absolute http(s) URL: {url!r}")
    return candidate


class PageAcquirer:
    """Fetches a rendered page and its crawl permissions."""

    def __init__(
        self,
        renderer: Renderer | None = None,
        fetch_text: TextFetcher | None = None,
        settings: Settings | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.settings = settings or get_settings()
        self.renderer = renderer
        self.fetch_text = fetch_text or partial(
            fetch_robots_txt, user_agent=self.settings.robots_user_agent
        )
        self._sleep = sleep

    def _renderer_config(self) -> RendererConfig:
        return RendererConfig(
            timeout_ms=self.settings.render_timeout_ms,
            viewport_width=self.settings.render_viewport_width,
            viewport_height=self.settings.render_viewport_height,
            user_agent=self.settings.render_user_agent,
        )

    async def acquire(self, url: str) -> AcquiredPage:
        """
        Acquire ``url``.

        The robots.txt check runs as a separate task bounded by its own
        timeout and never fails. If the page fetch fails the robots task is
        cancelled and the AcquisitionError propagates. Rules are evaluated
        for the final URL; a redirect to another origin fetches that
        origin's robots.txt instead.

        Raises:
            AcquisitionError: invalid URL, timeout, redirect loop or network failure
        """
        url = validate_url(url)
        logger.info("acquisition_started", url=url)

        robots_url = robots_url_for(url)
        robots_task = asyncio.create_task(self._load_robots(robots_url))

        try:
            if self.renderer is not None:
                rendered = await self._render(url, self.renderer)
            else:
                async with PageRenderer(self._renderer_config()) as renderer:
                    rendered = await self._render(url, renderer)
        except BaseException:
            robots_task.cancel()
            raise

        # Crawl rules apply to the URL the content was served from
        final_url = rendered.final_url or url
        final_robots_url = robots_url_for(final_url)
        if final_robots_url != robots_url:
            robots_task.cancel()
            logger.info("robots_origin_changed", url=url, final_url=final_url)
            content, fetch_error = await self._load_robots(final_robots_url)
        else:
            content, fetch_error = await robots_task
        robots = evaluate_robots_access(content, final_url, fetch_error=fetch_error)

        logger.info(
            "acquisition_complete",
            url=url,
            final_url=rendered.final_url,
            status=rendered.status_code,
            load_time_ms=rendered.load_time_ms,
            redirects=len(rendered.redirects),
            robots_found=robots.found,
        )

        return AcquiredPage(
            url=url,
            final_url=final_url,
            status_code=rendered.status_code,
            load_time_ms=rendered.load_time_ms,
            markup=rendered.markup,
            headers={k.lower(): v for k, v in rendered.headers.items()},
            redirects=list(rendered.redirects),
            robots=robots,
        )

    async def _load_robots(self, robots_url: str) -> tuple[str | None, str | None]:
        return await load_robots_txt(
            robots_url,
            timeout=self.settings.robots_timeout_seconds,
            fetch_text=self.fetch_text,
        )

    async def _render(self, url: str, renderer: Renderer):
        return await fetch_rendered_page(
            url,
            renderer,
            timeout_ms=self.settings.render_timeout_ms,
            max_attempts=self.settings.render_max_attempts,
            retry_delay=self.settings.render_retry_delay_seconds,
            sleep=self._sleep,
        )
