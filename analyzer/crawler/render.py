"""Headless page rendering with Playwright and the navigation retry policy."""

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Protocol

import structlog
from playwright.async_api import Browser, Page, Playwright, Response, async_playwright
from playwright.async_api import TimeoutError as PlaywrightTimeout

from api.exceptions import AcquisitionError

logger = structlog.get_logger(__name__)

# Error message fragments that indicate a transient navigation failure
TRANSIENT_ERROR_MARKERS = (
    "frame was detached",
    "target closed",
    "econnreset",
    "socket hang up",
    "net::err_connection_reset",
    "net::err_connection_closed",
    "net::err_connection_refused",
    "net::err_network_changed",
    "net::err_internet_disconnected",
    "net::err_address_unreachable",
    "net::err_empty_response",
    "net::err_http2_protocol_error",
)

TOO_MANY_REDIRECTS_MARKERS = ("err_too_many_redirects", "too many redirects")

DEFAULT_MAX_REDIRECTS = 10


@dataclass(frozen=True)
class RedirectHop:
    """One 3xx response in the redirect chain."""

    from_url: str
    to_url: str
    status: int

    def to_dict(self) -> dict:
        return {"from": self.from_url, "to": self.to_url, "status": self.status}


@dataclass
class RenderedPage:
    """What the rendering backend returns for one navigation."""

    url: str
    final_url: str
    status_code: int
    markup: str
    headers: dict[str, str] = field(default_factory=dict)
    redirects: list[RedirectHop] = field(default_factory=list)
    load_time_ms: int = 0


class Renderer(Protocol):
    """Rendering backend contract; any raised error is fatal to the analysis."""

    async def render(self, url: str, timeout_ms: int) -> RenderedPage: ...


@dataclass
class RendererConfig:
    """Configuration for the renderer."""

    timeout_ms: int = 30_000
    viewport_width: int = 1920
    viewport_height: int = 1080
    user_agent: str | None = None
    wait_until: str = "networkidle"
    max_redirects: int = DEFAULT_MAX_REDIRECTS


class PageRenderer:
    """Renders pages using a Playwright headless browser."""

    def __init__(self, config: RendererConfig | None = None):
        self.config = config or RendererConfig()
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._lock = asyncio.Lock()

    async def __aenter__(self) -> "PageRenderer":
        """Async context manager entry."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.stop()

    async def start(self) -> None:
        """Start the browser."""
        async with self._lock:
            if self._browser is None:
                self._playwright = await async_playwright().start()
                self._browser = await self._playwright.chromium.launch(headless=True)

    async def stop(self) -> None:
        """Stop the browser."""
        async with self._lock:
            if self._browser:
                await self._browser.close()
                self._browser = None
            if self._playwright:
                await self._playwright.stop()
                self._playwright = None

    async def render(self, url: str, timeout_ms: int | None = None) -> RenderedPage:
        """
        Navigate to ``url`` and return the rendered markup.

        Errors are raised unchanged; ``fetch_rendered_page`` classifies them.
        """
        if not self._browser:
            await self.start()

        redirects: list[RedirectHop] = []

        def record_redirect(response: Response) -> None:
            if 300 <= response.status < 400 and response.request.is_navigation_request():
                location = response.headers.get("location", "")
                redirects.append(
                    RedirectHop(from_url=response.url, to_url=location, status=response.status)
                )

        page: Page | None = None
        try:
            page = await self._browser.new_page(  # type: ignore[union-attr]
                viewport={
                    "width": self.config.viewport_width,
                    "height": self.config.viewport_height,
                },
                user_agent=self.config.user_agent,
            )
            page.on("response", record_redirect)

            start = time.perf_counter()
            response = await page.goto(
                url,
                timeout=timeout_ms or self.config.timeout_ms,
                wait_until=self.config.wait_until,  # type: ignore[arg-type]
            )
            load_time_ms = int((time.perf_counter() - start) * 1000)

            if len(redirects) > self.config.max_redirects:
                raise AcquisitionError(url, "too_many_redirects")

            markup = await page.content()
            return RenderedPage(
                url=url,
                final_url=page.url,
                status_code=response.status if response else 0,
                markup=markup,
                headers=await response.all_headers() if response else {},
                redirects=redirects,
                load_time_ms=load_time_ms,
            )
        finally:
            if page:
                await page.close()


def is_transient_error(error: BaseException) -> bool:
    """Check if a navigation error is worth retrying."""
    if isinstance(error, (ConnectionResetError, ConnectionAbortedError)):
        return True
    message = str(error).lower()
    return any(marker in message for marker in TRANSIENT_ERROR_MARKERS)


def _classify_failure(url: str, error: BaseException) -> AcquisitionError:
    if isinstance(error, AcquisitionError):
        return error
    message = str(error)
    if isinstance(error, (PlaywrightTimeout, TimeoutError)):
        return AcquisitionError(url, "timeout", f"Navigation to {url} timed out")
    if any(marker in message.lower() for marker in TOO_MANY_REDIRECTS_MARKERS):
        return AcquisitionError(url, "too_many_redirects")
    return AcquisitionError(url, "network", f"Could not load {url}: {message}")


async def fetch_rendered_page(
    url: str,
    renderer: Renderer,
    *,
    timeout_ms: int = 30_000,
    max_attempts: int = 3,
    retry_delay: float = 1.0,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> RenderedPage:
    """
    Render ``url``, retrying transient navigation failures.

    Only errors recognized by ``is_transient_error`` are retried, sequentially,
    waiting ``attempt * retry_delay`` seconds between attempts. Anything else
    is raised at once as an AcquisitionError.

    Raises:
        AcquisitionError: navigation failed for good
    """
    last_error: BaseException | None = None

    for attempt in range(1, max_attempts + 1):
        start = time.perf_counter()
        try:
            page = await renderer.render(url, timeout_ms)
        except Exception as e:
            if not is_transient_error(e):
                failure = _classify_failure(url, e)
                logger.warning(
                    "render_failed",
                    url=url,
                    reason=failure.reason,
                    error=str(e),
                    attempt=attempt,
                )
                raise failure from e

            last_error = e
            if attempt < max_attempts:
                delay = retry_delay * attempt
                logger.info(
                    "render_retry",
                    url=url,
                    attempt=attempt,
                    delay=delay,
                    error=str(e),
                )
                await sleep(delay)
            continue

        if not page.load_time_ms:
            page.load_time_ms = int((time.perf_counter() - start) * 1000)
        logger.debug(
            "page_rendered",
            url=url,
            final_url=page.final_url,
            status=page.status_code,
            load_time_ms=page.load_time_ms,
            attempt=attempt,
        )
        return page

    logger.warning("render_retries_exhausted", url=url, attempts=max_attempts)
    raise AcquisitionError(
        url,
        "network",
        f"Could not load {url} after {max_attempts} attempts: {last_error}",
    ) from last_error
