"""Canned acquisition results for pipeline and API tests."""

from analyzer.crawler.acquire import AcquiredPage
from analyzer.crawler.render import RedirectHop
from analyzer.crawler.robots_ai import evaluate_robots_access
from tests.fixtures.pages import ARTICLE_HTML


class FakeAcquirer:
    """Returns a canned page, or raises the configured error."""

    def __init__(self, markup: str = ARTICLE_HTML, error: Exception | None = None):
        self.markup = markup
        self.error = error
        self.calls: list[str] = []

    async def acquire(self, url: str) -> AcquiredPage:
        self.calls.append(url)
        if self.error:
            raise self.error
        return AcquiredPage(
            url=url,
            final_url=url,
            status_code=200,
            load_time_ms=640,
            markup=self.markup,
            headers={"content-type": "text/html"},
            redirects=[RedirectHop(from_url=url.replace("https", "http"), to_url=url, status=301)],
            robots=evaluate_robots_access("User-agent: *\nAllow: /", url),
        )
