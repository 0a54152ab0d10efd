"""Test fixtures: sample pages, PageData builders and a fake acquirer."""

from tests.fixtures.acquire import FakeAcquirer
from tests.fixtures.pages import (
    ARTICLE_HTML,
    ARTICLE_URL,
    BARE_HTML,
    PRODUCT_HTML,
    PRODUCT_URL,
    article_page,
    make_page,
    product_page,
)

__all__ = [
    "ARTICLE_HTML",
    "ARTICLE_URL",
    "BARE_HTML",
    "PRODUCT_HTML",
    "PRODUCT_URL",
    "FakeAcquirer",
    "article_page",
    "make_page",
    "product_page",
]
