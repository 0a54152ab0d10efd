"""Narrative text extraction.

Non-narrative regions (scripts, navigation, page chrome) are removed before
word counting and pattern analysis so they do not inflate signal density.
"""

import re

from bs4 import BeautifulSoup, Comment

# Tags removed including their content
REMOVE_TAGS = frozenset(
    [
        "script",
        "style",
        "noscript",
        "template",
        "svg",
        "canvas",
        "iframe",
        "object",
        "embed",
    ]
)

# Page chrome that is not part of the narrative
BOILERPLATE_TAGS = frozenset(["nav", "footer"])

# Chrome only at page level; inside an article they carry bylines and notes
PAGE_LEVEL_TAGS = frozenset(["header", "aside"])
CONTENT_CONTAINERS = ("article", "main")

WHITESPACE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    return WHITESPACE.sub(" ", text).strip()


def count_words(text: str) -> int:
    """Count whitespace-separated words."""
    return len(text.split())


def narrative_soup(markup: str) -> BeautifulSoup:
    """Parse ``markup`` and strip everything outside the narrative."""
    soup = BeautifulSoup(markup, "html.parser")

    for tag in soup.find_all(list(REMOVE_TAGS | BOILERPLATE_TAGS)):
        tag.decompose()

    page_chrome = [
        tag
        for tag in soup.find_all(list(PAGE_LEVEL_TAGS))
        if tag.find_parent(CONTENT_CONTAINERS) is None
    ]
    for tag in page_chrome:
        tag.decompose()

    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    return soup


def extract_narrative_text(soup: BeautifulSoup) -> str:
    """Visible narrative text of an already stripped soup, whitespace collapsed."""
    root = soup.body or soup
    return normalize_whitespace(root.get_text(separator=" "))
