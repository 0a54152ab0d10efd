"""Page metadata, robots directives and social tags."""

import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from analyzer.extraction.structured_data import StructuredDataObject, text_value
from api.exceptions import ExtractionWarning

MAX_SNIPPET = re.compile(r"max-snippet\s*:\s*(-?\d+)", re.I)

DATE_FORMATS = (
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%d",
    "%B %d, %Y",
    "%B %d %Y",
    "%b %d, %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%Y/%m/%d",
)


@dataclass(frozen=True)
class HreflangLink:
    lang: str
    href: str


@dataclass(frozen=True)
class PageMetadata:
    """Document-level metadata."""

    title: str = ""
    description: str = ""
    keywords: tuple[str, ...] = ()
    canonical: str = ""
    viewport: str = ""
    charset: str = ""
    language: str = ""
    author: str = ""
    favicon: str = ""
    date_published: datetime | None = None
    date_modified: datetime | None = None
    hreflang: tuple[HreflangLink, ...] = ()

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "keywords": list(self.keywords),
            "canonical": self.canonical,
            "viewport": self.viewport,
            "charset": self.charset,
            "language": self.language,
            "author": self.author,
            "favicon": self.favicon,
            "date_published": self.date_published.isoformat() if self.date_published else None,
            "date_modified": self.date_modified.isoformat() if self.date_modified else None,
            "hreflang": [{"lang": h.lang, "href": h.href} for h in self.hreflang],
        }


@dataclass(frozen=True)
class RobotsDirectives:
    """Indexing directives from robots meta tags and the X-Robots-Tag header."""

    meta: str = ""
    googlebot: str = ""
    bingbot: str = ""
    header: str = ""
    noindex: bool = False
    nofollow: bool = False
    nosnippet: bool = False
    max_snippet: int | None = None  # -1 means unlimited

    @property
    def snippets_allowed(self) -> bool:
        return not self.nosnippet and self.max_snippet != 0

    def to_dict(self) -> dict:
        return {
            "meta": self.meta,
            "googlebot": self.googlebot,
            "bingbot": self.bingbot,
            "x_robots_tag": self.header,
            "noindex": self.noindex,
            "nofollow": self.nofollow,
            "nosnippet": self.nosnippet,
            "max_snippet": self.max_snippet,
        }


@dataclass(frozen=True)
class SocialTags:
    open_graph: dict[str, str] = field(default_factory=dict, hash=False)
    twitter: dict[str, str] = field(default_factory=dict, hash=False)

    def to_dict(self) -> dict:
        return {"open_graph": dict(self.open_graph), "twitter": dict(self.twitter)}


def get_meta_content(
    soup: BeautifulSoup, name: str | None = None, property: str | None = None
) -> str:
    """Get content from a meta tag by name or property. Empty string when absent."""
    if name:
        tag = soup.find("meta", attrs={"name": re.compile(f"^{re.escape(name)}$", re.I)})
    elif property:
        tag = soup.find("meta", attrs={"property": property})
    else:
        return ""

    if tag and tag.get("content"):  # type: ignore[union-attr]
        content = tag["content"]  # type: ignore[index]
        return content.strip() if isinstance(content, str) else str(content).strip()
    return ""


def parse_date(value: str, field_name: str = "date") -> datetime:
    """
    Parse a metadata date into an aware UTC datetime.

    Raises:
        ExtractionWarning: the value matches no known format
    """
    clean = value.strip()
    parsed: datetime | None = None

    try:
        parsed = datetime.fromisoformat(clean.replace("Z", "+00:00"))
    except ValueError:
        for fmt in DATE_FORMATS:
            try:
                parsed = datetime.strptime(clean, fmt)
                break
            except ValueError:
                continue

    if parsed is None:
        try:
            parsed = parsedate_to_datetime(clean)  # HTTP Last-Modified
        except (TypeError, ValueError, IndexError):
            parsed = None

    if parsed is None:
        raise ExtractionWarning(f"Unparsable {field_name}: {value!r}", field=field_name)

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _first_schema_value(objects: list[StructuredDataObject], key: str) -> str:
    for obj in objects:
        value = text_value(obj.get(key))
        if value:
            return value
    return ""


def _resolve_date(
    candidates: list[str], field_name: str, warnings: list[ExtractionWarning]
) -> datetime | None:
    """First candidate that parses; failures are recorded and skipped."""
    for raw in candidates:
        if not raw:
            continue
        try:
            return parse_date(raw, field_name)
        except ExtractionWarning as warning:
            warnings.append(warning)
    return None


def extract_metadata(
    soup: BeautifulSoup,
    url: str,
    headers: dict[str, str],
    structured_data: list[StructuredDataObject],
    warnings: list[ExtractionWarning],
) -> PageMetadata:
    """
    Extract document metadata.

    Unparsable dates are appended to ``warnings`` and the next source is tried.
    """
    title_tag = soup.find("title")
    title = title_tag.get_text(strip=True) if title_tag else ""
    title = title or get_meta_content(soup, property="og:title")

    description = get_meta_content(soup, name="description") or get_meta_content(
        soup, property="og:description"
    )

    keywords_str = get_meta_content(soup, name="keywords")
    keywords = tuple(k.strip() for k in keywords_str.split(",") if k.strip())[:20]

    canonical = ""
    canonical_tag = soup.find("link", rel="canonical")
    if canonical_tag and canonical_tag.get("href"):
        canonical = urljoin(url, canonical_tag["href"].strip())

    charset = ""
    charset_tag = soup.find("meta", charset=True)
    if charset_tag:
        charset = str(charset_tag.get("charset", "")).strip()

    html_tag = soup.find("html")
    language = str(html_tag.get("lang", "")).strip() if html_tag else ""

    favicon = ""
    icon_tag = soup.find("link", rel=lambda rel: rel and "icon" in rel)
    if icon_tag and icon_tag.get("href"):
        favicon = urljoin(url, icon_tag["href"])

    time_tag = soup.find("time", datetime=True)
    date_published = _resolve_date(
        [
            get_meta_content(soup, property="article:published_time"),
            _first_schema_value(structured_data, "datePublished"),
            str(time_tag["datetime"]) if time_tag else "",
        ],
        "date_published",
        warnings,
    )
    date_modified = _resolve_date(
        [
            get_meta_content(soup, property="article:modified_time"),
            get_meta_content(soup, name="last-modified"),
            _first_schema_value(structured_data, "dateModified"),
            headers.get("last-modified", ""),
        ],
        "date_modified",
        warnings,
    )

    hreflang = tuple(
        HreflangLink(lang=str(tag["hreflang"]), href=urljoin(url, str(tag.get("href", ""))))
        for tag in soup.find_all("link", rel="alternate", hreflang=True)
    )

    return PageMetadata(
        title=title,
        description=description,
        keywords=keywords,
        canonical=canonical,
        viewport=get_meta_content(soup, name="viewport"),
        charset=charset,
        language=language,
        author=get_meta_content(soup, name="author"),
        favicon=favicon,
        date_published=date_published,
        date_modified=date_modified,
        hreflang=hreflang,
    )


def extract_robots_directives(soup: BeautifulSoup, headers: dict[str, str]) -> RobotsDirectives:
    """Combine robots, googlebot and bingbot meta tags with X-Robots-Tag."""
    meta = get_meta_content(soup, name="robots")
    googlebot = get_meta_content(soup, name="googlebot")
    bingbot = get_meta_content(soup, name="bingbot")
    header = headers.get("x-robots-tag", "")

    combined = " ".join([meta, googlebot, bingbot, header]).lower()
    snippet = MAX_SNIPPET.search(combined)

    return RobotsDirectives(
        meta=meta,
        googlebot=googlebot,
        bingbot=bingbot,
        header=header,
        noindex="noindex" in combined or "none" in combined.replace(",", " ").split(),
        nofollow="nofollow" in combined,
        nosnippet="nosnippet" in combined,
        max_snippet=int(snippet.group(1)) if snippet else None,
    )


def extract_social_tags(soup: BeautifulSoup) -> SocialTags:
    """Open Graph (``og:*``) and Twitter card (``twitter:*``) tags."""
    open_graph: dict[str, str] = {}
    twitter: dict[str, str] = {}

    for tag in soup.find_all("meta"):
        key = str(tag.get("property") or tag.get("name") or "")
        content = str(tag.get("content") or "").strip()
        if not content:
            continue
        if key.startswith("og:"):
            open_graph.setdefault(key[3:], content)
        elif key.startswith("twitter:"):
            twitter.setdefault(key[8:], content)

    return SocialTags(open_graph=open_graph, twitter=twitter)
