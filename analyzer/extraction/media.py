"""Images and links."""

from dataclasses import dataclass
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from analyzer.extraction.cleaner import normalize_whitespace

SKIPPED_HREF_PREFIXES = ("#", "javascript:", "mailto:", "tel:")
MAX_LINK_TEXT = 100


@dataclass(frozen=True)
class ImageInfo:
    src: str
    alt: str | None = None  # None when the attribute is missing, "" when empty
    title: str = ""
    width: str = ""
    height: str = ""
    loading: str = ""
    srcset: str = ""

    @property
    def has_alt(self) -> bool:
        return bool(self.alt and self.alt.strip())

    @property
    def has_dimensions(self) -> bool:
        return bool(self.width and self.height)

    def to_dict(self) -> dict:
        return {
            "src": self.src,
            "alt": self.alt,
            "title": self.title,
            "width": self.width,
            "height": self.height,
            "loading": self.loading,
            "srcset": self.srcset,
        }


@dataclass(frozen=True)
class ImageStats:
    total: int = 0
    with_alt: int = 0
    without_alt: int = 0
    with_dimensions: int = 0
    lazy_loaded: int = 0
    responsive: int = 0

    @property
    def alt_coverage(self) -> float:
        """Share of images with alt text; 1.0 when there are no images."""
        return self.with_alt / self.total if self.total else 1.0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "with_alt": self.with_alt,
            "without_alt": self.without_alt,
            "with_dimensions": self.with_dimensions,
            "lazy_loaded": self.lazy_loaded,
            "responsive": self.responsive,
        }


@dataclass(frozen=True)
class LinkInfo:
    href: str
    text: str = ""
    rel: tuple[str, ...] = ()

    @property
    def is_nofollow(self) -> bool:
        return "nofollow" in self.rel

    @property
    def is_sponsored(self) -> bool:
        return "sponsored" in self.rel

    @property
    def is_ugc(self) -> bool:
        return "ugc" in self.rel

    def to_dict(self) -> dict:
        return {
            "href": self.href,
            "text": self.text,
            "rel": " ".join(self.rel),
            "is_nofollow": self.is_nofollow,
            "is_sponsored": self.is_sponsored,
            "is_ugc": self.is_ugc,
        }


@dataclass(frozen=True)
class LinkSet:
    internal: tuple[LinkInfo, ...] = ()
    external: tuple[LinkInfo, ...] = ()
    empty_href_count: int = 0

    @property
    def total(self) -> int:
        return len(self.internal) + len(self.external)

    @property
    def external_ratio(self) -> float:
        return len(self.external) / self.total if self.total else 0.0

    @property
    def followed_external(self) -> list[LinkInfo]:
        return [link for link in self.external if not link.is_nofollow and not link.is_sponsored]

    def to_dict(self) -> dict:
        return {
            "internal": [link.to_dict() for link in self.internal],
            "external": [link.to_dict() for link in self.external],
            "empty_href_count": self.empty_href_count,
        }


def _attr(tag, name: str) -> str:
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return str(value).strip()


def extract_images(soup: BeautifulSoup, url: str) -> tuple[list[ImageInfo], ImageStats]:
    images = []
    for tag in soup.find_all("img"):
        src = _attr(tag, "src") or _attr(tag, "data-src")
        images.append(
            ImageInfo(
                src=urljoin(url, src) if src else "",
                alt=tag.get("alt"),
                title=_attr(tag, "title"),
                width=_attr(tag, "width"),
                height=_attr(tag, "height"),
                loading=_attr(tag, "loading").lower(),
                srcset=_attr(tag, "srcset"),
            )
        )

    with_alt = sum(1 for image in images if image.has_alt)
    stats = ImageStats(
        total=len(images),
        with_alt=with_alt,
        without_alt=len(images) - with_alt,
        with_dimensions=sum(1 for image in images if image.has_dimensions),
        lazy_loaded=sum(1 for image in images if image.loading == "lazy"),
        responsive=sum(1 for image in images if image.srcset),
    )
    return images, stats


def _host(netloc: str) -> str:
    host = netloc.lower()
    return host[4:] if host.startswith("www.") else host


def extract_links(soup: BeautifulSoup, url: str) -> LinkSet:
    """Split anchors into internal and external by host (``www.`` ignored)."""
    base_host = _host(urlparse(url).netloc)
    internal: list[LinkInfo] = []
    external: list[LinkInfo] = []
    empty = 0

    for tag in soup.find_all("a"):
        href = _attr(tag, "href")
        if not href:
            empty += 1
            continue
        if href.lower().startswith(SKIPPED_HREF_PREFIXES):
            continue

        absolute = urljoin(url, href)
        parsed = urlparse(absolute)
        if parsed.scheme not in ("http", "https"):
            continue

        rel = tag.get("rel") or []
        if isinstance(rel, str):
            rel = rel.split()
        link = LinkInfo(
            href=absolute,
            text=normalize_whitespace(tag.get_text(" "))[:MAX_LINK_TEXT],
            rel=tuple(value.lower() for value in rel),
        )
        if _host(parsed.netloc) == base_host:
            internal.append(link)
        else:
            external.append(link)

    return LinkSet(internal=tuple(internal), external=tuple(external), empty_href_count=empty)
