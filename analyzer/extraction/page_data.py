"""The canonical PageData record and the extraction entry point.

Extraction is a pure function of the rendered markup and the acquisition
facts: no network access, and missing elements become empty values.
"""

from dataclasses import dataclass, field
from urllib.parse import urlparse

import structlog
from bs4 import BeautifulSoup

from analyzer.crawler.render import RedirectHop
from analyzer.crawler.robots_ai import RobotsAccess, allow_all
from analyzer.extraction.cleaner import count_words, extract_narrative_text, narrative_soup
from analyzer.extraction.commerce import (
    Breadcrumb,
    Policies,
    ProductData,
    extract_breadcrumbs,
    extract_policies,
    extract_product,
)
from analyzer.extraction.content import (
    FaqEntry,
    Headings,
    ListBlock,
    SemanticCounts,
    TableBlock,
    count_semantic_elements,
    extract_faq,
    extract_headings,
    extract_lists,
    extract_paragraphs,
    extract_tables,
)
from analyzer.extraction.media import ImageInfo, ImageStats, LinkSet, extract_images, extract_links
from analyzer.extraction.metadata import (
    PageMetadata,
    RobotsDirectives,
    SocialTags,
    extract_metadata,
    extract_robots_directives,
    extract_social_tags,
)
from analyzer.extraction.structured_data import (
    StructuredDataObject,
    extract_structured_data,
    find_objects,
)
from api.exceptions import ExtractionWarning

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PageData:
    """Immutable snapshot of one analyzed page."""

    # Identity
    url: str
    final_url: str = ""
    status_code: int = 200
    load_time_ms: int = 0
    redirects: tuple[RedirectHop, ...] = ()

    # Metadata
    metadata: PageMetadata = field(default_factory=PageMetadata)
    robots: RobotsDirectives = field(default_factory=RobotsDirectives)
    social: SocialTags = field(default_factory=SocialTags)

    # Content
    headings: Headings = field(default_factory=Headings)
    text: str = ""
    paragraphs: tuple[str, ...] = ()
    lists: tuple[ListBlock, ...] = ()
    tables: tuple[TableBlock, ...] = ()
    faq: tuple[FaqEntry, ...] = ()
    word_count: int = 0
    semantic: SemanticCounts = field(default_factory=SemanticCounts)

    # Media and links
    images: tuple[ImageInfo, ...] = ()
    image_stats: ImageStats = field(default_factory=ImageStats)
    links: LinkSet = field(default_factory=LinkSet)

    # Structured data
    structured_data: tuple[StructuredDataObject, ...] = ()
    schema_types: tuple[str, ...] = ()

    # Commerce and trust
    product: ProductData = field(default_factory=ProductData)
    policies: Policies = field(default_factory=Policies)
    breadcrumbs: tuple[Breadcrumb, ...] = ()

    # Technical
    script_count: int = 0
    stylesheet_count: int = 0

    robots_access: RobotsAccess = field(default_factory=RobotsAccess)
    markup: str = field(default="", repr=False)
    extraction_warnings: tuple[str, ...] = ()

    @property
    def is_https(self) -> bool:
        return urlparse(self.final_url or self.url).scheme == "https"

    @property
    def path(self) -> str:
        return urlparse(self.final_url or self.url).path or "/"

    @property
    def list_item_count(self) -> int:
        return sum(len(block.items) for block in self.lists)

    def has_schema(self, *names: str) -> bool:
        """True when any declared schema type equals one of ``names`` (case-insensitive)."""
        return bool(find_objects(self.structured_data, *names))

    def to_dict(self, include_markup: bool = False) -> dict:
        data = {
            "url": self.url,
            "final_url": self.final_url,
            "status_code": self.status_code,
            "load_time_ms": self.load_time_ms,
            "redirects": [hop.to_dict() for hop in self.redirects],
            "metadata": self.metadata.to_dict(),
            "robots": self.robots.to_dict(),
            "social": self.social.to_dict(),
            "headings": self.headings.to_dict(),
            "paragraph_count": len(self.paragraphs),
            "lists": [block.to_dict() for block in self.lists],
            "tables": [table.to_dict() for table in self.tables],
            "faq": [entry.to_dict() for entry in self.faq],
            "word_count": self.word_count,
            "semantic": self.semantic.to_dict(),
            "images": [image.to_dict() for image in self.images],
            "image_stats": self.image_stats.to_dict(),
            "links": self.links.to_dict(),
            "structured_data": [obj.to_dict() for obj in self.structured_data],
            "schema_types": list(self.schema_types),
            "product": self.product.to_dict(),
            "policies": self.policies.to_dict(),
            "breadcrumbs": [crumb.to_dict() for crumb in self.breadcrumbs],
            "script_count": self.script_count,
            "stylesheet_count": self.stylesheet_count,
            "robots_access": self.robots_access.to_dict(),
            "extraction_warnings": list(self.extraction_warnings),
        }
        if include_markup:
            data["markup"] = self.markup
        return data


def extract_page_data(
    markup: str,
    url: str,
    *,
    final_url: str | None = None,
    status_code: int = 200,
    load_time_ms: int = 0,
    redirects: list[RedirectHop] | tuple[RedirectHop, ...] = (),
    headers: dict[str, str] | None = None,
    robots_access: RobotsAccess | None = None,
) -> PageData:
    """
    Build a PageData record from rendered markup.

    Args:
        markup: Rendered HTML
        url: Requested URL
        final_url: URL after redirects (defaults to ``url``)
        status_code: Final HTTP status
        load_time_ms: Navigation time
        redirects: Redirect chain
        headers: Final response headers (lower-case keys)
        robots_access: robots.txt verdicts; allow-all when omitted

    Returns:
        PageData; malformed JSON-LD and unparsable dates are logged and skipped
    """
    final_url = final_url or url
    headers = {k.lower(): v for k, v in (headers or {}).items()}
    warnings: list[ExtractionWarning] = []

    soup = BeautifulSoup(markup, "html.parser")
    narrative = narrative_soup(markup)
    text = extract_narrative_text(narrative)

    structured_data, schema_types, schema_warnings = extract_structured_data(soup)
    warnings.extend(schema_warnings)

    metadata = extract_metadata(soup, final_url, headers, structured_data, warnings)
    images, image_stats = extract_images(soup, final_url)

    for warning in warnings:
        logger.warning(
            "extraction_warning",
            url=url,
            field=warning.field,
            message=warning.message,
        )

    page = PageData(
        url=url,
        final_url=final_url,
        status_code=status_code,
        load_time_ms=load_time_ms,
        redirects=tuple(redirects),
        metadata=metadata,
        robots=extract_robots_directives(soup, headers),
        social=extract_social_tags(soup),
        headings=extract_headings(soup),
        text=text,
        paragraphs=tuple(extract_paragraphs(narrative)),
        lists=tuple(extract_lists(narrative)),
        tables=tuple(extract_tables(narrative)),
        faq=tuple(extract_faq(soup, structured_data)),
        word_count=count_words(text),
        semantic=count_semantic_elements(soup),
        images=tuple(images),
        image_stats=image_stats,
        links=extract_links(soup, final_url),
        structured_data=tuple(structured_data),
        schema_types=tuple(schema_types),
        product=extract_product(soup, structured_data),
        policies=extract_policies(soup, text),
        breadcrumbs=tuple(extract_breadcrumbs(soup, final_url, structured_data)),
        script_count=len(soup.find_all("script", src=True)),
        stylesheet_count=len(soup.find_all("link", rel="stylesheet")),
        robots_access=robots_access or allow_all(final_url),
        markup=markup,
        extraction_warnings=tuple(w.message for w in warnings),
    )

    logger.debug(
        "page_extracted",
        url=url,
        word_count=page.word_count,
        schema_types=list(page.schema_types),
        images=image_stats.total,
        warnings=len(warnings),
    )
    return page
