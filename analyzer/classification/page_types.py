"""Page type registry.

Each page type is a static set of weighted signals. The classifier sums the
weights of matching signals and compares the total with the type's threshold.
"""

from dataclasses import dataclass
from enum import StrEnum

# Candidates below this raw score are discarded
MIN_CONFIDENCE = 30


class PageType(StrEnum):
    """Page types with their own scoring profile."""

    PRODUCT = "product"
    CATEGORY = "category"
    ARTICLE = "article"
    NEWS = "news"
    DOCUMENTATION = "documentation"
    SAAS = "saas"
    LOCAL_BUSINESS = "local_business"
    PORTFOLIO = "portfolio"
    COMPARISON = "comparison"
    DIRECTORY = "directory"
    LANDING = "landing"
    HOMEPAGE = "homepage"
    OTHER = "other"


class SignalKind(StrEnum):
    SCHEMA = "schema"  # declared structured-data type
    SELECTOR = "selector"  # CSS selector match count
    PATTERN = "pattern"  # regex over narrative text or raw markup
    URL = "url"  # regex over the URL path


@dataclass(frozen=True)
class Signal:
    """One detection rule."""

    kind: SignalKind
    matcher: str
    weight: int
    min_count: int = 1
    target: str = "text"  # PATTERN only: "text" or "markup"

    @property
    def label(self) -> str:
        return f"{self.kind}:{self.matcher}"


@dataclass(frozen=True)
class PageTypeDefinition:
    name: str
    description: str
    threshold: int
    priority: int
    signals: tuple[Signal, ...]


def _schema(name: str, weight: int) -> Signal:
    return Signal(SignalKind.SCHEMA, name, weight)


def _selector(selector: str, weight: int, min_count: int = 1) -> Signal:
    return Signal(SignalKind.SELECTOR, selector, weight, min_count=min_count)


def _text(pattern: str, weight: int) -> Signal:
    return Signal(SignalKind.PATTERN, pattern, weight)


def _markup(pattern: str, weight: int) -> Signal:
    return Signal(SignalKind.PATTERN, pattern, weight, target="markup")


def _url(pattern: str, weight: int) -> Signal:
    return Signal(SignalKind.URL, pattern, weight)


PAGE_TYPES: dict[PageType, PageTypeDefinition] = {
    PageType.PRODUCT: PageTypeDefinition(
        name="Product Page",
        description="Single product with price and purchase options",
        threshold=35,
        priority=10,
        signals=(
            _schema("Product", 30),
            _markup(r'"@type"\s*:\s*"Product"', 25),
            _selector('[class*="add-to-cart"], [id*="add-to-cart"], button[name*="add"]', 25),
            _selector('[class*="product-price"], [data-price], [itemprop="price"]', 15),
            _selector('[class*="buy-now"], [class*="checkout"], [class*="purchase"]', 15),
            _selector('[class*="product-image"], [class*="product-gallery"]', 10),
            _text(r"add to cart|buy now|in stock|out of stock", 15),
            _text(r"\b(?:sku|gtin|upc|ean|mpn)\b", 10),
            _url(r"/product/|/p/|/item/|/dp/", 15),
        ),
    ),
    PageType.CATEGORY: PageTypeDefinition(
        name="Category / Collection",
        description="Listing of several products with filters",
        threshold=40,
        priority=8,
        signals=(
            _selector(
                '[class*="product-list"], [class*="products-grid"], [class*="product-grid"]', 25
            ),
            _selector('[class*="product-card"], [class*="product-item"]', 20, min_count=3),
            _selector('[class*="filter"], [class*="facet"], [class*="refinement"]', 20),
            _selector('[class*="sort-by"], [class*="sorting"]', 15),
            _selector('.pagination, [class*="load-more"]', 10),
            _url(r"/category/|/collection/|/collections/|/c/|/shop/", 20),
            _text(r"showing \d+ (?:of|-)|\d+ products?|\d+ results?", 15),
        ),
    ),
    PageType.ARTICLE: PageTypeDefinition(
        name="Article / Blog Post",
        description="Long-form editorial content",
        threshold=35,
        priority=7,
        signals=(
            _schema("Article", 30),
            _schema("BlogPosting", 30),
            _schema("NewsArticle", 30),
            _selector("article", 20),
            _selector('time[datetime], [class*="publish-date"], [class*="post-date"]', 15),
            _selector('[class*="author"], [rel="author"], [class*="byline"]', 15),
            _selector('[class*="post"], [class*="blog"], [class*="entry"]', 10),
            _url(r"/blog/|/post/|/article/|/news/", 15),
        ),
    ),
    PageType.NEWS: PageTypeDefinition(
        name="News Article",
        description="Time-sensitive reporting",
        threshold=45,
        priority=9,
        signals=(
            _schema("NewsArticle", 40),
            _selector('[class*="byline"], .author-info', 15),
            _selector('time[datetime], [class*="publish"]', 20),
            _selector('[class*="breaking"], [class*="latest-news"]', 15),
            _text(r"breaking|just in|updated|live updates", 15),
            _url(r"/news/|/story/|/breaking/", 15),
        ),
    ),
    PageType.DOCUMENTATION: PageTypeDefinition(
        name="Documentation",
        description="Technical reference or guide",
        threshold=45,
        priority=8,
        signals=(
            _selector("pre code, .code-block, .highlight", 25),
            _selector('.table-of-contents, .toc, nav[class*="toc"]', 20),
            _selector('[class*="sidebar"] nav, .docs-sidebar', 15),
            _selector('.copy-button, [class*="code-copy"]', 10),
            _text(r"installation|usage|api reference|getting started", 15),
            _text(r"v\d+\.\d+|version \d+|changelog", 10),
            _url(r"/docs/|/documentation/|/api/|/reference/", 20),
        ),
    ),
    PageType.SAAS: PageTypeDefinition(
        name="SaaS / Software",
        description="Software product marketing with plans and pricing",
        threshold=50,
        priority=8,
        signals=(
            _selector('[class*="pricing"], .pricing-table, .price-card', 30),
            _selector('[class*="feature-list"], [class*="features"]', 15),
            _selector('[class*="cta"], .signup-button, [class*="get-started"]', 20),
            _selector('[class*="demo"], [class*="trial"]', 15),
            _text(r"free trial|get started|sign up|start free", 15),
            _text(r"per month|/mo\b|annually|billed yearly", 20),
            _text(r"enterprise|team|pro plan|basic plan", 10),
        ),
    ),
    PageType.LOCAL_BUSINESS: PageTypeDefinition(
        name="Local Business",
        description="Physical business with location and hours",
        threshold=45,
        priority=8,
        signals=(
            _schema("LocalBusiness", 40),
            _schema("Restaurant", 40),
            _schema("Store", 40),
            _selector('[class*="hours"], .opening-hours, [class*="business-hours"]', 20),
            _selector('[class*="location"], .address, [class*="directions"]', 15),
            _selector('.google-map, [class*="map"], iframe[src*="maps"]', 15),
            _text(r"call us|visit us|directions|open today", 10),
            _text(r"\(\d{3}\)\s*\d{3}-\d{4}|\d{3}-\d{3}-\d{4}", 10),
        ),
    ),
    PageType.PORTFOLIO: PageTypeDefinition(
        name="Portfolio / Case Study",
        description="Showcase of work and client results",
        threshold=45,
        priority=7,
        signals=(
            _selector('.case-study, [class*="project"], [class*="portfolio"]', 25),
            _selector('.work-sample, [class*="work-item"]', 25),
            _selector('[class*="testimonial"], [class*="client-quote"]', 15),
            _selector('.client-logo, [class*="clients"], [class*="trusted-by"]', 15),
            _text(r"case study|our work|projects|portfolio", 15),
            _url(r"/work/|/portfolio/|/projects/|/case-study", 15),
        ),
    ),
    PageType.COMPARISON: PageTypeDefinition(
        name="Comparison / Review",
        description="Side-by-side evaluation of options",
        threshold=45,
        priority=9,
        signals=(
            _selector('.comparison-table, [class*="versus"], [class*="compare"]', 30),
            _selector('.pros-cons, [class*="advantages"], [class*="pros"]', 20),
            _selector('[class*="rating"], .star-rating', 15),
            _text(r"\bvs\.?\s|versus|compared to|alternative", 20),
            _text(r"\bpros\b|\bcons\b|advantages|disadvantages", 15),
            _url(r"vs-|versus|-comparison|-compare", 15),
        ),
    ),
    PageType.DIRECTORY: PageTypeDefinition(
        name="Directory / Listing",
        description="Browsable listings with search filters",
        threshold=45,
        priority=6,
        signals=(
            _selector('.listing-card, [class*="directory-item"], [class*="listing"]', 25),
            _selector('.filter-sidebar, [class*="search-filters"]', 20),
            _selector('.pagination, [class*="load-more"], [class*="show-more"]', 15),
            _selector('[class*="category-filter"], [class*="filter-by"]', 15),
            _text(r"showing \d+ of \d+|\d+ results?|browse all", 10),
        ),
    ),
    PageType.LANDING: PageTypeDefinition(
        name="Landing Page",
        description="Conversion-focused campaign page",
        threshold=40,
        priority=5,
        signals=(
            _selector('.hero, [class*="hero"]', 20),
            _selector('[class*="cta"], [class*="call-to-action"]', 20),
            _selector('[class*="benefit"], [class*="value-prop"]', 15),
            _selector('.social-proof, [class*="trust-badges"], [class*="as-seen"]', 15),
            _text(r"limited time|exclusive|join now|don't miss", 10),
            _text(r"\d+%\s*off|save \$?\d+|discount", 10),
        ),
    ),
    PageType.HOMEPAGE: PageTypeDefinition(
        name="Homepage",
        description="Site entry point",
        threshold=40,
        priority=4,
        signals=(
            _url(r"^/$|/index\.html?$|^/home/?$", 35),
            _schema("Organization", 20),
            _schema("WebSite", 15),
            _selector('nav.main-nav, header nav, [class*="main-menu"]', 15),
            _selector('[class*="featured"], [class*="highlights"]', 10),
            _selector('[class*="hero"], [class*="banner"]', 10),
        ),
    ),
}

OTHER_DEFINITION = PageTypeDefinition(
    name="General Page",
    description="No page type matched strongly enough",
    threshold=MIN_CONFIDENCE,
    priority=0,
    signals=(),
)


def get_definition(page_type: PageType) -> PageTypeDefinition:
    return PAGE_TYPES.get(page_type, OTHER_DEFINITION)
