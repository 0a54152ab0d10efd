"""Traditional SEO score (0-100).

Six categories with fixed weights. Each category starts at its weight and
its checks deduct fixed penalties, so category scores add up to the total.
"""

from dataclasses import dataclass, field

import structlog

from analyzer.classification.classifier import PageTypeResult
from analyzer.extraction.page_data import PageData
from analyzer.scoring.aggregator import (
    Summary,
    collect_issues,
    prioritize_recommendations,
    summarize,
)
from analyzer.scoring.models import CategoryResult, Issue, Recommendation, ScoreSheet, Severity
from analyzer.scoring.profiles import get_profile

logger = structlog.get_logger(__name__)

SEO_CATEGORY_WEIGHTS = {
    "indexability": 25,
    "page_experience": 15,
    "on_page_relevance": 25,
    "structured_data": 15,
    "media_accessibility": 10,
    "commerce_trust": 10,
}

SEO_CATEGORY_NAMES = {
    "indexability": "Indexability",
    "page_experience": "Page Experience",
    "on_page_relevance": "On-Page Relevance",
    "structured_data": "Structured Data Readiness",
    "media_accessibility": "Media & Accessibility",
    "commerce_trust": "Commerce Trust",
}

# Calibration value: share of commerce_trust granted to pages where commerce
# checks do not apply.
NON_COMMERCE_SEO_BASELINE = 0.8

TITLE_MIN, TITLE_MAX = 30, 60
DESCRIPTION_MIN, DESCRIPTION_MAX = 120, 160
THIN_CONTENT_WORDS, SHORT_CONTENT_WORDS = 300, 600
SLOW_LOAD_MS, FAIR_LOAD_MS = 3000, 2000
MAX_RESOURCES = 30

RECOGNIZED_SCHEMA_TYPES = frozenset(
    {
        "organization",
        "localbusiness",
        "website",
        "webpage",
        "article",
        "blogposting",
        "newsarticle",
        "product",
        "faqpage",
        "howto",
        "breadcrumblist",
        "person",
        "recipe",
        "event",
        "review",
        "softwareapplication",
    }
)


def seo_status(score: float) -> str:
    if score >= 80:
        return "Good"
    if score >= 60:
        return "Needs Improvement"
    return "Poor"


@dataclass
class SEOAnalysisResult:
    score: int
    status: str
    categories: dict[str, CategoryResult]
    issues: list[Issue] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)
    summary: Summary | None = None

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "max_score": 100,
            "status": self.status,
            "categories": {key: cat.to_dict() for key, cat in self.categories.items()},
            "issues": [issue.to_dict() for issue in self.issues],
            "recommendations": [rec.to_dict() for rec in self.recommendations],
            "summary": self.summary.to_dict() if self.summary else None,
        }


def _normalize_url(url: str) -> str:
    return url.split("#", 1)[0].rstrip("/").lower()


class SEOAnalyzer:
    """Runs the six SEO categories against a page."""

    def analyze(self, page: PageData, page_type: PageTypeResult | None = None) -> SEOAnalysisResult:
        if page_type is not None:
            is_commerce = get_profile(page_type.type).use_product_metadata
        else:
            is_commerce = page.product.has_commerce_signals

        categories = {
            "indexability": self._indexability(page),
            "page_experience": self._page_experience(page),
            "on_page_relevance": self._on_page_relevance(page),
            "structured_data": self._structured_data(page),
            "media_accessibility": self._media_accessibility(page),
            "commerce_trust": self._commerce_trust(page, is_commerce),
        }

        total = round(sum(category.score for category in categories.values()))
        total = max(0, min(100, total))
        issues = collect_issues(categories)
        status = seo_status(total)

        result = SEOAnalysisResult(
            score=total,
            status=status,
            categories=categories,
            issues=issues,
            recommendations=prioritize_recommendations(categories),
            summary=summarize(status, issues, categories),
        )

        logger.info(
            "seo_score_calculated",
            url=page.url,
            score=total,
            status=status,
            issues=len(issues),
        )
        return result

    def _sheet(self, key: str) -> ScoreSheet:
        return ScoreSheet(key, SEO_CATEGORY_NAMES[key], SEO_CATEGORY_WEIGHTS[key])

    def _indexability(self, page: PageData) -> CategoryResult:
        sheet = self._sheet("indexability")

        ok_status = 200 <= page.status_code < 300
        sheet.deduct(
            "http_status",
            page.status_code,
            6,
            0 if ok_status else 6,
            severity=Severity.CRITICAL,
            issue=f"Page returned HTTP {page.status_code}",
            recommendation="Serve the page with a 200 status code",
        )

        sheet.deduct(
            "noindex",
            page.robots.noindex,
            8,
            8 if page.robots.noindex else 0,
            severity=Severity.CRITICAL,
            issue="Page is blocked from indexing (noindex)",
            recommendation="Remove the noindex directive if this page should appear in search",
        )

        canonical = page.metadata.canonical
        if not canonical:
            sheet.deduct(
                "canonical",
                None,
                4,
                4,
                issue="Missing canonical URL",
                recommendation="Add a canonical link tag to prevent duplicate content issues",
            )
        elif _normalize_url(canonical) != _normalize_url(page.final_url or page.url):
            sheet.deduct(
                "canonical",
                canonical,
                4,
                2,
                severity=Severity.INFO,
                issue="Canonical URL points to a different page",
                recommendation="Check that the canonical URL is the preferred version of this page",
            )
        else:
            sheet.deduct("canonical", canonical, 4)

        blocked = [
            agent
            for agent in ("Googlebot", "Bingbot")
            if not page.robots_access.is_allowed(agent)
        ]
        sheet.deduct(
            "search_crawler_access",
            blocked or "allowed",
            4,
            4 if blocked else 0,
            severity=Severity.CRITICAL,
            issue=f"robots.txt blocks {', '.join(blocked)}",
            recommendation="Allow search engine crawlers in robots.txt",
        )

        hops = len(page.redirects)
        if hops >= 2:
            sheet.deduct(
                "redirects",
                hops,
                3,
                3,
                issue=f"Redirect chain of {hops} hops",
                recommendation="Link directly to the final URL to avoid redirect chains",
            )
        else:
            sheet.deduct(
                "redirects",
                hops,
                3,
                hops,
                severity=Severity.INFO,
                issue="Page is reached through a redirect",
                recommendation="Update links to point at the final URL",
            )

        return sheet.build()

    def _page_experience(self, page: PageData) -> CategoryResult:
        sheet = self._sheet("page_experience")

        load = page.load_time_ms
        if load > SLOW_LOAD_MS:
            sheet.deduct(
                "load_time",
                load,
                6,
                6,
                severity=Severity.CRITICAL,
                issue=f"Slow page load ({load} ms)",
                recommendation=(
                    "Reduce page weight and server response time to load under 2 seconds"
                ),
            )
        elif load > FAIR_LOAD_MS:
            sheet.deduct(
                "load_time",
                load,
                6,
                3,
                issue=f"Page load could be faster ({load} ms)",
                recommendation="Optimize images and defer non-critical scripts",
            )
        else:
            sheet.deduct("load_time", load, 6)

        sheet.deduct(
            "viewport",
            page.metadata.viewport or None,
            5,
            0 if page.metadata.viewport else 5,
            severity=Severity.CRITICAL,
            issue="Missing viewport meta tag",
            recommendation=(
                'Add <meta name="viewport" content="width=device-width, initial-scale=1">'
            ),
        )

        sheet.deduct(
            "https",
            page.is_https,
            2,
            0 if page.is_https else 2,
            issue="Page is not served over HTTPS",
            recommendation="Serve the page over HTTPS",
        )

        resources = page.script_count + page.stylesheet_count
        sheet.deduct(
            "resource_count",
            resources,
            2,
            2 if resources > MAX_RESOURCES else 0,
            issue=f"Too many external scripts and stylesheets ({resources})",
            recommendation="Bundle or remove unused scripts and stylesheets",
        )

        return sheet.build()

    def _on_page_relevance(self, page: PageData) -> CategoryResult:
        sheet = self._sheet("on_page_relevance")

        title = page.metadata.title
        if not title:
            sheet.deduct(
                "title",
                "",
                7,
                7,
                severity=Severity.CRITICAL,
                issue="Missing page title",
                recommendation="Add a descriptive title of 30-60 characters",
            )
        elif len(title) < TITLE_MIN:
            sheet.deduct(
                "title",
                title,
                7,
                3,
                issue=f"Title too short ({len(title)} characters)",
                recommendation="Expand the title to 30-60 characters including the main topic",
            )
        elif len(title) > TITLE_MAX:
            sheet.deduct(
                "title",
                title,
                7,
                2,
                issue=f"Title too long ({len(title)} characters)",
                recommendation="Shorten the title to 60 characters so it is not truncated",
            )
        else:
            sheet.deduct("title", title, 7)

        description = page.metadata.description
        if not description:
            sheet.deduct(
                "meta_description",
                "",
                5,
                5,
                severity=Severity.CRITICAL,
                issue="Missing meta description",
                recommendation="Add a meta description of 120-160 characters",
            )
        elif len(description) < DESCRIPTION_MIN:
            sheet.deduct(
                "meta_description",
                description,
                5,
                2,
                issue=f"Meta description too short ({len(description)} characters)",
                recommendation="Expand the meta description to 120-160 characters",
            )
        elif len(description) > DESCRIPTION_MAX:
            sheet.deduct(
                "meta_description",
                description,
                5,
                1,
                severity=Severity.INFO,
                issue=f"Meta description too long ({len(description)} characters)",
                recommendation="Trim the meta description to 160 characters",
            )
        else:
            sheet.deduct("meta_description", description, 5)

        h1_count = len(page.headings.h1)
        if h1_count == 0:
            sheet.deduct(
                "h1",
                0,
                5,
                5,
                severity=Severity.CRITICAL,
                issue="Missing H1 heading",
                recommendation="Add a single H1 that states the page topic",
            )
        elif h1_count > 1:
            sheet.deduct(
                "h1",
                h1_count,
                5,
                2,
                issue=f"Multiple H1 headings ({h1_count})",
                recommendation="Use exactly one H1 per page",
            )
        else:
            sheet.deduct("h1", 1, 5)

        problems = []
        penalty = 0
        if page.headings.h3 and not page.headings.h2 or page.headings.skips_level:
            problems.append("heading levels are skipped")
            penalty += 2
        if page.headings.empty_count:
            problems.append(f"{page.headings.empty_count} empty headings")
            penalty += 1
        sheet.deduct(
            "heading_hierarchy",
            problems or "ok",
            3,
            penalty,
            issue=f"Heading hierarchy problems: {', '.join(problems)}",
            recommendation="Nest headings in order (H1 > H2 > H3) and remove empty headings",
        )

        words = page.word_count
        if words < THIN_CONTENT_WORDS:
            sheet.deduct(
                "content_length",
                words,
                5,
                4,
                severity=Severity.CRITICAL,
                issue=f"Thin content ({words} words)",
                recommendation="Expand the page to at least 600 words of useful content",
            )
        elif words < SHORT_CONTENT_WORDS:
            sheet.deduct(
                "content_length",
                words,
                5,
                2,
                severity=Severity.INFO,
                issue=f"Content could be more comprehensive ({words} words)",
                recommendation="Add depth: examples, specifics and answers to related questions",
            )
        else:
            sheet.deduct("content_length", words, 5)

        return sheet.build()

    def _structured_data(self, page: PageData) -> CategoryResult:
        sheet = self._sheet("structured_data")

        has_json_ld = any(obj.source == "json-ld" for obj in page.structured_data)
        sheet.deduct(
            "json_ld",
            has_json_ld,
            6,
            0 if has_json_ld else 6,
            issue="No JSON-LD structured data found",
            recommendation="Add JSON-LD structured data describing the page",
        )

        recognized = sorted({t for t in page.schema_types if t.lower() in RECOGNIZED_SCHEMA_TYPES})
        sheet.deduct(
            "recognized_types",
            recognized,
            4,
            0 if recognized else 4,
            severity=Severity.INFO,
            issue="No recognized schema.org types",
            recommendation="Use schema.org types such as Organization, Article or Product",
        )

        og = page.social.open_graph
        og_missing = [key for key in ("title", "description", "image") if not og.get(key)]
        if len(og_missing) == 3:
            penalty, severity = 3, Severity.WARNING
        else:
            penalty, severity = (1 if og_missing else 0), Severity.INFO
        sheet.deduct(
            "open_graph",
            sorted(og) if og else None,
            3,
            penalty,
            severity=severity,
            issue=f"Missing Open Graph tags: {', '.join(og_missing)}",
            recommendation="Add og:title, og:description and og:image for link previews",
        )

        has_card = bool(page.social.twitter.get("card"))
        sheet.deduct(
            "twitter_card",
            page.social.twitter.get("card"),
            2,
            0 if has_card else 2,
            severity=Severity.INFO,
            issue="Missing Twitter card",
            recommendation='Add <meta name="twitter:card" content="summary_large_image">',
        )

        return sheet.build()

    def _media_accessibility(self, page: PageData) -> CategoryResult:
        sheet = self._sheet("media_accessibility")
        stats = page.image_stats

        if stats.total:
            coverage = stats.alt_coverage
            sheet.award(
                "image_alt",
                round(coverage * 100),
                6 * coverage,
                6,
                severity=Severity.CRITICAL if coverage < 0.5 else Severity.WARNING,
                issue=f"{stats.without_alt} of {stats.total} images missing alt text",
                recommendation="Describe every meaningful image with alt text",
            )
            missing_dimensions = stats.total - stats.with_dimensions
            sheet.deduct(
                "image_dimensions",
                missing_dimensions,
                2,
                1 if missing_dimensions else 0,
                severity=Severity.INFO,
                issue=f"{missing_dimensions} images missing width/height attributes",
                recommendation="Set width and height on images to prevent layout shift",
            )
        else:
            sheet.deduct("image_alt", "no images", 6)
            sheet.deduct("image_dimensions", "no images", 2)

        sheet.deduct(
            "language",
            page.metadata.language or None,
            2,
            0 if page.metadata.language else 2,
            issue="Missing lang attribute on <html>",
            recommendation='Declare the page language, e.g. <html lang="en">',
        )

        return sheet.build()

    def _commerce_trust(self, page: PageData, is_commerce: bool) -> CategoryResult:
        sheet = self._sheet("commerce_trust")
        max_score = SEO_CATEGORY_WEIGHTS["commerce_trust"]

        if not is_commerce:
            sheet.award(
                "commerce_applicability",
                "not_applicable",
                max_score * NON_COMMERCE_SEO_BASELINE,
                max_score,
                passed=True,
            )
            return sheet.build()

        product = page.product
        sheet.deduct(
            "product_schema",
            product.from_structured_data,
            3,
            0 if product.from_structured_data else 3,
            issue="Product page without Product structured data",
            recommendation="Add Product JSON-LD with offers, brand and identifiers",
        )

        if product.price and product.availability:
            penalty = 0
        elif product.price:
            penalty = 1
        else:
            penalty = 3
        sheet.deduct(
            "price_availability",
            {"price": product.price, "availability": product.availability},
            3,
            penalty,
            issue="Price or availability not machine-readable",
            recommendation="Expose price, currency and availability in the Product offer",
        )

        missing_policies = [
            name
            for name, present in (
                ("shipping", page.policies.has_shipping_info),
                ("returns", page.policies.has_returns_info),
            )
            if not present
        ]
        sheet.deduct(
            "policies",
            missing_policies or "present",
            2,
            len(missing_policies),
            issue=f"No {' or '.join(missing_policies)} information",
            recommendation="State shipping and return policies on the page",
        )

        has_reviews = product.rating is not None
        sheet.deduct(
            "reviews",
            product.rating,
            2,
            0 if has_reviews else 2,
            severity=Severity.INFO,
            issue="No review rating",
            recommendation="Add AggregateRating markup when reviews exist",
        )

        return sheet.build()


def analyze_seo(page: PageData, page_type: PageTypeResult | None = None) -> SEOAnalysisResult:
    """Convenience function to run the SEO analyzer."""
    return SEOAnalyzer().analyze(page, page_type)
