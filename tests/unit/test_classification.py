"""Tests for page type classification."""

from analyzer.classification.classifier import (
    PageTypeClassifier,
    classify_page,
    confidence_for,
)
from analyzer.classification.page_types import (
    PAGE_TYPES,
    PageType,
    PageTypeDefinition,
    Signal,
    SignalKind,
)
from tests.fixtures import BARE_HTML, article_page, make_page, product_page


class TestConfidence:
    def test_capped_at_100(self) -> None:
        assert confidence_for(90, 45) == 100

    def test_proportional(self) -> None:
        assert confidence_for(20, 40) == 50

    def test_zero_threshold(self) -> None:
        assert confidence_for(10, 0) == 0


class TestPageTypeClassifier:
    """Tests for PageTypeClassifier."""

    def test_product_page_beats_category(self) -> None:
        """Product schema plus an add-to-cart control selects the product type."""
        result = classify_page(product_page())

        assert result.type == PageType.PRODUCT
        assert result.score >= PAGE_TYPES[PageType.PRODUCT].threshold
        assert result.meets_threshold is True
        assert result.confidence == 100
        assert all(
            alt.type != PageType.CATEGORY or alt.score < result.score
            for alt in result.alternatives
        )
        assert any(match.kind == "schema" for match in result.matched_signals)

    def test_article_page(self) -> None:
        result = classify_page(article_page())
        assert result.type == PageType.ARTICLE
        assert result.is_fallback is False

    def test_deterministic(self) -> None:
        page = article_page()
        classifier = PageTypeClassifier()
        assert classifier.classify(page) == classifier.classify(page)

    def test_fallback_when_nothing_matches(self) -> None:
        result = classify_page(make_page(BARE_HTML, "https://example.com/about-us"))

        assert result.type == PageType.OTHER
        assert result.is_fallback is True
        assert result.confidence == 0
        assert result.alternatives == ()

    def test_homepage_by_url(self) -> None:
        html = """
        <html><head><script type="application/ld+json">
        {"@type": "Organization", "name": "Example"}
        </script></head><body><p>Welcome.</p></body></html>
        """
        result = classify_page(make_page(html, "https://example.com/"))
        assert result.type == PageType.HOMEPAGE

    def test_priority_breaks_ties(self) -> None:
        registry = {
            PageType.LANDING: PageTypeDefinition(
                name="Landing",
                description="",
                threshold=30,
                priority=1,
                signals=(Signal(SignalKind.PATTERN, "espresso", 40),),
            ),
            PageType.COMPARISON: PageTypeDefinition(
                name="Comparison",
                description="",
                threshold=30,
                priority=5,
                signals=(Signal(SignalKind.PATTERN, "grinder", 40),),
            ),
        }
        result = PageTypeClassifier(registry).classify(article_page())

        assert result.type == PageType.COMPARISON
        assert [alt.type for alt in result.alternatives] == [PageType.LANDING]

    def test_invalid_selector_does_not_raise(self) -> None:
        registry = {
            PageType.DOCUMENTATION: PageTypeDefinition(
                name="Docs",
                description="",
                threshold=30,
                priority=1,
                signals=(Signal(SignalKind.SELECTOR, "[[[", 50),),
            ),
        }
        result = PageTypeClassifier(registry).classify(article_page())
        assert result.is_fallback is True

    def test_to_dict(self) -> None:
        data = classify_page(product_page()).to_dict()
        assert data["type"] == "product"
        assert data["name"] == "Product Page"
        assert isinstance(data["matched_signals"], list)
