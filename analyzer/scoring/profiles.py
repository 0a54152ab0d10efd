"""GEO pillar weights and per-page-type scoring profiles."""

from dataclasses import dataclass, field
from enum import StrEnum

from analyzer.classification.page_types import PageType


class Pillar(StrEnum):
    AI_CRAWL_ACCESS = "ai_crawl_access"
    CONTENT_QUALITY = "content_quality"
    PRODUCT_METADATA = "product_metadata"
    ENTITY_DISAMBIGUATION = "entity_disambiguation"
    INFORMATION_ARCHITECTURE = "information_architecture"
    ANSWERABILITY = "answerability"
    EVIDENCE_CITABILITY = "evidence_citability"
    MULTIMODAL_READINESS = "multimodal_readiness"
    AUTHORITY_SIGNALS = "authority_signals"


GATING_PILLAR = Pillar.AI_CRAWL_ACCESS

PILLAR_NAMES: dict[Pillar, str] = {
    Pillar.AI_CRAWL_ACCESS: "AI Crawl Access & Snippet Controls",
    Pillar.CONTENT_QUALITY: "Content Quality & Depth",
    Pillar.PRODUCT_METADATA: "Product Metadata Readiness",
    Pillar.ENTITY_DISAMBIGUATION: "Entity Disambiguation & Identifiers",
    Pillar.INFORMATION_ARCHITECTURE: "Machine-Scannable Information Architecture",
    Pillar.ANSWERABILITY: "Answerability & Query Coverage",
    Pillar.EVIDENCE_CITABILITY: "Evidence, Justification & Citability",
    Pillar.MULTIMODAL_READINESS: "Multimodal Readiness",
    Pillar.AUTHORITY_SIGNALS: "Authority & Trust Signals",
}

# Content quality and product metadata are alternates and share one weight
PILLAR_BASE_WEIGHTS: dict[Pillar, float] = {
    Pillar.AI_CRAWL_ACCESS: 0.15,
    Pillar.CONTENT_QUALITY: 0.12,
    Pillar.PRODUCT_METADATA: 0.12,
    Pillar.ENTITY_DISAMBIGUATION: 0.08,
    Pillar.INFORMATION_ARCHITECTURE: 0.10,
    Pillar.ANSWERABILITY: 0.13,
    Pillar.EVIDENCE_CITABILITY: 0.18,
    Pillar.MULTIMODAL_READINESS: 0.08,
    Pillar.AUTHORITY_SIGNALS: 0.16,
}


@dataclass(frozen=True)
class ScoringProfile:
    """Pillar weight multipliers for one page type. Missing pillars weigh 1.0."""

    page_type: PageType
    use_product_metadata: bool = False
    multipliers: dict[Pillar, float] = field(default_factory=dict, hash=False)

    def multiplier(self, pillar: Pillar) -> float:
        return self.multipliers.get(pillar, 1.0)

    @property
    def alternate_pillar(self) -> Pillar:
        return Pillar.PRODUCT_METADATA if self.use_product_metadata else Pillar.CONTENT_QUALITY

    @property
    def active_pillars(self) -> list[Pillar]:
        inactive = (
            Pillar.CONTENT_QUALITY if self.use_product_metadata else Pillar.PRODUCT_METADATA
        )
        return [pillar for pillar in Pillar if pillar != inactive]

    def effective_weight(self, pillar: Pillar) -> float:
        return PILLAR_BASE_WEIGHTS[pillar] * self.multiplier(pillar)

    def to_dict(self) -> dict:
        return {
            "page_type": self.page_type.value,
            "use_product_metadata": self.use_product_metadata,
            "multipliers": {
                pillar.value: self.multiplier(pillar) for pillar in self.active_pillars
            },
        }


def _profile(
    page_type: PageType,
    alternate: float,
    entity: float,
    architecture: float,
    answerability: float,
    evidence: float,
    multimodal: float,
    authority: float,
    use_product_metadata: bool = False,
) -> ScoringProfile:
    alternate_pillar = (
        Pillar.PRODUCT_METADATA if use_product_metadata else Pillar.CONTENT_QUALITY
    )
    return ScoringProfile(
        page_type=page_type,
        use_product_metadata=use_product_metadata,
        multipliers={
            alternate_pillar: alternate,
            Pillar.ENTITY_DISAMBIGUATION: entity,
            Pillar.INFORMATION_ARCHITECTURE: architecture,
            Pillar.ANSWERABILITY: answerability,
            Pillar.EVIDENCE_CITABILITY: evidence,
            Pillar.MULTIMODAL_READINESS: multimodal,
            Pillar.AUTHORITY_SIGNALS: authority,
        },
    )


# alternate, entity, architecture, answerability, evidence, multimodal, authority
SCORING_PROFILES: dict[PageType, ScoringProfile] = {
    PageType.PRODUCT: _profile(
        PageType.PRODUCT, 1.0, 1.0, 1.0, 1.0, 1.0, 1.2, 1.0, use_product_metadata=True
    ),
    PageType.CATEGORY: _profile(
        PageType.CATEGORY, 0.4, 0.6, 1.4, 0.7, 0.6, 0.8, 0.8, use_product_metadata=True
    ),
    PageType.ARTICLE: _profile(PageType.ARTICLE, 1.2, 0.5, 1.0, 0.8, 1.4, 0.7, 1.3),
    PageType.NEWS: _profile(PageType.NEWS, 1.3, 0.6, 1.0, 0.9, 1.5, 0.8, 1.3),
    PageType.DOCUMENTATION: _profile(PageType.DOCUMENTATION, 1.0, 0.6, 1.5, 1.4, 1.0, 0.5, 0.8),
    PageType.SAAS: _profile(PageType.SAAS, 1.0, 0.8, 1.2, 1.3, 1.0, 0.8, 1.2),
    PageType.LOCAL_BUSINESS: _profile(PageType.LOCAL_BUSINESS, 0.8, 1.3, 0.8, 1.2, 0.8, 1.2, 1.4),
    PageType.PORTFOLIO: _profile(PageType.PORTFOLIO, 1.0, 0.7, 1.0, 0.8, 1.3, 1.4, 1.2),
    PageType.COMPARISON: _profile(PageType.COMPARISON, 1.1, 1.0, 1.3, 1.4, 1.2, 0.7, 1.0),
    PageType.DIRECTORY: _profile(PageType.DIRECTORY, 0.8, 0.8, 1.4, 1.0, 0.7, 0.6, 0.9),
    PageType.LANDING: _profile(PageType.LANDING, 1.0, 0.9, 1.1, 1.2, 1.1, 1.0, 1.2),
    PageType.HOMEPAGE: _profile(PageType.HOMEPAGE, 0.9, 1.0, 1.2, 0.8, 0.9, 0.9, 1.3),
    PageType.OTHER: ScoringProfile(page_type=PageType.OTHER),
}


def get_profile(page_type: PageType | str) -> ScoringProfile:
    """Profile for ``page_type``; unknown types use the neutral ``other`` profile."""
    try:
        return SCORING_PROFILES[PageType(page_type)]
    except (KeyError, ValueError):
        return SCORING_PROFILES[PageType.OTHER]
