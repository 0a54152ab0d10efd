"""
GEO pillar scorers.

Each scorer inspects one facet of a page and returns a 0-100 PillarResult.
Points per check are allotted up front so the checks of a pillar always
add up to 100.
"""

import re
from collections.abc import Callable
from datetime import datetime

from analyzer.crawler.robots_ai import TRACKED_AGENTS
from analyzer.extraction.page_data import PageData
from analyzer.extraction.structured_data import find_objects, text_value
from analyzer.scoring.models import PillarResult, ScoreSheet, Severity
from analyzer.scoring.profiles import (
    GATING_PILLAR,
    PILLAR_BASE_WEIGHTS,
    PILLAR_NAMES,
    Pillar,
    ScoringProfile,
)
from analyzer.signals.content import (
    FreshnessStatus,
    analyze_depth,
    analyze_freshness,
    analyze_listicle,
    analyze_original_research,
    analyze_tables,
)
from analyzer.signals.patterns import (
    DEFINITION,
    analyze_eeat,
    count_citations,
    fact_density,
    find_quotable_sentences,
    find_uncitable_content,
)

PILLAR_MAX = 100

# Crawlers checked by the access pillar: (agent, points, severity when blocked)
CRAWLER_ALLOTMENTS: tuple[tuple[str, int, Severity], ...] = (
    ("OAI-SearchBot", 35, Severity.CRITICAL),
    ("PerplexityBot", 10, Severity.WARNING),
    ("Claude-SearchBot", 10, Severity.WARNING),
    ("Googlebot", 5, Severity.WARNING),
    ("GPTBot", 5, Severity.INFO),
)

# Calibration value: share of the commerce trust allotment granted to pages
# where shipping and returns information does not apply.
NON_COMMERCE_TRUST_BASELINE = 0.6

DIRECT_ANSWER_PATTERNS = (
    re.compile(r"^[A-Z][^.!?]+(?:is|are|was|were|provides|offers|helps|enables)"),
    re.compile(r"^(?:This|The|Our|A|An)\s+\w+\s+(?:is|are|provides|offers)"),
)
QUESTION_HEADING = re.compile(
    r"\?\s*$|^(?:what|how|why|when|where|who|which|can|does|do|is|are|should)\b", re.I
)
FAQ_SECTION = re.compile(r"FAQ|frequently asked|common questions", re.I)
HOW_TO = re.compile(r"how to|step \d|first,|next,|finally,", re.I)
AUTHOR_MENTION = re.compile(r"written by|author:|by [A-Z][a-z]+")
TOKEN = re.compile(r"[a-z0-9]{3,}")

QUOTABLE_SAMPLE = 5
VAGUE_NOTE_THRESHOLD = 5
MAX_AVG_PARAGRAPH_WORDS = 120
ORGANIZATION_TYPES = ("Organization", "LocalBusiness", "Corporation", "OnlineStore")


def _sheet(pillar: Pillar) -> ScoreSheet:
    return ScoreSheet(pillar.value, PILLAR_NAMES[pillar], PILLAR_MAX)


def _finish(sheet: ScoreSheet, pillar: Pillar, profile: ScoringProfile) -> PillarResult:
    return sheet.build_pillar(
        base_weight=PILLAR_BASE_WEIGHTS[pillar],
        multiplier=profile.multiplier(pillar),
        is_gating=pillar == GATING_PILLAR,
    )


def _tiered(value: float, tiers: tuple[tuple[float, float], ...]) -> float:
    """Points of the first (minimum, points) tier that ``value`` reaches."""
    for minimum, points in tiers:
        if value >= minimum:
            return points
    return 0


def score_ai_crawl_access(page: PageData, profile: ScoringProfile, now: datetime) -> PillarResult:
    """Whether answer engines may fetch, index and quote the page."""
    sheet = _sheet(Pillar.AI_CRAWL_ACCESS)

    ok_status = 200 <= page.status_code < 300
    sheet.award(
        "status_ok",
        page.status_code,
        10 if ok_status else 0,
        10,
        severity=Severity.CRITICAL,
        issue=f"Page returned HTTP {page.status_code}",
        recommendation="Serve the page with a 200 status code",
    )

    sheet.award(
        "indexable",
        not page.robots.noindex,
        0 if page.robots.noindex else 15,
        15,
        severity=Severity.CRITICAL,
        issue="Page has a noindex directive; AI search engines will not cite it",
        recommendation="Remove noindex from the robots meta tag and X-Robots-Tag header",
    )

    snippets = page.robots.snippets_allowed
    sheet.award(
        "snippets_allowed",
        snippets,
        10 if snippets else 0,
        10,
        issue="Snippet controls (nosnippet or a small max-snippet) limit quoting",
        recommendation="Remove nosnippet and allow max-snippet:-1 so answers can quote the page",
    )

    access = page.robots_access
    for agent, points, severity in CRAWLER_ALLOTMENTS:
        allowed = access.is_allowed(agent)
        rule = access.rule_for(agent)
        purpose = TRACKED_AGENTS.get(agent, {}).get("purpose", "AI search")
        sheet.award(
            agent,
            {"allowed": allowed, "rule": rule},
            points if allowed else 0,
            points,
            severity=severity,
            issue=f"robots.txt blocks {agent}" + (f" ({rule})" if rule else ""),
            recommendation=f"Allow {agent} in robots.txt to be eligible for {purpose}",
        )

    sheet.details["robots"] = access.to_dict()
    return _finish(sheet, Pillar.AI_CRAWL_ACCESS, profile)


def score_content_quality(page: PageData, profile: ScoringProfile, now: datetime) -> PillarResult:
    """Depth, structure, originality and freshness of editorial content."""
    sheet = _sheet(Pillar.CONTENT_QUALITY)

    depth = analyze_depth(page.word_count)
    sheet.award(
        "content_length",
        page.word_count,
        depth.points,
        depth.max_points,
        passed=depth.points >= 18,
        issue=f"Content is too thin ({page.word_count} words)" if depth.points < 12 else None,
        recommendation=depth.recommendation,
    )

    listicle = analyze_listicle(page.lists, page.paragraphs)
    sheet.award(
        "listicle_structure",
        listicle.total_items,
        listicle.points,
        listicle.max_points,
        passed=listicle.points >= 15,
        issue="Lacks listicle structure" if listicle.points < 10 else None,
        recommendation=listicle.recommendation,
    )

    tables = analyze_tables(page.tables, page.text)
    sheet.award(
        "comparison_tables",
        tables.quality_tables,
        tables.points,
        tables.max_points,
        passed=tables.points >= 10,
        issue="No comparison tables" if tables.points < 10 else None,
        recommendation=tables.recommendation,
    )

    research = analyze_original_research(page.text)
    sheet.award(
        "original_research",
        research.original_signals,
        research.points,
        research.max_points,
        passed=research.points >= 10,
        severity=Severity.INFO,
        issue="Few original research or data signals" if research.points < 10 else None,
        recommendation=research.recommendation,
    )

    freshness = analyze_freshness(
        page.metadata.date_modified, page.metadata.date_published, page.text, now
    )
    outdated = freshness.status in (FreshnessStatus.STALE, FreshnessStatus.UNKNOWN)
    sheet.award(
        "content_freshness",
        freshness.status.value,
        freshness.points,
        freshness.max_points,
        passed=freshness.status == FreshnessStatus.FRESH,
        issue="Content freshness signals missing or outdated" if outdated else None,
        recommendation=freshness.recommendation,
    )

    uncitable = find_uncitable_content(page.text)
    if len(uncitable) > VAGUE_NOTE_THRESHOLD:
        sheet.note(
            "vague_content",
            f"High amount of vague/uncitable content ({len(uncitable)} phrases)",
            Severity.WARNING,
        )

    sheet.details.update(
        {
            "depth": depth.to_dict(),
            "listicle": listicle.to_dict(),
            "tables": tables.to_dict(),
            "original_research": research.to_dict(),
            "freshness": freshness.to_dict(),
            "eeat": analyze_eeat(page.text).to_dict(),
            "quotable_sentences": [
                sentence.to_dict()
                for sentence in find_quotable_sentences(page.text, limit=QUOTABLE_SAMPLE)
            ],
            "uncitable_phrases": uncitable,
            "fact_density": round(fact_density(page.text, page.word_count), 2),
        }
    )
    return _finish(sheet, Pillar.CONTENT_QUALITY, profile)


def score_product_metadata(page: PageData, profile: ScoringProfile, now: datetime) -> PillarResult:
    """Machine-readable product facts for shopping answers."""
    sheet = _sheet(Pillar.PRODUCT_METADATA)
    product = page.product

    sheet.award(
        "product_schema",
        product.from_structured_data,
        20 if product.from_structured_data else 0,
        20,
        severity=Severity.CRITICAL,
        issue="No Product structured data",
        recommendation="Add Product JSON-LD with name, offers, brand and identifiers",
    )
    sheet.award(
        "name",
        product.name or None,
        10 if product.name else 0,
        10,
        issue="Product name not declared",
        recommendation="Declare the product name in Product structured data",
    )

    if product.price and product.currency:
        price_points = 15
    elif product.price:
        price_points = 10
    else:
        price_points = 0
    sheet.award(
        "price",
        {"price": product.price, "currency": product.currency},
        price_points,
        15,
        issue="Price or currency missing from product offer",
        recommendation="Add price and priceCurrency to the product Offer",
    )
    sheet.award(
        "availability",
        product.availability or None,
        10 if product.availability else 0,
        10,
        issue="Availability not declared",
        recommendation="Add schema.org availability (e.g. InStock) to the Offer",
    )

    if product.gtin:
        id_points = 15
    elif product.sku or product.mpn:
        id_points = 10
    else:
        id_points = 0
    sheet.award(
        "identifiers",
        {"gtin": product.gtin, "sku": product.sku, "mpn": product.mpn},
        id_points,
        15,
        issue="No global product identifier (GTIN)",
        recommendation="Add a GTIN, plus SKU or MPN, so engines can match the product",
    )
    sheet.award(
        "brand",
        product.brand or None,
        10 if product.brand else 0,
        10,
        issue="Brand not declared",
        recommendation="Add the brand to Product structured data",
    )
    sheet.award(
        "rating",
        product.rating,
        10 if product.rating is not None else 0,
        10,
        severity=Severity.INFO,
        issue="No aggregate rating",
        recommendation="Add AggregateRating with ratingValue and reviewCount",
    )
    has_description = len(product.description) >= 50
    sheet.award(
        "description",
        len(product.description),
        10 if has_description else 0,
        10,
        severity=Severity.INFO,
        issue="Product description missing or too short",
        recommendation="Write a product description of at least 50 characters",
    )

    sheet.details["product"] = product.to_dict()
    return _finish(sheet, Pillar.PRODUCT_METADATA, profile)


def _tokens(text: str) -> set[str]:
    return set(TOKEN.findall(text.lower()))


def title_h1_overlap(title: str, h1: str) -> float:
    """Share of H1 tokens that also appear in the title."""
    h1_tokens = _tokens(h1)
    if not h1_tokens:
        return 0.0
    return len(h1_tokens & _tokens(title)) / len(h1_tokens)


def score_entity_disambiguation(
    page: PageData, profile: ScoringProfile, now: datetime
) -> PillarResult:
    """Signals that tie the page to a specific, identifiable entity."""
    sheet = _sheet(Pillar.ENTITY_DISAMBIGUATION)
    organizations = find_objects(page.structured_data, *ORGANIZATION_TYPES)

    sheet.award(
        "organization_schema",
        bool(organizations),
        25 if organizations else 0,
        25,
        issue="No Organization structured data",
        recommendation="Add Organization JSON-LD with name, logo, url and sameAs",
    )

    same_as: list[str] = []
    for obj in find_objects(page.structured_data, *ORGANIZATION_TYPES, "Person"):
        value = obj.get("sameAs")
        links = value if isinstance(value, list) else [value]
        same_as.extend(link for link in links if link)
    sheet.award(
        "same_as",
        len(same_as),
        15 if same_as else 0,
        15,
        severity=Severity.INFO,
        issue="No sameAs links to authoritative profiles",
        recommendation="Add sameAs links (Wikipedia, Wikidata, LinkedIn) to the Organization",
    )

    sheet.award(
        "canonical",
        page.metadata.canonical or None,
        15 if page.metadata.canonical else 0,
        15,
        issue="Missing canonical URL",
        recommendation="Declare a canonical URL so engines attribute citations to one address",
    )

    h1 = page.headings.h1[0] if page.headings.h1 else ""
    overlap = title_h1_overlap(page.metadata.title, h1)
    sheet.award(
        "title_h1_alignment",
        round(overlap, 2),
        _tiered(overlap, ((0.5, 15), (0.01, 8))),
        15,
        severity=Severity.INFO,
        issue="Title and H1 describe different topics",
        recommendation="Align the title and H1 around the same primary entity",
    )

    sheet.award(
        "language",
        page.metadata.language or None,
        10 if page.metadata.language else 0,
        10,
        severity=Severity.INFO,
        issue="Page language not declared",
        recommendation="Set the lang attribute on the html element",
    )

    websites = find_objects(page.structured_data, "WebSite")
    site_name = page.social.open_graph.get("site_name") or (
        text_value(websites[0].get("name")) if websites else ""
    )
    sheet.award(
        "site_name",
        site_name or None,
        10 if site_name else 0,
        10,
        severity=Severity.INFO,
        issue="No site name declared",
        recommendation="Add og:site_name or a WebSite schema with a name",
    )

    publisher = next(
        (
            text_value(obj.get(key))
            for obj in page.structured_data
            for key in ("publisher", "brand", "manufacturer")
            if obj.get(key)
        ),
        "",
    )
    sheet.award(
        "publisher",
        publisher or None,
        10 if publisher else 0,
        10,
        severity=Severity.INFO,
        issue="No publisher or brand entity in structured data",
        recommendation="Reference the publisher or brand in structured data",
    )

    return _finish(sheet, Pillar.ENTITY_DISAMBIGUATION, profile)


def score_information_architecture(
    page: PageData, profile: ScoringProfile, now: datetime
) -> PillarResult:
    """How easily a machine can segment the page into addressable parts."""
    sheet = _sheet(Pillar.INFORMATION_ARCHITECTURE)
    headings = page.headings

    h1_count = len(headings.h1)
    sheet.award(
        "single_h1",
        h1_count,
        15 if h1_count == 1 else (8 if h1_count > 1 else 0),
        15,
        severity=Severity.CRITICAL if h1_count == 0 else Severity.WARNING,
        issue="Missing H1 - main topic unclear to AI" if h1_count == 0 else "Multiple H1 headings",
        recommendation="Use exactly one H1 that clearly states the main topic",
    )

    h2_count = len(headings.h2)
    sheet.award(
        "section_headings",
        h2_count,
        _tiered(h2_count, ((2, 20), (1, 10))),
        20,
        issue="Insufficient section headings (H2)",
        recommendation="Break content into sections with clear H2 headings",
    )

    sheet.award(
        "heading_hierarchy",
        not headings.skips_level,
        4 if headings.skips_level else 10,
        10,
        severity=Severity.INFO,
        issue="Heading levels are skipped",
        recommendation="Nest headings without skipping levels",
    )

    semantic = page.semantic
    distinct = sum(1 for count in semantic.to_dict().values() if count)
    if distinct >= 3:
        semantic_points = 15
    elif semantic.has_landmarks:
        semantic_points = 10
    elif distinct:
        semantic_points = 5
    else:
        semantic_points = 0
    sheet.award(
        "semantic_html",
        semantic.to_dict(),
        semantic_points,
        15,
        severity=Severity.INFO,
        issue="Limited semantic HTML elements",
        recommendation="Use semantic HTML (main, article, section, nav, aside)",
    )

    blocks = bool(page.lists) + bool(page.tables)
    sheet.award(
        "structured_blocks",
        {"lists": len(page.lists), "tables": len(page.tables)},
        (0, 10, 15)[blocks],
        15,
        issue="No lists or tables found",
        recommendation="Present key facts as bullet lists, numbered steps or tables",
    )

    sheet.award(
        "breadcrumbs",
        len(page.breadcrumbs),
        15 if page.breadcrumbs else 0,
        15,
        severity=Severity.INFO,
        issue="No breadcrumb navigation",
        recommendation="Add breadcrumbs with BreadcrumbList structured data",
    )

    if page.paragraphs:
        average = sum(len(p.split()) for p in page.paragraphs) / len(page.paragraphs)
        paragraph_points = 10 if average <= MAX_AVG_PARAGRAPH_WORDS else 0
    else:
        average, paragraph_points = 0.0, 0
    sheet.award(
        "paragraph_length",
        round(average, 1),
        paragraph_points,
        10,
        severity=Severity.INFO,
        issue=(
            f"Paragraphs are long (average {average:.0f} words)"
            if page.paragraphs
            else "No text paragraphs found"
        ),
        recommendation="Keep paragraphs focused: one idea, under 120 words",
    )

    return _finish(sheet, Pillar.INFORMATION_ARCHITECTURE, profile)


def has_direct_answer(paragraph: str) -> bool:
    return any(pattern.search(paragraph) for pattern in DIRECT_ANSWER_PATTERNS)


def score_answerability(page: PageData, profile: ScoringProfile, now: datetime) -> PillarResult:
    """Whether the page answers the questions people ask about its topic."""
    sheet = _sheet(Pillar.ANSWERABILITY)

    opening = page.paragraphs[0] if page.paragraphs else ""
    direct = bool(opening) and has_direct_answer(opening)
    sheet.award(
        "direct_answer",
        direct,
        30 if direct else 0,
        30,
        issue='Opening content does not directly answer "What is this?"',
        recommendation="Start with a clear, direct statement explaining what the page is about",
    )

    questions = [text for text in page.headings.all() if QUESTION_HEADING.search(text)]
    sheet.award(
        "question_headings",
        len(questions),
        _tiered(len(questions), ((3, 20), (1, 10))),
        20,
        severity=Severity.INFO,
        issue="No question-answer patterns in headings",
        recommendation="Phrase section headings as the questions users ask",
    )

    faq_section = bool(page.faq) or any(FAQ_SECTION.search(text) for text in page.headings.all())
    if page.has_schema("FAQPage"):
        faq_points = 25
    elif faq_section:
        faq_points = 15
    else:
        faq_points = 0
    sheet.award(
        "faq_content",
        {"entries": len(page.faq), "schema": page.has_schema("FAQPage")},
        faq_points,
        25,
        issue=(
            "FAQ content exists but lacks schema markup"
            if faq_section
            else "No FAQ content or schema found"
        ),
        severity=Severity.INFO if faq_section else Severity.WARNING,
        recommendation="Add an FAQ section with FAQPage schema markup",
    )

    how_to = page.has_schema("HowTo") or bool(HOW_TO.search(page.text))
    sheet.award(
        "how_to",
        how_to,
        10 if how_to else 0,
        10,
        severity=Severity.INFO,
        issue="No step-by-step instructions",
        recommendation="Add numbered how-to steps where the topic involves a process",
    )

    definitions = len(DEFINITION.findall(page.text))
    sheet.award(
        "definitions",
        definitions,
        _tiered(definitions, ((2, 15), (1, 8))),
        15,
        severity=Severity.INFO,
        issue="No clear definitions or explanations found",
        recommendation='Include clear definitions (e.g. "X is a..." or "X refers to...")',
    )

    sheet.details["question_headings"] = questions
    return _finish(sheet, Pillar.ANSWERABILITY, profile)


def score_evidence_citability(
    page: PageData, profile: ScoringProfile, now: datetime
) -> PillarResult:
    """Facts, sources and sentences an engine can quote with confidence."""
    sheet = _sheet(Pillar.EVIDENCE_CITABILITY)

    density = fact_density(page.text, page.word_count)
    sheet.award(
        "fact_density",
        round(density, 2),
        30 if density >= 1.0 else 18 if density >= 0.5 else 8 if density > 0 else 0,
        30,
        severity=Severity.CRITICAL if density == 0 else Severity.WARNING,
        issue=(
            "Very low fact density - content lacks statistics"
            if density < 0.5
            else "Fact density could be improved"
        ),
        recommendation="Add statistics, numbers and specific data points every 150-200 words",
    )

    citations = count_citations(page.text)
    sheet.award(
        "citations",
        citations,
        _tiered(citations, ((3, 25), (1, 15))),
        25,
        issue="No source citations or references" if citations == 0 else "Few source citations",
        recommendation='Reference authoritative sources (e.g. "According to [Source]...")',
    )

    followed = len(page.links.followed_external)
    sheet.award(
        "external_references",
        followed,
        _tiered(followed, ((2, 15), (1, 8))),
        15,
        severity=Severity.INFO,
        issue="Few links to external sources",
        recommendation="Link to the primary sources behind your claims",
    )

    quotable = find_quotable_sentences(page.text, limit=50)
    sheet.award(
        "quotable_sentences",
        len(quotable),
        _tiered(len(quotable), ((5, 20), (2, 12), (1, 6))),
        20,
        issue="Few sentences can stand alone as quotes",
        recommendation="Write concise sentences (8-40 words) that state one specific fact each",
    )

    uncitable = find_uncitable_content(page.text)
    vague = len(uncitable)
    sheet.award(
        "vague_content",
        vague,
        10 if vague <= 5 else 5 if vague <= 10 else 0,
        10,
        issue=f"High amount of vague/uncitable content ({vague} phrases)",
        recommendation="Replace superlatives and marketing claims with measurable specifics",
    )

    sheet.details.update(
        {
            "quotable_sentences": [s.to_dict() for s in quotable[:QUOTABLE_SAMPLE]],
            "uncitable_phrases": uncitable,
        }
    )
    return _finish(sheet, Pillar.EVIDENCE_CITABILITY, profile)


def score_multimodal_readiness(
    page: PageData, profile: ScoringProfile, now: datetime
) -> PillarResult:
    """Images that engines can understand and show alongside answers."""
    sheet = _sheet(Pillar.MULTIMODAL_READINESS)
    stats = page.image_stats
    total = stats.total

    sheet.award(
        "has_images",
        total,
        20 if total else 0,
        20,
        issue="No images on the page",
        recommendation="Add relevant images such as product shots, diagrams or charts",
    )
    sheet.award(
        "alt_coverage",
        round(stats.alt_coverage * 100) if total else None,
        30 * stats.alt_coverage if total else 0,
        30,
        severity=Severity.WARNING if total else Severity.INFO,
        issue=f"{stats.without_alt} images missing alt text" if total else None,
        recommendation="Write descriptive alt text for every meaningful image" if total else None,
    )
    sheet.award(
        "image_dimensions",
        stats.with_dimensions,
        10 * stats.with_dimensions / total if total else 0,
        10,
        severity=Severity.INFO,
        issue="Images missing width/height attributes" if total else None,
        recommendation="Declare image width and height" if total else None,
    )

    og_image = page.social.open_graph.get("image")
    sheet.award(
        "og_image",
        og_image or None,
        15 if og_image else 0,
        15,
        issue="Missing og:image",
        recommendation="Add an og:image so answers and previews can show the page visually",
    )

    image_schema = page.has_schema("ImageObject") or any(
        obj.get("image") for obj in page.structured_data
    )
    sheet.award(
        "image_schema",
        image_schema,
        10 if image_schema else 0,
        10,
        severity=Severity.INFO,
        issue="No images referenced in structured data",
        recommendation="Reference primary images from structured data (image property)",
    )

    responsive_share = stats.responsive / total if total else 0
    sheet.award(
        "responsive_images",
        stats.responsive,
        15 if responsive_share >= 0.5 else 8 if responsive_share > 0 else 0,
        15,
        severity=Severity.INFO,
        issue="Images are not responsive (no srcset)" if total else None,
        recommendation="Serve responsive images with srcset or picture" if total else None,
    )

    sheet.details["images"] = stats.to_dict()
    return _finish(sheet, Pillar.MULTIMODAL_READINESS, profile)


def _has_author(page: PageData) -> bool:
    if page.metadata.author:
        return True
    if any(obj.get("author") for obj in page.structured_data):
        return True
    return bool(AUTHOR_MENTION.search(page.text))


def score_authority_signals(page: PageData, profile: ScoringProfile, now: datetime) -> PillarResult:
    """E-E-A-T cues plus the trust pages a buyer or reader would look for."""
    sheet = _sheet(Pillar.AUTHORITY_SIGNALS)
    eeat = analyze_eeat(page.text)
    policies = page.policies

    author = _has_author(page)
    sheet.award(
        "author",
        author,
        20 if author else 0,
        20,
        severity=Severity.INFO,
        issue="No author attribution found",
        recommendation="Add author information with credentials",
    )
    sheet.award(
        "experience",
        eeat.experience.count,
        _tiered(eeat.experience.count, ((2, 10), (1, 5))),
        10,
        severity=Severity.INFO,
        issue="No first-hand experience signals",
        recommendation='Describe first-hand use or testing ("we tested", "after 6 months")',
    )
    sheet.award(
        "expertise",
        eeat.expertise.count,
        _tiered(eeat.expertise.count, ((2, 15), (1, 8))),
        15,
        severity=Severity.INFO,
        issue="No expertise signals",
        recommendation="State credentials, certifications or years of experience",
    )
    sheet.award(
        "authority",
        eeat.authority.count,
        10 if eeat.authority.count else 0,
        10,
        issue="No authority signals detected",
        recommendation="Mention awards, press coverage or notable partners",
    )
    sheet.award(
        "trust",
        eeat.trust.count,
        10 if eeat.trust.count else 0,
        10,
        severity=Severity.INFO,
        issue="No trust signals detected",
        recommendation="Show verification, guarantees or transparent update history",
    )

    org_points = 8 * policies.has_privacy_policy + 7 * policies.has_contact_info
    sheet.award(
        "organization_trust",
        {"privacy": policies.has_privacy_policy, "contact": policies.has_contact_info},
        org_points,
        15,
        issue="Privacy policy or contact information not found",
        recommendation="Link a privacy policy and visible contact details",
    )

    if profile.use_product_metadata:
        commerce_points = (
            7 * policies.has_shipping_info
            + 7 * policies.has_returns_info
            + 6 * policies.has_warranty_info
        )
        sheet.award(
            "commerce_trust",
            {
                "shipping": policies.has_shipping_info,
                "returns": policies.has_returns_info,
                "warranty": policies.has_warranty_info,
            },
            commerce_points,
            20,
            issue="Shipping, returns or warranty information missing",
            recommendation="State shipping, returns and warranty terms on the page",
        )
    else:
        sheet.award(
            "commerce_trust",
            "not_applicable",
            20 * NON_COMMERCE_TRUST_BASELINE,
            20,
            passed=True,
        )

    sheet.details["eeat"] = eeat.to_dict()
    return _finish(sheet, Pillar.AUTHORITY_SIGNALS, profile)


PillarScorer = Callable[[PageData, ScoringProfile, datetime], PillarResult]

PILLAR_SCORERS: dict[Pillar, PillarScorer] = {
    Pillar.AI_CRAWL_ACCESS: score_ai_crawl_access,
    Pillar.CONTENT_QUALITY: score_content_quality,
    Pillar.PRODUCT_METADATA: score_product_metadata,
    Pillar.ENTITY_DISAMBIGUATION: score_entity_disambiguation,
    Pillar.INFORMATION_ARCHITECTURE: score_information_architecture,
    Pillar.ANSWERABILITY: score_answerability,
    Pillar.EVIDENCE_CITABILITY: score_evidence_citability,
    Pillar.MULTIMODAL_READINESS: score_multimodal_readiness,
    Pillar.AUTHORITY_SIGNALS: score_authority_signals,
}
