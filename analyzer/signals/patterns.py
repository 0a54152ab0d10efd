"""Regex signal library.

Every function here is a pure function of a text string. Counts are
non-overlapping match counts, as returned by ``re.findall``.
"""

import re
from dataclasses import dataclass, field
from datetime import UTC, datetime

MONTHS = (
    "January|February|March|April|May|June|July|August|September|October|November|December"
)
SHORT_MONTHS = "Jan|Feb|Mar|Apr|Jun|Jul|Aug|Sep|Sept|Oct|Nov|Dec"

STATISTIC_PATTERNS: dict[str, re.Pattern[str]] = {
    "percentage": re.compile(r"\d+(?:\.\d+)?%"),
    "currency": re.compile(r"[$€£¥₹]\s*\d+(?:,\d{3})*(?:\.\d{1,2})?"),
    "measurements": re.compile(
        r"\d+(?:\.\d+)?\s*(?:GB|MB|TB|KB|mAh|Hz|kHz|MHz|GHz|fps|MP|mm|cm|km|kg|lb|oz"
        r"|inches|inch|ft|mi|m|g)\b",
        re.I,
    ),
    "durations": re.compile(
        r"\d+(?:\.\d+)?\s*(?:hours?|hrs?|days?|weeks?|months?|years?|minutes?|mins?"
        r"|seconds?|secs?)\b",
        re.I,
    ),
    "multipliers": re.compile(
        r"\d+(?:\.\d+)?x\s+(?:faster|slower|more|less|better|worse|larger|smaller|higher|lower)",
        re.I,
    ),
    "ratings": re.compile(r"\d+(?:\.\d+)?/(?:5|10)\b|★+☆*"),
    "years": re.compile(r"\b(?:in\s+)?20[1-9]\d\b", re.I),
    "numbered_facts": re.compile(
        r"(?:over|more than|less than|approximately|about|nearly|up to)\s+\d+(?:,\d{3})*"
        r"(?:\.\d+)?",
        re.I,
    ),
}

CITATION_PATTERNS: dict[str, re.Pattern[str]] = {
    "attribution": re.compile(
        r"(?:according to|research (?:by|from|shows)|study (?:by|from)|data (?:from|by)"
        r"|survey (?:by|from)|analysis (?:by|from)|report (?:by|from))\s+[A-Z][^,.]+"
    ),
    "direct_quotes": re.compile(r"[\"“][^\"”]{20,200}[\"”]"),
    "source_mentions": re.compile(r"(?:\(source:|\bsource:)\s*[^).\n]+", re.I),
    "study_references": re.compile(
        r"(?:a\s+)?(?:recent|new|latest|20\d{2})\s+(?:study|research|survey|analysis|report)",
        re.I,
    ),
    "expert_mentions": re.compile(
        r"(?:[Ee]xpert|[Ss]pecialist|[Rr]esearcher|[Pp]rofessor|Dr\.?|PhD)\s+[A-Z][a-z]+"
        r"(?:\s+[A-Z][a-z]+)?"
    ),
}

ORIGINAL_RESEARCH_PATTERNS: dict[str, re.Pattern[str]] = {
    "first_person_research": re.compile(
        r"\bwe\s+(?:found|discovered|analyzed|surveyed|tested|reviewed|examined|measured|compared)",
        re.I,
    ),
    "our_data": re.compile(
        r"\bour\s+(?:research|study|analysis|data|findings|survey|testing|review)", re.I
    ),
    "sample_sizes": re.compile(
        r"(?:based on|analyzed|surveyed|tested)\s+\d+(?:,\d{3})*"
        r"(?:\s+(?:users?|customers?|respondents?|samples?|products?|pages?))?",
        re.I,
    ),
    "methodology": re.compile(
        r"(?:our\s+)?methodology|\bwe\s+(?:measured|calculated|determined)", re.I
    ),
    "data_collection": re.compile(r"(?:collected|gathered|compiled)\s+data", re.I),
    "original_labels": re.compile(
        r"(?:exclusive|original|proprietary|first-hand|firsthand)\s+"
        r"(?:research|data|analysis|study)",
        re.I,
    ),
}

EEAT_PATTERNS: dict[str, dict[str, re.Pattern[str]]] = {
    "experience": {
        "first_person": re.compile(
            r"\bI\s+(?:tested|tried|used|reviewed|recommend|purchased|bought|experienced)", re.I
        ),
        "personal_experience": re.compile(
            r"\b(?:my|our)\s+(?:experience|testing|review|hands-on)", re.I
        ),
        "time_used": re.compile(
            r"(?:after|for)\s+\d+\s+(?:days?|weeks?|months?|years?)\s+(?:of\s+)?"
            r"(?:use|using|testing)",
            re.I,
        ),
    },
    "expertise": {
        "credentials": re.compile(
            r"\b(?:PhD|MD|CPA|CFA|MBA|certified|licensed|registered|accredited)\b", re.I
        ),
        "years_experience": re.compile(
            r"\d+\+?\s*years?\s+(?:of\s+)?(?:experience|expertise|in the industry)", re.I
        ),
        "professional": re.compile(
            r"(?:professional|expert|specialist|consultant|advisor)\s+(?:in|with|for)\b", re.I
        ),
    },
    "authority": {
        "featured_in": re.compile(
            r"(?:featured|quoted|cited|published)\s+(?:in|by|on)\s+[A-Z][^,.]+"
        ),
        "awards": re.compile(
            r"(?:award|recognition|certification|accreditation)s?\s+(?:from|by)", re.I
        ),
        "partnerships": re.compile(r"(?:partner|collaborate|work)\s+with\s+[A-Z][^,.]+"),
    },
    "trust": {
        "verified": re.compile(
            r"(?:verified|validated|confirmed|authenticated)\s+(?:by|through)", re.I
        ),
        "transparent": re.compile(
            r"\b(?:disclosure|transparency|honest|unbiased|independent)\b", re.I
        ),
        "updated": re.compile(
            r"(?:last\s+)?(?:updated|reviewed|verified|modified)(?:\s+on)?:?\s*"
            r"(?:\w+\s+\d{1,2},?\s+\d{4}|\d{4}-\d{2}-\d{2})",
            re.I,
        ),
    },
}

VAGUE_PATTERNS: dict[str, re.Pattern[str]] = {
    "empty_superlatives": re.compile(
        r"\b(?:the\s+)?(?:best|greatest|amazing|incredible|fantastic|awesome|perfect|excellent"
        r"|outstanding|exceptional|remarkable)\b(?:\s+(?:ever|available|on the market))?",
        re.I,
    ),
    "subjective_qualifiers": re.compile(
        r"\b(?:really|very|super|extremely|incredibly|absolutely|totally|completely)\s+\w+",
        re.I,
    ),
    "marketing_fluff": re.compile(
        r"game-?changer|revolutionary|cutting-?edge|state-of-the-art|next-?generation"
        r"|world-?class|industry-?leading|best-in-class",
        re.I,
    ),
    "vague_claims": re.compile(
        r"you'll love|we think you'll|you won't believe|takes? .{1,40}? to the next level", re.I
    ),
    "emotional_appeals": re.compile(
        r"don't miss|act now|limited time|exclusive offer|hurry|while supplies last", re.I
    ),
}

DATE_PATTERNS: dict[str, re.Pattern[str]] = {
    "iso": re.compile(r"\b\d{4}-\d{2}-\d{2}\b"),
    "us": re.compile(rf"\b(?:{MONTHS}|{SHORT_MONTHS})\.?\s+\d{{1,2}},?\s+\d{{4}}\b"),
    "eu": re.compile(rf"\b\d{{1,2}}\s+(?:{MONTHS})\s+\d{{4}}\b"),
}

# Quotable-sentence criteria
SENTENCE = re.compile(r"[^.!?]+[.!?]+")
QUOTABLE_MIN_WORDS = 8
QUOTABLE_MAX_WORDS = 40
COMPARISON = re.compile(r"\d+(?:\.\d+)?x\s+(?:faster|better|more)|compared to|versus|\bvs\.?", re.I)
DEFINITION = re.compile(r"\bis\s+(?:a|an|the)\s+|defined as|refers to|means that", re.I)
SPECIFIC_FACT = re.compile(
    r"\d+(?:,\d{3})*(?:\.\d+)?\s+(?:users?|customers?|people|companies|products?)", re.I
)

UNCITABLE_LIMIT = 15
EEAT_SAMPLE_LIMIT = 3


def _count(patterns: dict[str, re.Pattern[str]], text: str) -> int:
    return sum(len(pattern.findall(text)) for pattern in patterns.values())


def count_statistics(text: str) -> int:
    """Quantified claims: percentages, prices, measurements, durations and similar."""
    return _count(STATISTIC_PATTERNS, text)


def count_citations(text: str) -> int:
    return _count(CITATION_PATTERNS, text)


def count_original_research(text: str) -> int:
    return _count(ORIGINAL_RESEARCH_PATTERNS, text)


def fact_density(text: str, word_count: int | None = None) -> float:
    """Statistic matches per 100 words."""
    words = word_count if word_count is not None else len(text.split())
    if words <= 0:
        return 0.0
    return count_statistics(text) / words * 100


@dataclass
class EEATCategory:
    count: int = 0
    signals: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"count": self.count, "signals": self.signals}


@dataclass
class EEATBreakdown:
    experience: EEATCategory = field(default_factory=EEATCategory)
    expertise: EEATCategory = field(default_factory=EEATCategory)
    authority: EEATCategory = field(default_factory=EEATCategory)
    trust: EEATCategory = field(default_factory=EEATCategory)

    @property
    def total(self) -> int:
        return sum(
            category.count
            for category in (self.experience, self.expertise, self.authority, self.trust)
        )

    def to_dict(self) -> dict:
        return {
            "experience": self.experience.to_dict(),
            "expertise": self.expertise.to_dict(),
            "authority": self.authority.to_dict(),
            "trust": self.trust.to_dict(),
            "total": self.total,
        }


def analyze_eeat(text: str) -> EEATBreakdown:
    """Experience, expertise, authority and trust cues with sample matches."""
    breakdown = EEATBreakdown()
    for category, patterns in EEAT_PATTERNS.items():
        result: EEATCategory = getattr(breakdown, category)
        for name, pattern in patterns.items():
            matches = [m.group(0).strip() for m in pattern.finditer(text)]
            if matches:
                result.count += len(matches)
                result.signals.append({"name": name, "matches": matches[:EEAT_SAMPLE_LIMIT]})
    return breakdown


def find_uncitable_content(text: str, limit: int = UNCITABLE_LIMIT) -> list[str]:
    """Vague or promotional phrases, de-duplicated (case-insensitive) and capped."""
    found: list[str] = []
    seen: set[str] = set()
    for pattern in VAGUE_PATTERNS.values():
        for match in pattern.finditer(text):
            phrase = match.group(0).strip()
            key = phrase.lower()
            if phrase and key not in seen:
                seen.add(key)
                found.append(phrase)
    return found[:limit]


def _parse_content_date(raw: str, kind: str) -> datetime | None:
    clean = re.sub(r"\s+", " ", raw.replace(",", "").replace(".", "")).strip()
    if kind == "iso":
        formats = ("%Y-%m-%d",)
    elif kind == "us":
        formats = ("%B %d %Y", "%b %d %Y")
        clean = clean.replace("Sept ", "Sep ")
    else:
        formats = ("%d %B %Y",)

    for fmt in formats:
        try:
            return datetime.strptime(clean, fmt).replace(tzinfo=UTC)
        except ValueError:
            continue
    return None


def extract_dates(text: str) -> list[datetime]:
    """Valid calendar dates written in the text, oldest first, de-duplicated."""
    dates: set[datetime] = set()
    for kind, pattern in DATE_PATTERNS.items():
        for match in pattern.finditer(text):
            parsed = _parse_content_date(match.group(0), kind)
            if parsed is not None:
                dates.add(parsed)
    return sorted(dates)


@dataclass
class QuotableSentence:
    text: str
    word_count: int
    reasons: list[str]

    @property
    def score(self) -> int:
        return len(self.reasons)

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "word_count": self.word_count,
            "reasons": self.reasons,
            "score": self.score,
        }


def quotable_reasons(sentence: str) -> list[str]:
    """Citability criteria a sentence satisfies."""
    reasons = []
    if (
        STATISTIC_PATTERNS["percentage"].search(sentence)
        or STATISTIC_PATTERNS["measurements"].search(sentence)
        or STATISTIC_PATTERNS["ratings"].search(sentence)
    ):
        reasons.append("Contains statistic")
    if CITATION_PATTERNS["attribution"].search(sentence):
        reasons.append("Cites source")
    if COMPARISON.search(sentence):
        reasons.append("Quantified comparison")
    if DEFINITION.search(sentence):
        reasons.append("Clear definition")
    if SPECIFIC_FACT.search(sentence):
        reasons.append("Specific fact")
    return reasons


def find_quotable_sentences(text: str, limit: int = 10) -> list[QuotableSentence]:
    """
    Sentences an answer engine could lift verbatim.

    A sentence qualifies when it has 8 to 40 words and meets at least one
    criterion. Results are ranked by the number of criteria met, ties kept
    in document order.
    """
    quotable = []
    for match in SENTENCE.finditer(text):
        sentence = match.group(0).strip()
        words = len(sentence.split())
        if not QUOTABLE_MIN_WORDS <= words <= QUOTABLE_MAX_WORDS:
            continue
        reasons = quotable_reasons(sentence)
        if reasons:
            quotable.append(QuotableSentence(text=sentence, word_count=words, reasons=reasons))

    quotable.sort(key=lambda q: q.score, reverse=True)
    return quotable[:limit]
