"""Headings, text blocks, FAQ entries and semantic element counts."""

from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from analyzer.extraction.cleaner import normalize_whitespace
from analyzer.extraction.structured_data import StructuredDataObject, find_objects, text_value

MIN_PARAGRAPH_CHARS = 20
FAQ_CONTAINERS = '[class*="faq"], [id*="faq"], [data-faq]'
FAQ_QUESTION_TAGS = ("h2", "h3", "h4", "h5", "dt", "summary")
SEMANTIC_TAGS = ("article", "section", "nav", "aside", "main", "header", "footer")


@dataclass(frozen=True)
class Headings:
    """Heading texts by level."""

    h1: tuple[str, ...] = ()
    h2: tuple[str, ...] = ()
    h3: tuple[str, ...] = ()
    h4: tuple[str, ...] = ()
    h5: tuple[str, ...] = ()
    h6: tuple[str, ...] = ()
    empty_count: int = 0
    # Heading levels in document order, used for hierarchy checks
    sequence: tuple[int, ...] = ()

    def level(self, n: int) -> tuple[str, ...]:
        return getattr(self, f"h{n}")

    def all(self) -> list[str]:
        return [text for n in range(1, 7) for text in self.level(n)]

    @property
    def count(self) -> int:
        return len(self.sequence)

    @property
    def skips_level(self) -> bool:
        """True when a heading jumps more than one level deeper than its predecessor."""
        previous = 0
        for level in self.sequence:
            if previous and level > previous + 1:
                return True
            previous = level
        return False

    def to_dict(self) -> dict:
        return {f"h{n}": list(self.level(n)) for n in range(1, 7)}


@dataclass(frozen=True)
class ListBlock:
    kind: str  # "ul" or "ol"
    items: tuple[str, ...]

    def to_dict(self) -> dict:
        return {"type": self.kind, "items": list(self.items)}


@dataclass(frozen=True)
class TableBlock:
    rows: tuple[tuple[str, ...], ...]
    has_header: bool = False

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    def to_dict(self) -> dict:
        return {"rows": [list(row) for row in self.rows], "has_header": self.has_header}


@dataclass(frozen=True)
class FaqEntry:
    question: str
    answer: str
    source: str = "markup"

    def to_dict(self) -> dict:
        return {"question": self.question, "answer": self.answer, "source": self.source}


@dataclass(frozen=True)
class SemanticCounts:
    article: int = 0
    section: int = 0
    nav: int = 0
    aside: int = 0
    main: int = 0
    header: int = 0
    footer: int = 0

    @property
    def has_landmarks(self) -> bool:
        return bool(self.main or self.article or self.section)

    def to_dict(self) -> dict:
        return {tag: getattr(self, tag) for tag in SEMANTIC_TAGS}


def extract_headings(soup: BeautifulSoup) -> Headings:
    """Heading texts by level plus the document-order level sequence."""
    by_level: dict[int, list[str]] = {n: [] for n in range(1, 7)}
    sequence: list[int] = []
    empty = 0

    for tag in soup.find_all(["h1", "h2", "h3", "h4", "h5", "h6"]):
        level = int(tag.name[1])
        text = normalize_whitespace(tag.get_text(" "))
        sequence.append(level)
        if text:
            by_level[level].append(text[:200])
        else:
            empty += 1

    return Headings(
        **{f"h{n}": tuple(texts) for n, texts in by_level.items()},
        empty_count=empty,
        sequence=tuple(sequence),
    )


def extract_paragraphs(soup: BeautifulSoup) -> list[str]:
    paragraphs = []
    for tag in soup.find_all("p"):
        text = normalize_whitespace(tag.get_text(" "))
        if len(text) > MIN_PARAGRAPH_CHARS:
            paragraphs.append(text)
    return paragraphs


def extract_lists(soup: BeautifulSoup) -> list[ListBlock]:
    """Lists with their direct items; nested lists count separately."""
    blocks = []
    for tag in soup.find_all(["ul", "ol"]):
        items = tuple(
            text
            for li in tag.find_all("li", recursive=False)
            if (text := normalize_whitespace(li.get_text(" ")))
        )
        if items:
            blocks.append(ListBlock(kind=tag.name, items=items))
    return blocks


def extract_tables(soup: BeautifulSoup) -> list[TableBlock]:
    tables = []
    for table in soup.find_all("table"):
        rows = []
        for tr in table.find_all("tr"):
            cells = tuple(
                normalize_whitespace(cell.get_text(" ")) for cell in tr.find_all(["th", "td"])
            )
            if cells:
                rows.append(cells)
        if rows:
            tables.append(TableBlock(rows=tuple(rows), has_header=table.find("th") is not None))
    return tables


def _answer_after(question: Tag) -> str:
    sibling = question.find_next_sibling()
    if sibling is None or sibling.name in FAQ_QUESTION_TAGS:
        return ""
    if "question" in (sibling.get("class") or []):
        return ""
    return normalize_whitespace(sibling.get_text(" "))


def extract_faq(
    soup: BeautifulSoup, structured_data: list[StructuredDataObject]
) -> list[FaqEntry]:
    """
    Question/answer pairs from FAQ containers, accordions and FAQPage data.

    Within an FAQ container each heading, ``dt`` or ``.question`` is paired
    with the element that follows it. ``details``/``summary`` accordions are
    read anywhere on the page.
    """
    entries: list[FaqEntry] = []
    seen: set[str] = set()

    def add(question: str, answer: str, source: str) -> None:
        key = question.lower()
        if question and answer and key not in seen:
            seen.add(key)
            entries.append(FaqEntry(question=question, answer=answer, source=source))

    for container in soup.select(FAQ_CONTAINERS):
        for question in container.select(", ".join(FAQ_QUESTION_TAGS) + ", .question"):
            if question.name == "summary":
                continue
            add(normalize_whitespace(question.get_text(" ")), _answer_after(question), "markup")

    for details in soup.find_all("details"):
        summary = details.find("summary")
        if summary is None:
            continue
        question = normalize_whitespace(summary.get_text(" "))
        summary_text = summary.get_text(" ")
        answer = normalize_whitespace(details.get_text(" ").replace(summary_text, "", 1))
        add(question, answer, "accordion")

    for page in find_objects(structured_data, "FAQPage"):
        main_entity = page.get("mainEntity") or []
        if isinstance(main_entity, dict):
            main_entity = [main_entity]
        for item in main_entity:
            if not isinstance(item, dict):
                continue
            answer = item.get("acceptedAnswer") or {}
            answer_text = text_value(answer.get("text")) if isinstance(answer, dict) else ""
            add(text_value(item.get("name")), answer_text, "structured_data")

    return entries


def count_semantic_elements(soup: BeautifulSoup) -> SemanticCounts:
    return SemanticCounts(**{tag: len(soup.find_all(tag)) for tag in SEMANTIC_TAGS})
