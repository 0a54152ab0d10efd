"""Embedded structured data (JSON-LD and microdata)."""

import json
import re
from dataclasses import dataclass, field
from typing import Any

import structlog
from bs4 import BeautifulSoup

from api.exceptions import ExtractionWarning

logger = structlog.get_logger(__name__)

MICRODATA_TYPE = re.compile(r"schema\.org/(\w+)", re.I)


@dataclass(frozen=True)
class StructuredDataObject:
    """One typed record from the page's embedded markup. Treat ``data`` as read-only."""

    types: tuple[str, ...]
    data: dict[str, Any] = field(default_factory=dict, hash=False, compare=False)
    source: str = "json-ld"

    def is_type(self, name: str) -> bool:
        wanted = name.lower()
        return any(t.lower() == wanted for t in self.types)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def to_dict(self) -> dict:
        return {"types": list(self.types), "source": self.source, "data": self.data}


def _types_of(item: dict[str, Any]) -> tuple[str, ...]:
    declared = item.get("@type")
    if isinstance(declared, str):
        return (declared,)
    if isinstance(declared, list):
        return tuple(t for t in declared if isinstance(t, str))
    return ()


def _flatten(data: Any) -> list[dict[str, Any]]:
    """Top-level objects of one JSON-LD block, expanding lists and @graph."""
    if isinstance(data, list):
        items: list[dict[str, Any]] = []
        for entry in data:
            items.extend(_flatten(entry))
        return items
    if not isinstance(data, dict):
        return []
    graph = data.get("@graph")
    if isinstance(graph, list):
        return [item for item in graph if isinstance(item, dict)]
    return [data]


def parse_json_ld_block(raw: str, index: int = 0) -> list[StructuredDataObject]:
    """
    Parse one ``application/ld+json`` script body.

    Raises:
        ExtractionWarning: the block is not valid JSON
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise ExtractionWarning(
            f"Skipped malformed JSON-LD block #{index}: {e}",
            field="structured_data",
        ) from e

    return [
        StructuredDataObject(types=_types_of(item), data=item)
        for item in _flatten(data)
        if _types_of(item)
    ]


def extract_structured_data(
    soup: BeautifulSoup,
) -> tuple[list[StructuredDataObject], list[str], list[ExtractionWarning]]:
    """
    Collect JSON-LD objects and microdata item types.

    Returns:
        (objects, de-duplicated schema type names in first-seen order, warnings)
    """
    objects: list[StructuredDataObject] = []
    warnings: list[ExtractionWarning] = []

    for index, script in enumerate(soup.find_all("script", type="application/ld+json")):
        raw = script.string or script.get_text() or ""
        if not raw.strip():
            continue
        try:
            objects.extend(parse_json_ld_block(raw, index))
        except ExtractionWarning as warning:
            warnings.append(warning)

    for tag in soup.find_all(attrs={"itemtype": True}):
        itemtype = tag.get("itemtype", "")
        match = MICRODATA_TYPE.search(itemtype if isinstance(itemtype, str) else "")
        if match:
            objects.append(StructuredDataObject(types=(match.group(1),), source="microdata"))

    schema_types: list[str] = []
    for obj in objects:
        for name in obj.types:
            if name not in schema_types:
                schema_types.append(name)

    return objects, schema_types, warnings


def find_objects(objects: list[StructuredDataObject] | tuple, *names: str) -> list:
    """Objects declaring any of ``names`` (case-insensitive)."""
    return [obj for obj in objects if any(obj.is_type(name) for name in names)]


def text_value(value: Any) -> str:
    """Plain string from a schema value that may be a dict with ``name`` or a list."""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, dict):
        return text_value(value.get("name") or value.get("@id") or "")
    if isinstance(value, list) and value:
        return text_value(value[0])
    return ""
