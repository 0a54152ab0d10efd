"""File storage for analysis reports."""

import json
import os
import re
import tempfile
import threading
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

INDEX_FILE = "index.json"
DEFAULT_INDEX_LIMIT = 100
RESULT_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def _serialize_datetime(obj: Any) -> Any:
    """JSON serializer for datetime objects."""
    if isinstance(obj, datetime):
        return obj.isoformat()
    raise TypeError(f"Object of type {type(obj)} is not JSON serializable")


def _write_json(path: Path, payload: Any) -> None:
    """Write to a temp file beside ``path`` and rename it into place."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}-", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, default=_serialize_datetime)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class ResultStore:
    """
    One JSON file per report plus an index of summaries.

    The index lists the newest reports first and holds at most
    ``index_limit`` entries; reports that fall off the index are deleted.
    Methods block on file I/O and are safe to call from worker threads.
    """

    def __init__(self, base_path: Path | str, index_limit: int = DEFAULT_INDEX_LIMIT):
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)
        self.index_limit = index_limit
        self.index_path = self.base_path / INDEX_FILE
        self._lock = threading.Lock()

    def _result_path(self, result_id: str) -> Path | None:
        if not RESULT_ID.match(result_id) or result_id == INDEX_FILE.removesuffix(".json"):
            return None
        return self.base_path / f"{result_id}.json"

    def _load_index(self) -> list[dict[str, Any]]:
        if not self.index_path.exists():
            return []
        try:
            data = json.loads(self.index_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("result_index_corrupt", path=str(self.index_path))
            return []
        return list(data.get("results", []))

    def _write_index(self, entries: list[dict[str, Any]]) -> None:
        _write_json(self.index_path, {"results": entries})

    def save(self, result: dict[str, Any]) -> str:
        """
        Store a report dict and return its id.

        Args:
            result: Serialized AnalysisReport. A missing ``id`` is generated.

        Returns:
            The result ID
        """
        result_id = result.get("id") or uuid.uuid4().hex
        path = self._result_path(result_id)
        if path is None:
            raise ValueError(f"Invalid result id: {result_id!r}")

        result = {**result, "id": result_id}

        overall = result.get("overall_score") or {}
        entry = {
            "id": result_id,
            "url": result.get("url"),
            "analyzed_at": result.get("analyzed_at"),
            "overall_score": overall.get("score"),
            "seo_score": (result.get("seo") or {}).get("score"),
            "geo_score": (result.get("geo") or {}).get("score"),
        }

        with self._lock:
            _write_json(path, result)

            entries = [e for e in self._load_index() if e.get("id") != result_id]
            entries.insert(0, entry)
            kept, evicted = entries[: self.index_limit], entries[self.index_limit :]
            self._write_index(kept)

            for old in evicted:
                old_path = self._result_path(str(old.get("id", "")))
                if old_path is not None:
                    old_path.unlink(missing_ok=True)

        logger.info("result_saved", result_id=result_id, url=entry["url"], evicted=len(evicted))
        return result_id

    def get_by_id(self, result_id: str) -> dict[str, Any] | None:
        path = self._result_path(result_id)
        if path is None or not path.exists():
            return None
        return json.loads(path.read_text(encoding="utf-8"))

    def list(self) -> list[dict[str, Any]]:
        """Index entries, newest first."""
        return self._load_index()

    def delete(self, result_id: str) -> bool:
        path = self._result_path(result_id)
        if path is None:
            return False

        with self._lock:
            existed = path.exists()
            path.unlink(missing_ok=True)

            entries = self._load_index()
            remaining = [e for e in entries if e.get("id") != result_id]
            if len(remaining) != len(entries):
                self._write_index(remaining)
                existed = True

        if existed:
            logger.info("result_deleted", result_id=result_id)
        return existed

    def clear(self) -> int:
        """Remove every stored report. Returns the number removed."""
        count = 0
        with self._lock:
            for path in self.base_path.glob("*.json"):
                if path.name != INDEX_FILE:
                    path.unlink(missing_ok=True)
                    count += 1
            self._write_index([])
        logger.info("results_cleared", count=count)
        return count
