"""Loading symbol collections from JSON files.

A collection file looks like::

    {
        "name": "Romaji, Hiragana & Katakana",
        "description": "...",
        "sets": [["a", "あ", "ア"], ["i", "い", "イ"], ...]
    }

Every inner list of ``sets`` becomes one KanaGroup. Collections bundled with
the package (``kanamemo/data``) can be referred to by name, anything else is
treated as a filesystem path.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Protocol, Union

from .errors import ConstructionError, DataSourceError
from .symbols import SymbolGroupCollection

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent / "data"
DEFAULT_COLLECTION = "romajihiraganakatakana"


class CollectionSource(Protocol):
    def load(self, identifier: str) -> SymbolGroupCollection:
        ...


def resolve_collection_path(identifier: Union[str, Path], data_dir: Optional[Path] = None) -> Path:
    """Map a collection name or path to the file that should hold it."""
    raw = str(identifier).strip()
    if not raw:
        raise DataSourceError("empty collection identifier", ["NOT_FOUND"])
    candidate = Path(raw)
    if candidate.suffix.lower() == ".json" or len(candidate.parts) > 1:
        return candidate
    return (data_dir or DATA_DIR) / f"{raw}.json"


def parse_collection(payload: object, origin: str = "<memory>") -> SymbolGroupCollection:
    if not isinstance(payload, dict):
        raise DataSourceError(f"collection {origin} must be a JSON object", ["PARSE_ERROR"])
    rows = payload.get("sets")
    if not isinstance(rows, list):
        raise DataSourceError(f"collection {origin} has no 'sets' list", ["PARSE_ERROR"])
    try:
        return SymbolGroupCollection.from_rows(
            rows,
            name=str(payload.get("name", "")),
            description=str(payload.get("description", "")),
        )
    except ConstructionError as exc:
        raise DataSourceError(f"collection {origin} is malformed: {exc}", ["PARSE_ERROR"]) from exc


class JsonCollectionSource:
    """Reads collections from JSON files, either bundled or on disk."""

    def __init__(self, data_dir: Optional[Path] = None) -> None:
        self.data_dir = data_dir

    def load(self, identifier: str) -> SymbolGroupCollection:
        path = resolve_collection_path(identifier, self.data_dir)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise DataSourceError(f"collection not found: {path}", ["NOT_FOUND"]) from exc
        except IsADirectoryError as exc:
            raise DataSourceError(f"collection path is a directory: {path}", ["NOT_FOUND"]) from exc
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DataSourceError(f"collection {path} is not valid JSON: {exc}", ["PARSE_ERROR"]) from exc
        collection = parse_collection(payload, origin=str(path))
        logger.info("Loaded collection %r (%d groups) from %s", collection.name, len(collection), path.name)
        return collection


def load_collection(identifier: str = DEFAULT_COLLECTION) -> SymbolGroupCollection:
    return JsonCollectionSource().load(identifier)
