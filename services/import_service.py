from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Any, Optional, Tuple
import json

import yaml

from data.tag_normalizer import clean_tags


@dataclass(frozen=True)
class ImportRow:
    title: str
    content: str
    tags: List[str] = field(default_factory=list)
    category: Optional[str] = None
    category_id: Optional[str] = None
    is_favorite: bool = False


@dataclass(frozen=True)
class ImportResult:
    added: int = 0
    skipped: int = 0


def decode_json(data: bytes) -> Any:
    """Raises ValueError on undecodable input."""
    text = data.decode("utf-8-sig") if isinstance(data, (bytes, bytearray)) else data
    try:
        return json.loads(text)
    except RecursionError as e:
        raise ValueError("JSON nested too deeply") from e


def _read_yaml(path: Path) -> Any:
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"YAML not readable: {e}") from e


def load_file(path: Path) -> Any:
    """Read an import file (.json, .yaml, .yml) into Python objects."""
    ext = path.suffix.lower()
    if ext == ".json":
        return decode_json(path.read_bytes())
    if ext in (".yml", ".yaml"):
        return _read_yaml(path)
    raise ValueError(f"Unsupported format: {ext}")


def _entries(raw: Any) -> List[Any]:
    if isinstance(raw, list):
        return raw
    # A database file can be imported as well; its records carry categoryId
    if isinstance(raw, dict) and isinstance(raw.get("prompts"), list):
        return raw["prompts"]
    raise ValueError("Import expects a list of prompt objects.")


def _parse_tags(value: Any) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(t, str) for t in value):
        return []
    return clean_tags(value)


def _encodable(*texts: Any) -> bool:
    # lone surrogates survive json.loads but cannot be written back as UTF-8
    try:
        for t in texts:
            if isinstance(t, str):
                t.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def parse_row(entry: Any) -> Optional[ImportRow]:
    """One exchange record -> ImportRow, or None when title/content are missing or not UTF-8 clean."""
    if not isinstance(entry, dict):
        return None
    title = entry.get("title")
    content = entry.get("content")
    if not isinstance(title, str) or not isinstance(content, str):
        return None
    tags = _parse_tags(entry.get("tags"))
    category = entry.get("category")
    category_id = entry.get("categoryId")
    if not _encodable(title, content, category, category_id, *tags):
        return None
    favorite = entry.get("isFavorite")
    return ImportRow(
        title=title,
        content=content,
        tags=tags,
        category=category if isinstance(category, str) and category else None,
        category_id=category_id if isinstance(category_id, str) and category_id else None,
        is_favorite=favorite if isinstance(favorite, bool) else False,
    )


def parse_rows(raw: Any) -> Tuple[List[ImportRow], int]:
    """Returns (valid rows, skipped count). Raises ValueError if raw is not a list."""
    rows: List[ImportRow] = []
    skipped = 0
    for entry in _entries(raw):
        row = parse_row(entry)
        if row is None:
            skipped += 1
            continue
        rows.append(row)
    return rows, skipped
