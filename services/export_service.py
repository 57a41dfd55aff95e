from __future__ import annotations
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Dict, Any, Optional
import json

import yaml

EXPORT_FIELDS = [
    "id", "title", "content", "tags", "category", "isFavorite", "createdAt", "updatedAt"
]


def iso_utc(value: datetime) -> str:
    """ISO-8601 in UTC with second precision, e.g. 2024-05-01T09:30:00Z."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def prompt_record(prompt, category_name: Optional[str]) -> Dict[str, Any]:
    """Exchange record for one prompt; the category is denormalized to its name."""
    return {
        "id": prompt.id,
        "title": prompt.title,
        "content": prompt.content,
        "tags": list(prompt.tags),
        "category": category_name or "",
        "isFavorite": prompt.is_favorite,
        "createdAt": iso_utc(prompt.created_at),
        "updatedAt": iso_utc(prompt.updated_at),
    }


def dumps_records(rows: List[Dict[str, Any]]) -> bytes:
    return json.dumps(rows, ensure_ascii=False, indent=2).encode("utf-8")


def record_to_json(row: Dict[str, Any]) -> str:
    return json.dumps(row, ensure_ascii=False, indent=2)


def default_export_filename(now: Optional[datetime] = None, suffix: str = ".json") -> str:
    now = now or datetime.now()
    return f"prompts_{now.strftime('%Y-%m-%d_%H-%M-%S')}{suffix}"


def write_export(data: bytes, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


def export_yaml(rows: List[Dict[str, Any]], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(rows, sort_keys=False, allow_unicode=True), encoding="utf-8")
