"""Prompt storage backends.

A store persists the full prompt and category collections and hands them back
on load. Two implementations share the same interface:

- JsonPromptStore: single JSON file {"prompts": [...], "categories": [...]}
  (a bare top-level list of prompts is accepted on read)
- MemoryPromptStore: keeps copies in memory, nothing touches disk

Failures surface as StoreError so callers can decide how to degrade.
"""
from __future__ import annotations

import json, logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from models.prompt import Category, Prompt
from services.backup_service import backup_file

log = logging.getLogger(__name__)


def _default_repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def resolve_db_path(db_path: Optional[str] = None) -> Path:
    if not db_path:
        return (_default_repo_root() / "data" / "prompts.json").resolve()
    path = Path(db_path).expanduser()
    return path if path.is_absolute() else (_default_repo_root() / path).resolve()


class StoreError(Exception):
    """Raised when a store cannot be read or written."""


@dataclass
class StoreSnapshot:
    prompts: List[Prompt] = field(default_factory=list)
    categories: List[Category] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.prompts and not self.categories


class PromptStore:
    """Storage interface: load everything, save everything."""

    def load(self) -> StoreSnapshot:
        raise NotImplementedError

    def save_all(self, prompts: Sequence[Prompt], categories: Sequence[Category]) -> None:
        raise NotImplementedError

    def describe(self) -> str:
        return type(self).__name__


class MemoryPromptStore(PromptStore):
    def __init__(self, prompts: Sequence[Prompt] = (), categories: Sequence[Category] = ()) -> None:
        self._prompts = list(prompts)
        self._categories = list(categories)
        self.save_count = 0

    def load(self) -> StoreSnapshot:
        return StoreSnapshot(list(self._prompts), list(self._categories))

    def save_all(self, prompts: Sequence[Prompt], categories: Sequence[Category]) -> None:
        self._prompts = list(prompts)
        self._categories = list(categories)
        self.save_count += 1

    def describe(self) -> str:
        return "memory"


class JsonPromptStore(PromptStore):
    def __init__(self, db_path: Optional[str] = None, backup_dir: Optional[str] = None) -> None:
        self.db_path = resolve_db_path(db_path)
        self.backup_dir = Path(backup_dir) if backup_dir else None

    def describe(self) -> str:
        return str(self.db_path)

    # ----------------- internal IO -----------------
    def _load_raw(self) -> Any:
        with open(self.db_path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _write(self, data: Dict) -> None:
        # dump to a sibling .tmp, then swap it over the DB file
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.db_path.with_suffix(self.db_path.suffix + ".tmp")
        try:
            with tmp.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            tmp.replace(self.db_path)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise

    @staticmethod
    def _split_layout(data: Any) -> tuple[List[Any], List[Any]]:
        # Standard: {"prompts": [...], "categories": [...]}
        if isinstance(data, dict):
            prompts = data.get("prompts", [])
            categories = data.get("categories", [])
            if isinstance(prompts, list) and isinstance(categories, list):
                return prompts, categories
        # Legacy: top-level list of prompts, no categories
        if isinstance(data, list):
            return data, []
        raise ValueError(f"unsupported database layout: {type(data).__name__}")

    def _backup_unreadable(self) -> None:
        try:
            dst = backup_file(self.db_path, self.backup_dir)
        except OSError as e:
            log.warning("DB backup failed: %s", e)
            return
        if dst:
            log.warning("Unreadable DB copied to %s", dst)

    # ----------------- interface -------------------
    def load(self) -> StoreSnapshot:
        if not self.db_path.exists():
            log.info("No DB file at %s yet", self.db_path)
            return StoreSnapshot()
        try:
            raw = self._load_raw()
            raw_prompts, raw_categories = self._split_layout(raw)
            prompts = [Prompt.model_validate(p) for p in raw_prompts]
            categories = [Category.model_validate(c) for c in raw_categories]
        except (OSError, ValueError, RecursionError, ValidationError) as e:
            self._backup_unreadable()
            raise StoreError(f"Reading DB failed ({self.db_path}): {e}") from e
        log.debug("DB load() -> %d prompts, %d categories (db=%s)", len(prompts), len(categories), self.db_path)
        return StoreSnapshot(prompts, categories)

    def save_all(self, prompts: Sequence[Prompt], categories: Sequence[Category]) -> None:
        data = {
            "prompts": [p.model_dump(mode="json", by_alias=True) for p in prompts],
            "categories": [c.model_dump(mode="json", by_alias=True) for c in categories],
        }
        try:
            self._write(data)
        except (OSError, TypeError, ValueError) as e:
            raise StoreError(f"Writing DB failed ({self.db_path}): {e}") from e
        log.info("DB save_all() ok: %d prompts, %d categories (db=%s)", len(prompts), len(categories), self.db_path)


def create_store(settings) -> PromptStore:
    """Pick the backend named by settings.store ('json' or 'memory')."""
    kind = (settings.store or "json").strip().lower()
    if kind == "memory":
        log.info("Using in-memory prompt store")
        return MemoryPromptStore()
    if kind != "json":
        log.warning("Unknown PROMPT_STORE=%r, falling back to json", settings.store)
    store = JsonPromptStore(settings.db_path)
    log.info("Using JSON prompt store at %s", store.db_path)
    return store
