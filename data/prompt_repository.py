"""Prompt repository: the single owner of the in-memory prompt and category collections.

- Loads everything from a PromptStore, falls back to seed data if the store is unreadable
- Every mutation persists the full collections before refreshing in-memory state
- Lookups by id that miss are silent no-ops (methods return None)
- Filter state (search text, category, favorites) and the current selection live here;
  filtered_prompts is always recomputed from them
- Subscribers are notified with a change name: "prompts", "categories", "filter", "selection"
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

from data.prompt_filter import filter_prompts, sort_by_updated
from data.prompt_store import PromptStore, StoreError, StoreSnapshot, create_store
from data.seed_data import SEED_CATEGORIES, SEED_PROMPTS
from data.tag_normalizer import clean_tags
from models.prompt import Category, Prompt, utcnow
from services.export_service import dumps_records, prompt_record
from services.import_service import ImportResult, decode_json, parse_rows

log = logging.getLogger(__name__)

Listener = Callable[[str], None]
PromptRef = Union[Prompt, str]
CategoryRef = Union[Category, str, None]


def _ref_id(ref: Union[Prompt, Category, str]) -> str:
    return ref if isinstance(ref, str) else ref.id


def _by_name(categories: Iterable[Category]) -> List[Category]:
    return sorted(categories, key=lambda c: c.name)


class PromptRepository:
    def __init__(
        self,
        store: PromptStore,
        seed_on_empty: bool = True,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.store = store
        self.seed_on_empty = seed_on_empty
        self._clock = clock
        self._last_stamp: Optional[datetime] = None

        self._prompts: List[Prompt] = []
        self._categories: List[Category] = []
        self._listeners: List[Listener] = []

        self._search_text = ""
        self._selected_category_id: Optional[str] = None
        self._favorites_only = False
        self._selected_prompt_id: Optional[str] = None

    @classmethod
    def from_settings(cls, settings) -> "PromptRepository":
        repo = cls(create_store(settings), seed_on_empty=settings.seed_on_empty)
        repo.load()
        return repo

    # ----------------- observers -------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, *changes: str) -> None:
        for change in changes:
            for listener in list(self._listeners):
                listener(change)

    # ----------------- internals -------------------
    def _stamp(self) -> datetime:
        """Current time, strictly later than any stamp handed out before."""
        now = self._clock()
        if self._last_stamp is not None and now <= self._last_stamp:
            now = self._last_stamp + timedelta(microseconds=1)
        self._last_stamp = now
        return now

    def _observe_stamps(self, prompts: Iterable[Prompt]) -> None:
        for p in prompts:
            if self._last_stamp is None or p.updated_at > self._last_stamp:
                self._last_stamp = p.updated_at

    def _persist(self, prompts: Sequence[Prompt], categories: Sequence[Category]) -> None:
        try:
            self.store.save_all(prompts, categories)
        except StoreError as e:
            log.warning("Saving prompts failed, change kept in memory only: %s", e)

    def _commit(self, prompts: Sequence[Prompt], categories: Sequence[Category], *changes: str) -> None:
        self._persist(prompts, categories)
        self._prompts = sort_by_updated(prompts)
        self._categories = _by_name(categories)
        self._notify(*changes)

    def _index_of(self, ref: PromptRef) -> Optional[int]:
        pid = _ref_id(ref)
        for idx, p in enumerate(self._prompts):
            if p.id == pid:
                return idx
        return None

    def _resolve_category(self, ref: CategoryRef) -> Optional[str]:
        if ref is None:
            return None
        cid = _ref_id(ref)
        if any(c.id == cid for c in self._categories):
            return cid
        log.debug("Category %s not found, storing prompt without category", cid)
        return None

    def _seed_snapshot(self) -> StoreSnapshot:
        categories = [Category(name=c["name"], color=c.get("color"), created_at=self._stamp()) for c in SEED_CATEGORIES]
        ids = {c.name: c.id for c in categories}
        prompts = []
        for row in SEED_PROMPTS:
            stamp = self._stamp()
            prompts.append(Prompt(
                title=row["title"],
                content=row["content"],
                tags=list(row["tags"]),
                category_id=ids.get(row["category"]) if row["category"] else None,
                created_at=stamp,
                updated_at=stamp,
            ))
        return StoreSnapshot(prompts, categories)

    # ----------------- loading ---------------------
    def load(self) -> None:
        """Fetch everything from the store. Never raises; an unreadable store is replaced by seed data."""
        snapshot: Optional[StoreSnapshot]
        try:
            snapshot = self.store.load()
        except StoreError as e:
            log.warning("Loading prompts failed (%s). Falling back to seed data.", e)
            snapshot = None

        if snapshot is None or (snapshot.is_empty() and self.seed_on_empty):
            snapshot = self._seed_snapshot()
            self._persist(snapshot.prompts, snapshot.categories)
            log.info("Seeded %d prompts, %d categories", len(snapshot.prompts), len(snapshot.categories))

        self._observe_stamps(snapshot.prompts)
        self._prompts = sort_by_updated(snapshot.prompts)
        self._categories = _by_name(snapshot.categories)

        if self._selected_prompt_id and self._index_of(self._selected_prompt_id) is None:
            self._selected_prompt_id = None
        if self._selected_category_id and self.category_by_id(self._selected_category_id) is None:
            self._selected_category_id = None

        log.info("Loaded %d prompts, %d categories from %s", len(self._prompts), len(self._categories), self.store.describe())
        self._notify("prompts", "categories")

    # ----------------- read access -----------------
    @property
    def prompts(self) -> List[Prompt]:
        return list(self._prompts)

    @property
    def categories(self) -> List[Category]:
        return list(self._categories)

    def count(self) -> int:
        return len(self._prompts)

    def get_prompt(self, ref: PromptRef) -> Optional[Prompt]:
        idx = self._index_of(ref)
        return None if idx is None else self._prompts[idx]

    def category_by_id(self, category_id: Optional[str]) -> Optional[Category]:
        if not category_id:
            return None
        for c in self._categories:
            if c.id == category_id:
                return c
        return None

    def category_by_name(self, name: str) -> Optional[Category]:
        # Names are not unique; the first one in name order wins
        for c in self._categories:
            if c.name == name:
                return c
        return None

    def category_for(self, prompt: Prompt) -> Optional[Category]:
        return self.category_by_id(prompt.category_id)

    # ----------------- prompts CRUD ----------------
    def add_prompt(self, title: str, content: str, tags: Iterable[str] = (), category: CategoryRef = None) -> Prompt:
        stamp = self._stamp()
        prompt = Prompt(
            title=title,
            content=content,
            tags=clean_tags(tags),
            category_id=self._resolve_category(category),
            created_at=stamp,
            updated_at=stamp,
        )
        self._commit(self._prompts + [prompt], self._categories, "prompts")
        log.info("add_prompt() id=%s", prompt.id)
        self.select_prompt(prompt)
        return prompt

    def update_prompt(
        self,
        existing: PromptRef,
        title: str,
        content: str,
        tags: Iterable[str] = (),
        category: CategoryRef = None,
    ) -> Optional[Prompt]:
        idx = self._index_of(existing)
        if idx is None:
            log.debug("update_prompt(): %s no longer exists", _ref_id(existing))
            return None
        updated = self._prompts[idx].model_copy(update={
            "title": title,
            "content": content,
            "tags": clean_tags(tags),
            "category_id": self._resolve_category(category),
            "updated_at": self._stamp(),
        })
        prompts = list(self._prompts)
        prompts[idx] = updated
        self._commit(prompts, self._categories, "prompts")
        log.info("update_prompt() id=%s", updated.id)
        return updated

    def delete_prompt(self, prompt: PromptRef) -> Optional[Prompt]:
        idx = self._index_of(prompt)
        if idx is None:
            log.debug("delete_prompt(): %s already gone", _ref_id(prompt))
            return None
        prompts = list(self._prompts)
        removed = prompts.pop(idx)
        self._commit(prompts, self._categories, "prompts")
        log.info("delete_prompt() id=%s", removed.id)
        if self._selected_prompt_id == removed.id:
            self.select_prompt(self._prompts[0] if self._prompts else None)
        return removed

    def toggle_favorite(self, prompt: PromptRef) -> Optional[Prompt]:
        idx = self._index_of(prompt)
        if idx is None:
            log.debug("toggle_favorite(): %s no longer exists", _ref_id(prompt))
            return None
        current = self._prompts[idx]
        updated = current.model_copy(update={"is_favorite": not current.is_favorite, "updated_at": self._stamp()})
        prompts = list(self._prompts)
        prompts[idx] = updated
        self._commit(prompts, self._categories, "prompts")
        log.info("toggle_favorite() id=%s -> %s", updated.id, updated.is_favorite)
        return updated

    # ----------------- categories ------------------
    def add_category(self, name: str, color: Optional[str] = None) -> Category:
        category = Category(name=name, color=color or None, created_at=self._stamp())
        self._commit(self._prompts, self._categories + [category], "categories")
        log.info("add_category() id=%s name=%r", category.id, name)
        return category

    def delete_category(self, category: Union[Category, str]) -> Optional[Category]:
        """Remove a category. Prompts keep their reference, which then resolves to no category."""
        cid = _ref_id(category)
        removed = self.category_by_id(cid)
        if removed is None:
            log.debug("delete_category(): %s already gone", cid)
            return None
        remaining = [c for c in self._categories if c.id != cid]
        self._commit(self._prompts, remaining, "categories", "prompts")
        log.info("delete_category() id=%s", cid)
        if self._selected_category_id == cid:
            self._selected_category_id = None
            self._notify("filter")
        return removed

    # ----------------- filter state ----------------
    @property
    def search_text(self) -> str:
        return self._search_text

    def set_search_text(self, text: Optional[str]) -> None:
        text = text or ""
        if text != self._search_text:
            self._search_text = text
            self._notify("filter")

    @property
    def selected_category(self) -> Optional[Category]:
        return self.category_by_id(self._selected_category_id)

    def set_selected_category(self, category: CategoryRef) -> None:
        cid = self._resolve_category(category)
        if cid != self._selected_category_id:
            self._selected_category_id = cid
            self._notify("filter")

    @property
    def favorites_only(self) -> bool:
        return self._favorites_only

    def set_favorites_only(self, value: bool) -> None:
        value = bool(value)
        if value != self._favorites_only:
            self._favorites_only = value
            self._notify("filter")

    def reset_filters(self) -> None:
        self._search_text = ""
        self._selected_category_id = None
        self._favorites_only = False
        self._notify("filter")

    @property
    def filtered_prompts(self) -> List[Prompt]:
        return filter_prompts(self._prompts, self._search_text, self._selected_category_id, self._favorites_only)

    # ----------------- selection -------------------
    @property
    def selected_prompt(self) -> Optional[Prompt]:
        return self.get_prompt(self._selected_prompt_id) if self._selected_prompt_id else None

    def select_prompt(self, prompt: Optional[PromptRef]) -> None:
        pid = None
        if prompt is not None and self._index_of(prompt) is not None:
            pid = _ref_id(prompt)
        if pid != self._selected_prompt_id:
            self._selected_prompt_id = pid
            self._notify("selection")

    # ----------------- import / export -------------
    def export_record(self, prompt: Prompt) -> Dict[str, Any]:
        category = self.category_for(prompt)
        return prompt_record(prompt, category.name if category else None)

    def export_records(self) -> List[Dict[str, Any]]:
        return [self.export_record(p) for p in self._prompts]

    def export_all(self) -> Optional[bytes]:
        """Pretty-printed JSON array of all prompts, or None if encoding fails."""
        try:
            return dumps_records(self.export_records())
        except (TypeError, ValueError) as e:
            log.warning("Export failed: %s", e)
            return None

    def import_all(self, data: bytes) -> ImportResult:
        try:
            raw = decode_json(data)
        except ValueError as e:
            log.warning("Import failed, data is not valid JSON: %s", e)
            return ImportResult()
        return self.import_entries(raw)

    def import_entries(self, raw: Any) -> ImportResult:
        """Add every valid entry as a new prompt with a fresh id; invalid entries are skipped."""
        try:
            rows, skipped = parse_rows(raw)
        except ValueError as e:
            log.warning("Import failed: %s", e)
            return ImportResult()

        added: List[Prompt] = []
        for row in rows:
            category = self.category_by_id(row.category_id)
            if category is None and row.category:
                category = self.category_by_name(row.category)
            stamp = self._stamp()
            added.append(Prompt(
                title=row.title,
                content=row.content,
                tags=list(row.tags),
                category_id=category.id if category else None,
                is_favorite=row.is_favorite,
                created_at=stamp,
                updated_at=stamp,
            ))
        if added:
            self._commit(self._prompts + added, self._categories, "prompts")
        log.info("import: added=%d skipped=%d", len(added), skipped)
        return ImportResult(added=len(added), skipped=skipped)
