from __future__ import annotations

from typing import Iterable, List, Optional

from models.prompt import Prompt


def matches_search(prompt: Prompt, needle: str) -> bool:
    """Case-insensitive substring match on title, content or any tag."""
    q = needle.casefold()
    if q in prompt.title.casefold() or q in prompt.content.casefold():
        return True
    return any(q in t.casefold() for t in prompt.tags)


def sort_by_updated(prompts: Iterable[Prompt]) -> List[Prompt]:
    # sorted() is stable with reverse=True, so equal stamps keep insertion order
    return sorted(prompts, key=lambda p: p.updated_at, reverse=True)


def filter_prompts(
    prompts: Iterable[Prompt],
    search_text: str = "",
    category_id: Optional[str] = None,
    favorites_only: bool = False,
) -> List[Prompt]:
    """Visible subset of prompts, most recently updated first.

    Filters combine with AND; each one is skipped when its input is empty.
    """
    result = list(prompts)
    if search_text:
        result = [p for p in result if matches_search(p, search_text)]
    if category_id is not None:
        result = [p for p in result if p.category_id == category_id]
    if favorites_only:
        result = [p for p in result if p.is_favorite]
    return sort_by_updated(result)
