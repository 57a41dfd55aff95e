"""Tag input helpers.

- Split free-text tag input on commas or semicolons
- Trim each tag and drop empty entries (a plain string is split first)
- Order and duplicates are kept as entered
"""
from __future__ import annotations

import re
from typing import Any, Iterable, List, Optional

_SEPARATORS = re.compile(r"[,;]")


def split_tags(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return clean_tags(_SEPARATORS.split(text))


def clean_tags(tags: Optional[Iterable[Any]]) -> List[str]:
    if isinstance(tags, str):
        return split_tags(tags)
    result: List[str] = []
    for t in tags or []:
        s = str(t).strip()
        if s:
            result.append(s)
    return result


def join_tags(tags: Iterable[str]) -> str:
    return ", ".join(tags)
