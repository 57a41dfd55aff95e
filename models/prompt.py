from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _Record(BaseModel):
    # camelCase on disk, snake_case in code
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("created_at", "updated_at", mode="after", check_fields=False)
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class Category(_Record):
    id: str = Field(default_factory=new_id)
    name: str
    color: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")


class Prompt(_Record):
    id: str = Field(default_factory=new_id)
    title: str
    content: str
    tags: List[str] = Field(default_factory=list)

    # Weak reference: resolved against the category collection at read time
    category_id: Optional[str] = Field(default=None, alias="categoryId")
    is_favorite: bool = Field(default=False, alias="isFavorite")

    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")
    updated_at: datetime = Field(default_factory=utcnow, alias="updatedAt")
