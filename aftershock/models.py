"""Database records and the conversions between them and wire types."""

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Iterable, Mapping

from .bridge import NewPost, Post, UpdatePost
from .errors import ContentKindError, DatabaseError

UID_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-"
UID_LENGTH = 21


def now() -> int:
    """Current Unix time in whole seconds."""
    return int(time.time())


def new_uid() -> str:
    """A random identifier of 21 characters drawn from the uid alphabet."""
    return "".join(secrets.choice(UID_ALPHABET) for _ in range(UID_LENGTH))


class ContentKind(str, Enum):
    POST = "post"
    PAGE = "page"

    @classmethod
    def parse(cls, value: str) -> ContentKind:
        try:
            return cls(value)
        except ValueError:
            raise ContentKindError() from None

    def __str__(self) -> str:
        return self.value


@dataclass
class Tag:
    id: int
    tag: str

    def __str__(self) -> str:
        return self.tag


@dataclass
class ContentTag:
    content_id: int
    tag_id: int


@dataclass
class Content:
    id: int
    kind: ContentKind
    created_at: int
    updated_at: int
    title: str
    body: str
    published: bool
    uid: str
    summary: str | None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Content:
        """Build a record from a row of the contents table."""
        try:
            kind = ContentKind.parse(row["kind"])
        except ContentKindError:
            raise DatabaseError(f"Unrecognized content kind {row['kind']}") from None
        return cls(
            id=row["id"],
            kind=kind,
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            title=row["title"],
            body=row["body"],
            published=bool(row["published"]),
            uid=row["uid"],
            summary=row["summary"],
        )

    def into_post(self, tags: Iterable[Tag]) -> Post:
        return Post(
            uid=self.uid,
            kind=self.kind.value,
            created_at=self.created_at,
            updated_at=self.updated_at,
            title=self.title,
            tags=[tag.tag for tag in tags],
            body=self.body,
            summary=self.summary,
        )


@dataclass
class NewContent:
    kind: str
    created_at: int
    updated_at: int
    title: str
    body: str
    published: bool
    uid: str
    summary: str | None

    @classmethod
    def create(
        cls,
        kind: ContentKind,
        title: str,
        body: str,
        published: bool,
        summary: str | None,
    ) -> NewContent:
        """A fresh record; pages are addressed by their lower-cased title."""
        created_at = now()
        uid = title.lower() if kind is ContentKind.PAGE else new_uid()
        return cls(
            kind=kind.value,
            created_at=created_at,
            updated_at=created_at,
            title=title,
            body=body,
            published=published,
            uid=uid,
            summary=summary,
        )

    @classmethod
    def from_new_post(cls, post: NewPost) -> NewContent:
        return cls.create(
            ContentKind.parse(post.kind), post.title, post.body, post.published, post.summary
        )


@dataclass
class UpdateContent:
    created_at: int | None = None
    updated_at: int | None = None
    title: str | None = None
    body: str | None = None
    published: bool | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UpdateContent:
        if not isinstance(data, Mapping):
            raise ValueError("expected a JSON object")
        values = {}
        for item in fields(cls):
            value = data.get(item.name)
            if value is not None:
                if item.name in ("created_at", "updated_at"):
                    valid = isinstance(value, int) and not isinstance(value, bool)
                elif item.name == "published":
                    valid = isinstance(value, bool)
                else:
                    valid = isinstance(value, str)
                if not valid:
                    raise ValueError(f"invalid type for field `{item.name}`")
            values[item.name] = value
        return cls(**values)

    @classmethod
    def from_update_post(cls, update: UpdatePost) -> UpdateContent:
        return cls(title=update.title, body=update.body, published=update.published)

    def changes(self) -> dict[str, Any]:
        """The columns to set: every field that is not None."""
        return {
            item.name: getattr(self, item.name)
            for item in fields(self)
            if getattr(self, item.name) is not None
        }