"""Wire types exchanged between the storage service, the CLI and the site."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


_CHECKS = {
    "str": (lambda v: isinstance(v, str), "a string"),
    "int": (_is_int, "an integer"),
    "bool": (lambda v: isinstance(v, bool), "a boolean"),
    "tags": (
        lambda v: isinstance(v, list) and all(isinstance(t, str) for t in v),
        "a list of strings",
    ),
}


def _field(data: Mapping[str, Any], name: str, kind: str, optional: bool = False) -> Any:
    """Fetch and type-check one field of a decoded JSON object."""
    if not isinstance(data, Mapping):
        raise ValueError("expected a JSON object")
    if name not in data or (optional and data[name] is None):
        if optional:
            return None
        raise ValueError(f"missing field `{name}`")
    value = data[name]
    check, description = _CHECKS[kind]
    if not check(value):
        raise ValueError(f"invalid type for field `{name}`: expected {description}")
    return list(value) if kind == "tags" else value


@dataclass
class PostMeta:
    """A post without its body."""

    uid: str
    kind: str
    created_at: int
    updated_at: int
    title: str
    tags: list[str] = field(default_factory=list)
    summary: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PostMeta:
        return cls(
            uid=_field(data, "uid", "str"),
            kind=_field(data, "kind", "str"),
            created_at=_field(data, "created_at", "int"),
            updated_at=_field(data, "updated_at", "int"),
            title=_field(data, "title", "str"),
            tags=_field(data, "tags", "tags"),
            summary=_field(data, "summary", "str", optional=True),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "uid": self.uid,
            "kind": self.kind,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "title": self.title,
            "tags": list(self.tags),
            "summary": self.summary,
        }


@dataclass
class Post:
    """A stored post or page as served by the API."""

    uid: str
    kind: str
    created_at: int
    updated_at: int
    title: str
    tags: list[str]
    body: str
    summary: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Post:
        return cls(
            uid=_field(data, "uid", "str"),
            kind=_field(data, "kind", "str"),
            created_at=_field(data, "created_at", "int"),
            updated_at=_field(data, "updated_at", "int"),
            title=_field(data, "title", "str"),
            tags=_field(data, "tags", "tags"),
            body=_field(data, "body", "str"),
            summary=_field(data, "summary", "str", optional=True),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "uid": self.uid,
            "kind": self.kind,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "title": self.title,
            "tags": list(self.tags),
            "body": self.body,
            "summary": self.summary,
        }

    def meta(self) -> PostMeta:
        """Return the post's metadata, dropping the body."""
        return PostMeta(
            uid=self.uid,
            kind=self.kind,
            created_at=self.created_at,
            updated_at=self.updated_at,
            title=self.title,
            tags=list(self.tags),
            summary=self.summary,
        )


@dataclass
class NewPost:
    """A post submitted for creation."""

    title: str
    kind: str
    body: str
    tags: list[str]
    published: bool
    summary: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NewPost:
        return cls(
            title=_field(data, "title", "str"),
            kind=_field(data, "kind", "str"),
            body=_field(data, "body", "str"),
            tags=_field(data, "tags", "tags"),
            published=_field(data, "published", "bool"),
            summary=_field(data, "summary", "str", optional=True),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "kind": self.kind,
            "body": self.body,
            "tags": list(self.tags),
            "published": self.published,
            "summary": self.summary,
        }


@dataclass
class UpdatePost:
    """A partial update; fields left as None are not changed."""

    title: str | None = None
    body: str | None = None
    published: bool | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UpdatePost:
        return cls(
            title=_field(data, "title", "str", optional=True),
            body=_field(data, "body", "str", optional=True),
            published=_field(data, "published", "bool", optional=True),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "body": self.body, "published": self.published}