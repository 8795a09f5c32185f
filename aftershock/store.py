"""Queries and updates of posts, pages and their tags."""

from __future__ import annotations

import sqlite3
import threading
from collections import defaultdict
from contextlib import contextmanager
from typing import Any, Iterator, Sequence

from .bridge import NewPost, Post, PostMeta, UpdatePost
from .errors import DatabaseError, NotFoundError
from .models import Content, NewContent, Tag, UpdateContent, now

_RECORD_NOT_FOUND = "Record not found"
_POST_NOT_FOUND = "Post not found."


class Store:
    """Content storage backed by an SQLite connection."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        connection.row_factory = sqlite3.Row
        self._connection = connection
        self._lock = threading.RLock()

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        with self._lock:
            try:
                with self._connection:
                    yield self._connection
            except sqlite3.Error as error:
                raise DatabaseError(str(error)) from error

    @staticmethod
    def _tags_of(conn: sqlite3.Connection, content_id: int) -> list[Tag]:
        rows = conn.execute(
            "SELECT tags.id AS id, tags.tag AS tag FROM contents_tags "
            "JOIN tags ON tags.id = contents_tags.tag_id "
            "WHERE contents_tags.content_id = ? ORDER BY tags.id",
            (content_id,),
        )
        return [Tag(id=row["id"], tag=row["tag"]) for row in rows]

    @staticmethod
    def _first(conn: sqlite3.Connection, where: str, params: Sequence[Any]) -> Content | None:
        row = conn.execute(
            f"SELECT * FROM contents WHERE {where} ORDER BY id LIMIT 1", params
        ).fetchone()
        return None if row is None else Content.from_row(row)

    def _load_posts(self, where: str, params: Sequence[Any]) -> list[Post]:
        with self._transaction() as conn:
            contents = [
                Content.from_row(row)
                for row in conn.execute(
                    f"SELECT * FROM contents WHERE {where} ORDER BY id", params
                )
            ]
            tags: dict[int, list[Tag]] = defaultdict(list)
            rows = conn.execute(
                "SELECT contents_tags.content_id AS content_id, tags.id AS id, tags.tag AS tag "
                "FROM contents_tags "
                "JOIN tags ON tags.id = contents_tags.tag_id "
                "JOIN contents ON contents.id = contents_tags.content_id "
                f"WHERE {where} ORDER BY tags.id",
                params,
            )
            for row in rows:
                tags[row["content_id"]].append(Tag(id=row["id"], tag=row["tag"]))
        contents.sort(key=lambda content: content.created_at, reverse=True)
        return [content.into_post(tags[content.id]) for content in contents]

    def get_content_by_id(self, content_id: int) -> Content:
        """The raw record with the given id."""
        with self._transaction() as conn:
            content = self._first(conn, "contents.id = ?", (content_id,))
        if content is None:
            raise NotFoundError(_POST_NOT_FOUND)
        return content

    def published_contents(self, kind: str) -> list[Post]:
        """Published items of a kind, newest first."""
        return self._load_posts("contents.kind = ? AND contents.published = 1", (kind,))

    def published_contents_meta(self, kind: str) -> list[PostMeta]:
        return [post.meta() for post in self.published_contents(kind)]

    def all_contents(self, kind: str) -> list[Post]:
        """Every item of a kind, published or not, newest first."""
        return self._load_posts("contents.kind = ?", (kind,))

    def all_contents_meta(self, kind: str) -> list[PostMeta]:
        return [post.meta() for post in self.all_contents(kind)]

    def create_content(self, new_post: NewPost) -> Post:
        """Store a new item and attach its tags, creating missing ones."""
        record = NewContent.from_new_post(new_post)
        with self._transaction() as conn:
            cursor = conn.execute(
                "INSERT INTO contents "
                "(kind, created_at, updated_at, title, body, published, uid, summary) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    record.kind,
                    record.created_at,
                    record.updated_at,
                    record.title,
                    record.body,
                    record.published,
                    record.uid,
                    record.summary,
                ),
            )
            content_id = cursor.lastrowid
            tags: list[Tag] = []
            if new_post.tags:
                conn.executemany(
                    "INSERT OR IGNORE INTO tags (tag) VALUES (?)",
                    [(tag,) for tag in new_post.tags],
                )
                placeholders = ", ".join("?" for _ in new_post.tags)
                tags = [
                    Tag(id=row["id"], tag=row["tag"])
                    for row in conn.execute(
                        f"SELECT id, tag FROM tags WHERE tag IN ({placeholders}) ORDER BY id",
                        list(new_post.tags),
                    )
                ]
                conn.executemany(
                    "INSERT INTO contents_tags (content_id, tag_id) VALUES (?, ?)",
                    [(content_id, tag.id) for tag in tags],
                )
            content = self._first(conn, "contents.id = ?", (content_id,))
        if content is None:
            raise DatabaseError(_RECORD_NOT_FOUND)
        return content.into_post(tags)

    def delete_content_by_uid(self, uid: str) -> Post:
        """Remove the items with this uid and return the first of them."""
        with self._transaction() as conn:
            content = self._first(conn, "contents.uid = ?", (uid,))
            if content is None:
                raise DatabaseError(_RECORD_NOT_FOUND)
            tags = self._tags_of(conn, content.id)
            conn.execute(
                "DELETE FROM contents_tags WHERE content_id IN "
                "(SELECT id FROM contents WHERE uid = ?)",
                (uid,),
            )
            conn.execute("DELETE FROM contents WHERE uid = ?", (uid,))
        return content.into_post(tags)

    def update_content_by_uid(self, uid: str, update: UpdateContent) -> Post:
        """Apply a change set; publishing also resets the creation time."""
        timestamp = now()
        update.updated_at = timestamp
        if update.published:
            update.created_at = timestamp
        return self._update("contents.uid = ?", (uid,), update)

    def get_content_by_uid(self, uid: str) -> Post:
        """A published item with this uid, of any kind."""
        with self._transaction() as conn:
            content = self._first(
                conn, "contents.uid = ? AND contents.published = 1", (uid,)
            )
            if content is None:
                raise NotFoundError(_POST_NOT_FOUND)
            tags = self._tags_of(conn, content.id)
        return content.into_post(tags)

    def update_content_by_id(self, content_id: int, update: UpdatePost | UpdateContent) -> Post:
        """Apply a partial update to the item with this id."""
        if isinstance(update, UpdatePost):
            update = UpdateContent.from_update_post(update)
        update.updated_at = now()
        return self._update("contents.id = ?", (content_id,), update)

    def delete_content_by_id(self, content_id: int) -> Post:
        with self._transaction() as conn:
            content = self._first(conn, "contents.id = ?", (content_id,))
            if content is None:
                raise DatabaseError(_RECORD_NOT_FOUND)
            tags = self._tags_of(conn, content.id)
            conn.execute("DELETE FROM contents_tags WHERE content_id = ?", (content_id,))
            conn.execute("DELETE FROM contents WHERE id = ?", (content_id,))
        return content.into_post(tags)

    def _update(self, where: str, params: Sequence[Any], update: UpdateContent) -> Post:
        changes = update.changes()
        assignments = ", ".join(f"{column} = ?" for column in changes)
        with self._transaction() as conn:
            if self._first(conn, where, params) is None:
                raise DatabaseError(_RECORD_NOT_FOUND)
            conn.execute(
                f"UPDATE contents SET {assignments} WHERE {where}",
                [*changes.values(), *params],
            )
            content = self._first(conn, where, params)
            if content is None:
                raise DatabaseError(_RECORD_NOT_FOUND)
            tags = self._tags_of(conn, content.id)
        return content.into_post(tags)