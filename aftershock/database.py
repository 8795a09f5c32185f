"""SQLite connection handling and the schema of the content store."""

from __future__ import annotations

import os
import sqlite3
from typing import Mapping

from dotenv import load_dotenv

from .errors import DatabaseError

SCHEMA_VERSION = 1

SCHEMA = """
CREATE TABLE IF NOT EXISTS contents (
    id INTEGER PRIMARY KEY AUTOINCREMENT NOT NULL,
    kind TEXT NOT NULL,
    created_at BIGINT NOT NULL,
    updated_at BIGINT NOT NULL,
    title TEXT NOT NULL,
    body TEXT NOT NULL,
    published BOOLEAN NOT NULL,
    uid TEXT NOT NULL,
    summary TEXT
);
CREATE TABLE IF NOT EXISTS tags (
    id INTEGER PRIMARY KEY AUTOINCREMENT NOT NULL,
    tag TEXT NOT NULL UNIQUE
);
CREATE TABLE IF NOT EXISTS contents_tags (
    content_id INTEGER NOT NULL REFERENCES contents(id),
    tag_id INTEGER NOT NULL REFERENCES tags(id),
    PRIMARY KEY (content_id, tag_id)
);
"""


def database_url(environ: Mapping[str, str] | None = None) -> str:
    """Read DATABASE_URL, loading a .env file when no mapping is given."""
    if environ is None:
        load_dotenv()
        environ = os.environ
    url = environ.get("DATABASE_URL")
    if not url:
        raise DatabaseError("DATABASE_URL is expected.")
    return url


def connect(url: str | None = None) -> sqlite3.Connection:
    """Open the database named by a path, a ``sqlite://`` URL or a ``file:`` URI."""
    if url is None:
        url = database_url()
    uri = False
    if url.startswith("sqlite://"):
        url = url[len("sqlite://"):]
    elif url.startswith("file:"):
        uri = True
    try:
        connection = sqlite3.connect(url, uri=uri, check_same_thread=False)
    except sqlite3.Error as error:
        raise DatabaseError(str(error)) from error
    connection.row_factory = sqlite3.Row
    return connection


def run_migrations(connection: sqlite3.Connection) -> None:
    """Bring the schema up to date; running it again changes nothing."""
    try:
        (version,) = connection.execute("PRAGMA user_version").fetchone()
        if version >= SCHEMA_VERSION:
            return
        connection.executescript(SCHEMA)
        connection.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
        connection.commit()
    except sqlite3.Error as error:
        raise DatabaseError(f"migration failed: {error}") from error