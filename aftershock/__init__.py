"""A small blog: SQLite content store with a JSON API, Markdown publishing CLI and rendered site."""

__version__ = "0.2.2"