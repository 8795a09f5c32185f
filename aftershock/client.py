"""Client of the content store API used by the command line."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import requests

from .bridge import Post, PostMeta, UpdatePost
from .document import ParsedDocument, parse

API_BASE = "http://127.0.0.1:3030/api/v1"


def _pretty(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def _read_document(path: str | Path) -> ParsedDocument:
    return parse(Path(path).read_text(encoding="utf-8"))


class Client:
    """Issues requests to the store and returns the answers as pretty JSON."""

    def __init__(self, api_base: str = API_BASE, session: requests.Session | None = None) -> None:
        self.api_base = api_base.rstrip("/")
        self.session = session if session is not None else requests.Session()

    def _url(self, kind: str, suffix: str = "") -> str:
        return f"{self.api_base}/{kind}s{suffix}"

    def _send_update(self, url: str, update: UpdatePost) -> Post:
        response = self.session.put(url, json=update.to_dict())
        return Post.from_dict(response.json())

    def add(self, kind: str, path: str | Path) -> str:
        """Create an item from a document; its declared kind must match."""
        new_post = _read_document(path).to_new_post()
        if new_post.kind != kind:
            raise ValueError("Kind doesn't match!")
        response = self.session.post(self._url(kind), json=new_post.to_dict())
        return _pretty(Post.from_dict(response.json()).to_dict())

    def list(self, kind: str) -> str:
        """Metadata of every item of a kind, published or not."""
        response = self.session.get(self._url(kind, "/all-meta"))
        data = response.json()
        if not isinstance(data, list):
            raise ValueError("expected a JSON array")
        return _pretty([PostMeta.from_dict(item).to_dict() for item in data])

    def view(self, kind: str, uid: str) -> str:
        """A published item, or ``null`` when the server cannot be reached."""
        try:
            response = self.session.get(self._url(kind, f"/uid/{uid}"))
        except requests.RequestException:
            return _pretty(None)
        return _pretty(Post.from_dict(response.json()).to_dict())

    def delete(self, kind: str, uid: str) -> str:
        response = self.session.delete(self._url(kind, f"/uid/{uid}"))
        return _pretty(Post.from_dict(response.json()).to_dict())

    def update(self, kind: str, path: str | Path, uid: str) -> str:
        """Replace an item's title and body with those of a document."""
        document = _read_document(path)
        update = UpdatePost(title=document.metadata.title, body=document.html)
        return _pretty(self._send_update(self._url(kind, f"/uid/{uid}"), update).to_dict())

    def publish(self, kind: str, uid: str) -> str:
        update = UpdatePost(published=True)
        return _pretty(self._send_update(self._url(kind, f"/uid/{uid}"), update).to_dict())