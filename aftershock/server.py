"""HTTP API of the content store."""

from __future__ import annotations

import argparse
import os
from typing import Any, Callable

from dotenv import load_dotenv
from flask import Flask, Response, jsonify, request

from .bridge import NewPost, UpdatePost
from .database import connect, run_migrations
from .errors import DatabaseError, StorageError
from .models import Content, UpdateContent
from .store import Store


class _RequestError(Exception):
    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message


def _json_body(parse: Callable[[Any], Any]) -> Any:
    if not request.is_json:
        raise _RequestError(
            415, "Expected request with `Content-Type: application/json`"
        )
    data = request.get_json(silent=True)
    if data is None:
        raise _RequestError(400, "Failed to parse the request body as JSON")
    try:
        return parse(data)
    except ValueError as error:
        raise _RequestError(
            422, f"Failed to deserialize the JSON body into the target type: {error}"
        ) from error


def _content_dict(content: Content) -> dict[str, Any]:
    return {
        "id": content.id,
        "kind": content.kind.name.title(),
        "created_at": content.created_at,
        "updated_at": content.updated_at,
        "title": content.title,
        "body": content.body,
        "published": content.published,
        "uid": content.uid,
        "summary": content.summary,
    }


def _plain(text: str, status: int) -> Response:
    return Response(text, status=status, mimetype="text/plain")


def create_app(store: Store) -> Flask:
    """Build the API application serving the given store."""
    app = Flask(__name__)

    @app.errorhandler(StorageError)
    def _storage_error(error: StorageError) -> Response:
        return _plain(error.detail, int(error.status()))

    @app.errorhandler(_RequestError)
    def _request_error(error: _RequestError) -> Response:
        return _plain(error.message, error.status)

    def published(kind: str) -> Callable[[], Response]:
        return lambda: jsonify([post.to_dict() for post in store.published_contents(kind)])

    def published_meta(kind: str) -> Callable[[], Response]:
        return lambda: jsonify([m.to_dict() for m in store.published_contents_meta(kind)])

    def everything(kind: str) -> Callable[[], Response]:
        return lambda: jsonify([post.to_dict() for post in store.all_contents(kind)])

    def everything_meta(kind: str) -> Callable[[], Response]:
        return lambda: jsonify([m.to_dict() for m in store.all_contents_meta(kind)])

    def create() -> Response:
        new_post = _json_body(NewPost.from_dict)
        return jsonify(store.create_content(new_post).to_dict())

    def by_uid(post_uid: str) -> Response:
        if request.method == "PUT":
            update = _json_body(UpdateContent.from_dict)
            return jsonify(store.update_content_by_uid(post_uid, update).to_dict())
        if request.method == "DELETE":
            return jsonify(store.delete_content_by_uid(post_uid).to_dict())
        return jsonify(store.get_content_by_uid(post_uid).to_dict())

    def by_id(post_id: int) -> Response:
        if request.method == "PUT":
            update = _json_body(UpdatePost.from_dict)
            return jsonify(store.update_content_by_id(post_id, update).to_dict())
        if request.method == "DELETE":
            return jsonify(store.delete_content_by_id(post_id).to_dict())
        return jsonify(_content_dict(store.get_content_by_id(post_id)))

    methods = ["GET", "PUT", "DELETE"]
    for kind in ("post", "page"):
        base = f"/api/v1/{kind}s"
        app.add_url_rule(base, f"{kind}s_published", published(kind), methods=["GET"])
        app.add_url_rule(base, f"{kind}s_create", create, methods=["POST"])
        app.add_url_rule(f"{base}/all", f"{kind}s_all", everything(kind))
        # The pages meta listing has always answered with the posts' metadata.
        app.add_url_rule(f"{base}/meta", f"{kind}s_meta", published_meta("post"))
        app.add_url_rule(f"{base}/all-meta", f"{kind}s_all_meta", everything_meta(kind))
        app.add_url_rule(
            f"{base}/uid/<post_uid>", f"{kind}s_by_uid", by_uid, methods=methods
        )
    app.add_url_rule("/api/v1/posts/<int:post_id>", "posts_by_id", by_id, methods=methods)
    return app


def main(argv: list[str] | None = None) -> int:
    """Run the storage API server."""
    parser = argparse.ArgumentParser(
        prog="aftershock-storage", description="Serve the content store over HTTP."
    )
    parser.add_argument("--host", default="0.0.0.0", help="address to listen on")
    parser.add_argument("--port", type=int, help="port (default: $AFTERSHOCK_DB_PORT)")
    args = parser.parse_args(argv)

    load_dotenv()
    port = args.port
    if port is None:
        raw = os.environ.get("AFTERSHOCK_DB_PORT")
        if not raw:
            parser.error("AFTERSHOCK_DB_PORT is expected")
        try:
            port = int(raw)
        except ValueError:
            parser.error(f"AFTERSHOCK_DB_PORT is not a port number: {raw}")

    try:
        connection = connect()
        run_migrations(connection)
    except DatabaseError as error:
        raise SystemExit(f"Fail to run migrations: {error}") from error

    create_app(Store(connection)).run(host=args.host, port=port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())