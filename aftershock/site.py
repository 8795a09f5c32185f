"""The public web site: pages rendered from the content store's API."""

from __future__ import annotations

import argparse
import os
from urllib.parse import quote

import requests
from flask import Flask, Response
from markupsafe import Markup

from .bridge import Post, PostMeta
from .views import (
    MSG_ARCHIVE_PLACEHOLDER,
    MSG_DATA_NOT_FOUND,
    MSG_LOAD_DATA_FAILURE,
    TITLE,
    content_serif,
    header,
    message_box,
    post_meta_list,
    post_view,
    prose_content,
)

API_BASE = "http://127.0.0.1:3030/api/v1"
DEFAULT_ADDR = "127.0.0.1:3000"

_FAILURES = (requests.RequestException, ValueError)


class SiteApi:
    """Read-only access to the content store for the site."""

    def __init__(self, api_base: str = API_BASE, session: requests.Session | None = None) -> None:
        self.api_base = api_base.rstrip("/")
        self.session = session if session is not None else requests.Session()

    def _get(self, path: str) -> object:
        response = self.session.get(f"{self.api_base}{path}")
        return response.json()

    def published_posts_meta(self) -> list[PostMeta]:
        """Metadata of the published posts; raises on network or format errors."""
        data = self._get("/posts/meta")
        if not isinstance(data, list):
            raise ValueError("expected a JSON array")
        return [PostMeta.from_dict(item) for item in data]

    def post_by_uid(self, uid: str) -> Post:
        """A published post by its uid."""
        return Post.from_dict(self._get(f"/posts/uid/{quote(uid, safe='')}"))

    def page(self, name: str) -> Post:
        """A published page by its name."""
        return Post.from_dict(self._get(f"/pages/uid/{quote(name, safe='')}"))


def shell(body: str, title: str = TITLE) -> Markup:
    """The complete HTML document around a page body."""
    return Markup(
        "<!DOCTYPE html>"
        '<html lang="zh-CN">'
        "<head>"
        '<meta charset="utf-8"/>'
        '<meta name="viewport" content="width=device-width, initial-scale=1"/>'
        '<link rel="stylesheet" id="leptos" href="/pkg/aftershock.css"/>'
        "<title>{}</title>"
        "</head>"
        '<body class="bg-site-bg dark:bg-stone-800">{}</body>'
        "</html>"
    ).format(title, body)


def main_page(children: str) -> Markup:
    """The common layout: header followed by the page content."""
    return Markup(
        '<div class="bg-site-bg dark:bg-stone-800 text-site-text dark:text-stone-300 min-h-dvh">'
        '<div class="mx-auto sm:w-auto md:max-w-screen-md flex flex-col h-fit min-h-dvh px-2">'
        "{}"
        '<div class="my-3"></div>'
        "<main>{}</main>"
        "</div>"
        "</div>"
    ).format(header(), children)


def home_page(api: SiteApi) -> Markup:
    """The list of published posts, or a message when there is none."""
    try:
        metas = api.published_posts_meta()
    except _FAILURES:
        return message_box(MSG_LOAD_DATA_FAILURE)
    if not metas:
        return message_box(MSG_ARCHIVE_PLACEHOLDER)
    return post_meta_list(metas, True)


def about_page(api: SiteApi) -> Markup:
    """The body of the ``about`` page."""
    try:
        page = api.page("about")
    except _FAILURES:
        return message_box(MSG_DATA_NOT_FOUND)
    return content_serif(prose_content(page.body))


def archive_page() -> Markup:
    return message_box(MSG_ARCHIVE_PLACEHOLDER)


def error_page(msg: str) -> Markup:
    return message_box(msg)


def post_page(api: SiteApi, uid: str | None) -> tuple[Markup, str]:
    """A post's content and the document title to go with it."""
    if uid:
        try:
            post = api.post_by_uid(uid)
        except _FAILURES:
            pass
        else:
            return post_view(post), f"{post.title} - {TITLE}"
    return message_box(MSG_LOAD_DATA_FAILURE), TITLE


def create_app(api: SiteApi) -> Flask:
    """Build the site application reading from the given API."""
    app = Flask(__name__, static_folder=None)

    def render(content: str, title: str = TITLE, status: int = 200) -> Response:
        return Response(shell(main_page(content), title), status=status, mimetype="text/html")

    @app.get("/")
    def home() -> Response:
        return render(home_page(api))

    @app.get("/about")
    def about() -> Response:
        return render(about_page(api))

    @app.get("/posts/<uid>")
    def post(uid: str) -> Response:
        content, title = post_page(api, uid)
        return render(content, title)

    @app.get("/tags/<tag>")
    def tag(tag: str) -> Response:
        return render(archive_page())

    @app.errorhandler(404)
    def not_found(_error: Exception) -> Response:
        return render(error_page(MSG_DATA_NOT_FOUND), status=404)

    return app


def _split_addr(parser: argparse.ArgumentParser, addr: str) -> tuple[str, int]:
    host, sep, port = addr.rpartition(":")
    if not sep or not host:
        parser.error(f"invalid address: {addr}")
    try:
        return host, int(port)
    except ValueError:
        parser.error(f"invalid port in address: {addr}")
    raise AssertionError("unreachable")


def main(argv: list[str] | None = None) -> int:
    """Serve the site."""
    parser = argparse.ArgumentParser(prog="aftershock-site", description="Serve the site.")
    parser.add_argument(
        "--addr",
        default=os.environ.get("LEPTOS_SITE_ADDR", DEFAULT_ADDR),
        help="host:port to listen on",
    )
    parser.add_argument("--api-base", default=API_BASE, help="base URL of the content store API")
    args = parser.parse_args(argv)
    host, port = _split_addr(parser, args.addr)

    print(f"listening on http://{host}:{port}")
    create_app(SiteApi(args.api_base)).run(host=host, port=port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())