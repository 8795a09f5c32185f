"""Command line for managing posts and pages in the content store."""

from __future__ import annotations

import argparse
import sys

import requests

from .client import Client

VERSION = "0.2.2"


def _add_commands(parser: argparse.ArgumentParser, noun: str) -> None:
    actions = parser.add_subparsers(dest="action", required=True, metavar="COMMAND")

    add = actions.add_parser("add", help=f"Add a new {noun}")
    add.add_argument("-p", "--path", required=True)

    actions.add_parser("list", help=f"List current {noun}")

    view = actions.add_parser("view", help=f"View a specified {noun}")
    view.add_argument("-i", "--id", required=True)

    delete = actions.add_parser("delete", help=f"Delete a {noun}")
    delete.add_argument("-i", "--id", required=True)

    update = actions.add_parser("update", help=f"Update an existing {noun}")
    update.add_argument("-p", "--path", required=True)
    update.add_argument("-i", "--id", required=True)

    publish = actions.add_parser("publish", help=f"Publish a {noun}")
    publish.add_argument("-i", "--id", required=True)


def build_parser() -> argparse.ArgumentParser:
    """The argument parser of the command line."""
    parser = argparse.ArgumentParser(
        prog="aftershock", description="Manage posts and pages of the content store."
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {VERSION}")
    kinds = parser.add_subparsers(dest="group", required=True, metavar="KIND")

    article = kinds.add_parser("article", aliases=["post"], help="Post operations")
    article.set_defaults(kind="post")
    _add_commands(article, "post")

    page = kinds.add_parser("page", help="Page operations")
    page.set_defaults(kind="page")
    _add_commands(page, "post")
    return parser


def _run(client: Client, args: argparse.Namespace) -> str:
    kind = args.kind
    match args.action:
        case "add":
            return client.add(kind, args.path)
        case "list":
            return client.list(kind)
        case "view":
            return client.view(kind, args.id)
        case "delete":
            return client.delete(kind, args.id)
        case "update":
            return client.update(kind, args.path, args.id)
        case "publish":
            return client.publish(kind, args.id)
    raise ValueError(f"unknown command: {args.action}")


def main(argv: list[str] | None = None) -> int:
    """Run one command and print the store's answer."""
    args = build_parser().parse_args(argv)
    try:
        output = _run(Client(), args)
    except (OSError, ValueError, requests.RequestException) as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())