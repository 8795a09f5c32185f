"""Markdown documents with a TOML front matter block, rendered to HTML."""

from __future__ import annotations

import re
import tomllib
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

from markdown_it import MarkdownIt
from markdown_it.token import Token
from pygments import highlight as _render_tokens
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, get_lexer_for_filename
from pygments.lexers.special import TextLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .bridge import NewPost

DEFAULT_STYLE = "nord"

_TASK_MARKER = re.compile(r"\[([ xX])\][ \t]+")


@dataclass
class Metadata:
    """The front matter of a document."""

    title: str
    kind: str
    tags: list[str] = field(default_factory=list)
    summary: str | None = None


@dataclass
class ParsedDocument:
    """A document's metadata together with its rendered body."""

    metadata: Metadata
    html: str

    def to_new_post(self) -> NewPost:
        """A creation request for this document; it starts unpublished."""
        return NewPost(
            title=self.metadata.title,
            kind=self.metadata.kind,
            body=self.html,
            tags=list(self.metadata.tags),
            published=False,
            summary=self.metadata.summary,
        )


class Highlighter:
    """Renders code as inline-styled HTML."""

    def __init__(self, style: str = DEFAULT_STYLE) -> None:
        self.style = style
        self._formatter = HtmlFormatter(style=style, noclasses=True, nowrap=True)
        self._background = get_style_by_name(style).background_color

    @staticmethod
    def _lexer(lang: str) -> Lexer:
        token = lang.strip()
        if token:
            try:
                return get_lexer_by_name(token.lower(), stripnl=False)
            except ClassNotFound:
                pass
            try:
                return get_lexer_for_filename(f"file.{token}", stripnl=False)
            except ClassNotFound:
                pass
        return TextLexer(stripnl=False)

    def highlight(self, code: str, lang: str | None = None) -> str:
        """Highlight code in the named language, falling back to plain text."""
        inner = _render_tokens(code, self._lexer(lang or ""), self._formatter)
        return f'<pre style="background-color:{self._background};">\n{inner}</pre>\n'


def _task_lists(state: Any) -> None:
    """Turn a leading ``[ ]`` or ``[x]`` in a list item into a checkbox."""
    tokens = state.tokens
    for position, token in enumerate(tokens):
        if token.type != "inline" or position < 2:
            continue
        if tokens[position - 1].type != "paragraph_open":
            continue
        if tokens[position - 2].type != "list_item_open":
            continue
        children = token.children or []
        if not children or children[0].type != "text":
            continue
        match = _TASK_MARKER.match(children[0].content)
        if match is None:
            continue
        checked = ' checked=""' if match.group(1) in "xX" else ""
        children[0].content = children[0].content[match.end():]
        box = Token("html_inline", "", 0)
        box.content = f'<input disabled="" type="checkbox"{checked}/>\n'
        children.insert(0, box)


def _build_markdown(highlighter: Highlighter) -> MarkdownIt:
    md = MarkdownIt("commonmark").enable(["table", "strikethrough"])
    md.core.ruler.push("task_lists", _task_lists)

    def fence(renderer, tokens, idx, options, env):
        token = tokens[idx]
        return highlighter.highlight(token.content, token.info)

    def code_block(renderer, tokens, idx, options, env):
        return highlighter.highlight(tokens[idx].content, "")

    md.add_render_rule("fence", fence)
    md.add_render_rule("code_block", code_block)
    md.add_render_rule("s_open", lambda renderer, tokens, idx, options, env: "<del>")
    md.add_render_rule("s_close", lambda renderer, tokens, idx, options, env: "</del>")
    return md


@lru_cache(maxsize=1)
def _markdown() -> MarkdownIt:
    return _build_markdown(Highlighter(DEFAULT_STYLE))


def _split_front_matter(text: str) -> tuple[str | None, str]:
    """Separate a leading ``---`` delimited block from the rest of the text."""
    lines = text.splitlines(keepends=True)
    if len(lines) < 2 or lines[0].rstrip() != "---" or not lines[1].strip():
        return None, text
    for position, line in enumerate(lines[1:], start=1):
        if line.rstrip() in ("---", "..."):
            return "".join(lines[1:position]), "".join(lines[position + 1:])
    return None, text


def _parse_metadata(source: str) -> Metadata:
    try:
        data = tomllib.loads(source)
    except tomllib.TOMLDecodeError as error:
        raise ValueError(f"invalid document metadata: {error}") from error

    def required_str(name: str) -> str:
        if name not in data:
            raise ValueError(f"missing field `{name}`")
        if not isinstance(data[name], str):
            raise ValueError(f"invalid type for field `{name}`: expected a string")
        return data[name]

    if "tags" not in data:
        raise ValueError("missing field `tags`")
    tags = data["tags"]
    if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
        raise ValueError("invalid type for field `tags`: expected a list of strings")
    summary = data.get("summary")
    if summary is not None and not isinstance(summary, str):
        raise ValueError("invalid type for field `summary`: expected a string")
    return Metadata(
        title=required_str("title"),
        kind=required_str("kind"),
        tags=list(tags),
        summary=summary,
    )


def parse(text: str) -> ParsedDocument:
    """Read a document's front matter and render its body to HTML."""
    front_matter, body = _split_front_matter(text)
    metadata = _parse_metadata(front_matter or "")
    return ParsedDocument(metadata=metadata, html=_markdown().render(body))