"""HTML fragments that make up the site's pages."""

from __future__ import annotations

from typing import Iterable

from markupsafe import Markup, escape

from .bridge import Post, PostMeta
from .dates import PreformattedDateTime, group_by

TITLE = "破碎镜隙映影"
MSG_LOAD_DATA_FAILURE = "无法从破碎镜隙映影中取回你想要的讯息。"
MSG_DATA_NOT_FOUND = "破碎镜隙映影中无法找到你想要的讯息。"
MSG_ARCHIVE_PLACEHOLDER = "正在从破碎镜隙映影中整理你想要的讯息。"

_PROSE_CLASSES = (
    "max-w-none prose md:prose-lg prose-stone dark:prose-invert prose-table:mx-2 "
    "prose-pre:font-af-mono prose-a:no-underline prose-a:text-blue-500 "
    "prose-a:hover:underline prose-table:overflow-x-auto prose-table:block "
    "prose-table:md:table"
)

_ICON_STYLE = "height:22px!important;margin-left:3px;vertical-align:text-bottom;"


def _join(parts: Iterable[str]) -> Markup:
    return Markup("").join(escape(part) for part in parts)


def content_serif(children: str) -> Markup:
    return Markup('<div class="font-af-serif font-medium text-xl">{}</div>').format(children)


def content_sans(children: str) -> Markup:
    return Markup('<div class="font-af-sans font-medium text-xl">{}</div>').format(children)


def prose_content(body: str) -> Markup:
    """Wrap already rendered HTML; the body is inserted as is."""
    return Markup('<div class="{}">{}</div>').format(_PROSE_CLASSES, Markup(body))


def license_badge() -> Markup:
    """The CC BY-NC-SA notice shown under every post."""
    icons = _join(
        Markup('<span style="{}" class="font-semibold">{}</span>').format(_ICON_STYLE, label)
        for label in ("CC", "BY", "NC", "SA")
    )
    return Markup(
        '<div class="flex flex-row gap-1 max-w-none my-4">'
        '<span class="flex flex-row" title="CC BY-NC-SA">{}</span>'
        "</div>"
    ).format(icons)


def message_box(msg: str) -> Markup:
    inner = content_sans(Markup("<p>{}</p>").format(msg))
    return Markup(
        '<div class="border-2 border-site-dark px-4 py-3 rounded-lg shadow-md '
        'flex justify-center items-center">{}</div>'
    ).format(inner)


def tag_link(tag: str) -> Markup:
    return Markup('<a href="/tags/{}">#{}</a>').format(tag, tag)


def tag_list_items(tags: Iterable[str]) -> Markup:
    return _join(Markup('<li class="max-w-fit">{}</li>').format(tag_link(tag)) for tag in tags)


def tag_list(tags: Iterable[str]) -> Markup:
    return Markup(
        '<ul class="grid grid-flow-col gap-0 justify-start max-w-fit italic">{}</ul>'
    ).format(tag_list_items(tags))


def af_time(timestamp: int) -> Markup:
    time = PreformattedDateTime.from_timestamp(timestamp)
    return Markup('<time datetime="{}" class="max-w-fit">{}</time>').format(
        time.machine_friendly, time.human_readable
    )


def post_view(post: Post) -> Markup:
    """A full article: title, date, tags, body and licence."""
    return Markup(
        '<article class="flex flex-col gap-0">'
        '<h1 class="font-af-serif text-3xl font-bold">{title}</h1>'
        '<div class="grid grid-flow-col gap-2 justify-start font-af-serif font-medium">'
        "{time}{tags}</div>"
        '<div class="my-5"></div>'
        "{body}"
        '<div class="flex flex-col justify-center items-center">'
        '<div class="my-4"></div>'
        '<div class="font-af-serif font-medium italic justify-center max-w-fit">fin</div>'
        "</div>"
        "{license}"
        "</article>"
    ).format(
        title=post.title,
        time=af_time(post.created_at),
        tags=tag_list(post.tags),
        body=content_serif(prose_content(post.body)),
        license=license_badge(),
    )


def post_meta_summary(url: str, children: str | None) -> Markup:
    return Markup('<a href="{}" class="font-medium mx-1">{}</a>').format(url, children or "")


def post_meta_item(time: PreformattedDateTime, meta: PostMeta, with_summary: bool) -> Markup:
    url = f"/posts/{meta.uid}"
    human_time = f"{time.month_abbr()} {time.day}"
    summary = post_meta_summary(url, meta.summary) if with_summary else Markup("")
    return Markup(
        '<div class="flex flex-col gap-1 sm:gap-2 md:gap-4">'
        '<div class="flex flex-row items-center gap-4 w-full font-semibold">'
        '<time datetime="{machine}" class="sm:pr-8 md:pr-16 text-right w-fit flex-shrink-0">'
        "{human}</time>"
        '<h2 class="flex-grow"><a href="{url}">{title}</a></h2>'
        '<ul class="flex flex-shrink-0 flex-row gap-1 ml-auto font-medium">{tags}</ul>'
        "</div>"
        "{summary}"
        "</div>"
    ).format(
        machine=time.machine_friendly,
        human=human_time,
        url=url,
        title=meta.title,
        tags=tag_list_items(meta.tags),
        summary=summary,
    )


def post_meta_section(
    title: str,
    entries: Iterable[tuple[PreformattedDateTime, PostMeta]],
    with_summary: bool,
) -> Markup:
    items = _join(post_meta_item(time, meta, with_summary) for time, meta in entries)
    return Markup(
        '<section class="flex flex-col gap-4">'
        '<h1 class="font-bold text-4xl">{}</h1>{}</section>'
    ).format(title, items)


def post_meta_list(metas: Iterable[PostMeta], with_summary: bool) -> Markup:
    """Posts grouped into sections by year, newest year first."""
    entries = [(PreformattedDateTime.from_timestamp(meta.created_at), meta) for meta in metas]
    groups = group_by(entries, lambda entry: entry[0].year, lambda entry: entry)
    sections = _join(
        post_meta_section(str(year), groups[year], with_summary)
        for year in sorted(groups, reverse=True)
    )
    return Markup('<div class="flex flex-col gap-4 font-af-serif">{}</div>').format(sections)


def header() -> Markup:
    return Markup(
        '<header class="grid grid-flow-row gap-2 font-af-serif pt-4">'
        '<a href="/" title="{title}" class="text-2xl font-bold">{title}</a>'
        "<nav>"
        '<ul class="grid grid-flow-col gap-4 justify-end font-semibold">'
        '<li class="max-w-fit"><a href="/">主页</a></li>'
        '<li class="max-w-fit"><a href="/about">关于</a></li>'
        "</ul>"
        "</nav>"
        '<div class="header-line w-full border border-site-dark"></div>'
        "</header>"
    ).format(title=TITLE)


def footer() -> Markup:
    return Markup(
        "<footer><div>Powered by Aftershock</div><div>(c) 2025 Aspirin</div></footer>"
    )