from aftershock import views
from aftershock.bridge import Post, PostMeta
from aftershock.dates import PreformattedDateTime


def _meta(uid, created_at, title="Title", tags=None, summary=None):
    return PostMeta(
        uid=uid,
        kind="post",
        created_at=created_at,
        updated_at=created_at,
        title=title,
        tags=tags or [],
        summary=summary,
    )


def test_tag_link_points_to_tag_page():
    html = str(views.tag_link("rust"))
    assert 'href="/tags/rust"' in html
    assert "#rust" in html


def test_tag_link_escapes():
    html = str(views.tag_link("<b>"))
    assert "<b>" not in html
    assert "&lt;b&gt;" in html


def test_tag_list_items_one_per_tag_in_order():
    html = str(views.tag_list_items(["a", "b", "c"]))
    assert html.count("<li") == 3
    assert html.index("/tags/a") < html.index("/tags/b") < html.index("/tags/c")


def test_tag_list_wraps_items_in_ul():
    items = str(views.tag_list_items(["x"]))
    html = str(views.tag_list(["x"]))
    assert html.startswith("<ul")
    assert items in html


def test_content_wrappers_escape_plain_text():
    assert "&lt;i&gt;" in str(views.content_serif("<i>"))
    assert "&lt;i&gt;" in str(views.content_sans("<i>"))
    assert "font-af-serif" in str(views.content_serif("x"))
    assert "font-af-sans" in str(views.content_sans("x"))


def test_prose_content_keeps_html():
    body = "<p>Hello <em>world</em></p>"
    assert body in str(views.prose_content(body))


def test_message_box_shows_message():
    html = str(views.message_box(views.MSG_DATA_NOT_FOUND))
    assert f"<p>{views.MSG_DATA_NOT_FOUND}</p>" in html


def test_af_time_uses_preformatted_values():
    time = PreformattedDateTime.from_timestamp(1700000000)
    html = str(views.af_time(1700000000))
    assert f'datetime="{time.machine_friendly}"' in html
    assert f">{time.human_readable}</time>" in html


def test_header_has_title_and_links():
    html = str(views.header())
    assert views.TITLE in html
    assert 'href="/about"' in html


def test_footer_text():
    assert "Powered by Aftershock" in str(views.footer())


def test_license_badge_names_license():
    html = str(views.license_badge())
    assert "CC BY-NC-SA" in html


def test_post_view_contains_parts():
    post = Post(
        uid="abc",
        kind="post",
        created_at=1700000000,
        updated_at=1700000000,
        title="A <title>",
        tags=["one", "two"],
        body="<p>content</p>",
    )
    html = str(views.post_view(post))
    assert "A &lt;title&gt;" in html
    assert "<p>content</p>" in html
    assert "/tags/one" in html and "/tags/two" in html
    assert str(views.af_time(1700000000)) in html
    assert str(views.license_badge()) in html


def test_post_meta_item_link_and_time():
    meta = _meta("uid1", 1700000000, title="Hello", summary="Short")
    time = PreformattedDateTime.from_timestamp(meta.created_at)
    html = str(views.post_meta_item(time, meta, True))
    assert 'href="/posts/uid1"' in html
    assert f"{time.month_abbr()} {time.day}</time>" in html
    assert "Short" in html


def test_post_meta_item_without_summary():
    meta = _meta("uid1", 1700000000, summary="Short")
    time = PreformattedDateTime.from_timestamp(meta.created_at)
    html = str(views.post_meta_item(time, meta, False))
    assert "Short" not in html
    assert 'class="font-medium mx-1"' not in html


def test_post_meta_summary_handles_missing_text():
    html = str(views.post_meta_summary("/posts/x", None))
    assert html == '<a href="/posts/x" class="font-medium mx-1"></a>'


def test_post_meta_list_groups_by_year_newest_first():
    old = _meta("old", 0, title="Old")
    new = _meta("new", 1700000000, title="New")
    newer = _meta("newer", 1700000100, title="Newer")
    old_year = PreformattedDateTime.from_timestamp(old.created_at).year
    new_year = PreformattedDateTime.from_timestamp(new.created_at).year
    html = str(views.post_meta_list([old, new, newer], False))
    assert html.count("<section") == 2
    assert html.index(f">{new_year}</h1>") < html.index(f">{old_year}</h1>")
    assert html.index("/posts/new\"") < html.index("/posts/newer\"")


def test_post_meta_section_lists_entries():
    metas = [_meta("a", 100), _meta("b", 200)]
    entries = [(PreformattedDateTime.from_timestamp(m.created_at), m) for m in metas]
    html = str(views.post_meta_section("Year", entries, False))
    assert ">Year</h1>" in html
    assert html.count("<h2") == 2


def test_post_meta_list_empty():
    html = str(views.post_meta_list([], True))
    assert "<section" not in html
    assert html.startswith("<div")