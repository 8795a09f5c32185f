import pytest
import responses

from aftershock.site import (
    SiteApi,
    about_page,
    archive_page,
    create_app,
    error_page,
    home_page,
    main,
    main_page,
    post_page,
    shell,
)
from aftershock.views import (
    MSG_ARCHIVE_PLACEHOLDER,
    MSG_DATA_NOT_FOUND,
    MSG_LOAD_DATA_FAILURE,
    TITLE,
)

BASE = "http://api.example.com/api/v1"


def _post(uid="abc", title="Hello", body="<p>Body text</p>"):
    return {
        "uid": uid,
        "kind": "post",
        "created_at": 1700000000,
        "updated_at": 1700000000,
        "title": title,
        "tags": ["rust"],
        "body": body,
        "summary": "A summary",
    }


def _meta(uid="abc", title="Hello"):
    data = _post(uid, title)
    del data["body"]
    return data


def test_published_posts_meta_parses_list():
    with responses.RequestsMock() as rsps:
        rsps.get(f"{BASE}/posts/meta", json=[_meta("a", "First"), _meta("b", "Second")])
        metas = SiteApi(BASE).published_posts_meta()
    assert [m.uid for m in metas] == ["a", "b"]
    assert metas[1].title == "Second"


def test_published_posts_meta_rejects_non_list():
    with responses.RequestsMock() as rsps:
        rsps.get(f"{BASE}/posts/meta", json={"uid": "a"})
        with pytest.raises(ValueError):
            SiteApi(BASE).published_posts_meta()


def test_post_by_uid_round_trip():
    with responses.RequestsMock() as rsps:
        rsps.get(f"{BASE}/posts/uid/abc", json=_post())
        post = SiteApi(BASE).post_by_uid("abc")
    assert post.to_dict() == _post()


def test_post_by_uid_not_found_raises():
    with responses.RequestsMock() as rsps:
        rsps.get(f"{BASE}/posts/uid/missing", body="Post not found.", status=404)
        with pytest.raises(ValueError):
            SiteApi(BASE).post_by_uid("missing")


def test_page_uses_pages_endpoint():
    with responses.RequestsMock() as rsps:
        rsps.get(f"{BASE}/pages/uid/about", json=_post(uid="about", title="About"))
        page = SiteApi(BASE).page("about")
        assert rsps.calls[0].request.url == f"{BASE}/pages/uid/about"
    assert page.title == "About"


def test_home_page_lists_posts():
    with responses.RequestsMock() as rsps:
        rsps.get(f"{BASE}/posts/meta", json=[_meta("abc", "Hello")])
        html = home_page(SiteApi(BASE))
    assert 'href="/posts/abc"' in html
    assert "A summary" in html
    assert MSG_ARCHIVE_PLACEHOLDER not in html


def test_home_page_empty_shows_placeholder():
    with responses.RequestsMock() as rsps:
        rsps.get(f"{BASE}/posts/meta", json=[])
        html = home_page(SiteApi(BASE))
    assert MSG_ARCHIVE_PLACEHOLDER in html


def test_home_page_unreachable_shows_failure():
    with responses.RequestsMock():
        html = home_page(SiteApi(BASE))
    assert MSG_LOAD_DATA_FAILURE in html


def test_about_page_renders_body_verbatim():
    with responses.RequestsMock() as rsps:
        rsps.get(f"{BASE}/pages/uid/about", json=_post(uid="about", body="<p>About me</p>"))
        html = about_page(SiteApi(BASE))
    assert "<p>About me</p>" in html


def test_about_page_missing_shows_not_found():
    with responses.RequestsMock() as rsps:
        rsps.get(f"{BASE}/pages/uid/about", body="Post not found.", status=404)
        html = about_page(SiteApi(BASE))
    assert MSG_DATA_NOT_FOUND in html


def test_archive_page_is_placeholder():
    assert MSG_ARCHIVE_PLACEHOLDER in archive_page()


def test_error_page_escapes_message():
    html = error_page("<script>")
    assert "&lt;script&gt;" in html
    assert "<script>" not in html


def test_post_page_success_sets_title():
    with responses.RequestsMock() as rsps:
        rsps.get(f"{BASE}/posts/uid/abc", json=_post())
        content, title = post_page(SiteApi(BASE), "abc")
    assert title == f"Hello - {TITLE}"
    assert "<p>Body text</p>" in content


@pytest.mark.parametrize("uid", ["", None])
def test_post_page_without_uid_makes_no_request(uid):
    with responses.RequestsMock() as rsps:
        content, title = post_page(SiteApi(BASE), uid)
        assert len(rsps.calls) == 0
    assert title == TITLE
    assert MSG_LOAD_DATA_FAILURE in content


def test_post_page_failure_shows_message():
    with responses.RequestsMock() as rsps:
        rsps.get(f"{BASE}/posts/uid/gone", body="Post not found.", status=404)
        content, title = post_page(SiteApi(BASE), "gone")
    assert title == TITLE
    assert MSG_LOAD_DATA_FAILURE in content


def test_shell_wraps_and_escapes_title():
    html = shell("<p>x</p>", "a & b")
    assert html.startswith("<!DOCTYPE html>")
    assert 'lang="zh-CN"' in html
    assert "<title>a &amp; b</title>" in html
    assert "<p>x</p>" in html


def test_main_page_includes_header_and_children():
    html = main_page("<p>inner</p>")
    assert "<main><p>inner</p></main>" in html
    assert 'href="/about"' in html


def test_app_home_route():
    with responses.RequestsMock() as rsps:
        rsps.get(f"{BASE}/posts/meta", json=[])
        response = create_app(SiteApi(BASE)).test_client().get("/")
    text = response.get_data(as_text=True)
    assert response.status_code == 200
    assert f"<title>{TITLE}</title>" in text
    assert MSG_ARCHIVE_PLACEHOLDER in text


def test_app_post_route_title():
    with responses.RequestsMock() as rsps:
        rsps.get(f"{BASE}/posts/uid/abc", json=_post())
        response = create_app(SiteApi(BASE)).test_client().get("/posts/abc")
    assert f"<title>Hello - {TITLE}</title>" in response.get_data(as_text=True)


def test_app_tag_route_is_placeholder():
    response = create_app(SiteApi(BASE)).test_client().get("/tags/rust")
    assert response.status_code == 200
    assert MSG_ARCHIVE_PLACEHOLDER in response.get_data(as_text=True)


def test_app_unknown_route_is_not_found():
    response = create_app(SiteApi(BASE)).test_client().get("/nowhere")
    assert response.status_code == 404
    assert MSG_DATA_NOT_FOUND in response.get_data(as_text=True)


def test_main_rejects_bad_address():
    with pytest.raises(SystemExit) as info:
        main(["--addr", "nonsense"])
    assert info.value.code == 2