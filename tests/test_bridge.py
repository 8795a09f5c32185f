import json

import pytest

from aftershock.bridge import NewPost, Post, PostMeta, UpdatePost


def _post(**overrides):
    values = dict(
        uid="abc",
        kind="post",
        created_at=100,
        updated_at=200,
        title="Hello",
        tags=["rust", "web"],
        body="<p>hi</p>",
        summary="short",
    )
    values.update(overrides)
    return Post(**values)


def test_post_round_trip_through_json():
    post = _post()
    decoded = Post.from_dict(json.loads(json.dumps(post.to_dict())))
    assert decoded == post


def test_post_key_order_follows_fields():
    assert list(_post().to_dict()) == [
        "uid", "kind", "created_at", "updated_at", "title", "tags", "body", "summary",
    ]


def test_post_summary_may_be_missing():
    data = _post().to_dict()
    del data["summary"]
    assert Post.from_dict(data).summary is None


def test_post_missing_required_field():
    data = _post().to_dict()
    del data["body"]
    with pytest.raises(ValueError, match="body"):
        Post.from_dict(data)


def test_post_wrong_type_rejected():
    data = _post().to_dict()
    data["created_at"] = "yesterday"
    with pytest.raises(ValueError, match="created_at"):
        Post.from_dict(data)


def test_post_meta_drops_body():
    post = _post()
    meta = post.meta()
    assert meta == PostMeta(
        uid=post.uid,
        kind=post.kind,
        created_at=post.created_at,
        updated_at=post.updated_at,
        title=post.title,
        tags=post.tags,
        summary=post.summary,
    )
    assert "body" not in meta.to_dict()


def test_post_meta_round_trip():
    meta = _post(summary=None).meta()
    assert PostMeta.from_dict(meta.to_dict()) == meta


def test_new_post_round_trip():
    new_post = NewPost(title="T", kind="page", body="b", tags=[], published=True, summary=None)
    assert NewPost.from_dict(new_post.to_dict()) == new_post


def test_new_post_requires_published():
    with pytest.raises(ValueError, match="published"):
        NewPost.from_dict({"title": "T", "kind": "post", "body": "b", "tags": []})


def test_update_post_defaults_to_none():
    assert UpdatePost.from_dict({}) == UpdatePost(None, None, None)


def test_update_post_round_trip():
    update = UpdatePost(title="New", body=None, published=True)
    assert UpdatePost.from_dict(update.to_dict()) == update
    assert update.to_dict() == {"title": "New", "body": None, "published": True}