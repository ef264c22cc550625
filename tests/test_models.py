import pytest

from postboard.models import (
    Comment,
    CreateCommentRequest,
    CreatePostRequest,
    CreateUserRequest,
    Post,
    PostWithComments,
    UpdatePostRequest,
    User,
)


def test_user_to_dict():
    user = User(id=1, name="Ann", surname="Lee")
    assert user.to_dict() == {"id": 1, "name": "Ann", "surname": "Lee"}


def test_post_to_dict_key_order():
    post = Post(id=3, title="t", text="body", user_id=1)
    data = post.to_dict()
    assert list(data) == ["id", "title", "text", "user_id"]
    assert data["text"] == "body"


def test_comment_to_dict_key_order():
    comment = Comment(id=2, text="hi", post_id=3, user_id=1)
    assert list(comment.to_dict()) == ["id", "text", "post_id", "user_id"]


def test_post_with_comments_to_dict():
    comment = Comment(id=2, text="hi", post_id=3, user_id=1)
    result = PostWithComments(id=3, title="t", text="x", user_id=1, comments=[comment])
    data = result.to_dict()
    assert list(data) == ["id", "title", "text", "user_id", "comments"]
    assert data["comments"] == [{"id": 2, "text": "hi", "user_id": 1, "post_id": 3}]
    assert list(data["comments"][0]) == ["id", "text", "user_id", "post_id"]


def test_post_with_no_comments():
    assert PostWithComments(id=1, title="a", text="b", user_id=2).to_dict()["comments"] == []


def test_create_post_parse():
    req = CreatePostRequest.parse({"title": "T", "text": "B", "user_id": 5, "extra": 1})
    assert req == CreatePostRequest(title="T", text="B", user_id=5)


def test_create_post_missing_field():
    with pytest.raises(ValueError, match="missing field `user_id`"):
        CreatePostRequest.parse({"title": "T", "text": "B"})


@pytest.mark.parametrize("bad", ["5", 5.0, True, None, 2**31, -(2**31) - 1])
def test_create_post_bad_user_id(bad):
    with pytest.raises(ValueError):
        CreatePostRequest.parse({"title": "T", "text": "B", "user_id": bad})


def test_create_post_i32_bounds_accepted():
    low = CreatePostRequest.parse({"title": "T", "text": "B", "user_id": -(2**31)})
    high = CreatePostRequest.parse({"title": "T", "text": "B", "user_id": 2**31 - 1})
    assert (low.user_id, high.user_id) == (-(2**31), 2**31 - 1)


def test_create_post_rejects_non_object():
    with pytest.raises(ValueError):
        CreatePostRequest.parse(["T", "B", 1])


def test_create_user_parse():
    assert CreateUserRequest.parse({"name": "Ann", "surname": "Lee"}) == CreateUserRequest(
        name="Ann", surname="Lee"
    )


def test_create_user_wrong_type():
    with pytest.raises(ValueError, match="surname"):
        CreateUserRequest.parse({"name": "Ann", "surname": 3})


def test_create_comment_parse():
    req = CreateCommentRequest.parse({"text": "hi", "post_id": 2, "user_id": 1})
    assert (req.text, req.post_id, req.user_id) == ("hi", 2, 1)


def test_create_comment_missing_post():
    with pytest.raises(ValueError, match="post_id"):
        CreateCommentRequest.parse({"text": "hi", "user_id": 1})


def test_update_post_empty():
    assert UpdatePostRequest.parse({}) == UpdatePostRequest(title=None, text=None)


def test_update_post_null_and_value():
    req = UpdatePostRequest.parse({"title": None, "text": "new"})
    assert req.title is None and req.text == "new"


def test_update_post_wrong_type():
    with pytest.raises(ValueError):
        UpdatePostRequest.parse({"title": 1})


def test_update_post_rejects_non_object():
    with pytest.raises(ValueError):
        UpdatePostRequest.parse("title")