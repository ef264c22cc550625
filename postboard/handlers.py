"""HTTP handlers for users, posts and comments."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Blueprint, Response, abort, current_app, jsonify, request

from .models import (
    CreateCommentRequest,
    CreatePostRequest,
    CreateUserRequest,
    PostWithComments,
    UpdatePostRequest,
)
from .repository import Database, DatabaseError

DATABASE_KEY = "postboard.database"

blueprint = Blueprint("postboard", __name__)

_log = logging.getLogger(__name__)
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1

_T = TypeVar("_T")


class _BadBody(Exception):
    """The request body could not be read as the expected JSON object."""


def _text(message: str, status: int) -> Response:
    return Response(message, status=status, mimetype="text/plain")


def _database() -> Database:
    return current_app.extensions[DATABASE_KEY]


def _body(parse: Callable[[Any], _T]) -> _T:
    if not request.is_json:
        raise _BadBody("Content type error")
    try:
        data = json.loads(request.get_data(as_text=True))
        return parse(data)
    except ValueError as exc:
        raise _BadBody(f"Json deserialize error: {exc}") from exc


@blueprint.errorhandler(_BadBody)
def _bad_body(exc: _BadBody) -> Response:
    return _text(str(exc), 400)


@blueprint.url_value_preprocessor
def _check_ids(endpoint: str | None, values: dict[str, Any] | None) -> None:
    for value in (values or {}).values():
        if isinstance(value, int) and not _I32_MIN <= value <= _I32_MAX:
            abort(404)


# creation


@blueprint.post("/posts")
def create_post() -> Response:
    data = _body(CreatePostRequest.parse)
    db = _database()
    try:
        existing = db.find_post_by_title(data.title, data.user_id)
    except DatabaseError as exc:
        _log.error("DB query error : %s", exc)
        return _text("Error Checking existing post", 500)
    if existing is not None:
        return _text("Post with same title already exists for this user", 409)
    try:
        saved = db.insert_post(data.title, data.text, data.user_id)
    except DatabaseError as exc:
        _log.error("DB error: %s", exc)
        return _text("Error saving post", 500)
    return jsonify(saved.to_dict())


@blueprint.post("/create_user")
def create_user() -> Response:
    data = _body(CreateUserRequest.parse)
    db = _database()
    try:
        existing = db.find_user_by_name(data.name, data.surname)
    except DatabaseError as exc:
        _log.error("Query error: %s", exc)
        return _text("Error checking user", 500)
    if existing is not None:
        return _text("User already exists", 409)
    try:
        saved = db.insert_user(data.name, data.surname)
    except DatabaseError as exc:
        _log.error("DB error: %s", exc)
        return _text("Error create user", 500)
    return jsonify(saved.to_dict())


@blueprint.post("/create_comm")
def create_comm() -> Response:
    data = _body(CreateCommentRequest.parse)
    db = _database()
    try:
        post = db.find_post(data.post_id)
    except DatabaseError as exc:
        _log.error("Post check error: %s", exc)
        return _text("Failed to check post", 500)
    if post is None:
        return _text("Post not found", 404)
    try:
        existing = db.find_comment(data.text, data.user_id, data.post_id)
    except DatabaseError as exc:
        _log.error("Comment query error: %s", exc)
        return _text("Failed to check comment", 500)
    if existing is not None:
        return _text("This comment already exists", 409)
    try:
        saved = db.insert_comment(data.text, data.post_id, data.user_id)
    except DatabaseError as exc:
        _log.error("DB insert error %s", exc)
        return _text("Failed to save comment", 500)
    return jsonify(saved.to_dict())


# reading


@blueprint.get("/posts")
def get_all_posts() -> Response:
    try:
        posts = _database().all_posts()
    except DatabaseError as exc:
        _log.error("DB error: %s", exc)
        return _text("Error fetching posts", 500)
    return jsonify([post.to_dict() for post in posts])


@blueprint.get("/posts/<int(signed=True):post_id>")
def get_id_post(post_id: int) -> Response:
    try:
        post = _database().find_post(post_id)
    except DatabaseError as exc:
        _log.error("Db error: %s", exc)
        return _text("Error fetching post", 500)
    if post is None:
        return _text("Post not found", 404)
    return jsonify(post.to_dict())


@blueprint.get("/posts/<int(signed=True):post_id>/with_comment")
def get_post_with_comments(post_id: int) -> Response:
    db = _database()
    try:
        post = db.find_post(post_id)
    except DatabaseError:
        post = None
    if post is None:
        return _text("Post not found", 404)
    try:
        comments = db.comments_for_post(post_id)
    except DatabaseError:
        comments = []
    result = PostWithComments(
        id=post.id,
        title=post.title,
        text=post.text,
        user_id=post.user_id,
        comments=comments,
    )
    return jsonify(result.to_dict())


@blueprint.get("/users")
def user_info_all() -> Response:
    try:
        users = _database().all_users()
    except DatabaseError as exc:
        _log.error("Error user get: %s", exc)
        return _text("Error featching users", 500)
    return jsonify([user.to_dict() for user in users])


@blueprint.get("/users/<int(signed=True):user_id>")
def user_info_id(user_id: int) -> Response:
    try:
        user = _database().find_user(user_id)
    except DatabaseError as exc:
        _log.error("DB error : %s", exc)
        return _text("Error fetching user", 500)
    if user is None:
        return _text("User not found", 404)
    return jsonify(user.to_dict())


# deletion


@blueprint.delete("/posts/<int(signed=True):post_id>")
def delete_post(post_id: int) -> Response:
    db = _database()
    try:
        post = db.find_post(post_id)
    except DatabaseError as exc:
        _log.error("DB error: %s", exc)
        return _text("Database error", 500)
    if post is None:
        return _text("Post not found", 404)
    try:
        db.delete_comments_for_post(post_id)
    except DatabaseError as exc:
        _log.error("Error deleting comments: %s", exc)
        return _text("Failed to delete comments", 500)
    try:
        db.delete_post(post_id)
    except DatabaseError as exc:
        _log.error("Error deleting post:%s", exc)
        return _text("Failed to delete post", 500)
    return _text("Post and its comments delete", 200)


@blueprint.delete("/users/<int(signed=True):user_id>")
def user_delete(user_id: int) -> Response:
    db = _database()
    try:
        user = db.find_user(user_id)
    except DatabaseError as exc:
        _log.error("DB query error: %s", exc)
        return _text("Database error", 500)
    if user is None:
        return _text("User not found", 404)
    try:
        db.delete_user(user_id)
    except DatabaseError as exc:
        _log.error("DB error while deleting %s", exc)
        return _text("Error deleting user", 500)
    return _text("User delete", 200)


# updating


@blueprint.put("/posts/<int(signed=True):post_id>")
def update_post(post_id: int) -> Response:
    data = _body(UpdatePostRequest.parse)
    db = _database()
    try:
        post = db.find_post(post_id)
    except DatabaseError as exc:
        _log.error("DB error: %s", exc)
        return _text("Database error", 500)
    if post is None:
        return _text("Post not found", 404)
    try:
        updated = db.update_post(post_id, data.title, data.text)
    except DatabaseError as exc:
        _log.error("Error updating post: %s", exc)
        return _text("Failed to update post", 500)
    return jsonify(updated.to_dict())