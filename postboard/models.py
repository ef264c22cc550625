"""Records stored by the post board and the request bodies it accepts."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_MISSING = object()


@dataclass(frozen=True)
class User:
    id: int
    name: str
    surname: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "surname": self.surname}


@dataclass(frozen=True)
class Post:
    id: int
    title: str
    text: str
    user_id: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "text": self.text,
            "user_id": self.user_id,
        }


@dataclass(frozen=True)
class Comment:
    id: int
    text: str
    post_id: int
    user_id: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "post_id": self.post_id,
            "user_id": self.user_id,
        }


@dataclass(frozen=True)
class PostWithComments:
    id: int
    title: str
    text: str
    user_id: int
    comments: list[Comment] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "text": self.text,
            "user_id": self.user_id,
            "comments": [
                {
                    "id": c.id,
                    "text": c.text,
                    "user_id": c.user_id,
                    "post_id": c.post_id,
                }
                for c in self.comments
            ],
        }


def _object(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError("invalid type: expected a JSON object")
    return data


def _field(data: Mapping[str, Any], name: str) -> Any:
    value = data.get(name, _MISSING)
    if value is _MISSING:
        raise ValueError(f"missing field `{name}`")
    return value


def _string(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"invalid type for `{name}`: expected a string")
    return value


def _i32(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"invalid type for `{name}`: expected i32")
    if not _I32_MIN <= value <= _I32_MAX:
        raise ValueError(f"invalid value for `{name}`: out of range for i32")
    return value


def _optional_string(data: Mapping[str, Any], name: str) -> str | None:
    value = data.get(name)
    return None if value is None else _string(value, name)


@dataclass(frozen=True)
class CreatePostRequest:
    title: str
    text: str
    user_id: int

    @classmethod
    def parse(cls, data: Any) -> CreatePostRequest:
        obj = _object(data)
        return cls(
            title=_string(_field(obj, "title"), "title"),
            text=_string(_field(obj, "text"), "text"),
            user_id=_i32(_field(obj, "user_id"), "user_id"),
        )


@dataclass(frozen=True)
class CreateUserRequest:
    name: str
    surname: str

    @classmethod
    def parse(cls, data: Any) -> CreateUserRequest:
        obj = _object(data)
        return cls(
            name=_string(_field(obj, "name"), "name"),
            surname=_string(_field(obj, "surname"), "surname"),
        )


@dataclass(frozen=True)
class CreateCommentRequest:
    text: str
    post_id: int
    user_id: int

    @classmethod
    def parse(cls, data: Any) -> CreateCommentRequest:
        obj = _object(data)
        return cls(
            text=_string(_field(obj, "text"), "text"),
            post_id=_i32(_field(obj, "post_id"), "post_id"),
            user_id=_i32(_field(obj, "user_id"), "user_id"),
        )


@dataclass(frozen=True)
class UpdatePostRequest:
    title: str | None = None
    text: str | None = None

    @classmethod
    def parse(cls, data: Any) -> UpdatePostRequest:
        obj = _object(data)
        return cls(
            title=_optional_string(obj, "title"),
            text=_optional_string(obj, "text"),
        )