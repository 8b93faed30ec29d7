"""Typed Trello domain objects built from REST API payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from trellis.exceptions import InvalidArgumentError


def _require_id(kind: str, payload: dict[str, Any]) -> str:
    if not isinstance(payload, dict) or not payload.get("id"):
        raise InvalidArgumentError(f"{kind} payload has no id")
    return str(payload["id"])


@dataclass
class Card:
    id: str
    name: str = ""
    desc: str = ""
    id_board: str = ""
    id_list: str = ""
    id_members: list[str] = field(default_factory=list)
    closed: bool = False
    url: str = ""
    due: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> Card:
        return cls(
            id=_require_id("Card", payload),
            name=payload.get("name", ""),
            desc=payload.get("desc", ""),
            id_board=payload.get("idBoard", ""),
            id_list=payload.get("idList", ""),
            id_members=list(payload.get("idMembers", [])),
            closed=bool(payload.get("closed", False)),
            url=payload.get("url", ""),
            due=payload.get("due"),
            raw=payload,
        )


@dataclass
class Member:
    id: str
    username: str = ""
    full_name: str = ""
    initials: str = ""
    url: str = ""
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> Member:
        return cls(
            id=_require_id("Member", payload),
            username=payload.get("username", ""),
            full_name=payload.get("fullName", ""),
            initials=payload.get("initials", ""),
            url=payload.get("url", ""),
            raw=payload,
        )


@dataclass
class Board:
    id: str
    name: str = ""
    desc: str = ""
    closed: bool = False
    url: str = ""
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> Board:
        return cls(
            id=_require_id("Board", payload),
            name=payload.get("name", ""),
            desc=payload.get("desc", ""),
            closed=bool(payload.get("closed", False)),
            url=payload.get("url", ""),
            raw=payload,
        )
