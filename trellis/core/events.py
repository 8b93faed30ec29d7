"""Typed events raised from Trello webhook actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from trellis.models import Card, Member


# ---------------------------------------------------------------------------
# Event types
# ---------------------------------------------------------------------------

class EventType(str, Enum):
    """Webhook action types that map to a typed event.

    Values are the literal ``action.type`` strings Trello sends.
    """

    CARD_UPDATE = "updateCard"
    CARD_ADD_MEMBER = "addMemberToCard"


@dataclass
class Event:
    type: EventType
    # Raw ``action.data`` from the webhook, attached to every typed event
    data: dict[str, Any] = field(default_factory=dict)
    propagation_stopped: bool = field(default=False, init=False)

    def stop_propagation(self) -> None:
        """Prevent listeners after the current one from being called."""
        self.propagation_stopped = True


@dataclass
class CardEvent(Event):
    type: EventType = field(default=EventType.CARD_UPDATE, init=False)

    # Typed payload is required; an event never exists without it
    card: Card = field(kw_only=True)


@dataclass
class CardMemberEvent(CardEvent):
    type: EventType = field(default=EventType.CARD_ADD_MEMBER, init=False)

    member: Member = field(kw_only=True)
