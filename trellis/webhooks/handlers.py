"""Webhook recognition and action-to-event conversion."""

from __future__ import annotations

from typing import Any

from trellis.client import ResourceAccessor
from trellis.core.events import CardEvent, CardMemberEvent, Event, EventType
from trellis.exceptions import InvalidEventData, InvalidEventType
from trellis.webhooks.models import WebhookRequest

WEBHOOK_HEADER = "X-Trello-Webhook"


# ---------------------------------------------------------------------------
# Recognition
# ---------------------------------------------------------------------------

def is_trello_webhook(request: WebhookRequest) -> bool:
    """Return True for a POST carrying the ``X-Trello-Webhook`` header.

    The method must be exactly ``"POST"``. Header value is not inspected.
    """
    if getattr(request, "method", None) != "POST":
        return False
    return request.has_header(WEBHOOK_HEADER)


def extract_action(request: WebhookRequest) -> dict[str, Any] | None:
    action = request.get("action")
    if not action:
        return None
    if not isinstance(action, dict):
        raise InvalidEventType()
    return action


# ---------------------------------------------------------------------------
# Event construction
# ---------------------------------------------------------------------------

def _card_id(data: dict[str, Any]) -> str:
    card = data.get("card")
    if not isinstance(card, dict) or not card.get("id"):
        raise InvalidEventData("Webhook data has no card id.")
    return str(card["id"])


def _member_id(data: dict[str, Any]) -> str:
    member_id = data.get("idMember")
    if not member_id:
        raise InvalidEventData("Webhook data has no member id.")
    return str(member_id)


def _event_type(action_type: str) -> EventType | None:
    try:
        return EventType(action_type)
    except ValueError:
        return None


async def build_event(
    action_type: str, data: dict[str, Any], accessor: ResourceAccessor
) -> Event | None:
    """Build the typed event for ``action_type``, or None for unknown types.

    Identifiers are validated before anything is fetched, so a malformed
    payload never produces a partially populated event.
    """
    kind = _event_type(action_type)
    if kind is None:
        return None
    if not isinstance(data, dict):
        raise InvalidEventData("Webhook data is not an object.")

    event: Event
    if kind is EventType.CARD_UPDATE:
        card_id = _card_id(data)
        event = CardEvent(card=await accessor.get_card(card_id))
    elif kind is EventType.CARD_ADD_MEMBER:
        card_id = _card_id(data)
        member_id = _member_id(data)
        event = CardMemberEvent(
            card=await accessor.get_card(card_id),
            member=await accessor.get_member(member_id),
        )

    event.data = data
    return event
