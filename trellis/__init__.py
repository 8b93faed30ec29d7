"""trellis: Trello API client and webhook event dispatch."""

from trellis.core.dispatcher import EventDispatcher, EventSubscriber
from trellis.core.events import CardEvent, CardMemberEvent, Event, EventType
from trellis.exceptions import (
    InvalidArgumentError,
    InvalidEventData,
    InvalidEventType,
    ResourceNotFound,
    TrellisError,
    TrelloAPIError,
)
from trellis.models import Board, Card, Member
from trellis.service import TrelloService, create_service
from trellis.webhooks.models import WebhookRequest

__all__ = [
    "Board",
    "Card",
    "CardEvent",
    "CardMemberEvent",
    "Event",
    "EventDispatcher",
    "EventSubscriber",
    "EventType",
    "InvalidArgumentError",
    "InvalidEventData",
    "InvalidEventType",
    "Member",
    "ResourceNotFound",
    "TrellisError",
    "TrelloAPIError",
    "TrelloService",
    "WebhookRequest",
    "create_service",
]
