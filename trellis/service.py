"""Trello service: resource lookups plus webhook-to-event dispatch."""

from __future__ import annotations

from trellis.client import TrelloClient
from trellis.config import Settings
from trellis.core.dispatcher import EventDispatcher, EventSubscriber, Listener
from trellis.core.events import Event, EventType
from trellis.exceptions import InvalidEventData, InvalidEventType
from trellis.models import Board, Card, Member
from trellis.utils.logging import get_logger
from trellis.webhooks.handlers import build_event, extract_action, is_trello_webhook
from trellis.webhooks.models import WebhookRequest

log = get_logger(__name__)


class TrelloService:
    """Fetches Trello resources and turns webhook requests into events."""

    def __init__(self, client: TrelloClient, dispatcher: EventDispatcher) -> None:
        self._client = client
        self._dispatcher = dispatcher

    @property
    def client(self) -> TrelloClient:
        return self._client

    @property
    def event_dispatcher(self) -> EventDispatcher:
        return self._dispatcher

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    async def get_card(self, card_id: str) -> Card:
        return await self._client.get_card(card_id)

    async def get_member(self, member_id: str) -> Member:
        return await self._client.get_member(member_id)

    async def get_board(self, board_id: str) -> Board:
        return await self._client.get_board(board_id)

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(
        self, event_name: str | EventType, listener: Listener, priority: int = 0
    ) -> None:
        """Attach a listener; higher priorities are called first."""
        self._dispatcher.add_listener(event_name, listener, priority)

    def add_subscriber(self, subscriber: EventSubscriber) -> None:
        self._dispatcher.add_subscriber(subscriber)

    # ------------------------------------------------------------------
    # Webhooks
    # ------------------------------------------------------------------

    def is_webhook(self, request: WebhookRequest) -> bool:
        return is_trello_webhook(request)

    async def handle_webhook(self, request: WebhookRequest) -> Event | None:
        """Dispatch the event described by a Trello webhook request.

        Requests that are not webhooks, or carry no action, are ignored.
        Raises ``InvalidEventType`` / ``InvalidEventData`` when the action
        lacks its type or data. Unknown action types are still dispatched
        under their literal name, with no event object.
        """
        if not self.is_webhook(request):
            return None
        action = extract_action(request)
        if action is None:
            return None

        if action.get("type") is None:
            raise InvalidEventType()
        if action.get("data") is None:
            raise InvalidEventData()

        event_name = action["type"]
        data = action["data"]
        if not isinstance(event_name, str):
            raise InvalidEventType()

        event = await build_event(event_name, data, self)

        if event is not None:
            log.info(
                "webhook_dispatched",
                event_name=event_name,
                event_type=type(event).__name__,
                listeners=len(self._dispatcher.get_listeners(event_name)),
            )
        return await self._dispatcher.dispatch(event_name, event)

    async def close(self) -> None:
        await self._client.close()


def create_service(settings: Settings, dispatcher: EventDispatcher | None = None) -> TrelloService:
    """Build a service with a real client and, unless given, a fresh dispatcher."""
    return TrelloService(
        TrelloClient(settings.trello),
        dispatcher if dispatcher is not None else EventDispatcher(),
    )
