"""Priority-ordered listener registry for webhook events."""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from itertools import count
from typing import Any, Callable, Mapping, Union

from trellis.core.events import Event, EventType
from trellis.exceptions import InvalidArgumentError
from trellis.utils.logging import get_logger

log = get_logger(__name__)


Listener = Callable[[Any], Any]

# A subscriber maps each event name to a method name, a (method[, priority])
# pair, or a list of such pairs.
SubscriptionSpec = Union[str, tuple[str, int], list[tuple[str, int]]]


class EventSubscriber(ABC):
    """A bundle of listener registrations declared together."""

    @classmethod
    @abstractmethod
    def get_subscribed_events(cls) -> Mapping[str, SubscriptionSpec]: ...


def _event_name(name: str | EventType) -> str:
    return name.value if isinstance(name, EventType) else name


def _normalize_entry(entry: Any) -> tuple[str, int]:
    if isinstance(entry, str):
        return entry, 0
    if isinstance(entry, (tuple, list)) and 1 <= len(entry) <= 2 and isinstance(entry[0], str):
        priority = entry[1] if len(entry) == 2 else 0
        if isinstance(priority, int):
            return entry[0], priority
    raise InvalidArgumentError(
        f"Subscription entry must be a method name or (method, priority), got {entry!r}"
    )


def _normalize_spec(spec: SubscriptionSpec) -> list[tuple[str, int]]:
    # A single (method[, priority]) pair, as a tuple or a list
    if isinstance(spec, (tuple, list)) and spec and isinstance(spec[0], str):
        return [_normalize_entry(spec)]
    if isinstance(spec, (tuple, list)):
        return [_normalize_entry(entry) for entry in spec]
    return [_normalize_entry(spec)]


class EventDispatcher:
    """Calls listeners for an event name in descending priority order.

    Listeners sharing a priority run in registration order. Registration is
    expected to finish before dispatching starts.
    """

    def __init__(self) -> None:
        # event name -> [(priority, sequence, listener)]
        self._listeners: dict[str, list[tuple[int, int, Listener]]] = {}
        self._sorted: dict[str, list[Listener]] = {}
        self._sequence = count()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_listener(
        self, event_name: str | EventType, listener: Listener, priority: int = 0
    ) -> None:
        if not callable(listener):
            raise InvalidArgumentError(f"Listener for {event_name!r} is not callable")
        name = _event_name(event_name)
        self._listeners.setdefault(name, []).append(
            (priority, next(self._sequence), listener)
        )
        self._sorted.pop(name, None)

    def remove_listener(self, event_name: str | EventType, listener: Listener) -> None:
        name = _event_name(event_name)
        entries = self._listeners.get(name)
        if not entries:
            return
        remaining = [entry for entry in entries if entry[2] != listener]
        if remaining:
            self._listeners[name] = remaining
        else:
            del self._listeners[name]
        self._sorted.pop(name, None)

    def add_subscriber(self, subscriber: EventSubscriber) -> None:
        for event_name, spec in subscriber.get_subscribed_events().items():
            for method, priority in _normalize_spec(spec):
                self.add_listener(event_name, getattr(subscriber, method), priority)

    def remove_subscriber(self, subscriber: EventSubscriber) -> None:
        for event_name, spec in subscriber.get_subscribed_events().items():
            for method, _priority in _normalize_spec(spec):
                self.remove_listener(event_name, getattr(subscriber, method))

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def get_listeners(self, event_name: str | EventType) -> list[Listener]:
        name = _event_name(event_name)
        if name not in self._sorted:
            entries = self._listeners.get(name, [])
            ordered = sorted(entries, key=lambda entry: (-entry[0], entry[1]))
            self._sorted[name] = [entry[2] for entry in ordered]
        return list(self._sorted[name])

    def has_listeners(self, event_name: str | EventType | None = None) -> bool:
        if event_name is None:
            return bool(self._listeners)
        return bool(self._listeners.get(_event_name(event_name)))

    def get_listener_priority(
        self, event_name: str | EventType, listener: Listener
    ) -> int | None:
        for priority, _seq, registered in self._listeners.get(_event_name(event_name), []):
            if registered == listener:
                return priority
        return None

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def dispatch(
        self, event_name: str | EventType, event: Event | None = None
    ) -> Event | None:
        """Call every listener for ``event_name`` with ``event``.

        Listeners may be plain functions or coroutine functions; each one
        finishes before the next starts. Exceptions raised by a listener
        propagate and skip the remaining listeners.
        """
        name = _event_name(event_name)
        listeners = self.get_listeners(name)
        if not listeners:
            return event

        log.debug("event_dispatching", event_name=name, listeners=len(listeners))
        for listener in listeners:
            if event is not None and event.propagation_stopped:
                break
            result = listener(event)
            if inspect.isawaitable(result):
                await result
        return event
