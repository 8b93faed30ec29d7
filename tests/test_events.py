"""Tests for typed webhook events."""

import pytest

from trellis.core.events import CardEvent, CardMemberEvent, Event, EventType
from trellis.models import Card, Member


class TestEventTypes:
    def test_values_match_trello_action_types(self):
        assert EventType.CARD_UPDATE == "updateCard"
        assert EventType.CARD_ADD_MEMBER == "addMemberToCard"

    def test_card_event(self):
        card = Card(id="C1")
        event = CardEvent(card=card, data={"card": {"id": "C1"}})
        assert event.type == EventType.CARD_UPDATE
        assert event.card is card
        assert event.data == {"card": {"id": "C1"}}

    def test_card_member_event_is_card_event(self):
        event = CardMemberEvent(card=Card(id="C1"), member=Member(id="M1"))
        assert isinstance(event, CardEvent)
        assert event.type == EventType.CARD_ADD_MEMBER
        assert event.member.id == "M1"

    def test_defaults(self):
        event = CardEvent(card=Card(id="C1"))
        assert event.data == {}
        assert event.propagation_stopped is False

    def test_typed_fields_required(self):
        with pytest.raises(TypeError):
            CardEvent()
        with pytest.raises(TypeError):
            CardMemberEvent(card=Card(id="C1"))

    def test_stop_propagation(self):
        event = Event(type=EventType.CARD_UPDATE)
        event.stop_propagation()
        assert event.propagation_stopped is True
