"""
Tests for running whole turns: completion codes, parent cancellation and the turn error handler.
"""

from __future__ import annotations

from helpers import event, message, texts_of
from travel_skill.application.use_cases.handle_incoming_activity import (
    ERROR_FOLLOW_UP_MSG_TEXT,
    ERROR_MSG_TEXT,
)
from travel_skill.domain.entities.activity import Activity, ActivityTypes, EndOfConversationCodes
from travel_skill.domain.entities.dialog_state import DialogFrame, DialogState


def _end_of_conversation(responses: list[Activity]) -> Activity:
    found = [a for a in responses if a.type == ActivityTypes.END_OF_CONVERSATION]
    assert len(found) == 1
    return found[0]


def test_confirmed_booking_completes_with_booking_value(make_skill, store, telemetry):
    skill = make_skill()

    skill.handle(event("BookFlight", {"destination": "Paris"}))
    skill.handle(message("Seattle"))
    confirm = skill.handle(message("2024-09-01"))
    assert texts_of(confirm) == [
        "Please confirm, I have you traveling to: Paris from: Seattle on: 2024-09-01. Is this correct?"
    ]

    responses = skill.handle(message("yes"))

    eoc = _end_of_conversation(responses)
    assert eoc.code == EndOfConversationCodes.COMPLETED_SUCCESSFULLY
    assert eoc.value == {
        "destination": "Paris",
        "origin": "Seattle",
        "travelDate": "2024-09-01",
        "multipleDates": False,
    }
    assert eoc.conversation_id == "conv-1"
    assert len(telemetry.events) == 1
    assert store.get_state("conv-1").is_empty


def test_declined_booking_ends_user_cancelled(make_skill, telemetry):
    skill = make_skill()
    skill.handle(
        event(
            "BookFlight",
            {"destination": "Paris", "origin": "NYC", "travelDate": "2024-12-25", "multipleDates": False},
        )
    )

    responses = skill.handle(message("no"))

    eoc = _end_of_conversation(responses)
    assert eoc.code == EndOfConversationCodes.USER_CANCELLED
    assert eoc.value is None
    assert telemetry.events == []


def test_cancel_ends_user_cancelled(make_skill, store):
    skill = make_skill()
    skill.handle(event("BookFlight"))

    responses = skill.handle(message("cancel"))

    assert texts_of(responses) == ["Cancelling..."]
    assert _end_of_conversation(responses).code == EndOfConversationCodes.USER_CANCELLED
    assert store.get_state("conv-1").is_empty


def test_parent_end_of_conversation_cancels_dialogs(make_skill, store):
    skill = make_skill()
    skill.handle(event("BookFlight"))
    assert not store.get_state("conv-1").is_empty

    responses = skill.handle(Activity(type=ActivityTypes.END_OF_CONVERSATION, conversation_id="conv-1"))

    assert responses == []
    assert store.get_state("conv-1").is_empty


def test_conversations_are_independent(make_skill, store):
    skill = make_skill()

    skill.handle(event("BookFlight", conversation_id="a"))
    responses = skill.handle(event("BookFlight", {"destination": "Rome"}, conversation_id="b"))

    assert texts_of(responses) == ["Where are you traveling from?"]
    assert store.get_state("a").stack[1].options["destination"] is None
    assert all(r.conversation_id == "b" for r in responses)


def test_finished_turns_release_their_conversation_locks(make_skill):
    skill = make_skill()

    for conversation_id in ("a", "b", "c"):
        skill.handle(event("BookFlight", conversation_id=conversation_id))

    assert len(skill._locks) == 0


def test_turn_error_tells_user_ends_with_skill_error_and_clears_state(make_skill, store):
    """A stack naming a dialog the skill does not know fails the turn."""
    store.set_state("conv-1", DialogState(stack=[DialogFrame(dialog_id="RemovedDialog")]))
    skill = make_skill()

    responses = skill.handle(message("hello"))

    assert texts_of(responses) == [ERROR_MSG_TEXT, ERROR_FOLLOW_UP_MSG_TEXT]
    traces = [a for a in responses if a.type == ActivityTypes.TRACE]
    assert traces[-1].name == "OnTurnError Trace"
    assert "RemovedDialog" in traces[-1].value

    eoc = _end_of_conversation(responses)
    assert eoc.code == EndOfConversationCodes.SKILL_ERROR
    assert eoc.text == "Dialog 'RemovedDialog' not found"
    assert store.get_state("conv-1").is_empty


def test_next_turn_after_error_starts_fresh(make_skill, store):
    store.set_state("conv-1", DialogState(stack=[DialogFrame(dialog_id="RemovedDialog")]))
    skill = make_skill()
    skill.handle(message("hello"))

    responses = skill.handle(event("BookFlight"))

    assert texts_of(responses) == ["Where would you like to travel to?"]
