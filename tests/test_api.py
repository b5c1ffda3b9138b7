"""
Tests for the HTTP surface of the skill.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from helpers import FIXED_TODAY, FakeRecognizer, FakeTelemetry
from travel_skill.application.use_cases.handle_incoming_activity import HandleIncomingActivityUseCase
from travel_skill.infrastructure.store.memory_store import MemoryDialogStateStore
from travel_skill.main import app
from travel_skill.wiring.dependencies import (
    build_dialog_set,
    get_allowed_callers,
    get_handle_incoming_activity_use_case,
)


@pytest.fixture
def client():
    dialogs, root_dialog_id = build_dialog_set(FakeRecognizer(), FakeTelemetry(), today=lambda: FIXED_TODAY)
    use_case = HandleIncomingActivityUseCase(
        dialogs=dialogs,
        root_dialog_id=root_dialog_id,
        store=MemoryDialogStateStore(),
    )
    app.dependency_overrides[get_handle_incoming_activity_use_case] = lambda: use_case
    app.dependency_overrides[get_allowed_callers] = lambda: frozenset({"parent-bot"})
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_event_returns_activities(client):
    response = client.post(
        "/api/messages",
        json={
            "type": "event",
            "name": "BookFlight",
            "value": {"destination": "Paris"},
            "conversation": {"id": "http-1"},
        },
        headers={"X-Caller-Id": "parent-bot"},
    )

    assert response.status_code == 200
    activities = response.json()["activities"]
    assert activities[0]["type"] == "trace"
    prompt = activities[-1]
    assert prompt == {
        "type": "message",
        "conversation": {"id": "http-1"},
        "text": "Where are you traveling from?",
        "inputHint": "expectingInput",
    }


def test_flat_conversation_id_and_completion(client):
    headers = {"X-Caller-Id": "parent-bot"}
    client.post(
        "/api/messages",
        json={
            "type": "event",
            "name": "BookFlight",
            "value": {"destination": "Paris", "origin": "NYC", "travelDate": "2024-12-25"},
            "conversationId": "http-2",
        },
        headers=headers,
    )

    response = client.post(
        "/api/messages",
        json={"type": "message", "text": "yes", "conversationId": "http-2"},
        headers=headers,
    )

    eoc = response.json()["activities"][-1]
    assert eoc["type"] == "endOfConversation"
    assert eoc["code"] == "completedSuccessfully"
    assert eoc["value"] == {
        "destination": "Paris",
        "origin": "NYC",
        "travelDate": "2024-12-25",
        "multipleDates": False,
    }


def test_unknown_caller_is_forbidden(client):
    response = client.post(
        "/api/messages",
        json={"type": "message", "text": "hi", "conversation": {"id": "http-3"}},
        headers={"X-Caller-Id": "someone-else"},
    )

    assert response.status_code == 403


def test_missing_caller_is_forbidden(client):
    response = client.post(
        "/api/messages",
        json={"type": "message", "text": "hi", "conversation": {"id": "http-3"}},
    )

    assert response.status_code == 403


def test_missing_conversation_id_is_bad_request(client):
    response = client.post(
        "/api/messages",
        json={"type": "message", "text": "hi"},
        headers={"X-Caller-Id": "parent-bot"},
    )

    assert response.status_code == 400


def test_missing_type_is_rejected(client):
    response = client.post(
        "/api/messages",
        json={"text": "hi", "conversation": {"id": "http-4"}},
        headers={"X-Caller-Id": "parent-bot"},
    )

    assert response.status_code == 422
