from __future__ import annotations

from typing import Callable

import pytest

from helpers import FIXED_TODAY, FakeRecognizer, FakeTelemetry
from travel_skill.application.ports.intent_recognizer import IntentRecognizerPort
from travel_skill.application.use_cases.handle_incoming_activity import HandleIncomingActivityUseCase
from travel_skill.infrastructure.store.memory_store import MemoryDialogStateStore
from travel_skill.wiring.dependencies import build_dialog_set


@pytest.fixture
def telemetry() -> FakeTelemetry:
    return FakeTelemetry()


@pytest.fixture
def store() -> MemoryDialogStateStore:
    return MemoryDialogStateStore()


@pytest.fixture
def make_skill(telemetry: FakeTelemetry, store: MemoryDialogStateStore) -> Callable[..., HandleIncomingActivityUseCase]:
    """Build the whole skill around a recognizer, with the fake telemetry and the memory store."""

    def _make(recognizer: IntentRecognizerPort | None = None) -> HandleIncomingActivityUseCase:
        dialogs, root_dialog_id = build_dialog_set(recognizer or FakeRecognizer(), telemetry, today=lambda: FIXED_TODAY)
        return HandleIncomingActivityUseCase(dialogs=dialogs, root_dialog_id=root_dialog_id, store=store)

    return _make
