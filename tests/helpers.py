"""
Fakes and builders shared by the skill tests.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from travel_skill.application.dialogs.engine import DialogSet, DialogTurnResult, DialogTurnStatus
from travel_skill.application.ports.intent_recognizer import IntentRecognizerPort
from travel_skill.application.ports.telemetry import TelemetryPort
from travel_skill.application.turn_context import TurnContext
from travel_skill.domain.entities.activity import Activity, ActivityTypes
from travel_skill.domain.entities.dialog_state import DialogState
from travel_skill.domain.entities.recognition import Entity, IntentScore, RecognitionResult

# A Wednesday
FIXED_TODAY = date(2024, 8, 28)


class FakeRecognizer(IntentRecognizerPort):
    def __init__(
        self,
        result: RecognitionResult | None = None,
        configured: bool = True,
        error: Exception | None = None,
    ) -> None:
        self.result = result
        self.configured = configured
        self.error = error
        self.calls: list[str] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    def recognize(self, text: str) -> RecognitionResult:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.result or RecognitionResult(text=text)


class FakeTelemetry(TelemetryPort):
    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, str]]] = []

    def track_event(self, name: str, properties: dict[str, str] | None = None) -> None:
        self.events.append((name, dict(properties or {})))


def make_recognition(text: str, intents: dict[str, float], entities: list[tuple[str, str, float]] = ()) -> RecognitionResult:
    return RecognitionResult(
        text=text,
        intents={name: IntentScore(score=score) for name, score in intents.items()},
        entities=tuple(Entity(category=c, text=t, confidence=s) for c, t, s in entities),
    )


class DialogDriver:
    """Runs one dialog as the root of a conversation, turn by turn, without a store."""

    def __init__(self, dialogs: DialogSet, root_dialog_id: str, options: Any = None) -> None:
        self.dialogs = dialogs
        self.root_dialog_id = root_dialog_id
        self.options = options
        self.state = DialogState()
        self.replies: list[Activity] = []

    def send(self, text: str) -> DialogTurnResult:
        context = TurnContext(Activity(type=ActivityTypes.MESSAGE, conversation_id="conv-1", text=text))
        dc = self.dialogs.create_context(context, self.state)
        result = dc.continue_dialog()
        if result.status == DialogTurnStatus.EMPTY:
            result = dc.begin_dialog(self.root_dialog_id, self.options)
        self.replies = [a for a in context.responses if a.type == ActivityTypes.MESSAGE]
        return result

    @property
    def texts(self) -> list[str]:
        return [a.text for a in self.replies]

    @property
    def dialog_ids(self) -> list[str]:
        return [frame.dialog_id for frame in self.state.stack]


def message(text: str, conversation_id: str = "conv-1") -> Activity:
    return Activity(type=ActivityTypes.MESSAGE, conversation_id=conversation_id, text=text)


def event(name: str, value: Any = None, conversation_id: str = "conv-1") -> Activity:
    return Activity(type=ActivityTypes.EVENT, conversation_id=conversation_id, name=name, value=value)


def texts_of(activities: list[Activity]) -> list[str]:
    return [a.text for a in activities if a.type == ActivityTypes.MESSAGE]
