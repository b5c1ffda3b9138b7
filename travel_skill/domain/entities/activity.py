from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class ActivityTypes:
    MESSAGE = "message"
    EVENT = "event"
    END_OF_CONVERSATION = "endOfConversation"
    TRACE = "trace"


class InputHints:
    ACCEPTING_INPUT = "acceptingInput"
    IGNORING_INPUT = "ignoringInput"
    EXPECTING_INPUT = "expectingInput"


class EndOfConversationCodes:
    COMPLETED_SUCCESSFULLY = "completedSuccessfully"
    USER_CANCELLED = "userCancelled"
    SKILL_ERROR = "SkillError"


@dataclass
class Activity:
    type: str
    conversation_id: str = ""
    name: str | None = None
    text: str | None = None
    value: Any = None
    input_hint: str | None = None
    code: str | None = None
    label: str | None = None
    value_type: str | None = None
    caller_id: str | None = None

    @staticmethod
    def message(text: str, input_hint: str = InputHints.ACCEPTING_INPUT, conversation_id: str = "") -> "Activity":
        return Activity(
            type=ActivityTypes.MESSAGE,
            conversation_id=conversation_id,
            text=text,
            input_hint=input_hint,
        )

    @staticmethod
    def trace(name: str, value: Any = None, value_type: str | None = None, label: str | None = None) -> "Activity":
        return Activity(
            type=ActivityTypes.TRACE,
            name=name,
            value=value,
            value_type=value_type,
            label=label,
        )

    @staticmethod
    def end_of_conversation(code: str, value: Any = None, text: str | None = None) -> "Activity":
        return Activity(
            type=ActivityTypes.END_OF_CONVERSATION,
            code=code,
            value=value,
            text=text,
        )
