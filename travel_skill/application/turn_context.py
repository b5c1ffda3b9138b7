from __future__ import annotations

from typing import Any

from travel_skill.domain.entities.activity import Activity, InputHints


class TurnContext:
    """One inbound activity and the outbound activities produced while handling it."""

    def __init__(self, activity: Activity) -> None:
        self.activity = activity
        self.responses: list[Activity] = []

    @property
    def conversation_id(self) -> str:
        return self.activity.conversation_id

    def send_activity(self, activity: Activity | str, input_hint: str | None = None) -> Activity:
        if isinstance(activity, str):
            activity = Activity.message(activity, input_hint=input_hint or InputHints.ACCEPTING_INPUT)
        activity.conversation_id = self.activity.conversation_id
        self.responses.append(activity)
        return activity

    def send_trace(
        self,
        name: str,
        value: Any = None,
        value_type: str | None = None,
        label: str | None = None,
    ) -> Activity:
        return self.send_activity(Activity.trace(name, value=value, value_type=value_type, label=label))
