from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from travel_skill.domain.entities.activity import Activity


class ConversationDTO(BaseModel):
    id: str


class ActivityDTO(BaseModel):
    """Inbound activity as posted by the parent bot (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: str
    name: str | None = None
    text: str | None = None
    value: Any = None
    code: str | None = None
    conversation: ConversationDTO | None = None
    conversation_id: str | None = Field(default=None, alias="conversationId")

    def resolved_conversation_id(self) -> str | None:
        if self.conversation is not None and self.conversation.id:
            return self.conversation.id
        return self.conversation_id or None

    def to_entity(self, caller_id: str | None = None) -> Activity:
        return Activity(
            type=self.type,
            conversation_id=self.resolved_conversation_id() or "",
            name=self.name,
            text=self.text,
            value=self.value,
            code=self.code,
            caller_id=caller_id,
        )


class OutboundActivityDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str
    conversation: ConversationDTO
    name: str | None = None
    text: str | None = None
    value: Any = None
    input_hint: str | None = Field(default=None, alias="inputHint")
    code: str | None = None
    label: str | None = None
    value_type: str | None = Field(default=None, alias="valueType")

    @staticmethod
    def from_entity(activity: Activity) -> "OutboundActivityDTO":
        return OutboundActivityDTO(
            type=activity.type,
            conversation=ConversationDTO(id=activity.conversation_id),
            name=activity.name,
            text=activity.text,
            value=activity.value,
            input_hint=activity.input_hint,
            code=activity.code,
            label=activity.label,
            value_type=activity.value_type,
        )

    def to_wire(self) -> dict[str, Any]:
        # only top-level absent fields are dropped, the value payload is sent as is
        data = self.model_dump(by_alias=True)
        return {key: item for key, item in data.items() if item is not None}
