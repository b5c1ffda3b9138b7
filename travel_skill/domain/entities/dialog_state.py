from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class DialogFrame:
    dialog_id: str
    step_index: int = 0
    options: Any = None  # JSON-shaped working data handed to the dialog on begin
    values: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "dialog_id": self.dialog_id,
            "step_index": self.step_index,
            "options": self.options,
            "values": dict(self.values),
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "DialogFrame":
        return DialogFrame(
            dialog_id=str(data["dialog_id"]),
            step_index=int(data.get("step_index", 0)),
            options=data.get("options"),
            values=dict(data.get("values") or {}),
        )


@dataclass
class DialogState:
    """Per conversation stack of active dialogs; the last frame is the active one."""

    stack: list[DialogFrame] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.stack

    def to_dict(self) -> dict[str, Any]:
        return {"stack": [frame.to_dict() for frame in self.stack]}

    @staticmethod
    def from_dict(data: dict[str, Any] | None) -> "DialogState":
        data = data or {}
        return DialogState(stack=[DialogFrame.from_dict(f) for f in data.get("stack", [])])
