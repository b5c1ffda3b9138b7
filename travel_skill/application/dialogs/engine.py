from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any

from travel_skill.application.exceptions import DialogNotFoundError
from travel_skill.application.turn_context import TurnContext
from travel_skill.domain.entities.dialog_state import DialogFrame, DialogState


class DialogTurnStatus(str, Enum):
    EMPTY = "empty"
    WAITING = "waiting"
    COMPLETE = "complete"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class DialogTurnResult:
    status: DialogTurnStatus
    result: Any = None


END_OF_TURN = DialogTurnResult(DialogTurnStatus.WAITING)


class Dialog(ABC):
    """
    A resumable unit of conversation.

    Dialogs hold no per-conversation data themselves; everything a dialog needs
    across turns lives in its frame on the DialogState stack.
    """

    def __init__(self, dialog_id: str) -> None:
        self.id = dialog_id

    @abstractmethod
    def begin(self, dc: "DialogContext", options: Any = None) -> DialogTurnResult:
        raise NotImplementedError

    def continue_dialog(self, dc: "DialogContext") -> DialogTurnResult:
        return dc.end_dialog()

    def resume(self, dc: "DialogContext", result: Any = None) -> DialogTurnResult:
        """Called when a child dialog ends and this dialog is active again."""
        return dc.end_dialog(result)

    def dependencies(self) -> list["Dialog"]:
        """Dialogs this one begins or prompts with; registered alongside it."""
        return []

    def interrupt(self, dc: "DialogContext") -> DialogTurnResult | None:
        """
        Inspect the inbound activity before the active dialog sees it.
        Returning a result consumes the turn.
        """
        return None


class DialogSet:
    def __init__(self) -> None:
        self._dialogs: dict[str, Dialog] = {}

    def add(self, dialog: Dialog) -> "DialogSet":
        if dialog.id in self._dialogs:
            raise ValueError(f"Dialog '{dialog.id}' is already registered")
        self._dialogs[dialog.id] = dialog
        for child in dialog.dependencies():
            if child.id not in self._dialogs:
                self.add(child)
        return self

    def find(self, dialog_id: str) -> Dialog | None:
        return self._dialogs.get(dialog_id)

    def create_context(self, turn_context: TurnContext, state: DialogState) -> "DialogContext":
        return DialogContext(self, turn_context, state)


class DialogContext:
    def __init__(self, dialogs: DialogSet, context: TurnContext, state: DialogState) -> None:
        self.dialogs = dialogs
        self.context = context
        self.state = state
        self._logger = logging.getLogger(__name__)

    @property
    def active_frame(self) -> DialogFrame | None:
        return self.state.stack[-1] if self.state.stack else None

    def find_dialog(self, dialog_id: str) -> Dialog:
        dialog = self.dialogs.find(dialog_id)
        if dialog is None:
            raise DialogNotFoundError(f"Dialog '{dialog_id}' not found")
        return dialog

    def begin_dialog(self, dialog_id: str, options: Any = None) -> DialogTurnResult:
        dialog = self.find_dialog(dialog_id)
        self.state.stack.append(DialogFrame(dialog_id=dialog_id, options=options))
        self._logger.debug(
            "Dialog started",
            extra={"conversation_id": self.context.conversation_id, "dialog_id": dialog_id},
        )
        return dialog.begin(self, options)

    def continue_dialog(self) -> DialogTurnResult:
        if not self.state.stack:
            return DialogTurnResult(DialogTurnStatus.EMPTY)

        for frame in reversed(list(self.state.stack)):
            interrupted = self.find_dialog(frame.dialog_id).interrupt(self)
            if interrupted is not None:
                return interrupted

        active = self.active_frame
        if active is None:
            return DialogTurnResult(DialogTurnStatus.EMPTY)
        return self.find_dialog(active.dialog_id).continue_dialog(self)

    def end_dialog(self, result: Any = None) -> DialogTurnResult:
        if self.state.stack:
            ended = self.state.stack.pop()
            self._logger.debug(
                "Dialog ended",
                extra={"conversation_id": self.context.conversation_id, "dialog_id": ended.dialog_id},
            )

        parent = self.active_frame
        if parent is not None:
            return self.find_dialog(parent.dialog_id).resume(self, result)
        return DialogTurnResult(DialogTurnStatus.COMPLETE, result)

    def replace_dialog(self, dialog_id: str, options: Any = None) -> DialogTurnResult:
        """End the active dialog without resuming its parent and start another in its place."""
        if self.state.stack:
            self.state.stack.pop()
        return self.begin_dialog(dialog_id, options)

    def cancel_all_dialogs(self) -> DialogTurnResult:
        if not self.state.stack:
            return DialogTurnResult(DialogTurnStatus.EMPTY)
        self._logger.info(
            "Dialog stack cancelled",
            extra={"conversation_id": self.context.conversation_id, "reason": f"depth={len(self.state.stack)}"},
        )
        self.state.stack.clear()
        return DialogTurnResult(DialogTurnStatus.CANCELLED)
