from __future__ import annotations

import copy
import threading

from travel_skill.application.ports.dialog_state_store import DialogStateStorePort
from travel_skill.domain.entities.dialog_state import DialogState


class MemoryDialogStateStore(DialogStateStorePort):
    def __init__(self) -> None:
        # snapshots, so a caller mutating its DialogState does not touch the stored one
        self._states: dict[str, dict] = {}
        self._lock = threading.Lock()

    def get_state(self, conversation_id: str) -> DialogState:
        with self._lock:
            return DialogState.from_dict(copy.deepcopy(self._states.get(conversation_id)))

    def set_state(self, conversation_id: str, state: DialogState) -> None:
        with self._lock:
            self._states[conversation_id] = copy.deepcopy(state.to_dict())

    def delete_state(self, conversation_id: str) -> None:
        with self._lock:
            self._states.pop(conversation_id, None)
