from __future__ import annotations

import hashlib
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from travel_skill.application.ports.dialog_state_store import DialogStateStorePort
from travel_skill.application.utils.conversation_locks import ConversationLocks
from travel_skill.domain.entities.dialog_state import DialogState

STATE_FILE_VERSION = 1


class JsonDialogStateStore(DialogStateStorePort):
    """One JSON file per conversation holding its dialog stack."""

    def __init__(self, data_dir: str = "./data/conversations") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._locks = ConversationLocks()
        self._logger = logging.getLogger(__name__)

    def _get_file_path(self, conversation_id: str) -> Path:
        # one file per distinct id, whatever characters the caller put in it
        digest = hashlib.sha256(conversation_id.encode("utf-8")).hexdigest()
        return self._data_dir / f"{digest}.json"

    def _load(self, conversation_id: str) -> dict[str, Any] | None:
        file_path = self._get_file_path(conversation_id)
        if not file_path.exists():
            return None

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            # A corrupted file starts the conversation over
            self._logger.warning(
                "Unreadable dialog state file",
                extra={"conversation_id": conversation_id, "reason": str(e)},
            )
            return None

    def _save(self, conversation_id: str, data: dict[str, Any]) -> None:
        """Save conversation data to JSON file atomically."""
        file_path = self._get_file_path(conversation_id)
        temp_path = file_path.with_suffix(".json.tmp")

        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(file_path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise

    def get_state(self, conversation_id: str) -> DialogState:
        with self._locks.hold(conversation_id):
            data = self._load(conversation_id)
            if data is None:
                return DialogState()
            return DialogState.from_dict(data.get("state"))

    def set_state(self, conversation_id: str, state: DialogState) -> None:
        with self._locks.hold(conversation_id):
            self._save(
                conversation_id,
                {
                    "conversation_id": conversation_id,
                    "state": state.to_dict(),
                    "updated_at": datetime.now().timestamp(),
                    "version": STATE_FILE_VERSION,
                },
            )

    def delete_state(self, conversation_id: str) -> None:
        with self._locks.hold(conversation_id):
            self._get_file_path(conversation_id).unlink(missing_ok=True)
