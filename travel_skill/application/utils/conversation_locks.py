from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class ConversationLocks:
    """
    One lock per conversation id.

    An entry counts the threads holding or waiting on it and is dropped when
    the last one leaves, so ids seen once do not stay in memory.
    """

    def __init__(self) -> None:
        self._entries: dict[str, list] = {}  # id -> [lock, users]
        self._lock_lock = threading.Lock()

    @contextmanager
    def hold(self, conversation_id: str) -> Iterator[None]:
        with self._lock_lock:
            entry = self._entries.setdefault(conversation_id, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._lock_lock:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._entries[conversation_id]

    def __contains__(self, conversation_id: object) -> bool:
        with self._lock_lock:
            return conversation_id in self._entries

    def __len__(self) -> int:
        with self._lock_lock:
            return len(self._entries)
