from abc import ABC, abstractmethod

from travel_skill.domain.entities.dialog_state import DialogState


class DialogStateStorePort(ABC):
    @abstractmethod
    def get_state(self, conversation_id: str) -> DialogState:
        """Return the persisted dialog stack, or an empty one for a new conversation."""
        raise NotImplementedError

    @abstractmethod
    def set_state(self, conversation_id: str, state: DialogState) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete_state(self, conversation_id: str) -> None:
        raise NotImplementedError
