from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, TypeVar

from travel_skill.domain.entities.recognition import RecognitionResult

T = TypeVar("T")


class IntentRecognizerPort(ABC):
    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """False when the adapter lacks the settings it needs to call out."""
        raise NotImplementedError

    @abstractmethod
    def recognize(self, text: str) -> RecognitionResult:
        """
        Classify an utterance.

        Raises:
            RecognizerUpstreamError: the provider could not be reached or failed
            RecognizerContractError: the provider answered with an unexpected shape
        """
        raise NotImplementedError

    def recognize_as(self, text: str, convert: Callable[[RecognitionResult], T]) -> T:
        """Recognize and convert the raw result into the typed model of one intent set."""
        return convert(self.recognize(text))
