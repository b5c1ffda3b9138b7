from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from typing import Any

from travel_skill.application.dialogs.engine import END_OF_TURN, Dialog, DialogContext, DialogTurnResult
from travel_skill.application.utils.confirmation import recognize_confirmation
from travel_skill.domain.entities.activity import Activity, ActivityTypes, InputHints


@dataclass(frozen=True)
class PromptOptions:
    prompt: str
    retry_prompt: str | None = None


@dataclass(frozen=True)
class PromptRecognizerResult:
    succeeded: bool
    value: Any = None


class Prompt(Dialog):
    """Sends a question, then waits until the answer is recognized."""

    def begin(self, dc: DialogContext, options: Any = None) -> DialogTurnResult:
        options = options or {}
        dc.active_frame.values["attempt_count"] = 0
        dc.context.send_activity(Activity.message(options["prompt"], input_hint=InputHints.EXPECTING_INPUT))
        return END_OF_TURN

    def continue_dialog(self, dc: DialogContext) -> DialogTurnResult:
        activity = dc.context.activity
        if activity.type != ActivityTypes.MESSAGE:
            return END_OF_TURN

        recognized = self.recognize(activity)
        if recognized.succeeded:
            return dc.end_dialog(recognized.value)

        frame = dc.active_frame
        frame.values["attempt_count"] = int(frame.values.get("attempt_count", 0)) + 1
        options = frame.options or {}
        retry = options.get("retry_prompt") or self.default_retry_prompt() or options["prompt"]
        dc.context.send_activity(Activity.message(retry, input_hint=InputHints.EXPECTING_INPUT))
        return END_OF_TURN

    @abstractmethod
    def recognize(self, activity: Activity) -> PromptRecognizerResult:
        raise NotImplementedError

    def default_retry_prompt(self) -> str | None:
        return None


class TextPrompt(Prompt):
    def recognize(self, activity: Activity) -> PromptRecognizerResult:
        text = (activity.text or "").strip()
        if not text:
            return PromptRecognizerResult(succeeded=False)
        return PromptRecognizerResult(succeeded=True, value=text)


class ConfirmPrompt(Prompt):
    def recognize(self, activity: Activity) -> PromptRecognizerResult:
        answer = recognize_confirmation(activity.text)
        if answer is None:
            return PromptRecognizerResult(succeeded=False)
        return PromptRecognizerResult(succeeded=True, value=answer)

    def default_retry_prompt(self) -> str | None:
        return "Please answer yes or no."
