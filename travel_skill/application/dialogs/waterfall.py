from __future__ import annotations

from dataclasses import asdict
from typing import Any, Callable

from travel_skill.application.dialogs.engine import Dialog, DialogContext, DialogTurnResult
from travel_skill.application.dialogs.prompts import PromptOptions


class WaterfallStepContext:
    def __init__(self, parent: "WaterfallDialog", dc: DialogContext, index: int, result: Any) -> None:
        self._parent = parent
        self._dc = dc
        self.index = index
        self.result = result
        self._next_called = False

    @property
    def context(self):
        return self._dc.context

    @property
    def options(self) -> Any:
        return self._dc.active_frame.options

    @options.setter
    def options(self, value: Any) -> None:
        self._dc.active_frame.options = value

    @property
    def values(self) -> dict[str, Any]:
        return self._dc.active_frame.values

    def next(self, result: Any = None) -> DialogTurnResult:
        """Skip to the following step without waiting for input."""
        if self._next_called:
            raise RuntimeError(f"next() called twice in step {self.index} of '{self._parent.id}'")
        self._next_called = True
        return self._parent.resume(self._dc, result)

    def prompt(self, dialog_id: str, options: PromptOptions) -> DialogTurnResult:
        return self._dc.begin_dialog(dialog_id, asdict(options))

    def begin_dialog(self, dialog_id: str, options: Any = None) -> DialogTurnResult:
        return self._dc.begin_dialog(dialog_id, options)

    def replace_dialog(self, dialog_id: str, options: Any = None) -> DialogTurnResult:
        return self._dc.replace_dialog(dialog_id, options)

    def end_dialog(self, result: Any = None) -> DialogTurnResult:
        return self._dc.end_dialog(result)

    def cancel_all_dialogs(self) -> DialogTurnResult:
        return self._dc.cancel_all_dialogs()


WaterfallStep = Callable[[WaterfallStepContext], DialogTurnResult]


class WaterfallDialog(Dialog):
    """
    Fixed sequence of steps. Each step either moves on (next), suspends on a
    prompt or child dialog, or ends the dialog. The result of a prompt or child
    is handed to the following step.
    """

    def __init__(self, dialog_id: str, steps: list[WaterfallStep] | None = None) -> None:
        super().__init__(dialog_id)
        self._steps: list[WaterfallStep] = list(steps or [])

    def add_step(self, step: WaterfallStep) -> "WaterfallDialog":
        self._steps.append(step)
        return self

    def begin(self, dc: DialogContext, options: Any = None) -> DialogTurnResult:
        return self._run_step(dc, 0, None)

    def continue_dialog(self, dc: DialogContext) -> DialogTurnResult:
        # a step that suspended without a prompt receives the raw text
        return self.resume(dc, dc.context.activity.text)

    def resume(self, dc: DialogContext, result: Any = None) -> DialogTurnResult:
        return self._run_step(dc, dc.active_frame.step_index + 1, result)

    def _run_step(self, dc: DialogContext, index: int, result: Any) -> DialogTurnResult:
        if index >= len(self._steps):
            return dc.end_dialog(result)
        dc.active_frame.step_index = index
        step = WaterfallStepContext(self, dc, index, result)
        return self._steps[index](step)
