from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from travel_skill.application.dialogs.cancel_and_help import CancelAndHelpDialog
from travel_skill.application.dialogs.engine import Dialog, DialogTurnResult
from travel_skill.application.dialogs.prompts import PromptOptions, TextPrompt
from travel_skill.application.dialogs.waterfall import WaterfallStepContext
from travel_skill.application.utils.confirmation import recognize_confirmation
from travel_skill.application.utils.date_parser import is_ambiguous_date, to_timex
from travel_skill.application.utils.timex import is_definite

DATE_PROMPT_ID = "DateResolverDialog.TextPrompt"

PROMPT_MSG_TEXT = "When would you like to travel?"
AMBIGUOUS_MSG_TEXT = (
    'I\'m not sure which date you mean by "{candidate}". '
    "Please enter your travel date including the month, day and year, "
    'or say yes to keep "{candidate}".'
)


class DateResolverDialog(CancelAndHelpDialog):
    """
    Turns a vague travel date into a definite one.

    Options are the candidate date text (or None). The dialog restarts itself
    on every answer that is still ambiguous, until the user gives a definite
    date or says yes to keep the ambiguous one they were offered.
    """

    def __init__(self, dialog_id: str | None = None, today: Callable[[], date] = date.today) -> None:
        super().__init__(dialog_id or DateResolverDialog.__name__)
        self._today = today
        self._logger = logging.getLogger(__name__)
        self.add_step(self.initial_step)
        self.add_step(self.final_step)

    def dependencies(self) -> list[Dialog]:
        return [TextPrompt(DATE_PROMPT_ID)]

    def initial_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        candidate = step.options
        if candidate is None or not str(candidate).strip():
            return step.prompt(DATE_PROMPT_ID, PromptOptions(prompt=PROMPT_MSG_TEXT))

        if is_ambiguous_date(candidate, self._today()):
            step.values["offered"] = candidate
            return step.prompt(
                DATE_PROMPT_ID,
                PromptOptions(prompt=AMBIGUOUS_MSG_TEXT.format(candidate=candidate)),
            )

        return step.next(candidate)

    def final_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        answer = step.result
        offered = step.values.get("offered")

        # a definite date wins even inside a yes/no answer ("no, March 5 2025")
        timex = to_timex(answer, self._today())
        if timex is not None and is_definite(timex):
            return step.end_dialog(timex)

        if offered is not None:
            accepted = recognize_confirmation(answer)
            if accepted is True:
                self._logger.info(
                    "Ambiguous travel date kept",
                    extra={"conversation_id": step.context.conversation_id, "reason": offered},
                )
                return step.end_dialog(offered)
            if accepted is False:
                return step.replace_dialog(self.id, None)

        if timex is None:
            return step.replace_dialog(self.id, None)

        return step.replace_dialog(self.id, answer)
