from __future__ import annotations

from travel_skill.application.dialogs.engine import END_OF_TURN, DialogContext, DialogTurnResult
from travel_skill.application.dialogs.waterfall import WaterfallDialog
from travel_skill.domain.entities.activity import ActivityTypes, InputHints

HELP_MSG_TEXT = "Show help here"
CANCEL_MSG_TEXT = "Cancelling..."

HELP_WORDS = ("help", "?")
CANCEL_WORDS = ("cancel", "quit")


class CancelAndHelpDialog(WaterfallDialog):
    """Waterfall that lets the user ask for help or cancel at any of its prompts."""

    def interrupt(self, dc: DialogContext) -> DialogTurnResult | None:
        activity = dc.context.activity
        if activity.type != ActivityTypes.MESSAGE or not activity.text:
            return None

        text = activity.text.strip().lower()
        if text in HELP_WORDS:
            dc.context.send_activity(HELP_MSG_TEXT, input_hint=InputHints.EXPECTING_INPUT)
            return END_OF_TURN

        if text in CANCEL_WORDS:
            dc.context.send_activity(CANCEL_MSG_TEXT, input_hint=InputHints.IGNORING_INPUT)
            return dc.cancel_all_dialogs()

        return None
