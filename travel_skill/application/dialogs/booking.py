from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from travel_skill.application.dialogs.cancel_and_help import CancelAndHelpDialog
from travel_skill.application.dialogs.date_resolver import DateResolverDialog
from travel_skill.application.dialogs.engine import Dialog, DialogTurnResult
from travel_skill.application.dialogs.prompts import ConfirmPrompt, PromptOptions, TextPrompt
from travel_skill.application.dialogs.waterfall import WaterfallStepContext
from travel_skill.application.ports.telemetry import TelemetryPort
from travel_skill.application.utils.date_parser import is_ambiguous_date
from travel_skill.domain.entities.booking_request import BookingRequest

TEXT_PROMPT_ID = "BookingDialog.TextPrompt"
CONFIRM_PROMPT_ID = "BookingDialog.ConfirmPrompt"

DESTINATION_STEP_MSG_TEXT = "Where would you like to travel to?"
ORIGIN_STEP_MSG_TEXT = "Where are you traveling from?"
BOOKING_EVENT_NAME = "Booking"


class BookingDialog(CancelAndHelpDialog):
    """
    Fills destination, origin and travel date, then asks for confirmation.

    Options are the BookingRequest wire dict; it is updated in place on the
    frame after every step so a restart of the process resumes with the
    slots collected so far. Ends with the BookingRequest when confirmed; a
    declined booking cancels the dialog stack.
    """

    def __init__(
        self,
        telemetry: TelemetryPort,
        dialog_id: str | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        super().__init__(dialog_id or BookingDialog.__name__)
        self._telemetry = telemetry
        self._today = today
        self._date_resolver = DateResolverDialog(today=today)
        self._logger = logging.getLogger(__name__)

        self.add_step(self.destination_step)
        self.add_step(self.origin_step)
        self.add_step(self.travel_date_step)
        self.add_step(self.confirm_step)
        self.add_step(self.final_step)

    def dependencies(self) -> list[Dialog]:
        return [TextPrompt(TEXT_PROMPT_ID), ConfirmPrompt(CONFIRM_PROMPT_ID), self._date_resolver]

    def destination_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        booking = BookingRequest.from_dict(step.options)

        if booking.destination is None:
            return step.prompt(TEXT_PROMPT_ID, PromptOptions(prompt=DESTINATION_STEP_MSG_TEXT))

        return step.next(booking.destination)

    def origin_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        booking = BookingRequest.from_dict(step.options)
        booking.destination = step.result
        step.options = booking.to_dict()

        if not booking.origin:
            return step.prompt(TEXT_PROMPT_ID, PromptOptions(prompt=ORIGIN_STEP_MSG_TEXT))

        return step.next(booking.origin)

    def travel_date_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        booking = BookingRequest.from_dict(step.options)
        booking.origin = step.result
        step.options = booking.to_dict()

        needs_resolution = booking.travel_date is None or (
            not booking.multiple_dates and is_ambiguous_date(booking.travel_date, self._today())
        )
        if needs_resolution:
            return step.begin_dialog(self._date_resolver.id, booking.travel_date)

        return step.next(booking.travel_date)

    def confirm_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        booking = BookingRequest.from_dict(step.options)
        booking.travel_date = step.result
        step.options = booking.to_dict()

        message_for_dates = booking.travel_date if booking.multiple_dates else f"on: {booking.travel_date}"
        message_text = (
            f"Please confirm, I have you traveling to: {booking.destination} "
            f"from: {booking.origin} {message_for_dates}. Is this correct?"
        )
        return step.prompt(CONFIRM_PROMPT_ID, PromptOptions(prompt=message_text))

    def final_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        if step.result:
            booking = BookingRequest.from_dict(step.options)
            self._telemetry.track_event(
                BOOKING_EVENT_NAME,
                {
                    "conversationId": step.context.conversation_id,
                    "origin": booking.origin or "",
                    "destination": booking.destination or "",
                    "travelDate": booking.travel_date or "",
                },
            )
            return step.end_dialog(booking)

        self._logger.info(
            "Booking declined",
            extra={"conversation_id": step.context.conversation_id, "dialog_id": self.id},
        )
        # a declined booking is discarded, the parent sees a cancellation
        return step.cancel_all_dialogs()
