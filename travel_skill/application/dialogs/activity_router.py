from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable

from travel_skill.application.dialogs.engine import Dialog, DialogTurnResult
from travel_skill.application.dialogs.waterfall import WaterfallDialog, WaterfallStepContext
from travel_skill.application.dto.event_payloads import parse_booking_payload, parse_location_payload
from travel_skill.application.exceptions import MalformedPayloadError
from travel_skill.application.ports.intent_recognizer import IntentRecognizerPort
from travel_skill.application.turn_context import TurnContext
from travel_skill.application.utils.entity_resolver import EntityResolver
from travel_skill.domain.entities.activity import ActivityTypes, InputHints
from travel_skill.domain.entities.flight_booking import FlightBookingIntent, FlightBookingRecognition

BOOK_FLIGHT_EVENT = "BookFlight"
GET_WEATHER_EVENT = "GetWeather"

RECOGNIZER_NOT_CONFIGURED_MSG_TEXT = (
    "NOTE: CLU is not configured. To enable all capabilities, "
    "add 'CLU_ENDPOINT' and 'CLU_API_KEY' to the .env file."
)


@dataclass(frozen=True)
class RouterOutcome:
    child_dialog_id: str | None = None
    options: Any = None

    @property
    def complete(self) -> bool:
        return self.child_dialog_id is None

    @staticmethod
    def completed() -> "RouterOutcome":
        return RouterOutcome()

    @staticmethod
    def delegated(child_dialog_id: str, options: Any = None) -> "RouterOutcome":
        return RouterOutcome(child_dialog_id=child_dialog_id, options=options)


EventHandler = Callable[[TurnContext], RouterOutcome]


class ActivityRouter:
    """
    Decides what one inbound activity should do: start a child dialog or
    answer directly and finish the turn.

    Events are dispatched by name and never go through language understanding;
    messages are classified by the recognizer first.
    """

    def __init__(
        self,
        recognizer: IntentRecognizerPort,
        booking_dialog_id: str,
        entity_resolver: EntityResolver | None = None,
    ) -> None:
        self._recognizer = recognizer
        self._booking_dialog_id = booking_dialog_id
        self._entity_resolver = entity_resolver or EntityResolver()
        self._logger = logging.getLogger(__name__)
        self._event_handlers: dict[str, EventHandler] = {
            BOOK_FLIGHT_EVENT: self._begin_book_flight,
            GET_WEATHER_EVENT: self._begin_get_weather,
        }

    def register_event(self, name: str, handler: EventHandler) -> None:
        self._event_handlers[name] = handler

    def route(self, context: TurnContext) -> RouterOutcome:
        activity = context.activity
        self._trace(context, "route", f"Got ActivityType: {activity.type}")
        self._logger.info(
            "Routing activity",
            extra={"conversation_id": activity.conversation_id, "activity_type": activity.type},
        )

        if activity.type == ActivityTypes.EVENT:
            return self._on_event(context)

        if activity.type == ActivityTypes.MESSAGE:
            return self._on_message(context)

        context.send_activity(
            f'Unrecognized ActivityType: "{activity.type}".',
            input_hint=InputHints.IGNORING_INPUT,
        )
        return RouterOutcome.completed()

    def _on_event(self, context: TurnContext) -> RouterOutcome:
        activity = context.activity
        self._trace(context, "_on_event", f"Name: {activity.name}. Value: {_as_json(activity.value)}")

        handler = self._event_handlers.get(activity.name or "")
        if handler is None:
            context.send_activity(
                f'Unrecognized EventName: "{activity.name}".',
                input_hint=InputHints.IGNORING_INPUT,
            )
            return RouterOutcome.completed()

        return handler(context)

    def _on_message(self, context: TurnContext) -> RouterOutcome:
        activity = context.activity
        self._trace(context, "_on_message", f'Text: "{activity.text}". Value: {_as_json(activity.value)}')

        if not self._recognizer.is_configured:
            context.send_activity(RECOGNIZER_NOT_CONFIGURED_MSG_TEXT, input_hint=InputHints.IGNORING_INPUT)
            return RouterOutcome.completed()

        recognition = self._recognizer.recognize_as(activity.text or "", FlightBookingRecognition.from_recognition)

        context.send_activity(
            f'CLU results for "{activity.text}":\n'
            f'Intent: "{recognition.intent_name}" Score: {recognition.score}\n',
            input_hint=InputHints.IGNORING_INPUT,
        )
        self._logger.info(
            "Intent recognized",
            extra={"conversation_id": activity.conversation_id, "intent": recognition.intent_name},
        )

        if recognition.intent == FlightBookingIntent.BOOK_FLIGHT:
            draft = self._entity_resolver.resolve(recognition.entities)
            activity.value = draft.to_dict()
            return self._begin_book_flight(context)

        if recognition.intent == FlightBookingIntent.GET_WEATHER:
            return self._begin_get_weather(context)

        context.send_activity(
            "Sorry, I didn't get that. Please try asking in a different way "
            f"(intent was {recognition.intent_name})",
            input_hint=InputHints.IGNORING_INPUT,
        )
        return RouterOutcome.completed()

    def _begin_book_flight(self, context: TurnContext) -> RouterOutcome:
        try:
            booking = parse_booking_payload(context.activity.value)
        except MalformedPayloadError as e:
            self._logger.warning(
                "Malformed booking payload",
                extra={"conversation_id": context.conversation_id, "reason": str(e)},
            )
            context.send_activity(f"Malformed {BOOK_FLIGHT_EVENT} payload: {e}", input_hint=InputHints.IGNORING_INPUT)
            return RouterOutcome.completed()

        return RouterOutcome.delegated(self._booking_dialog_id, booking.to_dict())

    def _begin_get_weather(self, context: TurnContext) -> RouterOutcome:
        try:
            location = parse_location_payload(context.activity.value)
        except MalformedPayloadError as e:
            context.send_activity(f"Malformed {GET_WEATHER_EVENT} payload: {e}", input_hint=InputHints.IGNORING_INPUT)
            return RouterOutcome.completed()

        # No weather dialog yet, answer in place.
        latitude = "" if location.latitude is None else location.latitude
        longitude = "" if location.longitude is None else location.longitude
        context.send_activity(
            f"It's always sunny here in Florida! (lat: {latitude}, long: {longitude})",
            input_hint=InputHints.IGNORING_INPUT,
        )
        return RouterOutcome.completed()

    def _trace(self, context: TurnContext, method: str, label: str) -> None:
        try:
            context.send_trace(f"{type(self).__name__}.{method}()", label=label)
        except Exception as e:
            self._logger.warning("Trace activity not sent", extra={"reason": str(e)})


class ActivityRouterDialog(WaterfallDialog):
    """Root dialog of the skill: routes the first activity, then waits on the child it started."""

    def __init__(self, router: ActivityRouter, children: list[Dialog]) -> None:
        super().__init__(ActivityRouterDialog.__name__)
        self._router = router
        self._children = list(children)
        self.add_step(self.process_activity_step)

    def dependencies(self) -> list[Dialog]:
        return list(self._children)

    def process_activity_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        outcome = self._router.route(step.context)
        if outcome.complete:
            return step.end_dialog()
        return step.begin_dialog(outcome.child_dialog_id, outcome.options)


def _as_json(value: Any) -> str:
    return "" if value is None else json.dumps(value, default=str)
