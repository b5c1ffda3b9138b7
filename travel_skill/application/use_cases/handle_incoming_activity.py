from __future__ import annotations

import logging
import traceback

from travel_skill.application.dialogs.engine import DialogSet, DialogTurnResult, DialogTurnStatus
from travel_skill.application.ports.dialog_state_store import DialogStateStorePort
from travel_skill.application.turn_context import TurnContext
from travel_skill.application.utils.conversation_locks import ConversationLocks
from travel_skill.domain.entities.activity import (
    Activity,
    ActivityTypes,
    EndOfConversationCodes,
    InputHints,
)
from travel_skill.domain.entities.booking_request import BookingRequest

ERROR_MSG_TEXT = "The skill encountered an error or bug."
ERROR_FOLLOW_UP_MSG_TEXT = "To continue to run this bot, please fix the bot source code."
ERROR_TRACE_VALUE_TYPE = "https://www.botframework.com/schemas/error"


class HandleIncomingActivityUseCase:
    """
    Runs one turn of the skill for one inbound activity.

    Turns of the same conversation are serialised; different conversations
    run independently. Any exception escaping the dialogs is handled here and
    only here: the user is told, the parent gets a SkillError end of
    conversation, and the persisted dialog stack is dropped.
    """

    def __init__(self, dialogs: DialogSet, root_dialog_id: str, store: DialogStateStorePort) -> None:
        self._dialogs = dialogs
        self._root_dialog_id = root_dialog_id
        self._store = store
        self._locks = ConversationLocks()
        self._logger = logging.getLogger(__name__)

    def handle(self, activity: Activity) -> list[Activity]:
        context = TurnContext(activity)
        with self._locks.hold(activity.conversation_id):
            try:
                self._run_turn(context)
            except Exception as e:
                self._on_turn_error(context, e)
        return context.responses

    def _run_turn(self, context: TurnContext) -> None:
        activity = context.activity
        conversation_id = activity.conversation_id
        state = self._store.get_state(conversation_id)
        dc = self._dialogs.create_context(context, state)

        if activity.type == ActivityTypes.END_OF_CONVERSATION:
            # the parent ended the skill conversation
            self._logger.info(
                "End of conversation received",
                extra={"conversation_id": conversation_id, "reason": activity.code},
            )
            dc.cancel_all_dialogs()
            self._store.delete_state(conversation_id)
            return

        result = dc.continue_dialog()
        if result.status == DialogTurnStatus.EMPTY:
            result = dc.begin_dialog(self._root_dialog_id)

        if result.status in (DialogTurnStatus.COMPLETE, DialogTurnStatus.CANCELLED):
            self._send_end_of_conversation(context, result)

        if state.is_empty:
            self._store.delete_state(conversation_id)
        else:
            self._store.set_state(conversation_id, state)

    def _send_end_of_conversation(self, context: TurnContext, result: DialogTurnResult) -> None:
        if result.status == DialogTurnStatus.CANCELLED:
            code = EndOfConversationCodes.USER_CANCELLED
            value = None
        else:
            code = EndOfConversationCodes.COMPLETED_SUCCESSFULLY
            value = result.result.to_dict() if isinstance(result.result, BookingRequest) else result.result

        self._logger.info(
            "Skill turn finished",
            extra={"conversation_id": context.conversation_id, "event": code},
        )
        context.send_activity(Activity.end_of_conversation(code, value=value))

    def _on_turn_error(self, context: TurnContext, exception: Exception) -> None:
        self._logger.error(
            "[on_turn_error] unhandled error : %s",
            exception,
            exc_info=exception,
            extra={"conversation_id": context.conversation_id},
        )
        self._send_error_message(context, exception)
        self._send_end_of_conversation_error(context, exception)
        self._clear_conversation_state(context)

    def _send_error_message(self, context: TurnContext, exception: Exception) -> None:
        try:
            context.send_activity(ERROR_MSG_TEXT, input_hint=InputHints.IGNORING_INPUT)
            context.send_activity(ERROR_FOLLOW_UP_MSG_TEXT, input_hint=InputHints.EXPECTING_INPUT)
            context.send_trace(
                "OnTurnError Trace",
                value="".join(traceback.format_exception(exception)),
                value_type=ERROR_TRACE_VALUE_TYPE,
                label="TurnError",
            )
        except Exception as e:
            self._logger.error("Exception caught in _send_error_message", extra={"reason": str(e)})

    def _send_end_of_conversation_error(self, context: TurnContext, exception: Exception) -> None:
        try:
            context.send_activity(
                Activity.end_of_conversation(EndOfConversationCodes.SKILL_ERROR, text=str(exception))
            )
        except Exception as e:
            self._logger.error("Exception caught in _send_end_of_conversation_error", extra={"reason": str(e)})

    def _clear_conversation_state(self, context: TurnContext) -> None:
        # a dialog stack left in a bad state would fail the same way on every retry
        try:
            self._store.delete_state(context.conversation_id)
        except Exception as e:
            self._logger.error(
                "Exception caught on attempting to delete dialog state",
                extra={"conversation_id": context.conversation_id, "reason": str(e)},
            )
