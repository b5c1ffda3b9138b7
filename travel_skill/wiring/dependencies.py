from datetime import date
from functools import lru_cache
import logging
from typing import Callable

from travel_skill.core.config import settings
from travel_skill.application.dialogs.activity_router import ActivityRouter, ActivityRouterDialog
from travel_skill.application.dialogs.booking import BookingDialog
from travel_skill.application.dialogs.engine import DialogSet
from travel_skill.application.ports.dialog_state_store import DialogStateStorePort
from travel_skill.application.ports.intent_recognizer import IntentRecognizerPort
from travel_skill.application.ports.telemetry import TelemetryPort
from travel_skill.application.use_cases.handle_incoming_activity import HandleIncomingActivityUseCase
from travel_skill.infrastructure.recognizers.clu_recognizer import CluRecognizer
from travel_skill.infrastructure.recognizers.mock_recognizer import MockRecognizer
from travel_skill.infrastructure.recognizers.openai_recognizer import OpenAIRecognizer
from travel_skill.infrastructure.store.json_store import JsonDialogStateStore
from travel_skill.infrastructure.store.memory_store import MemoryDialogStateStore
from travel_skill.infrastructure.telemetry.logging_telemetry import LoggingTelemetry


logger = logging.getLogger(__name__)


def _build_clu_recognizer() -> CluRecognizer:
    return CluRecognizer(
        endpoint=settings.CLU_ENDPOINT,
        api_key=settings.CLU_API_KEY,
        project_name=settings.CLU_PROJECT_NAME,
        deployment_name=settings.CLU_DEPLOYMENT_NAME,
        api_version=settings.CLU_API_VERSION,
        language=settings.CLU_LANGUAGE,
        verbose=settings.CLU_VERBOSE,
    )


def _build_openai_recognizer() -> OpenAIRecognizer:
    return OpenAIRecognizer(
        api_key=settings.OPENAI_API_KEY,
        model=settings.OPENAI_MODEL_RECOGNIZE,
        temperature=settings.OPENAI_TEMPERATURE_RECOGNIZE,
    )


@lru_cache
def get_recognizer() -> IntentRecognizerPort:
    provider = settings.RECOGNIZER_PROVIDER.lower()
    if provider == "mock":
        return MockRecognizer()
    if provider == "clu":
        return _build_clu_recognizer()
    if provider == "openai":
        return _build_openai_recognizer()

    if settings.OPENAI_API_KEY and settings.OPENAI_API_KEY.strip():
        logger.info("Using OpenAIRecognizer")
        return _build_openai_recognizer()

    clu = _build_clu_recognizer()
    if clu.is_configured:
        logger.info("Using CluRecognizer")
        return clu

    if settings.ENV.lower() in {"dev", "local"}:
        logger.info("Using MockRecognizer (CLU not configured, ENV=dev/local)")
        return MockRecognizer()

    # unconfigured: the router tells the user instead of failing the turn
    logger.warning("No recognizer configured")
    return clu


@lru_cache
def get_state_store() -> DialogStateStorePort:
    if settings.STATE_PROVIDER.lower() == "json":
        return JsonDialogStateStore(data_dir=settings.STATE_DIR)
    return MemoryDialogStateStore()


@lru_cache
def get_telemetry() -> TelemetryPort:
    return LoggingTelemetry()


def build_dialog_set(
    recognizer: IntentRecognizerPort,
    telemetry: TelemetryPort,
    today: Callable[[], date] = date.today,
) -> tuple[DialogSet, str]:
    """Dialog set of the skill and the id of its root dialog."""
    booking_dialog = BookingDialog(telemetry=telemetry, today=today)
    router = ActivityRouter(recognizer=recognizer, booking_dialog_id=booking_dialog.id)
    root = ActivityRouterDialog(router=router, children=[booking_dialog])
    return DialogSet().add(root), root.id


@lru_cache
def get_handle_incoming_activity_use_case() -> HandleIncomingActivityUseCase:
    dialogs, root_dialog_id = build_dialog_set(get_recognizer(), get_telemetry())
    return HandleIncomingActivityUseCase(
        dialogs=dialogs,
        root_dialog_id=root_dialog_id,
        store=get_state_store(),
    )


def get_allowed_callers() -> frozenset[str]:
    return frozenset(c.strip() for c in settings.ALLOWED_CALLERS.split(",") if c.strip())


def get_container() -> dict[str, object]:
    return {
        "use_case": get_handle_incoming_activity_use_case(),
        "store": get_state_store(),
        "recognizer": get_recognizer(),
    }
