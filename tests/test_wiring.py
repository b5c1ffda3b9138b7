"""
Tests for picking adapters from settings.
"""

from __future__ import annotations

import tempfile

import pytest

from helpers import FakeRecognizer, FakeTelemetry
from travel_skill.core.config import settings
from travel_skill.infrastructure.auth.caller_verify import verify_caller
from travel_skill.infrastructure.recognizers.clu_recognizer import CluRecognizer
from travel_skill.infrastructure.recognizers.mock_recognizer import MockRecognizer
from travel_skill.infrastructure.recognizers.openai_recognizer import OpenAIRecognizer
from travel_skill.infrastructure.store.json_store import JsonDialogStateStore
from travel_skill.infrastructure.store.memory_store import MemoryDialogStateStore
from travel_skill.wiring.dependencies import (
    build_dialog_set,
    get_allowed_callers,
    get_recognizer,
    get_state_store,
)


@pytest.fixture
def clean_settings(monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", None)
    monkeypatch.setattr(settings, "CLU_ENDPOINT", None)
    monkeypatch.setattr(settings, "CLU_API_KEY", None)
    monkeypatch.setattr(settings, "RECOGNIZER_PROVIDER", "auto")
    get_recognizer.cache_clear()
    get_state_store.cache_clear()
    yield settings
    get_recognizer.cache_clear()
    get_state_store.cache_clear()


def test_auto_recognizer_uses_mock_in_dev(clean_settings, monkeypatch):
    monkeypatch.setattr(settings, "ENV", "dev")

    assert isinstance(get_recognizer(), MockRecognizer)


def test_auto_recognizer_is_unconfigured_clu_in_prod(clean_settings, monkeypatch):
    monkeypatch.setattr(settings, "ENV", "prod")

    recognizer = get_recognizer()

    assert isinstance(recognizer, CluRecognizer)
    assert not recognizer.is_configured


def test_auto_recognizer_prefers_configured_clu(clean_settings, monkeypatch):
    monkeypatch.setattr(settings, "CLU_ENDPOINT", "https://clu.example.com")
    monkeypatch.setattr(settings, "CLU_API_KEY", "secret")

    recognizer = get_recognizer()

    assert isinstance(recognizer, CluRecognizer)
    assert recognizer.is_configured


def test_explicit_openai_provider_without_key_is_unconfigured(clean_settings, monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.setattr(settings, "RECOGNIZER_PROVIDER", "openai")

    recognizer = get_recognizer()

    assert isinstance(recognizer, OpenAIRecognizer)
    assert not recognizer.is_configured


def test_state_store_provider(clean_settings, monkeypatch):
    monkeypatch.setattr(settings, "STATE_PROVIDER", "memory")
    assert isinstance(get_state_store(), MemoryDialogStateStore)

    get_state_store.cache_clear()
    with tempfile.TemporaryDirectory() as tmpdir:
        monkeypatch.setattr(settings, "STATE_PROVIDER", "json")
        monkeypatch.setattr(settings, "STATE_DIR", tmpdir)
        assert isinstance(get_state_store(), JsonDialogStateStore)


def test_allowed_callers(monkeypatch):
    monkeypatch.setattr(settings, "ALLOWED_CALLERS", "parent-bot, other-bot,")

    allowed = get_allowed_callers()

    assert allowed == frozenset({"parent-bot", "other-bot"})
    assert verify_caller("parent-bot", allowed)
    assert not verify_caller("stranger", allowed)
    assert not verify_caller(None, allowed)
    assert verify_caller(None, frozenset({"*"}))


def test_dialog_set_registers_every_dialog():
    dialogs, root_dialog_id = build_dialog_set(FakeRecognizer(), FakeTelemetry())

    assert root_dialog_id == "ActivityRouterDialog"
    for dialog_id in (
        "ActivityRouterDialog",
        "BookingDialog",
        "BookingDialog.TextPrompt",
        "BookingDialog.ConfirmPrompt",
        "DateResolverDialog",
        "DateResolverDialog.TextPrompt",
    ):
        assert dialogs.find(dialog_id) is not None
