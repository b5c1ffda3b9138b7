from __future__ import annotations

import logging
from typing import Any

import httpx

from travel_skill.application.exceptions import RecognizerContractError, RecognizerUpstreamError
from travel_skill.application.ports.intent_recognizer import IntentRecognizerPort
from travel_skill.domain.entities.recognition import (
    Entity,
    EntityResolution,
    IntentScore,
    RecognitionResult,
)

DEFAULT_API_VERSION = "2023-04-01"
SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"

# Only date resolutions are used downstream.
KEPT_RESOLUTION_KINDS = ("DateTimeResolution", "TemporalSpanResolution")


class CluRecognizer(IntentRecognizerPort):
    """
    Azure Conversational Language Understanding adapter.

    Contract guarantees:
    - recognize returns a RecognitionResult with every intent the service scored
    - Raises:
        RecognizerUpstreamError: networking/provider failures
        RecognizerContractError: response body not shaped like a conversation prediction
    """

    def __init__(
        self,
        endpoint: str | None,
        api_key: str | None,
        project_name: str = "",
        deployment_name: str = "",
        api_version: str = DEFAULT_API_VERSION,
        language: str = "en-us",
        verbose: bool = True,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._endpoint = (endpoint or "").rstrip("/")
        self._api_key = api_key or ""
        self._project_name = project_name
        self._deployment_name = deployment_name
        self._api_version = api_version
        self._language = language
        self._verbose = verbose
        self._client = httpx.Client(timeout=timeout, transport=transport)
        self._logger = logging.getLogger(__name__)

    @property
    def is_configured(self) -> bool:
        return bool(self._endpoint and self._api_key)

    def recognize(self, text: str) -> RecognitionResult:
        if not self.is_configured:
            raise RecognizerUpstreamError("CLU is not configured (missing endpoint or API key).")

        url = f"{self._endpoint}/language/:analyze-conversations"
        headers = {SUBSCRIPTION_KEY_HEADER: self._api_key, "Content-Type": "application/json"}
        payload = {
            "kind": "Conversation",
            "analysisInput": {
                "conversationItem": {
                    "id": "1",
                    "text": text,
                    "modality": "text",
                    "language": self._language,
                    "participantId": "1",
                }
            },
            "parameters": {
                "projectName": self._project_name,
                "deploymentName": self._deployment_name,
                "verbose": self._verbose,
                "stringIndexType": "TextElement_V8",
            },
        }

        try:
            response = self._client.post(
                url,
                params={"api-version": self._api_version},
                json=payload,
                headers=headers,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            self._logger.error("CLU request failed", extra={"reason": str(e)})
            raise RecognizerUpstreamError(f"CLU API error: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise RecognizerContractError(f"CLU: response is not JSON: {e}") from e

        return _parse_prediction(text, data)


def _parse_prediction(text: str, data: Any) -> RecognitionResult:
    if not isinstance(data, dict):
        raise RecognizerContractError("CLU: expected a JSON object.")

    result = data.get("result")
    prediction = result.get("prediction") if isinstance(result, dict) else None
    if not isinstance(prediction, dict):
        raise RecognizerContractError("CLU: 'result.prediction' is missing.")

    intents: dict[str, IntentScore] = {}
    for item in prediction.get("intents") or []:
        try:
            intents[str(item["category"])] = IntentScore(score=float(item.get("confidenceScore", 0.0)))
        except (KeyError, TypeError, ValueError) as e:
            raise RecognizerContractError(f"CLU: invalid intent item shape: {e}")

    entities: list[Entity] = []
    for item in prediction.get("entities") or []:
        if not isinstance(item, dict) or "category" not in item:
            raise RecognizerContractError("CLU: each entity must be an object with a category.")
        try:
            confidence = float(item.get("confidenceScore", 0.0))
        except (TypeError, ValueError):
            confidence = 0.0
        entities.append(
            Entity(
                category=str(item["category"]),
                text=str(item.get("text", "")),
                confidence=confidence,
                resolutions=tuple(_parse_resolutions(item.get("resolutions"))),
            )
        )

    top_intent = prediction.get("topIntent")
    return RecognitionResult(
        text=text,
        intents=intents,
        entities=tuple(entities),
        top_intent=str(top_intent) if top_intent is not None else None,
    )


def _parse_resolutions(raw: Any) -> list[EntityResolution]:
    out: list[EntityResolution] = []
    for item in raw or []:
        if not isinstance(item, dict):
            continue
        kind = item.get("resolutionKind")
        if kind not in KEPT_RESOLUTION_KINDS:
            continue
        out.append(
            EntityResolution(
                resolution_kind=kind,
                timex=item.get("timex"),
                value=item.get("value"),
                begin=item.get("begin"),
                end=item.get("end"),
            )
        )
    return out
