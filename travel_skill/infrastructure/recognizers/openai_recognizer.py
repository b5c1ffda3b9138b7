from __future__ import annotations

import json
from typing import Any

from openai import OpenAI

from travel_skill.application.exceptions import RecognizerContractError, RecognizerUpstreamError
from travel_skill.application.ports.intent_recognizer import IntentRecognizerPort
from travel_skill.application.utils.entity_resolver import DATE_CATEGORY, DESTINATION_CATEGORY
from travel_skill.domain.entities.flight_booking import FlightBookingIntent
from travel_skill.domain.entities.recognition import (
    Entity,
    EntityResolution,
    IntentScore,
    RecognitionResult,
)
from travel_skill.infrastructure.recognizers.prompts import build_recognize_prompt


class OpenAIRecognizer(IntentRecognizerPort):
    """
    OpenAI-backed adapter implementing IntentRecognizerPort.

    The model is asked for the same prediction shape the CLU service returns.

    Raises:
        RecognizerUpstreamError: networking/provider failures
        RecognizerContractError: invalid JSON or wrong schema/shape
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = "gpt-4o-mini",
        temperature: float = 0.0,
        client: Any = None,
    ) -> None:
        self._model = model
        self._temperature = temperature
        # OpenAI() raises without credentials
        if client is None and api_key and api_key.strip():
            client = OpenAI(api_key=api_key)
        self.client = client

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    def recognize(self, text: str) -> RecognitionResult:
        if self.client is None:
            raise RecognizerUpstreamError("OpenAI is not configured (missing API key).")

        prompt = build_recognize_prompt(
            text=text,
            intents=[intent.value for intent in FlightBookingIntent],
            entity_categories=[DESTINATION_CATEGORY, DATE_CATEGORY],
        )
        content = self._call_text(prompt)
        data = _parse_json(content, what="recognize")

        if not isinstance(data, dict):
            raise RecognizerContractError("Recognize: expected a JSON object with keys: topIntent, intents, entities.")

        intents_raw = data.get("intents")
        if not isinstance(intents_raw, list):
            raise RecognizerContractError("Recognize: 'intents' must be a list.")

        intents: dict[str, IntentScore] = {}
        for item in intents_raw:
            try:
                intents[str(item["category"])] = IntentScore(score=float(item["confidenceScore"]))
            except Exception as e:
                raise RecognizerContractError(f"Recognize: invalid intent item shape: {e}")

        entities: list[Entity] = []
        for item in data.get("entities") or []:
            try:
                resolutions = tuple(
                    EntityResolution(
                        resolution_kind=str(r["resolutionKind"]),
                        timex=r.get("timex"),
                        value=r.get("value"),
                    )
                    for r in item.get("resolutions") or []
                )
                entities.append(
                    Entity(
                        category=str(item["category"]),
                        text=str(item["text"]),
                        confidence=float(item.get("confidenceScore", 0.0)),
                        resolutions=resolutions,
                    )
                )
            except Exception as e:
                raise RecognizerContractError(f"Recognize: invalid entity item shape: {e}")

        top_intent = data.get("topIntent")
        return RecognitionResult(
            text=text,
            intents=intents,
            entities=tuple(entities),
            top_intent=str(top_intent) if top_intent is not None else None,
        )

    def _call_text(self, prompt: str) -> str:
        try:
            resp = self.client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": "Return only valid JSON. Do not include markdown or extra text."},
                    {"role": "user", "content": prompt},
                ],
                temperature=self._temperature,
                max_tokens=600,
                response_format={"type": "json_object"},
            )
        except Exception as e:
            raise RecognizerUpstreamError(f"OpenAI API error: {e}") from e

        content = (resp.choices[0].message.content or "").strip() if resp.choices else ""
        if not content:
            raise RecognizerContractError("LLM returned empty response text.")

        return content


def _parse_json(text: str, what: str) -> Any:
    try:
        return json.loads(text)
    except Exception:
        snippet = text[:200].replace("\n", " ")
        raise RecognizerContractError(f"{what.capitalize()}: invalid JSON. Snippet: {snippet!r}")
