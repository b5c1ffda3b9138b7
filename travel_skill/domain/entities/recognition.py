from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class IntentScore:
    score: float


@dataclass(frozen=True)
class EntityResolution:
    resolution_kind: str
    timex: str | None = None
    value: str | None = None
    begin: str | None = None  # TemporalSpanResolution only
    end: str | None = None


@dataclass(frozen=True)
class Entity:
    category: str
    text: str
    confidence: float
    resolutions: tuple[EntityResolution, ...] = ()


@dataclass(frozen=True)
class RecognitionResult:
    text: str
    intents: dict[str, IntentScore] = field(default_factory=dict)
    entities: tuple[Entity, ...] = ()
    top_intent: str | None = None  # as reported by the service, may be absent

    def top_scoring_intent(self) -> tuple[str, IntentScore] | None:
        """
        Highest scoring intent. On equal scores the first one encountered wins.
        """
        best: tuple[str, IntentScore] | None = None
        for name, score in self.intents.items():
            if best is None or score.score > best[1].score:
                best = (name, score)
        return best
