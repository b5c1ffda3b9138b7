import logging

from fastapi import FastAPI

from travel_skill.api.messages import router as messages_router
from travel_skill.core.config import settings


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("conversation_id", "activity_type", "intent", "dialog_id", "event", "reason"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title="Travel Agent Skill", version="1.0.0")

app.include_router(messages_router, tags=["messages"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
