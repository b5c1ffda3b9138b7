from __future__ import annotations

import logging
from typing import Collection


logger = logging.getLogger(__name__)

ANY_CALLER = "*"


def verify_caller(caller_id: str | None, allowed_callers: Collection[str]) -> bool:
    """True when the calling bot may use this skill."""
    if ANY_CALLER in allowed_callers:
        return True

    if not caller_id:
        logger.warning("Missing caller id header")
        return False

    if caller_id not in allowed_callers:
        logger.warning("Caller not allowed", extra={"reason": caller_id})
        return False

    return True
