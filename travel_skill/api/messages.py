from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, HTTPException

from travel_skill.application.dto.activity_dto import ActivityDTO, OutboundActivityDTO
from travel_skill.application.use_cases.handle_incoming_activity import HandleIncomingActivityUseCase
from travel_skill.infrastructure.auth.caller_verify import verify_caller
from travel_skill.wiring.dependencies import get_allowed_callers, get_handle_incoming_activity_use_case


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/api/messages")
def post_activity(
    req: ActivityDTO,
    x_caller_id: str | None = Header(None, alias="X-Caller-Id"),
    uc: HandleIncomingActivityUseCase = Depends(get_handle_incoming_activity_use_case),
    allowed_callers: frozenset[str] = Depends(get_allowed_callers),
) -> dict[str, list[dict]]:
    if not verify_caller(x_caller_id, allowed_callers):
        raise HTTPException(status_code=403, detail="Caller is not allowed to use this skill")

    conversation_id = req.resolved_conversation_id()
    if not conversation_id:
        raise HTTPException(status_code=400, detail="Activity has no conversation id")

    activity = req.to_entity(caller_id=x_caller_id)
    logger.info(
        "Activity received",
        extra={"conversation_id": conversation_id, "activity_type": activity.type},
    )

    # turn failures are reported to the caller as activities, not as HTTP errors
    responses = uc.handle(activity)
    return {"activities": [OutboundActivityDTO.from_entity(a).to_wire() for a in responses]}
