import logging

from fastapi import APIRouter, HTTPException

from nicflow.models.entries import GoalProgressRequest
from nicflow.models.goals import GoalProgress
from nicflow.services.bloodstream import events_in_window
from nicflow.services.goals import goal_progress

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/progress", response_model=GoalProgress, summary="Progress towards a goal")
async def get_goal_progress(payload: GoalProgressRequest):
    goal = payload.goal
    if goal.target_date is not None and goal.target_date < goal.start_date:
        raise HTTPException(status_code=400, detail="target_date must not precede start_date")

    now = payload.resolved_now()
    window = events_in_window(payload.events(), now, 24)
    logger.debug("Goal progress requested", extra={"goal_type": goal.goal_type, "entries": len(window)})
    return goal_progress(goal, window, now)
