from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.encoders import jsonable_encoder

from habitboard_backend.auth import require_user_email
from habitboard_backend import repositories
from habitboard_backend.schemas import GoalCreate, GoalPatch

router = APIRouter()


@router.get("/v1/goals")
async def list_goals(user_email: str = Depends(require_user_email)):
    return {"items": await repositories.list_goals(user_email)}


@router.post("/v1/goals")
async def create_goal(payload: GoalCreate, user_email: str = Depends(require_user_email)):
    try:
        goal = await repositories.create_goal(
            user_email, payload.title, payload.description, payload.target_date
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return jsonable_encoder(goal)


@router.patch("/v1/goals/{goal_id}")
async def update_goal(goal_id: str, payload: GoalPatch, user_email: str = Depends(require_user_email)):
    patch = payload.model_dump(exclude_unset=True)
    if not patch:
        raise HTTPException(status_code=400, detail="No changes provided")
    try:
        goal = await repositories.update_goal(user_email, goal_id, patch)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return jsonable_encoder(goal)


@router.delete("/v1/goals/{goal_id}")
async def delete_goal(goal_id: str, user_email: str = Depends(require_user_email)):
    await repositories.delete_goal(user_email, goal_id)
    return {"ok": True}
