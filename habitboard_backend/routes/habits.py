from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from habitboard_backend.auth import require_user_email
from habitboard_backend import repositories
from habitboard_backend.schemas import HabitCreate, HabitPatch

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/v1/habits")
async def list_habits(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1900, le=9999),
    user_email: str = Depends(require_user_email),
):
    return {"items": await repositories.list_habits(user_email, month, year)}


@router.post("/v1/habits")
async def create_habit(payload: HabitCreate, user_email: str = Depends(require_user_email)):
    try:
        habit = await repositories.create_habit(
            user_email, payload.name, payload.priority, payload.month, payload.year
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    logger.info("Created habit %s for %s-%02d", habit["id"], payload.year, payload.month)
    return habit


@router.patch("/v1/habits/{habit_id}")
async def update_habit(habit_id: str, payload: HabitPatch, user_email: str = Depends(require_user_email)):
    patch = payload.model_dump(exclude_unset=True)
    if not patch:
        raise HTTPException(status_code=400, detail="No changes provided")
    try:
        return await repositories.update_habit(user_email, habit_id, patch)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.delete("/v1/habits/{habit_id}")
async def delete_habit(habit_id: str, user_email: str = Depends(require_user_email)):
    await repositories.delete_habit(user_email, habit_id)
    return {"ok": True}
