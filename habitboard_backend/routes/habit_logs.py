from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from habitboard_backend.auth import require_user_email
from habitboard_backend import repositories
from habitboard_backend.schemas import HabitLogUpsert

router = APIRouter()


@router.get("/v1/habit-logs")
async def list_habit_logs(
    habit_id: List[str] = Query(default=[]),
    user_email: str = Depends(require_user_email),
):
    items = await repositories.list_habit_logs(user_email, habit_id)
    return {"items": items}


@router.put("/v1/habit-logs")
async def upsert_habit_log(payload: HabitLogUpsert, user_email: str = Depends(require_user_email)):
    try:
        record = await repositories.upsert_habit_log(
            user_email, payload.habit_id, payload.date.isoformat(), payload.status
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return record
