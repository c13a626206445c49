from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from habitboard_backend.auth import require_user_email
from habitboard_backend import repositories
from habitboard_backend.schemas import SleepLogUpsert

router = APIRouter()


@router.get("/v1/sleep-logs")
async def list_sleep_logs(
    start: date = Query(...),
    end: date = Query(...),
    user_email: str = Depends(require_user_email),
):
    if end < start:
        raise HTTPException(status_code=400, detail="End date must not precede start date")
    items = await repositories.list_sleep_logs(user_email, start.isoformat(), end.isoformat())
    return {"items": items}


@router.put("/v1/sleep-logs")
async def upsert_sleep_log(payload: SleepLogUpsert, user_email: str = Depends(require_user_email)):
    try:
        return await repositories.upsert_sleep_log(
            user_email,
            payload.date.isoformat(),
            payload.sleep_time,
            payload.wake_time,
            payload.quality,
            payload.notes,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
