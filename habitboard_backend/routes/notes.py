from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from habitboard_backend.auth import require_user_email
from habitboard_backend import repositories
from habitboard_backend.schemas import DailyNotePayload

router = APIRouter()


@router.get("/v1/notes/{day}")
async def get_daily_note(day: date, user_email: str = Depends(require_user_email)):
    note = await repositories.get_daily_note(user_email, day.isoformat())
    return {"date": day.isoformat(), "note": note or None}


@router.put("/v1/notes/{day}")
async def put_daily_note(day: date, payload: DailyNotePayload, user_email: str = Depends(require_user_email)):
    try:
        note = await repositories.upsert_daily_note(
            user_email, day.isoformat(), payload.content, payload.college_status
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"date": day.isoformat(), "note": note}
