from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from habitboard_backend.auth import require_user_email
from habitboard_backend import repositories
from habitboard_backend.schemas import FocusSessionCreate

router = APIRouter()


@router.get("/v1/focus-sessions")
async def list_focus_sessions(
    start: date = Query(...),
    end: date = Query(...),
    user_email: str = Depends(require_user_email),
):
    if end < start:
        raise HTTPException(status_code=400, detail="End date must not precede start date")
    items = await repositories.list_focus_sessions(user_email, start.isoformat(), end.isoformat())
    return {"items": items}


@router.post("/v1/focus-sessions")
async def create_focus_session(payload: FocusSessionCreate, user_email: str = Depends(require_user_email)):
    try:
        return await repositories.create_focus_session(
            user_email, payload.duration, payload.session_type, payload.date.isoformat()
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
