from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from habitboard_backend.auth import require_user_email
from habitboard_backend import repositories
from habitboard_backend.schemas import WaterPayload

router = APIRouter()


@router.get("/v1/water/{day}")
async def get_water(day: date, user_email: str = Depends(require_user_email)):
    count = await repositories.get_water_count(user_email, day.isoformat())
    return {"date": day.isoformat(), "count": count}


@router.put("/v1/water/{day}")
async def put_water(day: date, payload: WaterPayload, user_email: str = Depends(require_user_email)):
    try:
        count = await repositories.set_water_count(user_email, day.isoformat(), payload.count)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"date": day.isoformat(), "count": count}
