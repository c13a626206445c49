from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends

from habitboard_backend.auth import require_user_email
from habitboard_backend.settings import get_settings
from habitboard_backend import repositories

router = APIRouter()


def _today() -> date:
    return datetime.now(ZoneInfo(get_settings().dashboard_timezone)).date()


@router.get("/v1/bootstrap")
async def bootstrap(user_email: str = Depends(require_user_email)):
    today = _today()
    habits = await repositories.list_habits(user_email, today.month, today.year)
    return {
        "user_email": user_email,
        "user_name": user_email.split("@")[0].title(),
        "allowed": True,
        "today": today.isoformat(),
        "quick_indicators": {
            "habits_this_month": len(habits),
            "open_todos": await repositories.count_open_todos(user_email),
            "active_goals": await repositories.count_active_goals(user_email),
            "water_today": await repositories.get_water_count(user_email, today.isoformat()),
        },
    }
