from __future__ import annotations

import logging
from datetime import date, datetime
from uuid import uuid4

from sqlalchemy import text as sql_text, bindparam

from habitboard.metrics import sleep_duration_minutes
from habitboard_backend.db import get_sessionmaker
from habitboard_backend.db_init import (
    HABITS_TABLE,
    HABIT_LOGS_TABLE,
    DAILY_NOTES_TABLE,
    TODOS_TABLE,
    SHORTCUTS_TABLE,
    FOCUS_SESSIONS_TABLE,
    SLEEP_LOGS_TABLE,
    GOALS_TABLE,
    WATER_TABLE,
)

logger = logging.getLogger(__name__)

HABIT_STATUSES = {"done", "skip", "empty"}
COLLEGE_STATUSES = {"C", "F", "H", ""}
SESSION_TYPES = {"stopwatch", "pomodoro"}

HABIT_COLUMNS = "id, user_email, name, priority, month, year, created_at, updated_at"
HABIT_LOG_COLUMNS = "id, habit_id, date, status, created_at, updated_at"
TODO_COLUMNS = "id, user_email, title, completed, position, created_at, updated_at"
SHORTCUT_COLUMNS = "id, user_email, title, url, category, position, created_at, updated_at"
GOAL_COLUMNS = "id, user_email, title, description, target_date, completed, progress, created_at, updated_at"
SLEEP_COLUMNS = "id, user_email, date, sleep_time, wake_time, duration, quality, notes, created_at, updated_at"


def _new_id() -> str:
    return uuid4().hex


def _now() -> str:
    return datetime.utcnow().isoformat()


def _clean_text(value, limit: int | None = None) -> str:
    text = " ".join(str(value or "").split()).strip()
    return text[:limit] if limit else text


def _optional_text(value) -> str | None:
    text = str(value or "").strip()
    return text or None


def _normalize_time_value(value):
    if value is None:
        return None
    if hasattr(value, "strftime"):
        return value.strftime("%H:%M")
    value_str = str(value).strip()
    return value_str[:5] if value_str else None


def _normalize_priority(value) -> int:
    try:
        priority = int(value)
    except (TypeError, ValueError):
        return 0
    return priority if priority in {0, 1, 2} else 0


def _normalize_progress(value) -> int:
    try:
        progress = int(value)
    except (TypeError, ValueError):
        return 0
    return max(0, min(100, progress))


def _iso(value):
    if value is None:
        return None
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _normalize_row(row, bool_keys=()) -> dict:
    if not row:
        return {}
    payload = dict(row)
    for key, value in list(payload.items()):
        if key in bool_keys:
            payload[key] = bool(value)
        elif hasattr(value, "isoformat"):
            payload[key] = value.isoformat()
    return payload


async def _fetch_one(sql: str, params: dict) -> dict | None:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(sql_text(sql), params)).mappings().fetchone()
    return dict(row) if row else None


async def _fetch_all(sql: str, params: dict) -> list[dict]:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(sql_text(sql), params)).mappings().all()
    return [dict(row) for row in rows]


async def _execute(sql: str, params: dict) -> None:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(sql_text(sql), params)
        await session.commit()


async def _update_owned_row(table: str, user_email: str, row_id: str, values: dict) -> None:
    if not values:
        return
    updates = [f"{key} = :{key}" for key in values]
    updates.append("updated_at = :updated_at")
    params = {**values, "id": row_id, "user_email": user_email, "updated_at": _now()}
    await _execute(
        f"UPDATE {table} SET {', '.join(updates)} WHERE id = :id AND user_email = :user_email",
        params,
    )


# Habits


async def list_habits(user_email: str, month: int, year: int) -> list[dict]:
    rows = await _fetch_all(
        f"""
        SELECT {HABIT_COLUMNS}
        FROM {HABITS_TABLE}
        WHERE user_email = :user_email AND month = :month AND year = :year
        ORDER BY priority DESC, created_at ASC
        """,
        {"user_email": user_email, "month": month, "year": year},
    )
    return [_normalize_row(row) for row in rows]


async def get_habit(user_email: str, habit_id: str) -> dict:
    row = await _fetch_one(
        f"SELECT {HABIT_COLUMNS} FROM {HABITS_TABLE} WHERE id = :id AND user_email = :user_email",
        {"id": habit_id, "user_email": user_email},
    )
    return _normalize_row(row)


async def _ensure_unique_habit_name(
    user_email: str, name: str, month: int, year: int, exclude_id: str | None = None
) -> None:
    row = await _fetch_one(
        f"""
        SELECT id FROM {HABITS_TABLE}
        WHERE user_email = :user_email AND month = :month AND year = :year AND name = :name
          AND id != :exclude_id
        """,
        {"user_email": user_email, "month": month, "year": year, "name": name, "exclude_id": exclude_id or ""},
    )
    if row:
        raise ValueError(f"A habit named {name!r} already exists for this month")


async def create_habit(user_email: str, name: str, priority: int, month: int, year: int) -> dict:
    clean_name = _clean_text(name, 80)
    if not clean_name:
        raise ValueError("Habit name cannot be empty")
    if not 1 <= int(month) <= 12:
        raise ValueError("Month must be between 1 and 12")
    await _ensure_unique_habit_name(user_email, clean_name, int(month), int(year))
    now = _now()
    record = {
        "id": _new_id(),
        "user_email": user_email,
        "name": clean_name,
        "priority": _normalize_priority(priority),
        "month": int(month),
        "year": int(year),
        "created_at": now,
        "updated_at": now,
    }
    await _execute(
        f"""
        INSERT INTO {HABITS_TABLE} ({HABIT_COLUMNS})
        VALUES (:id, :user_email, :name, :priority, :month, :year, :created_at, :updated_at)
        """,
        record,
    )
    return record


async def update_habit(user_email: str, habit_id: str, patch: dict) -> dict:
    existing = await get_habit(user_email, habit_id)
    if not existing:
        raise LookupError("Habit not found")
    values = {}
    if "name" in patch:
        clean_name = _clean_text(patch["name"], 80)
        if not clean_name:
            raise ValueError("Habit name cannot be empty")
        await _ensure_unique_habit_name(
            user_email, clean_name, int(existing["month"]), int(existing["year"]), exclude_id=habit_id
        )
        values["name"] = clean_name
    if "priority" in patch:
        values["priority"] = _normalize_priority(patch["priority"])
    await _update_owned_row(HABITS_TABLE, user_email, habit_id, values)
    return await get_habit(user_email, habit_id)


async def delete_habit(user_email: str, habit_id: str) -> None:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"""
                DELETE FROM {HABIT_LOGS_TABLE}
                WHERE habit_id IN (
                    SELECT id FROM {HABITS_TABLE} WHERE id = :habit_id AND user_email = :user_email
                )
                """
            ),
            {"user_email": user_email, "habit_id": habit_id},
        )
        await session.execute(
            sql_text(f"DELETE FROM {HABITS_TABLE} WHERE user_email = :user_email AND id = :habit_id"),
            {"user_email": user_email, "habit_id": habit_id},
        )
        await session.commit()
    logger.info("Deleted habit %s with its logs", habit_id)


# Habit logs


async def list_habit_logs(user_email: str, habit_ids: list[str]) -> list[dict]:
    if not habit_ids:
        return []
    stmt = sql_text(
        f"""
        SELECT l.id, l.habit_id, l.date, l.status, l.created_at, l.updated_at
        FROM {HABIT_LOGS_TABLE} l
        JOIN {HABITS_TABLE} h ON h.id = l.habit_id
        WHERE h.user_email = :user_email AND l.habit_id IN :habit_ids
        ORDER BY l.date ASC
        """
    ).bindparams(bindparam("habit_ids", expanding=True))
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(stmt, {"user_email": user_email, "habit_ids": list(habit_ids)})).mappings().all()
    return [_normalize_row(row) for row in rows]


async def get_habit_log(habit_id: str, day_iso: str) -> dict:
    row = await _fetch_one(
        f"SELECT {HABIT_LOG_COLUMNS} FROM {HABIT_LOGS_TABLE} WHERE habit_id = :habit_id AND date = :date",
        {"habit_id": habit_id, "date": day_iso},
    )
    return _normalize_row(row)


async def upsert_habit_log(user_email: str, habit_id: str, day_iso: str, status: str) -> dict:
    if status not in HABIT_STATUSES:
        raise ValueError(f"Invalid status: {status}")
    habit = await get_habit(user_email, habit_id)
    if not habit:
        raise LookupError("Habit not found")
    now = _now()
    await _execute(
        f"""
        INSERT INTO {HABIT_LOGS_TABLE} ({HABIT_LOG_COLUMNS})
        VALUES (:id, :habit_id, :date, :status, :created_at, :updated_at)
        ON CONFLICT(habit_id, date) DO UPDATE SET
            status = EXCLUDED.status,
            updated_at = EXCLUDED.updated_at
        """,
        {
            "id": _new_id(),
            "habit_id": habit_id,
            "date": day_iso,
            "status": status,
            "created_at": now,
            "updated_at": now,
        },
    )
    return await get_habit_log(habit_id, day_iso)


# Daily notes


async def get_daily_note(user_email: str, day_iso: str) -> dict:
    row = await _fetch_one(
        f"""
        SELECT id, user_email, date, content, college_status, created_at, updated_at
        FROM {DAILY_NOTES_TABLE}
        WHERE user_email = :user_email AND date = :date
        """,
        {"user_email": user_email, "date": day_iso},
    )
    return _normalize_row(row)


async def upsert_daily_note(user_email: str, day_iso: str, content: str | None, college_status: str) -> dict:
    college_status = (college_status or "").strip().upper()
    if college_status not in COLLEGE_STATUSES:
        raise ValueError("College status must be one of C, F, H or empty")
    now = _now()
    await _execute(
        f"""
        INSERT INTO {DAILY_NOTES_TABLE} (id, user_email, date, content, college_status, created_at, updated_at)
        VALUES (:id, :user_email, :date, :content, :college_status, :created_at, :updated_at)
        ON CONFLICT(user_email, date) DO UPDATE SET
            content = EXCLUDED.content,
            college_status = EXCLUDED.college_status,
            updated_at = EXCLUDED.updated_at
        """,
        {
            "id": _new_id(),
            "user_email": user_email,
            "date": day_iso,
            "content": _optional_text(content),
            "college_status": college_status,
            "created_at": now,
            "updated_at": now,
        },
    )
    return await get_daily_note(user_email, day_iso)


# Todos


async def list_todos(user_email: str) -> list[dict]:
    rows = await _fetch_all(
        f"SELECT {TODO_COLUMNS} FROM {TODOS_TABLE} WHERE user_email = :user_email ORDER BY position ASC, created_at ASC",
        {"user_email": user_email},
    )
    return [_normalize_row(row, bool_keys={"completed"}) for row in rows]


async def get_todo(user_email: str, todo_id: str) -> dict:
    row = await _fetch_one(
        f"SELECT {TODO_COLUMNS} FROM {TODOS_TABLE} WHERE id = :id AND user_email = :user_email",
        {"id": todo_id, "user_email": user_email},
    )
    return _normalize_row(row, bool_keys={"completed"})


async def _next_position(table: str, user_email: str) -> int:
    row = await _fetch_one(
        f"SELECT COALESCE(MAX(position), -1) + 1 AS next_position FROM {table} WHERE user_email = :user_email",
        {"user_email": user_email},
    )
    return int((row or {}).get("next_position") or 0)


async def create_todo(user_email: str, title: str, position: int | None = None) -> dict:
    clean_title = _clean_text(title, 200)
    if not clean_title:
        raise ValueError("Todo title cannot be empty")
    if position is None:
        position = await _next_position(TODOS_TABLE, user_email)
    now = _now()
    record = {
        "id": _new_id(),
        "user_email": user_email,
        "title": clean_title,
        "completed": 0,
        "position": int(position),
        "created_at": now,
        "updated_at": now,
    }
    await _execute(
        f"""
        INSERT INTO {TODOS_TABLE} ({TODO_COLUMNS})
        VALUES (:id, :user_email, :title, :completed, :position, :created_at, :updated_at)
        """,
        record,
    )
    return {**record, "completed": False}


async def update_todo(user_email: str, todo_id: str, patch: dict) -> dict:
    if not await get_todo(user_email, todo_id):
        raise LookupError("Todo not found")
    values = {}
    for key, value in patch.items():
        if key == "title":
            clean_title = _clean_text(value, 200)
            if not clean_title:
                raise ValueError("Todo title cannot be empty")
            values["title"] = clean_title
        elif key == "completed":
            values["completed"] = int(bool(value))
        elif key == "position":
            values["position"] = int(value)
    await _update_owned_row(TODOS_TABLE, user_email, todo_id, values)
    return await get_todo(user_email, todo_id)


async def delete_todo(user_email: str, todo_id: str) -> None:
    await _execute(
        f"DELETE FROM {TODOS_TABLE} WHERE id = :id AND user_email = :user_email",
        {"id": todo_id, "user_email": user_email},
    )


async def count_open_todos(user_email: str) -> int:
    row = await _fetch_one(
        f"SELECT COUNT(*) AS total FROM {TODOS_TABLE} WHERE user_email = :user_email AND COALESCE(completed, 0) = 0",
        {"user_email": user_email},
    )
    return int((row or {}).get("total") or 0)


# Shortcuts


async def list_shortcuts(user_email: str) -> list[dict]:
    rows = await _fetch_all(
        f"SELECT {SHORTCUT_COLUMNS} FROM {SHORTCUTS_TABLE} WHERE user_email = :user_email ORDER BY position ASC, created_at ASC",
        {"user_email": user_email},
    )
    return [_normalize_row(row) for row in rows]


async def get_shortcut(user_email: str, shortcut_id: str) -> dict:
    row = await _fetch_one(
        f"SELECT {SHORTCUT_COLUMNS} FROM {SHORTCUTS_TABLE} WHERE id = :id AND user_email = :user_email",
        {"id": shortcut_id, "user_email": user_email},
    )
    return _normalize_row(row)


async def create_shortcut(user_email: str, title: str, url: str, category: str | None = None, position: int | None = None) -> dict:
    clean_title = _clean_text(title, 120)
    clean_url = str(url or "").strip()
    if not clean_title or not clean_url:
        raise ValueError("Shortcut title and URL are required")
    if position is None:
        position = await _next_position(SHORTCUTS_TABLE, user_email)
    now = _now()
    record = {
        "id": _new_id(),
        "user_email": user_email,
        "title": clean_title,
        "url": clean_url,
        "category": _optional_text(category),
        "position": int(position),
        "created_at": now,
        "updated_at": now,
    }
    await _execute(
        f"""
        INSERT INTO {SHORTCUTS_TABLE} ({SHORTCUT_COLUMNS})
        VALUES (:id, :user_email, :title, :url, :category, :position, :created_at, :updated_at)
        """,
        record,
    )
    return record


async def update_shortcut(user_email: str, shortcut_id: str, patch: dict) -> dict:
    if not await get_shortcut(user_email, shortcut_id):
        raise LookupError("Shortcut not found")
    values = {}
    for key, value in patch.items():
        if key in {"title", "url"}:
            clean = _clean_text(value, 120) if key == "title" else str(value or "").strip()
            if not clean:
                raise ValueError("Shortcut title and URL are required")
            values[key] = clean
        elif key == "category":
            values["category"] = _optional_text(value)
        elif key == "position":
            values["position"] = int(value)
    await _update_owned_row(SHORTCUTS_TABLE, user_email, shortcut_id, values)
    return await get_shortcut(user_email, shortcut_id)


async def delete_shortcut(user_email: str, shortcut_id: str) -> None:
    await _execute(
        f"DELETE FROM {SHORTCUTS_TABLE} WHERE id = :id AND user_email = :user_email",
        {"id": shortcut_id, "user_email": user_email},
    )


# Goals


async def list_goals(user_email: str) -> list[dict]:
    rows = await _fetch_all(
        f"SELECT {GOAL_COLUMNS} FROM {GOALS_TABLE} WHERE user_email = :user_email ORDER BY created_at DESC",
        {"user_email": user_email},
    )
    return [_normalize_row(row, bool_keys={"completed"}) for row in rows]


async def get_goal(user_email: str, goal_id: str) -> dict:
    row = await _fetch_one(
        f"SELECT {GOAL_COLUMNS} FROM {GOALS_TABLE} WHERE id = :id AND user_email = :user_email",
        {"id": goal_id, "user_email": user_email},
    )
    return _normalize_row(row, bool_keys={"completed"})


async def create_goal(user_email: str, title: str, description: str | None = None, target_date=None) -> dict:
    clean_title = _clean_text(title, 200)
    if not clean_title:
        raise ValueError("Goal title cannot be empty")
    now = _now()
    record = {
        "id": _new_id(),
        "user_email": user_email,
        "title": clean_title,
        "description": _optional_text(description),
        "target_date": _iso(target_date),
        "completed": 0,
        "progress": 0,
        "created_at": now,
        "updated_at": now,
    }
    await _execute(
        f"""
        INSERT INTO {GOALS_TABLE} ({GOAL_COLUMNS})
        VALUES (:id, :user_email, :title, :description, :target_date, :completed, :progress, :created_at, :updated_at)
        """,
        record,
    )
    return {**record, "completed": False}


async def update_goal(user_email: str, goal_id: str, patch: dict) -> dict:
    if not await get_goal(user_email, goal_id):
        raise LookupError("Goal not found")
    values = {}
    for key, value in patch.items():
        if key == "title":
            clean_title = _clean_text(value, 200)
            if not clean_title:
                raise ValueError("Goal title cannot be empty")
            values["title"] = clean_title
        elif key == "description":
            values["description"] = _optional_text(value)
        elif key == "target_date":
            values["target_date"] = _iso(value)
        elif key == "progress":
            values["progress"] = _normalize_progress(value)
        elif key == "completed":
            values["completed"] = int(bool(value))
            if "progress" not in patch:
                values["progress"] = 100 if value else 0
    await _update_owned_row(GOALS_TABLE, user_email, goal_id, values)
    return await get_goal(user_email, goal_id)


async def delete_goal(user_email: str, goal_id: str) -> None:
    await _execute(
        f"DELETE FROM {GOALS_TABLE} WHERE id = :id AND user_email = :user_email",
        {"id": goal_id, "user_email": user_email},
    )


async def count_active_goals(user_email: str) -> int:
    row = await _fetch_one(
        f"SELECT COUNT(*) AS total FROM {GOALS_TABLE} WHERE user_email = :user_email AND COALESCE(completed, 0) = 0",
        {"user_email": user_email},
    )
    return int((row or {}).get("total") or 0)


# Focus sessions


async def list_focus_sessions(user_email: str, start_iso: str, end_iso: str) -> list[dict]:
    rows = await _fetch_all(
        f"""
        SELECT id, user_email, duration, session_type, date, created_at
        FROM {FOCUS_SESSIONS_TABLE}
        WHERE user_email = :user_email AND date BETWEEN :start_date AND :end_date
        ORDER BY created_at DESC
        """,
        {"user_email": user_email, "start_date": start_iso, "end_date": end_iso},
    )
    return [_normalize_row(row) for row in rows]


async def create_focus_session(user_email: str, duration: int, session_type: str, day_iso: str) -> dict:
    if session_type not in SESSION_TYPES:
        raise ValueError(f"Invalid session type: {session_type}")
    duration = int(duration)
    if duration <= 0:
        raise ValueError("Session duration must be positive")
    record = {
        "id": _new_id(),
        "user_email": user_email,
        "duration": duration,
        "session_type": session_type,
        "date": day_iso,
        "created_at": _now(),
    }
    await _execute(
        f"""
        INSERT INTO {FOCUS_SESSIONS_TABLE} (id, user_email, duration, session_type, date, created_at)
        VALUES (:id, :user_email, :duration, :session_type, :date, :created_at)
        """,
        record,
    )
    return record


# Sleep logs


async def list_sleep_logs(user_email: str, start_iso: str, end_iso: str) -> list[dict]:
    rows = await _fetch_all(
        f"""
        SELECT {SLEEP_COLUMNS}
        FROM {SLEEP_LOGS_TABLE}
        WHERE user_email = :user_email AND date BETWEEN :start_date AND :end_date
        ORDER BY date DESC
        """,
        {"user_email": user_email, "start_date": start_iso, "end_date": end_iso},
    )
    return [_normalize_row(row) for row in rows]


async def get_sleep_log(user_email: str, day_iso: str) -> dict:
    row = await _fetch_one(
        f"SELECT {SLEEP_COLUMNS} FROM {SLEEP_LOGS_TABLE} WHERE user_email = :user_email AND date = :date",
        {"user_email": user_email, "date": day_iso},
    )
    return _normalize_row(row)


async def upsert_sleep_log(
    user_email: str,
    day_iso: str,
    sleep_time,
    wake_time,
    quality: int | None = None,
    notes: str | None = None,
) -> dict:
    sleep_clock = _normalize_time_value(sleep_time)
    wake_clock = _normalize_time_value(wake_time)
    if quality is not None and not 1 <= int(quality) <= 5:
        raise ValueError("Sleep quality must be between 1 and 5")
    duration = None
    if sleep_clock and wake_clock:
        duration = sleep_duration_minutes(sleep_clock, wake_clock)
    now = _now()
    await _execute(
        f"""
        INSERT INTO {SLEEP_LOGS_TABLE} ({SLEEP_COLUMNS})
        VALUES (:id, :user_email, :date, :sleep_time, :wake_time, :duration, :quality, :notes, :created_at, :updated_at)
        ON CONFLICT(user_email, date) DO UPDATE SET
            sleep_time = EXCLUDED.sleep_time,
            wake_time = EXCLUDED.wake_time,
            duration = EXCLUDED.duration,
            quality = EXCLUDED.quality,
            notes = EXCLUDED.notes,
            updated_at = EXCLUDED.updated_at
        """,
        {
            "id": _new_id(),
            "user_email": user_email,
            "date": day_iso,
            "sleep_time": sleep_clock,
            "wake_time": wake_clock,
            "duration": duration,
            "quality": int(quality) if quality is not None else None,
            "notes": _optional_text(notes),
            "created_at": now,
            "updated_at": now,
        },
    )
    return await get_sleep_log(user_email, day_iso)


# Water


async def get_water_count(user_email: str, day_iso: str) -> int:
    row = await _fetch_one(
        f"SELECT count FROM {WATER_TABLE} WHERE user_email = :user_email AND date = :date",
        {"user_email": user_email, "date": day_iso},
    )
    return int((row or {}).get("count") or 0)


async def set_water_count(user_email: str, day_iso: str, count: int) -> int:
    count = int(count)
    if count < 0:
        raise ValueError("Water count cannot be negative")
    now = _now()
    await _execute(
        f"""
        INSERT INTO {WATER_TABLE} (user_email, date, count, created_at, updated_at)
        VALUES (:user_email, :date, :count, :created_at, :updated_at)
        ON CONFLICT(user_email, date) DO UPDATE SET
            count = EXCLUDED.count,
            updated_at = EXCLUDED.updated_at
        """,
        {"user_email": user_email, "date": day_iso, "count": count, "created_at": now, "updated_at": now},
    )
    return count
