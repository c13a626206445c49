"""Store operations used by the tabs.

Every function takes the caller's ``SessionContext`` explicitly. Input is
validated here and a ``ValueError`` is raised before any request is made;
transport and server failures surface as ``StoreError`` from the API client.
"""

import logging
from datetime import timedelta
from urllib.parse import urlparse

from habitboard.data import api_client
from habitboard.grid import Status, StatusRecord, to_iso
from habitboard.timers import FOCUS_MODES, MIN_SESSION_SECONDS

logger = logging.getLogger(__name__)

COLLEGE_STATUSES = ("C", "F", "H", "")
SLEEP_HISTORY_DAYS = 30


def _clean_text(value, limit=None):
    text = " ".join(str(value or "").split()).strip()
    return text[:limit] if limit else text


def _normalize_time_value(value):
    if value is None:
        return None
    if hasattr(value, "strftime"):
        return value.strftime("%H:%M")
    value_str = str(value).strip()
    return value_str[:5] if value_str else None


def normalize_url(url):
    clean = str(url or "").strip()
    if clean and not urlparse(clean).scheme:
        return f"https://{clean}"
    return clean


def _to_status_record(row):
    return StatusRecord(
        entity_id=row["habit_id"],
        date=to_iso(row["date"]),
        status=Status(row.get("status") or Status.EMPTY.value),
    )


# Bootstrap


def load_bootstrap(ctx):
    return api_client.request(ctx, "GET", "/v1/bootstrap")


# Habits


def list_habits(ctx, month, year):
    payload = api_client.request(ctx, "GET", "/v1/habits", params={"month": int(month), "year": int(year)})
    return payload.get("items", [])


def create_habit(ctx, name, priority, month, year):
    clean_name = _clean_text(name, 80)
    if not clean_name:
        raise ValueError("Habit name cannot be empty.")
    if int(priority) not in (0, 1, 2):
        raise ValueError("Priority must be 0 (low), 1 (medium) or 2 (high).")
    if not 1 <= int(month) <= 12:
        raise ValueError("Month must be between 1 and 12.")
    return api_client.request(
        ctx,
        "POST",
        "/v1/habits",
        json={"name": clean_name, "priority": int(priority), "month": int(month), "year": int(year)},
    )


def update_habit(ctx, habit_id, name=None, priority=None):
    patch = {}
    if name is not None:
        clean_name = _clean_text(name, 80)
        if not clean_name:
            raise ValueError("Habit name cannot be empty.")
        patch["name"] = clean_name
    if priority is not None:
        if int(priority) not in (0, 1, 2):
            raise ValueError("Priority must be 0 (low), 1 (medium) or 2 (high).")
        patch["priority"] = int(priority)
    if not patch:
        raise ValueError("No changes provided.")
    return api_client.request(ctx, "PATCH", f"/v1/habits/{habit_id}", json=patch)


def delete_habit(ctx, habit_id):
    logger.info("Deleting habit %s and its status records", habit_id)
    api_client.request(ctx, "DELETE", f"/v1/habits/{habit_id}")


# Status records


def get_status_records(ctx, habit_ids):
    habit_ids = [habit_id for habit_id in habit_ids if habit_id]
    if not habit_ids:
        return []
    payload = api_client.request(ctx, "GET", "/v1/habit-logs", params={"habit_id": habit_ids})
    return [_to_status_record(row) for row in payload.get("items", [])]


def upsert_status_record(ctx, habit_id, day, status):
    status = Status(status)
    row = api_client.request(
        ctx,
        "PUT",
        "/v1/habit-logs",
        json={"habit_id": habit_id, "date": to_iso(day), "status": status.value},
    )
    return _to_status_record(row)


# Daily notes


def get_daily_note(ctx, day):
    payload = api_client.request(ctx, "GET", f"/v1/notes/{to_iso(day)}")
    return payload.get("note") or {}


def save_daily_note(ctx, day, content, college_status=""):
    college_status = (college_status or "").strip().upper()
    if college_status not in COLLEGE_STATUSES:
        raise ValueError("College status must be C, F, H or empty.")
    payload = api_client.request(
        ctx,
        "PUT",
        f"/v1/notes/{to_iso(day)}",
        json={"content": content or None, "college_status": college_status},
    )
    return payload.get("note") or {}


# Todos


def list_todos(ctx):
    return api_client.request(ctx, "GET", "/v1/todos").get("items", [])


def add_todo(ctx, title, position=None):
    clean_title = _clean_text(title, 200)
    if not clean_title:
        raise ValueError("Todo title cannot be empty.")
    body = {"title": clean_title}
    if position is not None:
        body["position"] = int(position)
    return api_client.request(ctx, "POST", "/v1/todos", json=body)


def set_todo_completed(ctx, todo_id, completed):
    return api_client.request(ctx, "PATCH", f"/v1/todos/{todo_id}", json={"completed": bool(completed)})


def delete_todo(ctx, todo_id):
    api_client.request(ctx, "DELETE", f"/v1/todos/{todo_id}")


# Shortcuts


def list_shortcuts(ctx):
    return api_client.request(ctx, "GET", "/v1/shortcuts").get("items", [])


def add_shortcut(ctx, title, url, category=None):
    clean_title = _clean_text(title, 120)
    clean_url = str(url or "").strip()
    if not clean_title or not clean_url:
        raise ValueError("Shortcut title and URL are required.")
    return api_client.request(
        ctx,
        "POST",
        "/v1/shortcuts",
        json={"title": clean_title, "url": clean_url, "category": _clean_text(category) or None},
    )


def delete_shortcut(ctx, shortcut_id):
    api_client.request(ctx, "DELETE", f"/v1/shortcuts/{shortcut_id}")


# Goals


def list_goals(ctx):
    return api_client.request(ctx, "GET", "/v1/goals").get("items", [])


def add_goal(ctx, title, description=None, target_date=None):
    clean_title = _clean_text(title, 200)
    if not clean_title:
        raise ValueError("Goal title cannot be empty.")
    return api_client.request(
        ctx,
        "POST",
        "/v1/goals",
        json={
            "title": clean_title,
            "description": (description or "").strip() or None,
            "target_date": to_iso(target_date) if target_date else None,
        },
    )


def update_goal(ctx, goal_id, title, description=None, target_date=None):
    clean_title = _clean_text(title, 200)
    if not clean_title:
        raise ValueError("Goal title cannot be empty.")
    return api_client.request(
        ctx,
        "PATCH",
        f"/v1/goals/{goal_id}",
        json={
            "title": clean_title,
            "description": (description or "").strip() or None,
            "target_date": to_iso(target_date) if target_date else None,
        },
    )


def set_goal_progress(ctx, goal_id, progress):
    progress = int(progress)
    if not 0 <= progress <= 100:
        raise ValueError("Progress must be between 0 and 100.")
    return api_client.request(ctx, "PATCH", f"/v1/goals/{goal_id}", json={"progress": progress})


def toggle_goal_completed(ctx, goal):
    completed = not bool(goal.get("completed"))
    return api_client.request(
        ctx,
        "PATCH",
        f"/v1/goals/{goal['id']}",
        json={"completed": completed, "progress": 100 if completed else 0},
    )


def delete_goal(ctx, goal_id):
    api_client.request(ctx, "DELETE", f"/v1/goals/{goal_id}")


# Focus sessions


def list_focus_sessions(ctx, start, end):
    payload = api_client.request(
        ctx, "GET", "/v1/focus-sessions", params={"start": to_iso(start), "end": to_iso(end)}
    )
    return payload.get("items", [])


def save_focus_session(ctx, finished, day):
    """Persist a finished timer session; short sessions are dropped."""
    if finished is None or finished.duration < MIN_SESSION_SECONDS:
        return None
    if finished.session_type not in FOCUS_MODES:
        raise ValueError(f"Unknown session type: {finished.session_type}")
    return api_client.request(
        ctx,
        "POST",
        "/v1/focus-sessions",
        json={"duration": int(finished.duration), "session_type": finished.session_type, "date": to_iso(day)},
    )


# Sleep


def get_sleep_logs(ctx, start, end):
    payload = api_client.request(
        ctx, "GET", "/v1/sleep-logs", params={"start": to_iso(start), "end": to_iso(end)}
    )
    return payload.get("items", [])


def recent_sleep_logs(ctx, today, days=SLEEP_HISTORY_DAYS):
    return get_sleep_logs(ctx, today - timedelta(days=days), today)


def upsert_sleep_log(ctx, day, sleep_time, wake_time, quality=None, notes=None):
    sleep_clock = _normalize_time_value(sleep_time)
    wake_clock = _normalize_time_value(wake_time)
    if not sleep_clock or not wake_clock:
        raise ValueError("Sleep and wake times are required.")
    if quality is not None and not 1 <= int(quality) <= 5:
        raise ValueError("Sleep quality must be between 1 and 5.")
    return api_client.request(
        ctx,
        "PUT",
        "/v1/sleep-logs",
        json={
            "date": to_iso(day),
            "sleep_time": sleep_clock,
            "wake_time": wake_clock,
            "quality": int(quality) if quality is not None else None,
            "notes": (notes or "").strip() or None,
        },
    )


# Water


def get_water_count(ctx, day):
    return int(api_client.request(ctx, "GET", f"/v1/water/{to_iso(day)}").get("count") or 0)


def set_water_count(ctx, day, count):
    count = int(count)
    if count < 0:
        raise ValueError("Water count cannot be negative.")
    payload = api_client.request(ctx, "PUT", f"/v1/water/{to_iso(day)}", json={"count": count})
    return int(payload.get("count") or 0)