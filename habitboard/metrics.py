from __future__ import annotations

from habitboard.grid import LogIndex, Status, iso_for

MINUTES_PER_DAY = 24 * 60


def streak(entity_id, current_year, current_month, current_day, index: LogIndex, view_year=None, view_month=None):
    """Live streak of a habit ending on ``current_day``.

    Skipped days are excused and neither add to nor break the run; the first
    unmarked day ends it. Only the month containing today has a live streak,
    so any other viewed month reports 0.
    """
    if view_year is not None and view_year != current_year:
        return 0
    if view_month is not None and view_month != current_month:
        return 0
    count = 0
    for day in range(current_day, 0, -1):
        status = index.status_of(entity_id, iso_for(current_year, current_month, day))
        if status is Status.DONE:
            count += 1
        elif status is Status.SKIP:
            continue
        else:
            break
    return count


def _clock_minutes(value):
    if hasattr(value, "strftime"):
        value = value.strftime("%H:%M")
    hours, minutes = str(value).strip()[:5].split(":")
    return int(hours) * 60 + int(minutes)


def sleep_duration_minutes(sleep_clock, wake_clock):
    # Equal clock times give 0, not a full day.
    sleep_minutes = _clock_minutes(sleep_clock)
    wake_minutes = _clock_minutes(wake_clock)
    if wake_minutes < sleep_minutes:
        wake_minutes += MINUTES_PER_DAY
    return wake_minutes - sleep_minutes


def _percentage(count, total):
    return round(count / total * 100, 1) if total > 0 else 0


def _status_value(record):
    if isinstance(record, dict):
        return record.get("status")
    return getattr(record, "status", None)


def completion_breakdown(records):
    counts = {status.value: 0 for status in Status}
    for record in records:
        value = _status_value(record)
        try:
            counts[Status(value).value] += 1
        except ValueError:
            continue
    total = sum(counts.values())
    breakdown = {
        key: {"count": count, "percentage": _percentage(count, total)}
        for key, count in counts.items()
    }
    breakdown["total"] = total
    return breakdown


def per_entity_performance(records, entities):
    by_entity = {}
    for record in records:
        if isinstance(record, dict):
            entity_id = record.get("entity_id") or record.get("habit_id")
        else:
            entity_id = record.entity_id
        bucket = by_entity.setdefault(entity_id, {"done": 0, "skip": 0})
        value = _status_value(record)
        if value == Status.DONE.value:
            bucket["done"] += 1
        elif value == Status.SKIP.value:
            bucket["skip"] += 1

    rows = []
    for entity in entities:
        bucket = by_entity.get(entity["id"], {"done": 0, "skip": 0})
        rows.append(
            {
                "entity_id": entity["id"],
                "name": entity.get("name", ""),
                "done_count": bucket["done"],
                "skip_count": bucket["skip"],
            }
        )
    return rows


def average_of(numbers):
    values = list(numbers)
    if not values:
        return 0
    return sum(values) / len(values)


def focus_summary(sessions):
    durations = [int(session.get("duration") or 0) for session in sessions]
    return {
        "sessions": len(durations),
        "total_seconds": sum(durations),
        "average_seconds": int(average_of(durations)),
    }


def sleep_summary(logs):
    if not logs:
        return {"avg_duration": 0, "avg_quality": 0}
    return {
        "avg_duration": int(average_of([int(log.get("duration") or 0) for log in logs])),
        "avg_quality": round(average_of([int(log.get("quality") or 0) for log in logs]), 1),
    }


def goal_summary(goals):
    completed = sum(1 for goal in goals if goal.get("completed"))
    return {"total": len(goals), "active": len(goals) - completed, "completed": completed}


def sleep_quality_band(quality):
    if not quality:
        return "none"
    if quality >= 4:
        return "good"
    if quality >= 3:
        return "fair"
    return "poor"


def format_duration_seconds(seconds):
    seconds = int(seconds or 0)
    return f"{seconds // 3600}h {(seconds % 3600) // 60}m"


def format_duration_minutes(minutes):
    if not minutes:
        return "N/A"
    return f"{minutes // 60}h {minutes % 60}m"


def format_clock(total_seconds):
    total_seconds = int(total_seconds)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"
