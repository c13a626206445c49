from __future__ import annotations

import calendar as _calendar
import csv
import io
from dataclasses import dataclass
from datetime import date
from enum import Enum


class Status(str, Enum):
    DONE = "done"
    SKIP = "skip"
    EMPTY = "empty"


# Click order of a grid cell.
STATUS_CYCLE = {
    Status.EMPTY: Status.DONE,
    Status.DONE: Status.SKIP,
    Status.SKIP: Status.EMPTY,
}


def next_status(status) -> Status:
    return STATUS_CYCLE[Status(status)]


@dataclass(frozen=True)
class StatusRecord:
    entity_id: str
    date: str
    status: Status


def days_in_month(year: int, month: int) -> int:
    return _calendar.monthrange(year, month)[1]


def day_dates(year: int, month: int) -> list[date]:
    return [date(year, month, day) for day in range(1, days_in_month(year, month) + 1)]


def to_iso(value) -> str:
    if hasattr(value, "isoformat"):
        return value.isoformat()[:10]
    return str(value).strip()[:10]


def iso_for(year: int, month: int, day: int) -> str:
    return f"{year:04d}-{month:02d}-{day:02d}"


def _record_fields(record):
    if isinstance(record, StatusRecord):
        return record.entity_id, record.date, record.status
    entity_id = record.get("entity_id") or record.get("habit_id")
    return entity_id, record.get("date"), record.get("status")


class LogIndex:
    """Point lookups of a habit's status on a given day.

    Accepts ``StatusRecord`` objects or store rows (mappings carrying
    ``habit_id``/``entity_id``, ``date`` and ``status``). A later record for
    the same (entity, date) replaces an earlier one.
    """

    def __init__(self, records=()):
        self._by_key: dict[str, Status] = {}
        for record in records:
            entity_id, day, status = _record_fields(record)
            if not entity_id or not day:
                continue
            try:
                value = Status(status)
            except ValueError:
                value = Status.EMPTY
            self._by_key[self._key(entity_id, day)] = value

    @staticmethod
    def _key(entity_id, day) -> str:
        return f"{entity_id}|{to_iso(day)}"

    def status_of(self, entity_id, day) -> Status:
        return self._by_key.get(self._key(entity_id, day), Status.EMPTY)

    def __len__(self):
        return len(self._by_key)

    def __contains__(self, key):
        entity_id, day = key
        return self._key(entity_id, day) in self._by_key


def merge_record(records: list, record) -> list:
    """Return ``records`` with ``record`` replacing any row for the same habit and day."""
    entity_id, day, _ = _record_fields(record)
    day_iso = to_iso(day)
    kept = []
    for item in records:
        item_entity, item_day, _ = _record_fields(item)
        if item_entity == entity_id and to_iso(item_day) == day_iso:
            continue
        kept.append(item)
    kept.append(record)
    return kept


def month_matrix(habits, index: LogIndex, year: int, month: int) -> list[list[Status]]:
    days = day_dates(year, month)
    return [[index.status_of(habit["id"], day) for day in days] for habit in habits]


def export_month_csv(habits, index: LogIndex, year: int, month: int) -> str:
    days = day_dates(year, month)
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["Habit", *[day.day for day in days]])
    for habit in habits:
        writer.writerow([habit["name"], *[index.status_of(habit["id"], day).value for day in days]])
    return buffer.getvalue()


def parse_month_csv(text: str, year: int, month: int) -> tuple[list[str], list[StatusRecord]]:
    """Read an exported month back into records keyed by habit name.

    Habit names must be unique within the file. Empty cells are not materialised;
    a LogIndex built from the result reports ``empty`` for them anyway.
    """
    reader = csv.reader(io.StringIO(text))
    rows = [row for row in reader if row]
    if not rows:
        return [], []
    header = rows[0]
    if not header or header[0] != "Habit":
        raise ValueError("CSV header must start with 'Habit'")
    day_numbers = [int(value) for value in header[1:]]
    if day_numbers != list(range(1, days_in_month(year, month) + 1)):
        raise ValueError("CSV day columns do not match the month")

    names = []
    records = []
    for row in rows[1:]:
        name, tokens = row[0], row[1:]
        if len(tokens) != len(day_numbers):
            raise ValueError(f"Row for {name!r} has {len(tokens)} day cells, expected {len(day_numbers)}")
        if name in names:
            raise ValueError(f"Habit {name!r} appears more than once")
        names.append(name)
        for day, token in zip(day_numbers, tokens):
            status = Status(token.strip() or Status.EMPTY.value)
            if status is Status.EMPTY:
                continue
            records.append(StatusRecord(name, iso_for(year, month, day), status))
    return names, records
