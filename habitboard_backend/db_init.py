from __future__ import annotations

import logging

from sqlalchemy import text as sql_text
from sqlalchemy.exc import SQLAlchemyError

from habitboard_backend.db import get_engine

logger = logging.getLogger(__name__)

HABITS_TABLE = "habits"
HABIT_LOGS_TABLE = "habit_logs"
DAILY_NOTES_TABLE = "daily_notes"
TODOS_TABLE = "todos"
SHORTCUTS_TABLE = "shortcuts"
FOCUS_SESSIONS_TABLE = "focus_sessions"
SLEEP_LOGS_TABLE = "sleep_logs"
GOALS_TABLE = "goals"
WATER_TABLE = "water_reminders"


TABLE_DDL = [
    f"""
    CREATE TABLE IF NOT EXISTS {HABITS_TABLE} (
        id TEXT PRIMARY KEY,
        user_email TEXT NOT NULL,
        name TEXT NOT NULL,
        priority INTEGER DEFAULT 0,
        month INTEGER NOT NULL,
        year INTEGER NOT NULL,
        created_at TEXT NOT NULL,
        updated_at TEXT
    )
    """,
    f"""
    CREATE TABLE IF NOT EXISTS {HABIT_LOGS_TABLE} (
        id TEXT PRIMARY KEY,
        habit_id TEXT NOT NULL REFERENCES {HABITS_TABLE}(id) ON DELETE CASCADE,
        date TEXT NOT NULL,
        status TEXT NOT NULL DEFAULT 'empty',
        created_at TEXT NOT NULL,
        updated_at TEXT,
        UNIQUE (habit_id, date)
    )
    """,
    f"""
    CREATE TABLE IF NOT EXISTS {DAILY_NOTES_TABLE} (
        id TEXT NOT NULL,
        user_email TEXT NOT NULL,
        date TEXT NOT NULL,
        content TEXT,
        college_status TEXT DEFAULT '',
        created_at TEXT NOT NULL,
        updated_at TEXT,
        PRIMARY KEY (user_email, date)
    )
    """,
    f"""
    CREATE TABLE IF NOT EXISTS {TODOS_TABLE} (
        id TEXT PRIMARY KEY,
        user_email TEXT NOT NULL,
        title TEXT NOT NULL,
        completed INTEGER DEFAULT 0,
        position INTEGER DEFAULT 0,
        created_at TEXT NOT NULL,
        updated_at TEXT
    )
    """,
    f"""
    CREATE TABLE IF NOT EXISTS {SHORTCUTS_TABLE} (
        id TEXT PRIMARY KEY,
        user_email TEXT NOT NULL,
        title TEXT NOT NULL,
        url TEXT NOT NULL,
        category TEXT,
        position INTEGER DEFAULT 0,
        created_at TEXT NOT NULL,
        updated_at TEXT
    )
    """,
    f"""
    CREATE TABLE IF NOT EXISTS {FOCUS_SESSIONS_TABLE} (
        id TEXT PRIMARY KEY,
        user_email TEXT NOT NULL,
        duration INTEGER NOT NULL,
        session_type TEXT NOT NULL,
        date TEXT NOT NULL,
        created_at TEXT NOT NULL
    )
    """,
    f"""
    CREATE TABLE IF NOT EXISTS {SLEEP_LOGS_TABLE} (
        id TEXT NOT NULL,
        user_email TEXT NOT NULL,
        date TEXT NOT NULL,
        sleep_time TEXT,
        wake_time TEXT,
        duration INTEGER,
        quality INTEGER,
        notes TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT,
        PRIMARY KEY (user_email, date)
    )
    """,
    f"""
    CREATE TABLE IF NOT EXISTS {GOALS_TABLE} (
        id TEXT PRIMARY KEY,
        user_email TEXT NOT NULL,
        title TEXT NOT NULL,
        description TEXT,
        target_date TEXT,
        completed INTEGER DEFAULT 0,
        progress INTEGER DEFAULT 0,
        created_at TEXT NOT NULL,
        updated_at TEXT
    )
    """,
    f"""
    CREATE TABLE IF NOT EXISTS {WATER_TABLE} (
        user_email TEXT NOT NULL,
        date TEXT NOT NULL,
        count INTEGER DEFAULT 0,
        created_at TEXT NOT NULL,
        updated_at TEXT,
        PRIMARY KEY (user_email, date)
    )
    """,
]

INDEX_DDL = [
    f"CREATE INDEX IF NOT EXISTS idx_{HABITS_TABLE}_user_month ON {HABITS_TABLE} (user_email, year, month)",
    f"CREATE UNIQUE INDEX IF NOT EXISTS idx_{HABITS_TABLE}_user_month_name ON {HABITS_TABLE} (user_email, year, month, name)",
    f"CREATE INDEX IF NOT EXISTS idx_{HABIT_LOGS_TABLE}_habit ON {HABIT_LOGS_TABLE} (habit_id, date)",
    f"CREATE INDEX IF NOT EXISTS idx_{TODOS_TABLE}_user ON {TODOS_TABLE} (user_email, position)",
    f"CREATE INDEX IF NOT EXISTS idx_{SHORTCUTS_TABLE}_user ON {SHORTCUTS_TABLE} (user_email, position)",
    f"CREATE INDEX IF NOT EXISTS idx_{FOCUS_SESSIONS_TABLE}_user_date ON {FOCUS_SESSIONS_TABLE} (user_email, date)",
    f"CREATE INDEX IF NOT EXISTS idx_{GOALS_TABLE}_user ON {GOALS_TABLE} (user_email, created_at)",
]


async def init_db():
    engine = get_engine()
    async with engine.begin() as conn:
        for ddl in TABLE_DDL:
            await conn.execute(sql_text(ddl))

    async def ensure_index(index_sql: str) -> None:
        try:
            async with engine.begin() as conn:
                await conn.execute(sql_text(index_sql))
        except SQLAlchemyError as exc:
            logger.warning("Skipping index creation: %s", exc)

    for index_sql in INDEX_DDL:
        await ensure_index(index_sql)
