from __future__ import annotations

from datetime import date, time
from typing import Literal, Optional

from pydantic import BaseModel, Field


class HabitCreate(BaseModel):
    name: str
    priority: int = Field(0, ge=0, le=2)
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=1900, le=9999)


class HabitPatch(BaseModel):
    name: Optional[str] = None
    priority: Optional[int] = Field(None, ge=0, le=2)


class HabitLogUpsert(BaseModel):
    habit_id: str
    date: date
    status: Literal["done", "skip", "empty"]


class DailyNotePayload(BaseModel):
    content: Optional[str] = None
    college_status: Literal["C", "F", "H", ""] = ""


class TodoCreate(BaseModel):
    title: str
    position: Optional[int] = None


class TodoPatch(BaseModel):
    title: Optional[str] = None
    completed: Optional[bool] = None
    position: Optional[int] = None


class ShortcutCreate(BaseModel):
    title: str
    url: str
    category: Optional[str] = None
    position: Optional[int] = None


class ShortcutPatch(BaseModel):
    title: Optional[str] = None
    url: Optional[str] = None
    category: Optional[str] = None
    position: Optional[int] = None


class GoalCreate(BaseModel):
    title: str
    description: Optional[str] = None
    target_date: Optional[date] = None


class GoalPatch(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    target_date: Optional[date] = None
    completed: Optional[bool] = None
    progress: Optional[int] = Field(None, ge=0, le=100)


class FocusSessionCreate(BaseModel):
    duration: int = Field(..., gt=0)
    session_type: Literal["stopwatch", "pomodoro"]
    date: date


class SleepLogUpsert(BaseModel):
    date: date
    sleep_time: time
    wake_time: time
    quality: Optional[int] = Field(None, ge=1, le=5)
    notes: Optional[str] = None


class WaterPayload(BaseModel):
    count: int = Field(..., ge=0)
