from __future__ import annotations

from dataclasses import dataclass

STOPWATCH = "stopwatch"
POMODORO = "pomodoro"
FOCUS_MODES = (STOPWATCH, POMODORO)
MIN_SESSION_SECONDS = 60


@dataclass
class FinishedSession:
    duration: int
    session_type: str


@dataclass
class WaterEvent:
    glass: int
    target: int
    goal_complete: bool = False

    @property
    def message(self):
        if self.goal_complete:
            return f"You've completed all {self.target} glasses today!"
        return f"Glass {self.glass} of {self.target} - Time to drink water!"


class FocusTimer:
    """Stopwatch / pomodoro countdown advanced one second per ``tick``.

    Methods that end a session return a ``FinishedSession`` for the caller to
    persist, or ``None``.
    """

    def __init__(self, mode=STOPWATCH, pomodoro_minutes=25):
        if mode not in FOCUS_MODES:
            raise ValueError(f"Unknown focus mode: {mode}")
        self.mode = mode
        self.pomodoro_minutes = max(1, int(pomodoro_minutes or 25))
        self.seconds = 0
        self.running = False

    def _finished(self, duration):
        if duration < MIN_SESSION_SECONDS:
            return None
        return FinishedSession(duration=duration, session_type=self.mode)

    def start(self):
        if self.mode == POMODORO and self.seconds == 0:
            self.seconds = self.pomodoro_minutes * 60
        self.running = True

    def pause(self):
        self.running = False

    def tick(self):
        if not self.running:
            return None
        if self.mode == STOPWATCH:
            self.seconds += 1
            return None
        if self.seconds <= 1:
            self.running = False
            self.seconds = 0
            return self._finished(self.pomodoro_minutes * 60)
        self.seconds -= 1
        return None

    def reset(self):
        finished = None
        if self.seconds > 0 and not self.running and self.mode == STOPWATCH:
            finished = self._finished(self.seconds)
        self.running = False
        self.seconds = 0
        return finished

    def change_mode(self, mode):
        if mode not in FOCUS_MODES:
            raise ValueError(f"Unknown focus mode: {mode}")
        self.mode = mode
        self.running = False
        self.seconds = 0

    def set_pomodoro_minutes(self, minutes):
        self.pomodoro_minutes = max(1, int(minutes or 25))

    def progress(self):
        if self.mode != POMODORO:
            return 0
        total = self.pomodoro_minutes * 60
        if self.seconds == 0:
            return 0
        return (total - self.seconds) / total * 100


class WaterReminderTimer:
    def __init__(self, target_glasses=8, interval_minutes=60):
        self.target_glasses = max(1, int(target_glasses or 8))
        self.interval_minutes = max(1, int(interval_minutes or 60))
        self.active = False
        self.remaining = 0
        self.completed_glasses = 0

    def start(self):
        self.completed_glasses = 0
        self.remaining = self.interval_minutes * 60
        self.active = True

    def stop(self):
        self.active = False
        self.remaining = 0
        self.completed_glasses = 0

    def tick(self):
        if not self.active or self.remaining <= 0:
            return None
        if self.remaining > 1:
            self.remaining -= 1
            return None
        self.completed_glasses += 1
        glass = self.completed_glasses
        if glass < self.target_glasses:
            self.remaining = self.interval_minutes * 60
            return WaterEvent(glass=glass, target=self.target_glasses)
        self.stop()
        return WaterEvent(glass=glass, target=self.target_glasses, goal_complete=True)
