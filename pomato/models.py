"""Pydantic models -- single source of truth for all data types."""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Mode(str, enum.Enum):
    """Input modes of the application."""

    NORMAL = "normal"
    INSERT = "insert"
    EDIT = "edit"
    BREAK = "break"


class KeyKind(str, enum.Enum):
    """Kind of a keyboard event."""

    PRESS = "press"
    REPEAT = "repeat"
    RELEASE = "release"


class Task(BaseModel):
    """A single entry in the task list."""

    description: str
    completed: bool = False
    estimation: int = Field(default=0, ge=0)


class TimerReading(BaseModel):
    """A point-in-time reading of a timer, in whole seconds."""

    model_config = ConfigDict(frozen=True)

    remaining: int = Field(ge=0)
    elapsed: int = Field(ge=0)
    length: int = Field(gt=0)
    running: bool = False
    finished: bool = False

    @property
    def percent(self) -> int:
        return min(100, int(self.elapsed / self.length * 100))


class StateSnapshot(BaseModel):
    """Immutable view of the application state handed to the renderer."""

    model_config = ConfigDict(frozen=True)

    mode: Mode
    pomodoro_count: int = Field(ge=1)
    input_value: str = ""
    input_cursor: int = Field(default=0, ge=0)
    tasks: tuple[Task, ...] = ()
    selected: Optional[int] = None
    show_help: bool = False
    work: TimerReading
    break_timer: TimerReading


class AppConfig(BaseModel):
    """Application configuration (read from POMATO_* environment variables)."""

    work_minutes: int = Field(default=25, gt=0, le=120)
    break_minutes: int = Field(default=5, gt=0, le=60)
    poll_interval: float = Field(default=0.1, gt=0, le=1.0)
    alt_screen: bool = True
    log_file: Optional[str] = None
    log_level: str = "WARNING"
