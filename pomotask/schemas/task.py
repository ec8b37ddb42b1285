"""Pydantic schemas for task request/response validation."""

from datetime import date, datetime
from typing import Optional, List, Literal

from pydantic import BaseModel, ConfigDict, Field

TaskStatus = Literal["pending", "in_progress", "waiting", "paused", "completed"]
SessionType = Literal["work", "break"]


class TaskCreate(BaseModel):
    name: str = Field(min_length=1)
    owner: str
    estimated_hours: float = Field(ge=0, allow_inf_nan=False)
    scheduled_date: date
    description: Optional[str] = None
    end_date: Optional[date] = None


class TaskResponse(BaseModel):
    id: int
    name: str
    description: Optional[str]
    owner: str
    estimated_hours: float
    scheduled_date: date
    end_date: Optional[date]
    status: TaskStatus
    created_at: datetime
    started_at: Optional[datetime]
    completed_at: Optional[datetime]

    model_config = ConfigDict(from_attributes=True)


class ActiveSessionInfo(BaseModel):
    session_number: int
    session_type: SessionType
    started_at: datetime
    ends_at: datetime
    duration_seconds: int


class PomodoroSessionInfo(BaseModel):
    id: int
    session_number: int
    session_type: SessionType
    duration_seconds: int
    created_at: datetime
    is_active: bool
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TaskWithSessions(TaskResponse):
    active_session: Optional[ActiveSessionInfo] = None
    pomodoro_sessions: List[PomodoroSessionInfo] = []


class Duration(BaseModel):
    hours: int
    minutes: int
    seconds: int
    is_negative: bool


class RemainingTimeResponse(BaseModel):
    task_id: int
    remaining_seconds: int
    duration: Duration
    display: str


class AdvanceResponse(BaseModel):
    advanced_task_ids: List[int]
