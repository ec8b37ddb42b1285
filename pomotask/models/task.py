"""Task model"""

from sqlalchemy import Column, Integer, String, Float, Date
from sqlalchemy.orm import relationship

from pomotask.core.database import Base, RFC3339DateTime

TASK_STATUSES = ("pending", "in_progress", "waiting", "paused", "completed")
RUNNING_STATUSES = ("in_progress", "waiting")


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    owner = Column(String, nullable=False)
    estimated_hours = Column(Float, nullable=False)
    scheduled_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=True)
    status = Column(String, nullable=False, default="pending", index=True)

    created_at = Column(RFC3339DateTime, nullable=False)
    started_at = Column(RFC3339DateTime, nullable=True)
    completed_at = Column(RFC3339DateTime, nullable=True)

    time_logs = relationship(
        "TaskTimeLog", back_populates="task",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    pomodoro_sessions = relationship(
        "PomodoroSession", back_populates="task",
        order_by="PomodoroSession.session_number",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    active_session = relationship(
        "ActiveSession", back_populates="task", uselist=False,
        cascade="all, delete-orphan", passive_deletes=True,
    )
