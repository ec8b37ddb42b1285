"""ActiveSession model"""

from datetime import timedelta

from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship

from pomotask.core.database import Base, RFC3339DateTime


class ActiveSession(Base):
    __tablename__ = "active_sessions"

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, unique=True)
    pomodoro_session_id = Column(
        Integer, ForeignKey("pomodoro_sessions.id", ondelete="CASCADE"), nullable=False
    )
    started_at = Column(RFC3339DateTime, nullable=False)

    task = relationship("Task", back_populates="active_session")
    pomodoro_session = relationship("PomodoroSession")

    @property
    def ends_at(self):
        return self.started_at + timedelta(seconds=self.pomodoro_session.duration_seconds)
