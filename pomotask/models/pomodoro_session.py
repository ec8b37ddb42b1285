"""PomodoroSession model - une étape du cycle fixe d'une tâche"""

from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from pomotask.core.database import Base, RFC3339DateTime

WORK = "work"
BREAK = "break"


class PomodoroSession(Base):
    __tablename__ = "pomodoro_sessions"
    __table_args__ = (
        UniqueConstraint("task_id", "session_number", name="uq_pomodoro_task_number"),
    )

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    session_number = Column(Integer, nullable=False)
    session_type = Column(String, nullable=False)
    duration_seconds = Column(Integer, nullable=False)
    created_at = Column(RFC3339DateTime, nullable=False)

    # completed_at marque l'étape comme consommée
    started_at = Column(RFC3339DateTime, nullable=True)
    completed_at = Column(RFC3339DateTime, nullable=True)

    task = relationship("Task", back_populates="pomodoro_sessions")

    @property
    def is_work(self) -> bool:
        return self.session_type == WORK
