"""TaskTimeLog model"""

from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship

from pomotask.core.database import Base, RFC3339DateTime


class TaskTimeLog(Base):
    __tablename__ = "task_time_logs"

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    started_at = Column(RFC3339DateTime, nullable=False)
    ended_at = Column(RFC3339DateTime, nullable=True)  # NULL = intervalle ouvert

    task = relationship("Task", back_populates="time_logs")
