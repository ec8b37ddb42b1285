"""Time accounting - temps de travail réel vs estimation"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from pomotask.core.errors import TaskNotFoundError
from pomotask.models.task import Task
from pomotask.models.time_log import TaskTimeLog
from pomotask.schemas.task import Duration


def get_open_log(db: Session, task_id: int) -> Optional[TaskTimeLog]:
    return db.query(TaskTimeLog).filter(
        TaskTimeLog.task_id == task_id,
        TaskTimeLog.ended_at.is_(None)
    ).first()


def open_log(db: Session, task_id: int, now: datetime) -> TaskTimeLog:
    log = TaskTimeLog(task_id=task_id, started_at=now)
    db.add(log)
    db.flush()
    return log


def close_open_log(db: Session, task_id: int, ended_at: datetime) -> Optional[TaskTimeLog]:
    """Ferme l'intervalle ouvert s'il existe ; un log déjà fermé n'est pas touché."""
    log = get_open_log(db, task_id)
    if log is not None:
        log.ended_at = ended_at
        db.flush()
    return log


def total_worked_seconds(db: Session, task_id: int, now: datetime) -> int:
    logs = db.query(TaskTimeLog).filter(
        TaskTimeLog.task_id == task_id
    ).order_by(TaskTimeLog.started_at).all()

    total = 0
    for log in logs:
        # un log ouvert court toujours jusqu'à maintenant
        end = log.ended_at if log.ended_at is not None else now
        total += int((end - log.started_at).total_seconds())
    return total


def remaining_seconds(db: Session, task_id: int, now: datetime) -> int:
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        raise TaskNotFoundError(task_id)

    estimated = int(task.estimated_hours * 3600)
    return estimated - total_worked_seconds(db, task_id, now)


def seconds_to_duration(total_seconds: int) -> Duration:
    abs_seconds = abs(total_seconds)
    return Duration(
        hours=abs_seconds // 3600,
        minutes=(abs_seconds % 3600) // 60,
        seconds=abs_seconds % 60,
        is_negative=total_seconds < 0,
    )


def format_duration(duration: Duration) -> str:
    sign = "-" if duration.is_negative else ""
    return f"{sign}{duration.hours:02d}:{duration.minutes:02d}:{duration.seconds:02d}"
