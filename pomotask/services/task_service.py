"""Task service - cycle de vie des tâches (start / pause / resume / complete / delete)"""

import logging
import math
from datetime import date, datetime
from typing import Dict, List, Optional

from sqlalchemy import case
from sqlalchemy.orm import Session, joinedload, selectinload

from pomotask.core.errors import (
    TaskNotFoundError,
    TaskValidationError,
    TASK_ALREADY_ACTIVE,
    ONLY_ONE_RUNNING,
    NO_ACTIVE_SESSION,
    TASK_NOT_PAUSED,
    ALREADY_HAS_SESSION,
)
from pomotask.models.active_session import ActiveSession
from pomotask.models.pomodoro_session import PomodoroSession
from pomotask.models.task import Task, TASK_STATUSES, RUNNING_STATUSES
from pomotask.services.session_template import ensure_sessions
from pomotask.services.time_accounting import get_open_log, open_log, close_open_log

logger = logging.getLogger(__name__)


# ============ LOOKUPS ============

def get_task(db: Session, task_id: int) -> Task:
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        raise TaskNotFoundError(task_id)
    return task


def get_active_session(db: Session, task_id: int) -> Optional[ActiveSession]:
    return db.query(ActiveSession).filter(ActiveSession.task_id == task_id).first()


def get_running_tasks(db: Session, exclude_id: Optional[int] = None) -> List[Task]:
    query = db.query(Task).filter(Task.status.in_(RUNNING_STATUSES))
    if exclude_id is not None:
        query = query.filter(Task.id != exclude_id)
    return query.all()


def get_active_task(db: Session) -> Optional[Task]:
    return db.query(Task).filter(Task.status.in_(RUNNING_STATUSES)).first()


def next_session(db: Session, task_id: int, now: datetime) -> Optional[PomodoroSession]:
    """Première étape non consommée du cycle, dans l'ordre des numéros."""
    sessions = ensure_sessions(db, task_id, now)
    for session in sessions:
        if session.completed_at is None:
            return session
    return None


# ============ TRANSITIONS ============

def start_next_session(db: Session, task: Task, now: datetime, stamp_started: bool = True) -> Optional[PomodoroSession]:
    """
    Démarre la prochaine étape du cycle pour la tâche.

    - work  -> status in_progress + ouverture d'un TaskTimeLog
    - break -> status waiting
    - plus d'étape -> la tâche passe en completed
    """
    session = next_session(db, task.id, now)

    if session is None:
        task.status = "completed"
        task.completed_at = now
        db.flush()
        logger.info(f"Task {task.id} completed: no session left")
        return None

    db.add(ActiveSession(task_id=task.id, pomodoro_session_id=session.id, started_at=now))
    session.started_at = now
    task.status = "in_progress" if session.is_work else "waiting"
    task.completed_at = None
    if stamp_started and task.started_at is None:
        task.started_at = now

    if session.is_work:
        open_log(db, task.id, now)

    db.flush()
    logger.info(f"Task {task.id} -> session #{session.session_number} ({session.session_type})")
    return session


def stop_active_session(db: Session, task: Task, now: datetime) -> None:
    # le log est fermé AVANT la suppression de la session active
    close_open_log(db, task.id, now)
    active = get_active_session(db, task.id)
    if active is not None:
        db.delete(active)
        db.flush()


def _pause(db: Session, task: Task, now: datetime) -> None:
    stop_active_session(db, task, now)
    task.status = "paused"
    db.flush()


# ============ OPERATIONS ============

def create_task(
    db: Session,
    now: datetime,
    name: str,
    owner: str,
    estimated_hours: float,
    scheduled_date: date,
    description: Optional[str] = None,
    end_date: Optional[date] = None,
) -> Task:
    if not name or not name.strip():
        raise TaskValidationError("task name is required")
    if not math.isfinite(estimated_hours) or estimated_hours < 0:
        raise TaskValidationError("estimated hours must be a finite, non-negative number")

    task = Task(
        name=name.strip(),
        owner=owner,
        estimated_hours=estimated_hours,
        scheduled_date=scheduled_date,
        description=description,
        end_date=end_date,
        status="pending",
        created_at=now,
    )
    db.add(task)
    db.flush()

    ensure_sessions(db, task.id, now)
    logger.info(f"Task {task.id} created ({task.name!r}, {estimated_hours}h)")
    return task


def start_task(db: Session, task_id: int, now: datetime, force: bool = False) -> Optional[PomodoroSession]:
    task = get_task(db, task_id)

    if get_open_log(db, task.id) is not None or get_active_session(db, task.id) is not None:
        raise TaskValidationError(TASK_ALREADY_ACTIVE)

    others = get_running_tasks(db, exclude_id=task.id)
    if others and not force:
        raise TaskValidationError(ONLY_ONE_RUNNING)

    for other in others:
        _pause(db, other, now)
        logger.info(f"Task {other.id} force-paused to start task {task.id}")

    return start_next_session(db, task, now, stamp_started=True)


def pause_task(db: Session, task_id: int, now: datetime) -> None:
    task = get_task(db, task_id)

    if get_active_session(db, task.id) is None:
        raise TaskValidationError(NO_ACTIVE_SESSION)

    _pause(db, task, now)
    logger.info(f"Task {task.id} paused")


def resume_task(db: Session, task_id: int, now: datetime) -> Optional[PomodoroSession]:
    task = get_task(db, task_id)

    if task.status != "paused":
        raise TaskValidationError(TASK_NOT_PAUSED)
    if get_running_tasks(db, exclude_id=task.id):
        raise TaskValidationError(ONLY_ONE_RUNNING)
    if get_active_session(db, task.id) is not None:
        raise TaskValidationError(ALREADY_HAS_SESSION)

    return start_next_session(db, task, now, stamp_started=False)


def complete_task(db: Session, task_id: int, now: datetime) -> Task:
    task = get_task(db, task_id)

    stop_active_session(db, task, now)
    if task.status != "completed" or task.completed_at is None:
        task.status = "completed"
        task.completed_at = now
    db.flush()
    logger.info(f"Task {task.id} completed")
    return task


def delete_task(db: Session, task_id: int) -> None:
    task = get_task(db, task_id)
    db.delete(task)
    db.flush()
    logger.info(f"Task {task_id} deleted")


# ============ QUERIES ============

def load_tasks(db: Session, status: Optional[str] = None) -> List[Task]:
    query = db.query(Task)
    if status is not None:
        if status not in TASK_STATUSES:
            raise TaskValidationError(f"unknown status: {status}")
        query = query.filter(Task.status == status)
    return query.order_by(Task.scheduled_date.asc(), Task.created_at.asc(), Task.id.asc()).all()


def load_tasks_with_sessions(db: Session) -> List[Task]:
    # tâches en cours (work ou break) d'abord
    running_first = case((Task.status.in_(RUNNING_STATUSES), 0), else_=1)
    return db.query(Task).options(
        selectinload(Task.pomodoro_sessions),
        joinedload(Task.active_session).joinedload(ActiveSession.pomodoro_session),
    ).order_by(
        running_first, Task.scheduled_date.asc(), Task.created_at.asc(), Task.id.asc()
    ).all()


def get_today_tasks(db: Session, today: date, active_only: bool = False) -> List[Task]:
    query = db.query(Task).filter(Task.scheduled_date == today)
    if active_only:
        query = query.filter(Task.status != "completed")
    return query.order_by(Task.created_at.asc(), Task.id.asc()).all()


def tasks_grouped_by_status(db: Session) -> Dict[str, List[Task]]:
    grouped = {status: [] for status in TASK_STATUSES}
    for task in load_tasks(db):
        grouped[task.status].append(task)
    return grouped
