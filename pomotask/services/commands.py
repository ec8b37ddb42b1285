"""
Commandes exposées à l'UI.

Chaque commande prend le verrou unique du store, s'exécute dans une seule
transaction et renvoie un CommandResult : aucune exception ne sort d'ici.
"""

import logging
import threading
from datetime import date, datetime
from functools import lru_cache
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from pomotask.core.database import SessionLocal
from pomotask.core.errors import TaskError
from pomotask.core.timeutils import utcnow, local_date
from pomotask.models.task import Task
from pomotask.schemas.command import CommandResult
from pomotask.schemas.task import (
    TaskResponse,
    TaskWithSessions,
    ActiveSessionInfo,
    PomodoroSessionInfo,
)
from pomotask.services import task_service
from pomotask.services.advancement import advance_all
from pomotask.services.time_accounting import remaining_seconds

logger = logging.getLogger(__name__)


def to_response(task: Task) -> TaskResponse:
    return TaskResponse.model_validate(task)


def to_response_with_sessions(task: Task) -> TaskWithSessions:
    active = task.active_session
    active_info = None
    if active is not None:
        active_info = ActiveSessionInfo(
            session_number=active.pomodoro_session.session_number,
            session_type=active.pomodoro_session.session_type,
            started_at=active.started_at,
            ends_at=active.ends_at,
            duration_seconds=active.pomodoro_session.duration_seconds,
        )

    sessions = [
        PomodoroSessionInfo(
            id=s.id,
            session_number=s.session_number,
            session_type=s.session_type,
            duration_seconds=s.duration_seconds,
            created_at=s.created_at,
            is_active=active is not None and active.pomodoro_session_id == s.id,
            started_at=s.started_at,
            completed_at=s.completed_at,
        )
        for s in task.pomodoro_sessions
    ]

    return TaskWithSessions(
        **to_response(task).model_dump(),
        active_session=active_info,
        pomodoro_sessions=sessions,
    )


class TaskCommands:
    """Contexte applicatif : fabrique de sessions DB, horloge injectée et verrou du store."""

    def __init__(
        self,
        session_factory: sessionmaker = SessionLocal,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._session_factory = session_factory
        self._clock = clock
        self._lock = threading.Lock()

    def _run(self, name: str, operation: Callable[[Session, datetime], object]) -> CommandResult:
        with self._lock:
            db = self._session_factory()
            try:
                now = self._clock()
                value = operation(db, now)
                db.commit()
                return CommandResult.success(value)
            except TaskError as e:
                db.rollback()
                logger.warning(f"{name} rejected: {e.message}")
                return CommandResult.failure(e.kind, e.message)
            except SQLAlchemyError:
                db.rollback()
                logger.exception(f"{name} failed on storage")
                return CommandResult.failure("storage", "storage error")
            except Exception:
                db.rollback()
                logger.exception(f"{name} failed")
                return CommandResult.failure("internal", "internal error")
            finally:
                db.close()

    # ============ LECTURE ============

    def load_tasks(self, status: Optional[str] = None) -> CommandResult:
        return self._run("load_tasks", lambda db, now: [
            to_response(t) for t in task_service.load_tasks(db, status)
        ])

    def load_tasks_with_sessions(self) -> CommandResult:
        return self._run("load_tasks_with_sessions", lambda db, now: [
            to_response_with_sessions(t) for t in task_service.load_tasks_with_sessions(db)
        ])

    def get_task(self, task_id: int) -> CommandResult:
        return self._run("get_task", lambda db, now: to_response(task_service.get_task(db, task_id)))

    def get_active_task(self) -> CommandResult:
        def op(db, now):
            task = task_service.get_active_task(db)
            return to_response(task) if task else None
        return self._run("get_active_task", op)

    def get_today_tasks(self, today: Optional[date] = None, active_only: bool = False) -> CommandResult:
        def op(db, now):
            day = today or local_date(now)
            return [to_response(t) for t in task_service.get_today_tasks(db, day, active_only)]
        return self._run("get_today_tasks", op)

    def tasks_grouped_by_status(self) -> CommandResult:
        return self._run("tasks_grouped_by_status", lambda db, now: {
            status: [to_response(t) for t in tasks]
            for status, tasks in task_service.tasks_grouped_by_status(db).items()
        })

    def get_task_remaining_time(self, task_id: int) -> CommandResult:
        return self._run("get_task_remaining_time", lambda db, now: remaining_seconds(db, task_id, now))

    # ============ ECRITURE ============

    def add_task(
        self,
        name: str,
        owner: str,
        estimated_hours: float,
        scheduled_date: date,
        description: Optional[str] = None,
        end_date: Optional[date] = None,
    ) -> CommandResult:
        return self._run("add_task", lambda db, now: to_response(task_service.create_task(
            db, now, name, owner, estimated_hours, scheduled_date,
            description=description, end_date=end_date,
        )))

    def start_task(self, task_id: int, force: bool = False) -> CommandResult:
        def op(db, now):
            task_service.start_task(db, task_id, now, force=force)
        return self._run("start_task", op)

    def pause_task(self, task_id: int) -> CommandResult:
        return self._run("pause_task", lambda db, now: task_service.pause_task(db, task_id, now))

    def resume_task(self, task_id: int) -> CommandResult:
        def op(db, now):
            task_service.resume_task(db, task_id, now)
        return self._run("resume_task", op)

    def complete_task(self, task_id: int) -> CommandResult:
        def op(db, now):
            task_service.complete_task(db, task_id, now)
        return self._run("complete_task", op)

    def delete_task(self, task_id: int) -> CommandResult:
        return self._run("delete_task", lambda db, now: task_service.delete_task(db, task_id))

    def check_pomodoro_sessions(self) -> CommandResult:
        return self._run("check_pomodoro_sessions", advance_all)


@lru_cache
def get_task_commands() -> TaskCommands:
    """Dépendance FastAPI : instance partagée (un seul verrou pour tout le process)"""
    return TaskCommands()
