"""Génération du cycle Pomodoro fixe d'une tâche"""

from datetime import datetime
from typing import List, Tuple

from sqlalchemy.orm import Session

from pomotask.models.pomodoro_session import PomodoroSession, WORK, BREAK

# 4 blocs de travail puis une longue pause
POMODORO_TEMPLATE: Tuple[Tuple[str, int], ...] = (
    (WORK, 1500),
    (BREAK, 300),
    (WORK, 1500),
    (BREAK, 300),
    (WORK, 1500),
    (BREAK, 300),
    (WORK, 1500),
    (BREAK, 900),
)


def ensure_sessions(db: Session, task_id: int, now: datetime) -> List[PomodoroSession]:
    """Crée les sessions du template si la tâche n'en a aucune (idempotent)."""
    existing = db.query(PomodoroSession).filter(
        PomodoroSession.task_id == task_id
    ).order_by(PomodoroSession.session_number).all()
    if existing:
        return existing

    sessions = [
        PomodoroSession(
            task_id=task_id,
            session_number=number,
            session_type=session_type,
            duration_seconds=duration,
            created_at=now,
        )
        for number, (session_type, duration) in enumerate(POMODORO_TEMPLATE, start=1)
    ]
    db.add_all(sessions)
    db.flush()
    return sessions
