"""
Avancement automatique des sessions Pomodoro.

Appelé périodiquement (poll). Tout l'état est relu depuis la base à chaque
appel : un tick manqué ne fait que retarder l'avancement au tick suivant.
"""

import logging
from datetime import datetime, timedelta
from typing import List

from sqlalchemy.orm import Session, joinedload

from pomotask.models.active_session import ActiveSession
from pomotask.models.task import Task
from pomotask.services.task_service import start_next_session
from pomotask.services.time_accounting import close_open_log

logger = logging.getLogger(__name__)


def advance_all(db: Session, now: datetime) -> List[int]:
    """Fait avancer chaque tâche dont la session active est écoulée. Retourne les ids avancés."""
    actives = db.query(ActiveSession).options(
        joinedload(ActiveSession.pomodoro_session)
    ).order_by(ActiveSession.task_id).all()

    advanced = []
    for active in actives:
        session = active.pomodoro_session
        nominal_end = active.started_at + timedelta(seconds=session.duration_seconds)
        if now < nominal_end:
            continue

        task_id = active.task_id
        task = db.query(Task).filter(Task.id == task_id).first()

        db.delete(active)
        db.flush()

        # une pause manuelle a déjà fermé le log : on n'y touche pas
        if session.is_work:
            close_open_log(db, task_id, nominal_end)

        session.completed_at = nominal_end
        start_next_session(db, task, now, stamp_started=True)
        advanced.append(task_id)

    if advanced:
        logger.info(f"Pomodoro: {len(advanced)} task(s) advanced {advanced}")
    return advanced
