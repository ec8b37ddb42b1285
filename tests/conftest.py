import sys
from pathlib import Path

# Ajoute la racine du projet au PYTHONPATH EN PREMIER
sys.path.insert(0, str(Path(__file__).parent.parent))

from datetime import datetime, timedelta, timezone, date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pomotask.core.database import Base, get_db
from pomotask.models.task import Task
from pomotask.models.pomodoro_session import PomodoroSession
from pomotask.models.time_log import TaskTimeLog
from pomotask.models.active_session import ActiveSession
from pomotask.services.commands import TaskCommands, get_task_commands
from pomotask.main import app

START = datetime(2026, 3, 2, 9, 0, 0, tzinfo=timezone.utc)
TODAY = date(2026, 3, 2)


class FakeClock:
    """Horloge contrôlée par les tests"""

    def __init__(self, start: datetime = START):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def engine():
    """SQLite en mémoire, une seule connexion partagée"""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    """Session DB pour les tests"""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def commands(session_factory, clock):
    return TaskCommands(session_factory=session_factory, clock=clock)


@pytest.fixture
def client(commands, session_factory):
    """Client de test FastAPI (sans lifespan : pas de poller de fond)"""
    from fastapi.testclient import TestClient

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_task_commands] = lambda: commands
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_task(commands):
    """Crée une tâche via la commande add_task et retourne son id"""

    def _make(name="Write report", estimated_hours=0.5, scheduled_date=TODAY, **kwargs):
        result = commands.add_task(
            name=name,
            owner=kwargs.pop("owner", "sam"),
            estimated_hours=estimated_hours,
            scheduled_date=scheduled_date,
            **kwargs,
        )
        assert result.ok, result.message
        return result.value.id

    return _make


@pytest.fixture
def snapshot(session_factory):
    """Relit l'état d'une tâche dans une session neuve"""

    def _snapshot(task_id):
        with session_factory() as s:
            task = s.query(Task).filter(Task.id == task_id).first()
            active = s.query(ActiveSession).filter(ActiveSession.task_id == task_id).first()
            logs = s.query(TaskTimeLog).filter(
                TaskTimeLog.task_id == task_id
            ).order_by(TaskTimeLog.started_at).all()
            sessions = s.query(PomodoroSession).filter(
                PomodoroSession.task_id == task_id
            ).order_by(PomodoroSession.session_number).all()
            return {
                "status": task.status if task else None,
                "started_at": task.started_at if task else None,
                "completed_at": task.completed_at if task else None,
                "active_number": active.pomodoro_session.session_number if active else None,
                "active_started_at": active.started_at if active else None,
                "logs": [(log.started_at, log.ended_at) for log in logs],
                "sessions": [
                    (ps.session_number, ps.session_type, ps.duration_seconds, ps.completed_at)
                    for ps in sessions
                ],
            }

    return _snapshot
