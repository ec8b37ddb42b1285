import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from pomotask.core.config import settings
from pomotask.core.database import engine, Base
from pomotask.routers import health, tasks, pomodoro
from pomotask.services.commands import get_task_commands
from pomotask.services.poller import PomodoroPoller

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Init DB
    Base.metadata.create_all(bind=engine)

    poller = PomodoroPoller(get_task_commands(), settings.POMODORO_POLL_SECONDS)
    app.state.poller = poller
    if settings.POMODORO_POLL_ENABLED:
        poller.start()
    yield
    await poller.stop()


app = FastAPI(
    title="Pomotask API",
    version="0.1.0",
    lifespan=lifespan,
)

# Routes
app.include_router(health.router, prefix="/health")
app.include_router(tasks.router)
app.include_router(pomodoro.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
