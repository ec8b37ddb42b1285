from os import getenv


def _flag(name: str, default: str) -> bool:
    return getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    DATABASE_URL = getenv("DATABASE_URL", "sqlite:///./pomotask.db")
    POMODORO_POLL_SECONDS = float(getenv("POMODORO_POLL_SECONDS", "5"))  # intervalle du checker
    POMODORO_POLL_ENABLED = _flag("POMODORO_POLL_ENABLED", "true")
    LOG_LEVEL = getenv("LOG_LEVEL", "INFO").upper()

settings = Settings()
