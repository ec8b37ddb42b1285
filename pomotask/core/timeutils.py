from datetime import datetime, date, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_rfc3339(value: datetime) -> str:
    """Sérialise un instant aware en texte UTC à précision fixe (tri lexical)."""
    if value.tzinfo is None:
        raise ValueError("naive datetime cannot be stored as an instant")
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def parse_rfc3339(text: str) -> datetime:
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def local_date(now: datetime) -> date:
    # date locale de l'appelant
    return now.astimezone().date()
