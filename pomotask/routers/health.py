from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.orm import Session

from pomotask.core.database import get_db

router = APIRouter()

@router.get("/z")
def healthz(request: Request, db: Session = Depends(get_db)):
    # Check si l'API et la base sont up
    db.execute(text("SELECT 1"))

    poller = getattr(request.app.state, "poller", None)
    return {
        "status": "ok",
        "poller_running": bool(poller and poller.running),
        "last_poll_at": poller.last_run_at.isoformat() if poller and poller.last_run_at else None,
        "last_advanced": poller.last_advanced if poller else [],
    }
