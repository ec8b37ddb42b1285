"""
Poller Pomodoro.

Boucle asyncio qui appelle check_pomodoro_sessions à intervalle fixe. Le
travail DB (bloquant) part dans un thread ; le verrou de TaskCommands
sérialise avec les commandes HTTP.
"""

import asyncio
import logging
from datetime import datetime
from typing import List, Optional

from pomotask.core.timeutils import utcnow
from pomotask.services.commands import TaskCommands

logger = logging.getLogger(__name__)


class PomodoroPoller:

    def __init__(self, commands: TaskCommands, interval_seconds: float = 5.0):
        self.commands = commands
        self.interval_seconds = max(0.5, float(interval_seconds))
        self.running = False
        self.last_run_at: Optional[datetime] = None
        self.last_advanced: List[int] = []
        self._task: Optional[asyncio.Task] = None

    async def tick(self) -> List[int]:
        result = await asyncio.to_thread(self.commands.check_pomodoro_sessions)
        self.last_run_at = utcnow()
        if result.ok:
            self.last_advanced = result.value
        else:
            logger.warning(f"Pomodoro check failed: {result.message}")
            self.last_advanced = []
        return self.last_advanced

    async def _loop(self) -> None:
        while self.running:
            try:
                await self.tick()
            except Exception:
                # un tick raté ne doit pas arrêter la boucle
                logger.exception("Pomodoro tick failed")
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> None:
        if self.running:
            return
        self.running = True
        self._task = asyncio.create_task(self._loop())
        logger.info(f"Pomodoro poller started (every {self.interval_seconds}s)")

    async def stop(self) -> None:
        self.running = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Pomodoro poller stopped")
