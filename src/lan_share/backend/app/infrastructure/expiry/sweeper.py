from __future__ import annotations

import asyncio
import logging
from typing import Optional

from lan_share.backend.app.application.expiry.sweep_expired_files import SweepExpiredFilesUseCase

logger = logging.getLogger(__name__)


class ExpirySweeper:
    """
    Background task running the expiry sweep every `interval_seconds`.
    A failing tick is logged and the schedule carries on.
    """

    def __init__(self, use_case: SweepExpiredFilesUseCase, interval_seconds: float) -> None:
        self._use_case = use_case
        self._interval = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="expiry-sweeper")
        logger.info("Expiry sweeper started (every %gs)", self._interval)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Expiry sweeper stopped")

    async def sweep_once(self) -> list[str]:
        try:
            return await self._use_case.execute()
        except Exception:
            logger.exception("Expiry sweep failed")
            return []

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            await self.sweep_once()
