"""Periodic stalemate checking outside the engine."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from klondike.engine.game import GameStatus, KlondikeEngine

logger = logging.getLogger(__name__)


class StalemateMonitor:
    """Calls ``engine.check_stalemate()`` on a fixed interval.

    Runs as an asyncio task on the caller's event loop, so checks interleave
    with commands instead of running beside them. Stops itself once the
    engine reaches a terminal state; callers stop it before dealing a new
    game so a superseded game is never read.
    """

    def __init__(
        self,
        engine: KlondikeEngine,
        interval: Optional[float] = None,
        on_stalemate: Optional[Callable[[KlondikeEngine], None]] = None,
        on_stock_limit: Optional[Callable[[KlondikeEngine], None]] = None,
    ) -> None:
        self.engine = engine
        self.interval = interval if interval is not None else engine.config.stalemate_interval
        self.on_stalemate = on_stalemate
        self.on_stock_limit = on_stock_limit
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick(self) -> GameStatus:
        """Run a single check and fire callbacks for the result."""
        if self.engine.status == GameStatus.STOCK_LIMIT_REACHED:
            if self.on_stock_limit:
                self.on_stock_limit(self.engine)
            return self.engine.status

        previous = self.engine.status
        status = self.engine.check_stalemate()
        if status == GameStatus.STALEMATE_PENDING and previous != GameStatus.STALEMATE_PENDING:
            logger.info(f"No legal moves left after {self.engine.consecutive_no_moves} checks")
            if self.on_stalemate:
                self.on_stalemate(self.engine)
        return status

    def start(self) -> None:
        """Start the periodic task on the running loop (idempotent)."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.debug(f"Stalemate monitor started ({self.interval}s interval)")

    def stop(self) -> None:
        """Cancel the periodic task."""
        if self._task is not None:
            self._task.cancel()
            self._task = None
            logger.debug("Stalemate monitor stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            self.tick()
            if self.engine.is_terminal:
                logger.debug(f"Stalemate monitor finished: game is {self.engine.status.value}")
                return
