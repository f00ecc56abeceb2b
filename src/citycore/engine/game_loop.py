"""Main game loop — asyncio-based clock tick.

Each tick advances the city clock by one simulated minute (300 ms of
real time by default).  Weather, forecast and day rollover follow from
the clock's events; budget snapshots are pulled separately and never
computed here.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from citycore.engine.clock_service import ClockService
    from citycore.loaders.game_config_loader import GameConfig


class GameLoop:
    """The real-time tick loop of one city session.

    Args:
        clock_service: Clock advanced once per tick.
        game_config: Supplies ``tick_interval_ms``.
    """

    def __init__(
        self,
        clock_service: ClockService,
        game_config: GameConfig | None = None,
    ) -> None:
        self._clock = clock_service
        self._running = False
        self._step_interval = (game_config.tick_interval_ms / 1000.0) if game_config else 0.3

        # --- Debug / monitoring counters ---
        self.tick_count: int = 0
        self.started_at: float = 0.0
        self.last_tick_duration_ms: float = 0.0
        self.avg_tick_duration_ms: float = 0.0
        self._tick_duration_sum: float = 0.0

    async def run(self, max_ticks: int | None = None) -> None:
        """Start the game loop. Runs until stop() is called or max_ticks is reached."""
        self._running = True
        self.started_at = time.monotonic()
        while self._running:
            t0 = time.monotonic()
            self._clock.tick()
            elapsed_ms = (time.monotonic() - t0) * 1000

            self.tick_count += 1
            self.last_tick_duration_ms = elapsed_ms
            self._tick_duration_sum += elapsed_ms
            self.avg_tick_duration_ms = self._tick_duration_sum / self.tick_count

            if max_ticks is not None and self.tick_count >= max_ticks:
                self._running = False
                break

            await asyncio.sleep(self._step_interval)

    @property
    def uptime_seconds(self) -> float:
        """Seconds since the loop started."""
        if self.started_at == 0.0:
            return 0.0
        return time.monotonic() - self.started_at

    @property
    def is_running(self) -> bool:
        return self._running

    def stop(self) -> None:
        """Signal the game loop to stop."""
        self._running = False
