"""Fetch loop - polling periódico de la API de mensajes.

Cada tick: fetch → snapshot → índice por broker → (si hay selección) series
→ render. Un fetch fallido deja el snapshot anterior intacto; el siguiente
tick es el reintento.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from typing import Any, Optional

from common.config import get_settings

from ..core.domain.snapshot import Snapshot
from ..core.monitoring.stats import FetchStats
from ..render.adapter import ChartFrame, RenderAdapter
from ..state import DashboardState
from ..transports.http.client import FeedFetchError
from .models import FetchLoopConfig

logger = logging.getLogger(__name__)


class FetchLoop:
    """Dueño del ciclo fetch → estado → render.

    Uso:
        loop = FetchLoop(client, state, RenderAdapter(sink))
        await loop.start()
        ...
        await loop.stop()
    """

    def __init__(
        self,
        client: Any,
        state: DashboardState,
        adapter: Optional[RenderAdapter] = None,
        config: Optional[FetchLoopConfig] = None,
    ) -> None:
        self._client = client
        self._state = state
        self._adapter = adapter
        self._config = config or FetchLoopConfig.from_settings(get_settings())

        self._sequence = itertools.count(1)
        self._stats = FetchStats()
        self._running = False
        self._task: Optional[asyncio.Task] = None

    @property
    def stats(self) -> FetchStats:
        return self._stats

    @property
    def state(self) -> DashboardState:
        return self._state

    @property
    def config(self) -> FetchLoopConfig:
        return self._config

    @property
    def is_running(self) -> bool:
        return self._running

    async def tick(self) -> bool:
        """Un ciclo de fetch.

        Returns:
            True si el snapshot fue aceptado
        """
        sequence = next(self._sequence)
        self._stats.attempted += 1

        try:
            payload = await self._client.fetch_messages()
        except FeedFetchError as e:
            self._stats.record_failure(str(e))
            logger.warning("[FETCH] seq=%d failed, keeping previous snapshot: %s", sequence, e)
            return False

        snapshot = Snapshot.from_payload(sequence, payload)
        if not self._state.apply_snapshot(snapshot):
            self._stats.discarded += 1
            return False

        self._stats.record_success(sequence, len(snapshot))
        logger.info(
            "[FETCH] seq=%d fetched %d messages, brokers=%d",
            sequence,
            len(snapshot),
            len(self._state.broker_options()) - 1,
        )

        if self._state.selection.is_active:
            self.rerender()
        return True

    def rerender(self) -> Optional[ChartFrame]:
        """Recalcula las series de la selección actual y las dibuja."""
        series = self._state.current_series()
        if self._adapter is None:
            return None
        return self._adapter.render(series)

    async def run_forever(self, max_ticks: Optional[int] = None) -> None:
        """Loop principal; `max_ticks` limita las iteraciones (None = infinito)."""
        self._running = True
        done = 0
        while self._running:
            try:
                await self.tick()
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.exception("[FETCH] Unexpected error in tick: %s", e)
                await asyncio.sleep(self._config.error_backoff_seconds)
                continue

            done += 1
            if max_ticks is not None and done >= max_ticks:
                break
            await asyncio.sleep(self._config.interval_seconds)
        self._running = False

    async def start(self) -> None:
        """Inicia el loop en background."""
        if self._task is not None and not self._task.done():
            return
        self._task = asyncio.create_task(self.run_forever())
        logger.info(
            "[FETCH] Loop started: interval=%.1fs",
            self._config.interval_seconds,
        )

    async def stop(self) -> None:
        """Detiene el loop."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("[FETCH] Loop stopped. %s", self._stats)
