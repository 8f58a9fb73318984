"""Singleton del runtime del dashboard (estado + render + fetch loop)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from common.config import Settings, get_settings

from .fetch.loop import FetchLoop
from .fetch.models import FetchLoopConfig
from .render.adapter import RenderAdapter
from .render.sink import InMemoryChartSink
from .selection import Selection
from .state import DashboardState
from .transports.http.client import SensorFeedClient

logger = logging.getLogger(__name__)


@dataclass
class DashboardRuntime:
    state: DashboardState
    sink: InMemoryChartSink
    adapter: RenderAdapter
    loop: FetchLoop


def build_runtime(settings: Optional[Settings] = None, client: object = None) -> DashboardRuntime:
    """Arma el runtime; `client` permite inyectar un cliente de feed."""
    settings = settings or get_settings()
    config = FetchLoopConfig.from_settings(settings)

    state = DashboardState(
        Selection(topic=settings.default_topic, limit=settings.default_limit)
    )
    sink = InMemoryChartSink()
    adapter = RenderAdapter(sink)
    if client is None:
        client = SensorFeedClient(config.endpoint, timeout_seconds=config.timeout_seconds)
    loop = FetchLoop(client, state, adapter, config)
    return DashboardRuntime(state=state, sink=sink, adapter=adapter, loop=loop)


# Singleton
_runtime: Optional[DashboardRuntime] = None


def get_runtime() -> DashboardRuntime:
    """Obtiene el runtime singleton (lo crea si no existe)."""
    global _runtime
    if _runtime is None:
        _runtime = build_runtime()
    return _runtime


async def start_runtime(settings: Optional[Settings] = None) -> bool:
    """Inicia el fetch loop si está habilitado."""
    settings = settings or get_settings()
    if not settings.fetch_enabled:
        logger.info("[RUNTIME] Fetch loop disabled by DASHBOARD_FETCH_ENABLED")
        return False
    runtime = get_runtime()
    await runtime.loop.start()
    return True


async def stop_runtime() -> None:
    """Detiene el fetch loop y descarta el singleton."""
    global _runtime
    if _runtime is not None:
        await _runtime.loop.stop()
        _runtime = None
