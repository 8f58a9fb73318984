"""Runner orchestrator: fetch loop con render a log."""

from __future__ import annotations

import logging

from dashboard_api.fetch.loop import FetchLoop
from dashboard_api.fetch.models import FetchLoopConfig
from dashboard_api.render.adapter import RenderAdapter
from dashboard_api.render.sink import ChartSink, LoggingChartSink
from dashboard_api.selection import Selection
from dashboard_api.state import DashboardState
from dashboard_api.transports.http.client import SensorFeedClient

from .config import RunnerConfig

logger = logging.getLogger(__name__)


def build_loop(cfg: RunnerConfig, client=None, sink: ChartSink | None = None) -> FetchLoop:
    state = DashboardState(Selection(broker=cfg.broker, topic=cfg.topic, limit=cfg.limit))
    loop_cfg = FetchLoopConfig(
        endpoint=cfg.endpoint,
        interval_seconds=cfg.interval_seconds,
        timeout_seconds=cfg.timeout_seconds,
    )
    if client is None:
        client = SensorFeedClient(cfg.endpoint, timeout_seconds=cfg.timeout_seconds)
    return FetchLoop(client, state, RenderAdapter(sink or LoggingChartSink()), loop_cfg)


async def run(cfg: RunnerConfig, client=None, sink: ChartSink | None = None) -> FetchLoop:
    """Ejecuta el loop; con `once` hace un único tick."""
    loop = build_loop(cfg, client=client, sink=sink)
    await loop.run_forever(max_ticks=1 if cfg.once else None)
    if cfg.broker and not loop.state.selection.broker:
        logger.warning("Broker %s not present in the last snapshot", cfg.broker)
    return loop
