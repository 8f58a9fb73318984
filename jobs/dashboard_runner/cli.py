"""CLI entry point for the dashboard runner."""

from __future__ import annotations

import argparse
import asyncio
import logging

from common.config import get_settings
from dashboard_api.core.domain.message import SensorTopic

from .config import RunnerConfig
from .runner import run

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> RunnerConfig:
    settings = get_settings()

    p = argparse.ArgumentParser(description="Sensor dashboard runner (fetch + series, render to log)")
    p.add_argument("--endpoint", default=settings.endpoint)
    p.add_argument("--interval", type=float, default=settings.fetch_interval_seconds)
    p.add_argument("--timeout", type=float, default=settings.fetch_timeout_seconds)
    p.add_argument("--broker", default="", help="broker id to chart (empty = only fetch)")
    p.add_argument(
        "--topic",
        type=str.lower,
        choices=[t.value for t in SensorTopic],
        default=settings.default_topic,
    )
    p.add_argument("--limit", type=int, default=settings.default_limit)
    p.add_argument("--once", action="store_true", help="run a single fetch and exit")
    args = p.parse_args(argv)

    return RunnerConfig(
        endpoint=args.endpoint.rstrip("/"),
        interval_seconds=args.interval,
        timeout_seconds=args.timeout,
        broker=args.broker,
        topic=args.topic.strip().lower(),
        limit=max(0, args.limit),
        once=bool(args.once),
    )


def main(argv=None) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    cfg = parse_args(argv)
    logger.info("Dashboard runner started")
    logger.info(
        "Config: endpoint=%s, interval=%.1fs, broker=%s, topic=%s, limit=%d",
        cfg.endpoint, cfg.interval_seconds, cfg.broker or "-", cfg.topic, cfg.limit,
    )

    try:
        asyncio.run(run(cfg))
    except KeyboardInterrupt:
        logger.info("Dashboard runner stopped")


if __name__ == "__main__":
    main()
