"""Dashboard runner configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RunnerConfig:
    """Configuración del runner sin UI."""
    endpoint: str
    interval_seconds: float
    timeout_seconds: float
    broker: str
    topic: str
    limit: int
    once: bool
