"""Configuración del fetch loop."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from common.config import Settings


@dataclass
class FetchLoopConfig:
    """Configuración del fetch loop."""
    endpoint: str = "http://localhost:9869/cdp_api"
    interval_seconds: float = 5.0
    timeout_seconds: float = 3.0
    error_backoff_seconds: float = 5.0

    @classmethod
    def from_settings(cls, settings: "Settings") -> "FetchLoopConfig":
        return cls(
            endpoint=settings.endpoint,
            interval_seconds=settings.fetch_interval_seconds,
            timeout_seconds=settings.fetch_timeout_seconds,
            error_backoff_seconds=settings.fetch_backoff_seconds,
        )
