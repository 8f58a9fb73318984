"""Estadísticas del fetch loop."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


@dataclass
class FetchStats:
    """Estadísticas de fetches contra la API de mensajes."""

    attempted: int = 0
    accepted: int = 0
    discarded: int = 0   # respuestas fuera de orden
    failed: int = 0
    consecutive_failures: int = 0
    last_sequence: Optional[int] = None
    last_message_count: int = 0
    last_success_at: Optional[datetime] = None
    last_error: Optional[str] = None
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __str__(self) -> str:
        return (
            f"FetchStats: attempted={self.attempted} accepted={self.accepted} "
            f"discarded={self.discarded} failed={self.failed}"
        )

    def to_dict(self) -> dict:
        """Convierte a diccionario."""
        return {
            "attempted": self.attempted,
            "accepted": self.accepted,
            "discarded": self.discarded,
            "failed": self.failed,
            "consecutive_failures": self.consecutive_failures,
            "last_sequence": self.last_sequence,
            "last_message_count": self.last_message_count,
            "last_success_at": self.last_success_at.isoformat() if self.last_success_at else None,
            "last_error": self.last_error,
            "started_at": self.started_at.isoformat(),
            "success_rate": self._success_rate(),
        }

    def _success_rate(self) -> float:
        """Calcula tasa de éxito."""
        total = self.accepted + self.discarded + self.failed
        if total == 0:
            return 1.0
        return (self.accepted + self.discarded) / total

    def record_failure(self, error: str) -> None:
        self.failed += 1
        self.consecutive_failures += 1
        self.last_error = error

    def record_success(self, sequence: int, message_count: int) -> None:
        self.accepted += 1
        self.consecutive_failures = 0
        self.last_sequence = sequence
        self.last_message_count = message_count
        self.last_success_at = datetime.now(timezone.utc)
