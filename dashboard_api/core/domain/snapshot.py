"""Snapshot - resultado completo de un fetch."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Tuple

from .message import SensorMessage


@dataclass(frozen=True)
class Snapshot:
    """Reemplazo completo del estado tras un fetch.

    `sequence` se asigna al emitir la petición y crece monótonamente, así una
    respuesta que llega después de otra más nueva puede descartarse.
    """
    sequence: int
    messages: Tuple[SensorMessage, ...] = ()
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_payload(cls, sequence: int, payload: Iterable[Any]) -> "Snapshot":
        return cls(
            sequence=sequence,
            messages=tuple(SensorMessage.from_raw(item) for item in payload),
        )

    def __len__(self) -> int:
        return len(self.messages)
