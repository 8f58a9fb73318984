"""Series alineadas listas para graficar."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from .flat_record import SensorId


@dataclass(frozen=True)
class SensorSeries:
    """Valores de un sensor alineados posicionalmente con `Series.labels`.

    `None` marca que el sensor no reportó en ese instante.
    """
    sensor_id: SensorId
    color: str
    values: List[Optional[float]]


@dataclass(frozen=True)
class Series:
    labels: List[datetime] = field(default_factory=list)
    series: List[SensorSeries] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.labels and not self.series

    def values_for(self, sensor_id: SensorId) -> Optional[List[Optional[float]]]:
        for s in self.series:
            if s.sensor_id == sensor_id:
                return s.values
        return None
