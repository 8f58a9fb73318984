"""FlatRecord - lectura escalar derivada de un mensaje de broker."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

SensorId = Union[int, str]


@dataclass(frozen=True)
class FlatRecord:
    """Registro plano (topic, sensor, valor, instante).

    Puede quedar parcial si el payload venía incompleto; en ese caso
    `is_usable` es False y el series builder lo ignora.
    """
    topic: Optional[str]
    sensor_id: Optional[SensorId]
    value: Optional[float]
    when: Optional[datetime]

    @property
    def is_usable(self) -> bool:
        return (
            self.topic is not None
            and self.sensor_id is not None
            and self.value is not None
            and self.when is not None
        )
