"""Modelo de dominio para mensajes de broker recibidos desde la API.

El payload llega tal como lo serializa el broker:

    {
        "constructed_when": "2021-03-04T03:12:45.123456789+01:00",
        "broker_id": "7f0c3c3e-...",
        "payload": {"SensorData": {"Temperature": {"sensor_id": 1, "kelvin": 293}}}
    }

Solo se consumen `broker_id`, `constructed_when` y `payload.SensorData`;
el sobre se valida con `core.validators` al construir el mensaje.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from ..validators import BrokerMessagePayload, validate_broker_message
from .flat_record import FlatRecord


class SensorTopic(Enum):
    """Tópicos conocidos (nombre en minúsculas, como los produce el flattener)."""
    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"


class MetricName(Enum):
    """Campos de métrica conocidos dentro de una lectura.

    El orden de declaración es el orden de búsqueda: gana el primero presente.
    """
    KELVIN = "kelvin"        # temperatura, K
    HUMIDITY = "humidity"    # humedad relativa, %


@dataclass(eq=False)
class SensorMessage:
    """Mensaje crudo + sobre validado + anotación `flat` que rellena el flattener.

    Dos mensajes con el mismo contenido siguen siendo entradas distintas
    (no hay deduplicación entre fetches), por eso la igualdad es por identidad.
    """
    raw: Dict[str, Any]
    envelope: BrokerMessagePayload = field(default_factory=BrokerMessagePayload)
    flat: Optional[FlatRecord] = field(default=None)

    @classmethod
    def from_raw(cls, data: Any) -> "SensorMessage":
        result = validate_broker_message(data)
        return cls(
            raw=data if isinstance(data, dict) else {},
            envelope=result.payload,
        )

    @property
    def broker_id(self) -> Optional[str]:
        return self.envelope.broker_key

    @property
    def constructed_when(self) -> Optional[str]:
        return self.envelope.constructed_when

    @property
    def sensor_data(self) -> Optional[Dict[str, Any]]:
        return self.envelope.sensor_data
