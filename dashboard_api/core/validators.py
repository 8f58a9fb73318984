"""Validadores de mensajes de broker.

Valida el sobre del mensaje y cada lectura de `SensorData` con pydantic.
Todos los campos son opcionales: un campo que no valida se descarta y el
resto se conserva, así el flattener puede construir un registro parcial en
lugar de fallar.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, StrictInt, StrictStr, ValidationError

logger = logging.getLogger(__name__)

_M = TypeVar("_M", bound=BaseModel)


class SensorReadingPayload(BaseModel):
    """Lectura de un topic.

    Formato esperado:
    {"sensor_id": 1, "kelvin": 293}

    Cualquier campo aparte de `sensor_id` es una métrica candidata.
    """

    sensor_id: Optional[Union[StrictInt, StrictStr]] = None

    class Config:
        extra = "allow"

    @property
    def metrics(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})


class BrokerPayload(BaseModel):
    """Contenido de `payload`. Solo interesa la variante `SensorData`."""

    SensorData: Optional[Dict[str, Any]] = None

    class Config:
        extra = "ignore"


class BrokerMessagePayload(BaseModel):
    """Sobre del mensaje tal como lo sirve la API.

    Formato esperado:
    {
        "constructed_when": "2021-03-04T03:12:45.123456789+01:00",
        "broker_id": "7f0c3c3e-...",
        "payload": {"SensorData": {"Temperature": {"sensor_id": 1, "kelvin": 293}}}
    }

    `constructed_when` queda como texto: datetime no admite nanosegundos y
    el flattener lo parsea con su propia tolerancia.
    """

    broker_id: Optional[Union[StrictStr, StrictInt]] = None
    constructed_when: Optional[StrictStr] = None
    payload: Optional[BrokerPayload] = None

    class Config:
        extra = "ignore"

    @property
    def broker_key(self) -> Optional[str]:
        if self.broker_id is None:
            return None
        return str(self.broker_id)

    @property
    def sensor_data(self) -> Optional[Dict[str, Any]]:
        if self.payload is None:
            return None
        return self.payload.SensorData


@dataclass
class ValidationResult:
    """Resultado de validación.

    `payload` siempre viene relleno cuando la entrada era un objeto: si algún
    campo no validó, lleva el resto de campos y `valid` es False.
    """

    valid: bool
    payload: Optional[BaseModel] = None
    error: Optional[str] = None
    warnings: List[str] = None

    def __post_init__(self):
        if self.warnings is None:
            self.warnings = []


def _validate_partial(model: Type[_M], data: Any) -> ValidationResult:
    if not isinstance(data, dict):
        return ValidationResult(
            valid=False,
            error=f"expected an object, got {type(data).__name__}",
        )

    try:
        return ValidationResult(valid=True, payload=model.model_validate(data))
    except ValidationError as e:
        bad = {err["loc"][0] for err in e.errors() if err.get("loc")}
        kept = {k: v for k, v in data.items() if k not in bad}
        warnings = [f"dropped invalid field '{name}'" for name in sorted(map(str, bad))]
        try:
            payload = model.model_validate(kept)
        except ValidationError:
            payload = model()
        return ValidationResult(
            valid=False,
            payload=payload,
            error=str(e),
            warnings=warnings,
        )


def validate_broker_message(data: Any) -> ValidationResult:
    """Valida el sobre de un mensaje de broker.

    Args:
        data: Elemento del array JSON devuelto por la API

    Returns:
        ValidationResult con `BrokerMessagePayload` (parcial si algún campo falla)
    """
    result = _validate_partial(BrokerMessagePayload, data)
    if result.payload is None:
        result.payload = BrokerMessagePayload()
    if not result.valid:
        logger.debug("[VALIDATOR] Broker message partially invalid: %s", result.warnings or result.error)
    return result


def validate_sensor_reading(data: Any) -> ValidationResult:
    """Valida una lectura `{sensor_id, <métrica>...}`.

    Returns:
        ValidationResult; `payload` es None si la lectura no es un objeto
    """
    result = _validate_partial(SensorReadingPayload, data)
    if not result.valid:
        logger.debug("[VALIDATOR] Sensor reading partially invalid: %s", result.warnings or result.error)
    return result
