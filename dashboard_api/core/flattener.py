"""Flattener - convierte un mensaje de broker en un FlatRecord.

Nunca lanza excepciones por payloads malformados: si falta algún campo el
registro queda parcial (o no se crea) y el series builder lo descarta.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from .domain.flat_record import FlatRecord
from .domain.message import MetricName, SensorMessage
from .validators import SensorReadingPayload, validate_sensor_reading

logger = logging.getLogger(__name__)

SENSOR_ID_KEY = "sensor_id"

# RFC 3339 admite nanosegundos; datetime solo microsegundos.
_FRACTION_RE = re.compile(r"\.(\d+)")

_KNOWN_METRICS = frozenset(m.value for m in MetricName)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parsea `constructed_when` a un datetime con zona horaria.

    - Acepta sufijo "Z".
    - Trunca fracciones de segundo a 6 dígitos.
    - Timestamps sin zona se asumen UTC para poder compararlos.

    Returns:
        datetime aware, o None si no se puede parsear
    """
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip().replace("Z", "+00:00")
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)

    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def extract_value(reading: Mapping[str, Any]) -> Optional[float]:
    """Extrae la métrica escalar de una lectura.

    Gana la primera métrica conocida (orden de `MetricName`). Si no hay
    ninguna conocida y existe exactamente un campo numérico aparte de
    `sensor_id`, se usa ese. En cualquier otro caso devuelve None.
    """
    for metric in MetricName:
        v = reading.get(metric.value)
        if _is_number(v):
            return float(v)

    others = [
        v for k, v in reading.items()
        if k != SENSOR_ID_KEY and k not in _KNOWN_METRICS
    ]
    numeric = [v for v in others if _is_number(v)]
    if len(numeric) == 1 and len(others) == 1:
        return float(numeric[0])

    if others:
        logger.debug("[FLAT] No metric field recognised in reading keys=%s", sorted(reading))
    return None


def flatten_reading(topic: Any, reading: Any, constructed_when: Any) -> FlatRecord:
    """Construye el FlatRecord de una única entrada topic → lectura.

    Una lectura que no es un objeto da un registro sin sensor ni valor.
    """
    validated: Optional[SensorReadingPayload] = validate_sensor_reading(reading).payload
    return FlatRecord(
        topic=topic.lower() if isinstance(topic, str) else None,
        sensor_id=validated.sensor_id if validated is not None else None,
        value=extract_value(validated.metrics) if validated is not None else None,
        when=parse_timestamp(constructed_when),
    )


def flatten(msg: SensorMessage) -> None:
    """Anota `msg.flat` con el registro plano del mensaje.

    Si `SensorData` falta o está vacío no hace nada y `msg.flat` queda en
    None. Con varias entradas de topic gana la última iterada.
    """
    sensor_data = msg.sensor_data
    if not sensor_data:
        msg.flat = None
        return

    if len(sensor_data) > 1:
        logger.debug(
            "[FLAT] Message carries %d topics, keeping the last one: %s",
            len(sensor_data),
            list(sensor_data),
        )

    record = None
    for topic, reading in sensor_data.items():
        record = flatten_reading(topic, reading, msg.constructed_when)
    msg.flat = record
