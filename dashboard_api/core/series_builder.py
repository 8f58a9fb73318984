"""Series Builder - agrupa lecturas por sensor y las alinea en un eje común.

Flujo:
    mensajes del broker → últimas N lecturas del topic → grupos por sensor
    → eje de instantes ordenado → valores alineados (None = sin lectura)
"""

from __future__ import annotations

import heapq
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from .domain.flat_record import FlatRecord, SensorId
from .domain.message import SensorMessage
from .domain.series import Series, SensorSeries

logger = logging.getLogger(__name__)

PALETTE: Tuple[str, ...] = (
    "red", "green", "orange", "blue", "purple", "cyan", "magenta", "lime",
    "darkgreen",
)

# (posición en el fetch, registro)
_Sample = Tuple[int, FlatRecord]


def color_for(position: int, color_start: int = 0) -> str:
    """Color de la serie en `position`, ciclando la paleta desde `color_start`."""
    return PALETTE[(color_start + position) % len(PALETTE)]


def _qualifies(flat: Optional[FlatRecord], topic: str) -> bool:
    return flat is not None and flat.is_usable and flat.topic == topic


def select_latest(
    messages: Sequence[SensorMessage],
    limit: int,
    topic: str,
) -> List[_Sample]:
    """Las `limit` lecturas más recientes del topic, de la más nueva a la más vieja.

    Empates de instante: el mensaje posterior en el fetch cuenta como más nuevo.
    """
    if limit <= 0:
        return []
    candidates = (
        (pos, msg.flat)
        for pos, msg in enumerate(messages)
        if _qualifies(msg.flat, topic)
    )
    return heapq.nlargest(limit, candidates, key=lambda s: (s[1].when, s[0]))


def _sensor_sort_key(sensor_id: SensorId) -> Tuple[int, int, str]:
    if isinstance(sensor_id, int):
        return (0, sensor_id, "")
    if sensor_id.isdecimal():
        return (0, int(sensor_id), "")
    return (1, 0, sensor_id)


def group_by_sensor(samples: Sequence[_Sample]) -> Dict[SensorId, List[_Sample]]:
    """Agrupa por sensor; cada grupo queda en orden cronológico (más viejo primero).

    `1` y `"1"` son el mismo sensor. El grupo se etiqueta con el id de su
    lectura más reciente.
    """
    groups: Dict[str, List[_Sample]] = {}
    shown: Dict[str, SensorId] = {}
    for sample in samples:
        sid = sample[1].sensor_id
        key = str(sid)
        shown.setdefault(key, sid)
        groups.setdefault(key, []).append(sample)
    for group in groups.values():
        group.reverse()
    ordered = sorted(groups, key=lambda key: _sensor_sort_key(shown[key]))
    return {shown[key]: groups[key] for key in ordered}


def align(labels: Sequence, group: Sequence[_Sample]) -> List[Optional[float]]:
    """Merge ordenado de un grupo contra el eje de instantes.

    Ambos van en orden ascendente; si un sensor tiene dos lecturas en el
    mismo instante queda la última.
    """
    values: List[Optional[float]] = [None] * len(labels)
    i = 0
    for _, rec in group:
        while labels[i] < rec.when:
            i += 1
        values[i] = rec.value
    return values


def build(
    messages: Sequence[SensorMessage],
    limit: int,
    topic: str,
    *,
    color_start: int = 0,
) -> Series:
    """Construye las series alineadas de un broker para un topic.

    Args:
        messages: Bucket del broker, en orden de fetch
        limit: Máximo de lecturas a considerar (no es una ventana de tiempo)
        topic: Topic en minúsculas ("temperature", "humidity", ...)
        color_start: Posición inicial del cursor de colores

    Returns:
        Series vacía si `limit <= 0` o no hay lecturas del topic
    """
    samples = select_latest(messages, limit, topic)
    if not samples:
        return Series()

    labels = sorted({rec.when for _, rec in samples})
    groups = group_by_sensor(samples)

    series = [
        SensorSeries(
            sensor_id=sensor_id,
            color=color_for(position, color_start),
            values=align(labels, group),
        )
        for position, (sensor_id, group) in enumerate(groups.items())
    ]

    logger.debug(
        "[SERIES] topic=%s limit=%d samples=%d labels=%d sensors=%d",
        topic, limit, len(samples), len(labels), len(series),
    )
    return Series(labels=labels, series=series)
