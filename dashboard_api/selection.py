"""Selección de broker/topic/muestras y lista de opciones de broker."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, List

from .core.broker_index import BrokerIndex, known_brokers
from .core.domain.message import SensorTopic

PLACEHOLDER_LABEL = "[choose a broker]"
BROKER_LABEL_LENGTH = 4


@dataclass(frozen=True)
class BrokerOption:
    value: str
    label: str


@dataclass(frozen=True)
class Selection:
    """Parámetros elegidos por el usuario.

    `broker` vacío significa "ningún broker elegido".
    """
    broker: str = ""
    topic: str = SensorTopic.TEMPERATURE.value
    limit: int = 10

    @property
    def is_active(self) -> bool:
        return bool(self.broker) and bool(self.topic)


def broker_options(index: BrokerIndex) -> List[BrokerOption]:
    """Opción vacía primero, luego un broker por opción con id truncado."""
    options = [BrokerOption(value="", label=PLACEHOLDER_LABEL)]
    for bid in known_brokers(index):
        options.append(BrokerOption(value=bid, label=bid[:BROKER_LABEL_LENGTH]))
    return options


def reconcile(selection: Selection, index: BrokerIndex) -> Selection:
    """Conserva el broker elegido si sigue en el índice; si no, lo resetea."""
    if selection.broker and selection.broker not in index:
        return replace(selection, broker="")
    return selection


def parse_sample_limit(value: Any) -> int:
    """Convierte la entrada textual de cantidad de muestras a entero.

    Cualquier valor no entero o negativo se trata como 0 (gráfico vacío).
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(0, value)
    if not isinstance(value, str):
        return 0
    try:
        return max(0, int(value.strip()))
    except ValueError:
        return 0
