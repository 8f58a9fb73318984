"""Broker Index - partición de mensajes por broker.

Se reconstruye completo en cada fetch aceptado; no sobrevive ninguna
entrada entre fetches.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from .domain.message import SensorMessage
from .flattener import flatten

logger = logging.getLogger(__name__)

BrokerIndex = Dict[Optional[str], List[SensorMessage]]


def rebuild(messages: Iterable[SensorMessage]) -> BrokerIndex:
    """Aplana cada mensaje y lo agrega al bucket de su broker.

    El orden del fetch se conserva dentro de cada bucket. Los mensajes sin
    `broker_id` van al bucket `None`, que nunca se ofrece para selección.
    """
    index: BrokerIndex = {}
    total = 0
    for msg in messages:
        flatten(msg)
        index.setdefault(msg.broker_id, []).append(msg)
        total += 1

    orphans = len(index.get(None, ()))
    if orphans:
        logger.warning("[INDEX] %d messages without broker_id", orphans)
    logger.debug("[INDEX] Rebuilt: messages=%d brokers=%d", total, len(known_brokers(index)))
    return index


def known_brokers(index: BrokerIndex) -> List[str]:
    """Brokers seleccionables, en el orden en que aparecieron."""
    return [bid for bid in index if bid is not None]


def messages_for(index: BrokerIndex, broker_id: Optional[str]) -> List[SensorMessage]:
    """Mensajes de un broker; lista vacía si no hay selección o no existe."""
    if not broker_id:
        return []
    return index.get(broker_id, [])
