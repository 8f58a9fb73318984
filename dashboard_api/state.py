"""Estado del dashboard - contexto explícito del pipeline.

FUENTE ÚNICA DE VERDAD para:
- Último snapshot aceptado
- Índice por broker derivado de ese snapshot
- Selección actual (broker, topic, cantidad de muestras)

Un único mutador (el event loop) modifica este objeto; no usa locks.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional

from .core import broker_index, series_builder
from .core.broker_index import BrokerIndex
from .core.domain.series import Series
from .core.domain.snapshot import Snapshot
from .selection import BrokerOption, Selection, broker_options, parse_sample_limit, reconcile

logger = logging.getLogger(__name__)


class DashboardState:
    """Snapshot + índice + selección."""

    def __init__(self, selection: Optional[Selection] = None) -> None:
        self._snapshot: Optional[Snapshot] = None
        self._index: BrokerIndex = {}
        self._selection = selection or Selection()

    @property
    def snapshot(self) -> Optional[Snapshot]:
        return self._snapshot

    @property
    def index(self) -> BrokerIndex:
        return self._index

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def last_sequence(self) -> Optional[int]:
        return self._snapshot.sequence if self._snapshot else None

    def apply_snapshot(self, snapshot: Snapshot) -> bool:
        """Reemplaza el estado con un snapshot nuevo.

        Returns:
            False si el snapshot es más viejo que el actual (se descarta)
        """
        current = self.last_sequence
        if current is not None and snapshot.sequence <= current:
            logger.info(
                "[STATE] Discarding out-of-order snapshot seq=%d (current=%d)",
                snapshot.sequence,
                current,
            )
            return False

        self._index = broker_index.rebuild(snapshot.messages)
        self._snapshot = snapshot

        previous = self._selection
        self._selection = reconcile(previous, self._index)
        if previous.broker and not self._selection.broker:
            logger.info("[STATE] Selected broker %s no longer present, selection reset", previous.broker)
        return True

    def select(
        self,
        *,
        broker: Optional[str] = None,
        topic: Optional[str] = None,
        limit: object = None,
    ) -> Selection:
        """Actualiza la selección; los argumentos None se dejan como están."""
        changes = {}
        if broker is not None:
            changes["broker"] = broker
        if topic is not None:
            changes["topic"] = topic.strip().lower()
        if limit is not None:
            changes["limit"] = parse_sample_limit(limit)
        self._selection = replace(self._selection, **changes)
        return self._selection

    def broker_options(self) -> List[BrokerOption]:
        return broker_options(self._index)

    def current_series(self, *, color_start: int = 0) -> Series:
        """Series para la selección actual (vacía si el broker no existe)."""
        sel = self._selection
        messages = broker_index.messages_for(self._index, sel.broker)
        return series_builder.build(messages, sel.limit, sel.topic, color_start=color_start)
