"""ChartSink - Interface del gráfico de líneas que consume los frames."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .adapter import ChartFrame

logger = logging.getLogger(__name__)


class ChartSink(ABC):
    """Destino de render: recibe eje de etiquetas + un dataset por sensor.

    Cada implementación (web, consola, memoria) reemplaza por completo sus
    datasets en cada `update`.
    """

    @abstractmethod
    def update(self, frame: "ChartFrame", *, animate: bool = False) -> None:
        """Reemplaza etiquetas y datasets y redibuja.

        Args:
            frame: Etiquetas y datasets a dibujar
            animate: False para redibujar inmediatamente
        """
        pass

    @property
    def sink_name(self) -> str:
        return type(self).__name__


class InMemoryChartSink(ChartSink):
    """Guarda el último frame; lo sirve la API HTTP."""

    def __init__(self) -> None:
        self._frame: Optional["ChartFrame"] = None
        self._updates = 0

    def update(self, frame: "ChartFrame", *, animate: bool = False) -> None:  # type: ignore[override]
        self._frame = frame
        self._updates += 1

    @property
    def last_frame(self) -> Optional["ChartFrame"]:
        return self._frame

    @property
    def updates(self) -> int:
        return self._updates


class LoggingChartSink(ChartSink):
    """Resume cada frame en el log (runner sin UI)."""

    def update(self, frame: "ChartFrame", *, animate: bool = False) -> None:  # type: ignore[override]
        if not frame.labels:
            logger.info("[RENDER] empty chart")
            return
        logger.info(
            "[RENDER] labels=%d from=%s to=%s",
            len(frame.labels),
            frame.labels[0],
            frame.labels[-1],
        )
        for ds in frame.datasets:
            present = [v for v in ds.data if v is not None]
            logger.info(
                "[RENDER] %s color=%s points=%d last=%s",
                ds.label,
                ds.border_color,
                len(present),
                present[-1] if present else None,
            )
