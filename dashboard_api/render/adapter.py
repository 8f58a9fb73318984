"""Render Adapter - traduce Series al formato del gráfico de líneas."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.domain.flat_record import SensorId
from ..core.domain.series import Series
from .sink import ChartSink

logger = logging.getLogger(__name__)


def dataset_label(sensor_id: SensorId) -> str:
    return f"Sensor #{sensor_id}"


@dataclass(frozen=True)
class ChartDataset:
    """Dataset de un sensor.

    `span_gaps=False` hace que los None se vean como huecos en la línea.
    """
    label: str
    border_color: str
    data: List[Optional[float]]
    fill: bool = False
    span_gaps: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "borderColor": self.border_color,
            "data": list(self.data),
            "fill": self.fill,
            "spanGaps": self.span_gaps,
        }


@dataclass(frozen=True)
class ChartFrame:
    labels: List[str] = field(default_factory=list)
    datasets: List[ChartDataset] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "labels": list(self.labels),
            "datasets": [ds.to_dict() for ds in self.datasets],
        }


def to_frame(series: Series) -> ChartFrame:
    """Convierte Series en un ChartFrame (etiquetas en ISO-8601)."""
    return ChartFrame(
        labels=[ts.isoformat() for ts in series.labels],
        datasets=[
            ChartDataset(
                label=dataset_label(s.sensor_id),
                border_color=s.color,
                data=list(s.values),
            )
            for s in series.series
        ],
    )


class RenderAdapter:
    """Empuja cada Series a un ChartSink, sin animación."""

    def __init__(self, sink: ChartSink) -> None:
        self._sink = sink
        self._renders = 0

    @property
    def sink(self) -> ChartSink:
        return self._sink

    @property
    def renders(self) -> int:
        return self._renders

    def render(self, series: Series) -> ChartFrame:
        frame = to_frame(series)
        self._sink.update(frame, animate=False)
        self._renders += 1
        logger.debug(
            "[RENDER] sink=%s labels=%d datasets=%d",
            self._sink.sink_name,
            len(frame.labels),
            len(frame.datasets),
        )
        return frame
