"""Render - Adaptador hacia el gráfico de líneas."""

from .adapter import ChartDataset, ChartFrame, RenderAdapter, to_frame
from .sink import ChartSink, InMemoryChartSink, LoggingChartSink

__all__ = [
    "ChartDataset",
    "ChartFrame",
    "RenderAdapter",
    "to_frame",
    "ChartSink",
    "InMemoryChartSink",
    "LoggingChartSink",
]
