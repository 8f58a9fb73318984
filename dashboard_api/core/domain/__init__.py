"""Domain layer - Modelos del dashboard."""

from .flat_record import FlatRecord, SensorId
from .message import MetricName, SensorMessage, SensorTopic
from .series import Series, SensorSeries
from .snapshot import Snapshot

__all__ = [
    "FlatRecord",
    "SensorId",
    "MetricName",
    "SensorMessage",
    "SensorTopic",
    "Series",
    "SensorSeries",
    "Snapshot",
]
