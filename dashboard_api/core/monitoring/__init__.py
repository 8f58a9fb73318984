"""Monitoring - Estadísticas del fetch loop."""

from .stats import FetchStats

__all__ = ["FetchStats"]
