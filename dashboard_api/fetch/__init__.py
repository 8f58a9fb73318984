"""Fetch - Polling periódico de la API de mensajes."""

from .loop import FetchLoop
from .models import FetchLoopConfig

__all__ = ["FetchLoop", "FetchLoopConfig"]
