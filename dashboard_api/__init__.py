"""Dashboard API - normalización de mensajes de sensores y series alineadas."""
