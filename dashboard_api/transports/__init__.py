"""Transports - Acceso a la API de mensajes."""
