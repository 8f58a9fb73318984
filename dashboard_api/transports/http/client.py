"""Cliente HTTP de la API de mensajes de sensores."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx

logger = logging.getLogger(__name__)

MESSAGES_PATH = "/messages/sensor"


class FeedFetchError(Exception):
    """Fallo al obtener el snapshot (red, status no-2xx, JSON inválido)."""


class SensorFeedClient:
    """Obtiene el snapshot completo de mensajes de sensores.

    Uso:
        client = SensorFeedClient("http://localhost:9869/cdp_api")
        messages = await client.fetch_messages()

    Si no se inyecta un `httpx.AsyncClient` se abre uno por petición.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        timeout_seconds: float = 3.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._endpoint = endpoint.rstrip("/")
        self._timeout_seconds = float(timeout_seconds)
        self._client = client

    @property
    def url(self) -> str:
        return self._endpoint + MESSAGES_PATH

    async def _get(self) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(self.url)
        async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
            return await client.get(self.url)

    async def fetch_messages(self) -> List[Any]:
        """GET <endpoint>/messages/sensor.

        Returns:
            Lista de mensajes crudos (dicts)

        Raises:
            FeedFetchError: si la petición falla o el cuerpo no es un array JSON
        """
        try:
            resp = await self._get()
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            raise FeedFetchError(f"HTTP {e.response.status_code} from {self.url}") from e
        except httpx.HTTPError as e:
            raise FeedFetchError(f"{type(e).__name__}: {e}") from e
        except ValueError as e:
            raise FeedFetchError(f"Invalid JSON from {self.url}: {e}") from e

        if not isinstance(data, list):
            raise FeedFetchError(f"Expected a JSON array, got {type(data).__name__}")
        return data

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
