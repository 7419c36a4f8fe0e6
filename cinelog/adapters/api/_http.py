"""
Client httpx partage par les adaptateurs HTTP (creation paresseuse).
"""

from typing import Optional

import httpx


class LazyHttpClient:
    """
    Base des adaptateurs HTTP : client httpx cree au premier appel.

    Authentification par cle d'API transmise dans les en-tetes apikey et
    Authorization (Bearer).
    """

    def __init__(self, base_url: str, api_key: Optional[str] = None, timeout: float = 30.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire."""
        if self._client is None or self._client.is_closed:
            headers = {"Accept": "application/json"}
            if self._api_key:
                headers["apikey"] = self._api_key
                headers["Authorization"] = f"Bearer {self._api_key}"
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                timeout=self._timeout,
            )
        return self._client

    async def close(self) -> None:
        """Ferme le client HTTP (a appeler en fin d'utilisation)."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
