"""
Cache disque des reponses de l'API des lieux.

Le cache utilise diskcache pour conserver les lieux resolus entre deux
executions : un lieu change rarement, ce qui evite de reinterroger
l'annuaire a chaque calcul de statistiques.

TTL par defaut: 7 jours.
"""

import asyncio
from functools import partial
from pathlib import Path
from typing import Any, Optional

from diskcache import Cache


class ResponseCache:
    """
    Cache asynchrone a expiration sur disque.

    Les operations diskcache (synchrones) sont executees dans l'executeur
    par defaut.

    Attributes:
        LOCATION_TTL: Duree de vie d'un lieu resolu (7 jours)

    Example:
        cache = ResponseCache(cache_dir=".cache/api")
        await cache.set_location(12, location)
        location = await cache.get("location:12")
    """

    LOCATION_TTL = 7 * 24 * 60 * 60  # 7 jours en secondes (604800)

    def __init__(self, cache_dir: str | Path = ".cache/api") -> None:
        """
        Args:
            cache_dir: Repertoire du cache (cree si inexistant)
        """
        self._cache = Cache(str(cache_dir))

    @staticmethod
    def location_key(location_id: int) -> str:
        """Cle de cache d'un lieu."""
        return f"location:{location_id}"

    async def get(self, key: str) -> Optional[Any]:
        """Valeur stockee, ou None si absente ou expiree."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, key)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Stocke une valeur (picklable) avec une duree de vie en secondes."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, partial(self._cache.set, key, value, expire=ttl))

    async def set_location(self, location_id: int, value: Any) -> None:
        """Stocke un lieu resolu (TTL de 7 jours)."""
        await self.set(self.location_key(location_id), value, self.LOCATION_TTL)

    async def clear(self) -> None:
        """Supprime toutes les entrees du cache."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._cache.clear)

    def close(self) -> None:
        """Ferme le cache (a appeler en fin d'execution)."""
        self._cache.close()
