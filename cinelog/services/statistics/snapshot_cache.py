"""
Cache memoire des snapshots de statistiques avec TTL et taille bornee.

Le cache conserve au plus un snapshot par scope et au plus max_entries
scopes. A l'insertion d'un nouveau scope dans un cache plein, l'entree
la plus ancienne (horodatage de creation) est evincee.

Une entree perimee (age > TTL) n'est pas evincee : elle declenche seulement
un recalcul au prochain acces. Les entrees ne sont jamais persistees.

TTL par defaut: 10 minutes. Taille par defaut: 5 scopes.

Example:
    cache = SnapshotCache(ttl_seconds=600, max_entries=5)
    snapshot = await cache.get_or_compute("2024-all", compute)
"""

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Optional

from loguru import logger

from cinelog.utils.constants import DEFAULT_CACHE_MAX_ENTRIES, DEFAULT_CACHE_TTL_SECONDS

from .dataclasses import StatisticsSnapshot


@dataclass(frozen=True)
class CacheEntry:
    """Snapshot en cache avec son horodatage de creation."""

    scope_key: str
    snapshot: StatisticsSnapshot
    created_at: float


class SnapshotCache:
    """
    Cache borne a expiration des snapshots, indexe par cle de scope.

    Les lectures sont libres ; les ecritures (eviction puis insertion) sont
    serialisees par un verrou asyncio afin de preserver l'invariant de taille.
    Le cache est construit et injecte par le container : aucune instance
    globale.

    Attributes:
        ttl_seconds: Duree de vie d'un snapshot avant recalcul
        max_entries: Nombre maximum de scopes conserves
        evictions: Nombre total d'evictions depuis la creation
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        max_entries: int = DEFAULT_CACHE_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialise un cache vide.

        Args:
            ttl_seconds: Duree de vie en secondes (defaut: 600)
            max_entries: Capacite en nombre de scopes (defaut: 5)
            clock: Horloge en secondes (injectable pour les tests)
        """
        if max_entries < 1:
            raise ValueError("max_entries doit etre >= 1")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self.evictions = 0
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._write_lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, scope_key: str) -> bool:
        return scope_key in self._entries

    def keys(self) -> list[str]:
        """Cles presentes, de la plus ancienne a la plus recente."""
        return [
            entry.scope_key
            for entry in sorted(self._entries.values(), key=lambda e: e.created_at)
        ]

    def get(self, scope_key: str) -> Optional[CacheEntry]:
        """Retourne l'entree d'un scope, perimee ou non, ou None."""
        return self._entries.get(scope_key)

    def is_stale(self, entry: CacheEntry) -> bool:
        """True si l'age de l'entree depasse le TTL."""
        return self._clock() - entry.created_at > self.ttl_seconds

    def get_fresh(self, scope_key: str) -> Optional[StatisticsSnapshot]:
        """Retourne le snapshot d'un scope s'il existe et n'est pas perime."""
        entry = self._entries.get(scope_key)
        if entry is None or self.is_stale(entry):
            return None
        return entry.snapshot

    async def put(self, scope_key: str, snapshot: StatisticsSnapshot) -> CacheEntry:
        """
        Stocke un snapshot avec un horodatage frais.

        Si le scope est nouveau et le cache plein, l'entree la plus ancienne
        est evincee avant l'insertion. Un scope existant est ecrase sans
        eviction.
        """
        async with self._write_lock:
            if scope_key not in self._entries and len(self._entries) >= self.max_entries:
                self._evict_oldest()
            entry = CacheEntry(
                scope_key=scope_key,
                snapshot=snapshot,
                created_at=self._clock(),
            )
            self._entries[scope_key] = entry
            return entry

    def _evict_oldest(self) -> None:
        oldest = min(self._entries.values(), key=lambda e: e.created_at)
        del self._entries[oldest.scope_key]
        self.evictions += 1
        logger.debug("Snapshot evince du cache", scope=oldest.scope_key)

    async def invalidate(self, scope_key: str) -> None:
        """Supprime l'entree d'un scope (sans effet si absente)."""
        async with self._write_lock:
            self._entries.pop(scope_key, None)

    async def clear(self) -> None:
        """Supprime toutes les entrees du cache."""
        async with self._write_lock:
            self._entries.clear()

    async def get_or_compute(
        self,
        scope_key: str,
        compute: Callable[[], Awaitable[StatisticsSnapshot]],
        force: bool = False,
    ) -> StatisticsSnapshot:
        """
        Retourne le snapshot en cache ou le recalcule.

        Sans force, un snapshot non perime est retourne tel quel. Sinon le
        snapshot est recalcule, stocke avec un horodatage frais et retourne.
        Le dernier ecrit pour un scope l'emporte.

        Args:
            scope_key: Cle du scope
            compute: Coroutine de calcul complet du snapshot
            force: Recalcule meme si un snapshot frais existe

        Returns:
            Le snapshot du scope
        """
        if not force:
            cached = self.get_fresh(scope_key)
            if cached is not None:
                logger.debug("Snapshot servi depuis le cache", scope=scope_key)
                return cached

        snapshot = await compute()
        await self.put(scope_key, snapshot)
        return snapshot
