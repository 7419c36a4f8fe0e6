"""
Tests unitaires du cache de snapshots.

Ces tests verifient:
- Le TTL (599 s servi depuis le cache, 601 s recalcule)
- L'eviction de l'entree la plus ancienne quand le cache est plein
- Le recalcul force et l'invalidation
"""

from unittest.mock import AsyncMock

import pytest

from cinelog.core.value_objects.scope import StatisticsScope
from cinelog.services.statistics.dataclasses import StatisticsSnapshot
from cinelog.services.statistics.snapshot_cache import SnapshotCache


def _snapshot(year: int | None = None) -> StatisticsSnapshot:
    return StatisticsSnapshot.empty(StatisticsScope(year=year))


class TestSnapshotCacheTTL:
    """Tests de l'expiration."""

    @pytest.mark.asyncio
    async def test_fresh_entry_is_served(self, snapshot_cache: SnapshotCache, clock) -> None:
        """A 599 s, le snapshot en cache est retourne sans recalcul."""
        cached = _snapshot(2024)
        await snapshot_cache.put("2024-all", cached)
        clock.advance(599)

        compute = AsyncMock(return_value=_snapshot(2024))
        result = await snapshot_cache.get_or_compute("2024-all", compute)

        assert result is cached
        compute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_stale_entry_is_recomputed(self, snapshot_cache: SnapshotCache, clock) -> None:
        """A 601 s, le snapshot est recalcule et re-horodate."""
        await snapshot_cache.put("2024-all", _snapshot(2024))
        clock.advance(601)

        fresh = _snapshot(2024)
        compute = AsyncMock(return_value=fresh)
        result = await snapshot_cache.get_or_compute("2024-all", compute)

        assert result is fresh
        compute.assert_awaited_once()
        assert snapshot_cache.get("2024-all").created_at == clock.now

    @pytest.mark.asyncio
    async def test_stale_entry_is_kept_until_recomputed(
        self, snapshot_cache: SnapshotCache, clock
    ) -> None:
        """Une entree perimee reste lisible (repli) mais n'est plus fraiche."""
        await snapshot_cache.put("all-time-all", _snapshot())
        clock.advance(1000)

        assert snapshot_cache.get("all-time-all") is not None
        assert snapshot_cache.get_fresh("all-time-all") is None

    @pytest.mark.asyncio
    async def test_force_bypasses_fresh_entry(self, snapshot_cache: SnapshotCache) -> None:
        """force=True recalcule meme si l'entree est fraiche."""
        await snapshot_cache.put("2024-all", _snapshot(2024))
        fresh = _snapshot(2024)

        result = await snapshot_cache.get_or_compute(
            "2024-all", AsyncMock(return_value=fresh), force=True
        )

        assert result is fresh


class TestSnapshotCacheEviction:
    """Tests de la taille bornee."""

    @pytest.mark.asyncio
    async def test_sixth_key_evicts_oldest(self, snapshot_cache: SnapshotCache, clock) -> None:
        """Le 6e scope evince uniquement le plus ancien."""
        keys = [f"{year}-all" for year in range(2020, 2025)]
        for key in keys:
            await snapshot_cache.put(key, _snapshot())
            clock.advance(1)

        await snapshot_cache.put("all-time-all", _snapshot())

        assert len(snapshot_cache) == 5
        assert "2020-all" not in snapshot_cache
        assert snapshot_cache.keys() == keys[1:] + ["all-time-all"]
        assert snapshot_cache.evictions == 1

    @pytest.mark.asyncio
    async def test_overwrite_does_not_evict(self, snapshot_cache: SnapshotCache, clock) -> None:
        """Reecrire un scope existant ne provoque pas d'eviction."""
        for year in range(2020, 2025):
            await snapshot_cache.put(f"{year}-all", _snapshot())
            clock.advance(1)

        await snapshot_cache.put("2020-all", _snapshot())

        assert len(snapshot_cache) == 5
        assert snapshot_cache.evictions == 0
        assert snapshot_cache.keys()[-1] == "2020-all"

    def test_rejects_zero_capacity(self) -> None:
        """Une capacite nulle est refusee."""
        with pytest.raises(ValueError):
            SnapshotCache(max_entries=0)


class TestSnapshotCacheInvalidation:
    """Tests de l'invalidation."""

    @pytest.mark.asyncio
    async def test_invalidate_and_clear(self, snapshot_cache: SnapshotCache) -> None:
        """invalidate() retire un scope, clear() vide le cache."""
        await snapshot_cache.put("2023-all", _snapshot())
        await snapshot_cache.put("2024-all", _snapshot())

        await snapshot_cache.invalidate("2023-all")
        await snapshot_cache.invalidate("absent")
        assert snapshot_cache.keys() == ["2024-all"]

        await snapshot_cache.clear()
        assert len(snapshot_cache) == 0
