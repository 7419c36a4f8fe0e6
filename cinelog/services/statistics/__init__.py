"""
Moteur local de statistiques du journal de visionnage.

Exports :
- StatisticsService : Orchestration (jeux de travail, fan-out, cache)
- SnapshotCache : Cache TTL borne des snapshots par scope
- StatisticsSnapshot : Agregat immuable des statistiques d'un scope
"""

from .dataclasses import StatisticsSnapshot
from .snapshot_cache import CacheEntry, SnapshotCache
from .statistics_service import StatisticsService

__all__ = [
    "CacheEntry",
    "SnapshotCache",
    "StatisticsService",
    "StatisticsSnapshot",
]
