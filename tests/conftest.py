"""
Fixtures pytest partagees pour les tests CineLog.

Ce module contient les fixtures communes utilisees dans les tests:
- Horloge manuelle pour le cache de snapshots
- Mocks des ports (IWatchLogSource, ILocationDirectory)
- Settings de test avec chemins temporaires
"""

from datetime import date, datetime
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from cinelog.config import Settings
from cinelog.core.ports.location_directory import ILocationDirectory
from cinelog.core.ports.watch_log_source import IWatchLogSource
from cinelog.services.statistics.snapshot_cache import SnapshotCache
from cinelog.services.statistics.statistics_service import StatisticsService


# ====================
# Horloge
# ====================


class ManualClock:
    """Horloge monotone avancee a la main."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> ManualClock:
    """Horloge manuelle partant de t=1000 s."""
    return ManualClock()


@pytest.fixture
def snapshot_cache(clock: ManualClock) -> SnapshotCache:
    """Cache de snapshots par defaut (600 s, 5 scopes) pilote par l'horloge manuelle."""
    return SnapshotCache(ttl_seconds=600, max_entries=5, clock=clock)


# ====================
# Ports
# ====================


@pytest.fixture
def mock_source() -> AsyncMock:
    """
    Mock de IWatchLogSource.

    Retourne un journal vide par defaut ; configurer fetch_all.return_value
    dans chaque test.
    """
    mock = AsyncMock(spec=IWatchLogSource)
    mock.fetch_all.return_value = []
    return mock


@pytest.fixture
def mock_directory() -> AsyncMock:
    """Mock de ILocationDirectory (annuaire vide par defaut)."""
    mock = AsyncMock(spec=ILocationDirectory)
    mock.get_locations.return_value = {}
    return mock


@pytest.fixture
def today() -> date:
    """Date du jour figee pour les tests."""
    return date(2026, 10, 18)


@pytest.fixture
def service(
    mock_source: AsyncMock,
    mock_directory: AsyncMock,
    snapshot_cache: SnapshotCache,
    today: date,
) -> StatisticsService:
    """StatisticsService avec ports mockes et date figee."""
    return StatisticsService(
        watch_log_source=mock_source,
        location_directory=mock_directory,
        cache=snapshot_cache,
        today=lambda: today,
        now=lambda: datetime(2026, 10, 18, 12, 0),
    )


# ====================
# Configuration
# ====================


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings de test avec chemins temporaires."""
    return Settings(
        watch_log_file=tmp_path / "watch_log.json",
        api_cache_dir=tmp_path / "cache",
        log_file=tmp_path / "logs" / "cinelog.log",
    )
