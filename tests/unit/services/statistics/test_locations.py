"""
Tests unitaires de l'agregation par lieu.
"""

from unittest.mock import AsyncMock

import pytest

from cinelog.core.entities.location import Location
from cinelog.core.exceptions import LocationDirectoryUnavailableError
from cinelog.core.ports.location_directory import ILocationDirectory
from cinelog.services.statistics.locations import (
    build_location_stats,
    count_by_location,
    location_statistics,
)
from tests.fixtures.watch_log import enriched

LOCATIONS = {
    1: Location(id=1, display_name="Le Champo", latitude=48.85, longitude=2.34, group_name="Paris"),
    2: Location(id=2, display_name="Salon"),
    3: Location(id=3, display_name="Max Linder", latitude=48.87, longitude=2.34, group_name="Paris"),
}


class TestBuildLocationStats:
    """Tests pour build_location_stats."""

    def test_counts_and_groups(self) -> None:
        """Comptes par lieu et par groupe, tries par nombre puis libelle."""
        stats = build_location_stats({1: 2, 2: 3, 3: 2}, LOCATIONS)

        assert [(c.label, c.entry_count) for c in stats.specific_counts] == [
            ("Salon", 3),
            ("Le Champo", 2),
            ("Max Linder", 2),
        ]
        assert [(c.label, c.entry_count) for c in stats.group_counts] == [
            ("Paris", 4),
            ("Ungrouped", 3),
        ]

    def test_map_points_need_coordinates(self) -> None:
        """Seuls les lieux geocodes apparaissent sur la carte."""
        stats = build_location_stats({1: 1, 2: 5, 3: 4}, LOCATIONS)
        assert [p.location_id for p in stats.map_points] == [3, 1]

    def test_unknown_location_counts_but_not_on_map(self) -> None:
        """Un lieu introuvable compte dans les totaux sous un libelle generique."""
        stats = build_location_stats({99: 2}, LOCATIONS)

        assert stats.map_points == ()
        assert stats.specific_counts[0].label == "Location 99"
        assert stats.group_counts[0].label == "Ungrouped"

    def test_label_sort_is_case_insensitive(self) -> None:
        """Les libelles a egalite sont tries sans tenir compte de la casse."""
        locations = {
            1: Location(id=1, display_name="bar"),
            2: Location(id=2, display_name="Alpha"),
        }
        stats = build_location_stats({1: 1, 2: 1}, locations)
        assert [c.label for c in stats.specific_counts] == ["Alpha", "bar"]


class TestLocationStatistics:
    """Tests pour location_statistics (resolution groupee)."""

    def test_count_ignores_entries_without_location(self) -> None:
        """Les entrees sans lieu ne sont pas comptees."""
        counts = count_by_location([enriched(location_id=1), enriched()])
        assert counts == {1: 1}

    @pytest.mark.asyncio
    async def test_single_batched_lookup(self) -> None:
        """L'annuaire est appele une fois avec les identifiants distincts."""
        directory = AsyncMock(spec=ILocationDirectory)
        directory.get_locations.return_value = {1: LOCATIONS[1]}
        items = [enriched(location_id=1), enriched(location_id=1), enriched(location_id=2)]

        stats = await location_statistics(items, directory)

        directory.get_locations.assert_awaited_once_with({1, 2})
        assert len(stats.specific_counts) == 2

    @pytest.mark.asyncio
    async def test_no_lookup_without_locations(self) -> None:
        """Sans lieu, l'annuaire n'est pas appele."""
        directory = AsyncMock(spec=ILocationDirectory)
        stats = await location_statistics([enriched()], directory)

        directory.get_locations.assert_not_called()
        assert stats.specific_counts == ()

    @pytest.mark.asyncio
    async def test_directory_errors_propagate(self) -> None:
        """Une erreur de l'annuaire remonte a l'appelant."""
        directory = AsyncMock(spec=ILocationDirectory)
        directory.get_locations.side_effect = LocationDirectoryUnavailableError("down")

        with pytest.raises(LocationDirectoryUnavailableError):
            await location_statistics([enriched(location_id=1)], directory)
