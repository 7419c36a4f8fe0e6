"""
Tests unitaires des adaptateurs fichiers JSON.
"""

import json
from pathlib import Path

import pytest

from cinelog.adapters.json_files import JsonLocationDirectory, JsonWatchLogSource
from cinelog.core.exceptions import LocationDirectoryUnavailableError, WatchLogUnavailableError
from cinelog.core.ports.location_directory import ILocationDirectory
from cinelog.core.ports.watch_log_source import IWatchLogSource
from cinelog.core.value_objects.scope import FilmTypeMode
from cinelog.services.statistics.normalizer import filter_by_film_type, normalize
from tests.fixtures.watch_log import DIARY_RECORDS, LOCATION_RECORDS


def _write(path: Path, data) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestJsonWatchLogSource:
    """Tests pour JsonWatchLogSource."""

    def test_implements_port(self, tmp_path: Path) -> None:
        """JsonWatchLogSource implemente IWatchLogSource."""
        assert isinstance(JsonWatchLogSource(tmp_path / "log.json"), IWatchLogSource)

    @pytest.mark.asyncio
    async def test_fetch_all(self, tmp_path: Path) -> None:
        """Le journal complet est lu, enregistrements invalides ignores."""
        source = JsonWatchLogSource(_write(tmp_path / "log.json", DIARY_RECORDS))
        entries = await source.fetch_all()
        assert [e.id for e in entries] == [1, 2]

    @pytest.mark.asyncio
    async def test_mistyped_fields_are_normalized(self, tmp_path: Path) -> None:
        """Date numerique ecartee, liste de tags acceptee, sans erreur."""
        records = [
            {"id": 1, "watch_date": 20240101},
            {"id": 2, "watch_date": "2024-01-02", "tags": ["short"]},
        ]
        entries = await JsonWatchLogSource(_write(tmp_path / "log.json", records)).fetch_all()

        assert [e.entry.id for e in normalize(entries)] == [2]
        assert [e.id for e in filter_by_film_type(entries, FilmTypeMode.SHORT)] == [2]

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path: Path) -> None:
        """Un fichier absent leve WatchLogUnavailableError."""
        with pytest.raises(WatchLogUnavailableError):
            await JsonWatchLogSource(tmp_path / "absent.json").fetch_all()

    @pytest.mark.asyncio
    async def test_invalid_payload(self, tmp_path: Path) -> None:
        """Un objet JSON au lieu d'une liste est refuse."""
        source = JsonWatchLogSource(_write(tmp_path / "log.json", {"entries": []}))
        with pytest.raises(WatchLogUnavailableError):
            await source.fetch_all()


class TestJsonLocationDirectory:
    """Tests pour JsonLocationDirectory."""

    @pytest.mark.asyncio
    async def test_get_locations_returns_known_ids(self, tmp_path: Path) -> None:
        """Seuls les identifiants connus sont retournes."""
        directory = JsonLocationDirectory(_write(tmp_path / "loc.json", LOCATION_RECORDS))
        assert isinstance(directory, ILocationDirectory)

        locations = await directory.get_locations({10, 99})
        assert set(locations) == {10}

    @pytest.mark.asyncio
    async def test_without_file_directory_is_empty(self) -> None:
        """Sans fichier, tous les lieux sont inconnus."""
        assert await JsonLocationDirectory(None).get_locations({1}) == {}

    @pytest.mark.asyncio
    async def test_invalid_json(self, tmp_path: Path) -> None:
        """Un fichier illisible leve LocationDirectoryUnavailableError."""
        path = tmp_path / "loc.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(LocationDirectoryUnavailableError):
            await JsonLocationDirectory(path).get_locations({1})
