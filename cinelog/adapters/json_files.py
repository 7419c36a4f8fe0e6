"""
Adaptateurs fichiers JSON pour le journal et l'annuaire des lieux.

Chaque fichier contient une liste d'enregistrements. La lecture est
deleguee a l'executeur par defaut pour ne pas bloquer la boucle asyncio.

Usage:
    source = JsonWatchLogSource(Path("watch_log.json"))
    entries = await source.fetch_all()
"""

import asyncio
import json
from pathlib import Path
from typing import Any

from loguru import logger

from cinelog.adapters.records import parse_locations, parse_watch_log
from cinelog.core.entities.location import Location
from cinelog.core.entities.watch_log import WatchLogEntry
from cinelog.core.exceptions import (
    LocationDirectoryUnavailableError,
    WatchLogUnavailableError,
)
from cinelog.core.ports.location_directory import ILocationDirectory
from cinelog.core.ports.watch_log_source import IWatchLogSource


def _read_records(path: Path) -> list[dict[str, Any]]:
    """Lit une liste d'enregistrements JSON (OSError / ValueError propagees)."""
    with path.open(encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, list):
        raise ValueError(f"{path} : une liste d'enregistrements est attendue")
    return data


class JsonWatchLogSource(IWatchLogSource):
    """Journal de visionnage lu integralement depuis un fichier JSON."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    async def fetch_all(self) -> list[WatchLogEntry]:
        loop = asyncio.get_running_loop()
        try:
            records = await loop.run_in_executor(None, _read_records, self._path)
        except (OSError, ValueError) as e:
            raise WatchLogUnavailableError(f"Lecture du journal impossible: {e}") from e

        entries = parse_watch_log(records)
        logger.debug("Journal lu depuis le fichier", path=str(self._path), entries=len(entries))
        return entries


class JsonLocationDirectory(ILocationDirectory):
    """
    Annuaire des lieux lu depuis un fichier JSON.

    Le fichier est charge au premier appel puis garde en memoire. Sans
    fichier configure, l'annuaire est vide : tous les lieux sont inconnus.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = Path(path) if path else None
        self._locations: dict[int, Location] | None = None

    async def _load(self) -> dict[int, Location]:
        if self._locations is None:
            if self._path is None:
                self._locations = {}
            else:
                loop = asyncio.get_running_loop()
                try:
                    records = await loop.run_in_executor(None, _read_records, self._path)
                except (OSError, ValueError) as e:
                    raise LocationDirectoryUnavailableError(
                        f"Lecture de l'annuaire impossible: {e}"
                    ) from e
                self._locations = parse_locations(records)
        return self._locations

    async def get_locations(self, location_ids: set[int]) -> dict[int, Location]:
        locations = await self._load()
        return {
            location_id: locations[location_id]
            for location_id in location_ids
            if location_id in locations
        }
