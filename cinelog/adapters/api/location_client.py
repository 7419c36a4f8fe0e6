"""
Annuaire HTTP des lieux, avec cache disque.

Pattern cache-first : chaque identifiant est d'abord cherche dans le cache
disque ; les identifiants manquants sont resolus en une seule requete
(filtre id=in.(...)) puis mis en cache pour 7 jours.

Usage:
    directory = HttpLocationDirectory(base_url=url, api_key="xxx", cache=ResponseCache())
    locations = await directory.get_locations({1, 2, 3})
"""

from typing import Optional

import httpx
from loguru import logger

from cinelog.adapters.api._http import LazyHttpClient
from cinelog.adapters.api.cache import ResponseCache
from cinelog.adapters.api.retry import RateLimitError, send_with_retry
from cinelog.adapters.records import parse_locations
from cinelog.core.entities.location import Location
from cinelog.core.exceptions import LocationDirectoryUnavailableError
from cinelog.core.ports.location_directory import ILocationDirectory


class HttpLocationDirectory(LazyHttpClient, ILocationDirectory):
    """
    Annuaire des lieux servi par une API REST.

    Attributes:
        LOCATIONS_PATH: Ressource des lieux, relative a base_url
        SELECT_COLUMNS: Colonnes demandees (groupe via la relation imbriquee)
    """

    LOCATIONS_PATH = "/locations"
    SELECT_COLUMNS = "id,display_name,latitude,longitude,location_groups(name)"

    def __init__(
        self,
        base_url: str,
        cache: ResponseCache,
        api_key: Optional[str] = None,
        max_wait: float = 60,
    ) -> None:
        """
        Args:
            base_url: URL de base de l'API
            cache: Cache disque des lieux resolus
            api_key: Cle d'API (optionnelle)
            max_wait: Attente maximale entre deux tentatives sur 429
        """
        super().__init__(base_url, api_key)
        self._cache = cache
        self._max_wait = max_wait

    async def get_locations(self, location_ids: set[int]) -> dict[int, Location]:
        """
        Resout un lot d'identifiants.

        Raises:
            LocationDirectoryUnavailableError: Erreur reseau, HTTP ou 429 persistant
        """
        found: dict[int, Location] = {}
        missing: list[int] = []
        for location_id in sorted(location_ids):
            cached = await self._cache.get(ResponseCache.location_key(location_id))
            if cached is not None:
                found[location_id] = cached
            else:
                missing.append(location_id)

        if not missing:
            return found

        try:
            response = await send_with_retry(
                self._get_client(),
                "GET",
                self.LOCATIONS_PATH,
                max_wait=self._max_wait,
                params={
                    "select": self.SELECT_COLUMNS,
                    "id": f"in.({','.join(str(i) for i in missing)})",
                },
            )
            records = response.json()
        except (httpx.HTTPError, RateLimitError, ValueError) as e:
            raise LocationDirectoryUnavailableError(f"Annuaire des lieux indisponible: {e}") from e

        if not isinstance(records, list):
            raise LocationDirectoryUnavailableError("Reponse inattendue de l'annuaire des lieux")

        resolved = parse_locations(records)
        for location_id, location in resolved.items():
            if location_id in location_ids:
                found[location_id] = location
                await self._cache.set_location(location_id, location)

        logger.debug(
            "Lieux resolus",
            cached=len(location_ids) - len(missing),
            fetched=len(resolved),
        )
        return found
