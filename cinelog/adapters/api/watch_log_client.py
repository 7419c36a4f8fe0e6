"""
Source HTTP du journal de visionnage.

Le journal complet est recupere par lots successifs (offset / limit) tant
qu'un lot est plein. Le moteur recoit toujours le journal entier.

Usage:
    source = HttpWatchLogSource(base_url="https://example.org/rest/v1", api_key="xxx")
    entries = await source.fetch_all()
    await source.close()
"""

from typing import Optional

import httpx
from loguru import logger

from cinelog.adapters.api._http import LazyHttpClient
from cinelog.adapters.api.retry import RateLimitError, send_with_retry
from cinelog.adapters.records import parse_watch_log
from cinelog.core.entities.watch_log import WatchLogEntry
from cinelog.core.exceptions import WatchLogUnavailableError
from cinelog.core.ports.watch_log_source import IWatchLogSource

# Taille d'un lot de recuperation du journal
WATCH_LOG_BATCH_SIZE = 2000


class HttpWatchLogSource(LazyHttpClient, IWatchLogSource):
    """
    Journal de visionnage servi par une API REST.

    Attributes:
        WATCH_LOG_PATH: Ressource du journal, relative a base_url
    """

    WATCH_LOG_PATH = "/diary"

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        batch_size: int = WATCH_LOG_BATCH_SIZE,
        max_wait: float = 60,
    ) -> None:
        """
        Args:
            base_url: URL de base de l'API
            api_key: Cle d'API (optionnelle)
            batch_size: Nombre d'enregistrements par lot
            max_wait: Attente maximale entre deux tentatives sur 429
        """
        super().__init__(base_url, api_key)
        self._batch_size = batch_size
        self._max_wait = max_wait

    async def _fetch_batch(self, offset: int) -> list[dict]:
        response = await send_with_retry(
            self._get_client(),
            "GET",
            self.WATCH_LOG_PATH,
            max_wait=self._max_wait,
            params={
                "select": "*",
                "order": "id.asc",
                "offset": offset,
                "limit": self._batch_size,
            },
        )
        data = response.json()
        if not isinstance(data, list):
            raise WatchLogUnavailableError("Reponse inattendue de l'API du journal")
        return data

    async def fetch_all(self) -> list[WatchLogEntry]:
        """
        Recupere le journal complet, lot par lot.

        Raises:
            WatchLogUnavailableError: Erreur reseau, HTTP ou 429 persistant
        """
        records: list[dict] = []
        offset = 0
        try:
            while True:
                batch = await self._fetch_batch(offset)
                records.extend(batch)
                logger.debug("Lot du journal recupere", offset=offset, size=len(batch))
                if len(batch) < self._batch_size:
                    break
                offset += self._batch_size
        except (httpx.HTTPError, RateLimitError, ValueError) as e:
            raise WatchLogUnavailableError(f"Journal indisponible: {e}") from e

        return parse_watch_log(records)
