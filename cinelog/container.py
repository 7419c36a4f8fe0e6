"""
Container d'injection de dependances via dependency-injector.

Racine de composition de l'application : choisit les adaptateurs du journal
et de l'annuaire des lieux selon la configuration, et construit l'unique
cache de snapshots partage par le service de statistiques.
"""

from collections.abc import Iterator
from pathlib import Path

from dependency_injector import containers, providers

from .adapters.api.cache import ResponseCache
from .adapters.api.location_client import HttpLocationDirectory
from .adapters.api.watch_log_client import HttpWatchLogSource
from .adapters.json_files import JsonLocationDirectory, JsonWatchLogSource
from .config import Settings
from .services.statistics.snapshot_cache import SnapshotCache
from .services.statistics.statistics_service import StatisticsService


def _open_response_cache(cache_dir: Path) -> Iterator[ResponseCache]:
    cache = ResponseCache(cache_dir)
    yield cache
    cache.close()


def _watch_log_backend(settings: Settings) -> str:
    return "http" if settings.watch_log_api_enabled else "json"


def _locations_backend(settings: Settings) -> str:
    return "http" if settings.locations_api_enabled else "json"


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        service = container.statistics_service()
        snapshot = await service.get_or_compute(StatisticsScope(year=2024))
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Cache disque des reponses API - Resource fermee par shutdown_resources()
    response_cache = providers.Resource(
        _open_response_cache,
        cache_dir=config.provided.api_cache_dir,
    )

    # Source du journal : API HTTP si configuree, sinon fichier JSON
    watch_log_source = providers.Selector(
        providers.Callable(_watch_log_backend, config),
        http=providers.Singleton(
            HttpWatchLogSource,
            base_url=config.provided.watch_log_api_url,
            api_key=config.provided.api_key,
        ),
        json=providers.Singleton(
            JsonWatchLogSource,
            path=config.provided.watch_log_file,
        ),
    )

    # Annuaire des lieux : API HTTP si configuree, sinon fichier JSON (optionnel)
    location_directory = providers.Selector(
        providers.Callable(_locations_backend, config),
        http=providers.Singleton(
            HttpLocationDirectory,
            base_url=config.provided.locations_api_url,
            cache=response_cache,
            api_key=config.provided.api_key,
        ),
        json=providers.Singleton(
            JsonLocationDirectory,
            path=config.provided.locations_file,
        ),
    )

    # Cache des snapshots - une seule instance, jamais globale au module
    snapshot_cache = providers.Singleton(
        SnapshotCache,
        ttl_seconds=config.provided.cache_ttl_seconds,
        max_entries=config.provided.cache_max_entries,
    )

    statistics_service = providers.Singleton(
        StatisticsService,
        watch_log_source=watch_log_source,
        location_directory=location_directory,
        cache=snapshot_cache,
        top_watched_limit=config.provided.top_watched_limit,
    )
