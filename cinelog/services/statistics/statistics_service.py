"""
Service de statistiques orchestrant le calcul des snapshots.

Le StatisticsService est le seul point d'entree des consommateurs (CLI).
Il recupere le journal, maintient un jeu de travail normalise par filtre,
lance les calculs independants en parallele puis assemble un
StatisticsSnapshot immuable, ecrit dans le cache sous la cle du scope.

Responsabilites:
- Jeux de travail par filtre (tous / longs metrages / courts metrages)
- Fan-out des calculs purs dans l'executeur, jointure par asyncio.gather
- Cache par scope (TTL, taille bornee) et rafraichissement force
- Repli sur le dernier snapshot connu en cas d'echec amont
"""

import asyncio
from collections.abc import Callable, Sequence
from datetime import date, datetime
from functools import partial
from typing import Any

from loguru import logger

from cinelog.core.exceptions import StatisticsError, WatchLogUnavailableError
from cinelog.core.ports.location_directory import ILocationDirectory
from cinelog.core.ports.watch_log_source import IWatchLogSource
from cinelog.core.value_objects.scope import FilmTypeMode, StatisticsScope
from cinelog.utils.constants import DEFAULT_TOP_WATCHED_LIMIT

from . import distributions, rankings
from .dataclasses import (
    EnrichedEntry,
    NoPace,
    NoStreak,
    NoYearRelease,
    PaceSummary,
    StatisticsSnapshot,
)
from .locations import location_statistics
from .normalizer import filter_by_film_type, normalize
from .pace import yearly_pace
from .snapshot_cache import SnapshotCache
from .streaks import daily_streaks, weekly_streaks


def _pace(entries: Sequence[EnrichedEntry], year: int, today: date) -> PaceSummary:
    """Rythme d'une annee a partir de toutes les entrees du filtre."""
    return yearly_pace(distributions.films_per_month(entries), year, today)


class StatisticsService:
    """
    Service de calcul et de mise en cache des statistiques.

    Example:
        service = StatisticsService(
            watch_log_source=source,
            location_directory=directory,
            cache=SnapshotCache(),
        )

        snapshot = await service.get_or_compute(StatisticsScope(year=2024))
        snapshot = await service.refresh(StatisticsScope())
    """

    def __init__(
        self,
        watch_log_source: IWatchLogSource,
        location_directory: ILocationDirectory,
        cache: SnapshotCache,
        top_watched_limit: int = DEFAULT_TOP_WATCHED_LIMIT,
        today: Callable[[], date] = date.today,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        """
        Initialise le service.

        Args:
            watch_log_source: Source du journal complet
            location_directory: Annuaire des lieux
            cache: Cache des snapshots (partage, construit par le container)
            top_watched_limit: Nombre de films du top des plus vus
            today: Date du jour (injectable pour les tests)
            now: Horodatage des snapshots (injectable pour les tests)
        """
        self._source = watch_log_source
        self._directory = location_directory
        self._cache = cache
        self._top_watched_limit = top_watched_limit
        self._today = today
        self._now = now
        self._working_sets: dict[FilmTypeMode, tuple[EnrichedEntry, ...]] = {}
        self._working_sets_lock = asyncio.Lock()

    @property
    def cache(self) -> SnapshotCache:
        """Cache des snapshots utilise par le service."""
        return self._cache

    # ====================
    # Jeux de travail
    # ====================

    async def get_working_set(
        self, mode: FilmTypeMode, force: bool = False
    ) -> tuple[EnrichedEntry, ...]:
        """
        Entrees normalisees d'un filtre.

        Le journal n'est recupere qu'une fois pour tous les filtres ; les
        jeux de travail sont conserves jusqu'au prochain rafraichissement.

        Raises:
            WatchLogUnavailableError: Si la source du journal echoue
        """
        async with self._working_sets_lock:
            if force:
                self._working_sets.clear()
            if mode not in self._working_sets:
                await self._load_working_sets()
            return self._working_sets[mode]

    async def _load_working_sets(self) -> None:
        try:
            raw_entries = await self._source.fetch_all()
        except StatisticsError:
            raise
        except Exception as e:
            raise WatchLogUnavailableError(str(e)) from e

        for mode in FilmTypeMode:
            self._working_sets[mode] = normalize(filter_by_film_type(raw_entries, mode))
        logger.info(
            "Journal charge",
            entries=len(raw_entries),
            usable=len(self._working_sets[FilmTypeMode.ALL]),
        )

    async def aclose(self) -> None:
        """Ferme les adaptateurs du journal et des lieux."""
        for adapter in (self._source, self._directory):
            await adapter.close()

    def invalidate_working_sets(self) -> None:
        """Oublie les jeux de travail ; le prochain calcul recharge le journal."""
        self._working_sets.clear()

    async def available_years(self, mode: FilmTypeMode = FilmTypeMode.ALL) -> list[int]:
        """Annees de visionnage presentes dans le journal, de la plus recente a la plus ancienne."""
        entries = await self.get_working_set(mode)
        return sorted({item.watch_year for item in entries}, reverse=True)

    # ====================
    # Snapshots
    # ====================

    async def get_or_compute(
        self, scope: StatisticsScope, force: bool = False
    ) -> StatisticsSnapshot:
        """
        Snapshot d'un scope, depuis le cache ou recalcule.

        Args:
            scope: Annee et filtre
            force: Ignore le cache et recharge le journal

        Returns:
            Le snapshot du scope

        Raises:
            StatisticsError: Si le journal ou l'annuaire des lieux est indisponible
        """
        async def compute() -> StatisticsSnapshot:
            entries = await self.get_working_set(scope.mode, force=force)
            return await self.compute_snapshot(scope, entries)

        return await self._cache.get_or_compute(scope.cache_key, compute, force=force)

    async def refresh(self, scope: StatisticsScope) -> StatisticsSnapshot:
        """Recalcul force d'un scope."""
        return await self.get_or_compute(scope, force=True)

    async def get_snapshot_or_fallback(
        self, scope: StatisticsScope, force: bool = False
    ) -> StatisticsSnapshot:
        """
        Snapshot d'un scope sans lever d'erreur amont.

        En cas d'echec, retourne le dernier snapshot connu du scope (meme
        perime), ou un snapshot vide s'il n'y en a aucun.
        """
        try:
            return await self.get_or_compute(scope, force=force)
        except StatisticsError as e:
            logger.warning("Calcul des statistiques impossible", scope=scope.cache_key, error=str(e))
            entry = self._cache.get(scope.cache_key)
            if entry is not None:
                return entry.snapshot
            return StatisticsSnapshot.empty(scope)

    async def compute_snapshot(
        self, scope: StatisticsScope, entries: Sequence[EnrichedEntry]
    ) -> StatisticsSnapshot:
        """
        Calcule toutes les statistiques d'un scope.

        Les calculs purs tournent en parallele dans l'executeur par defaut,
        la resolution des lieux en meme temps ; le snapshot n'est assemble
        qu'une fois tous les resultats disponibles.

        Args:
            scope: Annee et filtre
            entries: Jeu de travail complet du filtre (toutes annees)
        """
        today = self._today()
        year = scope.year
        scoped = entries if year is None else [e for e in entries if e.watch_year == year]

        loop = asyncio.get_running_loop()

        def run(func: Callable[..., Any], *args: Any) -> "asyncio.Future[Any]":
            return loop.run_in_executor(None, partial(func, *args))

        tasks: dict[str, Any] = {
            "dashboard": run(distributions.dashboard_stats, scoped, today),
            "rating_distribution": run(distributions.rating_distribution, scoped),
            "detailed_rating_distribution": run(distributions.detailed_rating_distribution, scoped),
            "films_by_decade": run(distributions.films_by_decade, scoped, today),
            "films_by_release_year": run(distributions.films_by_release_year, scoped),
            "films_per_year": run(distributions.films_per_year, entries),
            "all_films_per_month": run(distributions.films_per_month, entries),
            "day_of_week": run(distributions.day_of_week_pattern, scoped),
            "runtime": run(distributions.runtime_stats, scoped),
            "unique_films_count": run(distributions.unique_films_count, scoped),
            "watch_span": run(distributions.watch_span, scoped),
            "rating_stats": run(distributions.rating_stats, scoped),
            "rewatch": run(rankings.rewatch_stats, scoped),
            "daily_streak": run(daily_streaks, entries, today),
            "journey": run(rankings.journey_stats, scoped),
            "locations": location_statistics(scoped, self._directory),
        }
        if year is None:
            tasks["weekly_streak"] = run(weekly_streaks, entries, today)
            tasks["top_watched"] = run(
                rankings.top_watched_films, entries, self._top_watched_limit
            )
            tasks["average_star_ratings_per_year"] = run(
                distributions.average_star_ratings_per_year, entries
            )
            tasks["average_detailed_ratings_per_year"] = run(
                distributions.average_detailed_ratings_per_year, entries
            )
        else:
            tasks["weekly_films"] = run(distributions.weekly_films, scoped, year)
            tasks["year_release"] = run(distributions.year_release_stats, scoped, year)
            tasks["pace"] = run(_pace, entries, year, today)

        values = await asyncio.gather(*tasks.values())
        results = dict(zip(tasks.keys(), values))

        all_per_month = results["all_films_per_month"]
        films_per_month = (
            all_per_month
            if year is None
            else distributions.films_per_month_for_year(all_per_month, year)
        )

        snapshot = StatisticsSnapshot(
            scope=scope,
            generated_at=self._now(),
            dashboard=results["dashboard"],
            rating_distribution=results["rating_distribution"],
            detailed_rating_distribution=results["detailed_rating_distribution"],
            films_by_decade=results["films_by_decade"],
            films_by_release_year=results["films_by_release_year"],
            films_per_year=results["films_per_year"],
            films_per_month=films_per_month,
            all_films_per_month=all_per_month,
            weekly_films=results.get("weekly_films", ()),
            day_of_week=results["day_of_week"],
            runtime=results["runtime"],
            unique_films_count=results["unique_films_count"],
            watch_span=results["watch_span"],
            rating_stats=results["rating_stats"],
            rewatch=results["rewatch"],
            daily_streak=results["daily_streak"],
            weekly_streak=results.get("weekly_streak", NoStreak()),
            year_release=results.get("year_release", NoYearRelease()),
            top_watched=results.get("top_watched", ()),
            journey=results["journey"],
            average_star_ratings_per_year=results.get("average_star_ratings_per_year", ()),
            average_detailed_ratings_per_year=results.get(
                "average_detailed_ratings_per_year", ()
            ),
            pace=results.get("pace", NoPace()),
            locations=results["locations"],
        )
        logger.info(
            "Snapshot calcule",
            scope=scope.cache_key,
            films=snapshot.dashboard.total_films,
        )
        return snapshot
