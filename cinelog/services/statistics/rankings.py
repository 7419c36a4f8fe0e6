"""
Revisionnages et classements.

Regroupe les visionnages par film (cle de film unique) ou par date pour
produire les statistiques de revisionnage, le top des films les plus vus
et les classements complets (jours les plus charges, meilleurs mois).
"""

from collections import Counter, defaultdict
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from typing import Optional

from cinelog.utils.constants import (
    DEFAULT_TOP_WATCHED_LIMIT,
    FIVE_STAR_THRESHOLD,
    MIN_RATINGS_PER_MONTH,
)
from cinelog.utils.helpers import mean, month_label, percentage

from .dataclasses import (
    EnrichedEntry,
    JourneyStats,
    MonthlyRatingAverage,
    MostFilmsInDay,
    RewatchStats,
    TopWatchedFilm,
)


def rewatch_stats(entries: Sequence[EnrichedEntry]) -> RewatchStats:
    """
    Statistiques de revisionnage.

    Le film le plus revu est determine par (nombre, titre) : a nombre egal,
    le titre alphabetiquement posterieur l'emporte.
    """
    rewatches = [item for item in entries if item.entry.is_rewatch]
    total_films = len(entries)

    titles: dict[str, str] = {}
    rewatch_counts: Counter = Counter()
    for item in sorted(rewatches, key=lambda e: (e.date, e.entry.id)):
        titles.setdefault(item.film_key, item.entry.title)
        rewatch_counts[item.film_key] += 1

    top_title: Optional[str] = None
    if rewatch_counts:
        top_key = max(rewatch_counts, key=lambda key: (rewatch_counts[key], titles[key]))
        top_title = titles[top_key]

    return RewatchStats(
        total_rewatches=len(rewatches),
        total_films=total_films,
        non_rewatches=total_films - len(rewatches),
        rewatch_percentage=percentage(len(rewatches), total_films),
        unique_films_rewatched=len(rewatch_counts),
        top_rewatched_title=top_title,
    )


@dataclass
class _FilmAggregate:
    """Accumulateur mutable local a top_watched_films."""

    title: str
    watch_count: int
    last_watched_date: str
    poster_url: Optional[str]
    tmdb_id: Optional[int]


def top_watched_films(
    entries: Sequence[EnrichedEntry], limit: int = DEFAULT_TOP_WATCHED_LIMIT
) -> tuple[TopWatchedFilm, ...]:
    """
    Films les plus vus.

    Chaque groupe conserve les metadonnees du visionnage le plus recent
    (comparaison lexicographique des dates yyyy-MM-dd). Tri par nombre de
    visionnages decroissant, puis date du dernier visionnage decroissante.

    Args:
        entries: Entrees enrichies.
        limit: Nombre maximum de films retournes.
    """
    grouped: dict[str, _FilmAggregate] = {}
    # Ordre (date, id) : a date egale, la derniere entree consignee l'emporte
    for item in sorted(entries, key=lambda e: (e.date_string, e.entry.id)):
        existing = grouped.get(item.film_key)
        if existing is None:
            grouped[item.film_key] = _FilmAggregate(
                title=item.entry.title,
                watch_count=1,
                last_watched_date=item.date_string,
                poster_url=item.entry.poster_url,
                tmdb_id=item.entry.tmdb_id,
            )
            continue

        existing.watch_count += 1
        if item.date_string >= existing.last_watched_date:
            existing.last_watched_date = item.date_string
            existing.poster_url = item.entry.poster_url or existing.poster_url

    ranked = sorted(
        grouped.items(),
        key=lambda kv: (-kv[1].watch_count, _descending(kv[1].last_watched_date), kv[0]),
    )
    return tuple(
        TopWatchedFilm(
            title=aggregate.title,
            watch_count=aggregate.watch_count,
            last_watched_date=aggregate.last_watched_date,
            poster_url=aggregate.poster_url,
            tmdb_id=aggregate.tmdb_id,
        )
        for _, aggregate in ranked[:limit]
    )


def _descending(date_string: str) -> int:
    """Cle de tri inversant l'ordre chronologique d'une date yyyy-MM-dd."""
    return -date.fromisoformat(date_string).toordinal()


def most_films_in_day(entries: Sequence[EnrichedEntry]) -> tuple[MostFilmsInDay, ...]:
    """Classement complet des jours : nombre decroissant, puis date decroissante."""
    counts = Counter(item.date_string for item in entries)
    ranked = sorted(counts.items(), key=lambda kv: (-kv[1], _descending(kv[0])))
    return tuple(MostFilmsInDay(watch_date=day, film_count=count) for day, count in ranked)


def highest_monthly_average(
    entries: Sequence[EnrichedEntry],
) -> tuple[MonthlyRatingAverage, ...]:
    """
    Classement des mois par note moyenne.

    Seuls les mois ayant au moins deux notes sont retenus. Departage :
    moyenne (a 1e-4 pres), puis nombre de notes, annee et mois decroissants.
    """
    grouped: dict[tuple[int, int], list[float]] = defaultdict(list)
    for item in entries:
        if item.entry.rating is not None:
            grouped[(item.watch_year, item.month)].append(item.entry.rating)

    averages = [
        MonthlyRatingAverage(
            year=year,
            month=month,
            month_name=month_label(month),
            average_rating=mean(ratings),
            film_count=len(ratings),
        )
        for (year, month), ratings in grouped.items()
        if len(ratings) >= MIN_RATINGS_PER_MONTH
    ]
    return tuple(
        sorted(
            averages,
            key=lambda m: (-round(m.average_rating, 4), -m.film_count, -m.year, -m.month),
        )
    )


def journey_stats(entries: Sequence[EnrichedEntry]) -> JourneyStats:
    """Indicateurs avances : jours charges, moyenne annuelle, films 5 etoiles, classements."""
    per_day = Counter(item.date_string for item in entries)
    watch_years = {item.watch_year for item in entries}
    five_star_keys = {
        item.film_key
        for item in entries
        if item.entry.rating is not None and item.entry.rating >= FIVE_STAR_THRESHOLD
    }

    return JourneyStats(
        days_with_two_plus_films=sum(1 for count in per_day.values() if count >= 2),
        average_films_per_year=len(entries) / len(watch_years) if watch_years else 0.0,
        unique_five_star_films=len(five_star_keys),
        most_films_in_day=most_films_in_day(entries),
        highest_monthly_average=highest_monthly_average(entries),
    )
