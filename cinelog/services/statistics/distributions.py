"""
Distributions et statistiques descriptives du journal.

Chaque fonction est une agregation pure sur un ensemble d'entrees enrichies,
independante des autres : elles peuvent etre executees en parallele.
Les listes produites sont toujours triees explicitement.
"""

import math
from collections import Counter, defaultdict
from collections.abc import Sequence
from datetime import date

from cinelog.utils.constants import (
    DETAILED_RATING_MAX,
    DETAILED_RATING_MIN,
    FIVE_STAR_THRESHOLD,
    STAR_RATING_DOMAIN,
    WEEKDAY_NAMES,
)
from cinelog.utils.helpers import mean, median, month_label, percentage, round_half_up

from .dataclasses import (
    AverageRatingPerYear,
    DashboardStats,
    DayOfWeekBucket,
    DecadeBucket,
    DetailedRatingBucket,
    EnrichedEntry,
    FilmsPerMonth,
    FilmsPerYear,
    NoRatings,
    NoRuntimes,
    NoWatchSpan,
    NoYearRelease,
    RatingBucket,
    RatingStats,
    RatingSummary,
    ReleaseYearBucket,
    RuntimeExtreme,
    RuntimeStats,
    RuntimeSummary,
    WatchSpan,
    WatchSpanSummary,
    WeeklyFilms,
    YearReleaseStats,
    YearReleaseSummary,
)


def _chronological(entries: Sequence[EnrichedEntry]) -> list[EnrichedEntry]:
    """Trie les entrees par (date, id) pour des departages deterministes."""
    return sorted(entries, key=lambda e: (e.date, e.entry.id))


def rating_distribution(entries: Sequence[EnrichedEntry]) -> tuple[RatingBucket, ...]:
    """
    Histogramme des notes etoiles.

    Le domaine {0.5, 1.0, ..., 5.0} est toujours present, seaux vides a 0.
    Une note hors domaine (ex: 0.0) recoit son propre seau afin que la somme
    des seaux reste egale au nombre de notes.

    Returns:
        Seaux tries par valeur croissante.
    """
    ratings = [e.entry.rating for e in entries if e.entry.rating is not None]
    counts = Counter(ratings)
    total = len(ratings)

    values = set(STAR_RATING_DOMAIN) | set(counts)
    return tuple(
        RatingBucket(
            rating_value=value,
            count=counts.get(value, 0),
            percentage=percentage(counts.get(value, 0), total),
        )
        for value in sorted(values)
    )


def detailed_rating_distribution(
    entries: Sequence[EnrichedEntry],
) -> tuple[DetailedRatingBucket, ...]:
    """
    Histogramme des notes detaillees (0-100), une note par film.

    Seule la note detaillee la plus recente de chaque film est comptee :
    tri par (date desc, id desc), premiere occurrence par cle de film.
    La note est arrondie a l'entier le plus proche puis bornee a [0, 100].
    """
    counts = [0] * (DETAILED_RATING_MAX - DETAILED_RATING_MIN + 1)
    seen_keys: set[str] = set()

    for item in sorted(entries, key=lambda e: (e.date, e.entry.id), reverse=True):
        rating = item.entry.detailed_rating
        if rating is None or item.film_key in seen_keys:
            continue
        seen_keys.add(item.film_key)
        index = min(DETAILED_RATING_MAX, max(DETAILED_RATING_MIN, round_half_up(rating)))
        counts[index - DETAILED_RATING_MIN] += 1

    return tuple(
        DetailedRatingBucket(rating_value=DETAILED_RATING_MIN + offset, count=count)
        for offset, count in enumerate(counts)
    )


def films_by_decade(
    entries: Sequence[EnrichedEntry], today: date
) -> tuple[DecadeBucket, ...]:
    """
    Nombre de films par decennie de sortie.

    Le domaine s'etend de la premiere decennie peuplee jusqu'a la decennie
    courante, les decennies intermediaires vides etant a 0. Les entrees sans
    annee de sortie sont exclues.
    """
    release_years = [e.entry.release_year for e in entries if e.entry.release_year is not None]
    if not release_years:
        return ()

    counts = Counter((year // 10) * 10 for year in release_years)
    first_decade = min(counts)
    last_decade = max(max(counts), (today.year // 10) * 10)
    total = len(release_years)

    return tuple(
        DecadeBucket(
            decade=decade,
            count=counts.get(decade, 0),
            percentage=percentage(counts.get(decade, 0), total),
        )
        for decade in range(first_decade, last_decade + 1, 10)
    )


def films_by_release_year(
    entries: Sequence[EnrichedEntry],
) -> tuple[ReleaseYearBucket, ...]:
    """Nombre de films par annee de sortie presente (sans comblement)."""
    release_years = [e.entry.release_year for e in entries if e.entry.release_year is not None]
    counts = Counter(release_years)
    total = len(release_years)
    return tuple(
        ReleaseYearBucket(
            release_year=year,
            count=counts[year],
            percentage=percentage(counts[year], total),
        )
        for year in sorted(counts)
    )


def films_per_year(entries: Sequence[EnrichedEntry]) -> tuple[FilmsPerYear, ...]:
    """Nombre de visionnages et de films distincts par annee de visionnage."""
    grouped: dict[int, list[EnrichedEntry]] = defaultdict(list)
    for item in entries:
        grouped[item.watch_year].append(item)

    return tuple(
        FilmsPerYear(
            year=year,
            film_count=len(grouped[year]),
            unique_films=len({e.film_key for e in grouped[year]}),
        )
        for year in sorted(grouped)
    )


def films_per_month(entries: Sequence[EnrichedEntry]) -> tuple[FilmsPerMonth, ...]:
    """Nombre de visionnages et de films distincts par (annee, mois)."""
    grouped: dict[tuple[int, int], list[EnrichedEntry]] = defaultdict(list)
    for item in entries:
        grouped[(item.watch_year, item.month)].append(item)

    return tuple(
        FilmsPerMonth(
            year=year,
            month=month,
            month_name=month_label(month),
            film_count=len(grouped[(year, month)]),
            unique_films=len({e.film_key for e in grouped[(year, month)]}),
        )
        for year, month in sorted(grouped)
    )


def films_per_month_for_year(
    per_month: Sequence[FilmsPerMonth], year: int
) -> tuple[FilmsPerMonth, ...]:
    """Restreint la liste mensuelle a une annee (vue annuelle)."""
    return tuple(
        sorted((item for item in per_month if item.year == year), key=lambda m: m.month)
    )


def weekly_films(entries: Sequence[EnrichedEntry], year: int) -> tuple[WeeklyFilms, ...]:
    """
    Nombre de visionnages par semaine ISO de l'annee selectionnee.

    Les dates de debut et de fin sont la plus petite et la plus grande
    date canonique presente dans le groupe.
    """
    grouped: dict[int, list[EnrichedEntry]] = defaultdict(list)
    for item in entries:
        grouped[item.iso_week].append(item)

    weeks = []
    for week in sorted(grouped):
        date_strings = sorted(e.date_string for e in grouped[week])
        weeks.append(
            WeeklyFilms(
                year=year,
                week_number=week,
                week_start_date=date_strings[0],
                week_end_date=date_strings[-1],
                film_count=len(date_strings),
            )
        )
    return tuple(weeks)


def day_of_week_pattern(entries: Sequence[EnrichedEntry]) -> tuple[DayOfWeekBucket, ...]:
    """Sept seaux fixes (lundi a dimanche), toujours remplis."""
    counts = Counter(item.weekday for item in entries)
    total = len(entries)
    return tuple(
        DayOfWeekBucket(
            day_number=day,
            day_name=WEEKDAY_NAMES[day - 1],
            film_count=counts.get(day, 0),
            percentage=percentage(counts.get(day, 0), total),
        )
        for day in range(1, 8)
    )


def runtime_stats(entries: Sequence[EnrichedEntry]) -> RuntimeSummary:
    """
    Statistiques de duree.

    Les durees absentes ou non positives sont exclues. En cas d'egalite,
    le film le plus long/court retenu est le premier chronologiquement.
    """
    with_runtime = [
        item for item in _chronological(entries)
        if item.entry.runtime is not None and item.entry.runtime > 0
    ]
    if not with_runtime:
        return NoRuntimes()

    runtimes = [item.entry.runtime for item in with_runtime]
    longest = max(with_runtime, key=lambda e: e.entry.runtime)
    shortest = min(with_runtime, key=lambda e: e.entry.runtime)

    return RuntimeStats(
        total_minutes=sum(runtimes),
        average_minutes=mean(runtimes),
        median_minutes=median(runtimes),
        longest=RuntimeExtreme(title=longest.entry.title, minutes=longest.entry.runtime),
        shortest=RuntimeExtreme(title=shortest.entry.title, minutes=shortest.entry.runtime),
        film_count=len(runtimes),
    )


def unique_films_count(entries: Sequence[EnrichedEntry]) -> int:
    """Nombre de cles de films distinctes."""
    return len({item.film_key for item in entries})


def watch_span(entries: Sequence[EnrichedEntry]) -> WatchSpanSummary:
    """Premiere et derniere date de visionnage, et nombre de jours inclusif."""
    if not entries:
        return NoWatchSpan()

    first = min(item.date for item in entries)
    last = max(item.date for item in entries)
    return WatchSpan(
        first_watch_date=first.isoformat(),
        last_watch_date=last.isoformat(),
        total_days=(last - first).days + 1,
    )


def rating_stats(entries: Sequence[EnrichedEntry]) -> RatingSummary:
    """
    Statistiques descriptives des notes etoiles.

    Mode : valeur la plus frequente, la plus haute en cas d'egalite.
    Ecart-type : ecart-type de population.
    """
    ratings = sorted(e.entry.rating for e in entries if e.entry.rating is not None)
    if not ratings:
        return NoRatings()

    total = len(ratings)
    average = mean(ratings)
    counts = Counter(ratings)
    mode_rating = max(counts.items(), key=lambda kv: (kv[1], kv[0]))[0]
    variance = sum((value - average) ** 2 for value in ratings) / total
    five_star_count = sum(1 for value in ratings if value >= FIVE_STAR_THRESHOLD)

    return RatingStats(
        average_rating=average,
        median_rating=median(ratings),
        mode_rating=mode_rating,
        standard_deviation=math.sqrt(variance),
        total_rated=total,
        five_star_count=five_star_count,
        five_star_percentage=percentage(five_star_count, total),
    )


def _most_frequent(counts: Counter) -> str | int | None:
    """Cle la plus frequente, la plus petite en cas d'egalite."""
    if not counts:
        return None
    return min(counts.items(), key=lambda kv: (-kv[1], kv[0]))[0]


def dashboard_stats(entries: Sequence[EnrichedEntry], today: date) -> DashboardStats:
    """
    Resume du tableau de bord.

    Genre, realisateur et jour favoris : le plus frequent, le plus petit
    libelle (ou numero de jour) en cas d'egalite.
    """
    ratings = [e.entry.rating for e in entries if e.entry.rating is not None]

    genre_counts: Counter = Counter()
    director_counts: Counter = Counter()
    for item in entries:
        for genre in item.entry.genres:
            if genre.strip():
                genre_counts[genre.strip()] += 1
        director = (item.entry.director or "").strip()
        if director:
            director_counts[director] += 1

    favorite_day_number = _most_frequent(Counter(item.weekday for item in entries))

    return DashboardStats(
        total_films=len(entries),
        unique_films=unique_films_count(entries),
        average_rating=mean(ratings),
        films_this_year=sum(1 for item in entries if item.watch_year == today.year),
        top_genre=_most_frequent(genre_counts),
        top_director=_most_frequent(director_counts),
        favorite_day=WEEKDAY_NAMES[favorite_day_number - 1] if favorite_day_number else None,
    )


def year_release_stats(entries: Sequence[EnrichedEntry], year: int) -> YearReleaseSummary:
    """Part des films vus l'annee selectionnee qui sont sortis cette meme annee."""
    if not entries:
        return NoYearRelease()

    total = len(entries)
    from_year = sum(1 for item in entries if item.entry.release_year == year)
    other_years = total - from_year
    return YearReleaseStats(
        year=year,
        total_films=total,
        films_from_year=from_year,
        films_from_other_years=other_years,
        year_percentage=percentage(from_year, total),
        other_years_percentage=percentage(other_years, total),
    )


def average_star_ratings_per_year(
    entries: Sequence[EnrichedEntry],
) -> tuple[AverageRatingPerYear, ...]:
    """Note etoiles moyenne par annee de visionnage."""
    grouped: dict[int, list[float]] = defaultdict(list)
    for item in entries:
        if item.entry.rating is not None:
            grouped[item.watch_year].append(item.entry.rating)
    return tuple(
        AverageRatingPerYear(year=year, average_rating=mean(grouped[year]), film_count=len(grouped[year]))
        for year in sorted(grouped)
    )


def average_detailed_ratings_per_year(
    entries: Sequence[EnrichedEntry],
) -> tuple[AverageRatingPerYear, ...]:
    """Note detaillee moyenne par annee de visionnage."""
    grouped: dict[int, list[float]] = defaultdict(list)
    for item in entries:
        if item.entry.detailed_rating is not None:
            grouped[item.watch_year].append(item.entry.detailed_rating)
    return tuple(
        AverageRatingPerYear(year=year, average_rating=mean(grouped[year]), film_count=len(grouped[year]))
        for year in sorted(grouped)
    )
