"""
Dataclasses des resultats statistiques.

Definit l'entree enrichie interne, les resultats de chaque categorie de
statistique et le snapshot final. Toutes les structures sont immuables
(frozen, tuples) : un snapshot publie n'est jamais modifie.

Les categories dont la valeur peut etre absente sont des unions etiquetees
avec une variante vide explicite (NoRatings, NoRuntimes, NoStreak, ...)
plutot que None.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Union

from cinelog.core.entities.watch_log import WatchLogEntry
from cinelog.core.value_objects.scope import StatisticsScope


# ====================
# Entree enrichie
# ====================


@dataclass(frozen=True)
class EnrichedEntry:
    """
    Entree du journal avec ses champs calendaires precalcules.

    Construite une fois par chargement, jamais modifiee.
    """

    entry: WatchLogEntry
    date: date
    watch_year: int
    month: int
    weekday: int  # 1 = lundi ... 7 = dimanche
    iso_week: int
    iso_week_start: date
    date_string: str
    film_key: str


# ====================
# Distributions
# ====================


@dataclass(frozen=True)
class RatingBucket:
    """Seau de l'histogramme des notes etoiles."""

    rating_value: float
    count: int
    percentage: float


@dataclass(frozen=True)
class DetailedRatingBucket:
    """Seau de l'histogramme des notes detaillees (0-100)."""

    rating_value: int
    count: int


@dataclass(frozen=True)
class DecadeBucket:
    """Nombre de films par decennie de sortie."""

    decade: int
    count: int
    percentage: float


@dataclass(frozen=True)
class ReleaseYearBucket:
    """Nombre de films par annee de sortie."""

    release_year: int
    count: int
    percentage: float


@dataclass(frozen=True)
class FilmsPerYear:
    """Nombre de visionnages et de films distincts par annee de visionnage."""

    year: int
    film_count: int
    unique_films: int


@dataclass(frozen=True)
class FilmsPerMonth:
    """Nombre de visionnages et de films distincts par mois de visionnage."""

    year: int
    month: int
    month_name: str
    film_count: int
    unique_films: int


@dataclass(frozen=True)
class WeeklyFilms:
    """Nombre de visionnages d'une semaine ISO de l'annee selectionnee."""

    year: int
    week_number: int
    week_start_date: str
    week_end_date: str
    film_count: int


@dataclass(frozen=True)
class DayOfWeekBucket:
    """Nombre de visionnages par jour de la semaine (1 = lundi)."""

    day_number: int
    day_name: str
    film_count: int
    percentage: float


@dataclass(frozen=True)
class RuntimeExtreme:
    """Film le plus long ou le plus court."""

    title: str
    minutes: int


@dataclass(frozen=True)
class RuntimeStats:
    """Statistiques de duree (minutes) sur les entrees ayant une duree positive."""

    total_minutes: int
    average_minutes: float
    median_minutes: float
    longest: RuntimeExtreme
    shortest: RuntimeExtreme
    film_count: int


@dataclass(frozen=True)
class NoRuntimes:
    """Aucune entree avec une duree exploitable."""

    total_minutes: int = 0
    film_count: int = 0


@dataclass(frozen=True)
class WatchSpan:
    """Premiere et derniere date de visionnage du scope."""

    first_watch_date: str
    last_watch_date: str
    total_days: int


@dataclass(frozen=True)
class NoWatchSpan:
    """Aucun visionnage date dans le scope."""

    total_days: int = 0


@dataclass(frozen=True)
class RatingStats:
    """Statistiques descriptives des notes etoiles."""

    average_rating: float
    median_rating: float
    mode_rating: float
    standard_deviation: float
    total_rated: int
    five_star_count: int
    five_star_percentage: float


@dataclass(frozen=True)
class NoRatings:
    """Aucune note etoile dans le scope."""

    total_rated: int = 0


@dataclass(frozen=True)
class DashboardStats:
    """Resume affiche en tete du tableau de bord."""

    total_films: int
    unique_films: int
    average_rating: float
    films_this_year: int
    top_genre: Optional[str] = None
    top_director: Optional[str] = None
    favorite_day: Optional[str] = None


@dataclass(frozen=True)
class YearReleaseStats:
    """Part des films vus sortis l'annee selectionnee."""

    year: int
    total_films: int
    films_from_year: int
    films_from_other_years: int
    year_percentage: float
    other_years_percentage: float


@dataclass(frozen=True)
class NoYearRelease:
    """Statistique non applicable (scope all-time)."""


@dataclass(frozen=True)
class AverageRatingPerYear:
    """Note moyenne par annee de visionnage."""

    year: int
    average_rating: float
    film_count: int


# ====================
# Series
# ====================


@dataclass(frozen=True)
class StreakRun:
    """
    Serie de jours consecutifs.

    Les films de debut et de fin servent a l'affichage : premier film
    consigne le jour de debut (id le plus petit) et dernier film consigne
    le jour de fin (id le plus grand).
    """

    length: int
    start_date: str
    end_date: str
    start_title: Optional[str] = None
    start_poster: Optional[str] = None
    end_title: Optional[str] = None
    end_poster: Optional[str] = None


@dataclass(frozen=True)
class DailyStreakStats:
    """Series quotidiennes : la plus longue et la courante."""

    longest: StreakRun
    current: StreakRun
    is_current_active: bool

    @property
    def longest_length(self) -> int:
        return self.longest.length

    @property
    def current_length(self) -> int:
        return self.current.length


@dataclass(frozen=True)
class WeekRun:
    """Serie de semaines ISO consecutives (dates = lundis)."""

    length: int
    start_week: str
    end_week: str


@dataclass(frozen=True)
class WeeklyStreakStats:
    """Series hebdomadaires : la plus longue et la courante."""

    longest: WeekRun
    current: WeekRun
    is_current_active: bool

    @property
    def longest_length(self) -> int:
        return self.longest.length

    @property
    def current_length(self) -> int:
        return self.current.length


@dataclass(frozen=True)
class NoStreak:
    """Aucune date consignee : series nulles et inactives."""

    longest_length: int = 0
    current_length: int = 0
    is_current_active: bool = False


# ====================
# Rythme annuel
# ====================


@dataclass(frozen=True)
class MonthlyPacePoint:
    """Point mensuel d'une courbe cumulative."""

    month: int
    month_name: str
    film_count: int
    cumulative_count: int


@dataclass(frozen=True)
class PaceProjection:
    """Projections de fin d'annee (annee en cours uniquement)."""

    linear: tuple[MonthlyPacePoint, ...]
    seasonal: tuple[MonthlyPacePoint, ...]
    end_of_year_linear: int
    end_of_year_seasonal: int


@dataclass(frozen=True)
class NoProjection:
    """Annee revolue : seule la courbe reelle est exposee."""


@dataclass(frozen=True)
class YearlyPaceStats:
    """Courbe cumulative d'une annee, reference historique et projections."""

    year: int
    is_current_year: bool
    monthly_data: tuple[MonthlyPacePoint, ...]
    historical_average: tuple[MonthlyPacePoint, ...]
    projection: Union[PaceProjection, NoProjection] = NoProjection()


@dataclass(frozen=True)
class NoPace:
    """Rythme non applicable (scope all-time)."""


# ====================
# Revisionnages et classements
# ====================


@dataclass(frozen=True)
class RewatchStats:
    """Statistiques de revisionnage."""

    total_rewatches: int = 0
    total_films: int = 0
    non_rewatches: int = 0
    rewatch_percentage: float = 0.0
    unique_films_rewatched: int = 0
    top_rewatched_title: Optional[str] = None


@dataclass(frozen=True)
class TopWatchedFilm:
    """Film parmi les plus vus, avec les metadonnees du visionnage le plus recent."""

    title: str
    watch_count: int
    last_watched_date: str
    poster_url: Optional[str] = None
    tmdb_id: Optional[int] = None


@dataclass(frozen=True)
class MostFilmsInDay:
    """Nombre de films vus un jour donne."""

    watch_date: str
    film_count: int


@dataclass(frozen=True)
class MonthlyRatingAverage:
    """Note moyenne d'un mois ayant au moins deux notes."""

    year: int
    month: int
    month_name: str
    average_rating: float
    film_count: int


@dataclass(frozen=True)
class JourneyStats:
    """Indicateurs avances du parcours de visionnage."""

    days_with_two_plus_films: int = 0
    average_films_per_year: float = 0.0
    unique_five_star_films: int = 0
    most_films_in_day: tuple[MostFilmsInDay, ...] = ()
    highest_monthly_average: tuple[MonthlyRatingAverage, ...] = ()


# ====================
# Lieux
# ====================


@dataclass(frozen=True)
class LocationMapPoint:
    """Lieu geolocalise avec son nombre de visionnages."""

    location_id: int
    location_name: str
    latitude: float
    longitude: float
    entry_count: int


@dataclass(frozen=True)
class LocationCount:
    """Nombre de visionnages par lieu ou par groupe de lieux."""

    label: str
    entry_count: int


@dataclass(frozen=True)
class LocationStats:
    """Statistiques de lieux : points de carte, comptes par lieu et par groupe."""

    map_points: tuple[LocationMapPoint, ...] = ()
    specific_counts: tuple[LocationCount, ...] = ()
    group_counts: tuple[LocationCount, ...] = ()


# ====================
# Unions etiquetees
# ====================

RuntimeSummary = Union[RuntimeStats, NoRuntimes]
WatchSpanSummary = Union[WatchSpan, NoWatchSpan]
RatingSummary = Union[RatingStats, NoRatings]
DailyStreakSummary = Union[DailyStreakStats, NoStreak]
WeeklyStreakSummary = Union[WeeklyStreakStats, NoStreak]
PaceSummary = Union[YearlyPaceStats, NoPace]
YearReleaseSummary = Union[YearReleaseStats, NoYearRelease]


# ====================
# Snapshot
# ====================


@dataclass(frozen=True)
class StatisticsSnapshot:
    """
    Ensemble immuable et coherent de toutes les statistiques d'un scope.

    Tous les champs sont calcules a partir du meme jeu d'entrees, au meme
    instant. Les consommateurs ne lisent que des snapshots.
    """

    scope: StatisticsScope
    generated_at: datetime
    dashboard: DashboardStats
    rating_distribution: tuple[RatingBucket, ...] = ()
    detailed_rating_distribution: tuple[DetailedRatingBucket, ...] = ()
    films_by_decade: tuple[DecadeBucket, ...] = ()
    films_by_release_year: tuple[ReleaseYearBucket, ...] = ()
    films_per_year: tuple[FilmsPerYear, ...] = ()
    films_per_month: tuple[FilmsPerMonth, ...] = ()
    all_films_per_month: tuple[FilmsPerMonth, ...] = ()
    weekly_films: tuple[WeeklyFilms, ...] = ()
    day_of_week: tuple[DayOfWeekBucket, ...] = ()
    runtime: RuntimeSummary = NoRuntimes()
    unique_films_count: int = 0
    watch_span: WatchSpanSummary = NoWatchSpan()
    rating_stats: RatingSummary = NoRatings()
    rewatch: RewatchStats = field(default_factory=RewatchStats)
    daily_streak: DailyStreakSummary = NoStreak()
    weekly_streak: WeeklyStreakSummary = NoStreak()
    year_release: YearReleaseSummary = NoYearRelease()
    top_watched: tuple[TopWatchedFilm, ...] = ()
    journey: JourneyStats = field(default_factory=JourneyStats)
    average_star_ratings_per_year: tuple[AverageRatingPerYear, ...] = ()
    average_detailed_ratings_per_year: tuple[AverageRatingPerYear, ...] = ()
    pace: PaceSummary = NoPace()
    locations: LocationStats = field(default_factory=LocationStats)

    @property
    def is_empty(self) -> bool:
        """True si le snapshot ne contient aucun visionnage."""
        return self.dashboard.total_films == 0

    @classmethod
    def empty(cls, scope: StatisticsScope) -> "StatisticsSnapshot":
        """
        Snapshot vide (tous les compteurs a zero).

        Sert de repli quand aucun snapshot connu n'est disponible.
        """
        return cls(
            scope=scope,
            generated_at=datetime.now(),
            dashboard=DashboardStats(
                total_films=0,
                unique_films=0,
                average_rating=0.0,
                films_this_year=0,
            ),
        )
