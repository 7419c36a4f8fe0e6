"""
Normalisation des entrees du journal de visionnage.

Transforme les entrees brutes en entrees enrichies (champs calendaires,
cle de film unique) et partitionne le journal par type de film
(tous, longs metrages, courts metrages) a partir des tags.

Exemple :
    entries = normalize(raw_entries)
    feature_entries = normalize(filter_by_film_type(raw_entries, FilmTypeMode.FEATURE))
"""

import string
from collections.abc import Iterable
from datetime import date, datetime, timedelta
from typing import Optional

from cinelog.core.entities.watch_log import WatchLogEntry
from cinelog.core.value_objects.scope import FilmTypeMode
from cinelog.utils.constants import SHORT_FILM_TAG, WATCH_DATE_FORMAT

from .dataclasses import EnrichedEntry


def parse_watch_date(value: Optional[str | date]) -> Optional[date]:
    """
    Parse une date de visionnage au format yyyy-MM-dd.

    Args:
        value: Chaine "yyyy-MM-dd" (espaces toleres), date, ou None.

    Returns:
        La date, ou None si la valeur est absente ou non analysable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return datetime.strptime(text, WATCH_DATE_FORMAT).date()
    except ValueError:
        return None


def unique_film_key(entry: WatchLogEntry) -> str:
    """
    Calcule la cle d'identite d'un film.

    Priorite a l'ID TMDB ; a defaut, titre normalise + annee de sortie
    (-1 si inconnue). Un titre vide retombe sur l'id de l'entree.

    Args:
        entry: Entree du journal.

    Returns:
        Cle deterministe, ex: "tmdb:27205" ou "title:inception|year:2010".
    """
    if entry.tmdb_id is not None:
        return f"tmdb:{entry.tmdb_id}"

    normalized_title = entry.title.strip().lower()
    if not normalized_title:
        return f"id:{entry.id}"

    release_year = entry.release_year if entry.release_year is not None else -1
    return f"title:{normalized_title}|year:{release_year}"


def normalized_tags(tags: Optional[str]) -> set[str]:
    """
    Decoupe une chaine de tags en jetons normalises.

    Chaque tag (separe par des virgules) est rogne et passe en minuscules.
    Il est aussi redecoupe sur les espaces, chaque sous-jeton etant
    debarrasse de sa ponctuation en bordure.

    Args:
        tags: Chaine libre, ex: "Short, cinema night".

    Returns:
        Ensemble des jetons, ex: {"short", "cinema night", "cinema", "night"}.
    """
    if isinstance(tags, (list, tuple)):
        tags = ",".join(str(tag) for tag in tags)
    if not tags or not isinstance(tags, str):
        return set()

    results: set[str] = set()
    for raw_token in tags.split(","):
        token = raw_token.strip().lower()
        if not token:
            continue
        results.add(token)
        for nested in token.split():
            clean = nested.strip(string.punctuation)
            if clean:
                results.add(clean)
    return results


def has_short_tag(tags: Optional[str]) -> bool:
    """True si la chaine de tags designe un court metrage."""
    return SHORT_FILM_TAG in normalized_tags(tags)


def filter_by_film_type(
    entries: Iterable[WatchLogEntry], mode: FilmTypeMode
) -> list[WatchLogEntry]:
    """
    Restreint le journal au sous-ensemble demande.

    Args:
        entries: Journal brut complet.
        mode: ALL (tout), SHORT (tag "short") ou FEATURE (sans tag "short").

    Returns:
        Les entrees du sous-ensemble, dans l'ordre d'origine.
    """
    if mode is FilmTypeMode.ALL:
        return list(entries)
    if mode is FilmTypeMode.SHORT:
        return [entry for entry in entries if has_short_tag(entry.tags)]
    return [entry for entry in entries if not has_short_tag(entry.tags)]


def enrich(entry: WatchLogEntry) -> Optional[EnrichedEntry]:
    """Construit l'entree enrichie, ou None si la date est inexploitable."""
    watch_date = parse_watch_date(entry.watch_date)
    if watch_date is None:
        return None

    _, iso_week, iso_weekday = watch_date.isocalendar()
    return EnrichedEntry(
        entry=entry,
        date=watch_date,
        watch_year=watch_date.year,
        month=watch_date.month,
        weekday=iso_weekday,
        iso_week=iso_week,
        iso_week_start=watch_date - timedelta(days=iso_weekday - 1),
        date_string=watch_date.isoformat(),
        film_key=unique_film_key(entry),
    )


def normalize(entries: Iterable[WatchLogEntry]) -> tuple[EnrichedEntry, ...]:
    """
    Enrichit toutes les entrees datees du journal.

    Les entrees sans date analysable sont ignorees silencieusement : elles
    ne peuvent participer a aucune statistique basee sur les dates.
    L'ordre de sortie n'est pas garanti.

    Args:
        entries: Entrees brutes.

    Returns:
        Tuple immuable des entrees enrichies.
    """
    enriched = (enrich(entry) for entry in entries)
    return tuple(item for item in enriched if item is not None)
