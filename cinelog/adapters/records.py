"""
Conversion des enregistrements bruts (dict JSON) en entites du domaine.

Partage par les adaptateurs fichier et HTTP. Les deux formats de champs
sont acceptes : noms du domaine (watch_date, detailed_rating, is_rewatch)
et noms de la table distante (watched_date, ratings100, rewatch).

Un enregistrement sans identifiant entier est ignore.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Optional

from loguru import logger

from cinelog.core.entities.location import Location
from cinelog.core.entities.watch_log import WatchLogEntry


def _first(record: Mapping[str, Any], *keys: str) -> Any:
    """Premiere valeur non nulle parmi plusieurs noms de champ."""
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def _as_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _as_str(value: Any) -> Optional[str]:
    """Chaine non vide, ou None (les nombres et objets sont ignores)."""
    if isinstance(value, str) and value.strip():
        return value
    return None


def _as_tags(value: Any) -> Optional[str]:
    """Tags sous forme de chaine ; une liste est jointe par des virgules."""
    if isinstance(value, (list, tuple)):
        value = ", ".join(str(tag) for tag in value if tag)
    return _as_str(value)


def _as_rewatch(value: Any) -> bool:
    """Drapeau de revisionnage : booleen ou chaine "yes"/"no"."""
    if isinstance(value, str):
        return value.strip().lower() in ("yes", "true", "1")
    return bool(value)


def _as_genres(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return tuple(part.strip() for part in value.split(",") if part.strip())
    if isinstance(value, Iterable):
        return tuple(str(genre) for genre in value if genre)
    return ()


def parse_watch_log_entry(record: Mapping[str, Any]) -> Optional[WatchLogEntry]:
    """
    Construit une WatchLogEntry depuis un enregistrement brut.

    Returns:
        L'entree, ou None si l'identifiant est absent ou invalide.
    """
    entry_id = _as_int(record.get("id"))
    if entry_id is None:
        return None

    runtime = _as_int(record.get("runtime"))
    return WatchLogEntry(
        id=entry_id,
        title=str(record.get("title") or ""),
        tmdb_id=_as_int(record.get("tmdb_id")),
        watch_date=_as_str(_first(record, "watch_date", "watched_date")),
        rating=_as_float(record.get("rating")),
        detailed_rating=_as_float(_first(record, "detailed_rating", "ratings100")),
        runtime=runtime if runtime and runtime > 0 else None,
        release_year=_as_int(record.get("release_year")),
        genres=_as_genres(record.get("genres")),
        director=_as_str(record.get("director")),
        tags=_as_tags(record.get("tags")),
        is_rewatch=_as_rewatch(_first(record, "is_rewatch", "rewatch")),
        location_id=_as_int(record.get("location_id")),
        poster_url=_as_str(record.get("poster_url")),
    )


def parse_watch_log(records: Iterable[Mapping[str, Any]]) -> list[WatchLogEntry]:
    """Convertit un lot d'enregistrements, en ignorant les invalides."""
    entries = []
    skipped = 0
    for record in records:
        entry = parse_watch_log_entry(record)
        if entry is None:
            skipped += 1
            continue
        entries.append(entry)
    if skipped:
        logger.debug("Enregistrements du journal ignores", skipped=skipped)
    return entries


def parse_location(record: Mapping[str, Any]) -> Optional[Location]:
    """
    Construit un Location depuis un enregistrement brut.

    Le nom de groupe est lu dans location_group_name, group_name, ou dans
    l'objet imbrique location_groups.name.
    """
    location_id = _as_int(record.get("id"))
    if location_id is None:
        return None

    group_name = _first(record, "group_name", "location_group_name")
    nested = record.get("location_groups")
    if group_name is None and isinstance(nested, Mapping):
        group_name = nested.get("name")

    return Location(
        id=location_id,
        display_name=str(record.get("display_name") or f"Location {location_id}"),
        latitude=_as_float(record.get("latitude")),
        longitude=_as_float(record.get("longitude")),
        group_name=group_name,
    )


def parse_locations(records: Iterable[Mapping[str, Any]]) -> dict[int, Location]:
    """Convertit un lot d'enregistrements de lieux en dictionnaire id -> Location."""
    locations = {}
    for record in records:
        location = parse_location(record)
        if location is not None:
            locations[location.id] = location
    return locations
