"""
Agregation des visionnages par lieu.

Compte les visionnages par identifiant de lieu, resout les identifiants via
l'annuaire des lieux (un seul appel groupe) puis produit les points de carte
et les comptes par lieu et par groupe.
"""

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence

from loguru import logger

from cinelog.core.entities.location import Location
from cinelog.core.ports.location_directory import ILocationDirectory
from cinelog.utils.constants import UNGROUPED_LABEL

from .dataclasses import EnrichedEntry, LocationCount, LocationMapPoint, LocationStats


def count_by_location(entries: Sequence[EnrichedEntry]) -> Counter:
    """Nombre de visionnages par identifiant de lieu (entrees sans lieu ignorees)."""
    return Counter(
        item.entry.location_id for item in entries if item.entry.location_id is not None
    )


def _sorted_counts(rows: Iterable[tuple[str, int]]) -> tuple[LocationCount, ...]:
    """Tri par nombre decroissant puis libelle croissant (insensible a la casse)."""
    ranked = sorted(rows, key=lambda kv: (-kv[1], kv[0].casefold(), kv[0]))
    return tuple(LocationCount(label=label, entry_count=count) for label, count in ranked)


def build_location_stats(
    counts: Mapping[int, int], locations: Mapping[int, Location]
) -> LocationStats:
    """
    Construit les statistiques de lieux a partir des comptes et de l'annuaire.

    Un lieu introuvable dans l'annuaire est exclu de la carte mais compte
    dans les totaux (libelle "Location <id>", groupe "Ungrouped").

    Args:
        counts: Nombre de visionnages par identifiant de lieu.
        locations: Lieux resolus par l'annuaire.
    """
    specific: list[tuple[str, int]] = []
    grouped: Counter = Counter()
    map_points = []

    for location_id, count in counts.items():
        location = locations.get(location_id)
        label = location.display_name if location else f"Location {location_id}"
        specific.append((label, count))

        group_name = (location.group_name or "").strip() if location else ""
        grouped[group_name or UNGROUPED_LABEL] += count

        if location is not None and location.has_coordinates:
            map_points.append(
                LocationMapPoint(
                    location_id=location_id,
                    location_name=location.display_name,
                    latitude=location.latitude,
                    longitude=location.longitude,
                    entry_count=count,
                )
            )

    map_points.sort(key=lambda point: (-point.entry_count, point.location_id))
    return LocationStats(
        map_points=tuple(map_points),
        specific_counts=_sorted_counts(specific),
        group_counts=_sorted_counts(grouped.items()),
    )


async def location_statistics(
    entries: Sequence[EnrichedEntry], directory: ILocationDirectory
) -> LocationStats:
    """
    Statistiques de lieux d'un ensemble d'entrees.

    Seul point de suspension du calcul d'un snapshot : la resolution groupee
    des identifiants distincts. Les erreurs de l'annuaire sont propagees.
    """
    counts = count_by_location(entries)
    if not counts:
        return LocationStats()

    locations = await directory.get_locations(set(counts))
    missing = set(counts) - set(locations)
    if missing:
        logger.debug("Lieux introuvables dans l'annuaire", missing=sorted(missing))
    return build_location_stats(counts, locations)
