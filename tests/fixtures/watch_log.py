"""
Constructeurs d'entrees de journal pour les tests.

entry() cree une WatchLogEntry avec un id auto-incremente ;
enriched() la normalise directement.
"""

import itertools

from cinelog.core.entities.watch_log import WatchLogEntry
from cinelog.services.statistics.dataclasses import EnrichedEntry
from cinelog.services.statistics.normalizer import enrich

_ids = itertools.count(1)


def entry(watch_date: str | None = "2024-01-01", **kwargs) -> WatchLogEntry:
    """WatchLogEntry de test (id unique si non fourni)."""
    kwargs.setdefault("id", next(_ids))
    kwargs.setdefault("title", f"Film {kwargs['id']}")
    return WatchLogEntry(watch_date=watch_date, **kwargs)


def enriched(watch_date: str = "2024-01-01", **kwargs) -> EnrichedEntry:
    """EnrichedEntry de test (la date doit etre valide)."""
    item = enrich(entry(watch_date, **kwargs))
    assert item is not None
    return item


# Enregistrements bruts au format de la table distante
DIARY_RECORDS = [
    {
        "id": 1,
        "title": "Heat",
        "tmdb_id": 949,
        "watched_date": "2024-03-02",
        "rating": 4.5,
        "ratings100": 91,
        "runtime": 170,
        "release_year": 1995,
        "genres": ["Crime", "Drama"],
        "director": "Michael Mann",
        "tags": "cinema, 35mm",
        "rewatch": "yes",
        "location_id": 10,
        "poster_url": "https://img.example.org/heat.jpg",
    },
    {
        "id": 2,
        "title": "La Jetée",
        "watched_date": "2024-03-03",
        "rating": 4.0,
        "runtime": 28,
        "release_year": 1962,
        "tags": "Short",
        "rewatch": False,
    },
    {"title": "Sans identifiant", "watched_date": "2024-03-04"},
]

LOCATION_RECORDS = [
    {
        "id": 10,
        "display_name": "Le Champo",
        "latitude": 48.8499,
        "longitude": 2.3431,
        "location_groups": {"name": "Paris"},
    },
    {"id": 11, "display_name": "Salon", "location_group_name": None},
]
