"""
Watch log entities.

A watch log entry is one logged viewing event. The same film may appear
several times in the log (rewatches), each viewing being its own entry.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class WatchLogEntry:
    """
    One viewing event from the watch log.

    Entries are received already fetched and deduplicated at the source;
    the statistics engine never mutates them.

    Attributes:
        id: Log entry identifier (used for deterministic tie-breaks)
        title: Film title as logged
        tmdb_id: The Movie Database ID (preferred film identity)
        watch_date: Watch date as "yyyy-MM-dd" (None if unknown)
        rating: Star rating, 0.0 to 5.0 in 0.5 steps
        detailed_rating: Detailed rating, 0 to 100
        runtime: Runtime in minutes
        release_year: Release year of the film
        genres: Tuple of genre names
        director: Director name
        tags: Free-text, comma separated tag string
        is_rewatch: True if this viewing is flagged as a rewatch
        location_id: Reference into the location directory
        poster_url: Poster image URL (display metadata)
    """

    id: int
    title: str = ""
    tmdb_id: Optional[int] = None
    watch_date: Optional[str] = None
    rating: Optional[float] = None
    detailed_rating: Optional[float] = None
    runtime: Optional[int] = None
    release_year: Optional[int] = None
    genres: tuple[str, ...] = ()
    director: Optional[str] = None
    tags: Optional[str] = None
    is_rewatch: bool = False
    location_id: Optional[int] = None
    poster_url: Optional[str] = None
