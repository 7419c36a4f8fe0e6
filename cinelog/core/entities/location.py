"""
Location directory entities.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Location:
    """
    A place where films are watched (cinema, home, ...).

    Attributes:
        id: Location identifier referenced by watch log entries
        display_name: Human readable name
        latitude: Latitude in degrees (None if not geocoded)
        longitude: Longitude in degrees (None if not geocoded)
        group_name: Name of the group this location belongs to
    """

    id: int
    display_name: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    group_name: Optional[str] = None

    @property
    def has_coordinates(self) -> bool:
        """True si le lieu peut etre place sur une carte."""
        return self.latitude is not None and self.longitude is not None
