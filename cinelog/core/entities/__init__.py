"""
Business entities representing core domain concepts.

Entities are read-only records received from the outside world:
the watch log and the location directory.

Exports:
- WatchLogEntry: One logged viewing of a film
- Location: A place from the location directory
"""

from cinelog.core.entities.location import Location
from cinelog.core.entities.watch_log import WatchLogEntry

__all__ = [
    "WatchLogEntry",
    "Location",
]
