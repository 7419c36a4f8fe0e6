"""
Interfaces ports (abstractions) pour l'architecture hexagonale.

Exports :
- IWatchLogSource : Fournisseur du journal de visionnage brut
- ILocationDirectory : Annuaire des lieux (resolution groupee par id)
"""

from cinelog.core.ports.location_directory import ILocationDirectory
from cinelog.core.ports.watch_log_source import IWatchLogSource

__all__ = [
    "IWatchLogSource",
    "ILocationDirectory",
]
