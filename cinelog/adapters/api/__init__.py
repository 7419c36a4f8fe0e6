"""
Adaptateurs HTTP du journal et de l'annuaire des lieux.

Exports :
- HttpWatchLogSource : Journal complet, recupere par lots
- HttpLocationDirectory : Annuaire des lieux avec cache disque
- ResponseCache : Cache disque asynchrone (diskcache)
"""

from cinelog.adapters.api.cache import ResponseCache
from cinelog.adapters.api.location_client import HttpLocationDirectory
from cinelog.adapters.api.watch_log_client import HttpWatchLogSource

__all__ = [
    "HttpLocationDirectory",
    "HttpWatchLogSource",
    "ResponseCache",
]
