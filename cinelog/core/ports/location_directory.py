"""
Interface port pour l'annuaire des lieux.

C'est le seul collaborateur externe appele pendant le calcul d'un snapshot.
"""

from abc import ABC, abstractmethod

from cinelog.core.entities.location import Location


class ILocationDirectory(ABC):
    """
    Interface de resolution des lieux par identifiant.

    Un identifiant inconnu est simplement absent du resultat.
    Les implementations levent LocationDirectoryUnavailableError
    si l'annuaire est indisponible.
    """

    @abstractmethod
    async def get_locations(self, location_ids: set[int]) -> dict[int, Location]:
        """
        Resout un lot d'identifiants de lieux.

        Args :
            location_ids : Ensemble des identifiants distincts a resoudre

        Retourne :
            Dictionnaire id -> Location pour les lieux trouves
        """
        ...

    async def close(self) -> None:
        """Libere les ressources de l'adaptateur (aucune par defaut)."""
