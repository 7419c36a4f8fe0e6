"""
Objets valeur pour le scope des statistiques.

Un scope combine une selection d'annee (une annee precise ou all-time)
et un filtre de sous-ensemble. Les statistiques sont calculees et mises
en cache par scope.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FilmTypeMode(str, Enum):
    """Filtre de sous-ensemble applique au journal avant normalisation."""

    ALL = "all"
    FEATURE = "feature"
    SHORT = "short"

    @property
    def label(self) -> str:
        """Libelle lisible du filtre."""
        return {
            FilmTypeMode.ALL: "All",
            FilmTypeMode.FEATURE: "Feature Films",
            FilmTypeMode.SHORT: "Short Films",
        }[self]


@dataclass(frozen=True)
class StatisticsScope:
    """
    Scope d'un snapshot de statistiques.

    Attributs :
        year : Annee selectionnee, ou None pour all-time
        mode : Filtre de sous-ensemble
    """

    year: Optional[int] = None
    mode: FilmTypeMode = FilmTypeMode.ALL

    @property
    def is_all_time(self) -> bool:
        """True si aucune annee n'est selectionnee."""
        return self.year is None

    @property
    def cache_key(self) -> str:
        """Cle de cache stable, ex: "2024-feature" ou "all-time-all"."""
        year_key = str(self.year) if self.year is not None else "all-time"
        return f"{year_key}-{self.mode.value}"
