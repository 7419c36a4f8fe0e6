"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- FilmTypeMode : Filtre de sous-ensemble (tous, longs metrages, courts metrages)
- StatisticsScope : Scope de calcul (annee ou all-time) x filtre
"""

from cinelog.core.value_objects.scope import FilmTypeMode, StatisticsScope

__all__ = [
    "FilmTypeMode",
    "StatisticsScope",
]
