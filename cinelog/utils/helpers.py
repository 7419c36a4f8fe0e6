"""
Fonctions d'aide partagees par les calculs statistiques.

Toutes les fonctions sont totales : une division par zero (ensemble vide)
produit 0.0 au lieu de lever une exception.
"""

from collections.abc import Sequence

from cinelog.utils.constants import MONTH_SHORT_LABELS


def month_label(month: int) -> str:
    """Retourne le libelle court d'un mois (1-12), ou "M<n>" hors domaine."""
    if 1 <= month <= 12:
        return MONTH_SHORT_LABELS[month - 1]
    return f"M{month}"


def percentage(part: int | float, total: int | float) -> float:
    """Pourcentage de part sur total, 0.0 si total est nul."""
    if not total:
        return 0.0
    return (part / total) * 100.0


def mean(values: Sequence[float]) -> float:
    """Moyenne arithmetique, 0.0 pour une sequence vide."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def median(values: Sequence[float]) -> float:
    """
    Mediane d'une sequence de valeurs.

    Pour un nombre pair de valeurs, retourne la moyenne des deux valeurs
    centrales. Retourne 0.0 pour une sequence vide.
    """
    if not values:
        return 0.0
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2.0
    return float(ordered[mid])


def round_half_up(value: float) -> int:
    """Arrondi a l'entier le plus proche, les demis vers le haut (2.5 -> 3)."""
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)
