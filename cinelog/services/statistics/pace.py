"""
Projection du rythme annuel de visionnage.

Construit la courbe cumulative mois par mois d'une annee, une courbe de
reference historique (cumul moyen a chaque mois sur les annees revolues),
et pour l'annee en cours deux projections de fin d'annee :
- lineaire : rythme mensuel moyen constant depuis le debut de l'annee
- saisonniere : le reste de l'annee suit la forme de la reference historique

Le mois en cours est compte au prorata des jours ecoules.
"""

import calendar
from collections.abc import Sequence
from datetime import date
from typing import Optional

from cinelog.utils.helpers import month_label, round_half_up

from .dataclasses import (
    FilmsPerMonth,
    MonthlyPacePoint,
    NoProjection,
    PaceProjection,
    YearlyPaceStats,
)

_MONTHS = range(1, 13)


def monthly_counts(per_month: Sequence[FilmsPerMonth], year: int) -> list[int]:
    """Nombre de visionnages de chaque mois (index 0 = janvier) d'une annee."""
    counts = [0] * 12
    for item in per_month:
        if item.year == year and 1 <= item.month <= 12:
            counts[item.month - 1] += item.film_count
    return counts


def _cumulate(values: Sequence[float]) -> list[float]:
    total = 0.0
    cumulative = []
    for value in values:
        total += value
        cumulative.append(total)
    return cumulative


def _points(cumulative: Sequence[float], months: int = 12) -> tuple[MonthlyPacePoint, ...]:
    """Convertit une courbe cumulative (flottante) en points mensuels arrondis."""
    points = []
    previous = 0
    for month in range(1, months + 1):
        value = round_half_up(cumulative[month - 1])
        points.append(
            MonthlyPacePoint(
                month=month,
                month_name=month_label(month),
                film_count=max(0, value - previous),
                cumulative_count=value,
            )
        )
        previous = value
    return tuple(points)


def historical_curve(
    per_month: Sequence[FilmsPerMonth], exclude_year: Optional[int] = None
) -> list[float]:
    """
    Cumul moyen a chaque mois, sur toutes les annees ayant des donnees.

    exclude_year retire une annee incomplete (l'annee en cours) du calcul.

    Returns:
        12 valeurs cumulatives, ou une liste vide sans annee de reference.
    """
    years = sorted({item.year for item in per_month if item.year != exclude_year})
    if not years:
        return []

    curves = [_cumulate(monthly_counts(per_month, year)) for year in years]
    return [sum(curve[index] for curve in curves) / len(curves) for index in range(12)]


def _linear_curve(
    cumulative: Sequence[float], current_month: int, elapsed: float
) -> list[float]:
    """Prolonge le cumul au rythme mensuel moyen observe."""
    cumulative_now = cumulative[current_month - 1]
    rate = cumulative_now / elapsed if elapsed > 0 else 0.0
    return [
        cumulative[month - 1] if month <= current_month
        else cumulative_now + rate * (month - elapsed)
        for month in _MONTHS
    ]


def _seasonal_curve(
    cumulative: Sequence[float],
    baseline: Sequence[float],
    current_month: int,
    fraction: float,
) -> list[float] | None:
    """
    Repartit le reste de l'annee selon la part historique de chaque mois.

    Le total annuel estime est le cumul actuel divise par la part historique
    deja ecoulee. Retourne None si la reference est inexploitable.
    """
    if not baseline or baseline[-1] <= 0:
        return None

    annual = baseline[-1]
    increments = [baseline[0]] + [baseline[i] - baseline[i - 1] for i in range(1, 12)]
    shares = [increment / annual for increment in increments]

    elapsed_share = sum(shares[: current_month - 1]) + shares[current_month - 1] * fraction
    if elapsed_share <= 0:
        return None

    cumulative_now = cumulative[current_month - 1]
    projected_annual = cumulative_now / elapsed_share

    curve = list(cumulative[:current_month])
    running = cumulative_now + projected_annual * shares[current_month - 1] * (1 - fraction)
    for month in range(current_month + 1, 13):
        running += projected_annual * shares[month - 1]
        curve.append(running)
    return curve


def yearly_pace(
    per_month: Sequence[FilmsPerMonth], year: int, today: date
) -> YearlyPaceStats:
    """
    Statistiques de rythme d'une annee selectionnee.

    Les projections ne sont produites que pour l'annee en cours ; une
    annee revolue n'expose que sa courbe reelle (NoProjection).

    Args:
        per_month: Visionnages par (annee, mois), toutes annees confondues.
        year: Annee selectionnee.
        today: Date du jour (determine l'annee et le mois en cours).

    Returns:
        YearlyPaceStats de l'annee.
    """
    is_current_year = year == today.year
    cumulative = _cumulate(monthly_counts(per_month, year))
    baseline = historical_curve(per_month, exclude_year=today.year)
    historical_average = _points(baseline) if baseline else ()

    if not is_current_year:
        return YearlyPaceStats(
            year=year,
            is_current_year=False,
            monthly_data=_points(cumulative),
            historical_average=historical_average,
            projection=NoProjection(),
        )

    current_month = today.month
    fraction = today.day / calendar.monthrange(year, current_month)[1]
    elapsed = (current_month - 1) + fraction

    linear = _linear_curve(cumulative, current_month, elapsed)
    seasonal = _seasonal_curve(cumulative, baseline, current_month, fraction) or linear

    linear_points = _points(linear)
    seasonal_points = _points(seasonal)

    return YearlyPaceStats(
        year=year,
        is_current_year=True,
        monthly_data=_points(cumulative, months=current_month),
        historical_average=historical_average,
        projection=PaceProjection(
            linear=linear_points,
            seasonal=seasonal_points,
            end_of_year_linear=linear_points[-1].cumulative_count,
            end_of_year_seasonal=seasonal_points[-1].cumulative_count,
        ),
    )
