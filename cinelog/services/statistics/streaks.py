"""
Detection des series de visionnage.

Une serie est une suite maximale d'unites calendaires consecutives
(jours ou semaines ISO) contenant chacune au moins un visionnage.
Rien n'est persiste : les series sont recalculees a partir de l'ensemble
des dates distinctes, donc independantes de l'ordre des entrees.
"""

from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from .dataclasses import (
    DailyStreakStats,
    DailyStreakSummary,
    EnrichedEntry,
    NoStreak,
    StreakRun,
    WeeklyStreakStats,
    WeeklyStreakSummary,
    WeekRun,
)

_ONE_DAY = timedelta(days=1)
_ONE_WEEK = timedelta(days=7)


@dataclass(frozen=True)
class _Window:
    """Fenetre [start, end] d'une serie de longueur length."""

    start: date
    end: date
    length: int


def _longest_window(units: Sequence[date], step: timedelta) -> _Window:
    """
    Plus longue serie d'unites consecutives (premiere trouvee en cas d'egalite).

    Args:
        units: Unites distinctes triees par ordre croissant (non vide).
        step: Ecart exact entre deux unites consecutives.
    """
    longest = _Window(start=units[0], end=units[0], length=1)
    run_start = units[0]
    run_length = 1

    for previous, current in zip(units, units[1:]):
        if current - previous == step:
            run_length += 1
        else:
            if run_length > longest.length:
                longest = _Window(start=run_start, end=previous, length=run_length)
            run_start = current
            run_length = 1

    if run_length > longest.length:
        longest = _Window(start=run_start, end=units[-1], length=run_length)
    return longest


def _trailing_window(units: Sequence[date], step: timedelta) -> _Window:
    """Serie se terminant a la derniere unite, en remontant le temps."""
    start = units[-1]
    length = 1
    for index in range(len(units) - 1, 0, -1):
        if units[index] - units[index - 1] != step:
            break
        length += 1
        start = units[index - 1]
    return _Window(start=start, end=units[-1], length=length)


def _boundary_films(
    entries: Sequence[EnrichedEntry],
) -> tuple[dict[date, EnrichedEntry], dict[date, EnrichedEntry]]:
    """Premier (id min) et dernier (id max) visionnage de chaque jour."""
    by_date: dict[date, list[EnrichedEntry]] = defaultdict(list)
    for item in entries:
        by_date[item.date].append(item)

    first = {day: min(items, key=lambda e: e.entry.id) for day, items in by_date.items()}
    last = {day: max(items, key=lambda e: e.entry.id) for day, items in by_date.items()}
    return first, last


def _to_run(
    window: _Window,
    first_of_day: dict[date, EnrichedEntry],
    last_of_day: dict[date, EnrichedEntry],
) -> StreakRun:
    start_item: Optional[EnrichedEntry] = first_of_day.get(window.start)
    end_item: Optional[EnrichedEntry] = last_of_day.get(window.end)
    return StreakRun(
        length=window.length,
        start_date=window.start.isoformat(),
        end_date=window.end.isoformat(),
        start_title=start_item.entry.title if start_item else None,
        start_poster=start_item.entry.poster_url if start_item else None,
        end_title=end_item.entry.title if end_item else None,
        end_poster=end_item.entry.poster_url if end_item else None,
    )


def daily_streaks(entries: Sequence[EnrichedEntry], today: date) -> DailyStreakSummary:
    """
    Series de jours consecutifs.

    La serie courante est celle qui se termine au dernier jour consigne.
    Elle est active si ce jour est aujourd'hui ou hier
    (aujourd'hui - dernier jour <= 1 jour).

    Args:
        entries: Entrees enrichies (ordre quelconque).
        today: Date du jour.

    Returns:
        DailyStreakStats, ou NoStreak si aucune entree.
    """
    days = sorted({item.date for item in entries})
    if not days:
        return NoStreak()

    first_of_day, last_of_day = _boundary_films(entries)
    longest = _longest_window(days, _ONE_DAY)
    current = _trailing_window(days, _ONE_DAY)

    return DailyStreakStats(
        longest=_to_run(longest, first_of_day, last_of_day),
        current=_to_run(current, first_of_day, last_of_day),
        is_current_active=(today - days[-1]) <= _ONE_DAY,
    )


def iso_week_start(day: date) -> date:
    """Lundi de la semaine ISO contenant day."""
    return day - timedelta(days=day.isoweekday() - 1)


def weekly_streaks(entries: Sequence[EnrichedEntry], today: date) -> WeeklyStreakSummary:
    """
    Series de semaines ISO consecutives.

    La continuite est definie par exactement 7 jours entre deux lundis.
    La serie courante est active si la derniere semaine consignee est la
    semaine ISO courante ou la precedente.

    Args:
        entries: Entrees enrichies (ordre quelconque).
        today: Date du jour.

    Returns:
        WeeklyStreakStats, ou NoStreak si aucune entree.
    """
    weeks = sorted({item.iso_week_start for item in entries})
    if not weeks:
        return NoStreak()

    longest = _longest_window(weeks, _ONE_WEEK)
    current = _trailing_window(weeks, _ONE_WEEK)

    return WeeklyStreakStats(
        longest=WeekRun(
            length=longest.length,
            start_week=longest.start.isoformat(),
            end_week=longest.end.isoformat(),
        ),
        current=WeekRun(
            length=current.length,
            start_week=current.start.isoformat(),
            end_week=current.end.isoformat(),
        ),
        is_current_active=(iso_week_start(today) - weeks[-1]) <= _ONE_WEEK,
    )
