"""
Commandes CLI des statistiques (stats, streaks, pace, years).

Chaque commande calcule (ou relit depuis le cache) le snapshot d'un scope
puis l'affiche sous forme de tableaux Rich. Une source indisponible ne fait
pas echouer la commande : le dernier snapshot connu, ou un snapshot vide,
est affiche.
"""

import asyncio
from datetime import date
from typing import Annotated, Optional

import typer
from loguru import logger
from rich.table import Table

from cinelog.adapters.cli.helpers import console, suppress_loguru, with_container
from cinelog.core.exceptions import StatisticsError
from cinelog.core.value_objects.scope import FilmTypeMode, StatisticsScope
from cinelog.services.statistics.dataclasses import (
    DailyStreakStats,
    PaceProjection,
    RatingStats,
    RuntimeStats,
    StatisticsSnapshot,
    WatchSpan,
    WeeklyStreakStats,
    YearlyPaceStats,
    YearReleaseStats,
)

ModeOption = Annotated[
    FilmTypeMode,
    typer.Option("--mode", "-m", help="Filtre: all, feature ou short"),
]
RefreshOption = Annotated[
    bool,
    typer.Option("--refresh", "-r", help="Ignore le cache et recharge le journal"),
]


# ====================
# Rendu
# ====================


def _key_value_table(title: str, rows: list[tuple[str, str]]) -> Table:
    table = Table(title=title, show_header=False, title_justify="left")
    table.add_column("Indicateur", style="cyan")
    table.add_column("Valeur", justify="right")
    for label, value in rows:
        table.add_row(label, value)
    return table


def render_overview(snapshot: StatisticsSnapshot) -> None:
    """Affiche le tableau de bord et les statistiques generales."""
    dashboard = snapshot.dashboard
    scope = snapshot.scope
    title = "All time" if scope.is_all_time else str(scope.year)

    rows = [
        ("Films vus", str(dashboard.total_films)),
        ("Films uniques", str(dashboard.unique_films)),
        ("Note moyenne", f"{dashboard.average_rating:.2f}"),
        ("Films cette annee", str(dashboard.films_this_year)),
        ("Genre favori", dashboard.top_genre or "-"),
        ("Realisateur favori", dashboard.top_director or "-"),
        ("Jour favori", dashboard.favorite_day or "-"),
        ("Revisionnages", f"{snapshot.rewatch.total_rewatches} ({snapshot.rewatch.rewatch_percentage:.1f}%)"),
    ]
    if isinstance(snapshot.rating_stats, RatingStats):
        ratings = snapshot.rating_stats
        rows += [
            ("Note mediane", f"{ratings.median_rating:.1f}"),
            ("Note la plus frequente", f"{ratings.mode_rating:.1f}"),
            ("Films 5 etoiles", f"{ratings.five_star_count} ({ratings.five_star_percentage:.1f}%)"),
        ]
    if isinstance(snapshot.runtime, RuntimeStats):
        runtime = snapshot.runtime
        rows += [
            ("Duree totale", f"{runtime.total_minutes // 60} h {runtime.total_minutes % 60} min"),
            ("Plus long", f"{runtime.longest.title} ({runtime.longest.minutes} min)"),
            ("Plus court", f"{runtime.shortest.title} ({runtime.shortest.minutes} min)"),
        ]
    if isinstance(snapshot.watch_span, WatchSpan):
        span = snapshot.watch_span
        rows.append(("Periode", f"{span.first_watch_date} -> {span.last_watch_date}"))
    if isinstance(snapshot.year_release, YearReleaseStats):
        release = snapshot.year_release
        rows.append((f"Sortis en {release.year}", f"{release.films_from_year} ({release.year_percentage:.1f}%)"))

    console.print(_key_value_table(f"Statistiques - {title} ({scope.mode.label})", rows))

    if snapshot.rating_distribution:
        table = Table(title="Notes", title_justify="left")
        table.add_column("Note", justify="right")
        table.add_column("Films", justify="right")
        table.add_column("%", justify="right")
        for bucket in snapshot.rating_distribution:
            table.add_row(f"{bucket.rating_value:.1f}", str(bucket.count), f"{bucket.percentage:.1f}")
        console.print(table)

    if snapshot.top_watched:
        table = Table(title="Les plus vus", title_justify="left")
        table.add_column("Film")
        table.add_column("Vus", justify="right")
        table.add_column("Dernier visionnage")
        for film in snapshot.top_watched:
            table.add_row(film.title, str(film.watch_count), film.last_watched_date)
        console.print(table)

    if snapshot.locations.specific_counts:
        table = Table(title="Lieux", title_justify="left")
        table.add_column("Lieu")
        table.add_column("Films", justify="right")
        for row in snapshot.locations.specific_counts:
            table.add_row(row.label, str(row.entry_count))
        console.print(table)


def render_streaks(snapshot: StatisticsSnapshot) -> None:
    """Affiche les series quotidiennes et hebdomadaires."""
    rows: list[tuple[str, str]] = []
    daily = snapshot.daily_streak
    if isinstance(daily, DailyStreakStats):
        rows += [
            ("Plus longue serie (jours)", f"{daily.longest.length} ({daily.longest.start_date} -> {daily.longest.end_date})"),
            ("Serie courante (jours)", f"{daily.current.length} ({'active' if daily.is_current_active else 'terminee'})"),
        ]
    weekly = snapshot.weekly_streak
    if isinstance(weekly, WeeklyStreakStats):
        rows += [
            ("Plus longue serie (semaines)", f"{weekly.longest.length} ({weekly.longest.start_week} -> {weekly.longest.end_week})"),
            ("Serie courante (semaines)", f"{weekly.current.length} ({'active' if weekly.is_current_active else 'terminee'})"),
        ]
    if not rows:
        console.print("[yellow]Aucune serie.[/yellow]")
        return
    console.print(_key_value_table("Series", rows))


def render_pace(snapshot: StatisticsSnapshot) -> None:
    """Affiche la courbe cumulative d'une annee et ses projections."""
    pace = snapshot.pace
    if not isinstance(pace, YearlyPaceStats):
        console.print("[yellow]Aucune donnee de rythme pour ce scope.[/yellow]")
        return

    projection = pace.projection if isinstance(pace.projection, PaceProjection) else None
    historical = {point.month: point.cumulative_count for point in pace.historical_average}
    actual = {point.month: point.cumulative_count for point in pace.monthly_data}

    table = Table(title=f"Rythme {pace.year}", title_justify="left")
    table.add_column("Mois")
    table.add_column("Cumul", justify="right")
    table.add_column("Historique", justify="right")
    if projection:
        table.add_column("Lineaire", justify="right")
        table.add_column("Saisonnier", justify="right")

    for month in range(1, 13):
        row = [
            str(month),
            str(actual.get(month, "-")),
            str(historical.get(month, "-")),
        ]
        if projection:
            row += [
                str(projection.linear[month - 1].cumulative_count),
                str(projection.seasonal[month - 1].cumulative_count),
            ]
        table.add_row(*row)
    console.print(table)

    if projection:
        console.print(
            f"Projection fin d'annee: [green]{projection.end_of_year_linear}[/green] (lineaire), "
            f"[green]{projection.end_of_year_seasonal}[/green] (saisonniere)"
        )


# ====================
# Commandes
# ====================


def stats(
    year: Annotated[
        Optional[int],
        typer.Option("--year", "-y", help="Annee (all time si omise)"),
    ] = None,
    mode: ModeOption = FilmTypeMode.ALL,
    refresh: RefreshOption = False,
) -> None:
    """Affiche les statistiques d'une annee ou de tout le journal."""
    asyncio.run(_show_async(StatisticsScope(year=year, mode=mode), refresh, render_overview))


def streaks(
    mode: ModeOption = FilmTypeMode.ALL,
    refresh: RefreshOption = False,
) -> None:
    """Affiche les series de visionnage quotidiennes et hebdomadaires."""
    asyncio.run(_show_async(StatisticsScope(mode=mode), refresh, render_streaks))


def pace(
    year: Annotated[
        Optional[int],
        typer.Option("--year", "-y", help="Annee (annee en cours si omise)"),
    ] = None,
    mode: ModeOption = FilmTypeMode.ALL,
    refresh: RefreshOption = False,
) -> None:
    """Affiche le rythme annuel et la projection de fin d'annee."""
    scope = StatisticsScope(year=year or date.today().year, mode=mode)
    asyncio.run(_show_async(scope, refresh, render_pace))


def years(mode: ModeOption = FilmTypeMode.ALL) -> None:
    """Liste les annees presentes dans le journal."""
    asyncio.run(_years_async(mode))


@with_container()
async def _show_async(container, scope: StatisticsScope, refresh: bool, render) -> None:
    """Implementation async commune : calcul du snapshot puis rendu."""
    service = container.statistics_service()
    snapshot = await service.get_snapshot_or_fallback(scope, force=refresh)
    with suppress_loguru():
        if snapshot.is_empty:
            console.print("[yellow]Aucun visionnage pour ce scope.[/yellow]")
            return
        render(snapshot)


@with_container()
async def _years_async(container, mode: FilmTypeMode) -> None:
    """Implementation async de la commande years."""
    service = container.statistics_service()
    try:
        available = await service.available_years(mode)
    except StatisticsError as e:
        logger.warning("Liste des annees impossible", error=str(e))
        available = []
    with suppress_loguru():
        if not available:
            console.print("[yellow]Aucun visionnage pour ce scope.[/yellow]")
            return
        table = Table(title=f"Annees ({mode.label})", title_justify="left")
        table.add_column("Annee", justify="right")
        for year in available:
            table.add_row(str(year))
        console.print(table)
