"""
Point d'entrée CLI de CineLog.

Configure le logging et fournit les commandes de statistiques.
"""

from typing import Annotated

import typer
from loguru import logger

from .adapters.cli.commands import pace, stats, streaks, years
from .config import Settings
from .logging_config import configure_logging

app = typer.Typer(
    name="cinelog",
    help="Statistiques du journal de visionnage",
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Affiche les logs de debug"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """CineLog - Statistiques du journal de visionnage."""
    settings = Settings()
    log_level = settings.log_level
    if quiet:
        log_level = "ERROR"
    elif verbose:
        log_level = "DEBUG"
    configure_logging(
        log_level=log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )
    logger.debug("Démarrage de CineLog", version="0.1.0")


app.command()(stats)
app.command()(streaks)
app.command()(pace)
app.command()(years)


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = Settings()
    typer.echo(f"Journal : {config.watch_log_api_url or config.watch_log_file}")
    typer.echo(f"Lieux : {config.locations_api_url or config.locations_file or 'aucun'}")
    typer.echo(f"Cache : {config.cache_max_entries} scopes, TTL {config.cache_ttl_seconds} s")
    typer.echo(f"Niveau de log : {config.log_level}")


def main() -> None:
    """Point d'entrée de l'application."""
    app()


if __name__ == "__main__":
    main()
