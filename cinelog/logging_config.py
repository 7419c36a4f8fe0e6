"""
Configuration du logging de l'application via loguru.

Fournit un logging structuré avec :
- Sortie console : colorée, limitée au niveau choisi
- Sortie fichier : sérialisée en JSON, avec rotation et compression
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
    "<level>{message}</level> <dim>{extra}</dim>"
)


def configure_logging(
    log_level: str = "INFO",
    log_file: Path | None = Path("logs/cinelog.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau minimum de la sortie console (DEBUG, INFO, WARNING, ERROR)
        log_file : Fichier de log JSON, ou None pour la console seule
        rotation_size : Taille maximale du fichier avant rotation (ex: "10 MB")
        retention_count : Nombre de fichiers rotatifs à conserver
    """
    logger.remove()

    logger.add(sys.stderr, level=log_level.upper(), format=CONSOLE_FORMAT, colorize=True)

    if log_file is None:
        return

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug("Logging configuré", log_file=str(log_file), rotation=rotation_size)
