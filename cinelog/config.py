"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe CINELOG_,
et peut optionnellement être fournie via un fichier .env.

Le journal est lu depuis un fichier JSON (watch_log_file) ou depuis une API HTTP
(watch_log_api_url) ; l'API est prioritaire si les deux sont définis.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de cinelog/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe CINELOG_.
    Exemple : CINELOG_CACHE_TTL_SECONDS=300

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="CINELOG_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
    )

    # Sources du journal et de l'annuaire des lieux
    watch_log_file: Path = Field(default=Path("~/.cinelog/watch_log.json"))
    watch_log_api_url: Optional[str] = Field(default=None)
    locations_file: Optional[Path] = Field(default=None)
    locations_api_url: Optional[str] = Field(default=None)

    # Clé API (OPTIONNELLE - envoyée aux API si définie)
    api_key: Optional[str] = Field(default=None)
    api_cache_dir: Path = Field(default=Path(".cache/api"))

    # Cache des snapshots (10 minutes, 5 scopes)
    cache_ttl_seconds: int = Field(default=600, ge=1)
    cache_max_entries: int = Field(default=5, ge=1)

    # Statistiques
    top_watched_limit: int = Field(default=6, ge=1)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/cinelog.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("watch_log_file", "locations_file", "api_cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Optional[str | Path]) -> Optional[Path]:
        """Étend ~ vers le répertoire home dans les chemins."""
        if v is None or v == "":
            return None
        return Path(v).expanduser()

    @property
    def watch_log_api_enabled(self) -> bool:
        """Vérifie si le journal est servi par une API."""
        return bool(self.watch_log_api_url)

    @property
    def locations_api_enabled(self) -> bool:
        """Vérifie si l'annuaire des lieux est servi par une API."""
        return bool(self.locations_api_url)
