"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe CATALOGSYNC_,
et peut optionnellement être fournie via un fichier .env.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.adapters.imdb.dataset_cache import IMDB_DATASETS_BASE_URL
from src.services.catalog_sync.dataclasses import SyncConfig

# Trouver le fichier .env à la racine du projet (parent de src/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe CATALOGSYNC_.
    Exemple : CATALOGSYNC_BATCH_SIZE=1000

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="CATALOGSYNC_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Datasets
    cache_dir: Path = Field(default=Path("/tmp/imdb-cache"))
    datasets_base_url: str = Field(default=IMDB_DATASETS_BASE_URL)
    download_timeout: float = Field(default=60.0, gt=0)
    include_episodes: bool = Field(default=True)

    # Base de données
    database_url: str = Field(default="sqlite:///catalogsync.db")

    # Bibliothèques racines
    movies_library_path: str = Field(default="/media/movies")
    movies_library_name: str = Field(default="External Movies")
    shows_library_path: str = Field(default="/media/shows")
    shows_library_name: str = Field(default="External Shows")
    library_poll_interval: float = Field(default=1.0, gt=0)
    library_poll_timeout: float = Field(default=60.0, gt=0)

    # Traitement
    batch_size: int = Field(default=500, ge=1)
    progress_log_interval: int = Field(default=5000, ge=1)
    estimated_total: int = Field(default=1_500_000, ge=1)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/catalogsync.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    def sync_config(self) -> SyncConfig:
        """Construit la configuration d'exécution de la synchronisation."""
        return SyncConfig(
            movies_library_path=self.movies_library_path,
            movies_library_name=self.movies_library_name,
            shows_library_path=self.shows_library_path,
            shows_library_name=self.shows_library_name,
            batch_size=self.batch_size,
            progress_log_interval=self.progress_log_interval,
            estimated_total=self.estimated_total,
            include_episodes=self.include_episodes,
        )
