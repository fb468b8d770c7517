"""
Cache local des datasets IMDb.

Un dataset deja present dans le repertoire de cache n'est jamais
re-telecharge. Un telechargement passe par un fichier temporaire
(.part) renomme atomiquement a la fin, de sorte qu'un echec ne laisse
jamais de fichier partiel au chemin final.

Datasets utilises:
- title.basics.tsv.gz: Titres (films, series, episodes...)
- title.episode.tsv.gz: Rattachement des episodes a leur serie
"""

from pathlib import Path

from loguru import logger

from src.core.exceptions import DownloadFailure
from src.core.ports.transport import IDatasetTransport


# URL de base des datasets IMDb
IMDB_DATASETS_BASE_URL = "https://datasets.imdbws.com"

BASICS_DATASET = "title.basics"
EPISODE_DATASET = "title.episode"


class DatasetCache:
    """
    Gestionnaire du cache des datasets IMDb.

    Telecharge les datasets manquants et retourne leur chemin local.
    """

    def __init__(
        self,
        cache_dir: Path,
        transport: IDatasetTransport,
        base_url: str = IMDB_DATASETS_BASE_URL,
    ) -> None:
        """
        Initialise le cache.

        Args:
            cache_dir: Repertoire pour le cache des fichiers telecharges
            transport: Transport utilise pour les telechargements
            base_url: URL de base des datasets
        """
        self._cache_dir = Path(cache_dir)
        self._transport = transport
        self._base_url = base_url.rstrip("/")

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    def path_for(self, name: str) -> Path:
        """Chemin local du dataset (ex: title.basics -> title.basics.tsv.gz)."""
        return self._cache_dir / f"{name}.tsv.gz"

    def url_for(self, name: str) -> str:
        """URL distante du dataset."""
        return f"{self._base_url}/{name}.tsv.gz"

    async def ensure(self, name: str) -> Path:
        """
        Garantit la presence locale du dataset.

        Args:
            name: Nom du dataset (ex: "title.basics")

        Returns:
            Chemin vers le fichier local

        Raises:
            DownloadFailure: Si le telechargement echoue
        """
        file_path = self.path_for(name)
        if file_path.exists():
            logger.debug("Dataset deja en cache", dataset=name, path=str(file_path))
            return file_path

        url = self.url_for(name)
        part_path = file_path.with_name(file_path.name + ".part")
        logger.info("Telechargement du dataset", dataset=name, url=url)

        try:
            self._cache_dir.mkdir(parents=True, exist_ok=True)
            with open(part_path, "wb") as f:
                async for chunk in self._transport.stream(url):
                    f.write(chunk)
            part_path.replace(file_path)
        except DownloadFailure:
            part_path.unlink(missing_ok=True)
            raise
        except OSError as exc:
            part_path.unlink(missing_ok=True)
            raise DownloadFailure(url, f"ecriture impossible: {exc}") from exc
        except BaseException:
            # Annulation de la tache : ne rien laisser derriere
            part_path.unlink(missing_ok=True)
            raise

        logger.info("Dataset telecharge", dataset=name, size=file_path.stat().st_size)
        return file_path

    def invalidate(self, name: str) -> bool:
        """
        Supprime le fichier en cache pour forcer un nouveau telechargement.

        Returns:
            True si un fichier a ete supprime
        """
        file_path = self.path_for(name)
        if file_path.exists():
            file_path.unlink()
            logger.info("Dataset supprime du cache", dataset=name)
            return True
        return False

    def cached_files(self) -> list[Path]:
        """Liste les datasets presents dans le cache."""
        if not self._cache_dir.exists():
            return []
        return sorted(self._cache_dir.glob("*.tsv.gz"))
