"""
Service d'orchestration de la synchronisation du catalogue IMDb.

Enchaine les etapes, sans retour arriere :
PROVISIONING -> INDEX_BUILDING -> STREAMING -> FLUSHING -> VALIDATING -> DONE

Toute erreur fait passer l'execution a FAILED (ou CANCELLED sur annulation)
et remonte a l'appelant sans relance. Les batchs deja ecrits restent en
base : une nouvelle execution derive les memes identifiants et ne cree
aucun doublon.
"""

from collections.abc import Callable
from contextlib import closing
from pathlib import Path
from typing import Optional

from loguru import logger

from src.adapters.imdb.dataset_cache import BASICS_DATASET, EPISODE_DATASET, DatasetCache
from src.adapters.imdb.linkage_index import LinkageIndex, build_linkage_index
from src.adapters.imdb.tsv_parser import TSVParser, read_lines
from src.core.entities.catalog import CollectionType, EntityKind, Library
from src.core.exceptions import SyncCancelled
from src.core.ports.catalog_store import ICatalogStore
from src.core.value_objects.imdb_records import TitleType
from src.services.catalog_sync.batch_writer import BatchWriter
from src.services.catalog_sync.dataclasses import (
    CancellationToken,
    SyncConfig,
    SyncState,
    SyncStats,
)
from src.services.catalog_sync.provisioning import LibraryProvisioner
from src.services.catalog_sync.reconstructor import EntityReconstructor


ProgressCallback = Callable[[float], None]


class CatalogSyncService:
    """
    Service de synchronisation du catalogue.

    Utilisation typique:
        service = CatalogSyncService(store, dataset_cache, provisioner)
        stats = await service.run(progress=print, cancel_token=token)
    """

    def __init__(
        self,
        store: ICatalogStore,
        dataset_cache: DatasetCache,
        provisioner: LibraryProvisioner,
        config: Optional[SyncConfig] = None,
        parser: Optional[TSVParser] = None,
    ) -> None:
        """
        Initialise le service.

        Args:
            store: Store du catalogue
            dataset_cache: Cache local des datasets
            provisioner: Provisionnement des bibliotheques racines
            config: Configuration de l'execution (defauts si None)
            parser: Parser TSV (optionnel, pour les tests)
        """
        self._store = store
        self._dataset_cache = dataset_cache
        self._provisioner = provisioner
        self._config = config or SyncConfig()
        self._parser = parser or TSVParser()
        self.state = SyncState.PENDING

    @property
    def config(self) -> SyncConfig:
        """Configuration de l'execution (modifiable avant run)."""
        return self._config

    async def run(
        self,
        progress: Optional[ProgressCallback] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> SyncStats:
        """
        Execute la synchronisation complete.

        Args:
            progress: Callback recevant la progression (0-100)
            cancel_token: Jeton d'annulation cooperatif

        Returns:
            SyncStats de l'execution

        Raises:
            SyncCancelled: Si l'annulation a ete demandee
            CatalogSyncError: Pour toute erreur fatale
        """
        cancel_token = cancel_token or CancellationToken()
        stats = SyncStats()
        writer: Optional[BatchWriter] = None
        logger.info("Synchronisation du catalogue: debut")

        try:
            self._set_state(SyncState.PROVISIONING)
            movies_library, shows_library = await self._provision_libraries()
            cancel_token.raise_if_cancelled()

            self._set_state(SyncState.INDEX_BUILDING)
            basics_path = await self._dataset_cache.ensure(BASICS_DATASET)
            index = await self._build_index()
            stats.linkage_entries = len(index)
            cancel_token.raise_if_cancelled()

            writer = BatchWriter(
                self._store,
                parents={
                    EntityKind.MOVIE: movies_library,
                    EntityKind.SERIES: shows_library,
                    EntityKind.SEASON: shows_library,
                    EntityKind.EPISODE: shows_library,
                },
                batch_size=self._config.batch_size,
                cancel_token=cancel_token,
            )
            reconstructor = EntityReconstructor(movies_library.id, shows_library.id)

            self._set_state(SyncState.STREAMING)
            self._stream(basics_path, index, reconstructor, writer, stats, progress, cancel_token)

            self._set_state(SyncState.FLUSHING)
            writer.flush_all()

            self._set_state(SyncState.VALIDATING)
            logger.info("Synchronisation du catalogue: validation du store")
            await self._store.trigger_validation()
        except SyncCancelled:
            self._set_state(SyncState.CANCELLED)
            logger.warning("Synchronisation du catalogue annulee", rows=stats.rows_read)
            raise
        except Exception as exc:
            self._set_state(SyncState.FAILED)
            logger.error("Synchronisation du catalogue en echec", error=str(exc), state=self.state.value)
            raise
        finally:
            if writer is not None:
                stats.committed = dict(writer.committed)
                stats.flushes = writer.flushes

        self._set_state(SyncState.DONE)
        if progress is not None:
            progress(100.0)
        logger.info(
            "Synchronisation du catalogue: terminee",
            rows=stats.rows_read,
            committed=stats.total_committed,
        )
        return stats

    async def _provision_libraries(self) -> tuple[Library, Library]:
        config = self._config
        movies = await self._provisioner.ensure_library(
            config.movies_library_path, config.movies_library_name, CollectionType.MOVIES
        )
        shows = await self._provisioner.ensure_library(
            config.shows_library_path, config.shows_library_name, CollectionType.TVSHOWS
        )
        return movies, shows

    async def _build_index(self) -> LinkageIndex:
        if not self._config.include_episodes:
            logger.info("Rattachement des episodes desactive")
            return LinkageIndex()
        episode_path = await self._dataset_cache.ensure(EPISODE_DATASET)
        with closing(read_lines(episode_path)) as lines:
            return build_linkage_index(lines, self._parser)

    def _stream(
        self,
        basics_path: Path,
        index: LinkageIndex,
        reconstructor: EntityReconstructor,
        writer: BatchWriter,
        stats: SyncStats,
        progress: Optional[ProgressCallback],
        cancel_token: CancellationToken,
    ) -> None:
        logged = 0
        interval = self._config.progress_log_interval

        # Le fichier est ferme des la sortie du bloc, exception comprise
        with closing(self._parser.parse_basics(basics_path)) as records:
            for record in records:
                cancel_token.raise_if_cancelled()
                stats.rows_read += 1

                items = reconstructor.reconstruct(record, index)
                if not items:
                    stats.rows_skipped += 1
                    if record.title_type is TitleType.TV_EPISODE:
                        stats.episodes_unplaced += 1
                    continue

                writer.add_all(items)

                done = writer.total_committed
                if done - logged >= interval:
                    logged = done
                    percent = self.estimate_progress(done)
                    logger.info("Synchronisation du catalogue: ~{} elements ecrits", done, percent=round(percent, 2))
                    if progress is not None:
                        progress(percent)

    def estimate_progress(self, committed: int) -> float:
        """Progression estimee sur la base du nombre total approximatif de lignes."""
        return min(100.0, committed / self._config.estimated_total * 100.0)

    def _set_state(self, state: SyncState) -> None:
        logger.debug("Transition d'etat", previous=self.state.value, state=state.value)
        self.state = state
