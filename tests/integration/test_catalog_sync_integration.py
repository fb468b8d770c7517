"""
Tests d'integration de la synchronisation avec les vrais adaptateurs.

Ces tests utilisent les implementations reelles (pas de mocks) : container
DI, DatasetCache, TSVParser, LibraryProvisioner et SQLModelCatalogStore
sur une base SQLite temporaire. Les datasets sont deposes dans le cache
avant l'execution : aucun acces reseau.
"""

from pathlib import Path

import pytest
from dependency_injector import providers
from sqlmodel import Session

from src.adapters.imdb.dataset_cache import BASICS_DATASET, EPISODE_DATASET
from src.config import Settings
from src.container import Container
from src.core.entities.catalog import EntityKind
from src.infrastructure.persistence.database import build_engine, init_db
from src.services.catalog_sync import SyncState
from tests.fixtures.imdb_datasets import BASICS_LINES, EPISODE_LINES, write_gz


@pytest.fixture
def integration_settings(tmp_path: Path) -> Settings:
    """Settings isoles avec les datasets deja en cache."""
    settings = Settings(
        _env_file=None,
        cache_dir=tmp_path / "cache",
        database_url=f"sqlite:///{tmp_path}/catalog.db",
        movies_library_path=str(tmp_path / "media" / "movies"),
        shows_library_path=str(tmp_path / "media" / "shows"),
        batch_size=2,
        log_file=tmp_path / "test.log",
    )
    settings.cache_dir.mkdir(parents=True)
    write_gz(settings.cache_dir / f"{BASICS_DATASET}.tsv.gz", BASICS_LINES)
    write_gz(settings.cache_dir / f"{EPISODE_DATASET}.tsv.gz", EPISODE_LINES)
    return settings


@pytest.fixture
def container(integration_settings: Settings):
    """Container avec configuration et session de test."""
    engine = build_engine(integration_settings.database_url)
    init_db(engine)
    with Session(engine) as session:
        container = Container()
        container.config.override(providers.Object(integration_settings))
        container.session.override(providers.Object(session))
        yield container
        container.reset_override()


class TestCatalogSyncIntegration:
    """Tests d'integration du flow complet de synchronisation."""

    @pytest.mark.asyncio
    async def test_full_sync_persists_catalog(self, container):
        service = container.catalog_sync_service()

        stats = await service.run()

        assert service.state is SyncState.DONE
        assert stats.total_committed == 4
        store = container.catalog_store()
        assert store.count_by_kind() == {
            EntityKind.MOVIE: 1,
            EntityKind.SERIES: 1,
            EntityKind.SEASON: 1,
            EntityKind.EPISODE: 1,
        }
        assert {library.collection_type.value for library in store.list_top_level_libraries()} == {
            "movies",
            "tvshows",
        }

    @pytest.mark.asyncio
    async def test_second_sync_is_idempotent(self, container):
        await container.catalog_sync_service().run()
        store = container.catalog_store()
        first_counts = store.count_by_kind()
        first_libraries = {library.id for library in store.list_top_level_libraries()}

        await container.catalog_sync_service().run()

        assert store.count_by_kind() == first_counts
        assert {library.id for library in store.list_top_level_libraries()} == first_libraries
