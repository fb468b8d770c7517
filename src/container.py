"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI :
configuration, session SQLModel, store du catalogue, cache des datasets
et service de synchronisation.
"""

from dependency_injector import containers, providers

from .adapters.imdb.dataset_cache import DatasetCache
from .adapters.imdb.transport import HttpxDatasetTransport
from .adapters.imdb.tsv_parser import TSVParser
from .config import Settings
from .infrastructure.persistence.database import get_session, init_db
from .infrastructure.persistence.repositories import SQLModelCatalogStore
from .services.catalog_sync import CatalogSyncService, LibraryProvisioner


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Initialise la DB une fois
        service = container.catalog_sync_service()
        stats = await service.run()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db)

    # Session - une session par execution (le store et le service la partagent)
    session = providers.Singleton(lambda: next(get_session()))

    # Adapters IMDb
    transport = providers.Singleton(
        HttpxDatasetTransport,
        timeout=config.provided.download_timeout,
    )
    dataset_cache = providers.Factory(
        DatasetCache,
        cache_dir=config.provided.cache_dir,
        transport=transport,
        base_url=config.provided.datasets_base_url,
    )
    tsv_parser = providers.Singleton(TSVParser)

    # Store du catalogue
    catalog_store = providers.Factory(
        SQLModelCatalogStore,
        session=session,
    )

    # Provisionnement des bibliotheques
    library_provisioner = providers.Factory(
        LibraryProvisioner,
        store=catalog_store,
        poll_interval=config.provided.library_poll_interval,
        timeout=config.provided.library_poll_timeout,
    )

    # Service de synchronisation - Factory pour un etat neuf a chaque execution
    catalog_sync_service = providers.Factory(
        CatalogSyncService,
        store=catalog_store,
        dataset_cache=dataset_cache,
        provisioner=library_provisioner,
        config=config.provided.sync_config.call(),
        parser=tsv_parser,
    )
