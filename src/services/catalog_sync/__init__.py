"""
Synchronisation du catalogue depuis les datasets IMDb.

Exports:
- CatalogSyncService: Orchestrateur de la synchronisation
- EntityReconstructor: Lignes IMDb -> elements du catalogue
- BatchWriter: Ecriture par batch dans le store
- LibraryProvisioner: Creation et attente des bibliotheques racines
- CancellationToken, SyncConfig, SyncState, SyncStats
"""

from .batch_writer import BatchWriter
from .dataclasses import CancellationToken, SyncConfig, SyncState, SyncStats
from .provisioning import LibraryProvisioner
from .reconstructor import EntityReconstructor
from .sync_service import CatalogSyncService

__all__ = [
    "BatchWriter",
    "CancellationToken",
    "CatalogSyncService",
    "EntityReconstructor",
    "LibraryProvisioner",
    "SyncConfig",
    "SyncState",
    "SyncStats",
]
