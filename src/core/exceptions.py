"""
Exceptions du pipeline d'ingestion du catalogue.

Toutes les erreurs fatales heritent de CatalogSyncError pour que le
point d'entree (CLI ou planificateur) puisse les intercepter en un seul
endroit et signaler le type d'erreur.

Les lignes malformees ne levent jamais d'exception : elles sont ignorees
silencieusement par le parser TSV.
"""

from pathlib import Path
from typing import Optional


class CatalogSyncError(Exception):
    """Erreur de base de la synchronisation du catalogue."""

    kind = "catalog_sync_error"


class DownloadFailure(CatalogSyncError):
    """
    Exception levee quand le telechargement d'un dataset echoue.

    Attributes:
        url: URL demandee
        reason: Description de l'echec (statut HTTP, erreur reseau...)
    """

    kind = "download_failure"

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Echec du telechargement de {url}: {reason}")


class CorruptDataset(CatalogSyncError):
    """Exception levee quand un fichier compresse ne peut pas etre lu."""

    kind = "corrupt_dataset"

    def __init__(self, path: Path, reason: Optional[str] = None) -> None:
        self.path = path
        self.reason = reason
        message = f"Dataset corrompu: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class ContainerNotMaterialized(CatalogSyncError):
    """
    Exception levee quand une bibliotheque n'apparait pas dans le store.

    Attributes:
        path: Chemin physique de la bibliotheque attendue
        timeout: Delai d'attente ecoule, en secondes
    """

    kind = "container_not_materialized"

    def __init__(self, path: str, timeout: float) -> None:
        self.path = path
        self.timeout = timeout
        super().__init__(
            f"Bibliotheque introuvable pour '{path}' apres {timeout:g}s d'attente"
        )


class StoreWriteFailure(CatalogSyncError):
    """Exception levee quand l'ecriture d'un batch dans le store echoue."""

    kind = "store_write_failure"

    def __init__(self, entity_kind: str, count: int, reason: str = "") -> None:
        self.entity_kind = entity_kind
        self.count = count
        self.reason = reason
        super().__init__(
            f"Echec de l'ecriture de {count} element(s) '{entity_kind}': {reason}"
        )


class SyncCancelled(CatalogSyncError):
    """Exception levee quand la synchronisation est annulee."""

    kind = "cancelled"

    def __init__(self) -> None:
        super().__init__("Synchronisation annulee")
