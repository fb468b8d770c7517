"""
Dataclasses et enums de la synchronisation du catalogue.
"""

from dataclasses import dataclass, field
from enum import Enum

from src.core.entities.catalog import EntityKind
from src.core.exceptions import SyncCancelled


class SyncState(str, Enum):
    """Etats de la synchronisation (transitions lineaires)."""

    PENDING = "pending"
    PROVISIONING = "provisioning"
    INDEX_BUILDING = "index_building"
    STREAMING = "streaming"
    FLUSHING = "flushing"
    VALIDATING = "validating"
    DONE = "done"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class SyncConfig:
    """Configuration d'une execution de la synchronisation."""

    movies_library_path: str = "/media/movies"
    movies_library_name: str = "External Movies"
    shows_library_path: str = "/media/shows"
    shows_library_name: str = "External Shows"
    batch_size: int = 500
    progress_log_interval: int = 5000
    # Approximation : le nombre reel de lignes n'est connu qu'en fin de flux
    estimated_total: int = 1_500_000
    include_episodes: bool = True


@dataclass
class SyncStats:
    """Statistiques d'une execution."""

    rows_read: int = 0
    rows_skipped: int = 0
    episodes_unplaced: int = 0
    linkage_entries: int = 0
    flushes: int = 0
    # Ecritures par type : une saison est reecrite (upsert) pour chacun de ses episodes
    committed: dict[EntityKind, int] = field(
        default_factory=lambda: {kind: 0 for kind in EntityKind}
    )

    @property
    def total_committed(self) -> int:
        return sum(self.committed.values())


class CancellationToken:
    """
    Signal d'annulation cooperatif.

    Le consommateur interroge le jeton a chaque ligne et avant chaque
    ecriture de batch ; une ecriture en cours n'est jamais interrompue.
    """

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def raise_if_cancelled(self) -> None:
        """Leve SyncCancelled si l'annulation a ete demandee."""
        if self._cancelled:
            raise SyncCancelled()
