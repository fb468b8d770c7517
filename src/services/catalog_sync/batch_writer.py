"""
Ecriture par batch des elements du catalogue.

Un buffer par type d'element, tous de la meme capacite. Un buffer plein
est ecrit en un seul appel au store puis vide ; flush_all ecrit les
restes en fin de flux.
"""

from typing import Optional

from loguru import logger

from src.core.entities.catalog import CatalogItem, EntityKind, Library
from src.core.ports.catalog_store import ICatalogStore
from src.services.catalog_sync.dataclasses import CancellationToken


DEFAULT_BATCH_SIZE = 500

# Les saisons precedent les episodes qui les referencent
FLUSH_ORDER = (EntityKind.SERIES, EntityKind.SEASON, EntityKind.EPISODE, EntityKind.MOVIE)


class BatchWriter:
    """
    Accumule les elements et les ecrit par batch dans le store.

    Les erreurs du store (StoreWriteFailure) ne sont pas relancees ici :
    elles remontent a l'orchestrateur. Les batchs deja ecrits restent
    en base.
    """

    def __init__(
        self,
        store: ICatalogStore,
        parents: dict[EntityKind, Library],
        batch_size: int = DEFAULT_BATCH_SIZE,
        cancel_token: Optional[CancellationToken] = None,
    ) -> None:
        """
        Initialise le writer.

        Args:
            store: Store du catalogue
            parents: Bibliotheque racine de chaque type d'element
            batch_size: Capacite de chaque buffer
            cancel_token: Jeton d'annulation interroge avant chaque ecriture
        """
        if batch_size < 1:
            raise ValueError("batch_size doit etre >= 1")

        self._store = store
        self._parents = parents
        self._batch_size = batch_size
        self._cancel_token = cancel_token
        self._buffers: dict[EntityKind, list[CatalogItem]] = {kind: [] for kind in EntityKind}

        # Nombre d'ecritures, pas d'identifiants distincts
        self.committed: dict[EntityKind, int] = {kind: 0 for kind in EntityKind}
        self.flushes = 0

    @property
    def total_committed(self) -> int:
        return sum(self.committed.values())

    def pending(self, kind: EntityKind) -> int:
        """Nombre d'elements en attente dans le buffer d'un type."""
        return len(self._buffers[kind])

    def add(self, item: CatalogItem) -> None:
        """Ajoute un element et ecrit son buffer s'il est plein."""
        self._buffers[item.kind].append(item)
        self.flush_if_full(item.kind)

    def add_all(self, items: list[CatalogItem]) -> None:
        """
        Ajoute plusieurs elements puis verifie les buffers concernes.

        Tous les elements sont bufferises avant toute verification, pour
        qu'une saison soit toujours ecrite au plus tard avec le batch
        d'episodes qui la reference.
        """
        for item in items:
            self._buffers[item.kind].append(item)
        for kind in FLUSH_ORDER:
            if any(item.kind is kind for item in items):
                self.flush_if_full(kind)

    def flush_if_full(self, kind: EntityKind) -> int:
        """Ecrit le buffer du type s'il a atteint la capacite."""
        if len(self._buffers[kind]) >= self._batch_size:
            return self._flush(kind)
        return 0

    def flush_all(self) -> int:
        """Ecrit tous les buffers non vides. Retourne le nombre d'elements ecrits."""
        written = 0
        for kind in FLUSH_ORDER:
            if self._buffers[kind]:
                written += self._flush(kind)
        return written

    def _flush(self, kind: EntityKind) -> int:
        if self._cancel_token is not None:
            self._cancel_token.raise_if_cancelled()

        batch = self._buffers[kind]
        parent = self._parents[kind]
        self._store.create_entities(list(batch), parent)

        count = len(batch)
        self.committed[kind] += count
        self.flushes += 1
        batch.clear()

        logger.debug("Batch ecrit", kind=kind.value, count=count, parent=parent.name)
        return count
