"""
Interface port pour le store du catalogue.

Le store est responsable de toute la persistance : creation des
bibliotheques, upsert des elements par identifiant derive, validation.
Le pipeline d'ingestion n'y accede qu'a travers ce contrat.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Optional

from src.core.entities.catalog import CatalogItem, EntityKind, Library, LibraryOptions


class ICatalogStore(ABC):
    """
    Interface du store du catalogue.

    La creation d'une bibliotheque est asynchrone par rapport a sa
    materialisation : une bibliotheque creee n'est visible via
    find_library_by_path qu'apres une passe de validation.
    """

    @abstractmethod
    def find_library_by_path(self, path: str) -> Optional[Library]:
        """Recupere une bibliotheque materialisee par son chemin physique."""
        ...

    @abstractmethod
    def list_top_level_libraries(self) -> list[Library]:
        """Liste toutes les bibliotheques declarees, materialisees ou non."""
        ...

    @abstractmethod
    async def create_library(self, options: LibraryOptions) -> None:
        """Demande la creation d'une bibliotheque."""
        ...

    @abstractmethod
    def create_entities(self, items: Sequence[CatalogItem], parent: Library) -> int:
        """
        Ecrit un batch d'elements (upsert par identifiant).

        Args :
            items : Elements a ecrire, tous du meme type
            parent : Bibliotheque racine du batch

        Retourne :
            Nombre d'elements ecrits

        Raises :
            StoreWriteFailure : Si l'ecriture echoue
        """
        ...

    @abstractmethod
    async def trigger_validation(self) -> None:
        """Declenche une passe de validation/rescan du store."""
        ...

    @abstractmethod
    def count_by_kind(self) -> dict[EntityKind, int]:
        """Compte les elements du catalogue par type."""
        ...
