"""
Provisionnement des bibliotheques racines dans le store.

La creation d'une bibliotheque est asynchrone : apres la demande de
creation et la passe de validation, le store est interroge a intervalle
fixe jusqu'a ce que la bibliotheque apparaisse, dans la limite d'un
timeout.
"""

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Optional

from loguru import logger
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

from src.core.entities.catalog import CollectionType, Library, LibraryOptions
from src.core.exceptions import ContainerNotMaterialized
from src.core.ports.catalog_store import ICatalogStore


# Le scan du store ignore les repertoires vides
PLACEHOLDER_FILENAME = "stub.txt"

DEFAULT_POLL_INTERVAL = 1.0
DEFAULT_POLL_TIMEOUT = 60.0


class LibraryProvisioner:
    """
    Garantit l'existence des bibliotheques racines.

    Utilisation:
        provisioner = LibraryProvisioner(store)
        movies = await provisioner.ensure_library("/media/movies", "External Movies", CollectionType.MOVIES)
    """

    def __init__(
        self,
        store: ICatalogStore,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        timeout: float = DEFAULT_POLL_TIMEOUT,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ) -> None:
        """
        Args:
            store: Store du catalogue
            poll_interval: Intervalle entre deux interrogations (secondes)
            timeout: Duree maximale d'attente (secondes)
            sleep: Fonction d'attente async (injectable pour les tests)
        """
        if poll_interval <= 0:
            raise ValueError("poll_interval doit etre > 0")

        self._store = store
        self._poll_interval = poll_interval
        self._timeout = timeout
        self._sleep = sleep or asyncio.sleep

    @property
    def max_polls(self) -> int:
        """Nombre maximal d'interrogations du store."""
        return max(1, int(self._timeout / self._poll_interval))

    async def ensure_library(
        self, path: str, name: str, collection_type: CollectionType
    ) -> Library:
        """
        Cree la bibliotheque si necessaire et attend sa materialisation.

        Args:
            path: Chemin physique de la bibliotheque
            name: Nom affiche
            collection_type: Type de contenu

        Returns:
            La bibliotheque materialisee

        Raises:
            ContainerNotMaterialized: Si elle n'apparait pas avant le timeout
        """
        self._seed_directory(Path(path))

        libraries = self._store.list_top_level_libraries()
        for library in libraries:
            logger.debug("Bibliotheque existante", name=library.name, type=library.collection_type.value)

        if not any(library.covers(path) for library in libraries):
            logger.info("Aucune bibliotheque ne couvre ce chemin, creation", path=path, name=name)
            await self._store.create_library(
                LibraryOptions(name=name, path=path, collection_type=collection_type)
            )

        logger.info("Validation du store pour materialiser la bibliotheque", path=path)
        await self._store.trigger_validation()

        library = await self._wait_for_library(path)
        logger.info("Bibliotheque resolue", path=path, name=library.name, id=str(library.id))
        return library

    async def _wait_for_library(self, path: str) -> Library:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_polls),
            wait=wait_fixed(self._poll_interval),
            retry=retry_if_result(lambda library: library is None),
            sleep=self._sleep,
        )
        try:
            return await retrying(self._poll, path)
        except RetryError as exc:
            raise ContainerNotMaterialized(path, self._timeout) from exc

    async def _poll(self, path: str) -> Optional[Library]:
        return self._store.find_library_by_path(path)

    @staticmethod
    def _seed_directory(directory: Path) -> None:
        directory.mkdir(parents=True, exist_ok=True)
        placeholder = directory / PLACEHOLDER_FILENAME
        if not placeholder.exists():
            placeholder.write_bytes(b"")
