"""
Fixtures pytest partagees pour les tests CatalogSync.

Ce module contient les fixtures communes utilisees dans les tests:
- Store du catalogue en memoire (implemente ICatalogStore)
- Attente asynchrone factice (pas de vraies secondes d'attente)
- Settings de test avec chemins temporaires
"""

import uuid
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

import pytest

from src.config import Settings
from src.core.entities.catalog import CatalogItem, EntityKind, Library, LibraryOptions
from src.core.ports.catalog_store import ICatalogStore


class InMemoryCatalogStore(ICatalogStore):
    """
    Store en memoire pour les tests.

    Reproduit le comportement attendu du store: upsert par identifiant,
    bibliotheques materialisees seulement apres validation.
    """

    def __init__(self, materialize_on_validation: bool = True) -> None:
        self.materialize_on_validation = materialize_on_validation
        self.libraries: list[Library] = []
        self.materialized: set[str] = set()
        self.items: dict[uuid.UUID, CatalogItem] = {}
        self.write_calls: list[tuple[list[CatalogItem], Library]] = []
        self.created_options: list[LibraryOptions] = []
        self.validations = 0
        self.find_calls = 0
        self.fail_on_write: Optional[Exception] = None

    def find_library_by_path(self, path: str) -> Optional[Library]:
        self.find_calls += 1
        for library in self.libraries:
            if library.path in self.materialized and library.covers(path):
                return library
        return None

    def list_top_level_libraries(self) -> list[Library]:
        return list(self.libraries)

    async def create_library(self, options: LibraryOptions) -> None:
        self.created_options.append(options)
        self.libraries.append(
            Library(
                id=uuid.uuid4(),
                name=options.name,
                path=options.path,
                collection_type=options.collection_type,
                locations=(options.path,),
            )
        )

    def create_entities(self, items: Sequence[CatalogItem], parent: Library) -> int:
        if self.fail_on_write is not None:
            raise self.fail_on_write
        self.write_calls.append((list(items), parent))
        for item in items:
            self.items[item.id] = item
        return len(items)

    async def trigger_validation(self) -> None:
        self.validations += 1
        if self.materialize_on_validation:
            self.materialized.update(library.path for library in self.libraries)

    def count_by_kind(self) -> dict[EntityKind, int]:
        counts = {kind: 0 for kind in EntityKind}
        for item in self.items.values():
            counts[item.kind] += 1
        return counts


class FakeSleep:
    """Attente asynchrone factice qui enregistre les durees demandees."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def memory_store() -> InMemoryCatalogStore:
    """Store du catalogue en memoire."""
    return InMemoryCatalogStore()


@pytest.fixture
def fake_sleep() -> FakeSleep:
    """Attente factice pour le polling des bibliotheques."""
    return FakeSleep()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour isoler le cache, la base
    et les bibliotheques de chaque test.
    """
    return Settings(
        cache_dir=tmp_path / "cache",
        database_url=f"sqlite:///{tmp_path}/test.db",
        movies_library_path=str(tmp_path / "media" / "movies"),
        shows_library_path=str(tmp_path / "media" / "shows"),
        log_file=tmp_path / "test.log",
    )
