"""
Implementation SQLModel du store du catalogue.

Implemente l'interface ICatalogStore pour la persistance des bibliotheques
et des elements du catalogue dans la base de donnees SQLite via SQLModel.
"""

import json
import uuid
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from loguru import logger
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from src.core.entities.catalog import (
    CatalogItem,
    CollectionType,
    EntityKind,
    Episode,
    Library,
    LibraryOptions,
    Season,
)
from src.core.exceptions import StoreWriteFailure
from src.core.ports.catalog_store import ICatalogStore
from src.infrastructure.persistence.models import CatalogItemModel, LibraryModel


class SQLModelCatalogStore(ICatalogStore):
    """
    Store SQLModel du catalogue.

    Les elements sont ecrits par upsert sur leur identifiant derive :
    reimporter un element met a jour la ligne sans toucher a created_at.
    Une bibliotheque creee n'est materialisee (visible via
    find_library_by_path) qu'apres trigger_validation, et seulement si
    ses repertoires physiques existent et ne sont pas vides.
    """

    def __init__(
        self,
        session: Session,
        id_factory: Callable[[], uuid.UUID] = uuid.uuid4,
    ) -> None:
        """
        Initialise le store avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
            id_factory : Generateur d'identifiants des bibliotheques
        """
        self._session = session
        self._id_factory = id_factory

    def _library_to_entity(self, model: LibraryModel) -> Library:
        return Library(
            id=uuid.UUID(model.id),
            name=model.name,
            path=model.path,
            collection_type=CollectionType(model.collection_type),
            locations=tuple(model.locations),
        )

    def _apply_item(self, model: CatalogItemModel, item: CatalogItem, parent: Library) -> None:
        model.kind = item.kind.value
        model.name = item.name
        model.parent_id = str(item.parent_id)
        model.library_id = str(parent.id)
        model.path = item.path
        model.imdb_id = item.imdb_id
        model.year = item.year
        model.runtime_minutes = item.runtime_minutes
        model.genres_json = json.dumps(list(item.genres)) if item.genres else None
        model.updated_at = _as_utc(item.modified_at)
        if isinstance(item, (Season, Episode)):
            model.index_number = item.index_number
        if isinstance(item, Episode):
            model.parent_index_number = item.parent_index_number

    def find_library_by_path(self, path: str) -> Optional[Library]:
        """Recupere une bibliotheque materialisee couvrant le chemin."""
        statement = select(LibraryModel).where(LibraryModel.materialized == True)  # noqa: E712
        for model in self._session.exec(statement).all():
            library = self._library_to_entity(model)
            if library.covers(path):
                return library
        return None

    def list_top_level_libraries(self) -> list[Library]:
        """Liste toutes les bibliotheques declarees."""
        models = self._session.exec(select(LibraryModel)).all()
        return [self._library_to_entity(model) for model in models]

    async def create_library(self, options: LibraryOptions) -> None:
        """Declare une nouvelle bibliotheque (non materialisee)."""
        statement = select(LibraryModel).where(LibraryModel.path == options.path)
        if self._session.exec(statement).first() is not None:
            logger.debug("Bibliotheque deja declaree", path=options.path)
            return

        model = LibraryModel(
            id=str(self._id_factory()),
            name=options.name,
            path=options.path,
            collection_type=options.collection_type.value,
            locations_json=json.dumps([options.path]),
            enable_realtime_monitor=options.enable_realtime_monitor,
            save_local_metadata=options.save_local_metadata,
            enable_internet_providers=options.enable_internet_providers,
        )
        try:
            self._session.add(model)
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise StoreWriteFailure("library", 1, str(exc)) from exc
        logger.info("Bibliotheque declaree", name=options.name, path=options.path)

    def create_entities(self, items: Sequence[CatalogItem], parent: Library) -> int:
        """Ecrit un batch d'elements en une transaction (upsert par id)."""
        if not items:
            return 0

        kind = items[0].kind.value
        seen: dict[str, CatalogItemModel] = {}
        try:
            for item in items:
                item_id = str(item.id)
                model = seen.get(item_id) or self._session.get(CatalogItemModel, item_id)
                if model is None:
                    model = CatalogItemModel(
                        id=item_id,
                        kind=item.kind.value,
                        name=item.name,
                        parent_id=str(item.parent_id),
                        library_id=str(parent.id),
                        path=item.path,
                        created_at=_as_utc(item.created_at),
                    )
                    self._session.add(model)
                self._apply_item(model, item, parent)
                seen[item_id] = model
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise StoreWriteFailure(kind, len(items), str(exc)) from exc

        return len(items)

    async def trigger_validation(self) -> None:
        """Materialise les bibliotheques dont les repertoires sont prets."""
        statement = select(LibraryModel).where(LibraryModel.materialized == False)  # noqa: E712
        changed = False
        models = self._session.exec(statement).all()
        for model in models:
            if all(_is_populated_directory(Path(location)) for location in model.locations):
                model.materialized = True
                self._session.add(model)
                changed = True
                logger.info("Bibliotheque materialisee", name=model.name, path=model.path)
            else:
                logger.warning("Repertoire de bibliotheque vide ou absent", path=model.path)
        if changed:
            try:
                self._session.commit()
            except SQLAlchemyError as exc:
                self._session.rollback()
                raise StoreWriteFailure("library", len(models), str(exc)) from exc

    def count_by_kind(self) -> dict[EntityKind, int]:
        """Compte les elements du catalogue par type."""
        statement = select(CatalogItemModel.kind, func.count()).group_by(CatalogItemModel.kind)
        counts = {kind: 0 for kind in EntityKind}
        for kind, count in self._session.exec(statement).all():
            counts[EntityKind(kind)] = count
        return counts

    def last_updated(self) -> Optional[datetime]:
        """Date de la derniere mise a jour d'un element."""
        statement = select(func.max(CatalogItemModel.updated_at))
        return self._session.exec(statement).first()


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Les dates sans fuseau sont considerees comme UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _is_populated_directory(directory: Path) -> bool:
    return directory.is_dir() and any(directory.iterdir())
