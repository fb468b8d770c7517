"""
Module de persistance SQLite du catalogue.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy).
Il contient :

- database.py : Configuration de l'engine SQLite, session factory, initialisation
- models.py : Modeles SQLModel representant les tables de la base de donnees
- repositories/ : Implementation du port ICatalogStore

Les modeles ici sont des adapters de persistance, distincts des entites de domaine
(dataclass dans core/entities/). La conversion entre les deux se fait dans le store.
"""

from src.infrastructure.persistence.database import (
    build_engine,
    get_engine,
    get_session,
    init_db,
)
from src.infrastructure.persistence.models import CatalogItemModel, LibraryModel

__all__ = [
    "build_engine",
    "get_engine",
    "get_session",
    "init_db",
    "CatalogItemModel",
    "LibraryModel",
]
