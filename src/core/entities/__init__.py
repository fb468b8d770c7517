"""
Entites metier du catalogue.

Exports:
- Library, LibraryOptions: Bibliotheques du store et leurs options de creation
- CatalogItem: Base commune des elements du catalogue
- Movie, Series, Season, Episode: Elements reconstruits depuis IMDb
- EntityKind, CollectionType: Enumerations associees
"""

from src.core.entities.catalog import (
    CatalogItem,
    CollectionType,
    EntityKind,
    Episode,
    Library,
    LibraryOptions,
    Movie,
    Season,
    Series,
)

__all__ = [
    "CatalogItem",
    "CollectionType",
    "EntityKind",
    "Episode",
    "Library",
    "LibraryOptions",
    "Movie",
    "Season",
    "Series",
]
