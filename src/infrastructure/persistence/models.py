"""
Modeles SQLModel pour la base de donnees du catalogue.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- libraries: Bibliotheques racines (films, series)
- catalog_items: Films, series, saisons et episodes importes

Les champs JSON (*_json) permettent de stocker des listes (genres, chemins)
de maniere serialisee dans SQLite.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone

from sqlmodel import Field, Index, SQLModel


class LibraryModel(SQLModel, table=True):
    """
    Modele representant une bibliotheque racine.

    Une bibliotheque n'est visible par le pipeline qu'une fois
    materialisee par une passe de validation.
    """

    __tablename__ = "libraries"

    id: str = Field(primary_key=True)  # UUID
    name: str
    path: str = Field(index=True, unique=True)
    collection_type: str  # movies, tvshows
    locations_json: str | None = None  # JSON: ["/media/movies"]
    enable_realtime_monitor: bool = False
    save_local_metadata: bool = False
    enable_internet_providers: bool = False
    materialized: bool = Field(default=False, index=True)
    created_at: datetime | None = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def locations(self) -> list[str]:
        """Retourne les chemins physiques deserialises."""
        if self.locations_json:
            return json.loads(self.locations_json)
        return [self.path]


class CatalogItemModel(SQLModel, table=True):
    """
    Modele representant un element du catalogue.

    L'identifiant est derive de la cle IMDb (UUID v5) : reecrire le meme
    element met a jour la ligne existante.
    """

    __tablename__ = "catalog_items"
    __table_args__ = (
        Index("ix_catalog_items_parent_index", "parent_id", "index_number"),
    )

    id: str = Field(primary_key=True)  # UUID derive
    kind: str = Field(index=True)  # movie, series, season, episode
    name: str
    parent_id: str = Field(index=True)
    library_id: str = Field(foreign_key="libraries.id", index=True)
    path: str
    imdb_id: str | None = Field(default=None, index=True)
    year: int | None = None
    runtime_minutes: int | None = None
    genres_json: str | None = None  # JSON: ["Action", "Sci-Fi"]
    index_number: int | None = None
    parent_index_number: int | None = None
    is_virtual: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def genres(self) -> list[str]:
        """Retourne les genres deserialises."""
        if self.genres_json:
            return json.loads(self.genres_json)
        return []

    @genres.setter
    def genres(self, value: list[str]) -> None:
        """Serialise les genres en JSON."""
        self.genres_json = json.dumps(value)
