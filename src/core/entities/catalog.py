"""
Entites du catalogue reconstruit depuis les datasets IMDb.

Hierarchie:
- Library: racine d'une collection dans le store (films ou series)
- Movie: film rattache a la bibliotheque des films
- Series > Season > Episode: rattaches a la bibliotheque des series

Les entites sont immutables : une fois confiees au BatchWriter,
elles ne sont plus modifiees.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, Optional


class EntityKind(str, Enum):
    """Type d'element du catalogue."""

    MOVIE = "movie"
    SERIES = "series"
    SEASON = "season"
    EPISODE = "episode"


class CollectionType(str, Enum):
    """Type de contenu d'une bibliotheque."""

    MOVIES = "movies"
    TVSHOWS = "tvshows"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Library:
    """
    Bibliotheque (dossier racine) du store.

    Attributs:
        id: Identifiant interne attribue par le store
        name: Nom affiche
        path: Chemin physique principal
        collection_type: Type de contenu
        locations: Chemins physiques couverts par la bibliotheque
    """

    id: uuid.UUID
    name: str
    path: str
    collection_type: CollectionType
    locations: tuple[str, ...] = ()

    def covers(self, path: str) -> bool:
        """Indique si la bibliotheque couvre le chemin donne (insensible a la casse)."""
        target = path.casefold()
        return any(location.casefold() == target for location in self.locations or (self.path,))


@dataclass(frozen=True)
class LibraryOptions:
    """
    Parametres de creation d'une bibliotheque.

    Le pipeline fournit ses propres metadonnees : la surveillance temps reel,
    l'ecriture de metadonnees locales et les fournisseurs internet restent
    desactives par defaut.
    """

    name: str
    path: str
    collection_type: CollectionType
    enable_realtime_monitor: bool = False
    save_local_metadata: bool = False
    enable_internet_providers: bool = False


@dataclass(frozen=True)
class CatalogItem:
    """
    Element virtuel du catalogue.

    Attributs:
        id: Identifiant derive (voir src.core.identity)
        name: Nom affiche
        parent_id: Identifiant du parent (bibliotheque, serie ou saison)
        path: Chemin virtuel (imdb://...)
        provider_ids: Identifiants externes, cle "Imdb"
        year: Annee de production
        runtime_minutes: Duree en minutes
        genres: Genres dans l'ordre du dataset
        created_at: Date de creation (UTC)
        modified_at: Date de modification (UTC)
    """

    kind: ClassVar[EntityKind]

    id: uuid.UUID
    name: str
    parent_id: uuid.UUID
    path: str
    provider_ids: dict[str, str] = field(default_factory=dict, hash=False, compare=False)
    year: Optional[int] = None
    runtime_minutes: Optional[int] = None
    genres: tuple[str, ...] = ()
    created_at: datetime = field(default_factory=_utcnow, compare=False)
    modified_at: datetime = field(default_factory=_utcnow, compare=False)

    @property
    def imdb_id(self) -> Optional[str]:
        """Identifiant IMDb de l'element, s'il existe."""
        return self.provider_ids.get("Imdb")


@dataclass(frozen=True)
class Movie(CatalogItem):
    """Film."""

    kind: ClassVar[EntityKind] = EntityKind.MOVIE


@dataclass(frozen=True)
class Series(CatalogItem):
    """Serie TV."""

    kind: ClassVar[EntityKind] = EntityKind.SERIES


@dataclass(frozen=True)
class Season(CatalogItem):
    """Saison d'une serie. index_number est le numero de saison."""

    kind: ClassVar[EntityKind] = EntityKind.SEASON

    index_number: int = 0


@dataclass(frozen=True)
class Episode(CatalogItem):
    """
    Episode d'une serie.

    index_number est le numero d'episode, parent_index_number
    le numero de saison.
    """

    kind: ClassVar[EntityKind] = EntityKind.EPISODE

    index_number: int = 0
    parent_index_number: int = 0
