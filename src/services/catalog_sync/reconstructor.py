"""
Reconstruction des elements du catalogue depuis les lignes IMDb.

Transforme une ligne plate de title.basics (enrichie par l'index des
episodes) en zero, un ou deux elements :
- movie -> Movie
- tvSeries -> Series
- tvEpisode rattache -> Season + Episode
- tout le reste -> rien
"""

import uuid

from loguru import logger

from src.adapters.imdb.linkage_index import LinkageIndex
from src.core.entities.catalog import CatalogItem, EntityKind, Episode, Movie, Season, Series
from src.core.identity import derive_item_id, season_id, series_id
from src.core.value_objects.imdb_records import TitleBasics, TitleType


PROVIDER_KEY = "Imdb"


class EntityReconstructor:
    """
    Reconstruit les elements du catalogue.

    Sans etat propre: l'index n'est que lu, chaque appel ne produit
    que sa valeur de retour.
    """

    def __init__(self, movies_library_id: uuid.UUID, shows_library_id: uuid.UUID) -> None:
        """
        Args:
            movies_library_id: Identifiant de la bibliotheque des films
            shows_library_id: Identifiant de la bibliotheque des series
        """
        self._movies_library_id = movies_library_id
        self._shows_library_id = shows_library_id

    def reconstruct(
        self, record: TitleBasics, index: LinkageIndex
    ) -> list[CatalogItem]:
        """
        Reconstruit les elements correspondant a une ligne.

        Args:
            record: Ligne parsee de title.basics
            index: Index de rattachement des episodes

        Returns:
            Liste vide si la ligne ne produit rien, [Season, Episode]
            pour un episode rattache, sinon un seul element
        """
        if record.title_type is TitleType.MOVIE:
            return [self._to_movie(record)]
        if record.title_type is TitleType.TV_SERIES:
            return [self._to_series(record)]
        if record.title_type is TitleType.TV_EPISODE:
            return self._to_season_and_episode(record, index)
        return []

    def _to_movie(self, record: TitleBasics) -> Movie:
        return Movie(
            id=derive_item_id(EntityKind.MOVIE, record.tconst),
            name=record.primary_title.strip() or record.tconst,
            parent_id=self._movies_library_id,
            path=f"imdb://movie/{record.tconst}",
            provider_ids={PROVIDER_KEY: record.tconst},
            year=record.start_year,
            runtime_minutes=_positive(record.runtime_minutes),
            genres=record.genres,
        )

    def _to_series(self, record: TitleBasics) -> Series:
        return Series(
            id=series_id(record.tconst),
            name=record.primary_title.strip() or record.tconst,
            parent_id=self._shows_library_id,
            path=f"imdb://series/{record.tconst}",
            provider_ids={PROVIDER_KEY: record.tconst},
            year=record.start_year,
            genres=record.genres,
        )

    def _to_season_and_episode(
        self, record: TitleBasics, index: LinkageIndex
    ) -> list[CatalogItem]:
        link = index.get(record.tconst)
        if link is None or link.season_number is None or link.episode_number is None:
            return []

        series_tconst = link.parent_tconst
        season_number = link.season_number
        episode_number = link.episode_number
        season_path = f"imdb://series/{series_tconst}/season/{season_number}"

        season = Season(
            id=season_id(series_tconst, season_number),
            name=f"Season {season_number}",
            parent_id=series_id(series_tconst),
            path=season_path,
            provider_ids={PROVIDER_KEY: f"{series_tconst}:S{season_number}"},
            index_number=season_number,
        )
        episode = Episode(
            id=derive_item_id(EntityKind.EPISODE, record.tconst),
            name=record.primary_title.strip() or f"E{episode_number}",
            parent_id=season.id,
            path=f"{season_path}/ep/{episode_number}",
            provider_ids={PROVIDER_KEY: record.tconst},
            year=record.start_year,
            runtime_minutes=_positive(record.runtime_minutes),
            genres=record.genres,
            index_number=episode_number,
            parent_index_number=season_number,
        )

        logger.trace(
            "Episode reconstruit", tconst=record.tconst, season=season_number, episode=episode_number
        )
        return [season, episode]


def _positive(value: int | None) -> int | None:
    return value if value is not None and value > 0 else None
