"""
Objets valeur representant les lignes des datasets IMDb.

- TitleBasics: une ligne de title.basics.tsv.gz
- EpisodeLink: une ligne de title.episode.tsv.gz (rattachement episode -> serie)

Documentation: https://www.imdb.com/interfaces/
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TitleType(str, Enum):
    """Type de titre IMDb (colonne titleType).

    Les valeurs correspondent aux jetons du dataset. Un jeton inconnu
    donne UNKNOWN au lieu de rejeter la ligne.
    """

    MOVIE = "movie"
    SHORT = "short"
    TV_EPISODE = "tvEpisode"
    TV_MINI_SERIES = "tvMiniSeries"
    TV_MOVIE = "tvMovie"
    TV_PILOT = "tvPilot"
    TV_SERIES = "tvSeries"
    TV_SHORT = "tvShort"
    TV_SPECIAL = "tvSpecial"
    VIDEO = "video"
    VIDEO_GAME = "videoGame"
    UNKNOWN = "unknown"

    @classmethod
    def from_token(cls, token: str) -> "TitleType":
        """Convertit un jeton du dataset (insensible a la casse)."""
        return _TITLE_TYPES_BY_TOKEN.get(token.strip().lower(), cls.UNKNOWN)


_TITLE_TYPES_BY_TOKEN = {member.value.lower(): member for member in TitleType}


@dataclass(frozen=True)
class TitleBasics:
    """
    Ligne du dataset title.basics.

    Attributs:
        tconst: Identifiant IMDb (ex: "tt0133093")
        title_type: Type de titre
        primary_title: Titre principal ("" si absent)
        original_title: Titre original ("" si absent)
        is_adult: Contenu pour adultes
        start_year: Annee de sortie ou de debut
        end_year: Annee de fin (series)
        runtime_minutes: Duree en minutes
        genres: Genres (jusqu'a trois dans le dataset)
    """

    tconst: str
    title_type: TitleType = TitleType.UNKNOWN
    primary_title: str = ""
    original_title: str = ""
    is_adult: bool = False
    start_year: Optional[int] = None
    end_year: Optional[int] = None
    runtime_minutes: Optional[int] = None
    genres: tuple[str, ...] = ()


@dataclass(frozen=True)
class EpisodeLink:
    """
    Rattachement d'un episode a sa serie.

    Attributs:
        tconst: Identifiant IMDb de l'episode
        parent_tconst: Identifiant IMDb de la serie
        season_number: Numero de saison (None si inconnu)
        episode_number: Numero d'episode (None si inconnu)
    """

    tconst: str
    parent_tconst: str
    season_number: Optional[int] = None
    episode_number: Optional[int] = None
