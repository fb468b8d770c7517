"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- TitleType : Type de titre IMDb (movie, tvSeries, tvEpisode...)
- TitleBasics : Ligne du dataset title.basics
- EpisodeLink : Ligne du dataset title.episode
"""

from src.core.value_objects.imdb_records import (
    EpisodeLink,
    TitleBasics,
    TitleType,
)

__all__ = [
    "EpisodeLink",
    "TitleBasics",
    "TitleType",
]
