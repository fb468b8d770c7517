"""
Index de rattachement des episodes (title.episode).

Construit en une seule passe avant le streaming de title.basics.
C'est la seule structure dont la taille depend du volume du dataset :
elle est bornee par le nombre d'episodes, pas par le nombre total de titres,
et evite une seconde passe sur title.basics.
"""

from collections.abc import Iterable
from typing import Optional

from loguru import logger

from src.adapters.imdb.tsv_parser import TSVParser
from src.core.value_objects.imdb_records import EpisodeLink


class LinkageIndex:
    """Index en lecture seule: tconst de l'episode -> EpisodeLink."""

    def __init__(self, links: Optional[dict[str, EpisodeLink]] = None) -> None:
        self._links: dict[str, EpisodeLink] = links or {}

    def get(self, tconst: str) -> Optional[EpisodeLink]:
        return self._links.get(tconst)

    def __contains__(self, tconst: object) -> bool:
        return tconst in self._links

    def __len__(self) -> int:
        return len(self._links)


def build_linkage_index(
    lines: Iterable[str],
    parser: Optional[TSVParser] = None,
) -> LinkageIndex:
    """
    Construit l'index de rattachement depuis les lignes de title.episode.

    Une erreur de lecture de la source (CorruptDataset...) est propagee :
    un index incomplet classerait silencieusement mal les episodes.

    Args:
        lines: Lignes brutes du dataset (en-tete compris)
        parser: Parser TSV (optionnel)

    Returns:
        LinkageIndex complet
    """
    parser = parser or TSVParser()
    links: dict[str, EpisodeLink] = {}

    for line in lines:
        link = parser.parse_episode_line(line)
        if link is not None:
            links[link.tconst] = link

    logger.info("Index des episodes construit", entries=len(links))
    return LinkageIndex(links)
