"""
Parser pour les fichiers TSV des datasets IMDb.

Les datasets IMDb sont distribues sous forme de fichiers TSV compresses (.tsv.gz).
Ce parser gere la lecture de ces fichiers en mode streaming pour minimiser
l'utilisation memoire : une seule ligne decompressee est en memoire a la fois.

Conventions du dataset:
- separateur: tabulation
- premiere ligne: en-tete (premier champ "tconst")
- valeur nulle: \\N

Les lignes tronquees ou malformees sont ignorees, jamais rejetees :
les datasets publics contiennent regulierement des lignes partielles.

Datasets supportes:
- title.basics.tsv.gz: Informations de base (titre, annee, duree, genres)
- title.episode.tsv.gz: Rattachement des episodes (serie, saison, episode)

Documentation: https://www.imdb.com/interfaces/
"""

import gzip
import re
import zlib
from collections.abc import Iterator
from contextlib import closing
from pathlib import Path
from typing import Optional

from src.core.exceptions import CorruptDataset
from src.core.value_objects.imdb_records import EpisodeLink, TitleBasics, TitleType


NULL_SENTINEL = "\\N"
HEADER_TOKEN = "tconst"

BASICS_MIN_FIELDS = 9
EPISODE_MIN_FIELDS = 4

# Entier decimal ASCII, signe et espaces autour toleres
_INT_PATTERN = re.compile(r"\s*[+-]?[0-9]+\s*", re.ASCII)


def read_lines(file_path: Path) -> Iterator[str]:
    """
    Lit un fichier TSV (compresse ou non) ligne par ligne.

    Le fichier est decompresse a la volee. Chaque appel rouvre le fichier.

    Args:
        file_path: Chemin vers le fichier TSV

    Yields:
        Lignes sans leur fin de ligne

    Raises:
        FileNotFoundError: Si le fichier n'existe pas
        CorruptDataset: Si le flux compresse est illisible
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Fichier non trouve: {file_path}")

    open_fn = gzip.open if file_path.suffix == ".gz" else open

    try:
        with open_fn(file_path, "rt", encoding="utf-8", errors="replace", newline="") as f:
            for line in f:
                yield line.rstrip("\r\n")
    except (EOFError, zlib.error, OSError) as exc:
        # gzip.BadGzipFile herite de OSError
        raise CorruptDataset(file_path, str(exc)) from exc


class TSVParser:
    """
    Parser pour les fichiers TSV des datasets IMDb.

    Les methodes parse_*_line traitent une ligne et retournent None quand
    la ligne doit etre ignoree (en-tete, champs manquants, pas de parent).
    """

    def parse_basics(self, file_path: Path) -> Iterator[TitleBasics]:
        """
        Parse le fichier title.basics.tsv(.gz).

        Format du fichier:
        tconst    titleType    primaryTitle    originalTitle    isAdult    startYear    endYear    runtimeMinutes    genres
        tt0499549    movie    Avatar    Avatar    0    2009    \\N    162    Action,Adventure,Fantasy
        """
        with closing(read_lines(file_path)) as lines:
            for line in lines:
                record = self.parse_basics_line(line)
                if record is not None:
                    yield record

    def parse_basics_line(self, line: str) -> Optional[TitleBasics]:
        """Parse une ligne de title.basics, None si elle doit etre ignoree."""
        parts = line.split("\t")
        if len(parts) < BASICS_MIN_FIELDS or parts[0] == HEADER_TOKEN:
            return None

        return TitleBasics(
            tconst=parts[0],
            title_type=TitleType.from_token(parts[1]),
            primary_title=self._null_to_empty(parts[2]),
            original_title=self._null_to_empty(parts[3]),
            is_adult=parts[4] == "1",
            start_year=self._parse_int(parts[5]),
            end_year=self._parse_int(parts[6]),
            runtime_minutes=self._parse_int(parts[7]),
            genres=self._parse_genres(parts[8]),
        )

    def parse_episode_line(self, line: str) -> Optional[EpisodeLink]:
        """
        Parse une ligne de title.episode.

        Les episodes sans serie parente (\\N) sont ignores.
        """
        parts = line.split("\t")
        if len(parts) < EPISODE_MIN_FIELDS or parts[0] == HEADER_TOKEN:
            return None

        parent = parts[1]
        if parent == NULL_SENTINEL or not parent:
            return None

        return EpisodeLink(
            tconst=parts[0],
            parent_tconst=parent,
            season_number=self._parse_int(parts[2]),
            episode_number=self._parse_int(parts[3]),
        )

    @staticmethod
    def _null_to_empty(value: str) -> str:
        return "" if value == NULL_SENTINEL else value

    @staticmethod
    def _parse_int(value: str) -> int | None:
        """
        Parse une valeur entiere, retourne None pour \\N ou une valeur invalide.

        "1_000" et les chiffres non ASCII sont refuses, contrairement a int().
        """
        if not value or value == NULL_SENTINEL or not _INT_PATTERN.fullmatch(value):
            return None
        return int(value)

    @staticmethod
    def _parse_genres(value: str) -> tuple[str, ...]:
        if not value or value == NULL_SENTINEL:
            return ()
        return tuple(genre.strip() for genre in value.split(",") if genre.strip())
