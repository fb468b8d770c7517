"""
Tests pour la construction de l'index de rattachement des episodes.
"""

import pytest

from src.adapters.imdb.linkage_index import LinkageIndex, build_linkage_index
from src.adapters.imdb.tsv_parser import read_lines
from src.core.exceptions import CorruptDataset
from tests.fixtures.imdb_datasets import (
    EPISODE_HEADER,
    EPISODE_LINES,
    SIMPSONS_LINK_LINE,
    write_gz,
)


class TestBuildLinkageIndex:
    """Tests pour build_linkage_index."""

    def test_builds_index_from_file(self, tmp_path):
        """L'index contient les episodes rattaches a une serie."""
        file_path = write_gz(tmp_path / "title.episode.tsv.gz", EPISODE_LINES)

        index = build_linkage_index(read_lines(file_path))

        assert len(index) == 1
        link = index.get("tt0583459")
        assert link.parent_tconst == "tt0096697"
        assert link.season_number == 5
        assert link.episode_number == 3

    def test_skips_null_parent_and_ragged_rows(self):
        lines = [
            EPISODE_HEADER,
            "tt0041951\t\\N\t\\N\t\\N",
            "tt0000003\ttt0000004",
            SIMPSONS_LINK_LINE,
        ]

        index = build_linkage_index(lines)

        assert "tt0041951" not in index
        assert "tt0000003" not in index
        assert "tt0583459" in index

    def test_last_write_wins_on_duplicates(self):
        lines = [SIMPSONS_LINK_LINE, "tt0583459\ttt0096697\t6\t1"]

        index = build_linkage_index(lines)

        assert len(index) == 1
        assert index.get("tt0583459").season_number == 6

    def test_missing_key_returns_none(self):
        assert LinkageIndex().get("tt0000000") is None

    def test_read_failure_propagates(self):
        """Une erreur de lecture interrompt la construction (fail fast)."""

        def failing_lines():
            yield EPISODE_HEADER
            yield SIMPSONS_LINK_LINE
            raise CorruptDataset("title.episode.tsv.gz")

        with pytest.raises(CorruptDataset):
            build_linkage_index(failing_lines())
