"""
Adaptateurs pour les datasets IMDb.

Ce module fournit:
- DatasetCache: Telechargement et cache local des datasets
- HttpxDatasetTransport: Transport HTTP en streaming
- TSVParser, read_lines: Lecture en streaming et parsing des fichiers TSV compresses
- LinkageIndex, build_linkage_index: Index de rattachement des episodes
"""

from .dataset_cache import BASICS_DATASET, EPISODE_DATASET, DatasetCache
from .linkage_index import LinkageIndex, build_linkage_index
from .transport import HttpxDatasetTransport
from .tsv_parser import TSVParser, read_lines

__all__ = [
    "BASICS_DATASET",
    "EPISODE_DATASET",
    "DatasetCache",
    "HttpxDatasetTransport",
    "LinkageIndex",
    "TSVParser",
    "build_linkage_index",
    "read_lines",
]
