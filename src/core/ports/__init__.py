"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

Les ports sont les frontieres de l'architecture hexagonale. Ils definissent
ce dont le domaine a besoin du monde exterieur sans specifier
comment ces besoins sont satisfaits.

- ICatalogStore : Store du catalogue (bibliotheques, elements, validation)
- IDatasetTransport : Telechargement des datasets
"""

from src.core.ports.catalog_store import ICatalogStore
from src.core.ports.transport import IDatasetTransport

__all__ = [
    "ICatalogStore",
    "IDatasetTransport",
]
