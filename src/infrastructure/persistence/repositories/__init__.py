"""
Implementations SQLModel des ports de persistance.

Ce module contient l'implementation concrete de l'interface ICatalogStore
definie dans src/core/ports/catalog_store.py, utilisant SQLModel pour
la persistance SQLite.

Le store :
- Herite de l'interface ABC du domaine
- Recoit une session SQLModel via injection de dependances
- Convertit entre entites de domaine (dataclass) et modeles DB (SQLModel)
"""

from src.infrastructure.persistence.repositories.catalog_store import (
    SQLModelCatalogStore,
)

__all__ = [
    "SQLModelCatalogStore",
]
