"""
Derivation des identifiants stables des elements du catalogue.

Les datasets IMDb ne fournissent pas d'identifiant pour les saisons et
les identifiants des autres titres ne sont pas des UUID. Chaque element
recoit donc un UUID version 5 calcule a partir de son type et d'une cle
externe stable : deux executions sur le meme dataset produisent
exactement les memes identifiants, ce qui rend l'import idempotent.
"""

import uuid

from src.core.entities.catalog import EntityKind

# Namespace fixe: ne jamais modifier, sous peine de dupliquer tout le catalogue
CATALOG_NAMESPACE = uuid.UUID("6f0e5a3c-2d1b-5c7e-9a44-1b3f8d2e7c90")


def derive_item_id(kind: EntityKind, key: str) -> uuid.UUID:
    """
    Calcule l'identifiant deterministe d'un element.

    Args:
        kind: Type d'element (film, serie, saison, episode)
        key: Cle externe stable (tconst, ou cle de saison)

    Returns:
        UUID v5 reproductible pour le couple (kind, key)
    """
    return uuid.uuid5(CATALOG_NAMESPACE, f"{kind.value}:{key}")


def season_key(series_tconst: str, season_number: int) -> str:
    """Cle externe d'une saison (le dataset n'en fournit pas)."""
    return f"{series_tconst}:season:{season_number}"


def season_id(series_tconst: str, season_number: int) -> uuid.UUID:
    """Identifiant deterministe d'une saison."""
    return derive_item_id(EntityKind.SEASON, season_key(series_tconst, season_number))


def series_id(series_tconst: str) -> uuid.UUID:
    """Identifiant deterministe d'une serie."""
    return derive_item_id(EntityKind.SERIES, series_tconst)
