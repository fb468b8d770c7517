"""
Configuration du logging de l'application via loguru.

Fournit un logging structuré avec :
- Sortie console : lisible par l'humain, colorée, pour suivre une synchronisation
- Sortie fichier : sérialisée en JSON, avec rotation, pour l'analyse des exécutions

Les contextes passés en mots-clés (dataset=..., rows=...) sont conservés
dans le champ "extra" des logs JSON.
"""

import sys
from pathlib import Path

from loguru import logger

_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR")


def resolve_log_level(base_level: str = "INFO", verbose: int = 0, quiet: bool = False) -> str:
    """Calcule le niveau console à partir des options -v/-q de la CLI.

    Chaque -v descend d'un niveau (INFO -> DEBUG -> TRACE), -q ne garde que les erreurs.
    """
    if quiet:
        return "ERROR"
    base = base_level.upper()
    index = _LEVELS.index(base) if base in _LEVELS else _LEVELS.index("INFO")
    return _LEVELS[max(0, index - verbose)]


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/catalogsync.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau de log minimum pour la sortie console (TRACE, DEBUG, INFO, WARNING, ERROR)
        log_file : Chemin vers le fichier de log
        rotation_size : Taille maximale du fichier avant rotation (ex: "10 MB", "1 GB")
        retention_count : Nombre de fichiers rotatifs à conserver
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
            "<level>{message}</level> {extra}"
        ),
        colorize=True,
    )

    # Les traces par ligne (episodes reconstruits) ne vont jamais dans le fichier
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug("Logging configuré", log_file=str(log_file), rotation=rotation_size)
