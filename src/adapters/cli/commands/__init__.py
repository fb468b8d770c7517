"""Sous-package CLI commands - re-exporte les commandes publiques."""

from src.adapters.cli.commands.sync_commands import (
    stats,
    sync,
)

__all__ = [
    "stats",
    "sync",
]
