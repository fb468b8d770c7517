"""
Point d'entrée CLI de CatalogSync.

Initialise le container DI, configure le logging et fournit les commandes CLI.
La commande sync est l'unité de travail déclenchée manuellement : elle
affiche une progression 0-100 et s'annule proprement avec Ctrl-C.
"""

from typing import Annotated

import typer
from loguru import logger

from .adapters.cli.commands import stats, sync
from .config import Settings
from .container import Container
from .logging_config import configure_logging, resolve_log_level

__version__ = "0.1.0"

app = typer.Typer(
    name="catalogsync",
    help="Import du catalogue IMDb dans la bibliothèque locale",
)
container = Container()


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """CatalogSync - Import du catalogue IMDb."""
    settings = get_config()
    configure_logging(
        log_level=resolve_log_level(settings.log_level, verbose, quiet),
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


app.command()(sync)
app.command()(stats)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle et le contenu du cache."""
    config = get_config()
    typer.echo(f"Cache des datasets : {config.cache_dir}")
    typer.echo(f"Source : {config.datasets_base_url}")
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"Films : {config.movies_library_name} ({config.movies_library_path})")
    typer.echo(f"Séries : {config.shows_library_name} ({config.shows_library_path})")
    typer.echo(f"Taille des batchs : {config.batch_size}")
    typer.echo(f"Épisodes : {'activés' if config.include_episodes else 'désactivés'}")
    typer.echo(f"Niveau de log : {config.log_level}")

    cached = container.dataset_cache().cached_files()
    if not cached:
        typer.echo("Aucun dataset en cache.")
    for path in cached:
        size_mb = path.stat().st_size / (1024 * 1024)
        typer.echo(f"  {path.name} : {size_mb:.1f} Mo")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"CatalogSync v{__version__}")


def main() -> None:
    """Point d'entrée de l'application."""
    logger.debug("Démarrage de CatalogSync", version=__version__)
    app()


if __name__ == "__main__":
    main()
