"""
Commandes CLI de synchronisation du catalogue IMDb (sync, stats).
"""

import asyncio
from typing import Annotated

import typer
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from src.adapters.cli.helpers import console, install_cancel_handler, suppress_loguru, with_container
from src.adapters.imdb.dataset_cache import BASICS_DATASET, EPISODE_DATASET
from src.core.entities.catalog import EntityKind
from src.core.exceptions import CatalogSyncError, SyncCancelled
from src.services.catalog_sync import CancellationToken, SyncStats


def sync(
    refresh: Annotated[
        bool,
        typer.Option(
            "--refresh", "-r",
            help="Supprime les datasets en cache et les re-telecharge",
        ),
    ] = False,
    no_episodes: Annotated[
        bool,
        typer.Option(
            "--no-episodes",
            help="N'importe ni saisons ni episodes (pas de title.episode)",
        ),
    ] = False,
) -> None:
    """Importe le catalogue IMDb (films, series, saisons, episodes)."""
    stats = asyncio.run(_sync_async(refresh, no_episodes))
    if stats is None:
        raise typer.Exit(code=1)


@with_container()
async def _sync_async(container, refresh: bool, no_episodes: bool) -> SyncStats | None:
    """Implementation async de la commande sync."""
    if refresh:
        cache = container.dataset_cache()
        for name in (BASICS_DATASET, EPISODE_DATASET):
            cache.invalidate(name)

    service = container.catalog_sync_service()
    if no_episodes:
        service.config.include_episodes = False

    token = CancellationToken()
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
    ) as progress, install_cancel_handler(token):
        task = progress.add_task("[cyan]Synchronisation du catalogue...", total=100)

        def report(percent: float) -> None:
            progress.update(task, completed=percent)

        try:
            stats = await service.run(progress=report, cancel_token=token)
        except SyncCancelled:
            console.print("[yellow]Synchronisation annulee.[/yellow] Les batchs deja ecrits sont conserves.")
            return None
        except CatalogSyncError as exc:
            console.print(f"[red]Echec ({exc.kind}):[/red] {exc}")
            return None

    with suppress_loguru():
        _print_summary(stats, container.catalog_store().count_by_kind())
    return stats


def _print_summary(stats: SyncStats, catalog_counts: dict[EntityKind, int]) -> None:
    console.print("\n[bold]Resume de la synchronisation:[/bold]")
    console.print(f"  [cyan]{stats.rows_read:,}[/cyan] lignes lues")
    for kind, count in stats.committed.items():
        console.print(f"  [green]{count:,}[/green] ecriture(s) {kind.value} (upserts)")
    if stats.episodes_unplaced:
        console.print(f"  [yellow]{stats.episodes_unplaced:,}[/yellow] episode(s) sans rattachement")
    console.print(f"  [dim]{stats.flushes:,} batch(s), index episodes: {stats.linkage_entries:,} entrees[/dim]")
    console.print("[bold]Contenu du catalogue:[/bold]")
    for kind, count in catalog_counts.items():
        console.print(f"  [green]{count:,}[/green] {kind.value}(s)")


def stats() -> None:
    """Affiche le contenu du catalogue par type d'element."""
    asyncio.run(_stats_async())


@with_container()
async def _stats_async(container) -> None:
    """Implementation async de la commande stats."""
    store = container.catalog_store()
    counts = store.count_by_kind()

    table = Table(title="Catalogue")
    table.add_column("Type", style="cyan")
    table.add_column("Elements", justify="right")
    for kind, count in counts.items():
        table.add_row(kind.value, f"{count:,}")
    console.print(table)

    libraries = store.list_top_level_libraries()
    if not libraries:
        console.print("[yellow]Aucune bibliotheque.[/yellow]")
        console.print("[dim]Utilisez 'catalogsync sync' pour importer le catalogue.[/dim]")
    for library in libraries:
        console.print(f"  {library.name} [dim]({library.collection_type.value}, {library.path})[/dim]")

    last_updated = store.last_updated()
    if last_updated:
        console.print(f"  Derniere mise a jour: [bold]{last_updated}[/bold]")
