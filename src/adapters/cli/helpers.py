"""
Utilitaires partages pour les commandes CLI.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container initialise
- install_cancel_handler : Ctrl-C -> annulation cooperative de la synchronisation
"""

import signal
from contextlib import contextmanager
from functools import wraps

from loguru import logger as loguru_logger
from rich.console import Console

from src.container import Container
from src.services.catalog_sync import CancellationToken

console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("src")
    try:
        yield
    finally:
        loguru_logger.enable("src")


def with_container(requires_db: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    Args:
        requires_db: Si True (defaut), initialise la base de donnees.

    Usage:
        @with_container()
        async def my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            if requires_db:
                container.database.init()
            return await func(container, *args, **kwargs)
        return wrapper
    return decorator


@contextmanager
def install_cancel_handler(token: CancellationToken):
    """
    Redirige Ctrl-C vers le jeton d'annulation pendant le bloc.

    Le premier Ctrl-C demande une annulation cooperative (prise en compte
    a la ligne suivante) ; un second Ctrl-C interrompt immediatement.
    """
    previous = signal.getsignal(signal.SIGINT)

    def _handler(signum, frame):
        if token.cancelled:
            signal.signal(signal.SIGINT, previous)
            raise KeyboardInterrupt
        console.print("\n[yellow]Annulation demandee, arret a la prochaine ligne...[/yellow]")
        token.cancel()

    signal.signal(signal.SIGINT, _handler)
    try:
        yield token
    finally:
        signal.signal(signal.SIGINT, previous)
