"""
Utilitaires partages pour les commandes CLI de CineLog.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container et liberant ses ressources
"""

from contextlib import contextmanager
from functools import wraps

from loguru import logger as loguru_logger
from rich.console import Console

from cinelog.container import Container

console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("cinelog")
    try:
        yield
    finally:
        loguru_logger.enable("cinelog")


def with_container():
    """
    Decorateur qui injecte un container en premier argument.

    A la sortie, les adaptateurs du service de statistiques sont fermes
    (seul le backend choisi par la configuration a ete construit) et les
    ressources initialisees du container, dont le cache disque, sont liberees.

    Usage:
        @with_container()
        async def my_command(container, ...):
            service = container.statistics_service()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            try:
                return await func(container, *args, **kwargs)
            finally:
                await container.statistics_service().aclose()
                container.shutdown_resources()
        return wrapper
    return decorator
