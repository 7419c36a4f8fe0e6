"""
Interface port pour la source du journal de visionnage.

Le moteur ne fait aucune fusion incrementale : la source doit fournir
le journal COMPLET a chaque appel. La pagination eventuelle est de la
responsabilite de l'adaptateur.
"""

from abc import ABC, abstractmethod

from cinelog.core.entities.watch_log import WatchLogEntry


class IWatchLogSource(ABC):
    """
    Interface de recuperation du journal de visionnage.

    Les implementations levent WatchLogUnavailableError si le journal
    ne peut pas etre recupere.
    """

    @abstractmethod
    async def fetch_all(self) -> list[WatchLogEntry]:
        """
        Recupere l'integralite du journal.

        Retourne :
            Toutes les entrees du journal, dans un ordre quelconque
        """
        ...

    async def close(self) -> None:
        """Libere les ressources de l'adaptateur (aucune par defaut)."""
