"""
Exceptions du domaine statistiques.

Les echecs des collaborateurs externes (journal, annuaire des lieux) sont
remontes a l'appelant sous forme d'erreurs recuperables. Le moteur ne
relance jamais les appels lui-meme.
"""


class StatisticsError(Exception):
    """Erreur de base du moteur de statistiques."""


class WatchLogUnavailableError(StatisticsError):
    """Le journal de visionnage n'a pas pu etre recupere."""


class LocationDirectoryUnavailableError(StatisticsError):
    """L'annuaire des lieux n'a pas pu etre interroge."""
