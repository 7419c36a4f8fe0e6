"""
CineLog - Moteur local de statistiques d'un journal de visionnage de films.

Ce package calcule en memoire l'ensemble des statistiques derivees d'un
journal de visionnage (distributions, series, projections de rythme,
classements, lieux) et les conserve dans un cache borne a expiration.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, objets valeur)
- services/ : Couche application (calculs statistiques, orchestration, cache)
- adapters/ : Couche infrastructure (fichiers JSON, clients API)
"""
