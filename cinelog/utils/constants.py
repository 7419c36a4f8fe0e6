"""
Constantes globales pour CineLog.

Ce module contient les constantes utilisees par le moteur de statistiques:
- Domaine des notes etoiles et des notes detaillees
- Libelles des mois et des jours de la semaine
- Valeurs par defaut du cache de snapshots
- Vocabulaire des tags (courts metrages)
"""

# Format canonique des dates du journal (yyyy-MM-dd)
WATCH_DATE_FORMAT = "%Y-%m-%d"

# Domaine fixe de l'histogramme des notes etoiles (0.5 a 5.0 par pas de 0.5)
STAR_RATING_DOMAIN = tuple(step / 2 for step in range(1, 11))

# Domaine de l'histogramme des notes detaillees (entiers 0 a 100)
DETAILED_RATING_MIN = 0
DETAILED_RATING_MAX = 100

# Seuil "5 etoiles"
FIVE_STAR_THRESHOLD = 5.0

# Libelles courts des mois (index 0 = janvier)
MONTH_SHORT_LABELS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

# Jours de la semaine ISO (index 0 = lundi = 1)
WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

# Tag identifiant un court metrage (apres normalisation)
SHORT_FILM_TAG = "short"

# Libelle des lieux sans groupe
UNGROUPED_LABEL = "Ungrouped"

# Cache de snapshots : 10 minutes, 5 scopes
DEFAULT_CACHE_TTL_SECONDS = 600
DEFAULT_CACHE_MAX_ENTRIES = 5

# Nombre de films exposes dans le top des plus vus
DEFAULT_TOP_WATCHED_LIMIT = 6

# Nombre minimum de notes pour qu'un mois entre au classement des meilleurs mois
MIN_RATINGS_PER_MONTH = 2
