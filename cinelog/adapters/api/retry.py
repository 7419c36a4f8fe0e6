"""
Relance des requetes HTTP limitees en debit (429).

Seul le code 429 est relance, avec un backoff exponentiel aleatoire et en
respectant l'en-tete Retry-After quand il est fourni. Toute autre erreur
HTTP est propagee immediatement.

Usage:
    response = await send_with_retry(client, "GET", "/diary", params=params)
"""

from typing import Optional

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)


class RateLimitError(Exception):
    """
    Le serveur a repondu 429 Too Many Requests.

    Attributes:
        retry_after: Delai demande par le serveur en secondes, ou None.
    """

    def __init__(self, retry_after: Optional[float] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    """Delai en secondes de l'en-tete Retry-After (forme date non geree)."""
    if not value:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        return None


class wait_retry_after:
    """
    Strategie d'attente tenacity : Retry-After du serveur s'il est plus long
    que le backoff exponentiel, le tout plafonne a max_wait.
    """

    def __init__(self, max_wait: float = 60) -> None:
        self._max_wait = max_wait
        self._fallback = wait_random_exponential(multiplier=1, min=min(1, max_wait), max=max_wait)

    def __call__(self, retry_state: RetryCallState) -> float:
        backoff = self._fallback(retry_state)
        error = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(error, RateLimitError) and error.retry_after is not None:
            return min(max(backoff, error.retry_after), self._max_wait)
        return backoff


async def send_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 5,
    max_wait: float = 60,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP, relancee sur 429.

    Args:
        client: Client httpx async
        method: Methode HTTP
        url: URL (relative a la base_url du client)
        max_attempts: Nombre maximum de tentatives
        max_wait: Attente maximale entre deux tentatives en secondes
        **kwargs: Arguments passes a client.request()

    Returns:
        La reponse en cas de succes

    Raises:
        RateLimitError: Si 429 apres epuisement des tentatives
        httpx.HTTPStatusError: Pour les autres erreurs HTTP
    """
    async for attempt in AsyncRetrying(
        retry=retry_if_exception_type(RateLimitError),
        wait=wait_retry_after(max_wait),
        stop=stop_after_attempt(max_attempts),
        reraise=True,
    ):
        with attempt:
            response = await client.request(method, url, **kwargs)
            if response.status_code == 429:
                raise RateLimitError(parse_retry_after(response.headers.get("Retry-After")))
            response.raise_for_status()
    return response
