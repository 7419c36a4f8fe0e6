"""
Tests unitaires pour la relance des requetes limitees en debit.

Ces tests verifient:
- RateLimitError capture le delai Retry-After
- send_with_retry relance sur 429 et propage les autres erreurs
- L'attente respecte Retry-After dans la limite de max_wait
"""

from unittest.mock import MagicMock

import httpx
import pytest
import respx

from cinelog.adapters.api.retry import (
    RateLimitError,
    parse_retry_after,
    send_with_retry,
    wait_retry_after,
)

URL = "https://api.example.org/rest/v1/diary"


class TestRateLimitError:
    """Tests pour RateLimitError et parse_retry_after."""

    def test_stores_retry_after(self) -> None:
        """RateLimitError stocke la valeur Retry-After."""
        error = RateLimitError(retry_after=30)
        assert error.retry_after == 30
        assert "30" in str(error)

    def test_parse_retry_after(self) -> None:
        """Seule la forme en secondes est comprise."""
        assert parse_retry_after("12") == 12.0
        assert parse_retry_after(None) is None
        assert parse_retry_after("Wed, 21 Oct 2015 07:28:00 GMT") is None


class TestWaitRetryAfter:
    """Tests pour la strategie d'attente."""

    def _state(self, error: Exception) -> MagicMock:
        state = MagicMock()
        state.attempt_number = 1
        state.outcome.exception.return_value = error
        return state

    def test_honours_retry_after_within_cap(self) -> None:
        """Retry-After plus long que le backoff est respecte."""
        assert wait_retry_after(max_wait=60)(self._state(RateLimitError(20))) == 20

    def test_caps_retry_after(self) -> None:
        """Retry-After est plafonne a max_wait."""
        assert wait_retry_after(max_wait=5)(self._state(RateLimitError(120))) == 5


class TestSendWithRetry:
    """Tests pour send_with_retry."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_retries_on_429(self) -> None:
        """Un 429 suivi d'un 200 aboutit."""
        route = respx.get(URL).mock(
            side_effect=[
                httpx.Response(429, headers={"Retry-After": "0"}),
                httpx.Response(200, json=[]),
            ]
        )
        async with httpx.AsyncClient() as client:
            response = await send_with_retry(client, "GET", URL, max_wait=0)

        assert response.status_code == 200
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_gives_up_after_max_attempts(self) -> None:
        """RateLimitError remonte apres epuisement des tentatives."""
        route = respx.get(URL).mock(return_value=httpx.Response(429))
        async with httpx.AsyncClient() as client:
            with pytest.raises(RateLimitError):
                await send_with_retry(client, "GET", URL, max_attempts=3, max_wait=0)

        assert route.call_count == 3

    @pytest.mark.asyncio
    @respx.mock
    async def test_other_errors_are_not_retried(self) -> None:
        """Une erreur 500 est propagee immediatement."""
        route = respx.get(URL).mock(return_value=httpx.Response(500))
        async with httpx.AsyncClient() as client:
            with pytest.raises(httpx.HTTPStatusError):
                await send_with_retry(client, "GET", URL, max_wait=0)

        assert route.call_count == 1
