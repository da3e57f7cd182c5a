import time
from typing import Any, Dict, Mapping, Optional, Protocol

import httpx

from event_stats.core.config import settings
from event_stats.core.logger import get_logger
from event_stats.domain.exceptions import StatisticsFetchError
from shared.utils.retry import retry_async

logger = get_logger("statistics.backend")


class CountingBackend(Protocol):
    """Anything that answers detailed statistics queries."""

    async def get_detailed(self, query: str) -> Mapping[str, Any]: ...


class HttpCountingBackend:
    """Counting backend reached over HTTP.

    Connection pooling, timeouts and transport-level retries live here; the
    statistics service above it never retries.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        path: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (base_url or settings.stats_backend_url).rstrip("/")
        self.path = path or settings.stats_backend_path
        self.retries = settings.stats_backend_retries if retries is None else retries
        self.retry_base_delay = settings.stats_backend_retry_base_delay
        token = token or settings.stats_backend_token
        self._headers: Dict[str, str] = {"Accept": "application/json"}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout or settings.stats_backend_timeout_seconds)
        )

    async def get_detailed(self, query: str) -> Mapping[str, Any]:
        url = f"{self.base_url}{self.path}?{query}"

        async def _request() -> Mapping[str, Any]:
            resp = await self._client.get(url, headers=self._headers)
            resp.raise_for_status()
            return resp.json()

        async def _on_retry(attempt: int, exc: BaseException, sleep_for: float):
            logger.warning(
                "statistics_backend_retry",
                extra={
                    "attempt": attempt,
                    "error": str(exc),
                    "sleep_for": round(sleep_for, 2),
                },
            )

        start = time.perf_counter()
        try:
            payload = await retry_async(
                _request,
                retries=self.retries + 1,
                base_delay=self.retry_base_delay,
                max_delay=4.0,
                jitter=0.2,
                retry_on=(httpx.TransportError,),
                on_retry=_on_retry,
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error(
                "statistics_backend_request_failed",
                extra={
                    "error_type": type(e).__name__,
                    "error": str(e),
                    "path": self.path,
                },
            )
            raise StatisticsFetchError(query=query) from e
        logger.debug(
            "statistics_backend_response",
            extra={"elapsed": round(time.perf_counter() - start, 4)},
        )
        return payload

    async def aclose(self):
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpCountingBackend":
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()
