"""Async HTTP client with browser-like headers."""

import logging
from typing import Optional

import httpx

from seo_snapshot.config import FetchConfig
from seo_snapshot.models import FetchResult

logger = logging.getLogger(__name__)


class HttpFetcher:
    """Performs GET/HEAD requests and reports status, headers and body.

    One fetcher owns one httpx.AsyncClient. Use it as an async context
    manager so the connection pool is closed after the snapshot:

        async with HttpFetcher(config) as fetcher:
            result = await fetcher.fetch("https://example.com")
    """

    def __init__(
        self,
        config: Optional[FetchConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the fetcher.

        Args:
            config: Request configuration (headers, timeouts, redirects)
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests
        """
        self.config = config or FetchConfig()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "HttpFetcher":
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers=self.config.headers,
                follow_redirects=self.config.follow_redirects,
                timeout=self.config.timeout,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch(
        self,
        url: str,
        method: str = "GET",
        timeout: Optional[float] = None,
    ) -> FetchResult:
        """Request a URL.

        Args:
            url: URL to request
            method: HTTP method (GET or HEAD)
            timeout: Per-request timeout override in seconds

        Returns:
            FetchResult with status, lower-cased headers and decoded body

        Raises:
            httpx.HTTPError: On transport failures and timeouts
        """
        client = self._ensure_client()
        request_timeout = timeout if timeout is not None else self.config.timeout

        logger.debug(f"{method} {url}")
        response = await client.request(method, url, timeout=request_timeout)

        # Repeated headers are joined with ", " by httpx.Headers.__getitem__
        headers = {key: response.headers[key] for key in response.headers.keys()}

        return FetchResult(
            status_code=response.status_code,
            headers=headers,
            body=response.text if method.upper() != "HEAD" else "",
            url=str(response.url),
        )

    async def head(self, url: str, timeout: Optional[float] = None) -> FetchResult:
        return await self.fetch(url, method="HEAD", timeout=timeout)
