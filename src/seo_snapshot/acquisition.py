"""Page acquisition: primary fetch, block/shell detection and prerender fallback."""

import logging
import re
from typing import Optional

import httpx

from seo_snapshot.config import AnalysisThresholds, FetchConfig, default_thresholds
from seo_snapshot.constants import BLOCKED_STATUS_THRESHOLD, DEFAULT_PRERENDER_PROXY_URL
from seo_snapshot.detector import PageClassifier, PageVerdict, make_classifier
from seo_snapshot.exceptions import AcquisitionError, BlockedError
from seo_snapshot.fetcher import HttpFetcher
from seo_snapshot.models import AcquiredPage, FetchResult

logger = logging.getLogger(__name__)

SCHEME_PATTERN = re.compile(r"^https?://", re.IGNORECASE)


def to_prerender_url(url: str, proxy_url: str = DEFAULT_PRERENDER_PROXY_URL) -> str:
    """Compose the rendering-proxy URL for a page.

    The scheme is stripped and the rest is appended to the proxy as plain
    http, e.g. https://a.com/x -> https://r.jina.ai/http://a.com/x.
    """
    return f"{proxy_url}http://{SCHEME_PATTERN.sub('', url, count=1)}"


class PageAcquirer:
    """Produces the final HTML for a URL, falling back to a rendering proxy."""

    def __init__(
        self,
        fetcher: HttpFetcher,
        config: Optional[FetchConfig] = None,
        thresholds: Optional[AnalysisThresholds] = None,
        classifier: Optional[PageClassifier] = None,
    ):
        """Initialize the acquirer.

        Args:
            fetcher: HTTP client used for both the primary and prerender fetch
            config: Fetch configuration; defaults to the fetcher's
            thresholds: Detection thresholds for the default classifier
            classifier: Callable FetchResult -> PageVerdict overriding the default
        """
        self.fetcher = fetcher
        self.config = config or fetcher.config
        self.thresholds = thresholds or default_thresholds
        self.classifier = classifier or make_classifier(self.thresholds)

    async def acquire(self, url: str, force_prerender: bool = False) -> AcquiredPage:
        """Fetch a page and decide which HTML to analyze.

        Args:
            url: Page URL
            force_prerender: Always re-fetch through the rendering proxy

        Returns:
            AcquiredPage; prerendered reflects whether the proxy path ran

        Raises:
            BlockedError: Primary fetch returned >= 400, hit a bot-check, or timed out
            AcquisitionError: Transport failure on either fetch
        """
        primary = await self._fetch_primary(url)
        if primary.url and primary.url != url:
            logger.debug(f"{url} redirected to {primary.url}")
        verdict = self.classifier(primary)

        if verdict is PageVerdict.BLOCKED:
            reason = (
                f"HTTP {primary.status_code}"
                if primary.status_code >= BLOCKED_STATUS_THRESHOLD
                else "bot-check"
            )
            logger.warning(f"Blocked fetching {url} ({reason})")
            raise BlockedError(status_code=primary.status_code, reason=reason)

        shell_detected = verdict is PageVerdict.SHELL
        prerendered = force_prerender or shell_detected

        final = primary
        if prerendered:
            if shell_detected:
                logger.info(f"{url} looks like a JavaScript shell ({len(primary.body)} chars), prerendering")
            else:
                logger.info(f"Prerender forced for {url}")
            final = await self._fetch_prerendered(url)

        return AcquiredPage(
            html=final.body,
            final_status=final.status_code,
            prerendered=prerendered,
            headers=final.headers,
        )

    async def _fetch_primary(self, url: str) -> FetchResult:
        try:
            return await self.fetcher.fetch(url, timeout=self.config.timeout)
        except httpx.TimeoutException as e:
            logger.warning(f"Timeout fetching {url} (>{self.config.timeout}s)")
            raise BlockedError(reason="timeout") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Error fetching {url}: {e}")
            raise AcquisitionError(f"Failed to fetch {url}", url=url) from e

    async def _fetch_prerendered(self, url: str) -> FetchResult:
        prerender_url = to_prerender_url(url, self.config.prerender_proxy_url)
        try:
            result = await self.fetcher.fetch(prerender_url, timeout=self.config.timeout)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Prerender fetch failed for {url}: {e}")
            raise AcquisitionError(f"Failed to prerender {url}", url=url) from e

        logger.debug(
            f"Prerender of {url} returned {result.status_code} "
            f"from {result.url} ({len(result.body)} chars)"
        )
        return result
