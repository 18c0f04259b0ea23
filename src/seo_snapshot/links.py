"""Link classification and broken-link probing."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional
from urllib.parse import urljoin, urlparse, urlsplit, urlunsplit

from seo_snapshot.config import AnalysisThresholds, FetchConfig, default_thresholds
from seo_snapshot.constants import SKIPPED_HREF_PREFIXES
from seo_snapshot.fetcher import HttpFetcher
from seo_snapshot.models import LinkClassification, LinkRecord, LinkStats, ProbeOutcome

logger = logging.getLogger(__name__)

DEFAULT_PORTS = {"http": 80, "https": 443}


def _strip_www(host: str) -> str:
    return host[4:] if host.lower().startswith("www.") else host


def page_host(url: str) -> str:
    """Hostname of a page with any leading www. removed."""
    try:
        host = urlparse(url).hostname
    except ValueError:
        host = None
    return _strip_www(host or "")


def normalize_url(url: str) -> str:
    """Canonical string form of an absolute URL.

    Lower-cases scheme and host, drops the scheme's default port and gives
    an empty http(s) path the root path, so https://Other.com and
    https://other.com:443/ compare equal.

    Raises:
        ValueError: On an unparseable port or IPv6 literal
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()
    if ":" in host:
        host = f"[{host}]"

    netloc = host
    if parts.port is not None and parts.port != DEFAULT_PORTS.get(scheme):
        netloc = f"{host}:{parts.port}"
    if parts.username is not None:
        userinfo = parts.username
        if parts.password is not None:
            userinfo = f"{userinfo}:{parts.password}"
        netloc = f"{userinfo}@{netloc}"

    path = parts.path
    if not path and scheme in DEFAULT_PORTS:
        path = "/"

    return urlunsplit((scheme, netloc, path, parts.query, parts.fragment))


def resolve_href(href: str, page_url: str) -> Optional[str]:
    """Resolve an href against the page URL.

    Returns:
        Normalized absolute URL, or None if it has no usable host
    """
    try:
        resolved = urljoin(page_url, href)
        if not urlparse(resolved).hostname:
            return None
        return normalize_url(resolved)
    except ValueError:
        return None


@dataclass
class ClassifiedLinks:
    """Classified anchors of a page, before probing."""

    records: List[LinkRecord] = field(default_factory=list)
    unique_external: List[str] = field(default_factory=list)  # Encounter order

    @property
    def internal_links(self) -> int:
        return sum(1 for r in self.records if not r.is_external)

    @property
    def external_links(self) -> int:
        return sum(1 for r in self.records if r.is_external)

    @property
    def nofollow_count(self) -> int:
        return sum(1 for r in self.records if r.is_nofollow)


def classify_link(href: str, rel: str, page_url: str, host: str) -> LinkRecord:
    """Classify one href.

    A link is internal when it cannot be resolved to a host, resolves to the
    page's host (ignoring www.), or starts with "#" or "/".
    """
    resolved = resolve_href(href, page_url)
    link_host = _strip_www(urlparse(resolved).hostname) if resolved else None

    if not link_host or link_host == host or href.startswith("#") or href.startswith("/"):
        classification = LinkClassification.INTERNAL
    else:
        classification = LinkClassification.EXTERNAL

    return LinkRecord(
        raw_href=href,
        resolved_url=resolved,
        is_nofollow="nofollow" in rel.lower(),
        classification=classification,
    )


def classify_links(anchors: Iterable, page_url: str) -> ClassifiedLinks:
    """Classify anchor elements and collect unique external URLs.

    Args:
        anchors: BeautifulSoup <a href> tags
        page_url: URL of the page the anchors were found on

    Returns:
        ClassifiedLinks; the external count is per anchor, duplicates included
    """
    host = page_host(page_url)
    classified = ClassifiedLinks()
    seen = set()

    for anchor in anchors:
        href = (anchor.get("href") or "").strip()
        if not href or href.startswith(SKIPPED_HREF_PREFIXES):
            continue

        rel = anchor.get("rel") or ""
        if isinstance(rel, list):  # bs4 splits multi-valued rel
            rel = " ".join(rel)

        record = classify_link(href, rel, page_url, host)
        classified.records.append(record)

        if record.is_external and record.resolved_url not in seen:
            seen.add(record.resolved_url)
            classified.unique_external.append(record.resolved_url)

    return classified


class LinkProber:
    """Concurrently HEAD-probes a capped sample of external links."""

    def __init__(
        self,
        fetcher: HttpFetcher,
        config: Optional[FetchConfig] = None,
        thresholds: Optional[AnalysisThresholds] = None,
    ):
        self.fetcher = fetcher
        self.config = config or fetcher.config
        self.thresholds = thresholds or default_thresholds

    async def _probe_one(self, url: str) -> ProbeOutcome:
        result = await asyncio.wait_for(
            self.fetcher.head(url, timeout=self.config.probe_timeout),
            timeout=self.config.probe_timeout,
        )
        return ProbeOutcome(url=url, ok=True, status_code=result.status_code)

    async def probe(self, urls: List[str]) -> List[ProbeOutcome]:
        """Probe up to max_link_probes URLs, in order.

        Every probe runs to completion; a failing probe never cancels the
        others. URLs past the cap are not probed.

        Args:
            urls: Unique absolute URLs

        Returns:
            One ProbeOutcome per probed URL
        """
        targets = urls[:self.thresholds.max_link_probes]
        if not targets:
            return []

        results = await asyncio.gather(
            *(self._probe_one(url) for url in targets),
            return_exceptions=True,
        )

        outcomes = []
        for url, result in zip(targets, results):
            if isinstance(result, BaseException):
                reason = str(result) or type(result).__name__
                logger.debug(f"Probe failed for {url}: {reason}")
                outcomes.append(ProbeOutcome.failed(url, reason))
            else:
                outcomes.append(result)
        return outcomes


async def classify_and_probe(
    anchors: Iterable,
    page_url: str,
    prober: LinkProber,
) -> LinkStats:
    """Classify a page's anchors and estimate broken external links.

    Args:
        anchors: BeautifulSoup <a href> tags
        page_url: URL of the page
        prober: Prober for the external sample

    Returns:
        LinkStats
    """
    classified = classify_links(anchors, page_url)
    outcomes = await prober.probe(classified.unique_external)
    broken = sum(1 for outcome in outcomes if outcome.broken)

    if outcomes:
        logger.info(
            f"Probed {len(outcomes)}/{len(classified.unique_external)} external links "
            f"on {page_url}: {broken} broken"
        )

    return LinkStats(
        internal_links=classified.internal_links,
        external_links=classified.external_links,
        nofollow_count=classified.nofollow_count,
        broken_count=broken,
    )
