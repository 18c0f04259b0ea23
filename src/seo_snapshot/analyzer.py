"""Snapshot pipeline: acquisition, extraction, link probing and SEO summary."""

import logging
from typing import Optional

import httpx

from seo_snapshot.acquisition import PageAcquirer
from seo_snapshot.config import AnalysisThresholds, FetchConfig, default_thresholds
from seo_snapshot.detector import PageClassifier
from seo_snapshot.exceptions import MissingInputError
from seo_snapshot.extractor import DocumentExtractor
from seo_snapshot.fetcher import HttpFetcher
from seo_snapshot.links import LinkProber, classify_and_probe
from seo_snapshot.models import PageProfile
from seo_snapshot.summary import build_seo_summary

logger = logging.getLogger(__name__)


class SnapshotAnalyzer:
    """Builds a PageProfile for a single URL."""

    def __init__(
        self,
        config: Optional[FetchConfig] = None,
        thresholds: Optional[AnalysisThresholds] = None,
        classifier: Optional[PageClassifier] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the analyzer.

        Args:
            config: Fetch configuration (headers, timeouts, prerender proxy)
            thresholds: Detection, probing and summary thresholds
            classifier: Optional replacement for the block/shell classifier
            transport: Optional httpx transport shared by every request
        """
        self.config = config or FetchConfig()
        self.thresholds = thresholds or default_thresholds
        self.classifier = classifier
        self.transport = transport
        self.extractor = DocumentExtractor()

    async def snapshot(self, url: Optional[str], force_prerender: bool = False) -> PageProfile:
        """Fetch and analyze a page.

        Args:
            url: Page URL
            force_prerender: Re-fetch through the rendering proxy unconditionally

        Returns:
            PageProfile

        Raises:
            MissingInputError: No URL given
            BlockedError: Bot-check, error status or timeout on the primary fetch
            AcquisitionError: Transport failure
        """
        if not url or not url.strip():
            raise MissingInputError()

        logger.info(f"Snapshot {url} (prerender={'forced' if force_prerender else 'auto'})")

        async with HttpFetcher(self.config, transport=self.transport) as fetcher:
            acquirer = PageAcquirer(
                fetcher,
                thresholds=self.thresholds,
                classifier=self.classifier,
            )
            page = await acquirer.acquire(url, force_prerender=force_prerender)

            document = self.extractor.extract(page.html, url, page.headers)

            prober = LinkProber(fetcher, thresholds=self.thresholds)
            link_stats = await classify_and_probe(document.anchors, url, prober)

        seo = build_seo_summary(document, link_stats, self.thresholds)

        return PageProfile(
            url=url,
            title=document.title,
            meta_description=document.meta_description,
            canonical=document.canonical,
            lang=document.lang,
            page_size_kb=document.page_size_kb,
            word_count=document.word_count,
            image_count=document.images.total,
            meta_tags=document.meta_tags,
            og_tags=document.og_tags,
            headings=document.headings,
            heading_counts=document.heading_counts,
            link_stats=link_stats,
            json_ld=document.json_ld,
            hreflangs=document.hreflangs,
            seo=seo,
            prerendered=page.prerendered,
        )
