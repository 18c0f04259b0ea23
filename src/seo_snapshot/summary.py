"""SEO summary derived from extracted page signals."""

from typing import Optional

from seo_snapshot.config import AnalysisThresholds, default_thresholds
from seo_snapshot.models import ExtractedDocument, LinkStats, SEOSummary


def build_seo_summary(
    document: ExtractedDocument,
    link_stats: LinkStats,
    thresholds: Optional[AnalysisThresholds] = None,
) -> SEOSummary:
    """Fold extracted signals into the SEO summary.

    Args:
        document: Extractor output
        link_stats: Classified and probed link counts
        thresholds: Title and description length limits

    Returns:
        SEOSummary
    """
    thresholds = thresholds or default_thresholds

    title_length = len(document.title or "")
    description_length = len(document.meta_description or "")

    return SEOSummary(
        title_length=title_length,
        title_too_long=title_length > thresholds.title_max,
        meta_description_length=description_length,
        meta_description_too_long=description_length > thresholds.meta_description_max,
        h1_count=document.heading_counts.get("h1", 0),
        images_with_alt=document.images.with_alt,
        images_missing_alt=document.images.missing_alt,
        robots_directives=tuple(document.robots_directives),
        canonical_status=document.canonical_status,
        has_og_tags=bool(document.og_tags),
        has_json_ld=bool(document.json_ld),
        word_count=document.word_count,
        internal_links=link_stats.internal_links,
        external_links=link_stats.external_links,
        nofollow_count=link_stats.nofollow_count,
        broken_count=link_stats.broken_count,
    )
