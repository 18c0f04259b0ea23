"""Single-page SEO snapshot with prerender fallback and link probing."""

__version__ = "0.1.0"

from seo_snapshot.analyzer import SnapshotAnalyzer
from seo_snapshot.acquisition import PageAcquirer, to_prerender_url
from seo_snapshot.detector import PageVerdict, classify_page, is_blocked, is_shell
from seo_snapshot.extractor import DocumentExtractor
from seo_snapshot.fetcher import HttpFetcher
from seo_snapshot.links import LinkProber, classify_and_probe, classify_links
from seo_snapshot.summary import build_seo_summary
from seo_snapshot.exceptions import (
    SnapshotError,
    MissingInputError,
    BlockedError,
    AcquisitionError,
)
from seo_snapshot.models import (
    FetchResult,
    AcquiredPage,
    Heading,
    LinkRecord,
    LinkStats,
    ProbeOutcome,
    JsonLdEntity,
    HrefLangEntry,
    ImageAudit,
    ExtractedDocument,
    SEOSummary,
    PageProfile,
)
from seo_snapshot.config import settings, FetchConfig, AnalysisThresholds

__all__ = [
    # Core
    "SnapshotAnalyzer",
    "PageAcquirer",
    "to_prerender_url",
    "PageVerdict",
    "classify_page",
    "is_blocked",
    "is_shell",
    "DocumentExtractor",
    "HttpFetcher",
    "LinkProber",
    "classify_and_probe",
    "classify_links",
    "build_seo_summary",
    # Errors
    "SnapshotError",
    "MissingInputError",
    "BlockedError",
    "AcquisitionError",
    # Models
    "FetchResult",
    "AcquiredPage",
    "Heading",
    "LinkRecord",
    "LinkStats",
    "ProbeOutcome",
    "JsonLdEntity",
    "HrefLangEntry",
    "ImageAudit",
    "ExtractedDocument",
    "SEOSummary",
    "PageProfile",
    # Config
    "settings",
    "FetchConfig",
    "AnalysisThresholds",
]
