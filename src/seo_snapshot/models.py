"""Data models for page snapshots."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from seo_snapshot.constants import BROKEN_STATUS_THRESHOLD


@dataclass
class FetchResult:
    """Outcome of a single HTTP request."""

    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)  # Lower-cased names
    body: str = ""
    url: Optional[str] = None  # Final URL after redirects


@dataclass
class AcquiredPage:
    """The HTML that was actually analyzed, and how it was obtained."""

    html: str
    final_status: int
    prerendered: bool = False
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class Heading:
    """A non-empty h1-h6 heading."""

    level: int
    text: str

    @property
    def tag(self) -> str:
        return f"h{self.level}"

    def to_dict(self) -> dict:
        return {"tag": self.tag, "text": self.text}


class LinkClassification(Enum):
    """Whether a link stays on the page's host."""

    INTERNAL = "internal"
    EXTERNAL = "external"


@dataclass
class LinkRecord:
    """A classified anchor."""

    raw_href: str
    resolved_url: Optional[str]
    is_nofollow: bool
    classification: LinkClassification

    @property
    def is_external(self) -> bool:
        return self.classification is LinkClassification.EXTERNAL


@dataclass
class LinkStats:
    """Link counts for a page."""

    internal_links: int = 0
    external_links: int = 0
    nofollow_count: int = 0
    broken_count: int = 0

    def to_dict(self) -> dict:
        return {
            "internalLinks": self.internal_links,
            "externalLinks": self.external_links,
            "nofollowCount": self.nofollow_count,
            "brokenCount": self.broken_count,
        }


@dataclass
class ProbeOutcome:
    """Result of a HEAD probe against one external link.

    A probe either completed with a status code (ok=True) or failed with a
    reason (ok=False). Failed probes and error statuses both count as broken.
    """

    url: str
    ok: bool
    status_code: Optional[int] = None
    reason: Optional[str] = None

    @property
    def broken(self) -> bool:
        if not self.ok:
            return True
        return self.status_code is not None and self.status_code >= BROKEN_STATUS_THRESHOLD

    @classmethod
    def failed(cls, url: str, reason: str) -> "ProbeOutcome":
        return cls(url=url, ok=False, reason=reason)


@dataclass
class JsonLdEntity:
    """Type and name of one top-level JSON-LD object."""

    type: Optional[str] = None
    name: Optional[str] = None

    def to_dict(self) -> dict:
        return {"type": self.type, "name": self.name}


@dataclass
class HrefLangEntry:
    """A <link rel="alternate" hreflang> declaration."""

    hreflang: str
    href: str

    def to_dict(self) -> dict:
        return {"hreflang": self.hreflang, "href": self.href}


@dataclass
class ImageAudit:
    """Alt-text coverage of <img> elements."""

    total: int = 0
    with_alt: int = 0
    missing_alt: int = 0


@dataclass
class ExtractedDocument:
    """Structural signals derived from one HTML document."""

    title: Optional[str] = None
    meta_description: Optional[str] = None
    canonical: Optional[str] = None
    lang: Optional[str] = None
    page_size_kb: float = 0.0
    word_count: int = 0
    images: ImageAudit = field(default_factory=ImageAudit)
    meta_tags: Dict[str, str] = field(default_factory=dict)
    og_tags: Dict[str, str] = field(default_factory=dict)
    headings: List[Heading] = field(default_factory=list)
    heading_counts: Dict[str, int] = field(default_factory=dict)
    json_ld: List[JsonLdEntity] = field(default_factory=list)
    hreflangs: List[HrefLangEntry] = field(default_factory=list)
    robots_directives: List[str] = field(default_factory=list)
    canonical_status: str = "missing"  # self/different/missing
    anchors: List[Any] = field(default_factory=list)  # bs4 <a href> tags


@dataclass(frozen=True)
class SEOSummary:
    """Derived diagnostics, computed once per page."""

    title_length: int
    title_too_long: bool
    meta_description_length: int
    meta_description_too_long: bool
    h1_count: int
    images_with_alt: int
    images_missing_alt: int
    robots_directives: tuple
    canonical_status: str
    has_og_tags: bool
    has_json_ld: bool
    word_count: int
    internal_links: int
    external_links: int
    nofollow_count: int
    broken_count: int

    def to_dict(self) -> dict:
        return {
            "titleLength": self.title_length,
            "titleTooLong": self.title_too_long,
            "metaDescriptionLength": self.meta_description_length,
            "metaDescriptionTooLong": self.meta_description_too_long,
            "h1Count": self.h1_count,
            "imagesWithAlt": self.images_with_alt,
            "imagesMissingAlt": self.images_missing_alt,
            "robotsDirectives": list(self.robots_directives),
            "canonicalStatus": self.canonical_status,
            "hasOgTags": self.has_og_tags,
            "hasJsonLd": self.has_json_ld,
            "wordCount": self.word_count,
            "internalLinks": self.internal_links,
            "externalLinks": self.external_links,
            "nofollowCount": self.nofollow_count,
            "brokenCount": self.broken_count,
        }


@dataclass
class PageProfile:
    """Complete snapshot of a page."""

    url: str
    title: Optional[str] = None
    meta_description: Optional[str] = None
    canonical: Optional[str] = None
    lang: Optional[str] = None
    page_size_kb: float = 0.0
    word_count: int = 0
    image_count: int = 0
    meta_tags: Dict[str, str] = field(default_factory=dict)
    og_tags: Dict[str, str] = field(default_factory=dict)
    headings: List[Heading] = field(default_factory=list)
    heading_counts: Dict[str, int] = field(default_factory=dict)
    link_stats: LinkStats = field(default_factory=LinkStats)
    json_ld: List[JsonLdEntity] = field(default_factory=list)
    hreflangs: List[HrefLangEntry] = field(default_factory=list)
    seo: Optional[SEOSummary] = None
    prerendered: bool = False

    def to_dict(self) -> dict:
        """Convert to the JSON response shape."""
        return {
            "url": self.url,
            "title": self.title,
            "metaDescription": self.meta_description,
            "canonical": self.canonical,
            "lang": self.lang,
            "pageSizeKb": self.page_size_kb,
            "wordCount": self.word_count,
            "imageCount": self.image_count,
            "metaTags": dict(self.meta_tags),
            "ogTags": dict(self.og_tags),
            "headings": [h.to_dict() for h in self.headings],
            "headingCounts": dict(self.heading_counts),
            "linkStats": self.link_stats.to_dict(),
            "jsonLd": [entity.to_dict() for entity in self.json_ld],
            "hreflangs": [entry.to_dict() for entry in self.hreflangs],
            "seo": self.seo.to_dict() if self.seo else None,
            "prerendered": self.prerendered,
        }
