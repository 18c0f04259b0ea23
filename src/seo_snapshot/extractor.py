"""
Document Extractor

Derives the structural signals of a page from its HTML:
- Title, meta description, canonical and lang
- All meta tags and the Open Graph subset
- Headings h1-h6 and per-level counts
- JSON-LD entities (type and name)
- hreflang alternates
- Word count and image alt-text audit
- Robots directives (meta + X-Robots-Tag)
- Canonical status relative to the requested URL

Each signal is computed by an independent function over one parsed
BeautifulSoup document; DocumentExtractor parses once and folds the results
into an ExtractedDocument.
"""

import json
import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from bs4 import BeautifulSoup
from bs4.element import CData, NavigableString, Script, Stylesheet

from seo_snapshot.constants import HEADING_LEVELS
from seo_snapshot.models import (
    ExtractedDocument,
    Heading,
    HrefLangEntry,
    ImageAudit,
    JsonLdEntity,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Metadata
# =============================================================================

def extract_metadata(soup: BeautifulSoup) -> Tuple[Optional[str], Optional[str], Optional[str], Optional[str]]:
    """Extract title, meta description, canonical href and lang.

    Empty values are reported as None.

    Returns:
        (title, description, canonical, lang)
    """
    title_tag = soup.find("title")
    title = title_tag.get_text() if title_tag else None

    description_tag = soup.select_one('meta[name="description"]')
    description = description_tag.get("content") if description_tag else None

    canonical_tag = soup.select_one('link[rel="canonical"]')
    canonical = canonical_tag.get("href") if canonical_tag else None

    html_tag = soup.find("html")
    lang = html_tag.get("lang") if html_tag else None

    return title or None, description or None, canonical or None, lang or None


def _meta_pairs(soup: BeautifulSoup) -> Iterator[Tuple[str, str]]:
    for meta in soup.find_all("meta"):
        # property is only consulted when name is absent, not when it is empty
        key = meta.get("name")
        if key is None:
            key = meta.get("property")
        value = meta.get("content")
        if key and value:
            yield key.lower(), value


def extract_meta_tags(soup: BeautifulSoup) -> Dict[str, str]:
    """Map every meta name (or property) to its content, last write wins."""
    return dict(_meta_pairs(soup))


def og_subset(meta_tags: Mapping[str, str]) -> Dict[str, str]:
    """Open Graph entries of a meta tag map."""
    return {key: value for key, value in meta_tags.items() if key.startswith("og:")}


# =============================================================================
# Headings
# =============================================================================

def extract_headings(soup: BeautifulSoup) -> List[Heading]:
    """Collect non-empty headings, all h1s first, then h2s, and so on.

    Within a level, headings keep document order.
    """
    headings = []
    for level in HEADING_LEVELS:
        for element in soup.find_all(f"h{level}"):
            text = element.get_text().strip()
            if text:
                headings.append(Heading(level=level, text=text))
    return headings


def heading_counts(headings: List[Heading]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for heading in headings:
        counts[heading.tag] = counts.get(heading.tag, 0) + 1
    return counts


# =============================================================================
# Structured data
# =============================================================================

def _as_text(value: Any) -> Optional[str]:
    if not value:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        # e.g. "@type": ["Article", "NewsArticle"]
        return ", ".join(str(item) for item in value)
    return str(value)


def _json_ld_payloads(soup: BeautifulSoup) -> Iterator[Any]:
    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        raw = (script.string or "").strip()
        try:
            yield json.loads(raw)
        except (json.JSONDecodeError, ValueError) as e:
            logger.debug(f"Skipping malformed JSON-LD block: {e}")


def extract_json_ld(soup: BeautifulSoup) -> List[JsonLdEntity]:
    """Extract type and name of each top-level JSON-LD object.

    Top-level arrays are flattened one level. Blocks that fail to parse and
    items that are not objects are skipped.
    """
    entities = []
    for payload in _json_ld_payloads(soup):
        items = payload if isinstance(payload, list) else [payload]
        for item in items:
            if not isinstance(item, dict):
                continue
            entities.append(JsonLdEntity(
                type=_as_text(item.get("@type") or item.get("type")),
                name=_as_text(item.get("name") or item.get("headline")),
            ))
    return entities


def extract_hreflangs(soup: BeautifulSoup) -> List[HrefLangEntry]:
    entries = []
    for link in soup.select('link[rel="alternate"][hreflang]'):
        hreflang = link.get("hreflang")
        href = link.get("href")
        if hreflang and href:
            entries.append(HrefLangEntry(hreflang=hreflang, href=href))
    return entries


# =============================================================================
# Content
# =============================================================================

def count_words(soup: BeautifulSoup) -> int:
    """Count whitespace-separated tokens in the body's text content.

    Inline <script> and <style> text is counted like any other text; comments
    are not.
    """
    body = soup.body
    if body is None:
        return 0
    text = body.get_text(types=(NavigableString, CData, Script, Stylesheet))
    return len(text.split())


def audit_images(soup: BeautifulSoup) -> ImageAudit:
    images = soup.find_all("img")
    with_alt = sum(1 for img in images if (img.get("alt") or "").strip())
    return ImageAudit(
        total=len(images),
        with_alt=with_alt,
        missing_alt=len(images) - with_alt,
    )


def page_size_kb(html: str) -> float:
    return round(len(html) / 10.24) / 100


# =============================================================================
# Indexing signals
# =============================================================================

def collect_robots_directives(
    meta_tags: Mapping[str, str],
    headers: Optional[Mapping[str, str]] = None,
) -> List[str]:
    """Pool robots directives from meta robots and the X-Robots-Tag header.

    Meta directives come first. Duplicates are kept.
    """
    robots_meta = meta_tags.get("robots", "").lower()
    x_robots = (headers or {}).get("x-robots-tag", "").lower()

    tokens = robots_meta.split(",") + x_robots.split(",")
    return [token.strip() for token in tokens if token.strip()]


def canonical_status(canonical: Optional[str], requested_url: str) -> str:
    """Compare the canonical URL to the requested URL.

    Only a single trailing slash is ignored; scheme and www. differences make
    the canonical "different".

    Returns:
        "missing", "self" or "different"
    """
    if not canonical:
        return "missing"

    def strip_slash(value: str) -> str:
        return value[:-1] if value.endswith("/") else value

    return "self" if strip_slash(canonical) == strip_slash(requested_url) else "different"


class DocumentExtractor:
    """Parses HTML once and derives every structural signal."""

    def __init__(self, parser: str = "lxml"):
        """Initialize the extractor.

        Args:
            parser: BeautifulSoup tree builder
        """
        self.parser = parser

    def parse(self, html: str) -> BeautifulSoup:
        return BeautifulSoup(html, self.parser)

    def extract(
        self,
        html: str,
        page_url: str,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ExtractedDocument:
        """Extract all signals from a page.

        Args:
            html: Page HTML
            page_url: URL the caller requested
            headers: Response headers (lower-cased names) of the analyzed body

        Returns:
            ExtractedDocument
        """
        soup = self.parse(html)

        title, description, canonical, lang = extract_metadata(soup)
        meta_tags = extract_meta_tags(soup)
        headings = extract_headings(soup)

        document = ExtractedDocument(
            title=title,
            meta_description=description,
            canonical=canonical,
            lang=lang,
            page_size_kb=page_size_kb(html),
            word_count=count_words(soup),
            images=audit_images(soup),
            meta_tags=meta_tags,
            og_tags=og_subset(meta_tags),
            headings=headings,
            heading_counts=heading_counts(headings),
            json_ld=extract_json_ld(soup),
            hreflangs=extract_hreflangs(soup),
            robots_directives=collect_robots_directives(meta_tags, headers),
            canonical_status=canonical_status(canonical, page_url),
            anchors=soup.find_all("a", href=True),
        )

        logger.debug(
            f"Extracted {page_url}: {len(headings)} headings, "
            f"{len(document.json_ld)} JSON-LD entities, {len(document.anchors)} anchors"
        )
        return document
