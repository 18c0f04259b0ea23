# src/seo_snapshot/constants.py
"""Centralized constants for the snapshot pipeline.

This module contains magic numbers and fixed strings used across multiple
modules. For user-configurable values, see config.py (FetchConfig and
AnalysisThresholds).
"""

# =============================================================================
# Browser Headers
# =============================================================================

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)
DEFAULT_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
DEFAULT_ACCEPT_LANGUAGE = "en-US,en;q=0.9"


# =============================================================================
# Acquisition
# =============================================================================

# Case-insensitive phrases that mark a bot-check interstitial
BOT_CHECK_PHRASES = (
    "just a moment",
)

# Bodies shorter than this (in characters) that load external scripts
# are treated as client-side rendered shells
SHELL_MAX_LENGTH = 5_000

# Status codes at or above this mark the primary fetch as blocked
BLOCKED_STATUS_THRESHOLD = 400

# Rendering proxy; the target URL is appended as "http://<host>/<path>"
DEFAULT_PRERENDER_PROXY_URL = "https://r.jina.ai/"

DEFAULT_FETCH_TIMEOUT_SECONDS = 30.0


# =============================================================================
# Link Probing
# =============================================================================

# Maximum unique external links HEAD-probed per page
MAX_LINK_HEAD_TEST = 10

DEFAULT_PROBE_TIMEOUT_SECONDS = 10.0

# Probe responses at or above this status count as broken
BROKEN_STATUS_THRESHOLD = 400

# Hrefs with these prefixes are not links for classification purposes
SKIPPED_HREF_PREFIXES = ("javascript:", "mailto:")


# =============================================================================
# SEO Summary
# =============================================================================

TITLE_MAX_LENGTH = 60
META_DESCRIPTION_MAX_LENGTH = 160

HEADING_LEVELS = (1, 2, 3, 4, 5, 6)


# =============================================================================
# Error Messages
# =============================================================================

MISSING_URL_MESSAGE = "Missing ?url="
BLOCKED_MESSAGE = "Site is protected by a bot-check or returned an error"
FAILURE_MESSAGE = "Failed to fetch or parse page"
