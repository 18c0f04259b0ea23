"""
Bot-check and JavaScript-shell detection for fetched pages.

Classification is textual and deliberately cheap:

``BLOCKED``
    The primary fetch returned an error status (>= 400) or the body contains
    a known bot-check phrase such as Cloudflare's "Just a moment...".

``SHELL``
    The body is short and loads an external script, a sign that the real
    content is rendered client-side. Genuinely short static pages with a
    script tag are misclassified as shells; the prerender fallback tolerates
    that.

``OK``
    Anything else.

The acquirer takes the classifier as a plain callable, so phrases and
thresholds can be swapped without touching orchestration.
"""

import re
from enum import Enum
from typing import Callable, Optional

from seo_snapshot.config import AnalysisThresholds, default_thresholds
from seo_snapshot.constants import BLOCKED_STATUS_THRESHOLD
from seo_snapshot.models import FetchResult

# <script ... src ...> anywhere in the opening tag
SCRIPT_SRC_PATTERN = re.compile(r"<script\b[^>]*src", re.IGNORECASE)


class PageVerdict(Enum):
    """Tagged classification of a fetched page."""

    OK = "ok"
    SHELL = "shell"
    BLOCKED = "blocked"


PageClassifier = Callable[[FetchResult], PageVerdict]


def contains_bot_check(html: str, thresholds: Optional[AnalysisThresholds] = None) -> bool:
    """Check whether the body contains a bot-check phrase (case-insensitive)."""
    thresholds = thresholds or default_thresholds
    lowered = html.lower()
    return any(phrase.lower() in lowered for phrase in thresholds.bot_check_phrases)


def is_blocked(result: FetchResult, thresholds: Optional[AnalysisThresholds] = None) -> bool:
    """Check whether a fetch hit a bot-check or an error status."""
    if result.status_code >= BLOCKED_STATUS_THRESHOLD:
        return True
    return contains_bot_check(result.body, thresholds)


def is_shell(html: str, thresholds: Optional[AnalysisThresholds] = None) -> bool:
    """Check whether the body looks like an empty JavaScript bootstrap."""
    thresholds = thresholds or default_thresholds
    return len(html) < thresholds.shell_max_length and bool(SCRIPT_SRC_PATTERN.search(html))


def classify_page(
    result: FetchResult,
    thresholds: Optional[AnalysisThresholds] = None,
) -> PageVerdict:
    """Classify a primary fetch result.

    Blocked takes precedence over shell.

    Args:
        result: Primary fetch result
        thresholds: Phrase list and shell length threshold

    Returns:
        PageVerdict
    """
    if is_blocked(result, thresholds):
        return PageVerdict.BLOCKED
    if is_shell(result.body, thresholds):
        return PageVerdict.SHELL
    return PageVerdict.OK


def make_classifier(thresholds: AnalysisThresholds) -> PageClassifier:
    """Bind thresholds into a classifier callable."""
    def classifier(result: FetchResult) -> PageVerdict:
        return classify_page(result, thresholds)
    return classifier
