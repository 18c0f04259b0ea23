from dotenv import load_dotenv
from dataclasses import asdict, dataclass, field, fields
from typing import Iterable, Tuple
from pathlib import Path
import json
import logging
import os

from seo_snapshot.constants import (
    BOT_CHECK_PHRASES,
    DEFAULT_ACCEPT,
    DEFAULT_ACCEPT_LANGUAGE,
    DEFAULT_FETCH_TIMEOUT_SECONDS,
    DEFAULT_PRERENDER_PROXY_URL,
    DEFAULT_PROBE_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    MAX_LINK_HEAD_TEST,
    META_DESCRIPTION_MAX_LENGTH,
    SHELL_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)

load_dotenv()  # Loads variables from .env file

logger = logging.getLogger(__name__)

THRESHOLD_ENV_PREFIX = "SNAPSHOT_THRESHOLD_"


class Settings:
    """
    Manages application settings loaded from environment variables.
    """
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE = os.getenv("LOG_FILE")

    # HTTP surface
    HOST = os.getenv("HOST", "127.0.0.1")
    PORT = int(os.getenv("PORT", "8000"))
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]


settings = Settings()


@dataclass
class FetchConfig:
    """Request configuration shared by the page fetch, prerender and probes."""
    user_agent: str = DEFAULT_USER_AGENT
    accept: str = DEFAULT_ACCEPT
    accept_language: str = DEFAULT_ACCEPT_LANGUAGE
    timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT_SECONDS
    follow_redirects: bool = True
    prerender_proxy_url: str = DEFAULT_PRERENDER_PROXY_URL

    @property
    def headers(self) -> dict:
        """Browser-like request headers."""
        return {
            "User-Agent": self.user_agent,
            "Accept": self.accept,
            "Accept-Language": self.accept_language,
        }

    @classmethod
    def from_env(cls) -> "FetchConfig":
        """Load fetch configuration from environment variables.

        Returns:
            FetchConfig: Configuration instance with values from environment
        """
        return cls(
            user_agent=os.getenv("USER_AGENT", DEFAULT_USER_AGENT),
            accept=os.getenv("ACCEPT", DEFAULT_ACCEPT),
            accept_language=os.getenv("ACCEPT_LANGUAGE", DEFAULT_ACCEPT_LANGUAGE),
            timeout=float(os.getenv("FETCH_TIMEOUT", str(DEFAULT_FETCH_TIMEOUT_SECONDS))),
            probe_timeout=float(os.getenv("PROBE_TIMEOUT", str(DEFAULT_PROBE_TIMEOUT_SECONDS))),
            prerender_proxy_url=os.getenv("PRERENDER_PROXY_URL", DEFAULT_PRERENDER_PROXY_URL),
        )


@dataclass
class AnalysisThresholds:
    """Configurable thresholds for page classification and the SEO summary.

    Values come from the defaults in constants.py, overridden by
    SNAPSHOT_THRESHOLD_<FIELD> environment variables or by a JSON file
    (see `seo-snapshot thresholds --save`).
    """

    # Acquisition
    shell_max_length: int = SHELL_MAX_LENGTH
    bot_check_phrases: Tuple[str, ...] = field(default=BOT_CHECK_PHRASES)

    # Link probing
    max_link_probes: int = MAX_LINK_HEAD_TEST

    # SEO summary
    title_max: int = TITLE_MAX_LENGTH
    meta_description_max: int = META_DESCRIPTION_MAX_LENGTH

    def __post_init__(self):
        # Phrases are matched against the lower-cased body
        self.bot_check_phrases = _phrases(self.bot_check_phrases)

    @classmethod
    def from_env(cls, prefix: str = THRESHOLD_ENV_PREFIX) -> "AnalysisThresholds":
        """Load thresholds from environment variables.

        e.g. SNAPSHOT_THRESHOLD_TITLE_MAX=70 or
        SNAPSHOT_THRESHOLD_BOT_CHECK_PHRASES="just a moment,attention required".
        Non-numeric values for numeric thresholds are ignored with a warning.
        """
        overrides = {}
        for threshold in fields(cls):
            env_key = f"{prefix}{threshold.name.upper()}"
            raw = os.getenv(env_key)
            if raw is None:
                continue
            if threshold.name == "bot_check_phrases":
                overrides[threshold.name] = raw.split(",")
                continue
            try:
                overrides[threshold.name] = int(raw)
            except ValueError:
                logger.warning(f"Ignoring {env_key}={raw!r}: expected an integer")
        return cls(**overrides)

    @classmethod
    def from_file(cls, path: str) -> "AnalysisThresholds":
        """Load thresholds from a JSON file.

        The file holds either a {"thresholds": {...}} document, as written by
        save_to_file, or the bare mapping. A missing file yields defaults.

        Args:
            path: Path to JSON configuration file

        Returns:
            AnalysisThresholds with values from file
        """
        file_path = Path(path)
        if not file_path.exists():
            logger.warning(f"Threshold file {path} not found, using defaults")
            return cls()

        data = json.loads(file_path.read_text())
        data = data.get("thresholds", data)

        known = {threshold.name for threshold in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown thresholds in {path}: {', '.join(unknown)}")
        return cls(**{name: value for name, value in data.items() if name in known})

    def to_dict(self) -> dict:
        """JSON-serializable view of the thresholds."""
        data = asdict(self)
        data["bot_check_phrases"] = list(self.bot_check_phrases)
        return data

    def save_to_file(self, path: str) -> None:
        """Write the thresholds in the format from_file reads."""
        Path(path).write_text(json.dumps({"thresholds": self.to_dict()}, indent=2))


def _phrases(values: Iterable[str]) -> Tuple[str, ...]:
    return tuple(p.strip().lower() for p in values if p.strip())


# Global default thresholds instance
default_thresholds = AnalysisThresholds()
