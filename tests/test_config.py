"""Tests for configuration loading."""

import json

from seo_snapshot.config import AnalysisThresholds, FetchConfig
from seo_snapshot.constants import DEFAULT_PRERENDER_PROXY_URL, DEFAULT_USER_AGENT


class TestFetchConfig:
    """Test cases for FetchConfig."""

    def test_defaults(self):
        config = FetchConfig()
        assert config.headers == {
            "User-Agent": DEFAULT_USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        }
        assert config.follow_redirects is True
        assert config.prerender_proxy_url == DEFAULT_PRERENDER_PROXY_URL

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("USER_AGENT", "TestAgent/1.0")
        monkeypatch.setenv("FETCH_TIMEOUT", "5")
        monkeypatch.setenv("PROBE_TIMEOUT", "2.5")
        monkeypatch.setenv("PRERENDER_PROXY_URL", "https://render.local/")

        config = FetchConfig.from_env()

        assert config.headers["User-Agent"] == "TestAgent/1.0"
        assert config.timeout == 5.0
        assert config.probe_timeout == 2.5
        assert config.prerender_proxy_url == "https://render.local/"


class TestAnalysisThresholds:
    """Test cases for AnalysisThresholds."""

    def test_defaults(self):
        thresholds = AnalysisThresholds()
        assert thresholds.shell_max_length == 5000
        assert thresholds.max_link_probes == 10
        assert thresholds.title_max == 60
        assert thresholds.meta_description_max == 160
        assert "just a moment" in thresholds.bot_check_phrases

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SNAPSHOT_THRESHOLD_TITLE_MAX", "70")
        monkeypatch.setenv("SNAPSHOT_THRESHOLD_MAX_LINK_PROBES", "not-a-number")
        monkeypatch.setenv("SNAPSHOT_THRESHOLD_BOT_CHECK_PHRASES", "Just a moment, Attention Required")

        thresholds = AnalysisThresholds.from_env()

        assert thresholds.title_max == 70
        assert thresholds.max_link_probes == 10  # Invalid value keeps default
        assert thresholds.bot_check_phrases == ("just a moment", "attention required")

    def test_file_round_trip(self, tmp_path):
        path = tmp_path / "thresholds.json"
        saved = AnalysisThresholds(title_max=55, bot_check_phrases=("checking your browser",))
        saved.save_to_file(str(path))

        loaded = AnalysisThresholds.from_file(str(path))

        assert loaded == saved
        assert json.loads(path.read_text())["thresholds"]["title_max"] == 55

    def test_from_missing_file_uses_defaults(self, tmp_path):
        assert AnalysisThresholds.from_file(str(tmp_path / "nope.json")) == AnalysisThresholds()

    def test_from_file_accepts_bare_mapping_and_ignores_unknown(self, tmp_path):
        path = tmp_path / "thresholds.json"
        path.write_text(json.dumps({
            "shell_max_length": 8000,
            "bot_check_phrases": ["Checking Your Browser"],
            "h1_max": 1,
        }))

        thresholds = AnalysisThresholds.from_file(str(path))

        assert thresholds.shell_max_length == 8000
        assert thresholds.bot_check_phrases == ("checking your browser",)
        assert not hasattr(thresholds, "h1_max")

    def test_to_dict_is_json_ready(self):
        data = AnalysisThresholds().to_dict()
        assert data["bot_check_phrases"] == ["just a moment"]
        assert json.loads(json.dumps(data)) == data
