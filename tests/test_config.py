"""Tests for runtime settings."""

import json
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from doublecheck.config import Settings, load_settings
from doublecheck.errors import InvalidArgument
from doublecheck.wiki_api import DEFAULT_USER_AGENT

ENV_VARS = ("USER_AGENT", "MWAPI_MIN_INTERVAL_MS", "MWAPI_TIMEOUT", "DEFAULT_WIKI", "LOG_DIR")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "api": {
            "user_agent": "FileAgent/1.0",
            "min_interval_ms": 750,
            "timeout_seconds": 10,
            "default_wiki": "frwiki",
        },
        "logging": {"log_dir": "/tmp/dc-logs"},
    }))
    return path


class TestLoadSettings:

    def test_defaults_without_file(self, tmp_path):
        settings = load_settings(tmp_path / "missing.json")
        assert settings == Settings()
        assert settings.user_agent == DEFAULT_USER_AGENT
        assert settings.min_interval_ms == 500

    def test_reads_file(self, config_file):
        settings = load_settings(config_file)
        assert settings.user_agent == "FileAgent/1.0"
        assert settings.min_interval_ms == 750
        assert settings.timeout_seconds == 10.0
        assert settings.default_wiki == "frwiki"
        assert settings.log_dir == "/tmp/dc-logs"

    def test_env_overrides_file(self, config_file, monkeypatch):
        monkeypatch.setenv("USER_AGENT", "EnvAgent/2.0")
        monkeypatch.setenv("MWAPI_MIN_INTERVAL_MS", "1000")
        monkeypatch.setenv("MWAPI_TIMEOUT", "5.5")
        settings = load_settings(config_file)
        assert settings.user_agent == "EnvAgent/2.0"
        assert settings.min_interval_ms == 1000
        assert settings.timeout_seconds == 5.5

    def test_bad_number_rejected(self, monkeypatch):
        monkeypatch.setenv("MWAPI_MIN_INTERVAL_MS", "fast")
        with pytest.raises(InvalidArgument, match="MWAPI_MIN_INTERVAL_MS"):
            load_settings()

    def test_negative_number_rejected(self, monkeypatch):
        monkeypatch.setenv("MWAPI_TIMEOUT", "-1")
        with pytest.raises(InvalidArgument):
            load_settings()

    def test_make_client(self, config_file):
        client = load_settings(config_file).make_client()
        assert client.user_agent == "FileAgent/1.0"
        assert client.throttle.min_interval == 0.75
        assert client.timeout == 10.0
