#!/usr/bin/env python3
"""
Runtime settings for the DoubleCheck client.

Values come from config.json when present, then environment variables:
    USER_AGENT, MWAPI_MIN_INTERVAL_MS, MWAPI_TIMEOUT, DEFAULT_WIKI, LOG_DIR

Usage:
    from doublecheck.config import load_settings

    settings = load_settings(PROJECT_ROOT / "config.json")
    client = settings.make_client()
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from doublecheck.errors import InvalidArgument
from doublecheck.wiki_api import DEFAULT_USER_AGENT, WikiQueryClient


@dataclass
class Settings:
    user_agent: str = DEFAULT_USER_AGENT
    min_interval_ms: int = 500
    timeout_seconds: float = 30.0
    default_wiki: str = "enwiki"
    log_dir: str = "./logs"

    def make_client(self, logger: Optional[logging.Logger] = None) -> WikiQueryClient:
        return WikiQueryClient(
            user_agent=self.user_agent,
            min_interval=self.min_interval_ms / 1000.0,
            timeout=self.timeout_seconds,
            logger=logger,
        )


def _number(name: str, raw: str, kind):
    try:
        value = kind(raw)
    except (TypeError, ValueError):
        raise InvalidArgument(f"{name} must be a number, got {raw!r}") from None
    if value < 0:
        raise InvalidArgument(f"{name} must not be negative, got {raw!r}")
    return value


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """
    Build Settings from an optional JSON file, then environment overrides.

    Args:
        config_path: Path to config.json (skipped if missing)
    """
    settings = Settings()

    if config_path is not None and Path(config_path).exists():
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
        api = config.get("api", {})
        settings.user_agent = api.get("user_agent", settings.user_agent)
        settings.min_interval_ms = _number(
            "api.min_interval_ms", api.get("min_interval_ms", settings.min_interval_ms), int
        )
        settings.timeout_seconds = _number(
            "api.timeout_seconds", api.get("timeout_seconds", settings.timeout_seconds), float
        )
        settings.default_wiki = api.get("default_wiki", settings.default_wiki)
        settings.log_dir = config.get("logging", {}).get("log_dir", settings.log_dir)

    if os.environ.get("USER_AGENT"):
        settings.user_agent = os.environ["USER_AGENT"]
    if os.environ.get("MWAPI_MIN_INTERVAL_MS"):
        settings.min_interval_ms = _number("MWAPI_MIN_INTERVAL_MS", os.environ["MWAPI_MIN_INTERVAL_MS"], int)
    if os.environ.get("MWAPI_TIMEOUT"):
        settings.timeout_seconds = _number("MWAPI_TIMEOUT", os.environ["MWAPI_TIMEOUT"], float)
    if os.environ.get("DEFAULT_WIKI"):
        settings.default_wiki = os.environ["DEFAULT_WIKI"]
    if os.environ.get("LOG_DIR"):
        settings.log_dir = os.environ["LOG_DIR"]

    return settings
