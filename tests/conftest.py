"""Pytest configuration and shared fixtures."""

import random
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add project root to path for all tests
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from doublecheck.throttle import Throttle
from doublecheck.wiki_api import WikiQueryClient


class FakeClock:
    """Monotonic clock whose sleep just advances time."""

    def __init__(self, start: float = 100.0):
        self.now = start
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float):
        self.sleeps.append(seconds)
        self.now += seconds


def make_response(data):
    """A Mock standing in for requests.Response."""
    response = Mock()
    response.json.return_value = data
    response.raise_for_status = Mock()
    return response


@pytest.fixture
def temp_log_dir(tmp_path):
    """Provide a temporary directory for log files."""
    log_dir = tmp_path / "logs"
    log_dir.mkdir()
    return log_dir


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def client():
    """Client with a zero-delay throttle and a seeded random source."""
    return WikiQueryClient(
        user_agent="DoubleCheckTest/1.0",
        throttle=Throttle(min_interval=0),
        rng=random.Random(42),
    )


@pytest.fixture
def recent_changes_response():
    """list=recentchanges response (formatversion=2) with mixed ORES scores."""
    return {
        "batchcomplete": True,
        "continue": {"rccontinue": "20190701214931|1167038199", "continue": "-||"},
        "query": {
            "recentchanges": [
                {
                    "type": "edit", "ns": 0, "title": "Multiprocessor system architecture",
                    "pageid": 58955273, "revid": 1001, "old_revid": 1000, "rcid": 5001,
                    "user": "Dhtwiki", "userid": 9475572, "timestamp": "2019-07-01T21:49:32Z",
                    "comment": "Putting images at bottom", "tags": [], "minor": True,
                    "oldlen": 100, "newlen": 120,
                    "oresscores": {
                        "damaging": {"true": 0.91, "false": 0.09},
                        "goodfaith": {"true": 0.2, "false": 0.8},
                    },
                },
                {
                    "type": "edit", "ns": 0, "title": "Apple", "pageid": 2, "revid": 1002,
                    "old_revid": 990, "rcid": 5002, "user": "10.0.0.1", "userid": 0,
                    "timestamp": "2019-07-01T21:49:30Z", "comment": "", "tags": ["mobile edit"],
                    "oresscores": {
                        "damaging": {"true": 0.05, "false": 0.95},
                        "goodfaith": {"true": 0.97, "false": 0.03},
                    },
                },
                {
                    "type": "edit", "ns": 0, "title": "Banana", "pageid": 3, "revid": 1003,
                    "old_revid": 980, "rcid": 5003, "user": "Vandal", "userid": 12,
                    "timestamp": "2019-07-01T21:49:20Z", "comment": "lol", "tags": [],
                    "oresscores": {
                        "damaging": {"true": 0.5, "false": 0.5},
                        "goodfaith": {"true": 0.5, "false": 0.5},
                    },
                },
                {
                    "type": "edit", "ns": 0, "title": "Cherry", "pageid": 4, "revid": 1004,
                    "old_revid": 970, "rcid": 5004, "user": "Someone", "userid": 13,
                    "timestamp": "2019-07-01T21:49:10Z", "comment": "fix", "tags": [],
                    "oresscores": {"damaging": {"true": 0.99, "false": 0.01}},
                },
                {
                    "type": "edit", "ns": 0, "title": "Date", "pageid": 5, "revid": 1005,
                    "old_revid": 960, "rcid": 5005, "user": "Other", "userid": 14,
                    "timestamp": "2019-07-01T21:49:00Z", "comment": "", "tags": [],
                    "oresscores": [],
                },
            ]
        },
    }
