#!/usr/bin/env python3
"""
Typed views over MediaWiki Action API responses.

Every nested field the API may omit is optional here; absent fields are read
as empty rather than treated as errors.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


def _as_dict(value: Any) -> dict:
    # formatversion=2 encodes an empty object as []
    return value if isinstance(value, dict) else {}


def _as_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _score(scores: dict, model: str, outcome: str) -> Optional[float]:
    value = _as_dict(scores.get(model)).get(outcome)
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class PageInfo:
    """One page returned by a page or category query."""

    page_id: Optional[int]
    namespace: Optional[int]
    title: Optional[str]
    timestamp: Optional[str] = None
    props: dict = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: dict) -> "PageInfo":
        return cls(
            page_id=_as_int(data.get("pageid")),
            namespace=_as_int(data.get("ns")),
            title=data.get("title"),
            timestamp=data.get("timestamp"),
            props=_as_dict(data.get("pageprops")),
        )

    def to_dict(self) -> dict:
        return {
            "pageid": self.page_id,
            "ns": self.namespace,
            "title": self.title,
            "timestamp": self.timestamp,
            "pageprops": dict(self.props),
        }


@dataclass(frozen=True)
class RecentChangeRecord:
    """
    One row of list=recentchanges.

    damaging_score is the ORES probability that the edit is damaging,
    goodfaith_score the probability it was made in good faith and
    badfaith_score the probability it was not. Each is None when the
    wiki did not score the edit.
    """

    type: Optional[str]
    namespace: Optional[int]
    title: Optional[str]
    page_id: Optional[int]
    revision_id: Optional[int]
    previous_revision_id: Optional[int]
    change_id: Optional[int]
    user: Optional[str]
    user_id: Optional[int]
    timestamp: Optional[str]
    comment: Optional[str]
    damaging_score: Optional[float] = None
    goodfaith_score: Optional[float] = None
    badfaith_score: Optional[float] = None
    tags: tuple = ()
    old_len: Optional[int] = None
    new_len: Optional[int] = None
    minor: bool = False
    bot: bool = False
    new: bool = False

    @classmethod
    def from_api(cls, data: dict) -> "RecentChangeRecord":
        scores = _as_dict(data.get("oresscores"))
        return cls(
            type=data.get("type"),
            namespace=_as_int(data.get("ns")),
            title=data.get("title"),
            page_id=_as_int(data.get("pageid")),
            revision_id=_as_int(data.get("revid")),
            previous_revision_id=_as_int(data.get("old_revid")),
            change_id=_as_int(data.get("rcid")),
            user=data.get("user"),
            user_id=_as_int(data.get("userid")),
            timestamp=data.get("timestamp"),
            comment=data.get("comment"),
            damaging_score=_score(scores, "damaging", "true"),
            goodfaith_score=_score(scores, "goodfaith", "true"),
            badfaith_score=_score(scores, "goodfaith", "false"),
            tags=tuple(data.get("tags") or ()),
            old_len=_as_int(data.get("oldlen")),
            new_len=_as_int(data.get("newlen")),
            # formatversion=2 uses booleans, version 1 uses empty-string flags
            minor=data.get("minor", False) is not False,
            bot=data.get("bot", False) is not False,
            new=data.get("new", False) is not False,
        )

    def is_likely_vandalism(self, threshold: float = 0.5) -> bool:
        """Likely damaging and likely bad faith. Unscored edits never qualify."""
        if self.damaging_score is None or self.badfaith_score is None:
            return False
        return self.damaging_score >= threshold and self.badfaith_score >= threshold


@dataclass
class RecentChangesPage:
    """
    One response of list=recentchanges.

    raw keeps the response exactly as received; changes and
    continue_token are read from it.
    """

    raw: dict
    changes: list = field(default_factory=list)
    continue_token: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> "RecentChangesPage":
        query = _as_dict(data.get("query"))
        rows = query.get("recentchanges") or []
        return cls(
            raw=data,
            changes=[RecentChangeRecord.from_api(row) for row in rows if isinstance(row, dict)],
            continue_token=_as_dict(data.get("continue")).get("rccontinue"),
        )

    @property
    def revision_ids(self) -> list[int]:
        return [rc.revision_id for rc in self.changes if rc.revision_id is not None]

    @property
    def last_timestamp(self) -> Optional[str]:
        """Timestamp to pass as the next cursor when walking older."""
        return self.changes[-1].timestamp if self.changes else None


@dataclass(frozen=True)
class RecentChangesQuery:
    """Parameters of a recent-changes walk."""

    wiki: str = "enwiki"
    direction: Optional[str] = None
    timestamp: Optional[str] = None
    limit: int = 500
    bad: bool = False
    is_last: bool = False
