#!/usr/bin/env python3
"""
Helpers for reading action=compare results.

The client returns diffs untouched; these functions only read them.
"""

from typing import Optional

from bs4 import BeautifulSoup


def diff_html(diff: dict) -> str:
    """The diff table HTML, or "" when the response has none."""
    compare = diff.get("compare") or {}
    # formatversion=1 puts the body under "*", formatversion=2 under "body"
    return compare.get("*") or compare.get("body") or ""


def changed_lines(diff: dict) -> dict[str, list[str]]:
    """
    Extract added and removed lines from a compare result.

    Returns:
        {"added": [...], "removed": [...]} in diff order
    """
    soup = BeautifulSoup(f"<table>{diff_html(diff)}</table>", "html.parser")
    added = [td.get_text() for td in soup.find_all("td", class_="diff-addedline")]
    removed = [td.get_text() for td in soup.find_all("td", class_="diff-deletedline")]
    return {"added": added, "removed": removed}


def revision_pair(diff: dict) -> tuple[Optional[int], Optional[int]]:
    """(from revision, to revision) of a compare result."""
    compare = diff.get("compare") or {}
    return compare.get("fromrevid"), compare.get("torevid")
