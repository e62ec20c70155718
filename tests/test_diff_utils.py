"""Tests for compare-result helpers."""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from doublecheck.diff_utils import changed_lines, diff_html, revision_pair

DIFF_BODY = (
    '<tr><td colspan="2" class="diff-lineno">Line 1:</td><td colspan="2" class="diff-lineno">Line 1:</td></tr>'
    '<tr><td class="diff-marker">−</td><td class="diff-deletedline"><div>Apples are red.</div></td>'
    '<td class="diff-marker">+</td><td class="diff-addedline"><div>Apples are blue.</div></td></tr>'
    '<tr><td colspan="2" class="diff-empty"></td><td class="diff-marker">+</td>'
    '<td class="diff-addedline"><div>New line.</div></td></tr>'
)


class TestChangedLines:

    def test_extracts_added_and_removed(self):
        diff = {"compare": {"fromrevid": 10, "torevid": 11, "*": DIFF_BODY}}
        assert changed_lines(diff) == {
            "added": ["Apples are blue.", "New line."],
            "removed": ["Apples are red."],
        }

    def test_formatversion_2_body(self):
        diff = {"compare": {"body": DIFF_BODY}}
        assert diff_html(diff) == DIFF_BODY

    def test_does_not_modify_diff(self):
        diff = {"compare": {"*": DIFF_BODY}}
        changed_lines(diff)
        assert diff == {"compare": {"*": DIFF_BODY}}

    def test_empty_diff(self):
        assert changed_lines({}) == {"added": [], "removed": []}


class TestRevisionPair:

    def test_pair(self):
        assert revision_pair({"compare": {"fromrevid": 10, "torevid": 11}}) == (10, 11)

    def test_missing(self):
        assert revision_pair({}) == (None, None)
