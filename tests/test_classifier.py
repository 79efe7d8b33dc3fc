"""Tests for filefind.classifier."""

import pytest

from filefind.classifier import classify
from filefind.matcher import WildcardMatcher
from filefind.native import EntryAttributes
from filefind.options import SearchSpec

FILE = EntryAttributes.NONE
DIR = EntryAttributes.DIRECTORY
LINK = EntryAttributes.DIRECTORY | EntryAttributes.REPARSE_POINT


class CountingMatcher:
    def __init__(self, result: bool) -> None:
        self.result = result
        self.calls = 0

    def is_match(self, name: str) -> bool:
        self.calls += 1
        return self.result


class TestClassify:
    @pytest.mark.parametrize(
        ("files", "subdirs", "attributes", "expected"),
        [
            (True, True, FILE, (True, False)),
            (True, True, DIR, (True, True)),
            (True, True, LINK, (True, False)),
            (False, True, FILE, (False, False)),
            (False, True, DIR, (True, True)),
            (True, False, DIR, (False, False)),
            (True, False, LINK, (False, False)),
            (True, False, FILE, (True, False)),
        ],
    )
    def test_without_pattern(
        self,
        files: bool,
        subdirs: bool,
        attributes: EntryAttributes,
        expected: tuple[bool, bool],
    ) -> None:
        search = SearchSpec("/r", files=files, subdirs=subdirs)
        assert classify("name", attributes, search) == expected

    @pytest.mark.parametrize(
        ("name", "attributes", "expected"),
        [
            ("a.log", FILE, (True, False)),
            ("b.txt", FILE, (False, False)),
            ("c.log", DIR, (True, True)),
            ("c", DIR, (False, False)),
            ("d.log", LINK, (True, False)),
        ],
    )
    def test_with_pattern(
        self, name: str, attributes: EntryAttributes, expected: tuple[bool, bool]
    ) -> None:
        search = SearchSpec("/r", matcher=WildcardMatcher(["*.log"]))
        assert classify(name, attributes, search) == expected

    def test_hidden_flag_is_ignored(self) -> None:
        search = SearchSpec("/r")
        hidden_dir = DIR | EntryAttributes.HIDDEN
        assert classify(".git", hidden_dir, search) == (True, True)

    def test_matcher_called_once_per_entry(self) -> None:
        matcher = CountingMatcher(True)
        search = SearchSpec("/r", matcher=matcher)
        classify("x", DIR, search)
        assert matcher.calls == 1

    def test_matcher_skipped_when_type_disabled(self) -> None:
        matcher = CountingMatcher(True)
        search = SearchSpec("/r", files=False, matcher=matcher)
        assert classify("x", FILE, search) == (False, False)
        assert matcher.calls == 0
