"""Tests for parsing git log output."""

from gitloom.core.commit_loader import parse_log
from gitloom.core.models import Commit


def test_parses_sha_subject_and_merge_flag() -> None:
    text = "aaa\x00p1\x00Add feature\nbbb\x00p2 p3\x00Merge branch 'x'\n"

    assert parse_log(text) == [
        Commit(sha="aaa", name="Add feature", is_merge=False),
        Commit(sha="bbb", name="Merge branch 'x'", is_merge=True),
    ]


def test_root_commit_has_no_parents() -> None:
    assert parse_log("aaa\x00\x00Initial commit\n") == [Commit(sha="aaa", name="Initial commit")]


def test_skips_blank_and_malformed_lines() -> None:
    text = "\nnot a log line\naaa\x00p\x00ok\n"

    assert [c.sha for c in parse_log(text)] == ["aaa"]
