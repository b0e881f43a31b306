"""Tests for porcelain status parsing."""

import pytest

from gitloom.core.errors import MalformedStatusLineError
from gitloom.core.status_parser import parse_status, parse_status_line, unquote_path


def test_parses_staged_unstaged_and_untracked_files() -> None:
    files = parse_status("MM file1.txt\nA  file3.txt\n?? file4.txt")

    assert [f.name for f in files] == ["file1.txt", "file3.txt", "file4.txt"]
    flags = [(f.has_staged_changes, f.has_unstaged_changes, f.tracked) for f in files]
    assert flags == [(True, True, True), (True, False, False), (False, True, False)]


@pytest.mark.parametrize("code", ["UU", "AA"])
def test_inline_merge_conflicts(code: str) -> None:
    file = parse_status_line(f"{code} conflicted.txt")

    assert file.has_merge_conflicts is True
    assert file.has_inline_merge_conflicts is True


def test_deleted_by_us_conflict_is_not_inline() -> None:
    file = parse_status_line("DU removed.txt")

    assert file.has_merge_conflicts is True
    assert file.has_inline_merge_conflicts is False
    assert file.deleted is True


def test_non_conflict_codes_have_no_conflict_flags() -> None:
    file = parse_status_line("M  plain.txt")

    assert file.has_merge_conflicts is False
    assert file.has_inline_merge_conflicts is False


def test_conflicted_file_has_no_staged_change() -> None:
    assert parse_status_line("UU a.txt").has_staged_changes is False


def test_deleted_flag_from_either_column() -> None:
    assert parse_status_line("D  gone.txt").deleted is True
    assert parse_status_line(" D gone.txt").deleted is True
    assert parse_status_line(" M kept.txt").deleted is False


def test_added_with_modifications_is_untracked() -> None:
    file = parse_status_line("AM new.txt")

    assert file.tracked is False
    assert file.has_staged_changes is True
    assert file.has_unstaged_changes is True


def test_keeps_raw_line_and_code() -> None:
    file = parse_status_line("R  old.txt -> new.txt")

    assert file.short_status == "R "
    assert file.display_string == "R  old.txt -> new.txt"
    assert file.names == ["old.txt", "new.txt"]
    assert file.current_name == "new.txt"


def test_short_line_raises() -> None:
    with pytest.raises(MalformedStatusLineError):
        parse_status_line("M")


def test_parse_status_skips_malformed_and_blank_lines() -> None:
    files = parse_status("M  a.txt\n\nX\n?? b.txt\n")

    assert [f.name for f in files] == ["a.txt", "b.txt"]


def test_parse_status_keeps_one_record_per_path() -> None:
    files = parse_status("M  a.txt\n M a.txt\n")

    assert len(files) == 1
    assert files[0].short_status == "M "


def test_quoted_path_is_unquoted() -> None:
    file = parse_status_line('?? "with space\\ttab.txt"')

    assert file.name == "with space\ttab.txt"


def test_octal_escapes_decode_as_utf8() -> None:
    assert unquote_path('"caf\\303\\251.txt"') == "café.txt"


def test_unquoted_path_is_unchanged() -> None:
    assert unquote_path("plain.txt") == "plain.txt"


def test_quoted_rename_halves_are_unquoted() -> None:
    file = parse_status_line('R  "a b.txt" -> "c\\"d.txt"')

    assert file.names == ["a b.txt", 'c"d.txt']
