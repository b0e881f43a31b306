"""Tests for rebase plan builders.

History is newest first (index 0 = HEAD); plans are oldest first.
"""

import pytest

from gitloom.core.errors import InsufficientHistoryError, InsufficientRoomError
from gitloom.core.models import Commit
from gitloom.core.rewrite_plan import (
    build_cherry_pick_plan,
    build_edit_pair_plan,
    build_move_down_plan,
    build_move_up_plan,
    build_rewrite_plan,
)


def _commits(count: int) -> list[Commit]:
    return [Commit(sha=f"sha{i}", name=f"commit {i}") for i in range(count)]


def _shas_and_verbs(plan) -> list[tuple[str, str]]:
    return [(entry.sha, entry.verb) for entry in plan.entries]


def test_edit_plan_is_oldest_first_with_base_beneath() -> None:
    plan = build_rewrite_plan(_commits(4), 1, "edit")

    assert _shas_and_verbs(plan) == [("sha1", "edit"), ("sha0", "pick")]
    assert plan.base_sha == "sha2"


def test_todo_renders_one_line_per_entry_in_replay_order() -> None:
    plan = build_rewrite_plan(_commits(3), 0, "drop")

    assert plan.todo == "drop sha0 commit 0\n"
    plan = build_rewrite_plan(_commits(4), 1, "reword")
    assert plan.todo == "reword sha1 commit 1\npick sha0 commit 0\n"


def test_squash_includes_the_commit_it_folds_into() -> None:
    plan = build_rewrite_plan(_commits(4), 1, "squash")

    assert _shas_and_verbs(plan) == [("sha2", "pick"), ("sha1", "squash"), ("sha0", "pick")]
    assert plan.base_sha == "sha3"


def test_squash_needs_two_commits_beneath() -> None:
    commits = _commits(3)

    with pytest.raises(InsufficientHistoryError):
        build_rewrite_plan(commits, 1, "squash")


@pytest.mark.parametrize("verb", ["squash", "fixup"])
def test_fold_succeeds_with_index_plus_three_commits(verb: str) -> None:
    plan = build_rewrite_plan(_commits(4), 1, verb)  # type: ignore[arg-type]

    assert plan.base_sha == "sha3"


def test_cannot_rebase_onto_first_commit() -> None:
    with pytest.raises(InsufficientHistoryError):
        build_rewrite_plan(_commits(2), 1, "edit")


def test_index_outside_history_raises() -> None:
    with pytest.raises(InsufficientHistoryError):
        build_rewrite_plan(_commits(2), 5, "edit")


def test_move_down_swaps_adjacent_entries() -> None:
    plan = build_move_down_plan(_commits(5), 1)

    assert [entry.sha for entry in plan.entries] == ["sha1", "sha2", "sha0"]
    assert all(entry.verb == "pick" for entry in plan.entries)
    assert plan.base_sha == "sha3"


def test_move_down_of_head() -> None:
    plan = build_move_down_plan(_commits(3), 0)

    assert [entry.sha for entry in plan.entries] == ["sha0", "sha1"]
    assert plan.base_sha == "sha2"


def test_move_down_without_room_raises() -> None:
    commits = _commits(3)

    with pytest.raises(InsufficientRoomError):
        build_move_down_plan(commits, 1)


def test_move_up_is_move_down_of_the_commit_above() -> None:
    commits = _commits(5)

    assert build_move_up_plan(commits, 2) == build_move_down_plan(commits, 1)


def test_move_up_of_head_raises() -> None:
    with pytest.raises(InsufficientRoomError):
        build_move_up_plan(_commits(3), 0)


def test_edit_pair_plan_stops_at_both_commits() -> None:
    plan = build_edit_pair_plan(_commits(5), 0, 2)

    assert _shas_and_verbs(plan) == [("sha2", "edit"), ("sha1", "pick"), ("sha0", "edit")]
    assert plan.base_sha == "sha3"


def test_cherry_pick_plan_replays_onto_head() -> None:
    copied = [Commit(sha="newer", name="b"), Commit(sha="older", name="a")]

    plan = build_cherry_pick_plan(copied)

    assert [entry.sha for entry in plan.entries] == ["older", "newer"]
    assert plan.base_sha == "HEAD"
