"""Build rebase plans from the newest-first commit list.

Commit history is held newest first (index 0 is HEAD) while git replays a todo
oldest first. Every builder here takes newest-first input and returns a plan in
replay order; nothing outside this module reverses commit lists.
"""

from dataclasses import dataclass

from gitloom.core.errors import InsufficientHistoryError, InsufficientRoomError
from gitloom.core.models import Commit, RebaseVerb
from gitloom.core.todo_file import TodoEntry, render_todo


@dataclass(frozen=True)
class RewritePlan:
    """Todo entries in replay order plus the revision they are replayed onto.

    Attributes:
        entries: Oldest first
        base_sha: Parent of the oldest rewritten commit ("HEAD" for cherry-picks)
    """

    entries: tuple[TodoEntry, ...]
    base_sha: str

    @property
    def todo(self) -> str:
        return render_todo(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries


def _replay_order(commits: list[Commit], verbs: dict[int, RebaseVerb]) -> tuple[TodoEntry, ...]:
    """Turn a newest-first slice into oldest-first todo entries."""
    entries = [
        TodoEntry(verb=verbs.get(i, "pick"), sha=commit.sha, subject=commit.name)
        for i, commit in enumerate(commits)
    ]
    return tuple(reversed(entries))


def _check_index(commits: list[Commit], index: int) -> None:
    if index < 0 or index >= len(commits):
        raise InsufficientHistoryError(
            f"Commit index {index} is outside the {len(commits)} loaded commits"
        )


def build_rewrite_plan(commits: list[Commit], action_index: int, verb: RebaseVerb) -> RewritePlan:
    """Plan a rebase that applies `verb` to one commit and picks the rest.

    squash and fixup fold into the commit beneath, so that commit has to be in
    the plan too and the base moves down one more.

    Raises:
        InsufficientHistoryError: If there is no commit to rebase onto
    """
    _check_index(commits, action_index)
    base_index = action_index + 1
    if len(commits) <= base_index:
        raise InsufficientHistoryError("You cannot interactively rebase onto the first commit")

    if verb in ("squash", "fixup"):
        base_index += 1
        if len(commits) <= base_index:
            raise InsufficientHistoryError("You cannot squash or fixup onto the second commit")

    return RewritePlan(
        entries=_replay_order(commits[0:base_index], {action_index: verb}),
        base_sha=commits[base_index].sha,
    )


def build_move_down_plan(commits: list[Commit], index: int) -> RewritePlan:
    """Plan a rebase that swaps commit `index` with the one beneath it.

    Raises:
        InsufficientRoomError: If fewer than two commits exist beneath `index`
    """
    _check_index(commits, index)
    if len(commits) <= index + 2:
        raise InsufficientRoomError("There is no room to move this commit down")

    reordered = [*commits[0:index], commits[index + 1], commits[index]]
    return RewritePlan(entries=_replay_order(reordered, {}), base_sha=commits[index + 2].sha)


def build_move_up_plan(commits: list[Commit], index: int) -> RewritePlan:
    """Moving a commit up is moving the one above it down."""
    if index == 0:
        raise InsufficientRoomError("The top commit cannot move up")
    return build_move_down_plan(commits, index - 1)


def build_edit_pair_plan(commits: list[Commit], first_index: int, second_index: int) -> RewritePlan:
    """Plan a rebase that stops at two commits, picking everything else."""
    _check_index(commits, first_index)
    _check_index(commits, second_index)
    base_index = max(first_index, second_index) + 1
    if len(commits) <= base_index:
        raise InsufficientHistoryError("You cannot interactively rebase onto the first commit")
    verbs: dict[int, RebaseVerb] = {first_index: "edit", second_index: "edit"}
    return RewritePlan(
        entries=_replay_order(commits[0:base_index], verbs),
        base_sha=commits[base_index].sha,
    )


def build_cherry_pick_plan(commits: list[Commit]) -> RewritePlan:
    """Plan replaying copied commits (newest first) on top of HEAD."""
    return RewritePlan(entries=_replay_order(commits, {}), base_sha="HEAD")
