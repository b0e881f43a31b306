"""Typed records for working-tree status and commit history."""

from dataclasses import dataclass
from typing import Literal

RebaseVerb = Literal["pick", "reword", "edit", "squash", "fixup", "drop"]

REBASE_VERBS: frozenset[str] = frozenset(["pick", "reword", "edit", "squash", "fixup", "drop"])

RENAME_SEPARATOR = " -> "

PatchStatus = Literal["unselected", "whole", "partial"]


@dataclass(frozen=True)
class FileChange:
    """One line of `git status --porcelain`.

    Recreated on every refresh; identity across refreshes is by name only.
    """

    name: str
    short_status: str
    tracked: bool
    has_staged_changes: bool
    has_unstaged_changes: bool
    deleted: bool
    has_merge_conflicts: bool
    has_inline_merge_conflicts: bool
    display_string: str

    @property
    def names(self) -> list[str]:
        """Both sides of a rename ("old -> new"), or just the name."""
        return self.name.split(RENAME_SEPARATOR)

    @property
    def current_name(self) -> str:
        return self.names[-1]


@dataclass(frozen=True)
class Commit:
    sha: str
    name: str
    is_merge: bool = False


@dataclass(frozen=True)
class CommitFile:
    """A file touched by a commit, annotated with its patch selection status."""

    sha: str
    name: str
    status: PatchStatus
