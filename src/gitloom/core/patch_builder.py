"""Cut a commit's diff down to the selected files and hunks."""

from dataclasses import dataclass

from gitloom.core.errors import EmptyPatchError
from gitloom.core.models import PatchStatus


@dataclass(frozen=True)
class FileDiff:
    """Diff of one file split at hunk boundaries.

    Attributes:
        header: Lines from "diff --git" through "+++" (mode/index lines included)
        hunks: Each hunk's lines, starting with its "@@" line
    """

    header: tuple[str, ...]
    hunks: tuple[tuple[str, ...], ...]


@dataclass(frozen=True)
class FileSelection:
    diff: FileDiff
    status: PatchStatus
    hunk_indices: frozenset[int]


def _diff_lines(text: str) -> list[str]:
    # Only "\n" ends a diff line; form feeds and "\r" are file content
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def parse_file_diff(text: str) -> FileDiff:
    """Split `git show --format= <sha> -- <path>` output for a single file."""
    header: list[str] = []
    hunks: list[list[str]] = []
    for line in _diff_lines(text):
        if line.startswith("@@"):
            hunks.append([line])
        elif hunks:
            hunks[-1].append(line)
        elif line or header:
            header.append(line)
    return FileDiff(header=tuple(header), hunks=tuple(tuple(h) for h in hunks))


def _render_file(selection: FileSelection) -> list[str]:
    diff = selection.diff
    if selection.status == "unselected":
        return []
    if selection.status == "whole":
        hunks = list(diff.hunks)
    else:
        hunks = [hunk for i, hunk in enumerate(diff.hunks) if i in selection.hunk_indices]
    if not hunks and diff.hunks:
        return []
    if not hunks and not diff.header:
        return []
    lines = list(diff.header)
    for hunk in hunks:
        lines.extend(hunk)
    return lines


def render_patch(selections: list[FileSelection]) -> str:
    """Render the selected parts as one patch for `git apply`.

    A whole-file selection of a diff without hunks (binary, mode-only, empty
    file creation) keeps its header so git can still apply it.

    Raises:
        EmptyPatchError: If nothing is selected
    """
    lines: list[str] = []
    for selection in selections:
        lines.extend(_render_file(selection))
    if not lines:
        raise EmptyPatchError()
    return "\n".join(lines) + "\n"
