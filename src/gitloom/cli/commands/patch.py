"""Move or remove part of a commit.

The selection is given on the command line: --file picks a whole file,
--hunks PATH=0,2 picks hunks of a file (numbered from 0 in `git show` order).
"""

import click

from gitloom.cli.commands.common import commit_index_argument, load_history, report_rebase_state
from gitloom.cli.ensure import Ensure
from gitloom.cli.errors import handle_gitloom_errors
from gitloom.core.context import GitloomContext
from gitloom.core.patch_selection import PatchSelectionTracker

_file_option = click.option(
    "--file", "files", multiple=True, metavar="PATH", help="Select a whole file"
)
_hunks_option = click.option(
    "--hunks",
    "hunk_specs",
    multiple=True,
    metavar="PATH=N[,N...]",
    help="Select hunks of a file",
)


def _parse_hunk_spec(spec: str) -> tuple[str, set[int]]:
    path, sep, raw_indices = spec.rpartition("=")
    Ensure.invariant(bool(sep) and bool(path), f"Expected PATH=N[,N...], got {spec!r}")
    indices: set[int] = set()
    for raw in raw_indices.split(","):
        Ensure.invariant(raw.strip().isdigit(), f"Invalid hunk number in {spec!r}")
        indices.add(int(raw))
    return path, indices


def _select(
    tracker: PatchSelectionTracker,
    sha: str,
    files: tuple[str, ...],
    hunk_specs: tuple[str, ...],
) -> None:
    Ensure.invariant(bool(files) or bool(hunk_specs), "Select something with --file or --hunks")
    tracker.start(sha)
    for path in files:
        tracker.set_status(sha, path, "whole")
    for spec in hunk_specs:
        path, indices = _parse_hunk_spec(spec)
        tracker.set_hunks(sha, path, indices)


@click.group("patch")
def patch_group() -> None:
    """Build a patch from part of a commit and move or remove it."""


@patch_group.command("remove")
@commit_index_argument
@_file_option
@_hunks_option
@click.pass_obj
def remove_cmd(
    ctx: GitloomContext, index: int, files: tuple[str, ...], hunk_specs: tuple[str, ...]
) -> None:
    """Remove the selection from the commit at INDEX."""
    session, commits = load_history(ctx)
    Ensure.invariant(index < len(commits), f"No commit at index {index}")
    _select(session.tracker, commits[index].sha, files, hunk_specs)
    with handle_gitloom_errors():
        session.file_ops.delete_patch_from_commit(commits, index)
    report_rebase_state(session)


@patch_group.command("move")
@click.argument("source", type=click.IntRange(min=0))
@click.argument("destination", type=click.IntRange(min=0))
@_file_option
@_hunks_option
@click.pass_obj
def move_cmd(
    ctx: GitloomContext,
    source: int,
    destination: int,
    files: tuple[str, ...],
    hunk_specs: tuple[str, ...],
) -> None:
    """Move the selection from commit SOURCE into commit DESTINATION."""
    session, commits = load_history(ctx)
    Ensure.invariant(source < len(commits), f"No commit at index {source}")
    _select(session.tracker, commits[source].sha, files, hunk_specs)
    with handle_gitloom_errors():
        session.file_ops.move_patch_to_commit(commits, source, destination)
    report_rebase_state(session)
