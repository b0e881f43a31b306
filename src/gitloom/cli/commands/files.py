"""Working tree commands: stage, unstage, discard."""

import click

from gitloom.cli.ensure import Ensure
from gitloom.cli.errors import handle_gitloom_errors
from gitloom.core import working_tree
from gitloom.core.context import GitloomContext
from gitloom.core.models import FileChange
from gitloom.core.session import RepoSession
from gitloom.output.output import user_output


def _changed_file(session: RepoSession, path: str) -> FileChange:
    return Ensure.not_none(session.find_file(path), f"No changes to {path}")


@click.command("stage")
@click.argument("paths", nargs=-1)
@click.option("--all", "stage_all", is_flag=True, help="Stage every change")
@click.pass_obj
def stage_cmd(ctx: GitloomContext, paths: tuple[str, ...], stage_all: bool) -> None:
    """Stage changed files."""
    session = Ensure.session(ctx)
    Ensure.invariant(bool(paths) or stage_all, "Give at least one path, or --all")
    with handle_gitloom_errors():
        if stage_all:
            working_tree.stage_all(session.git)
            user_output("Staged all changes")
            return
        session.refresh_files()
        for path in paths:
            working_tree.stage_file(session.git, _changed_file(session, path))
            user_output(f"Staged {path}")


@click.command("unstage")
@click.argument("paths", nargs=-1)
@click.option("--all", "unstage_all", is_flag=True, help="Unstage every change")
@click.pass_obj
def unstage_cmd(ctx: GitloomContext, paths: tuple[str, ...], unstage_all: bool) -> None:
    """Unstage files, keeping their working tree contents."""
    session = Ensure.session(ctx)
    Ensure.invariant(bool(paths) or unstage_all, "Give at least one path, or --all")
    with handle_gitloom_errors():
        if unstage_all:
            working_tree.unstage_all(session.git)
            user_output("Unstaged all changes")
            return
        session.refresh_files()
        for path in paths:
            working_tree.unstage_file(session.git, _changed_file(session, path))
            user_output(f"Unstaged {path}")


@click.command("discard")
@click.argument("path")
@click.option(
    "--unstaged-only",
    is_flag=True,
    help="Only discard changes that are not staged",
)
@click.pass_obj
def discard_cmd(ctx: GitloomContext, path: str, unstaged_only: bool) -> None:
    """Throw away changes to a file. Untracked files are deleted."""
    session = Ensure.session(ctx)
    with handle_gitloom_errors():
        session.refresh_files()
        file = _changed_file(session, path)
        if unstaged_only:
            working_tree.discard_unstaged_file_changes(session.git, file)
        else:
            working_tree.discard_all_file_changes(session.git, session.filesystem, file)
    user_output(f"Discarded changes to {path}")


@click.command("ignore")
@click.argument("path")
@click.pass_obj
def ignore_cmd(ctx: GitloomContext, path: str) -> None:
    """Add PATH to the repository's .gitignore."""
    session = Ensure.session(ctx)
    Ensure.invariant(path != ".gitignore", "Cannot ignore .gitignore")
    working_tree.ignore_file(session.git, session.filesystem, path)
    user_output(f"Ignored {path}")


@click.command("merge-abort")
@click.pass_obj
def merge_abort_cmd(ctx: GitloomContext) -> None:
    """Abandon a conflicted merge."""
    session = Ensure.session(ctx)
    with handle_gitloom_errors():
        Ensure.invariant(
            working_tree.is_in_merge_state(session.git), "There is no merge in progress"
        )
        working_tree.abort_merge(session.git)
    user_output("Merge aborted")
