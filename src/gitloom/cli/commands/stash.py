"""Stash commands. Entries are addressed by their stash@{N} index."""

import click

from gitloom.cli.ensure import Ensure
from gitloom.cli.errors import handle_gitloom_errors
from gitloom.core import working_tree
from gitloom.core.context import GitloomContext
from gitloom.core.git_commands import StashAction
from gitloom.output.output import machine_output, user_confirm, user_output

_DONE_MESSAGES = {"apply": "Applied", "pop": "Popped", "drop": "Dropped"}

stash_index_argument = click.argument("index", type=click.IntRange(min=0), metavar="INDEX")


@click.group("stash")
def stash_group() -> None:
    """Save and restore uncommitted changes."""


@stash_group.command("save")
@click.option("-m", "--message", default="", help="Stash message")
@click.option("--staged", is_flag=True, help="Stash only the staged changes")
@click.pass_obj
def save_cmd(ctx: GitloomContext, message: str, staged: bool) -> None:
    """Stash the working tree changes."""
    session = Ensure.session(ctx)
    with handle_gitloom_errors():
        if staged:
            working_tree.stash_save_staged_changes(session.git, message)
        else:
            working_tree.stash_save(session.git, message)
    user_output("Stashed staged changes" if staged else "Stashed changes")


@stash_group.command("list")
@click.pass_obj
def list_cmd(ctx: GitloomContext) -> None:
    """List stash entries, newest first."""
    session = Ensure.session(ctx)
    with handle_gitloom_errors():
        entries = working_tree.stash_entries(session.git)
    for entry in entries:
        machine_output(entry)


def _stash_do(ctx: GitloomContext, index: int, action: StashAction) -> None:
    session = Ensure.session(ctx)
    with handle_gitloom_errors():
        working_tree.stash_do(session.git, index, action)
    user_output(f"{_DONE_MESSAGES[action]} stash@{{{index}}}")


@stash_group.command("apply")
@stash_index_argument
@click.pass_obj
def apply_cmd(ctx: GitloomContext, index: int) -> None:
    """Apply a stash entry, keeping it."""
    _stash_do(ctx, index, "apply")


@stash_group.command("pop")
@stash_index_argument
@click.pass_obj
def pop_cmd(ctx: GitloomContext, index: int) -> None:
    """Apply a stash entry and remove it."""
    _stash_do(ctx, index, "pop")


@stash_group.command("drop")
@stash_index_argument
@click.option("-f", "--force", is_flag=True, help="Do not prompt for confirmation.")
@click.pass_obj
def drop_cmd(ctx: GitloomContext, index: int, force: bool) -> None:
    """Delete a stash entry."""
    if not force and not user_confirm(f"Drop stash@{{{index}}}?"):
        user_output(click.style("⭕ Aborted.", fg="red", bold=True))
        return
    _stash_do(ctx, index, "drop")
