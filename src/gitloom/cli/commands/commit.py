"""Commands acting on a single commit and its files."""

import click

from gitloom.cli.commands.common import commit_index_argument, load_history, report_rebase_state
from gitloom.cli.ensure import Ensure
from gitloom.cli.errors import handle_gitloom_errors
from gitloom.core import working_tree
from gitloom.core.context import GitloomContext
from gitloom.core.git_commands import ResetMode
from gitloom.output.output import machine_output, user_confirm, user_output

_STATUS_MARKERS = {"unselected": " ", "whole": "●", "partial": "◐"}


@click.group("commit")
def commit_group() -> None:
    """Inspect and rewrite individual commits."""


@commit_group.command("files")
@click.argument("sha")
@click.pass_obj
def files_cmd(ctx: GitloomContext, sha: str) -> None:
    """List the files a commit touches."""
    session = Ensure.session(ctx)
    with handle_gitloom_errors():
        files = session.file_ops.commit_files(sha)
    for file in files:
        machine_output(f"{_STATUS_MARKERS[file.status]} {file.name}")


@commit_group.command("discard-file")
@commit_index_argument
@click.argument("path")
@click.pass_obj
def discard_file_cmd(ctx: GitloomContext, index: int, path: str) -> None:
    """Remove PATH's change from the commit at INDEX, replaying everything above it."""
    session, commits = load_history(ctx)
    with handle_gitloom_errors():
        session.file_ops.discard_old_file_change(commits, index, path)
    report_rebase_state(session)


@commit_group.command("checkout-file")
@click.argument("sha")
@click.argument("path")
@click.pass_obj
def checkout_file_cmd(ctx: GitloomContext, sha: str, path: str) -> None:
    """Restore PATH as it was in SHA."""
    session = Ensure.session(ctx)
    with handle_gitloom_errors():
        session.file_ops.checkout_commit_file(sha, path)
    user_output(f"Checked out {path} from {sha}")


@commit_group.command("amend-to")
@click.argument("sha")
@click.pass_obj
def amend_to_cmd(ctx: GitloomContext, sha: str) -> None:
    """Fold the staged changes into SHA."""
    session = Ensure.session(ctx)
    with handle_gitloom_errors():
        session.file_ops.amend_to_commit(sha)
    report_rebase_state(session)


@commit_group.command("fixup")
@click.argument("sha")
@click.pass_obj
def fixup_cmd(ctx: GitloomContext, sha: str) -> None:
    """Commit the staged changes as "fixup! <subject of SHA>"."""
    session = Ensure.session(ctx)
    with handle_gitloom_errors():
        session.file_ops.create_fixup_commit(sha)
    user_output(f"Created fixup commit for {sha}")


@commit_group.command("squash-fixups")
@click.argument("sha")
@click.pass_obj
def squash_fixups_cmd(ctx: GitloomContext, sha: str) -> None:
    """Fold every fixup! commit above SHA into its target."""
    session = Ensure.session(ctx)
    with handle_gitloom_errors():
        session.file_ops.squash_all_above_fixups(sha)
    report_rebase_state(session)


@commit_group.command("create")
@click.option("-m", "--message", required=True, help="Commit message")
@click.option("--no-verify", is_flag=True, help="Skip the pre-commit and commit-msg hooks")
@click.pass_obj
def create_cmd(ctx: GitloomContext, message: str, no_verify: bool) -> None:
    """Commit the staged changes."""
    session = Ensure.session(ctx)
    Ensure.invariant(bool(message.strip()), "Commit message cannot be empty")
    with handle_gitloom_errors():
        working_tree.commit_changes(session.git, message, no_verify=no_verify)
    user_output(click.style("✓", fg="green") + " Committed")


@commit_group.command("amend")
@click.pass_obj
def amend_cmd(ctx: GitloomContext) -> None:
    """Fold the staged changes into HEAD, keeping its message."""
    session = Ensure.session(ctx)
    with handle_gitloom_errors():
        working_tree.amend_head(session.git)
    user_output(click.style("✓", fg="green") + " Amended HEAD")


@commit_group.command("rename")
@click.argument("message")
@click.pass_obj
def rename_cmd(ctx: GitloomContext, message: str) -> None:
    """Replace the message of HEAD. Use `gitloom rebase reword` for older commits."""
    session = Ensure.session(ctx)
    Ensure.invariant(bool(message.strip()), "Commit message cannot be empty")
    with handle_gitloom_errors():
        working_tree.rename_head(session.git, message)
    user_output("Renamed HEAD")


@commit_group.command("revert")
@click.argument("sha")
@click.pass_obj
def revert_cmd(ctx: GitloomContext, sha: str) -> None:
    """Create a commit that undoes SHA."""
    session = Ensure.session(ctx)
    with handle_gitloom_errors():
        working_tree.revert_commit(session.git, sha)
    user_output(f"Reverted {sha}")


@commit_group.command("reset")
@click.argument("sha")
@click.option("--soft", "mode", flag_value="soft", help="Keep changes staged")
@click.option("--mixed", "mode", flag_value="mixed", default=True, help="Keep changes unstaged")
@click.option("--hard", "mode", flag_value="hard", help="Throw changes away")
@click.option("-f", "--force", is_flag=True, help="Do not prompt before a hard reset")
@click.pass_obj
def reset_cmd(ctx: GitloomContext, sha: str, mode: ResetMode, force: bool) -> None:
    """Move the current branch to SHA."""
    session = Ensure.session(ctx)
    if mode == "hard" and not force:
        if not user_confirm(f"Discard all uncommitted changes and reset to {sha}?"):
            user_output(click.style("⭕ Aborted.", fg="red", bold=True))
            return
    with handle_gitloom_errors():
        working_tree.reset_to_commit(session.git, sha, mode)
    user_output(f"Reset ({mode}) to {sha}")
