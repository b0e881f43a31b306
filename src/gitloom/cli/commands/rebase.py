"""Interactive rebase commands.

Commit indexes are positions in `gitloom log` (0 = HEAD). Each command builds a
todo, lets git run it, and reports whether the rebase finished or paused.
"""

import click

from gitloom.cli.commands.common import commit_index_argument, load_history, report_rebase_state
from gitloom.cli.ensure import Ensure
from gitloom.cli.errors import handle_gitloom_errors
from gitloom.core.commit_loader import parse_log
from gitloom.core.context import GitloomContext
from gitloom.core.models import REBASE_VERBS, RebaseVerb
from gitloom.output.output import user_output


@click.group("rebase")
def rebase_group() -> None:
    """Rewrite history with git's interactive rebase."""


def _rewrite(ctx: GitloomContext, index: int, verb: RebaseVerb) -> None:
    session, commits = load_history(ctx)
    with handle_gitloom_errors():
        session.file_ops.rewrite_commit(commits, index, verb)
    report_rebase_state(session)


@rebase_group.command("squash")
@commit_index_argument
@click.pass_obj
def squash_cmd(ctx: GitloomContext, index: int) -> None:
    """Squash a commit into the one beneath it."""
    _rewrite(ctx, index, "squash")


@rebase_group.command("fixup")
@commit_index_argument
@click.pass_obj
def fixup_cmd(ctx: GitloomContext, index: int) -> None:
    """Fold a commit into the one beneath it, dropping its message."""
    _rewrite(ctx, index, "fixup")


@rebase_group.command("drop")
@commit_index_argument
@click.pass_obj
def drop_cmd(ctx: GitloomContext, index: int) -> None:
    """Remove a commit from history."""
    _rewrite(ctx, index, "drop")


@rebase_group.command("edit")
@commit_index_argument
@click.pass_obj
def edit_cmd(ctx: GitloomContext, index: int) -> None:
    """Stop at a commit so it can be amended."""
    _rewrite(ctx, index, "edit")


@rebase_group.command("reword")
@commit_index_argument
@click.pass_obj
def reword_cmd(ctx: GitloomContext, index: int) -> None:
    """Change a commit message in your editor."""
    _rewrite(ctx, index, "reword")


@rebase_group.command("move-down")
@commit_index_argument
@click.pass_obj
def move_down_cmd(ctx: GitloomContext, index: int) -> None:
    """Swap a commit with its parent."""
    session, commits = load_history(ctx)
    with handle_gitloom_errors():
        session.file_ops.move_commit_down(commits, index)
    report_rebase_state(session)


@rebase_group.command("move-up")
@commit_index_argument
@click.pass_obj
def move_up_cmd(ctx: GitloomContext, index: int) -> None:
    """Swap a commit with its child."""
    session, commits = load_history(ctx)
    with handle_gitloom_errors():
        session.file_ops.move_commit_up(commits, index)
    report_rebase_state(session)


@rebase_group.command("onto")
@click.argument("ref")
@click.pass_obj
def onto_cmd(ctx: GitloomContext, ref: str) -> None:
    """Rebase the current branch onto REF."""
    session = Ensure.session(ctx)
    with handle_gitloom_errors():
        session.driver.rebase_onto(ref)
    report_rebase_state(session)


@rebase_group.command("cherry-pick")
@click.argument("shas", nargs=-1, required=True)
@click.pass_obj
def cherry_pick_cmd(ctx: GitloomContext, shas: tuple[str, ...]) -> None:
    """Copy commits onto HEAD, applied in the order given."""
    session = Ensure.session(ctx)
    with handle_gitloom_errors():
        picked = parse_log(session.git.log_for(list(shas)))
        Ensure.invariant(len(picked) == len(shas), "Some commits could not be found")
        # Given oldest first; plans take history newest first
        session.file_ops.cherry_pick_commits(list(reversed(picked)))
    report_rebase_state(session)


@rebase_group.command("continue")
@click.pass_obj
def continue_cmd(ctx: GitloomContext) -> None:
    """Continue a paused rebase."""
    session = Ensure.session(ctx)
    Ensure.rebase_in_progress(session)
    with handle_gitloom_errors():
        session.driver.continue_rewrite()
    report_rebase_state(session)


@rebase_group.command("abort")
@click.pass_obj
def abort_cmd(ctx: GitloomContext) -> None:
    """Abandon the rebase and restore the original branch."""
    session = Ensure.session(ctx)
    Ensure.rebase_in_progress(session)
    with handle_gitloom_errors():
        session.driver.abort()
    user_output("Rebase aborted")


@rebase_group.command("skip")
@click.pass_obj
def skip_cmd(ctx: GitloomContext) -> None:
    """Skip the commit git stopped at."""
    session = Ensure.session(ctx)
    Ensure.rebase_in_progress(session)
    with handle_gitloom_errors():
        session.driver.skip()
    report_rebase_state(session)


@rebase_group.command("todo-set")
@click.argument("index", type=click.IntRange(min=0))
@click.argument("verb", type=click.Choice(sorted(REBASE_VERBS)))
@click.pass_obj
def todo_set_cmd(ctx: GitloomContext, index: int, verb: RebaseVerb) -> None:
    """Change the action of a commit not yet replayed (0 = last in the todo)."""
    session = Ensure.session(ctx)
    Ensure.rebase_in_progress(session)
    with handle_gitloom_errors():
        session.driver.set_todo_action(index, verb)
    user_output(f"Set todo entry {index} to {verb}")


@rebase_group.command("todo-move-down")
@click.argument("index", type=click.IntRange(min=0))
@click.pass_obj
def todo_move_down_cmd(ctx: GitloomContext, index: int) -> None:
    """Move a not-yet-replayed commit one step earlier in the todo."""
    session = Ensure.session(ctx)
    Ensure.rebase_in_progress(session)
    with handle_gitloom_errors():
        session.driver.move_todo_down(index)
    user_output(f"Moved todo entry {index} down")
