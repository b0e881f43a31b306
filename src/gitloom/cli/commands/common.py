"""Helpers shared by the history commands."""

import click

from gitloom.cli.ensure import Ensure
from gitloom.core.context import GitloomContext
from gitloom.core.models import Commit
from gitloom.core.session import RepoSession
from gitloom.output.output import user_output

commit_index_argument = click.argument("index", type=click.IntRange(min=0), metavar="INDEX")


def load_history(ctx: GitloomContext) -> tuple[RepoSession, list[Commit]]:
    """Session and freshly loaded commits (index 0 = HEAD, as printed by `gitloom log`)."""
    session = Ensure.session(ctx)
    commits = session.refresh_commits()
    Ensure.invariant(bool(commits), "The repository has no commits")
    return session, commits


def report_rebase_state(session: RepoSession) -> None:
    """Tell the user whether git stopped (conflict or edit stop) or finished."""
    if session.driver.is_active:
        user_output(
            click.style("Rebase paused. ", fg="yellow")
            + "Resolve or inspect, then run 'gitloom rebase continue' or 'gitloom rebase abort'."
        )
    else:
        user_output(click.style("✓", fg="green") + " Rebase complete")
