import click

from gitloom.cli.ensure import Ensure
from gitloom.cli.errors import handle_gitloom_errors
from gitloom.core.context import GitloomContext
from gitloom.output.output import machine_output, user_output


@click.command("log")
@click.pass_obj
def log_cmd(ctx: GitloomContext) -> None:
    """List recent commits with the index the history commands take.

    Index 0 is HEAD. The number of commits loaded is the log.limit config key.
    """
    session = Ensure.session(ctx)
    with handle_gitloom_errors():
        commits = session.refresh_commits()

    if not commits:
        user_output("No commits yet")
        return
    for index, commit in enumerate(commits):
        marker = " (merge)" if commit.is_merge else ""
        machine_output(f"{index}\t{commit.sha[:8]}\t{commit.name}{marker}")
