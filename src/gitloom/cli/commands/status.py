import click

from gitloom.cli.ensure import Ensure
from gitloom.cli.errors import handle_gitloom_errors
from gitloom.core.context import GitloomContext
from gitloom.core.working_tree import is_in_merge_state
from gitloom.output.output import machine_output, user_output


def _flags(staged: bool, unstaged: bool, tracked: bool, conflicted: bool) -> str:
    parts = []
    if staged:
        parts.append("staged")
    if unstaged:
        parts.append("unstaged")
    if not tracked:
        parts.append("untracked")
    if conflicted:
        parts.append("conflict")
    return ",".join(parts)


@click.command("status")
@click.option("--verbose", "-v", is_flag=True, help="Show parsed flags for each file")
@click.pass_obj
def status_cmd(ctx: GitloomContext, verbose: bool) -> None:
    """Show changed files, one porcelain line each."""
    session = Ensure.session(ctx)
    with handle_gitloom_errors():
        files = session.refresh_files()
        merging = is_in_merge_state(session.git) if files else False
        mode = session.driver.rebase_mode()

    if mode is not None:
        user_output(click.style(f"Rebase in progress ({mode})", fg="yellow"))
    if merging:
        user_output(click.style("Merge in progress", fg="yellow"))
    if not files:
        user_output("Working tree clean")
        return

    for file in files:
        if verbose:
            flags = _flags(
                file.has_staged_changes,
                file.has_unstaged_changes,
                file.tracked,
                file.has_merge_conflicts,
            )
            machine_output(f"{file.display_string}\t{flags}")
        else:
            machine_output(file.display_string)
