import logging

import click

from gitloom.cli.commands.commit import commit_group
from gitloom.cli.commands.config import config_group
from gitloom.cli.commands.files import (
    discard_cmd,
    ignore_cmd,
    merge_abort_cmd,
    stage_cmd,
    unstage_cmd,
)
from gitloom.cli.commands.log import log_cmd
from gitloom.cli.commands.patch import patch_group
from gitloom.cli.commands.rebase import rebase_group
from gitloom.cli.commands.stash import stash_group
from gitloom.cli.commands.status import status_cmd
from gitloom.cli.editor_mode import maybe_run_editor_mode
from gitloom.cli.errors import handle_gitloom_errors
from gitloom.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="gitloom")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Stage, rewrite and untangle git history from the terminal."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        with handle_gitloom_errors():
            ctx.obj = create_context(debug=debug)

    if ctx.obj.config.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")


cli.add_command(status_cmd)
cli.add_command(log_cmd)
cli.add_command(stage_cmd)
cli.add_command(unstage_cmd)
cli.add_command(discard_cmd)
cli.add_command(ignore_cmd)
cli.add_command(merge_abort_cmd)
cli.add_command(stash_group)
cli.add_command(rebase_group)
cli.add_command(commit_group)
cli.add_command(patch_group)
cli.add_command(config_group)


def main() -> None:
    """CLI entry point used by the `gitloom` console script."""
    # git re-invokes gitloom as its editor during a rebase
    maybe_run_editor_mode()
    cli()
