import click

from gitloom.cli.ensure import Ensure
from gitloom.cli.errors import handle_gitloom_errors
from gitloom.core.config import (
    CONFIG_KEYS,
    load_merged_data,
    lookup_config_value,
    parse_config_value,
    repo_config_dir,
    write_config_value,
)
from gitloom.core.context import GitloomContext
from gitloom.output.output import machine_output, user_output


def _format_config_value(value: object) -> str:
    """Format a config value for display."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


@click.group("config")
def config_group() -> None:
    """Manage gitloom configuration."""


@config_group.command("list")
@click.pass_obj
def config_list(ctx: GitloomContext) -> None:
    """Print every configuration key with its effective value."""
    repo_root = ctx.repo.root if ctx.repo is not None else None
    with handle_gitloom_errors():
        data = load_merged_data(ctx.global_config_dir, repo_root)
    for key in CONFIG_KEYS:
        machine_output(f"{key}={_format_config_value(lookup_config_value(data, key))}")


@config_group.command("get")
@click.argument("key", metavar="KEY")
@click.pass_obj
def config_get(ctx: GitloomContext, key: str) -> None:
    """Print the value of a given configuration key."""
    Ensure.invariant(key in CONFIG_KEYS, f"Invalid key: {key}")
    repo_root = ctx.repo.root if ctx.repo is not None else None
    with handle_gitloom_errors():
        data = load_merged_data(ctx.global_config_dir, repo_root)
    machine_output(_format_config_value(lookup_config_value(data, key)))


@config_group.command("set")
@click.argument("key", metavar="KEY")
@click.argument("value", metavar="VALUE")
@click.option("--repo", "repo_scope", is_flag=True, help="Write .gitloom/config.toml in the repo")
@click.pass_obj
def config_set(ctx: GitloomContext, key: str, value: str, repo_scope: bool) -> None:
    """Set a configuration key (globally unless --repo)."""
    Ensure.invariant(key in CONFIG_KEYS, f"Invalid key: {key}")
    try:
        parsed = parse_config_value(key, value)
    except ValueError as e:
        user_output(click.style("Error: ", fg="red") + f"Invalid value for {key}: {e}")
        raise SystemExit(1) from e

    if repo_scope:
        repo = Ensure.not_none(ctx.repo, "Not inside a git repository")
        config_dir = repo_config_dir(repo.root)
    else:
        config_dir = ctx.global_config_dir
    path = write_config_value(config_dir, key, parsed)
    user_output(f"Set {key}={_format_config_value(parsed)} in {path}")
