"""Precondition checks for CLI commands.

Each helper prints a red "Error:" message and exits with status 1 when the
check fails; on success it returns the narrowed value (if any).
"""

from typing import TypeVar

import click

from gitloom.core.context import GitloomContext
from gitloom.core.session import RepoSession
from gitloom.output.output import user_output

T = TypeVar("T")


class Ensure:
    """Helper class for asserting CLI preconditions."""

    @staticmethod
    def invariant(condition: bool, error_message: str) -> None:
        if not condition:
            user_output(click.style("Error: ", fg="red") + error_message)
            raise SystemExit(1)

    @staticmethod
    def not_none(value: T | None, error_message: str) -> T:
        """Ensure value is not None, otherwise exit with error.

        Provides type narrowing from `T | None` to `T`.
        """
        if value is None:
            user_output(click.style("Error: ", fg="red") + error_message)
            raise SystemExit(1)
        return value

    @staticmethod
    def session(ctx: GitloomContext) -> RepoSession:
        return Ensure.not_none(ctx.session, "Not inside a git repository")

    @staticmethod
    def rebase_in_progress(session: RepoSession) -> None:
        Ensure.invariant(session.driver.is_active, "There is no rebase in progress")
