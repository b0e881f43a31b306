"""Abstract interface for launching external commands.

The core never calls subprocess directly. Everything it needs from the outside
world is "run a command and capture its output" or "run a command with this
environment and let it own the terminal".
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path


class ProcessRunner(ABC):
    """Abstract process launcher for dependency injection."""

    @abstractmethod
    def run(self, cmd: list[str], *, cwd: Path) -> str:
        """Run a command to completion and return its stdout.

        Args:
            cmd: argv to execute
            cwd: Working directory

        Returns:
            Captured standard output

        Raises:
            ExternalToolError: If the command cannot start or exits non-zero
        """
        ...

    @abstractmethod
    def run_interactive(self, cmd: list[str], *, cwd: Path, env: Mapping[str, str]) -> None:
        """Run a command in the foreground with extra environment variables.

        stdin and stdout stay attached to the terminal so that the child (or an
        editor it spawns) can talk to the user.

        Args:
            cmd: argv to execute
            cwd: Working directory
            env: Variables layered on top of the current environment

        Raises:
            ExternalToolError: If the command cannot start or exits non-zero
        """
        ...
