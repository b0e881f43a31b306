"""Production process runner using subprocess."""

import logging
import subprocess
from collections.abc import Mapping
from pathlib import Path

from gitloom.gateway.process.abc import ProcessRunner
from gitloom.subprocess_utils import (
    ExternalToolError,
    copied_env_for_git_subprocess,
    decode_output,
    describe_command,
    run_subprocess_with_context,
)

logger = logging.getLogger(__name__)


class RealProcessRunner(ProcessRunner):
    """Real implementation backed by subprocess.run()."""

    def run(self, cmd: list[str], *, cwd: Path) -> str:
        """Run a command with captured output."""
        result = run_subprocess_with_context(
            cmd=cmd,
            operation_context=f"run '{describe_command(cmd)}'",
            cwd=cwd,
            env=copied_env_for_git_subprocess(),
        )
        return result.stdout

    def run_interactive(self, cmd: list[str], *, cwd: Path, env: Mapping[str, str]) -> None:
        """Run a command attached to the terminal, capturing only stderr."""
        logger.debug("run interactive: %s (cwd=%s)", describe_command(cmd), cwd)
        operation_context = f"run '{describe_command(cmd)}'"
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                env=copied_env_for_git_subprocess(env),
                stderr=subprocess.PIPE,
                check=False,
            )
        except OSError as e:
            raise ExternalToolError(
                cmd=cmd, returncode=None, stderr=str(e), operation_context=operation_context
            ) from e

        stderr = decode_output(result.stderr)
        if stderr:
            logger.debug("stderr from %s: %s", cmd[0], stderr.strip())
        if result.returncode != 0:
            raise ExternalToolError(
                cmd=cmd,
                returncode=result.returncode,
                stderr=stderr,
                operation_context=operation_context,
            )
