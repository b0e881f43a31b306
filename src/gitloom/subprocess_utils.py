"""Subprocess helpers shared by the process gateway.

All git invocations go through run_subprocess_with_context() so that failures
carry the command, exit code and captured stderr in one exception type.
"""

import logging
import os
import shlex
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

logger = logging.getLogger(__name__)


class ExternalToolError(RuntimeError):
    """A subprocess could not be launched or exited non-zero.

    Attributes:
        cmd: The argv that was run
        returncode: Exit status, or None if the process never started
        stderr: Captured standard error (empty when the terminal was handed over)
    """

    def __init__(
        self,
        *,
        cmd: Sequence[str],
        returncode: int | None,
        stderr: str,
        operation_context: str,
    ) -> None:
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stderr = stderr
        self.operation_context = operation_context
        detail = stderr.strip() or f"exit status {returncode}"
        super().__init__(f"Failed to {operation_context}: {detail}")


def describe_command(cmd: Sequence[str]) -> str:
    """Render argv as a copy-pasteable shell string for log output."""
    return shlex.join(cmd)


def copied_env_for_git_subprocess(extra: Mapping[str, str] | None = None) -> dict[str, str]:
    """Copy os.environ for a git child process.

    GIT_TERMINAL_PROMPT=0 keeps git from blocking on credential prompts.
    """
    env = os.environ.copy()
    env["GIT_TERMINAL_PROMPT"] = "0"
    if extra is not None:
        env.update(extra)
    return env


def decode_output(data: bytes | None) -> str:
    """Decode captured output without losing bytes or newline style.

    git passes file contents through unchanged, so output is not necessarily
    UTF-8 and may contain "\\r\\n". Undecodable bytes become lone surrogates
    that encode back to the same bytes.
    """
    if data is None:
        return ""
    return data.decode("utf-8", errors="surrogateescape")


def run_subprocess_with_context(
    *,
    cmd: Sequence[str],
    operation_context: str,
    cwd: Path,
    env: Mapping[str, str] | None = None,
    input: str | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a command with captured output, raising ExternalToolError on failure.

    Args:
        cmd: argv to execute
        operation_context: Human description used in the error message
        cwd: Working directory
        env: Full environment for the child (defaults to the current one)
        input: Optional text written to stdin

    Returns:
        The completed process (returncode is always 0), stdout and stderr
        decoded with decode_output()
    """
    logger.debug("run: %s (cwd=%s)", describe_command(cmd), cwd)
    try:
        raw = subprocess.run(
            list(cmd),
            cwd=cwd,
            capture_output=True,
            check=False,
            env=dict(env) if env is not None else None,
            input=input.encode("utf-8", errors="surrogateescape") if input is not None else None,
        )
    except OSError as e:
        raise ExternalToolError(
            cmd=cmd, returncode=None, stderr=str(e), operation_context=operation_context
        ) from e

    result = subprocess.CompletedProcess(
        args=raw.args,
        returncode=raw.returncode,
        stdout=decode_output(raw.stdout),
        stderr=decode_output(raw.stderr),
    )
    if result.returncode != 0:
        raise ExternalToolError(
            cmd=cmd,
            returncode=result.returncode,
            stderr=result.stderr,
            operation_context=operation_context,
        )
    return result
