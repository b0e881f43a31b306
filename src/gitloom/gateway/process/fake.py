"""Fake process runner for testing."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

from gitloom.gateway.process.abc import ProcessRunner
from gitloom.subprocess_utils import ExternalToolError


@dataclass(frozen=True)
class RunCall:
    cmd: list[str]
    cwd: Path
    env: dict[str, str] | None
    interactive: bool


class FakeProcessRunner(ProcessRunner):
    """In-memory process runner.

    Constructor Injection:
    ---------------------
    - outputs: argv tuple -> stdout returned by run()
    - failures: argv tuple -> stderr of the ExternalToolError to raise (exit status 1
      unless set_failure() gave another)
    - on_command: Hook called with each argv before the result is decided,
      letting tests simulate side effects (e.g. git creating rebase-merge/)

    Mutation Tracking:
    -----------------
    - calls: Every RunCall in order
    - commands: Just the argv lists, in order
    """

    def __init__(
        self,
        *,
        outputs: dict[tuple[str, ...], str] | None = None,
        failures: dict[tuple[str, ...], str] | None = None,
        on_command: Callable[[list[str]], None] | None = None,
    ) -> None:
        self._outputs = outputs if outputs is not None else {}
        self._failures = failures if failures is not None else {}
        self._on_command = on_command
        self._failure_codes: dict[tuple[str, ...], int] = {}
        self._calls: list[RunCall] = []

    def run(self, cmd: list[str], *, cwd: Path) -> str:
        self._calls.append(RunCall(cmd=list(cmd), cwd=cwd, env=None, interactive=False))
        self._dispatch(cmd)
        return self._outputs.get(tuple(cmd), "")

    def run_interactive(self, cmd: list[str], *, cwd: Path, env: Mapping[str, str]) -> None:
        self._calls.append(RunCall(cmd=list(cmd), cwd=cwd, env=dict(env), interactive=True))
        self._dispatch(cmd)

    def _dispatch(self, cmd: list[str]) -> None:
        if self._on_command is not None:
            self._on_command(cmd)
        key = tuple(cmd)
        if key in self._failures:
            raise ExternalToolError(
                cmd=cmd,
                returncode=self._failure_codes.get(key, 1),
                stderr=self._failures[key],
                operation_context=f"run '{' '.join(cmd)}'",
            )

    def set_output(self, cmd: list[str], stdout: str) -> None:
        """Configure stdout for a command after construction."""
        self._outputs[tuple(cmd)] = stdout

    def set_failure(self, cmd: list[str], stderr: str, *, returncode: int = 1) -> None:
        """Configure a command to fail after construction."""
        self._failures[tuple(cmd)] = stderr
        self._failure_codes[tuple(cmd)] = returncode

    def clear_failure(self, cmd: list[str]) -> None:
        self._failures.pop(tuple(cmd), None)
        self._failure_codes.pop(tuple(cmd), None)

    @property
    def calls(self) -> list[RunCall]:
        return list(self._calls)

    @property
    def commands(self) -> list[list[str]]:
        return [call.cmd for call in self._calls]

    @property
    def interactive_calls(self) -> list[RunCall]:
        return [call for call in self._calls if call.interactive]
