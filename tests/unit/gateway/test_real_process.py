"""Tests for RealProcessRunner against the running interpreter."""

import sys
from pathlib import Path

import pytest

from gitloom.gateway.process.real import RealProcessRunner
from gitloom.subprocess_utils import ExternalToolError


def test_run_returns_stdout(tmp_path: Path) -> None:
    output = RealProcessRunner().run([sys.executable, "-c", "print('hi')"], cwd=tmp_path)

    assert output == "hi\n"


def test_run_failure_carries_stderr(tmp_path: Path) -> None:
    cmd = [sys.executable, "-c", "import sys; sys.stderr.write('nope'); sys.exit(3)"]

    with pytest.raises(ExternalToolError) as exc_info:
        RealProcessRunner().run(cmd, cwd=tmp_path)

    assert exc_info.value.returncode == 3
    assert exc_info.value.stderr == "nope"
    assert "nope" in str(exc_info.value)


def test_missing_executable_is_an_external_tool_error(tmp_path: Path) -> None:
    with pytest.raises(ExternalToolError) as exc_info:
        RealProcessRunner().run(["definitely-not-a-real-binary-xyz"], cwd=tmp_path)

    assert exc_info.value.returncode is None


def test_run_interactive_passes_env(tmp_path: Path) -> None:
    script = "import os, sys; sys.exit(0 if os.environ['GITLOOM_TEST'] == 'yes' else 1)"

    RealProcessRunner().run_interactive(
        [sys.executable, "-c", script], cwd=tmp_path, env={"GITLOOM_TEST": "yes"}
    )


def test_run_interactive_failure_raises(tmp_path: Path) -> None:
    cmd = [sys.executable, "-c", "import sys; sys.stderr.write('conflict'); sys.exit(1)"]

    with pytest.raises(ExternalToolError) as exc_info:
        RealProcessRunner().run_interactive(cmd, cwd=tmp_path, env={})

    assert exc_info.value.stderr == "conflict"


def test_run_keeps_non_utf8_bytes_and_crlf(tmp_path: Path) -> None:
    script = "import sys; sys.stdout.buffer.write(b'\\xffcaf\\xe9\\r\\n')"

    output = RealProcessRunner().run([sys.executable, "-c", script], cwd=tmp_path)

    assert output == "\udcffcaf\udce9\r\n"
    assert output.encode("utf-8", errors="surrogateescape") == b"\xffcaf\xe9\r\n"


def test_run_failure_with_non_utf8_stderr_is_an_external_tool_error(tmp_path: Path) -> None:
    script = "import sys; sys.stderr.buffer.write(b'bad \\xff'); sys.exit(2)"

    with pytest.raises(ExternalToolError) as exc_info:
        RealProcessRunner().run([sys.executable, "-c", script], cwd=tmp_path)

    assert exc_info.value.stderr == "bad \udcff"
