"""Behaviour when git re-invokes gitloom as its editor.

git appends the file to edit as the last argument. Nothing here touches the
repository or loads config; the process exits as soon as the file is handled.
"""

import logging
import os
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

from gitloom.core.editor_env import (
    CLIENT_COMMAND_ENV,
    EXIT_IMMEDIATELY,
    INTERACTIVE_REBASE,
    REBASE_TODO_ENV,
    TODO_FILE_NAME,
)
from gitloom.gateway.filesystem.abc import FileSystem
from gitloom.gateway.filesystem.real import RealFileSystem

logger = logging.getLogger(__name__)


def editor_mode_requested(env: Mapping[str, str]) -> bool:
    return env.get(CLIENT_COMMAND_ENV, "") in (INTERACTIVE_REBASE, EXIT_IMMEDIATELY)


def run_editor_mode(env: Mapping[str, str], argv: Sequence[str], filesystem: FileSystem) -> int:
    """Handle one editor invocation and return the exit status.

    INTERACTIVE_REBASE replaces git's todo with the precomputed one; any other
    file (a commit message) is left as git wrote it. EXIT_IMMEDIATELY never
    writes.
    """
    mode = env[CLIENT_COMMAND_ENV]
    if mode == EXIT_IMMEDIATELY or len(argv) < 2:
        return 0

    target = Path(argv[-1])
    if not target.name.endswith(TODO_FILE_NAME):
        return 0

    if env.get("DEBUG") == "TRUE":
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")
    logger.debug("Writing rebase todo to %s", target)
    filesystem.write_text(target, env.get(REBASE_TODO_ENV, ""))
    return 0


def maybe_run_editor_mode() -> None:
    """Exit the process if git started us as its editor."""
    if not editor_mode_requested(os.environ):
        return
    raise SystemExit(run_editor_mode(os.environ, sys.argv, RealFileSystem()))
