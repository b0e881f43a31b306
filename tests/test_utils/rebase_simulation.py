"""Simulate how git's rebase-merge/ directory comes and goes.

FakeProcessRunner decides only success or failure; this hook adds the
directory side effect so RewriteDriver can tell a paused rebase from a
finished one.
"""

from pathlib import Path

from gitloom.gateway.filesystem.fake import FakeFileSystem

REPO_ROOT = Path("/test/repo")
GIT_DIR = REPO_ROOT / ".git"
REBASE_MERGE_DIR = GIT_DIR / "rebase-merge"


class RebaseSimulation:
    """on_command hook for FakeProcessRunner.

    `stops` is how many times git pauses (edit stops or conflicts) before the
    rebase finishes: each launch or continue/skip consumes one stop while any
    are left, otherwise the rebase completes.
    """

    def __init__(self, filesystem: FakeFileSystem, *, stops: int) -> None:
        self._filesystem = filesystem
        self._stops = stops

    def __call__(self, cmd: list[str]) -> None:
        if cmd[:2] != ["git", "rebase"]:
            return
        if cmd[2] == "--abort":
            self._filesystem.remove(REBASE_MERGE_DIR)
            return
        if cmd[2] in ("--interactive", "--continue", "--skip"):
            self._advance()

    def _advance(self) -> None:
        if self._stops > 0:
            self._stops -= 1
            self._filesystem.add_directory(REBASE_MERGE_DIR)
        else:
            self._filesystem.remove(REBASE_MERGE_DIR)
