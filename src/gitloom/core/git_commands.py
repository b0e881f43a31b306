"""git invocations used by gitloom, expressed as argv lists over a ProcessRunner."""

from pathlib import Path
from typing import Literal

from gitloom.core.config import RebaseConfig
from gitloom.core.models import RENAME_SEPARATOR
from gitloom.gateway.process.abc import ProcessRunner
from gitloom.subprocess_utils import ExternalToolError

_TRUTHY_CONFIG_VALUES = frozenset(["true", "1", "yes", "on"])

LOG_FORMAT = "%H%x00%P%x00%s"

AMEND_HEAD_ARGV = ["git", "commit", "--amend", "--no-edit", "--allow-empty"]

ResetMode = Literal["soft", "mixed", "hard"]
StashAction = Literal["apply", "pop", "drop"]


class GitCommands:
    """Thin wrapper that knows git's argv for each operation.

    Every method is one git call (or a small fixed sequence for renames) so
    callers can reason about exactly which external commands run.
    """

    def __init__(self, runner: ProcessRunner, repo_root: Path) -> None:
        self._runner = runner
        self._repo_root = repo_root

    @property
    def repo_root(self) -> Path:
        return self._repo_root

    def run(self, cmd: list[str]) -> str:
        return self._runner.run(cmd, cwd=self._repo_root)

    def run_in_terminal(self, cmd: list[str]) -> None:
        """Run with the terminal attached, for commands that may prompt (gpg)."""
        self._runner.run_interactive(cmd, cwd=self._repo_root, env={})

    # ============================================================================
    # Query Operations
    # ============================================================================

    def status_porcelain(self) -> str:
        return self.run(["git", "status", "--untracked-files=all", "--porcelain"])

    def status_long(self) -> str:
        return self.run(["git", "status", "--untracked-files=all"])

    def log(self, limit: int) -> str:
        return self.run(["git", "log", f"--format={LOG_FORMAT}", f"--max-count={limit}"])

    def log_for(self, shas: list[str]) -> str:
        """Log lines for specific commits, in the order given."""
        return self.run(["git", "log", "--no-walk=unsorted", f"--format={LOG_FORMAT}", *shas])

    def commit_file_names(self, sha: str) -> list[str]:
        output = self.run(["git", "show", "--pretty=", "--name-only", "--no-renames", sha])
        return [line for line in output.splitlines() if line.strip()]

    def show_commit_file(self, sha: str, path: str) -> str:
        return self.run(
            ["git", "show", "--no-renames", "--no-color", "--format=", sha, "--", path]
        )

    def config_value(self, key: str, *, scope: str) -> str:
        """Read a config value from one scope; unset keys read as "".

        Raises:
            ExternalToolError: If git cannot read the config (e.g. exit 3 for
                an invalid config file)
        """
        try:
            return self.run(["git", "config", f"--{scope}", "--get", key]).strip()
        except ExternalToolError as e:
            # git config exits 1 only when the key is unset
            if e.returncode == 1:
                return ""
            raise

    def using_gpg(self) -> bool:
        """Whether commit.gpgsign is on (repo value first, then global)."""
        value = self.config_value("commit.gpgsign", scope="local")
        if value == "":
            value = self.config_value("commit.gpgsign", scope="global")
        return value.lower() in _TRUTHY_CONFIG_VALUES

    def file_exists_in_revision(self, revision: str, path: str) -> bool:
        """`git cat-file -e` exits non-zero when the path is absent."""
        try:
            self.run(["git", "cat-file", "-e", f"{revision}:{path}"])
        except ExternalToolError:
            return False
        return True

    def absolute_git_dir(self) -> Path:
        return Path(self.run(["git", "rev-parse", "--absolute-git-dir"]).strip())

    def stash_list(self) -> list[str]:
        output = self.run(["git", "stash", "list"])
        return [line for line in output.split("\n") if line.strip()]

    # ============================================================================
    # Mutation Operations
    # ============================================================================

    def stage_file(self, path: str) -> None:
        self.run(["git", "add", "--", path])

    def stage_removal(self, path: str) -> None:
        """Stage a path that no longer exists in the working tree."""
        self.run(["git", "add", "--all", "--", path])

    def stage_all(self) -> None:
        self.run(["git", "add", "-A"])

    def unstage_all(self) -> None:
        self.run(["git", "reset"])

    def unstage_file(self, name: str, *, tracked: bool) -> None:
        """Unstage a file; renames ("old -> new") unstage both sides."""
        for path in name.split(RENAME_SEPARATOR):
            if tracked:
                self.run(["git", "reset", "HEAD", "--", path])
            else:
                self.run(["git", "rm", "--cached", "--", path])

    def reset_path(self, path: str) -> None:
        self.run(["git", "reset", "--", path])

    def checkout_path(self, path: str) -> None:
        """Discard unstaged changes to a path."""
        self.run(["git", "checkout", "--", path])

    def checkout_file_from(self, revision: str, path: str) -> None:
        self.run(["git", "checkout", revision, "--", path])

    def amend_head(self) -> None:
        self.run(AMEND_HEAD_ARGV)

    def rename_head(self, message: str) -> None:
        self.run(["git", "commit", "--allow-empty", "--amend", "-m", message])

    def revert(self, sha: str) -> None:
        self.run(["git", "revert", "--no-edit", sha])

    def reset_to(self, revision: str, mode: ResetMode) -> None:
        self.run(["git", "reset", f"--{mode}", revision])

    def abort_merge(self) -> None:
        self.run(["git", "merge", "--abort"])

    def stash_save(self, message: str, *, staged_only: bool) -> None:
        cmd = ["git", "stash", "push"]
        if staged_only:
            cmd.append("--staged")
        if message:
            cmd.extend(["-m", message])
        self.run(cmd)

    def stash_do(self, index: int, action: StashAction) -> None:
        self.run(["git", "stash", action, f"stash@{{{index}}}"])

    def create_fixup_commit(self, sha: str) -> None:
        self.run(["git", "commit", f"--fixup={sha}"])

    def apply_patch(self, patch_path: Path, *, reverse: bool) -> None:
        cmd = ["git", "apply", "--index"]
        if reverse:
            cmd.append("--reverse")
        cmd.append(str(patch_path))
        self.run(cmd)


def commit_argv(message: str, *, no_verify: bool) -> list[str]:
    cmd = ["git", "commit"]
    if no_verify:
        cmd.append("--no-verify")
    cmd.extend(["-m", message])
    return cmd


def interactive_rebase_argv(base: str, config: RebaseConfig) -> list[str]:
    cmd = ["git", "rebase", "--interactive"]
    if config.autostash:
        cmd.append("--autostash")
    if config.keep_empty:
        cmd.append("--keep-empty")
    if config.rebase_merges:
        cmd.append("--rebase-merges")
    cmd.append(base)
    return cmd


def autosquash_rebase_argv(sha: str, config: RebaseConfig) -> list[str]:
    cmd = ["git", "rebase", "--interactive"]
    if config.autostash:
        cmd.append("--autostash")
    cmd.extend(["--autosquash", f"{sha}^"])
    return cmd


def rebase_signal_argv(signal: str) -> list[str]:
    return ["git", "rebase", f"--{signal}"]
