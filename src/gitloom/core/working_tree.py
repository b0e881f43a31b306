"""Working tree, index and HEAD operations.

Per-file operations take FileChange records from `git status`. Commits made for
the user (commit, amend) run with the terminal attached when commit.gpgsign
is on, so gpg can ask for a passphrase.
"""

from gitloom.core.git_commands import (
    AMEND_HEAD_ARGV,
    GitCommands,
    ResetMode,
    StashAction,
    commit_argv,
)
from gitloom.core.models import FileChange
from gitloom.gateway.filesystem.abc import FileSystem


def stage_file(git: GitCommands, file: FileChange) -> None:
    for path in file.names:
        git.stage_file(path)


def unstage_file(git: GitCommands, file: FileChange) -> None:
    git.unstage_file(file.name, tracked=file.tracked)


def discard_unstaged_file_changes(git: GitCommands, file: FileChange) -> None:
    git.checkout_path(file.current_name)


def discard_all_file_changes(git: GitCommands, filesystem: FileSystem, file: FileChange) -> None:
    """Throw away staged and unstaged changes; untracked files are deleted."""
    path = file.current_name
    if file.has_staged_changes or file.has_merge_conflicts:
        git.reset_path(path)

    if not file.tracked:
        filesystem.remove(git.repo_root / path)
        return
    git.checkout_path(path)


def is_in_merge_state(git: GitCommands) -> bool:
    output = git.status_long()
    return "conclude merge" in output or "unmerged paths" in output


def stage_all(git: GitCommands) -> None:
    git.stage_all()


def unstage_all(git: GitCommands) -> None:
    git.unstage_all()


def ignore_file(git: GitCommands, filesystem: FileSystem, path: str) -> None:
    """Append `path` to the repository's top-level .gitignore."""
    gitignore = git.repo_root / ".gitignore"
    content = filesystem.read_text(gitignore) if filesystem.exists(gitignore) else ""
    if content and not content.endswith("\n"):
        content += "\n"
    filesystem.write_text(gitignore, content + path + "\n")


def abort_merge(git: GitCommands) -> None:
    git.abort_merge()


# ============================================================================
# Commits at HEAD
# ============================================================================


def _run_commit(git: GitCommands, cmd: list[str]) -> None:
    if git.using_gpg():
        git.run_in_terminal(cmd)
    else:
        git.run(cmd)


def commit_changes(git: GitCommands, message: str, *, no_verify: bool) -> None:
    """Commit the staged changes."""
    _run_commit(git, commit_argv(message, no_verify=no_verify))


def amend_head(git: GitCommands) -> None:
    """Fold the staged changes into HEAD, keeping its message."""
    _run_commit(git, AMEND_HEAD_ARGV)


def rename_head(git: GitCommands, message: str) -> None:
    git.rename_head(message)


def revert_commit(git: GitCommands, sha: str) -> None:
    git.revert(sha)


def reset_to_commit(git: GitCommands, revision: str, mode: ResetMode) -> None:
    git.reset_to(revision, mode)


# ============================================================================
# Stash
# ============================================================================


def stash_save(git: GitCommands, message: str) -> None:
    git.stash_save(message, staged_only=False)


def stash_save_staged_changes(git: GitCommands, message: str) -> None:
    """Stash only what is staged; unstaged changes stay in the working tree."""
    git.stash_save(message, staged_only=True)


def stash_do(git: GitCommands, index: int, action: StashAction) -> None:
    git.stash_do(index, action)


def stash_entries(git: GitCommands) -> list[str]:
    return git.stash_list()
