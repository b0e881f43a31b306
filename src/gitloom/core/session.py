"""One logical session over a repository.

The session owns the FileChange and Commit sequences and replaces them
wholesale on refresh. All state is single-threaded; refreshes never run while
the caller is inside a rewrite step.
"""

import logging
from pathlib import Path

from gitloom.core.change_set import merge_file_changes
from gitloom.core.commit_loader import parse_log
from gitloom.core.config import GitloomConfig
from gitloom.core.editor_env import default_editor_command
from gitloom.core.file_ops import FileOpOrchestrator
from gitloom.core.git_commands import GitCommands
from gitloom.core.models import Commit, FileChange
from gitloom.core.patch_selection import PatchSelectionTracker
from gitloom.core.rewrite_driver import RewriteDriver
from gitloom.core.status_parser import parse_status
from gitloom.gateway.filesystem.abc import FileSystem
from gitloom.gateway.process.abc import ProcessRunner

logger = logging.getLogger(__name__)


class RepoSession:
    def __init__(
        self,
        *,
        runner: ProcessRunner,
        filesystem: FileSystem,
        repo_root: Path,
        git_dir: Path,
        config: GitloomConfig,
    ) -> None:
        self._config = config
        self.git = GitCommands(runner, repo_root)
        self.filesystem = filesystem
        self.tracker = PatchSelectionTracker()
        self.driver = RewriteDriver(
            runner=runner,
            filesystem=filesystem,
            repo_root=repo_root,
            git_dir=git_dir,
            rebase_config=config.rebase,
            editor_command=config.editor_command or default_editor_command(),
            debug=config.debug,
        )
        self.file_ops = FileOpOrchestrator(
            git=self.git,
            driver=self.driver,
            filesystem=filesystem,
            tracker=self.tracker,
            git_dir=git_dir,
        )
        self._files: list[FileChange] = []
        self._commits: list[Commit] = []

        # Each CLI invocation is a new process; pick up a rebase left paused
        # by an earlier one so continue/abort/skip are accepted.
        self.driver.adopt_in_progress()

    @property
    def files(self) -> list[FileChange]:
        return list(self._files)

    @property
    def commits(self) -> list[Commit]:
        return list(self._commits)

    def refresh_files(self) -> list[FileChange]:
        """Re-read `git status`, keeping the order of files seen before."""
        self._files = merge_file_changes(self._files, parse_status(self.git.status_porcelain()))
        logger.debug("Loaded %d changed files", len(self._files))
        return self.files

    def refresh_commits(self) -> list[Commit]:
        self._commits = parse_log(self.git.log(self._config.log_limit))
        logger.debug("Loaded %d commits", len(self._commits))
        return self.commits

    def find_file(self, path: str) -> FileChange | None:
        for file in self._files:
            if path in file.names:
                return file
        return None
