"""Application context with dependency injection."""

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path

from gitloom.core.config import GitloomConfig, global_config_dir, load_config
from gitloom.core.session import RepoSession
from gitloom.gateway.filesystem.abc import FileSystem
from gitloom.gateway.filesystem.fake import FakeFileSystem
from gitloom.gateway.filesystem.real import RealFileSystem
from gitloom.gateway.process.abc import ProcessRunner
from gitloom.gateway.process.fake import FakeProcessRunner
from gitloom.gateway.process.real import RealProcessRunner
from gitloom.subprocess_utils import ExternalToolError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepoLocation:
    root: Path
    git_dir: Path


@dataclass(frozen=True)
class GitloomContext:
    """Immutable context holding every dependency a command needs.

    Created once at CLI entry and threaded through via click's ctx.obj.
    `session` is None when the working directory is not inside a repository;
    only the config commands work then.
    """

    runner: ProcessRunner
    filesystem: FileSystem
    cwd: Path
    config: GitloomConfig
    global_config_dir: Path
    repo: RepoLocation | None
    session: RepoSession | None

    @staticmethod
    def for_test(
        runner: ProcessRunner | None = None,
        filesystem: FileSystem | None = None,
        cwd: Path | None = None,
        config: GitloomConfig | None = None,
        config_dir: Path | None = None,
        repo_root: Path | None = None,
        git_dir: Path | None = None,
        in_repo: bool = True,
    ) -> "GitloomContext":
        """Create a context backed by fakes.

        Args:
            runner: Defaults to an empty FakeProcessRunner
            filesystem: Defaults to an empty FakeFileSystem
            cwd: Defaults to /test/repo
            config: Defaults to GitloomConfig.defaults() with a fixed editor command
            config_dir: Global config directory (defaults to /test/config/gitloom)
            repo_root: Defaults to cwd
            git_dir: Defaults to repo_root/.git
            in_repo: False simulates running outside any repository
        """
        runner = runner if runner is not None else FakeProcessRunner()
        filesystem = filesystem if filesystem is not None else FakeFileSystem()
        cwd = cwd if cwd is not None else Path("/test/repo")
        if config is None:
            config = replace(GitloomConfig.defaults(), editor_command="gitloom")
        config_dir = config_dir if config_dir is not None else Path("/test/config/gitloom")

        if not in_repo:
            return GitloomContext(
                runner=runner,
                filesystem=filesystem,
                cwd=cwd,
                config=config,
                global_config_dir=config_dir,
                repo=None,
                session=None,
            )

        root = repo_root if repo_root is not None else cwd
        repo = RepoLocation(root=root, git_dir=git_dir if git_dir is not None else root / ".git")
        return GitloomContext(
            runner=runner,
            filesystem=filesystem,
            cwd=cwd,
            config=config,
            global_config_dir=config_dir,
            repo=repo,
            session=RepoSession(
                runner=runner,
                filesystem=filesystem,
                repo_root=repo.root,
                git_dir=repo.git_dir,
                config=config,
            ),
        )


def discover_repo(runner: ProcessRunner, cwd: Path) -> RepoLocation | None:
    """Find the enclosing work tree, or None outside a repository."""
    try:
        root = runner.run(["git", "rev-parse", "--show-toplevel"], cwd=cwd).strip()
        git_dir = runner.run(["git", "rev-parse", "--absolute-git-dir"], cwd=cwd).strip()
    except ExternalToolError as e:
        logger.debug("Not inside a git work tree: %s", e)
        return None
    return RepoLocation(root=Path(root), git_dir=Path(git_dir))


def create_context(*, debug: bool) -> GitloomContext:
    """Create production context with real implementations.

    Called at CLI entry point. `debug` (the --debug flag) is combined with the
    `debug` config key.
    """
    runner = RealProcessRunner()
    filesystem = RealFileSystem()
    cwd = Path.cwd()
    config_dir = global_config_dir(os.environ)

    repo = discover_repo(runner, cwd)
    config = load_config(config_dir, repo.root if repo is not None else None)
    if debug:
        config = replace(config, debug=True)

    session = None
    if repo is not None:
        session = RepoSession(
            runner=runner,
            filesystem=filesystem,
            repo_root=repo.root,
            git_dir=repo.git_dir,
            config=config,
        )
    return GitloomContext(
        runner=runner,
        filesystem=filesystem,
        cwd=cwd,
        config=config,
        global_config_dir=config_dir,
        repo=repo,
        session=session,
    )
