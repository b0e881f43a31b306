"""Compound history operations built from plans, the rewrite driver and git calls.

Every operation validates what it can (history bounds, signing, patch
selection) before the rebase is launched. Once git is running, a failing step
propagates unchanged and the rebase is left for an explicit continue or abort,
except for patch application, which aborts the rebase itself.
"""

import logging
from pathlib import Path

from gitloom.core.continuation import (
    ApplyPatchThenContinue,
    Continuation,
    ResetPatchSelection,
)
from gitloom.core.errors import (
    InsufficientHistoryError,
    PatchSelectionError,
    UnsupportedWithSigningError,
)
from gitloom.core.git_commands import GitCommands
from gitloom.core.models import Commit, CommitFile, RebaseVerb
from gitloom.core.patch_builder import FileSelection, parse_file_diff, render_patch
from gitloom.core.patch_selection import PatchSelectionTracker
from gitloom.core.rewrite_driver import RewriteDriver
from gitloom.core.rewrite_plan import (
    build_cherry_pick_plan,
    build_edit_pair_plan,
    build_move_down_plan,
    build_move_up_plan,
    build_rewrite_plan,
)
from gitloom.gateway.filesystem.abc import FileSystem
from gitloom.subprocess_utils import ExternalToolError

logger = logging.getLogger(__name__)


class FileOpOrchestrator:
    """Runs multi-step rewrites against one repository."""

    def __init__(
        self,
        *,
        git: GitCommands,
        driver: RewriteDriver,
        filesystem: FileSystem,
        tracker: PatchSelectionTracker,
        git_dir: Path,
    ) -> None:
        self._git = git
        self._driver = driver
        self._filesystem = filesystem
        self._tracker = tracker
        self._git_dir = git_dir
        driver.bind_continuation_handler(self._run_continuation)

    @property
    def patch_dir(self) -> Path:
        return self._git_dir / "gitloom" / "patches"

    # ============================================================================
    # Single-commit rewrites
    # ============================================================================

    def rewrite_commit(self, commits: list[Commit], index: int, verb: RebaseVerb) -> None:
        """Apply `verb` to one commit; reword keeps the user's editor for the message."""
        plan = build_rewrite_plan(commits, index, verb)
        self._driver.start(plan, override_editor=verb != "reword")

    def move_commit_down(self, commits: list[Commit], index: int) -> None:
        self._driver.start(build_move_down_plan(commits, index), override_editor=True)

    def move_commit_up(self, commits: list[Commit], index: int) -> None:
        self._driver.start(build_move_up_plan(commits, index), override_editor=True)

    def cherry_pick_commits(self, commits: list[Commit]) -> None:
        """Replay copied commits (newest first) on top of HEAD."""
        if not commits:
            raise InsufficientHistoryError("No commits were given to cherry-pick")
        self._driver.start(build_cherry_pick_plan(commits), override_editor=True)

    # ============================================================================
    # Discarding a file change from an old commit
    # ============================================================================

    def discard_old_file_change(self, commits: list[Commit], index: int, path: str) -> None:
        """Rewrite commit `index` so it no longer changes `path`.

        If the file did not exist in the commit's parent it is removed and the
        removal staged; otherwise the parent's version is checked out. The
        commit is then amended and the rebase continued.

        Raises:
            InsufficientHistoryError: If `index` is outside the loaded history
            UnsupportedWithSigningError: If commit.gpgsign is enabled
            RewriteFailedError: If git fails to start or continue the rebase
        """
        if index < 0 or index >= len(commits):
            raise InsufficientHistoryError(
                f"Commit index {index} is outside the {len(commits)} loaded commits"
            )
        self._ensure_not_signing()
        plan = build_rewrite_plan(commits, index, "edit")

        self._driver.start(plan, override_editor=True)

        if self._git.file_exists_in_revision("HEAD^", path):
            self._git.checkout_file_from("HEAD^", path)
        else:
            self._filesystem.remove(self._git.repo_root / path)
            self._git.stage_removal(path)

        self._git.amend_head()
        self._driver.continue_rewrite()

    # ============================================================================
    # Patch operations
    # ============================================================================

    def delete_patch_from_commit(self, commits: list[Commit], index: int) -> None:
        """Remove the selected files/hunks from commit `index`."""
        sha = self._selection_target(commits, index)
        self._ensure_not_signing()
        plan = build_rewrite_plan(commits, index, "edit")
        patch_path = self._write_patch(sha)

        self._driver.start(plan, override_editor=True)
        self._apply_or_abort(patch_path, reverse=True)
        self._git.amend_head()
        self._driver.queue_continuation(ResetPatchSelection())
        self._driver.continue_rewrite()

    def move_patch_to_commit(
        self, commits: list[Commit], source_index: int, destination_index: int
    ) -> None:
        """Move the selected files/hunks of one commit into another commit.

        An older destination is edited alone: replaying the source afterwards
        merges the identical change cleanly and drops it from the source. A newer
        destination needs two stops, the second one driven by a continuation.
        """
        sha = self._selection_target(commits, source_index)
        if destination_index < 0 or destination_index >= len(commits):
            raise InsufficientHistoryError(
                f"Commit index {destination_index} is outside the {len(commits)} loaded commits"
            )
        if destination_index == source_index:
            raise PatchSelectionError("The patch is already in that commit")
        self._ensure_not_signing()

        if destination_index > source_index:
            plan = build_rewrite_plan(commits, destination_index, "edit")
            patch_path = self._write_patch(sha)
            self._driver.start(plan, override_editor=True)
            self._apply_or_abort(patch_path, reverse=False)
            self._git.amend_head()
            self._driver.queue_continuation(ResetPatchSelection())
            self._driver.continue_rewrite()
            return

        plan = build_edit_pair_plan(commits, source_index, destination_index)
        patch_path = self._write_patch(sha)
        self._driver.start(plan, override_editor=True)
        self._apply_or_abort(patch_path, reverse=True)
        self._git.amend_head()
        self._driver.queue_continuation(ApplyPatchThenContinue(patch_path=patch_path))
        self._driver.continue_rewrite()

    # ============================================================================
    # Fixups
    # ============================================================================

    def create_fixup_commit(self, sha: str) -> None:
        self._git.create_fixup_commit(sha)

    def squash_all_above_fixups(self, sha: str) -> None:
        self._driver.autosquash(sha)

    def amend_to_commit(self, sha: str) -> None:
        """Fold the staged changes into an older commit."""
        self.create_fixup_commit(sha)
        self.squash_all_above_fixups(sha)

    # ============================================================================
    # Commit files
    # ============================================================================

    def commit_files(self, sha: str) -> list[CommitFile]:
        return [
            CommitFile(sha=sha, name=name, status=self._tracker.get_status(sha, name))
            for name in self._git.commit_file_names(sha)
        ]

    def checkout_commit_file(self, sha: str, path: str) -> None:
        self._git.checkout_file_from(sha, path)

    # ============================================================================
    # Internals
    # ============================================================================

    def _ensure_not_signing(self) -> None:
        if self._git.using_gpg():
            raise UnsupportedWithSigningError()

    def _selection_target(self, commits: list[Commit], index: int) -> str:
        if index < 0 or index >= len(commits):
            raise InsufficientHistoryError(
                f"Commit index {index} is outside the {len(commits)} loaded commits"
            )
        sha = commits[index].sha
        if self._tracker.active_target != sha:
            raise PatchSelectionError(f"No patch is selected for commit {sha[:8]}")
        return sha

    def _write_patch(self, sha: str) -> Path:
        selections = [
            FileSelection(
                diff=parse_file_diff(self._git.show_commit_file(sha, path)),
                status=self._tracker.get_status(sha, path),
                hunk_indices=self._tracker.selected_hunks(path),
            )
            for path in self._tracker.selected_paths()
        ]
        content = render_patch(selections)
        patch_path = self.patch_dir / f"{sha}.patch"
        self._filesystem.write_text(patch_path, content)
        logger.debug("Wrote patch for %s to %s", sha, patch_path)
        return patch_path

    def _apply_or_abort(self, patch_path: Path, *, reverse: bool) -> None:
        try:
            self._git.apply_patch(patch_path, reverse=reverse)
        except ExternalToolError:
            logger.warning("Patch %s did not apply; aborting the rebase", patch_path)
            self._driver.abort()
            raise

    def _run_continuation(self, continuation: Continuation) -> None:
        match continuation:
            case ApplyPatchThenContinue(patch_path=patch_path):
                self._apply_or_abort(patch_path, reverse=False)
                self._git.amend_head()
                self._driver.queue_continuation(ResetPatchSelection())
                self._driver.continue_rewrite()
            case ResetPatchSelection():
                self._tracker.reset()
