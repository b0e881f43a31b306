"""Drive `git rebase --interactive` without user interaction.

The driver launches git with this program configured as its sequence editor,
relays continue/abort/skip, and owns the single pending continuation of a
compound operation.

State machine:

    idle -> plan_prepared -> running -> completed
                               |  ^
                               v  |
                           conflicted
    running/conflicted --abort--> aborted

git itself is a black box: a launch or signal either succeeds or fails, and
whether a rebase is still paused is read from <git_dir>/rebase-merge.
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Literal

from gitloom.core.config import RebaseConfig
from gitloom.core.continuation import (
    Continuation,
    deserialize_continuation,
    serialize_continuation,
)
from gitloom.core.editor_env import (
    TODO_FILE_NAME,
    interactive_rebase_env,
    skip_editor_env,
)
from gitloom.core.errors import InvalidRewriteStateError, RewriteFailedError
from gitloom.core.git_commands import (
    autosquash_rebase_argv,
    interactive_rebase_argv,
    rebase_signal_argv,
)
from gitloom.core.models import RebaseVerb
from gitloom.core.rewrite_plan import RewritePlan
from gitloom.core.todo_file import move_todo_down, set_todo_action
from gitloom.gateway.filesystem.abc import FileSystem
from gitloom.gateway.process.abc import ProcessRunner
from gitloom.subprocess_utils import ExternalToolError

logger = logging.getLogger(__name__)

RewriteState = Literal["idle", "plan_prepared", "running", "completed", "conflicted", "aborted"]
RebaseMode = Literal["normal", "interactive"]
RebaseSignal = Literal["continue", "abort", "skip"]

ContinuationHandler = Callable[[Continuation], None]

_ACTIVE_STATES: frozenset[str] = frozenset(["running", "conflicted"])


class RewriteDriver:
    """Launches and resumes one history rewrite at a time."""

    def __init__(
        self,
        *,
        runner: ProcessRunner,
        filesystem: FileSystem,
        repo_root: Path,
        git_dir: Path,
        rebase_config: RebaseConfig,
        editor_command: str,
        debug: bool,
    ) -> None:
        self._runner = runner
        self._filesystem = filesystem
        self._repo_root = repo_root
        self._git_dir = git_dir
        self._rebase_config = rebase_config
        self._editor_command = editor_command
        self._debug = debug

        self._state: RewriteState = "idle"
        self._plan: RewritePlan | None = None
        self._continuation: Continuation | None = None
        self._continuation_handler: ContinuationHandler | None = None

    @property
    def state(self) -> RewriteState:
        return self._state

    @property
    def plan(self) -> RewritePlan | None:
        return self._plan

    @property
    def pending_continuation(self) -> Continuation | None:
        return self._continuation

    @property
    def is_active(self) -> bool:
        return self._state in _ACTIVE_STATES

    @property
    def todo_path(self) -> Path:
        return self._git_dir / "rebase-merge" / TODO_FILE_NAME

    @property
    def continuation_path(self) -> Path:
        return self._git_dir / "gitloom" / "continuation.json"

    def bind_continuation_handler(self, handler: ContinuationHandler) -> None:
        self._continuation_handler = handler

    # ============================================================================
    # Repository state
    # ============================================================================

    def rebase_mode(self) -> RebaseMode | None:
        """Return "normal" for rebase-apply/, "interactive" for rebase-merge/, else None."""
        if self._filesystem.exists(self._git_dir / "rebase-apply"):
            return "normal"
        if self._filesystem.exists(self._git_dir / "rebase-merge"):
            return "interactive"
        return None

    def is_rebase_in_progress(self) -> bool:
        return self.rebase_mode() is not None

    def adopt_in_progress(self) -> bool:
        """Take over a rebase that git reports but this driver did not start.

        A follow-up step saved by the session that launched the rebase is
        restored with it. A saved step without a rebase is stale and deleted.
        """
        if self.is_active:
            return False
        if not self.is_rebase_in_progress():
            self._forget_saved_continuation()
            return False
        logger.info("Adopting rebase already in progress in %s", self._repo_root)
        self._state = "running"
        if self._filesystem.exists(self.continuation_path):
            self._continuation = deserialize_continuation(
                self._filesystem.read_text(self.continuation_path)
            )
            logger.info("Restored queued follow-up step: %s", self._continuation.kind)
        return True

    # ============================================================================
    # Launching
    # ============================================================================

    def prepare(self, plan: RewritePlan) -> None:
        self._ensure_not_active()
        self._plan = plan
        self._state = "plan_prepared"

    def start(self, plan: RewritePlan, *, override_editor: bool) -> None:
        """Launch `git rebase --interactive <base>` with `plan` as its todo.

        Raises:
            InvalidRewriteStateError: If a rebase is already running
            RewriteFailedError: If git fails (state is left for abort/continue)
        """
        self.prepare(plan)
        logger.debug("Starting rebase onto %s:\n%s", plan.base_sha, plan.todo)
        env = interactive_rebase_env(
            todo=plan.todo,
            editor_command=self._editor_command,
            override_editor=override_editor,
            debug=self._debug,
        )
        self._launch(interactive_rebase_argv(plan.base_sha, self._rebase_config), env)

    def rebase_onto(self, ref: str) -> None:
        """Rebase onto a branch, keeping git's own todo."""
        self.start(RewritePlan(entries=(), base_sha=ref), override_editor=False)

    def autosquash(self, sha: str) -> None:
        """Fold every fixup! commit above `sha` into its target."""
        self._ensure_not_active()
        self._state = "plan_prepared"
        self._launch(
            autosquash_rebase_argv(sha, self._rebase_config),
            skip_editor_env(editor_command=self._editor_command),
        )

    # ============================================================================
    # Signals
    # ============================================================================

    def continue_rewrite(self) -> None:
        """Run `git rebase --continue`, then the pending continuation if any."""
        self._signal("continue")
        continuation = self._continuation
        if continuation is None:
            return
        self._continuation = None
        self._forget_saved_continuation()
        if self._continuation_handler is None:
            raise InvalidRewriteStateError("No handler is bound for queued follow-up steps")
        logger.info("Running queued follow-up step: %s", continuation.kind)
        self._continuation_handler(continuation)

    def abort(self) -> None:
        """Run `git rebase --abort`; a queued continuation is dropped, never run."""
        if self._continuation is not None:
            logger.info("Dropping queued follow-up step: %s", self._continuation.kind)
        self._continuation = None
        self._forget_saved_continuation()
        self._signal("abort")

    def skip(self) -> None:
        self._signal("skip")

    def queue_continuation(self, continuation: Continuation) -> None:
        if self._continuation is not None:
            raise InvalidRewriteStateError(
                "You are midway through another rebase operation. Please abort to start again"
            )
        if self._continuation_handler is None:
            raise InvalidRewriteStateError("No handler is bound for queued follow-up steps")
        self._continuation = continuation
        self._filesystem.write_text(self.continuation_path, serialize_continuation(continuation))

    # ============================================================================
    # Editing git's todo file while paused
    # ============================================================================

    def set_todo_action(self, index: int, verb: RebaseVerb) -> None:
        """Change the verb of a not-yet-replayed commit (index 0 = newest)."""
        content = self._read_todo()
        self._filesystem.write_text(self.todo_path, set_todo_action(content, index, verb))

    def move_todo_down(self, index: int) -> None:
        content = self._read_todo()
        self._filesystem.write_text(self.todo_path, move_todo_down(content, index))

    def _read_todo(self) -> str:
        if self.rebase_mode() != "interactive":
            raise InvalidRewriteStateError("No interactive rebase is in progress")
        return self._filesystem.read_text(self.todo_path)

    # ============================================================================
    # Internals
    # ============================================================================

    def _ensure_not_active(self) -> None:
        if self.is_active:
            raise InvalidRewriteStateError(
                "A rebase is already in progress; continue or abort it first"
            )

    def _forget_saved_continuation(self) -> None:
        if self._filesystem.exists(self.continuation_path):
            self._filesystem.remove(self.continuation_path)

    def _signal(self, signal: RebaseSignal) -> None:
        if not self.is_active:
            raise InvalidRewriteStateError(f"There is no rebase in progress to {signal}")
        self._launch(
            rebase_signal_argv(signal),
            skip_editor_env(editor_command=self._editor_command),
            aborting=signal == "abort",
        )

    def _launch(self, cmd: list[str], env: dict[str, str], *, aborting: bool = False) -> None:
        try:
            self._runner.run_interactive(cmd, cwd=self._repo_root, env=env)
        except ExternalToolError as e:
            if self.is_rebase_in_progress():
                self._state = "conflicted"
            logger.warning("%s failed (state=%s): %s", " ".join(cmd), self._state, e)
            raise RewriteFailedError(e.stderr) from e

        if aborting:
            self._state = "aborted"
            self._plan = None
        elif self.is_rebase_in_progress():
            self._state = "running"
        else:
            self._state = "completed"
            self._plan = None
        logger.debug("%s succeeded (state=%s)", " ".join(cmd), self._state)
