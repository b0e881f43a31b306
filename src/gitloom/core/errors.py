"""Exception hierarchy for gitloom core operations.

Validation errors (history bounds, signing, patch selection) are raised before
any side-effecting git command runs. RewriteFailedError is raised after git
itself reported a failure; the rebase is left as git left it.
"""


class GitloomError(Exception):
    """Base class for errors raised by gitloom core code."""


class MalformedInputError(GitloomError):
    """Git output or a todo line could not be parsed."""


class MalformedStatusLineError(MalformedInputError):
    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(f"Malformed status line: {line!r}")


class MalformedTodoLineError(MalformedInputError):
    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(f"Malformed rebase todo line: {line!r}")


class InsufficientHistoryError(GitloomError):
    """The requested rewrite position has no commit to rebase onto."""


class InsufficientRoomError(GitloomError):
    """A commit cannot be moved further in the requested direction."""


class UnsupportedConfigurationError(GitloomError):
    """Repository configuration prevents an automated rewrite."""


class UnsupportedWithSigningError(UnsupportedConfigurationError):
    def __init__(self) -> None:
        super().__init__(
            "This action is disabled while commit.gpgsign is enabled: "
            "signing cannot be driven during an automated multi-step rebase"
        )


class RewriteFailedError(GitloomError):
    """git rebase could not be launched or exited non-zero."""

    def __init__(self, stderr: str) -> None:
        self.stderr = stderr
        super().__init__(stderr.strip() or "git rebase failed")


class InvalidRewriteStateError(GitloomError):
    """A rebase signal or continuation does not fit the current driver state."""


class PatchSelectionError(GitloomError):
    """A patch operation does not match the active selection."""


class EmptyPatchError(PatchSelectionError):
    def __init__(self) -> None:
        super().__init__("No changes are selected for the patch")


class InvalidConfigError(GitloomError):
    """A gitloom config.toml cannot be parsed or holds a value of the wrong type."""
