"""Follow-up steps queued to run after the next successful rebase continue.

Compound operations that need the rebase to advance before their next step
(e.g. moving a patch: remove it at the source commit, then add it at the
destination commit) queue one of these instead of an arbitrary callback.

Every gitloom command is its own process, so a queued step is also written to
<git_dir>/gitloom/continuation.json and read back by the next session that
finds the rebase still paused.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import TypedDict

from gitloom.core.errors import MalformedInputError


class ContinuationDict(TypedDict):
    """TypedDict for serialized Continuation data."""

    kind: str
    patch_path: str | None


@dataclass(frozen=True)
class ApplyPatchThenContinue:
    """At the next stop, apply a patch forward, amend, and continue again."""

    patch_path: Path

    @property
    def kind(self) -> str:
        return "apply-patch-then-continue"

    def to_dict(self) -> ContinuationDict:
        return ContinuationDict(kind=self.kind, patch_path=str(self.patch_path))


@dataclass(frozen=True)
class ResetPatchSelection:
    """Clear the patch selection once the rewrite it described has landed."""

    @property
    def kind(self) -> str:
        return "reset-patch-selection"

    def to_dict(self) -> ContinuationDict:
        return ContinuationDict(kind=self.kind, patch_path=None)


Continuation = ApplyPatchThenContinue | ResetPatchSelection


def serialize_continuation(continuation: Continuation) -> str:
    return json.dumps(continuation.to_dict(), indent=2) + "\n"


def deserialize_continuation(content: str) -> Continuation:
    """Parse the saved form of a queued step.

    Raises:
        MalformedInputError: If the content is not a known continuation
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"Saved follow-up step is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedInputError("Saved follow-up step is not a JSON object")

    kind = data.get("kind")
    if kind == "reset-patch-selection":
        return ResetPatchSelection()
    if kind == "apply-patch-then-continue":
        patch_path = data.get("patch_path")
        if not isinstance(patch_path, str) or not patch_path:
            raise MalformedInputError("Saved patch step has no patch_path")
        return ApplyPatchThenContinue(patch_path=Path(patch_path))
    raise MalformedInputError(f"Unknown saved follow-up step: {kind!r}")
