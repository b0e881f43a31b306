"""Which files and hunks of one commit are picked for a patch operation."""

from dataclasses import dataclass, field

from gitloom.core.models import PatchStatus


@dataclass
class _FileSelection:
    status: PatchStatus
    hunks: frozenset[int] = field(default_factory=frozenset)


class PatchSelectionTracker:
    """Selection state for a single target commit at a time.

    Selecting anything for a different commit first discards the whole
    selection of the previous one.
    """

    def __init__(self) -> None:
        self._active_target: str | None = None
        self._files: dict[str, _FileSelection] = {}

    @property
    def active_target(self) -> str | None:
        return self._active_target

    def start(self, target_sha: str) -> None:
        """Make `target_sha` the active commit, clearing any other commit's selection."""
        if target_sha == self._active_target:
            return
        self._active_target = target_sha
        self._files = {}

    def reset(self) -> None:
        self._active_target = None
        self._files = {}

    def is_empty(self) -> bool:
        return not self.selected_paths()

    def set_status(self, target_sha: str, path: str, status: PatchStatus) -> None:
        self.start(target_sha)
        if status == "unselected":
            self._files.pop(path, None)
        elif status == "whole":
            self._files[path] = _FileSelection(status="whole")
        else:
            existing = self._files.get(path)
            hunks = existing.hunks if existing is not None else frozenset()
            self._files[path] = _FileSelection(status="partial", hunks=hunks)

    def get_status(self, target_sha: str, path: str) -> PatchStatus:
        if target_sha != self._active_target:
            return "unselected"
        selection = self._files.get(path)
        if selection is None:
            return "unselected"
        return selection.status

    def toggle_file(self, target_sha: str, path: str) -> PatchStatus:
        """Cycle unselected -> whole -> unselected (a partial file becomes unselected)."""
        if self.get_status(target_sha, path) == "unselected":
            self.set_status(target_sha, path, "whole")
        else:
            self.set_status(target_sha, path, "unselected")
        return self.get_status(target_sha, path)

    def set_hunks(
        self, target_sha: str, path: str, hunk_indices: set[int] | frozenset[int]
    ) -> None:
        """Select only some hunks of a file; an empty set deselects it."""
        self.start(target_sha)
        if not hunk_indices:
            self._files.pop(path, None)
            return
        self._files[path] = _FileSelection(status="partial", hunks=frozenset(hunk_indices))

    def selected_hunks(self, path: str) -> frozenset[int]:
        selection = self._files.get(path)
        if selection is None:
            return frozenset()
        return selection.hunks

    def selected_paths(self) -> list[str]:
        """Paths with any selection, in the order they were first selected."""
        return [
            path
            for path, selection in self._files.items()
            if selection.status == "whole" or selection.hunks
        ]
