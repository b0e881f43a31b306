"""The git-rebase-todo format.

A todo is one command per line, "<verb> <sha> <subject>", replayed top to
bottom, so the oldest commit comes first. When git's own todo file is re-read,
blank lines and "#" comments carry no position.
"""

from dataclasses import dataclass

from gitloom.core.errors import (
    InsufficientHistoryError,
    InsufficientRoomError,
    MalformedTodoLineError,
)
from gitloom.core.models import REBASE_VERBS, RebaseVerb

# rebase.abbreviateCommands makes git write single letters
_ABBREVIATED_VERBS: dict[str, str] = {
    "p": "pick",
    "r": "reword",
    "e": "edit",
    "s": "squash",
    "f": "fixup",
    "d": "drop",
}


@dataclass(frozen=True)
class TodoEntry:
    """One commit line. `options` holds flags git writes before the sha,
    such as the -C in "fixup -C <sha>"."""

    verb: RebaseVerb
    sha: str
    subject: str
    options: tuple[str, ...] = ()

    def render(self) -> str:
        parts = [self.verb, *self.options, self.sha]
        if self.subject:
            parts.append(self.subject)
        return " ".join(parts)


def render_todo(entries: tuple[TodoEntry, ...] | list[TodoEntry]) -> str:
    """Serialize entries in replay order, newline-terminated."""
    return "".join(entry.render() + "\n" for entry in entries)


def is_command_line(line: str) -> bool:
    return line.strip() != "" and not line.startswith("#")


def parse_todo_line(line: str) -> TodoEntry:
    """Parse one command line, e.g. "pick abc123 subject" or "fixup -C abc123 subject".

    Raises:
        MalformedTodoLineError: If the verb is unknown or the sha is missing
    """
    word, _, rest = line.strip().partition(" ")
    verb = _ABBREVIATED_VERBS.get(word, word)
    if verb not in REBASE_VERBS:
        raise MalformedTodoLineError(line)

    options: list[str] = []
    rest = rest.lstrip(" ")
    while rest.startswith("-"):
        option, _, rest = rest.partition(" ")
        options.append(option)
        rest = rest.lstrip(" ")

    sha, _, subject = rest.partition(" ")
    if not sha:
        raise MalformedTodoLineError(line)
    return TodoEntry(
        verb=verb,  # type: ignore[arg-type]
        sha=sha,
        subject=subject,
        options=tuple(options),
    )


def parse_todo(content: str) -> list[TodoEntry]:
    return [parse_todo_line(line) for line in content.split("\n") if is_command_line(line)]


def _is_commit_line(line: str) -> bool:
    """A command line naming a commit (not label, reset, merge, exec...)."""
    if not is_command_line(line):
        return False
    word = line.split()[0]
    return _ABBREVIATED_VERBS.get(word, word) in REBASE_VERBS


def _command_line_numbers(lines: list[str]) -> list[int]:
    return [i for i, line in enumerate(lines) if _is_commit_line(line)]


def _line_number_for_index(lines: list[str], index: int) -> int:
    """Map a newest-first commit index onto a physical line of the todo file."""
    line_numbers = _command_line_numbers(lines)
    position = len(line_numbers) - 1 - index
    if index < 0 or position < 0:
        raise InsufficientHistoryError(
            f"Todo index {index} is outside the {len(line_numbers)} todo commits"
        )
    return line_numbers[position]


def set_todo_action(content: str, index: int, verb: RebaseVerb) -> str:
    """Return `content` with the verb of the commit at `index` replaced."""
    lines = content.split("\n")
    line_number = _line_number_for_index(lines, index)
    entry = parse_todo_line(lines[line_number])
    # -C/-c only mean something to fixup
    options = entry.options if verb == "fixup" else ()
    lines[line_number] = TodoEntry(
        verb=verb, sha=entry.sha, subject=entry.subject, options=options
    ).render()
    return "\n".join(lines)


def move_todo_down(content: str, index: int) -> str:
    """Return `content` with the commit at `index` swapped with the one replayed before it."""
    lines = content.split("\n")
    line_numbers = _command_line_numbers(lines)
    line_number = _line_number_for_index(lines, index)
    position = line_numbers.index(line_number)
    if position == 0:
        raise InsufficientRoomError("There is no todo commit below this one")
    previous = line_numbers[position - 1]
    for number in (previous, line_number):
        parse_todo_line(lines[number])
    lines[previous], lines[line_number] = lines[line_number], lines[previous]
    return "\n".join(lines)
