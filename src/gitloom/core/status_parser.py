"""Parse `git status --porcelain` output into FileChange records."""

import logging

from gitloom.core.errors import MalformedStatusLineError
from gitloom.core.models import RENAME_SEPARATOR, FileChange

logger = logging.getLogger(__name__)

# Reported as additions even though nothing is committed yet
_UNTRACKED_CODES = frozenset(["??", "A ", "AM"])
_NO_STAGED_CHANGE = frozenset([" ", "U", "?"])
_MERGE_CONFLICT_CODES = frozenset(["UU", "AA", "DU"])
_INLINE_MERGE_CONFLICT_CODES = frozenset(["UU", "AA"])

_C_ESCAPES = {
    "a": 0x07,
    "b": 0x08,
    "t": 0x09,
    "n": 0x0A,
    "v": 0x0B,
    "f": 0x0C,
    "r": 0x0D,
    '"': 0x22,
    "\\": 0x5C,
}


def unquote_path(path: str) -> str:
    """Undo git's C-style quoting of a path.

    git wraps a path in double quotes when it contains control characters,
    quotes, backslashes or (with core.quotePath) non-ASCII bytes, which it
    writes as octal escapes of the UTF-8 encoding.
    """
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path

    body = path[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        ch = body[i]
        if ch != "\\" or i + 1 >= len(body):
            out.extend(ch.encode("utf-8"))
            i += 1
            continue
        nxt = body[i + 1]
        octal = body[i + 1 : i + 4]
        if len(octal) == 3 and all(c in "01234567" for c in octal):
            out.append(int(octal, 8) & 0xFF)
            i += 4
        elif nxt in _C_ESCAPES:
            out.append(_C_ESCAPES[nxt])
            i += 2
        else:
            out.extend(nxt.encode("utf-8"))
            i += 2
    return out.decode("utf-8", errors="replace")


def _unquote_name(raw: str) -> str:
    if RENAME_SEPARATOR in raw:
        old, _, new = raw.partition(RENAME_SEPARATOR)
        if old.startswith('"') or new.startswith('"'):
            return f"{unquote_path(old)}{RENAME_SEPARATOR}{unquote_path(new)}"
    return unquote_path(raw)


def parse_status_line(line: str) -> FileChange:
    """Parse one "XY path" line.

    Raises:
        MalformedStatusLineError: If the line is too short to hold a code and path
    """
    if len(line) < 3:
        raise MalformedStatusLineError(line)

    change = line[0:2]
    staged_change = change[0]
    unstaged_change = change[1]
    name = _unquote_name(line[3:])

    return FileChange(
        name=name,
        short_status=change,
        tracked=change not in _UNTRACKED_CODES,
        has_staged_changes=staged_change not in _NO_STAGED_CHANGE,
        has_unstaged_changes=unstaged_change != " ",
        deleted=staged_change == "D" or unstaged_change == "D",
        has_merge_conflicts=change in _MERGE_CONFLICT_CODES,
        has_inline_merge_conflicts=change in _INLINE_MERGE_CONFLICT_CODES,
        display_string=line,
    )


def parse_status(text: str) -> list[FileChange]:
    """Parse full porcelain output, skipping lines that cannot be parsed.

    Keeps the first record when git reports the same path twice.
    """
    files: list[FileChange] = []
    seen: set[str] = set()
    for line in text.splitlines():
        if not line.strip():
            continue
        try:
            file = parse_status_line(line)
        except MalformedStatusLineError as e:
            logger.warning("Skipping status line: %s", e)
            continue
        if file.name in seen:
            continue
        seen.add(file.name)
        files.append(file)
    return files
