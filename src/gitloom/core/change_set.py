"""Reconcile successive status refreshes so list positions stay put."""

from gitloom.core.models import FileChange


def merge_file_changes(old: list[FileChange], new: list[FileChange]) -> list[FileChange]:
    """Order a fresh status list by the previous one.

    Files already on screen keep their relative position (carrying the fresh
    record's flags), files that disappeared are dropped and newly changed files
    are appended in the order git reported them. The result always holds exactly
    the entries of `new`.
    """
    if not old:
        return new

    index_by_name: dict[str, int] = {}
    for i, file in enumerate(new):
        index_by_name.setdefault(file.name, i)

    consumed: set[int] = set()
    result: list[FileChange] = []
    for old_file in old:
        new_index = index_by_name.get(old_file.name)
        if new_index is None or new_index in consumed:
            continue
        result.append(new[new_index])
        consumed.add(new_index)

    result.extend(file for i, file in enumerate(new) if i not in consumed)
    return result
