"""Parse `git log --format=%H%x00%P%x00%s` into Commit records (newest first)."""

import logging

from gitloom.core.models import Commit

logger = logging.getLogger(__name__)


def parse_log(text: str) -> list[Commit]:
    commits: list[Commit] = []
    for line in text.splitlines():
        if not line.strip():
            continue
        parts = line.split("\x00")
        if len(parts) != 3:
            logger.warning("Skipping log line: %r", line)
            continue
        sha, parents, subject = parts
        commits.append(Commit(sha=sha, name=subject, is_merge=len(parents.split()) > 1))
    return commits
