"""Turn core exceptions into CLI errors."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import click

from gitloom.core.errors import GitloomError
from gitloom.output.output import user_output
from gitloom.subprocess_utils import ExternalToolError

logger = logging.getLogger(__name__)


@contextmanager
def handle_gitloom_errors() -> Iterator[None]:
    """Print gitloom and git failures as `Error: ...` and exit 1."""
    try:
        yield
    except (GitloomError, ExternalToolError) as e:
        logger.debug("Command failed", exc_info=True)
        user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(1) from e
