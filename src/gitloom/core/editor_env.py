"""Environment that makes git call gitloom back as its editor.

git runs GIT_SEQUENCE_EDITOR / GIT_EDITOR through the shell with the file to
edit appended. A fresh gitloom process sees GITLOOM_CLIENT_COMMAND, does the
one thing asked of it and exits, so no state crosses the process boundary
except what is in these variables.
"""

import shlex
import sys

CLIENT_COMMAND_ENV = "GITLOOM_CLIENT_COMMAND"
REBASE_TODO_ENV = "GITLOOM_REBASE_TODO"

INTERACTIVE_REBASE = "INTERACTIVE_REBASE"
EXIT_IMMEDIATELY = "EXIT_IMMEDIATELY"

TODO_FILE_NAME = "git-rebase-todo"


def default_editor_command() -> str:
    return shlex.join([sys.executable, "-m", "gitloom"])


def interactive_rebase_env(
    *,
    todo: str,
    editor_command: str,
    override_editor: bool,
    debug: bool,
) -> dict[str, str]:
    """Variables for `git rebase --interactive` driven by a precomputed todo.

    An empty todo keeps git's own plan (the sequence editor becomes `true`).
    With override_editor, commit message prompts are accepted unchanged.
    """
    env = {
        CLIENT_COMMAND_ENV: INTERACTIVE_REBASE,
        REBASE_TODO_ENV: todo,
        "DEBUG": "TRUE" if debug else "FALSE",
        # git's messages are parsed in English
        "LANG": "en_US.UTF-8",
        "LC_ALL": "en_US.UTF-8",
        "GIT_SEQUENCE_EDITOR": editor_command if todo else "true",
    }
    if override_editor:
        env["GIT_EDITOR"] = editor_command
    return env


def skip_editor_env(*, editor_command: str) -> dict[str, str]:
    """Variables for commands that may open an editor we want to dismiss."""
    return {
        CLIENT_COMMAND_ENV: EXIT_IMMEDIATELY,
        "GIT_EDITOR": editor_command,
    }
