"""Tests for git argv construction."""

from pathlib import Path

import pytest

from gitloom.core.config import RebaseConfig
from gitloom.core.git_commands import (
    GitCommands,
    autosquash_rebase_argv,
    interactive_rebase_argv,
)
from gitloom.gateway.process.fake import FakeProcessRunner
from gitloom.subprocess_utils import ExternalToolError
from tests.test_utils.rebase_simulation import REPO_ROOT


def test_commands_run_in_repo_root() -> None:
    runner = FakeProcessRunner()

    GitCommands(runner, REPO_ROOT).stage_all()

    assert runner.calls[0].cwd == REPO_ROOT


def test_rebase_flags_follow_config() -> None:
    config = RebaseConfig(autostash=False, keep_empty=True, rebase_merges=False)

    assert interactive_rebase_argv("abc", config) == [
        "git",
        "rebase",
        "--interactive",
        "--keep-empty",
        "abc",
    ]


def test_unset_config_reads_as_empty() -> None:
    key = ["git", "config", "--local", "--get", "commit.gpgsign"]
    runner = FakeProcessRunner(failures={tuple(key): ""})

    assert GitCommands(runner, REPO_ROOT).config_value("commit.gpgsign", scope="local") == ""


def test_local_signing_setting_wins_over_global() -> None:
    runner = FakeProcessRunner(
        outputs={
            ("git", "config", "--local", "--get", "commit.gpgsign"): "false\n",
            ("git", "config", "--global", "--get", "commit.gpgsign"): "true\n",
        }
    )

    assert GitCommands(runner, REPO_ROOT).using_gpg() is False


def test_file_exists_in_revision() -> None:
    runner = FakeProcessRunner(failures={("git", "cat-file", "-e", "HEAD^:gone"): "fatal"})
    git = GitCommands(runner, REPO_ROOT)

    assert git.file_exists_in_revision("HEAD^", "there") is True
    assert git.file_exists_in_revision("HEAD^", "gone") is False


def test_commit_file_names_drop_blank_lines() -> None:
    show = ("git", "show", "--pretty=", "--name-only", "--no-renames", "abc")
    runner = FakeProcessRunner(outputs={show: "\na.txt\nb.txt\n"})

    assert GitCommands(runner, REPO_ROOT).commit_file_names("abc") == ["a.txt", "b.txt"]


def test_apply_patch_argv() -> None:
    runner = FakeProcessRunner()

    GitCommands(runner, REPO_ROOT).apply_patch(Path("/p/x.patch"), reverse=True)

    assert runner.commands == [["git", "apply", "--index", "--reverse", "/p/x.patch"]]


def test_unreadable_config_is_not_treated_as_unset() -> None:
    runner = FakeProcessRunner()
    runner.set_failure(
        ["git", "config", "--local", "--get", "commit.gpgsign"],
        "fatal: bad config line 3 in file .git/config",
        returncode=3,
    )

    with pytest.raises(ExternalToolError) as exc_info:
        GitCommands(runner, REPO_ROOT).using_gpg()

    assert exc_info.value.returncode == 3


def test_autosquash_follows_autostash_config() -> None:
    config = RebaseConfig(autostash=False, keep_empty=True, rebase_merges=True)

    assert autosquash_rebase_argv("abc", config) == [
        "git",
        "rebase",
        "--interactive",
        "--autosquash",
        "abc^",
    ]
