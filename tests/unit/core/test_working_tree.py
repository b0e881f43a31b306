"""Tests for per-file working tree operations."""

from gitloom.core import working_tree
from gitloom.core.git_commands import GitCommands
from gitloom.core.status_parser import parse_status_line
from gitloom.gateway.filesystem.fake import FakeFileSystem
from gitloom.gateway.process.fake import FakeProcessRunner
from tests.test_utils.rebase_simulation import REPO_ROOT


def _git(runner: FakeProcessRunner) -> GitCommands:
    return GitCommands(runner, REPO_ROOT)


def test_stage_rename_stages_both_names() -> None:
    runner = FakeProcessRunner()

    working_tree.stage_file(_git(runner), parse_status_line("R  old.txt -> new.txt"))

    assert runner.commands == [
        ["git", "add", "--", "old.txt"],
        ["git", "add", "--", "new.txt"],
    ]


def test_unstage_tracked_file_resets_head() -> None:
    runner = FakeProcessRunner()

    working_tree.unstage_file(_git(runner), parse_status_line("M  a.txt"))

    assert runner.commands == [["git", "reset", "HEAD", "--", "a.txt"]]


def test_unstage_new_file_removes_it_from_index() -> None:
    runner = FakeProcessRunner()

    working_tree.unstage_file(_git(runner), parse_status_line("A  new.txt"))

    assert runner.commands == [["git", "rm", "--cached", "--", "new.txt"]]


def test_discard_untracked_file_deletes_it() -> None:
    runner = FakeProcessRunner()
    filesystem = FakeFileSystem(files={REPO_ROOT / "junk.txt": "x"})

    working_tree.discard_all_file_changes(
        _git(runner), filesystem, parse_status_line("?? junk.txt")
    )

    assert runner.commands == []
    assert filesystem.removed_paths == [REPO_ROOT / "junk.txt"]
    assert not filesystem.exists(REPO_ROOT / "junk.txt")


def test_discard_staged_tracked_file_resets_then_checks_out() -> None:
    runner = FakeProcessRunner()

    working_tree.discard_all_file_changes(
        _git(runner), FakeFileSystem(), parse_status_line("MM a.txt")
    )

    assert runner.commands == [
        ["git", "reset", "--", "a.txt"],
        ["git", "checkout", "--", "a.txt"],
    ]


def test_discard_staged_new_file_resets_then_deletes() -> None:
    runner = FakeProcessRunner()
    filesystem = FakeFileSystem()

    working_tree.discard_all_file_changes(_git(runner), filesystem, parse_status_line("A  n.txt"))

    assert runner.commands == [["git", "reset", "--", "n.txt"]]
    assert filesystem.removed_paths == [REPO_ROOT / "n.txt"]


def test_discard_unstaged_only_checks_out() -> None:
    runner = FakeProcessRunner()

    working_tree.discard_unstaged_file_changes(_git(runner), parse_status_line("MM a.txt"))

    assert runner.commands == [["git", "checkout", "--", "a.txt"]]


def test_stage_and_unstage_all() -> None:
    runner = FakeProcessRunner()

    working_tree.stage_all(_git(runner))
    working_tree.unstage_all(_git(runner))

    assert runner.commands == [["git", "add", "-A"], ["git", "reset"]]


def test_merge_state_detection() -> None:
    long_status = ["git", "status", "--untracked-files=all"]
    merging = FakeProcessRunner(outputs={tuple(long_status): "You have unmerged paths.\n"})
    clean = FakeProcessRunner(outputs={tuple(long_status): "nothing to commit\n"})

    assert working_tree.is_in_merge_state(_git(merging)) is True
    assert working_tree.is_in_merge_state(_git(clean)) is False


def test_ignore_appends_to_existing_gitignore() -> None:
    filesystem = FakeFileSystem(files={REPO_ROOT / ".gitignore": "build/"})

    working_tree.ignore_file(_git(FakeProcessRunner()), filesystem, "secrets.env")

    assert filesystem.files[REPO_ROOT / ".gitignore"] == "build/\nsecrets.env\n"


def test_ignore_creates_gitignore() -> None:
    filesystem = FakeFileSystem()

    working_tree.ignore_file(_git(FakeProcessRunner()), filesystem, "out.log")

    assert filesystem.files[REPO_ROOT / ".gitignore"] == "out.log\n"


def test_commit_without_signing_is_captured() -> None:
    runner = FakeProcessRunner()

    working_tree.commit_changes(_git(runner), "add feature", no_verify=True)

    assert runner.commands[-1] == ["git", "commit", "--no-verify", "-m", "add feature"]
    assert runner.interactive_calls == []


def test_signed_amend_gets_the_terminal() -> None:
    runner = FakeProcessRunner(
        outputs={("git", "config", "--local", "--get", "commit.gpgsign"): "true\n"}
    )

    working_tree.amend_head(_git(runner))

    assert runner.interactive_calls[0].cmd == [
        "git",
        "commit",
        "--amend",
        "--no-edit",
        "--allow-empty",
    ]


def test_commit_level_operations_argv() -> None:
    runner = FakeProcessRunner()
    git = _git(runner)

    working_tree.rename_head(git, "better message")
    working_tree.revert_commit(git, "abc")
    working_tree.reset_to_commit(git, "abc", "soft")
    working_tree.abort_merge(git)

    assert runner.commands == [
        ["git", "commit", "--allow-empty", "--amend", "-m", "better message"],
        ["git", "revert", "--no-edit", "abc"],
        ["git", "reset", "--soft", "abc"],
        ["git", "merge", "--abort"],
    ]


def test_stash_operations_argv() -> None:
    runner = FakeProcessRunner()
    git = _git(runner)

    working_tree.stash_save(git, "wip")
    working_tree.stash_save_staged_changes(git, "")
    working_tree.stash_do(git, 2, "pop")

    assert runner.commands == [
        ["git", "stash", "push", "-m", "wip"],
        ["git", "stash", "push", "--staged"],
        ["git", "stash", "pop", "stash@{2}"],
    ]


def test_stash_entries_skip_blank_lines() -> None:
    runner = FakeProcessRunner(
        outputs={("git", "stash", "list"): "stash@{0}: On main: wip\n\n"}
    )

    assert working_tree.stash_entries(_git(runner)) == ["stash@{0}: On main: wip"]
