"""Tests for TOML configuration loading and writing."""

from pathlib import Path

import pytest

from gitloom.core.config import (
    GitloomConfig,
    config_from_data,
    global_config_dir,
    load_config,
    load_merged_data,
    lookup_config_value,
    parse_config_value,
    write_config_value,
)
from gitloom.core.errors import InvalidConfigError


def test_missing_files_give_defaults(tmp_path: Path) -> None:
    assert load_config(tmp_path / "global", tmp_path / "repo") == GitloomConfig.defaults()


def test_repo_values_override_global(tmp_path: Path) -> None:
    global_dir = tmp_path / "global"
    global_dir.mkdir()
    (global_dir / "config.toml").write_text(
        "debug = true\n[rebase]\nautostash = false\nkeep_empty = false\n", encoding="utf-8"
    )
    repo_root = tmp_path / "repo"
    (repo_root / ".gitloom").mkdir(parents=True)
    (repo_root / ".gitloom" / "config.toml").write_text(
        "[rebase]\nautostash = true\n[log]\nlimit = 50\n", encoding="utf-8"
    )

    config = load_config(global_dir, repo_root)

    assert config.debug is True
    assert config.rebase.autostash is True
    assert config.rebase.keep_empty is False
    assert config.rebase.rebase_merges is True
    assert config.log_limit == 50


def test_global_config_dir_honours_xdg() -> None:
    assert global_config_dir({"XDG_CONFIG_HOME": "/xdg"}) == Path("/xdg/gitloom")


def test_global_config_dir_falls_back_to_home() -> None:
    assert global_config_dir({}) == Path.home() / ".config" / "gitloom"


@pytest.mark.parametrize(
    ("key", "raw", "expected"),
    [
        ("debug", "yes", True),
        ("rebase.autostash", "false", False),
        ("log.limit", "25", 25),
        ("editor_command", "nvim -f", "nvim -f"),
    ],
)
def test_parse_config_value(key: str, raw: str, expected: object) -> None:
    assert parse_config_value(key, raw) == expected


def test_parse_rejects_unknown_key() -> None:
    with pytest.raises(ValueError):
        parse_config_value("nope", "1")


def test_parse_rejects_bad_boolean() -> None:
    with pytest.raises(ValueError):
        parse_config_value("debug", "maybe")


def test_lookup_falls_back_to_default() -> None:
    assert lookup_config_value({}, "log.limit") == 300
    assert lookup_config_value({"log": {"limit": 10}}, "log.limit") == 10


def test_write_preserves_existing_comments(tmp_path: Path) -> None:
    config_dir = tmp_path / "gitloom"
    config_dir.mkdir()
    (config_dir / "config.toml").write_text("# my settings\ndebug = false\n", encoding="utf-8")

    path = write_config_value(config_dir, "rebase.autostash", False)

    content = path.read_text(encoding="utf-8")
    assert "# my settings" in content
    data = load_merged_data(config_dir, None)
    assert data["rebase"]["autostash"] is False
    assert data["debug"] is False


def test_write_creates_missing_file(tmp_path: Path) -> None:
    path = write_config_value(tmp_path / "new", "log.limit", 42)

    assert path == tmp_path / "new" / "config.toml"
    assert load_config(tmp_path / "new", None).log_limit == 42


@pytest.mark.parametrize(
    "data",
    [
        {"debug": "false"},
        {"rebase": True},
        {"rebase": {"autostash": 1}},
        {"log": {"limit": "x"}},
        {"log": {"limit": True}},
        {"log": {"limit": 0}},
        {"editor_command": 5},
    ],
)
def test_values_of_the_wrong_type_are_rejected(data: dict[str, object]) -> None:
    with pytest.raises(InvalidConfigError):
        config_from_data(data)


def test_unparseable_file_is_an_invalid_config(tmp_path: Path) -> None:
    (tmp_path / "config.toml").write_text("rebase = [\n", encoding="utf-8")

    with pytest.raises(InvalidConfigError):
        load_config(tmp_path, None)


def test_parse_rejects_non_positive_limit() -> None:
    with pytest.raises(ValueError):
        parse_config_value("log.limit", "0")
