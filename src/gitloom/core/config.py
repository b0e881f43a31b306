"""User configuration loaded from TOML.

Global file: $XDG_CONFIG_HOME/gitloom/config.toml (~/.config/gitloom/config.toml)
Repo file:   <repo>/.gitloom/config.toml

Example config.toml:
  debug = false
  # editor_command = "gitloom"

  [rebase]
  autostash = true
  keep_empty = true
  rebase_merges = true

  [log]
  limit = 300
"""

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

import tomlkit

from gitloom.core.errors import InvalidConfigError

CONFIG_FILE_NAME = "config.toml"
DEFAULT_LOG_LIMIT = 300


@dataclass(frozen=True)
class RebaseConfig:
    autostash: bool
    keep_empty: bool
    rebase_merges: bool


@dataclass(frozen=True)
class GitloomConfig:
    """In-memory representation of merged global + repo config."""

    debug: bool
    editor_command: str | None
    rebase: RebaseConfig
    log_limit: int

    @staticmethod
    def defaults() -> "GitloomConfig":
        return GitloomConfig(
            debug=False,
            editor_command=None,
            rebase=RebaseConfig(autostash=True, keep_empty=True, rebase_merges=True),
            log_limit=DEFAULT_LOG_LIMIT,
        )


# Dotted keys accepted by `gitloom config set`, with their value types
CONFIG_KEYS: dict[str, type] = {
    "debug": bool,
    "editor_command": str,
    "rebase.autostash": bool,
    "rebase.keep_empty": bool,
    "rebase.rebase_merges": bool,
    "log.limit": int,
}


def global_config_dir(env: Mapping[str, str] | None = None) -> Path:
    env = os.environ if env is None else env
    xdg = env.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "gitloom"


def repo_config_dir(repo_root: Path) -> Path:
    return repo_root / ".gitloom"


def _read_toml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise InvalidConfigError(f"Cannot parse {path}: {e}") from e


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge tables key by key; override values win."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _table(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = data.get(name, {})
    if not isinstance(value, Mapping):
        raise InvalidConfigError(f"[{name}] must be a table, got {value!r}")
    return value


def _typed_value(table: Mapping[str, Any], key: str, dotted: str, default: Any) -> Any:
    """Read `key` with the type registered for `dotted` in CONFIG_KEYS."""
    if key not in table:
        return default
    value = table[key]
    expected = CONFIG_KEYS[dotted]
    # bool is an int subclass; reject true/false where a number is expected
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise InvalidConfigError(f"{dotted} must be a {expected.__name__}, got {value!r}")
    return value


def config_from_data(data: Mapping[str, Any]) -> GitloomConfig:
    """Build a GitloomConfig from merged TOML data.

    Raises:
        InvalidConfigError: If a table or value has the wrong type
    """
    defaults = GitloomConfig.defaults()
    rebase = _table(data, "rebase")
    log = _table(data, "log")
    editor_command = _typed_value(data, "editor_command", "editor_command", None)
    log_limit = _typed_value(log, "limit", "log.limit", defaults.log_limit)
    if log_limit < 1:
        raise InvalidConfigError(f"log.limit must be at least 1, got {log_limit}")
    return GitloomConfig(
        debug=_typed_value(data, "debug", "debug", defaults.debug),
        editor_command=editor_command or None,
        rebase=RebaseConfig(
            autostash=_typed_value(
                rebase, "autostash", "rebase.autostash", defaults.rebase.autostash
            ),
            keep_empty=_typed_value(
                rebase, "keep_empty", "rebase.keep_empty", defaults.rebase.keep_empty
            ),
            rebase_merges=_typed_value(
                rebase, "rebase_merges", "rebase.rebase_merges", defaults.rebase.rebase_merges
            ),
        ),
        log_limit=log_limit,
    )


def load_merged_data(global_dir: Path, repo_root: Path | None) -> dict[str, Any]:
    data = _read_toml(global_dir / CONFIG_FILE_NAME)
    if repo_root is not None:
        data = _merge(data, _read_toml(repo_config_dir(repo_root) / CONFIG_FILE_NAME))
    return data


def load_config(global_dir: Path, repo_root: Path | None) -> GitloomConfig:
    """Load global config, overlaid with the repo's config when present."""
    return config_from_data(load_merged_data(global_dir, repo_root))


def parse_config_value(key: str, raw: str) -> bool | int | str:
    """Convert a command-line string to the type registered for `key`.

    Raises:
        ValueError: If the key is unknown or the value does not fit its type
    """
    if key not in CONFIG_KEYS:
        raise ValueError(f"Unknown config key: {key}")
    value_type = CONFIG_KEYS[key]
    if value_type is bool:
        lowered = raw.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"Expected a boolean for {key}, got {raw!r}")
    if value_type is int:
        number = int(raw)
        if number < 1:
            raise ValueError(f"Expected a positive number for {key}, got {raw!r}")
        return number
    return raw


def lookup_config_value(data: Mapping[str, Any], key: str) -> Any:
    """Resolve a dotted key against raw config data, falling back to defaults."""
    if key not in CONFIG_KEYS:
        raise ValueError(f"Unknown config key: {key}")
    node: Any = data
    for part in key.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return _default_for(key)
        node = node[part]
    return node


def _default_for(key: str) -> Any:
    defaults = GitloomConfig.defaults()
    return {
        "debug": defaults.debug,
        "editor_command": defaults.editor_command,
        "rebase.autostash": defaults.rebase.autostash,
        "rebase.keep_empty": defaults.rebase.keep_empty,
        "rebase.rebase_merges": defaults.rebase.rebase_merges,
        "log.limit": defaults.log_limit,
    }[key]


def write_config_value(config_dir: Path, key: str, value: bool | int | str) -> Path:
    """Set a dotted key in config_dir/config.toml.

    Preserves existing formatting and comments using tomlkit.
    """
    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / CONFIG_FILE_NAME

    if config_path.exists():
        with config_path.open(encoding="utf-8") as f:
            doc = tomlkit.load(f)
    else:
        doc = tomlkit.document()

    *tables, leaf = key.split(".")
    node = cast(dict[str, Any], doc)
    for table in tables:
        if table not in node:
            node[table] = tomlkit.table()
        node = cast(dict[str, Any], node[table])
    node[leaf] = value

    with config_path.open("w", encoding="utf-8") as f:
        tomlkit.dump(doc, f)
    return config_path
