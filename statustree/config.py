from __future__ import annotations

from pathlib import Path
from typing import Any

import tomllib

from .git import UNTRACKED_MODES


DEFAULT_CONFIG_TEXT = "\n".join(
    [
        "# Show every file on disk, not only paths reported by git status.",
        "show_all_files = false",
        "# Include dot-directories when show_all_files is on.",
        "show_hidden = false",
        "case_sensitive = false",
        'separator = "/"',
        'untracked_files = "normal"',
        "# width = 120",
        "# max_lines = 500",
        "",
    ]
)


_BOOL_KEYS = ("show_all_files", "show_hidden", "case_sensitive")
_POSITIVE_INT_KEYS = ("width", "max_lines")


def _validate(data: dict[str, Any], config_path: Path) -> tuple[dict[str, Any], list[str]]:
    config: dict[str, Any] = {}
    warnings: list[str] = []

    def _reject(key: str, reason: str) -> None:
        warnings.append(f"ignoring {key} in {config_path}: {reason}")

    for key, value in data.items():
        if key in _BOOL_KEYS:
            if not isinstance(value, bool):
                _reject(key, "expected true or false")
                continue
        elif key in _POSITIVE_INT_KEYS:
            # bool is an int subclass
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                _reject(key, "expected a positive integer")
                continue
        elif key == "separator":
            if not isinstance(value, str) or len(value) != 1:
                _reject(key, "expected a single character")
                continue
        elif key == "untracked_files":
            if value not in UNTRACKED_MODES:
                _reject(key, f"expected one of {', '.join(UNTRACKED_MODES)}")
                continue
        else:
            _reject(key, "unknown key")
            continue
        config[key] = value
    return config, warnings


def _resolve_config_path(path: Path | None = None) -> Path:
    if path is not None:
        return path
    return Path.home() / ".statustree" / "config.toml"


def ensure_default_config(path: Path | None = None) -> tuple[Path | None, str | None]:
    config_path = _resolve_config_path(path)
    if config_path.exists():
        return None, None
    if config_path.parent.name == ".statustree":
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            return None, str(exc)
    try:
        config_path.write_text(DEFAULT_CONFIG_TEXT)
    except OSError as exc:
        return None, str(exc)
    return config_path, None


def load_config(path: Path | None = None) -> tuple[dict[str, Any], list[str]]:
    config_path = _resolve_config_path(path)
    if not config_path.exists():
        return {}, []
    if not config_path.is_file():
        return {}, [f"config path is not a file: {config_path}"]

    try:
        data = tomllib.loads(config_path.read_text())
    except (OSError, tomllib.TOMLDecodeError) as exc:
        return {}, [f"failed to read config {config_path}: {exc}"]

    if not isinstance(data, dict):
        return {}, [f"config file {config_path} is not a table"]
    return _validate(data, config_path)
