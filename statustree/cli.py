from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .config import ensure_default_config, load_config
from .git import (
    UNTRACKED_MODES,
    GitStatusError,
    find_git_root,
    parse_short_status,
    repo_root_from_git_dir,
    run_git_status,
)
from .merged_tree import MergedTree
from .paths import DEFAULT_SEPARATOR, normalize_status_paths
from .render import draw_tree
from .report import StatusReport
from .status import StatusLookup, StatusSets, build_status_lookup


def _warn(msg: str) -> None:
    print(f"statustree: {msg}", file=sys.stderr, flush=True)


def _stderr_console() -> Console:
    use_color = sys.stderr.isatty() and not os.getenv("NO_COLOR")
    return Console(stderr=True, force_terminal=use_color, color_system="auto")


def _stdout_console(no_color: bool) -> Console:
    use_color = sys.stdout.isatty() and not os.getenv("NO_COLOR") and not no_color
    return Console(
        force_terminal=use_color,
        no_color=not use_color,
        color_system="auto" if use_color else None,
        highlight=False,
    )


def _setup_verbose_logging(console: Console) -> RichHandler:
    logger = logging.getLogger("statustree")
    handler = RichHandler(console=console, show_path=False, show_time=False)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return handler


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="statustree",
        description="Draw the working tree with git status markers beside each path.",
    )
    parser.add_argument("--version", action="version", version=f"statustree {__version__}")
    parser.add_argument("path", nargs="?", default=None, help="Directory to draw (default: current directory)")

    parser.add_argument(
        "-a",
        "--all",
        dest="show_all_files",
        action="store_true",
        default=None,
        help="Show every file on disk, not only paths reported by git status",
    )
    parser.add_argument(
        "--hidden",
        dest="show_hidden",
        action="store_true",
        default=None,
        help="Include dot-directories with --all",
    )
    parser.add_argument(
        "--case-sensitive",
        dest="case_sensitive",
        action="store_true",
        default=None,
        help="Compare path names case-sensitively",
    )
    parser.add_argument("--width", type=int, default=None, help="Output width (default: terminal width)")
    parser.add_argument("--max-lines", dest="max_lines", type=int, default=None, help="Stop after N tree rows")
    parser.add_argument("--git-dir", dest="git_dir", default=None, help="Repository .git directory")
    parser.add_argument(
        "--untracked-files",
        dest="untracked_files",
        choices=UNTRACKED_MODES,
        default=None,
        help="Passed to git status (default: normal)",
    )
    parser.add_argument(
        "--status-from-stdin",
        dest="status_from_stdin",
        action="store_true",
        help="Read `git status --short` output from stdin instead of running git",
    )
    parser.add_argument("--no-color", dest="no_color", action="store_true", help="Disable colored output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    parser.add_argument(
        "--init-config",
        action="store_true",
        help="Write default config to ~/.statustree if it does not exist",
    )

    return parser.parse_args(argv)


def _pick(cli_value, config: dict, key: str, default=None):
    if cli_value is not None:
        return cli_value
    if key in config:
        return config[key]
    return default


def _parse_num(value, cast):
    if value is None:
        return None
    try:
        return cast(value)
    except (TypeError, ValueError):
        return None


def _as_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}
    return bool(value)


def collect_lookup(
    sets: StatusSets,
    root: Path,
    separator: str = DEFAULT_SEPARATOR,
    case_sensitive: bool = False,
) -> StatusLookup:
    def _normalize(axis: dict[str, list[str]]) -> dict[str, list[str]]:
        return {
            tag: list(
                normalize_status_paths(
                    paths,
                    root,
                    separator=separator,
                    case_sensitive=case_sensitive,
                )
            )
            for tag, paths in axis.items()
        }

    return build_status_lookup(
        _normalize(sets.index),
        _normalize(sets.working),
        case_sensitive=case_sensitive,
    )


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    if args.init_config:
        config_path, err = ensure_default_config()
        if err:
            _warn(f"failed to write config: {err}")
            return 2
        if config_path is None:
            _warn("config already exists")
        else:
            print(str(config_path))
        return 0

    config, config_warnings = load_config()
    for w in config_warnings:
        _warn(w)

    err_console = _stderr_console()
    if args.verbose:
        _setup_verbose_logging(err_console)

    root = Path(args.path).expanduser() if args.path else Path.cwd()
    if not root.is_dir():
        _warn(f"not a directory: {root}")
        return 2
    root = root.resolve()

    show_all = _as_bool(_pick(args.show_all_files, config, "show_all_files", False))
    show_hidden = _as_bool(_pick(args.show_hidden, config, "show_hidden", False))
    case_sensitive = _as_bool(_pick(args.case_sensitive, config, "case_sensitive", False))
    separator = str(_pick(None, config, "separator", DEFAULT_SEPARATOR)) or DEFAULT_SEPARATOR
    untracked = _pick(args.untracked_files, config, "untracked_files", "normal")
    max_lines = _parse_num(_pick(args.max_lines, config, "max_lines", None), int)
    if max_lines is not None and max_lines <= 0:
        max_lines = None

    if args.status_from_stdin:
        status_text = sys.stdin.read()
    else:
        if args.git_dir:
            repo_root: Path | None = repo_root_from_git_dir(Path(args.git_dir).expanduser())
        else:
            repo_root, _ = find_git_root(root)
        if repo_root is None:
            _warn(f"not inside a git repository: {root}")
            return 2
        try:
            status_text = run_git_status(root, untracked=untracked)
        except GitStatusError as exc:
            _warn(str(exc))
            return 2

    lookup = collect_lookup(
        parse_short_status(status_text),
        root,
        separator=separator,
        case_sensitive=case_sensitive,
    )

    console = _stdout_console(args.no_color)
    width = _parse_num(_pick(args.width, config, "width", None), int) or console.width

    tree = MergedTree(
        root,
        lookup.paths(),
        virtual_only=not show_all,
        show_hidden=show_hidden,
        case_sensitive=case_sensitive,
        separator=separator,
    )
    report = StatusReport(console, lookup, width=width, max_lines=max_lines)

    console.print(str(root), soft_wrap=True, markup=False)
    report.print_headers()
    draw_tree(tree, tree.root_node(), report.emit)
    console.print()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
