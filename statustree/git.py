from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from .status import ADDED, DELETED, MODIFIED, UNMERGED, StatusSets

logger = logging.getLogger(__name__)

UNTRACKED_MODES = ("no", "normal", "all")

_UNMERGED_PAIRS = {"DD", "AU", "UD", "UA", "DU", "AA", "UU"}
_CODE_TAGS = {
    "A": ADDED,
    "M": MODIFIED,
    "T": MODIFIED,
    "D": DELETED,
}
_C_ESCAPES = {
    "a": 0x07,
    "b": 0x08,
    "t": 0x09,
    "n": 0x0A,
    "v": 0x0B,
    "f": 0x0C,
    "r": 0x0D,
    '"': 0x22,
    "\\": 0x5C,
}
_RENAME_ARROW = " -> "


class GitStatusError(RuntimeError):
    pass


def find_git_root(start: Path) -> tuple[Path | None, Path | None]:
    for p in [start, *start.parents]:
        git_path = p / ".git"
        if git_path.is_dir():
            return p, git_path
        if git_path.is_file():
            try:
                raw = git_path.read_text(encoding="utf-8", errors="ignore").strip()
            except OSError:
                raw = ""
            if raw.startswith("gitdir:"):
                git_dir = raw.split(":", 1)[1].strip()
                git_dir_path = Path(git_dir)
                if not git_dir_path.is_absolute():
                    git_dir_path = (p / git_dir_path).resolve()
                return p, git_dir_path
            return p, None
    return None, None


def repo_root_from_git_dir(git_dir: Path) -> Path:
    return git_dir.resolve().parent


def run_git_status(root: Path, untracked: str = "normal") -> str:
    """Run ``git status --short`` in ``root``.

    Short-format paths are relative to ``root`` and point outside it with
    leading ``../`` segments, whatever ``status.relativePaths`` says in the
    user's config.
    """
    if untracked not in UNTRACKED_MODES:
        raise GitStatusError(f"unknown untracked-files mode: {untracked}")
    if not shutil.which("git"):
        raise GitStatusError("git executable not found")

    cmd = [
        "git",
        "-c",
        "core.quotePath=false",
        "-c",
        "status.relativePaths=true",
        "status",
        "--short",
        f"--untracked-files={untracked}",
    ]
    logger.debug("running %s in %s", " ".join(cmd), root)
    try:
        result = subprocess.run(
            cmd,
            cwd=root,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as exc:
        raise GitStatusError(f"failed to run git: {exc}") from exc
    if result.returncode != 0:
        detail = (result.stderr or "").strip() or f"exit code {result.returncode}"
        raise GitStatusError(f"git status failed: {detail}")
    return result.stdout


def _unquote(path: str) -> str:
    """Decode a path git wrapped in C-style quotes.

    Octal escapes are raw bytes of a UTF-8 name, so the body is rebuilt as
    bytes before decoding.
    """
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path
    body = path[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        ch = body[i]
        if ch != "\\" or i + 1 >= len(body):
            out += ch.encode("utf-8")
            i += 1
            continue
        nxt = body[i + 1]
        octal = body[i + 1 : i + 4]
        if nxt in _C_ESCAPES:
            out.append(_C_ESCAPES[nxt])
            i += 2
        elif len(octal) == 3 and all(c in "01234567" for c in octal):
            out.append(int(octal, 8) & 0xFF)
            i += 4
        else:
            out += ch.encode("utf-8")
            i += 1
    return out.decode("utf-8", errors="replace")


def _split_rename(rest: str) -> tuple[str, str] | None:
    # git quotes any rename side that contains a space, so an unquoted
    # source ends at the first arrow
    if rest.startswith('"'):
        i = 1
        while i < len(rest) and rest[i] != '"':
            i += 2 if rest[i] == "\\" else 1
        old, tail = rest[: i + 1], rest[i + 1 :]
        if not tail.startswith(_RENAME_ARROW):
            return None
        return old, tail[len(_RENAME_ARROW) :]
    old, arrow, new = rest.partition(_RENAME_ARROW)
    if not arrow:
        return None
    return old, new


def parse_short_status(text: str) -> StatusSets:
    sets = StatusSets()
    for line in text.splitlines():
        if len(line) < 4 or line[2] != " ":
            continue
        code = line[:2]
        rest = line[3:]
        x, y = code[0], code[1]

        if code == "??":
            sets.add_working(ADDED, _unquote(rest))
            continue
        if code == "!!":
            continue
        if code in _UNMERGED_PAIRS:
            path = _unquote(rest)
            sets.add_index(UNMERGED, path)
            sets.add_working(UNMERGED, path)
            continue

        pair = _split_rename(rest) if x in ("R", "C") else None
        if pair is not None:
            old, new = pair
            path = _unquote(new)
            sets.add_index(ADDED, path)
            if x == "R":
                sets.add_index(DELETED, _unquote(old))
        else:
            path = _unquote(rest)
            if x in _CODE_TAGS:
                sets.add_index(_CODE_TAGS[x], path)

        if y in _CODE_TAGS:
            sets.add_working(_CODE_TAGS[y], path)
    return sets
