from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path, PurePath, PurePosixPath, PureWindowsPath
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = "/"
PARENT_REF = ".."


@dataclass(frozen=True)
class ParsedPath:
    original: str
    components: tuple[str, ...]
    is_file: bool

    @property
    def head(self) -> str:
        return self.components[0]

    def strip_head(self) -> ParsedPath:
        return ParsedPath(self.original, self.components[1:], self.is_file)


def fold(text: str, case_sensitive: bool = False) -> str:
    return text if case_sensitive else text.casefold()


def parse_path(raw: str, separator: str = DEFAULT_SEPARATOR) -> ParsedPath | None:
    """Split a status path into components.

    A trailing separator marks a directory. Empty strings and strings made
    only of separators carry no components and yield None.
    """
    if not raw:
        return None
    components = tuple(part for part in raw.split(separator) if part)
    if not components:
        return None
    return ParsedPath(raw, components, not raw.endswith(separator))


def sort_key(path: ParsedPath, case_sensitive: bool = False) -> tuple:
    # Directories sort before files of the same name; raw components settle
    # case-only differences so the order is total.
    folded = tuple(fold(part, case_sensitive) for part in path.components)
    return (folded, path.is_file, path.components)


def _flavour(separator: str) -> type[PurePath]:
    return PureWindowsPath if separator == "\\" else PurePosixPath


def _split(path: str | PurePath, separator: str) -> PurePath:
    if isinstance(path, PurePath):
        return path
    return _flavour(separator)(str(path))


def _has_prefix(
    parts: tuple[str, ...] | list[str],
    prefix: tuple[str, ...],
    case_sensitive: bool,
) -> bool:
    if len(parts) < len(prefix):
        return False
    return all(
        fold(a, case_sensitive) == fold(b, case_sensitive)
        for a, b in zip(parts, prefix)
    )


def resolve_parent_relative(
    raw: str,
    root: str | Path,
    separator: str = DEFAULT_SEPARATOR,
    case_sensitive: bool = False,
) -> str | None:
    """Re-express a ``../``-prefixed status path relative to ``root``.

    The path is walked from ``root``; parent references stop at the
    filesystem anchor. Returns None when the result lies outside ``root``.
    """
    root_path = _split(root, separator)
    root_parts = root_path.parts
    floor = 1 if root_path.anchor else 0

    current = list(root_parts)
    for part in raw.split(separator):
        if not part or part == ".":
            continue
        if part == PARENT_REF:
            if len(current) > floor:
                current.pop()
            continue
        current.append(part)

    if len(current) <= len(root_parts) or not _has_prefix(current, root_parts, case_sensitive):
        logger.debug("discarding %s: outside %s", raw, root)
        return None

    relative = separator.join(current[len(root_parts):])
    if raw.endswith(separator):
        relative += separator
    return relative


def normalize_status_paths(
    raw_paths: Iterable[str],
    root: str | Path,
    separator: str = DEFAULT_SEPARATOR,
    case_sensitive: bool = False,
) -> Iterator[str]:
    parent_prefix = PARENT_REF + separator
    for raw in raw_paths:
        if not raw:
            continue
        path = raw
        if path.startswith(parent_prefix):
            path = resolve_parent_relative(
                path,
                root,
                separator=separator,
                case_sensitive=case_sensitive,
            )
            if path is None:
                continue
        yield path
