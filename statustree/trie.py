"""One-level prefix trie over parsed status paths.

``flatten`` groups a sorted run of paths by their first component. Each
group's children are the paths below that component, with the component
stripped, so the next level is built only when a group is expanded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .paths import DEFAULT_SEPARATOR, ParsedPath, fold, parse_path, sort_key


@dataclass(frozen=True)
class SubtreeGroup:
    key: ParsedPath
    children: tuple[ParsedPath, ...] = ()

    @property
    def name(self) -> str:
        return self.key.head

    @property
    def is_leaf_file(self) -> bool:
        return len(self.key.components) == 1 and self.key.is_file

    @property
    def is_directory(self) -> bool:
        return (
            len(self.key.components) > 1
            or not self.key.is_file
            or bool(self.children)
        )


def sort_paths(paths: Iterable[ParsedPath], case_sensitive: bool = False) -> list[ParsedPath]:
    return sorted(paths, key=lambda p: sort_key(p, case_sensitive))


def flatten(paths: Iterable[ParsedPath], case_sensitive: bool = False) -> list[SubtreeGroup]:
    ordered = sort_paths(paths, case_sensitive)
    groups: list[SubtreeGroup] = []

    i = 0
    while i < len(ordered):
        key = ordered[i]
        prefix = fold(key.head, case_sensitive)
        children: list[ParsedPath] = []
        if len(key.components) > 1:
            children.append(key.strip_head())

        i += 1
        while i < len(ordered):
            curr = ordered[i]
            # one-component paths start their own group, so duplicates of a
            # leaf are kept as separate leaves
            if len(curr.components) > 1 and fold(curr.head, case_sensitive) == prefix:
                children.append(curr.strip_head())
                i += 1
            else:
                break

        groups.append(SubtreeGroup(key, tuple(children)))

    return groups


def expand(group: SubtreeGroup, case_sensitive: bool = False) -> list[SubtreeGroup]:
    return flatten(group.children, case_sensitive)


def parse_paths(raw_paths: Iterable[str], separator: str = DEFAULT_SEPARATOR) -> list[ParsedPath]:
    parsed: list[ParsedPath] = []
    for raw in raw_paths:
        path = parse_path(raw, separator)
        if path is not None:
            parsed.append(path)
    return parsed


def build_groups(
    raw_paths: Iterable[str],
    separator: str = DEFAULT_SEPARATOR,
    case_sensitive: bool = False,
) -> list[SubtreeGroup]:
    return flatten(parse_paths(raw_paths, separator), case_sensitive)
