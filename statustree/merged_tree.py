"""Unified view over a directory on disk and a virtual status overlay.

A directory node may be backed by a real directory, by a slice of the
overlay trie, or by both. Listings are recomputed on every call; the
renderer visits each directory once per pass.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Protocol

from .paths import DEFAULT_SEPARATOR, ParsedPath, fold, parse_path
from .trie import SubtreeGroup, flatten

logger = logging.getLogger(__name__)


class NodeKind(Enum):
    PHYSICAL = "physical"
    VIRTUAL = "virtual"
    HYBRID = "hybrid"


@dataclass(frozen=True)
class TreeNode:
    name: str
    full_path: str
    relative_path: str
    is_dir: bool
    kind: NodeKind
    handle: Path | None = None
    overlay: tuple[ParsedPath, ...] = ()

    @property
    def has_physical_backing(self) -> bool:
        return self.kind is not NodeKind.VIRTUAL


class DirectoryListing(Protocol):
    def list_files(self, directory: TreeNode) -> list[TreeNode]: ...

    def list_directories(self, directory: TreeNode) -> list[TreeNode]: ...


def is_hidden(name: str) -> bool:
    return name.startswith(".")


def scan_directory(path: Path) -> tuple[list[os.DirEntry], list[os.DirEntry]]:
    """Return (files, directories) directly under ``path``.

    A directory that cannot be read counts as empty.
    """
    files: list[os.DirEntry] = []
    dirs: list[os.DirEntry] = []
    try:
        with os.scandir(path) as entries:
            for entry in entries:
                try:
                    if entry.is_dir():
                        dirs.append(entry)
                    else:
                        files.append(entry)
                except OSError:
                    continue
    except OSError as exc:
        logger.debug("cannot list %s: %s", path, exc)
        return [], []
    return files, dirs


class MergedTree:
    def __init__(
        self,
        root: Path,
        overlay_paths: Iterable[str] = (),
        virtual_only: bool = True,
        show_hidden: bool = False,
        case_sensitive: bool = False,
        separator: str = DEFAULT_SEPARATOR,
    ) -> None:
        self.root = Path(root)
        self.virtual_only = virtual_only
        self.show_hidden = show_hidden
        self.case_sensitive = case_sensitive
        self.separator = separator
        parsed = (parse_path(raw, separator) for raw in overlay_paths)
        self._overlay = tuple(p for p in parsed if p is not None)

    def root_node(self) -> TreeNode:
        return TreeNode(
            name=self.root.name or str(self.root),
            full_path=str(self.root),
            relative_path="",
            is_dir=True,
            kind=NodeKind.HYBRID if self._overlay else NodeKind.PHYSICAL,
            handle=self.root,
            overlay=self._overlay,
        )

    def _key(self, name: str) -> str:
        return fold(name, self.case_sensitive)

    def _child_paths(self, parent: TreeNode, name: str, is_dir: bool) -> tuple[str, str]:
        full_path = os.path.join(parent.full_path, name)
        relative = parent.relative_path + name
        if is_dir:
            relative += self.separator
        return full_path, relative

    def _scan(self, directory: TreeNode) -> tuple[list[os.DirEntry], list[os.DirEntry]]:
        if directory.handle is None:
            return [], []
        files, dirs = scan_directory(directory.handle)
        files.sort(key=lambda e: (self._key(e.name), e.name))
        dirs.sort(key=lambda e: (self._key(e.name), e.name))
        return files, dirs

    def _directory_groups(self, directory: TreeNode) -> list[SubtreeGroup]:
        # groups sharing a name (``a/`` next to a file ``a`` with children)
        # describe one directory
        merged: dict[str, SubtreeGroup] = {}
        for group in flatten(directory.overlay, self.case_sensitive):
            if not group.is_directory:
                continue
            key = self._key(group.name)
            previous = merged.get(key)
            if previous is None:
                merged[key] = group
            else:
                merged[key] = SubtreeGroup(previous.key, previous.children + group.children)
        return list(merged.values())

    def list_directories(self, directory: TreeNode) -> list[TreeNode]:
        groups = self._directory_groups(directory)
        if directory.handle is not None and (groups or not self.virtual_only):
            _, physical = self._scan(directory)
        else:
            physical = []

        pending = {self._key(entry.name): entry for entry in physical}
        result: list[TreeNode] = []

        for group in groups:
            match = pending.pop(self._key(group.name), None)
            if match is not None:
                full_path, relative = self._child_paths(directory, match.name, True)
                result.append(
                    TreeNode(
                        name=match.name,
                        full_path=full_path,
                        relative_path=relative,
                        is_dir=True,
                        kind=NodeKind.HYBRID,
                        handle=Path(match.path),
                        overlay=group.children,
                    )
                )
            else:
                full_path, relative = self._child_paths(directory, group.name, True)
                result.append(
                    TreeNode(
                        name=group.name,
                        full_path=full_path,
                        relative_path=relative,
                        is_dir=True,
                        kind=NodeKind.VIRTUAL,
                        overlay=group.children,
                    )
                )

        if not self.virtual_only:
            for entry in physical:
                if self._key(entry.name) not in pending:
                    continue
                if is_hidden(entry.name) and not self.show_hidden:
                    continue
                full_path, relative = self._child_paths(directory, entry.name, True)
                result.append(
                    TreeNode(
                        name=entry.name,
                        full_path=full_path,
                        relative_path=relative,
                        is_dir=True,
                        kind=NodeKind.PHYSICAL,
                        handle=Path(entry.path),
                    )
                )

        return result

    def list_files(self, directory: TreeNode) -> list[TreeNode]:
        result: list[TreeNode] = []
        existing: set[str] = set()

        if not self.virtual_only:
            physical, _ = self._scan(directory)
            for entry in physical:
                existing.add(self._key(entry.name))
                full_path, relative = self._child_paths(directory, entry.name, False)
                result.append(
                    TreeNode(
                        name=entry.name,
                        full_path=full_path,
                        relative_path=relative,
                        is_dir=False,
                        kind=NodeKind.PHYSICAL,
                        handle=Path(entry.path),
                    )
                )

        for group in flatten(directory.overlay, self.case_sensitive):
            if not group.is_leaf_file:
                continue
            if self._key(group.name) in existing:
                continue
            full_path, relative = self._child_paths(directory, group.name, False)
            result.append(
                TreeNode(
                    name=group.name,
                    full_path=full_path,
                    relative_path=relative,
                    is_dir=False,
                    kind=NodeKind.VIRTUAL,
                )
            )

        return result
