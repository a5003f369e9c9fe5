"""Per-path index/working status and the lookup used while rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Mapping

from .paths import fold

ADDED = "Added"
MODIFIED = "Modified"
DELETED = "Deleted"
UNMERGED = "Unmerged"
TAGS = (ADDED, MODIFIED, DELETED, UNMERGED)


class IndexStatus(Enum):
    NONE = 0
    ADDED = 1
    REMOVED = 2
    MODIFIED = 3
    UNMERGED = 4


class WorkingStatus(Enum):
    NONE = 0
    ADDED = 1
    REMOVED = 2
    MODIFIED = 3
    UNMERGED = 4


_TAG_TO_INDEX = {
    ADDED: IndexStatus.ADDED,
    MODIFIED: IndexStatus.MODIFIED,
    DELETED: IndexStatus.REMOVED,
    UNMERGED: IndexStatus.UNMERGED,
}

_TAG_TO_WORKING = {
    ADDED: WorkingStatus.ADDED,
    MODIFIED: WorkingStatus.MODIFIED,
    DELETED: WorkingStatus.REMOVED,
    UNMERGED: WorkingStatus.UNMERGED,
}

# (symbol, rich style) keyed by the enum member name shared by both axes
SYMBOLS: dict[str, tuple[str, str]] = {
    "ADDED": ("+", "green"),
    "MODIFIED": ("~", "cyan"),
    "REMOVED": ("-", "yellow"),
    "UNMERGED": ("!", "white"),
    "NONE": ("", "bright_black"),
}


def symbol_for(status: IndexStatus | WorkingStatus) -> tuple[str, str]:
    return SYMBOLS[status.name]


@dataclass(frozen=True)
class ItemStatus:
    index: IndexStatus = IndexStatus.NONE
    working: WorkingStatus = WorkingStatus.NONE

    @property
    def is_default(self) -> bool:
        return self.index is IndexStatus.NONE and self.working is WorkingStatus.NONE


DEFAULT_STATUS = ItemStatus()


@dataclass
class StatusSets:
    """Status paths per axis, keyed by classification tag."""

    index: dict[str, list[str]] = field(default_factory=lambda: {tag: [] for tag in TAGS})
    working: dict[str, list[str]] = field(default_factory=lambda: {tag: [] for tag in TAGS})

    def add_index(self, tag: str, path: str) -> None:
        self.index.setdefault(tag, []).append(path)

    def add_working(self, tag: str, path: str) -> None:
        self.working.setdefault(tag, []).append(path)


class StatusLookup:
    def __init__(self, case_sensitive: bool = False) -> None:
        self.case_sensitive = case_sensitive
        self._items: dict[str, tuple[str, ItemStatus]] = {}
        self.has_index = False
        self.has_working = False

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, path: str) -> bool:
        return fold(path, self.case_sensitive) in self._items

    def get(self, path: str) -> ItemStatus:
        item = self._items.get(fold(path, self.case_sensitive))
        return item[1] if item is not None else DEFAULT_STATUS

    def paths(self) -> list[str]:
        return [path for path, _ in self._items.values()]

    def set_index(self, path: str, status: IndexStatus) -> None:
        key = fold(path, self.case_sensitive)
        original, current = self._items.get(key, (path, DEFAULT_STATUS))
        self._items[key] = (original, ItemStatus(status, current.working))
        self.has_index = True

    def set_working(self, path: str, status: WorkingStatus) -> None:
        key = fold(path, self.case_sensitive)
        original, current = self._items.get(key, (path, DEFAULT_STATUS))
        self._items[key] = (original, ItemStatus(current.index, status))
        self.has_working = True


def build_status_lookup(
    index: Mapping[str, Iterable[str]] | None = None,
    working: Mapping[str, Iterable[str]] | None = None,
    case_sensitive: bool = False,
) -> StatusLookup:
    lookup = StatusLookup(case_sensitive)
    if index is not None:
        for tag in TAGS:
            for path in index.get(tag, ()):
                if path:
                    lookup.set_index(path, _TAG_TO_INDEX[tag])
    if working is not None:
        for tag in TAGS:
            for path in working.get(tag, ()):
                if path:
                    lookup.set_working(path, _TAG_TO_WORKING[tag])
    return lookup
