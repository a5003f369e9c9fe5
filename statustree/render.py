from __future__ import annotations

from enum import Enum
from typing import Callable

from .merged_tree import DirectoryListing, TreeNode

TEE = "├───"
ELBOW = "└───"
CONTINUATION = "│   "
BLANK = "    "


class WalkSignal(Enum):
    CONTINUE = "continue"
    STOP = "stop"


Emit = Callable[[str, TreeNode | None], WalkSignal | bool | None]


def _stopped(signal: WalkSignal | bool | None) -> bool:
    if isinstance(signal, WalkSignal):
        return signal is WalkSignal.STOP
    return bool(signal)


def draw_tree(listing: DirectoryListing, root: TreeNode, emit: Emit) -> bool:
    """Walk ``root`` depth first, handing each formatted line to ``emit``.

    Files of a directory come first, followed by a placeholder line
    (``node`` is None) and then one line per subdirectory. ``emit`` may
    return ``WalkSignal.STOP`` (or True) to end the walk at once. Returns
    False when the walk was stopped.
    """
    return _draw(listing, root, emit, ())


def _draw(
    listing: DirectoryListing,
    directory: TreeNode,
    emit: Emit,
    indent: tuple[str, ...],
) -> bool:
    subdirs = listing.list_directories(directory)
    files = listing.list_files(directory)
    prefix = "".join(indent)

    if files:
        connector = CONTINUATION if subdirs else BLANK
        for node in files:
            if _stopped(emit(f"{prefix}{connector}{node.name}", node)):
                return False
        if _stopped(emit(f"{prefix}{connector}", None)):
            return False

    last = len(subdirs) - 1
    for idx, subdir in enumerate(subdirs):
        is_last = idx == last
        glyph = ELBOW if is_last else TEE
        if _stopped(emit(f"{prefix}{glyph}{subdir.name}", subdir)):
            return False
        if not _draw(listing, subdir, emit, indent + (BLANK if is_last else CONTINUATION,)):
            return False

    return True


def render_lines(
    listing: DirectoryListing,
    root: TreeNode,
    limit: int | None = None,
) -> list[tuple[str, TreeNode | None]]:
    lines: list[tuple[str, TreeNode | None]] = []

    def _collect(line: str, node: TreeNode | None) -> WalkSignal:
        lines.append((line, node))
        if limit is not None and len(lines) >= limit:
            return WalkSignal.STOP
        return WalkSignal.CONTINUE

    if limit is None or limit > 0:
        draw_tree(listing, root, _collect)
    return lines
