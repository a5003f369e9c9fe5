from __future__ import annotations

from rich.console import Console

from .merged_tree import TreeNode
from .render import WalkSignal
from .status import DEFAULT_STATUS, ItemStatus, StatusLookup, symbol_for
from .table import Alignment, ColumnSpec, TablePrinter

INDEX = "Index"
WORKING = "Working"
MIN_TREE_WIDTH = 10

_DOTTED_PAD = (".", " ")


def dotted_padding(text: str, width: int) -> str:
    """Fill the rest of the last ``width``-wide line of ``text`` with a
    right-aligned dot pattern; the first pad character is always a space."""
    if not text:
        return text
    pad = -len(text) % width
    if pad == 0:
        return text
    chars = [_DOTTED_PAD[i % len(_DOTTED_PAD)] for i in range(pad)]
    chars.reverse()
    chars[0] = _DOTTED_PAD[1]
    return text + "".join(chars)


def build_columns(total_width: int, show_index: bool, show_working: bool) -> list[ColumnSpec]:
    padding = ColumnSpec("", 1, Alignment.LEFT)
    status_width = 0
    if show_index:
        status_width += len(INDEX) + 1
    if show_working:
        status_width += len(WORKING) + 1
    if status_width:
        # trailing padding column
        status_width += 1

    tree = ColumnSpec("", max(MIN_TREE_WIDTH, total_width - status_width))
    columns = [tree]
    if show_index:
        columns += [padding, ColumnSpec(INDEX, len(INDEX), Alignment.CENTER)]
    if show_working:
        columns += [padding, ColumnSpec(WORKING, len(WORKING), Alignment.CENTER)]
    if status_width:
        columns.append(padding)
    return columns


class StatusReport:
    """Prints tree rows with their status columns; usable as a
    ``draw_tree`` callback."""

    def __init__(
        self,
        console: Console,
        lookup: StatusLookup,
        width: int,
        show_index: bool | None = None,
        show_working: bool | None = None,
        max_lines: int | None = None,
    ) -> None:
        self.console = console
        self.lookup = lookup
        self.show_index = lookup.has_index if show_index is None else show_index
        self.show_working = lookup.has_working if show_working is None else show_working
        self.columns = build_columns(width, self.show_index, self.show_working)
        self.table = TablePrinter(self.columns)
        self.max_lines = max_lines
        self.rows = 0

    def print_headers(self) -> None:
        if self.show_index or self.show_working:
            self.table.print_headers(self.console)

    def status_for(self, node: TreeNode | None) -> ItemStatus:
        if node is None:
            return DEFAULT_STATUS
        return self.lookup.get(node.relative_path)

    def row(self, line: str, status: ItemStatus) -> tuple[list[str], list[str | None]]:
        tree_width = self.columns[0].width
        cells: list[str] = [line if status.is_default else dotted_padding(line, tree_width)]
        styles: list[str | None] = [None]
        for axis, enabled in ((status.index, self.show_index), (status.working, self.show_working)):
            if not enabled:
                continue
            symbol, style = symbol_for(axis)
            cells += ["", symbol]
            styles += [None, style]
        if len(cells) < len(self.columns):
            cells.append("")
            styles.append(None)
        return cells, styles

    def emit(self, line: str, node: TreeNode | None) -> WalkSignal:
        cells, styles = self.row(line, self.status_for(node))
        self.table.print_row(self.console, cells, styles)
        self.rows += 1
        if self.max_lines is not None and self.rows >= self.max_lines:
            return WalkSignal.STOP
        return WalkSignal.CONTINUE
