from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from rich.console import Console
from rich.text import Text


class Alignment(Enum):
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


@dataclass(frozen=True)
class ColumnSpec:
    name: str
    width: int
    alignment: Alignment = Alignment.LEFT
    foreground: str | None = None

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError(f"column {self.name!r} needs a positive width, got {self.width}")


def pad_center(text: str, width: int) -> str:
    if width <= len(text):
        return text
    left = (width - len(text)) // 2
    return " " * left + text + " " * (width - len(text) - left)


def align(text: str, width: int, alignment: Alignment) -> str:
    if alignment is Alignment.RIGHT:
        return text.rjust(width)
    if alignment is Alignment.CENTER:
        return pad_center(text, width)
    return text.ljust(width)


def line_count(cells: Sequence[str], columns: Sequence[ColumnSpec]) -> int:
    count = 1
    for cell, col in zip(cells, columns):
        count = max(count, math.ceil(len(cell) / col.width))
    return count


def wrap_cell(text: str, width: int, lines: int) -> list[str]:
    return [text[i * width:(i + 1) * width] for i in range(lines)]


class TablePrinter:
    """Fixed-width columns; cells longer than their column wrap onto
    additional physical lines, and every column renders the same number of
    lines for a row."""

    def __init__(self, columns: Sequence[ColumnSpec]) -> None:
        self.columns = tuple(columns)

    @property
    def width(self) -> int:
        return sum(col.width for col in self.columns)

    def _check(self, cells: Sequence[str]) -> None:
        if len(cells) != len(self.columns):
            raise ValueError(
                f"incorrect number of cells: got {len(cells)}, expected {len(self.columns)}"
            )

    def _line(self, cells: Sequence[str], styles: Sequence[str | None]) -> Text:
        line = Text()
        for cell, col, style in zip(cells, self.columns, styles):
            line.append(align(cell, col.width, col.alignment), style=style)
        return line

    def _styles(self, styles: Sequence[str | None] | None) -> list[str | None]:
        if styles is None:
            return [col.foreground for col in self.columns]
        if len(styles) != len(self.columns):
            raise ValueError(
                f"incorrect number of styles: got {len(styles)}, expected {len(self.columns)}"
            )
        return [style or col.foreground for style, col in zip(styles, self.columns)]

    def render_row(
        self,
        cells: Sequence[str],
        styles: Sequence[str | None] | None = None,
    ) -> list[Text]:
        self._check(cells)
        resolved = self._styles(styles)
        count = line_count(cells, self.columns)
        if count == 1:
            return [self._line(cells, resolved)]

        wrapped = [wrap_cell(cell, col.width, count) for cell, col in zip(cells, self.columns)]
        return [
            self._line([chunks[i] for chunks in wrapped], resolved)
            for i in range(count)
        ]

    def render_headers(self) -> list[Text]:
        names = [col.name or "" for col in self.columns]
        borders = ["-" * min(len(col.name or ""), col.width) for col in self.columns]
        lines = self.render_row(names)
        lines.append(self._line(borders, self._styles(None)))
        return lines

    def print_row(
        self,
        console: Console,
        cells: Sequence[str],
        styles: Sequence[str | None] | None = None,
    ) -> None:
        for line in self.render_row(cells, styles):
            console.print(line, soft_wrap=True, highlight=False)

    def print_headers(self, console: Console) -> None:
        for line in self.render_headers():
            console.print(line, soft_wrap=True, highlight=False)
