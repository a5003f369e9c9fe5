from __future__ import annotations

import io

import pytest
from rich.console import Console

from statustree.table import Alignment, ColumnSpec, TablePrinter, align, pad_center


def _plain(lines) -> list[str]:
    return [line.plain for line in lines]


def test_long_cell_wraps_to_ceiling_of_width() -> None:
    table = TablePrinter([ColumnSpec("tree", 10), ColumnSpec("s", 1)])

    lines = _plain(table.render_row(["x" * 25, "+"]))

    assert lines == [
        "x" * 10 + "+",
        "x" * 10 + " ",
        "x" * 5 + " " * 5 + " ",
    ]


def test_single_line_row() -> None:
    table = TablePrinter([ColumnSpec("a", 4), ColumnSpec("b", 3, Alignment.RIGHT)])

    assert _plain(table.render_row(["ab", "c"])) == ["ab    c"]


def test_empty_row_still_renders_one_line() -> None:
    table = TablePrinter([ColumnSpec("a", 2), ColumnSpec("b", 2)])

    assert _plain(table.render_row(["", ""])) == ["    "]


def test_center_puts_remainder_on_the_right() -> None:
    assert pad_center("abc", 7) == "  abc  "
    assert pad_center("ab", 7) == "  ab   "
    assert pad_center("toolong", 3) == "toolong"


@pytest.mark.parametrize(
    ("alignment", "expected"),
    [
        (Alignment.LEFT, "ab   "),
        (Alignment.RIGHT, "   ab"),
        (Alignment.CENTER, " ab  "),
    ],
)
def test_align(alignment: Alignment, expected: str) -> None:
    assert align("ab", 5, alignment) == expected


def test_cell_count_mismatch_raises() -> None:
    table = TablePrinter([ColumnSpec("a", 2), ColumnSpec("b", 2)])

    with pytest.raises(ValueError, match="incorrect number of cells"):
        table.render_row(["only one"])
    with pytest.raises(ValueError, match="incorrect number of cells"):
        table.render_row(["1", "2", "3"])


def test_non_positive_width_is_rejected() -> None:
    with pytest.raises(ValueError, match="positive width"):
        ColumnSpec("bad", 0)


def test_headers_and_underline() -> None:
    table = TablePrinter(
        [
            ColumnSpec("", 6),
            ColumnSpec("Index", 5, Alignment.CENTER),
            ColumnSpec("Working", 4),
        ]
    )

    lines = _plain(table.render_headers())

    assert lines == [
        "      IndexWork",
        "           ing ",
        "      ---------",
    ]


def test_foreground_applies_to_every_line_of_column() -> None:
    table = TablePrinter([ColumnSpec("a", 3), ColumnSpec("b", 1, foreground="green")])

    lines = table.render_row(["abcdef", "+"])

    assert len(lines) == 2
    for line in lines:
        spans = [(s.start, s.end, str(s.style)) for s in line.spans]
        assert (3, 4, "green") in spans


def test_row_style_overrides_column_foreground() -> None:
    table = TablePrinter([ColumnSpec("a", 2), ColumnSpec("b", 1, foreground="green")])

    (line,) = table.render_row(["ab", "~"], styles=[None, "cyan"])

    assert [(s.start, s.end, str(s.style)) for s in line.spans] == [(2, 3, "cyan")]


def test_print_row_writes_plain_lines() -> None:
    out = io.StringIO()
    console = Console(file=out, width=20, color_system=None)
    table = TablePrinter([ColumnSpec("a", 4), ColumnSpec("b", 1)])

    table.print_row(console, ["abcdefg", "+"])

    assert [line.rstrip() for line in out.getvalue().splitlines()] == ["abcd+", "efg"]
