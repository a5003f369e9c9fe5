from __future__ import annotations

import io

from rich.console import Console

from statustree.merged_tree import NodeKind, TreeNode
from statustree.render import WalkSignal
from statustree.report import StatusReport, build_columns, dotted_padding
from statustree.status import build_status_lookup


def _console() -> tuple[Console, io.StringIO]:
    out = io.StringIO()
    return Console(file=out, width=200, color_system=None), out


def _file(rel: str) -> TreeNode:
    return TreeNode(rel.rsplit("/", 1)[-1], rel, rel, False, NodeKind.VIRTUAL)


def test_columns_for_both_axes() -> None:
    columns = build_columns(80, show_index=True, show_working=True)

    assert [c.name for c in columns] == ["", "", "Index", "", "Working", ""]
    assert sum(c.width for c in columns) == 80
    assert columns[0].width == 65


def test_columns_for_single_axis() -> None:
    index_only = build_columns(40, show_index=True, show_working=False)
    working_only = build_columns(40, show_index=False, show_working=True)

    assert [c.name for c in index_only] == ["", "", "Index", ""]
    assert index_only[0].width == 33
    assert [c.name for c in working_only] == ["", "", "Working", ""]
    assert working_only[0].width == 31


def test_columns_without_status() -> None:
    columns = build_columns(50, show_index=False, show_working=False)

    assert len(columns) == 1
    assert columns[0].width == 50


def test_tree_column_has_a_minimum_width() -> None:
    assert build_columns(5, True, True)[0].width == 10


def test_dotted_padding_fills_to_width() -> None:
    assert dotted_padding("ab", 6) == "ab . ."
    assert dotted_padding("abc", 6) == "abc  ."
    assert dotted_padding("abcdef", 6) == "abcdef"


def test_dotted_padding_pads_last_wrapped_line() -> None:
    padded = dotted_padding("abcdefgh", 6)

    assert len(padded) == 12
    assert padded.startswith("abcdefgh ")
    assert padded.endswith(".")


def test_row_marks_status_symbols() -> None:
    console, out = _console()
    lookup = build_status_lookup(
        index={"Added": ["a.py"]},
        working={"Modified": ["a.py"]},
    )
    report = StatusReport(console, lookup, width=40)

    cells, styles = report.row("a.py", lookup.get("a.py"))

    assert cells[1:] == ["", "+", "", "~", ""]
    assert styles[2] == "green"
    assert styles[4] == "cyan"
    assert cells[0].startswith("a.py ")
    assert len(cells[0]) == report.columns[0].width


def test_default_row_has_no_padding() -> None:
    console, _ = _console()
    lookup = build_status_lookup(working={"Modified": ["x"]})
    report = StatusReport(console, lookup, width=40)

    cells, _ = report.row("│   ", lookup.get("nothing"))

    assert cells == ["│   ", "", "", ""]


def test_emit_prints_and_honours_max_lines() -> None:
    console, out = _console()
    lookup = build_status_lookup(working={"Deleted": ["gone.txt"]})
    report = StatusReport(console, lookup, width=30, max_lines=2)

    assert report.emit("    gone.txt", _file("gone.txt")) is WalkSignal.CONTINUE
    assert report.emit("    ", None) is WalkSignal.STOP

    lines = out.getvalue().splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("    gone.txt ")
    assert lines[0].rstrip().endswith("-")


def test_headers_only_when_status_columns_exist() -> None:
    console, out = _console()
    report = StatusReport(console, build_status_lookup(), width=30)

    report.print_headers()

    assert out.getvalue() == ""


def test_headers_for_working_column() -> None:
    console, out = _console()
    lookup = build_status_lookup(working={"Added": ["n"]})
    report = StatusReport(console, lookup, width=30)

    report.print_headers()

    header, underline = out.getvalue().splitlines()
    assert header.rstrip().endswith("Working")
    assert underline.rstrip().endswith("-------")
