from __future__ import annotations

from pathlib import PurePosixPath

import pytest

from statustree.paths import (
    normalize_status_paths,
    parse_path,
    resolve_parent_relative,
    sort_key,
)


def test_parse_path_splits_components() -> None:
    parsed = parse_path("src/pkg/mod.py")

    assert parsed is not None
    assert parsed.components == ("src", "pkg", "mod.py")
    assert parsed.is_file is True


def test_trailing_separator_marks_directory() -> None:
    parsed = parse_path("build/")

    assert parsed is not None
    assert parsed.components == ("build",)
    assert parsed.is_file is False


@pytest.mark.parametrize("raw", ["", "/", "///"])
def test_parse_path_skips_malformed(raw: str) -> None:
    assert parse_path(raw) is None


def test_parse_path_with_custom_separator() -> None:
    parsed = parse_path("a\\b\\c.txt", separator="\\")

    assert parsed is not None
    assert parsed.components == ("a", "b", "c.txt")


def test_sort_key_is_case_insensitive_by_default() -> None:
    paths = [parse_path(p) for p in ["b.txt", "A.txt", "a/z.txt"]]
    ordered = sorted(paths, key=sort_key)

    assert [p.original for p in ordered] == ["a/z.txt", "A.txt", "b.txt"]


def test_sort_key_respects_component_boundaries() -> None:
    # '-' sorts before '/' as a character, but "a" is a prefix component
    paths = [parse_path(p) for p in ["a-b/x", "a/y"]]
    ordered = sorted(paths, key=sort_key)

    assert [p.original for p in ordered] == ["a/y", "a-b/x"]


def test_sort_key_case_sensitive_mode() -> None:
    paths = [parse_path(p) for p in ["b", "C"]]
    ordered = sorted(paths, key=lambda p: sort_key(p, case_sensitive=True))

    assert [p.original for p in ordered] == ["C", "b"]


def test_parent_relative_outside_root_is_discarded_windows() -> None:
    result = resolve_parent_relative(
        "..\\..\\x\\y.txt",
        "C:\\repo\\a\\b",
        separator="\\",
    )

    assert result is None


def test_parent_relative_inside_root_windows() -> None:
    result = resolve_parent_relative(
        "..\\a\\x\\y.txt",
        "C:\\repo\\a",
        separator="\\",
    )

    assert result == "x\\y.txt"


def test_parent_relative_is_case_insensitive() -> None:
    result = resolve_parent_relative(
        "..\\A\\x.txt",
        "C:\\Repo\\a",
        separator="\\",
    )

    assert result == "x.txt"


def test_parent_references_climbing_past_the_repository_are_discarded() -> None:
    # resolves to /home/src/pkg/mod.py
    result = resolve_parent_relative("../../../src/pkg/mod.py", "/home/u/repo/src")

    assert result is None


def test_parent_references_back_into_root() -> None:
    result = resolve_parent_relative("../../repo/src/pkg/mod.py", "/home/u/repo/src")

    assert result == "pkg/mod.py"


def test_parent_references_clamp_at_filesystem_anchor() -> None:
    result = resolve_parent_relative("../../../AAA/BBB/afile.txt", "/AAA")

    assert result == "BBB/afile.txt"


def test_parent_relative_keeps_directory_marker() -> None:
    result = resolve_parent_relative("../src/new/", "/repo/src")

    assert result == "new/"


def test_parent_relative_prefix_is_component_aware() -> None:
    result = resolve_parent_relative("../ab/x.txt", "/repo/a")

    assert result is None


def test_parent_relative_accepts_pure_paths() -> None:
    result = resolve_parent_relative(
        "../lib/util.py",
        PurePosixPath("/repo/lib"),
    )

    assert result == "util.py"


def test_normalize_status_paths_filters_and_passes_through() -> None:
    raw = ["", "README.md", "../docs/guide.md", "../src/app.py", "pkg/"]

    result = list(normalize_status_paths(raw, "/repo/src"))

    assert result == ["README.md", "app.py", "pkg/"]
