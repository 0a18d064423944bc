import pytest

from tagsig.modules.core.path_utils import parse_path_rule, shorten


def test_abbreviate_keeps_last_segment() -> None:
    assert shorten("/a/bb/ccc/file", style=4) == "/a/b/c/file"


def test_include_trim_without_parent() -> None:
    assert shorten("/usr/local/include/foo/bar/baz", style=2) == "foo/bar/baz"


def test_include_trim_with_parent() -> None:
    assert shorten("/usr/local/include/foo/bar/baz", style=3) == "local:foo/bar/baz"


@pytest.mark.parametrize(
    "style, expected",
    [
        (0, "/usr/local/include/foo/bar/baz"),
        (1, "/usr/local/include/foo/bar/baz"),
        (6, "f/b/baz"),
        (7, "local:f/b/baz"),
    ],
)
def test_style_combinations(style: int, expected: str) -> None:
    assert shorten("/usr/local/include/foo/bar/baz", style=style) == expected


def test_include_trim_uses_last_include() -> None:
    assert shorten("/opt/include/x/include/sys/types.h", style=3) == "x:sys/types.h"


def test_include_trim_ignores_paths_without_include() -> None:
    assert shorten("/a/b/c.h", style=2) == "/a/b/c.h"
    assert shorten("/usr/include", style=2) == "/usr/include"


def test_mapping_rules_replace_every_occurrence_in_order() -> None:
    assert shorten("/home/u/src/m.c", [("/home/u", "~")]) == "~/src/m.c"
    assert shorten("/x/y/x/y", [("x", "z")]) == "/z/y/z/y"
    rules = [("/home/u/src", "S"), ("/home/u", "~")]
    assert shorten("/home/u/src/a.c", rules) == "S/a.c"


def test_mapping_rules_are_literal() -> None:
    assert shorten("/a.b/c", [(".", "_")]) == "/a_b/c"
    assert shorten("/axb/c", [(".", "_")]) == "/axb/c"


def test_dot_segments_removed() -> None:
    assert shorten("/a/./b/./c.h") == "/a/b/c.h"
    assert shorten("C:\\a\\.\\b.h") == "C:\\a\\b.h"
    assert shorten("/a/.hidden/b") == "/a/.hidden/b"


def test_shorten_idempotent_once_prefix_gone() -> None:
    rules = [("/home/u", "~")]
    once = shorten("/home/u/src/m.c", rules, style=4)
    assert shorten(once, rules, style=4) == once


def test_parse_path_rule() -> None:
    assert parse_path_rule("/home/u=~") == ("/home/u", "~")
    assert parse_path_rule("/a=b=c") == ("/a", "b=c")
    with pytest.raises(ValueError):
        parse_path_rule("no-separator")
    with pytest.raises(ValueError):
        parse_path_rule("=x")
