"""Tests for traversal path naming."""

import pytest

from stringview.kernel.paths import ROOT_PATH, build_path, key_text


def test_root_path():
    assert ROOT_PATH == "root"


@pytest.mark.parametrize(
    "parent, key, is_index, expected",
    [
        ("root", "a", False, "root.a"),
        ("root", 0, True, "root[0]"),
        ("root.a", 3, True, "root.a[3]"),
        ("root.a[0]", "b", False, "root.a[0].b"),
        ("", "a", False, "a"),
        ("", 2, True, "[2]"),
        (None, "a", False, "a"),
    ],
)
def test_build_path(parent, key, is_index, expected):
    assert build_path(parent, key, is_index) == expected


def test_keys_are_not_escaped():
    """Dotted keys give ambiguous paths; the grammar is diagnostic only."""
    assert build_path("root", "a.b", False) == build_path("root.a", "b", False)


@pytest.mark.parametrize(
    "key, expected",
    [
        ("name", "name"),
        (1, "1"),
        (-7, "-7"),
        (1.5, "1.5"),
        (True, "true"),
        (False, "false"),
        (None, "null"),
        ((1, 2), "(1, 2)"),
    ],
)
def test_key_text(key, expected):
    assert key_text(key) == expected
