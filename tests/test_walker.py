import logging
import os

import pytest

from renamer.walker import walk_entries


def rel(paths, root):
    return [p.relative_to(root).as_posix() for p in paths]


def test_shallow_walk_lists_only_root(make_tree):
    root = make_tree("b.txt", "a.txt", "sub/deep.txt")
    assert rel(walk_entries(root), root) == ["a.txt", "b.txt", "sub"]


def test_recursive_walk_yields_children_before_parents(make_tree):
    root = make_tree("top.txt", "sub/one.txt", "sub/inner/two.txt")
    entries = rel(walk_entries(root, recurse=True), root)

    assert sorted(entries) == sorted([
        "top.txt", "sub", "sub/one.txt", "sub/inner", "sub/inner/two.txt",
    ])
    assert entries.index("sub/inner/two.txt") < entries.index("sub/inner")
    assert entries.index("sub/inner") < entries.index("sub")
    assert entries.index("sub/one.txt") < entries.index("sub")


def test_root_itself_is_not_yielded(make_tree):
    root = make_tree("x")
    assert root not in list(walk_entries(root, recurse=True))


def test_missing_root_logs_and_yields_nothing(tmp_path, caplog):
    with caplog.at_level(logging.ERROR):
        assert list(walk_entries(tmp_path / "nope")) == []
    assert "Error encountered while walking dir" in caplog.text


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="needs symlinks")
def test_symlinked_dirs_are_listed_but_not_followed(make_tree):
    root = make_tree("real/file.txt")
    os.symlink(root / "real", root / "link")
    entries = rel(walk_entries(root, recurse=True), root)
    assert "link" in entries
    assert "link/file.txt" not in entries


def _make_undecodable(root):
    try:
        with open(os.path.join(os.fsencode(root), b"bad\xff.txt"), "wb"):
            pass
    except OSError:
        pytest.skip("filesystem rejects non-UTF-8 names")


@pytest.mark.parametrize("recurse", [False, True])
def test_non_utf8_names_are_logged_and_skipped(make_tree, caplog, recurse):
    root = make_tree("good.txt")
    _make_undecodable(root)

    with caplog.at_level(logging.ERROR):
        entries = rel(walk_entries(root, recurse=recurse), root)

    assert entries == ["good.txt"]
    assert "could not convert to a string" in caplog.text
    assert "bad\\xff.txt" in caplog.text


@pytest.mark.skipif(not hasattr(os, "geteuid") or os.geteuid() == 0, reason="root can read anything")
def test_unreadable_subdir_is_logged_and_walk_continues(make_tree, caplog):
    root = make_tree("locked/hidden.txt", "open/seen.txt", "top.txt")
    locked = root / "locked"
    locked.chmod(0)
    try:
        with caplog.at_level(logging.ERROR):
            entries = rel(walk_entries(root, recurse=True), root)
    finally:
        locked.chmod(0o755)

    assert "Error encountered while walking dir" in caplog.text
    assert "locked/hidden.txt" not in entries
    assert {"locked", "open", "open/seen.txt", "top.txt"} <= set(entries)
