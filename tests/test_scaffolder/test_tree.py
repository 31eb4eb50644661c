"""Unit tests for the virtual file tree (arachnet.scaffolder.tree)."""

from __future__ import annotations

import pytest

from arachnet.scaffolder.tree import Directory, File, FileTree


pytestmark = pytest.mark.unit


class TestBuilding:
    def test_add_file_creates_parents(self):
        tree = FileTree()
        tree.add_file("src/models/user.py", "x = 1\n")
        assert isinstance(tree.get("src"), Directory)
        assert isinstance(tree.get("src/models"), Directory)
        assert tree.read("src/models/user.py") == "x = 1\n"

    def test_add_file_overwrites(self):
        tree = FileTree()
        tree.add_file("a.txt", "old")
        tree.add_file("a.txt", "new")
        assert tree.read("a.txt") == "new"
        assert len(tree) == 1

    def test_binary_content(self):
        tree = FileTree()
        entry = tree.add_file("logo.png", b"\x89PNG")
        assert isinstance(entry, File)
        assert tree.read("logo.png") == b"\x89PNG"

    def test_file_over_directory_rejected(self):
        tree = FileTree()
        tree.add_file("models/user.py", "")
        with pytest.raises(ValueError):
            tree.add_file("models", "oops")

    def test_directory_over_file_rejected(self):
        tree = FileTree()
        tree.add_file("README.md", "")
        with pytest.raises(ValueError):
            tree.add_file("README.md/extra.txt", "")

    @pytest.mark.parametrize("path", ["../escape.txt", "a/./b.txt", ""])
    def test_invalid_paths(self, path: str):
        with pytest.raises(ValueError):
            FileTree().add_file(path, "")

    def test_folder_is_reused(self):
        tree = FileTree()
        first = tree.folder("routes")
        second = tree.folder("routes/")
        assert first is second


class TestQueries:
    def test_missing_paths(self):
        tree = FileTree()
        tree.add_file("a/b.txt", "")
        assert tree.get("a/c.txt") is None
        assert tree.get("a/b.txt/deeper") is None
        assert "a/b.txt" in tree
        assert "nope" not in tree

    def test_read_missing_or_directory(self):
        tree = FileTree()
        tree.add_file("a/b.txt", "")
        with pytest.raises(KeyError):
            tree.read("a/missing.txt")
        with pytest.raises(KeyError):
            tree.read("a")

    def test_walk_depth_first_in_insertion_order(self):
        tree = FileTree()
        tree.add_file("z.txt", "")
        tree.add_file("lib/a.txt", "")
        tree.add_file("b.txt", "")
        assert [path for path, _ in tree.walk()] == ["z.txt", "lib", "lib/a.txt", "b.txt"]

    def test_files_and_len_skip_directories(self):
        tree = FileTree()
        tree.add_file("one/two/three.txt", "")
        tree.add_file("four.txt", "")
        assert [path for path, _ in tree.files()] == ["one/two/three.txt", "four.txt"]
        assert len(tree) == 2

    def test_empty_tree(self):
        tree = FileTree()
        assert len(tree) == 0
        assert list(tree.files()) == []
        assert tree.name == ""
