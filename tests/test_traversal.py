"""Tests for the depth-first walk."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from conftest import DEEP_LEVELS
from npmcleaner.errors import ScanError
from npmcleaner.traversal import WalkAction, walk_tree


def build_tree(root: Path) -> None:
    (root / "b" / "inner").mkdir(parents=True)
    (root / "a").mkdir()
    (root / "a" / "file.txt").write_text("a")
    (root / "b" / "inner" / "deep.txt").write_text("deep")
    (root / "c.txt").write_text("c")


class TestWalkTree:
    def test_visits_root_first_then_children_in_name_order(self, tmp_path):
        build_tree(tmp_path)
        visited = []

        def visit(path, is_dir):
            visited.append((path.relative_to(tmp_path).as_posix(), is_dir))
            return WalkAction.CONTINUE

        completed = walk_tree(tmp_path, visit)

        assert completed is True
        assert visited == [
            (".", True),
            ("a", True),
            ("a/file.txt", False),
            ("b", True),
            ("b/inner", True),
            ("b/inner/deep.txt", False),
            ("c.txt", False),
        ]

    def test_skip_subtree_does_not_descend(self, tmp_path):
        build_tree(tmp_path)
        visited = []

        def visit(path, is_dir):
            visited.append(path.name)
            if path.name == "b":
                return WalkAction.SKIP_SUBTREE
            return WalkAction.CONTINUE

        assert walk_tree(tmp_path, visit) is True
        assert "b" in visited
        assert "inner" not in visited
        assert "deep.txt" not in visited
        # Siblings after the skipped folder are still visited
        assert "c.txt" in visited

    def test_stop_ends_the_whole_walk(self, tmp_path):
        build_tree(tmp_path)
        visited = []

        def visit(path, is_dir):
            visited.append(path.name)
            if path.name == "file.txt":
                return WalkAction.STOP
            return WalkAction.CONTINUE

        assert walk_tree(tmp_path, visit) is False
        assert visited[-1] == "file.txt"
        assert "b" not in visited
        assert "c.txt" not in visited

    def test_stop_on_root(self, tmp_path):
        build_tree(tmp_path)
        visited = []

        def visit(path, is_dir):
            visited.append(path)
            return WalkAction.STOP

        assert walk_tree(tmp_path, visit) is False
        assert visited == [tmp_path]

    def test_file_root_is_visited_once(self, tmp_path):
        file_path = tmp_path / "only.txt"
        file_path.write_text("x")
        visited = []

        def visit(path, is_dir):
            visited.append((path, is_dir))
            return WalkAction.CONTINUE

        assert walk_tree(file_path, visit) is True
        assert visited == [(file_path, False)]

    def test_missing_root_raises(self, tmp_path):
        with pytest.raises(ScanError) as exc_info:
            walk_tree(tmp_path / "missing", lambda path, is_dir: WalkAction.CONTINUE)
        assert exc_info.value.path == str(tmp_path / "missing")

    def test_unreadable_directory_raises(self, tmp_path):
        build_tree(tmp_path)
        with patch("npmcleaner.traversal.os.scandir") as mock_scandir:
            mock_scandir.side_effect = PermissionError(13, "Permission denied")
            with pytest.raises(ScanError) as exc_info:
                walk_tree(tmp_path, lambda path, is_dir: WalkAction.CONTINUE)
        assert "Permission denied" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, PermissionError)

    def test_visitor_errors_propagate(self, tmp_path):
        build_tree(tmp_path)

        def visit(path, is_dir):
            if path.name == "a":
                raise ScanError(path, "boom")
            return WalkAction.CONTINUE

        with pytest.raises(ScanError, match="boom"):
            walk_tree(tmp_path, visit)

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
    def test_does_not_follow_symlinked_directories(self, tmp_path):
        target = tmp_path / "target"
        (target / "inside").mkdir(parents=True)
        root = tmp_path / "root"
        root.mkdir()
        try:
            os.symlink(target, root / "link", target_is_directory=True)
        except OSError:
            pytest.skip("cannot create symlinks here")

        visited = []

        def visit(path, is_dir):
            visited.append((path.name, is_dir))
            return WalkAction.CONTINUE

        walk_tree(root, visit)
        assert ("link", False) in visited
        assert all(name != "inside" for name, _ in visited)

    def test_walks_trees_deeper_than_the_recursion_limit(self, deep_chain):
        top, deepest = deep_chain
        (deepest / "leaf.txt").write_text("x")
        dirs = 0
        files = []

        def visit(path, is_dir):
            nonlocal dirs
            if is_dir:
                dirs += 1
            else:
                files.append(path)
            return WalkAction.CONTINUE

        assert walk_tree(top, visit) is True
        assert dirs == DEEP_LEVELS
        assert files == [deepest / "leaf.txt"]

    def test_skip_and_stop_in_a_deep_tree(self, deep_chain):
        top, deepest = deep_chain
        (deepest / "leaf.txt").write_text("x")
        (top / "z-sibling").mkdir()
        visited = []

        def visit(path, is_dir):
            visited.append(path)
            if path == deepest.parent:
                return WalkAction.SKIP_SUBTREE
            if path.name == "z-sibling":
                return WalkAction.STOP
            return WalkAction.CONTINUE

        assert walk_tree(top, visit) is False
        assert deepest not in visited
        # Unwinding the deep chain resumes with the top-level sibling
        assert visited[-1] == top / "z-sibling"
        assert len(visited) == DEEP_LEVELS
