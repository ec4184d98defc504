"""Tests for the single-pass directory walk.

Covers filtering order (hidden, depth, ignore), pre-order output, metrics
produced alongside the walk, cancellation and the lenient/strict error modes.
"""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazytree.tree_model import (
    CancellationToken,
    RootNotDirectoryError,
    RootNotFoundError,
    ScanOptions,
    WalkCancelled,
    WalkIOError,
    WalkMode,
    WalkPermissionError,
    walk,
    walk_entries,
)
import lazytree.tree_model.walker as walker


def _make_sample_tree(root: Path) -> None:
    (root / "a.txt").write_bytes(b"x" * 10)
    (root / "b").mkdir()
    (root / "b" / "c.txt").write_bytes(b"y" * 20)


def _paths(entries) -> list[str]:
    return [entry.path for entry in entries]


class WalkScenarioTests(unittest.TestCase):
    def test_sample_tree_entries_depths_and_metrics(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve() / "project"
            root.mkdir()
            _make_sample_tree(root)

            result = walk(root)

            self.assertEqual(_paths(result.entries), ["project", "a.txt", "b", "b/c.txt"])
            self.assertEqual([entry.depth for entry in result.entries], [0, 1, 1, 2])
            self.assertTrue(result.entries[0].is_dir)
            self.assertEqual(result.entries[1].size, 10)
            self.assertEqual(result.root, root)
            self.assertEqual(result.metrics.total_files, 2)
            self.assertEqual(result.metrics.total_dirs, 1)
            self.assertEqual(result.metrics.total_size, 30)
            self.assertEqual(result.metrics.max_depth, 2)

    def test_ignore_contents_glob_keeps_directory_itself(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_sample_tree(root)

            result = walk(root, ScanOptions(ignore_patterns=("b/*",)))

            self.assertEqual(_paths(result.entries)[1:], ["a.txt", "b"])
            self.assertEqual(result.metrics.total_files, 1)
            self.assertEqual(result.metrics.total_size, 10)

    def test_ignore_directory_pattern_skips_whole_subtree(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_sample_tree(root)

            entries = walk_entries(root, ScanOptions(ignore_patterns=("b",)))

            self.assertEqual(_paths(entries)[1:], ["a.txt"])

    def test_star_pattern_crosses_directory_separators(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "logs" / "old").mkdir(parents=True)
            (root / "logs" / "old" / "app.log").write_text("x", encoding="utf-8")
            (root / "keep.txt").write_text("x", encoding="utf-8")

            entries = walk_entries(root, ScanOptions(ignore_patterns=("*.log",)))

            self.assertEqual(_paths(entries)[1:], ["keep.txt", "logs", "logs/old"])

    def test_invalid_pattern_is_skipped_without_affecting_valid_ones(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "app.log").write_text("x", encoding="utf-8")
            (root / "main.py").write_text("x", encoding="utf-8")

            with self.assertLogs("lazytree.tree_model.walker", level="WARNING") as captured:
                entries = walk_entries(root, ScanOptions(ignore_patterns=("{a,b}" * 11, "*.log")))

            self.assertEqual(_paths(entries)[1:], ["main.py"])
            self.assertTrue(any("{a,b}{a,b}" in line for line in captured.output))

    def test_pattern_order_does_not_change_effect(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_sample_tree(root)
            (root / "d.md").write_text("x", encoding="utf-8")

            forward = walk_entries(root, ScanOptions(ignore_patterns=("*.md", "b")))
            backward = walk_entries(root, ScanOptions(ignore_patterns=("b", "*.md")))

            self.assertEqual(_paths(forward), _paths(backward))
            self.assertEqual(_paths(forward)[1:], ["a.txt"])


class WalkFilterTests(unittest.TestCase):
    def test_max_depth_limits_entries(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "one" / "two" / "three").mkdir(parents=True)
            (root / "one" / "two" / "three" / "deep.txt").write_text("x", encoding="utf-8")
            (root / "one" / "top.txt").write_text("x", encoding="utf-8")

            for limit in (1, 2, 3):
                entries = walk_entries(root, ScanOptions(max_depth=limit))
                self.assertTrue(all(entry.depth <= limit for entry in entries), limit)
                self.assertEqual(max(entry.depth for entry in entries), limit)

    def test_non_positive_max_depth_is_unlimited(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a" / "b" / "c").mkdir(parents=True)

            for limit in (0, -1):
                entries = walk_entries(root, ScanOptions(max_depth=limit))
                self.assertEqual(_paths(entries)[1:], ["a", "a/b", "a/b/c"])

    def test_hidden_entries_and_their_subtrees_are_skipped_by_default(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / ".git" / "objects").mkdir(parents=True)
            (root / ".git" / "HEAD").write_text("ref", encoding="utf-8")
            (root / ".env").write_text("x", encoding="utf-8")
            (root / "src").mkdir()
            (root / "src" / ".cache").write_text("x", encoding="utf-8")
            (root / "src" / "main.py").write_text("x", encoding="utf-8")

            hidden_off = walk_entries(root)
            hidden_on = walk_entries(root, ScanOptions(show_hidden=True))

            self.assertEqual(_paths(hidden_off)[1:], ["src", "src/main.py"])
            self.assertTrue(all(not entry.name.startswith(".") for entry in hidden_off[1:]))
            self.assertIn(".git/HEAD", _paths(hidden_on))
            self.assertIn(".git/objects", _paths(hidden_on))
            self.assertIn("src/.cache", _paths(hidden_on))

    def test_hidden_root_is_always_emitted(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve() / ".config"
            root.mkdir()
            (root / "settings.json").write_text("{}", encoding="utf-8")

            entries = walk_entries(root, ScanOptions(ignore_patterns=("*",)))

            self.assertEqual(_paths(entries), [".config"])

    @unittest.skipUnless(hasattr(os, "symlink"), "symlinks unavailable")
    def test_directory_symlinks_are_not_followed(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "real").mkdir()
            (root / "real" / "file.txt").write_text("x", encoding="utf-8")
            os.symlink(root / "real", root / "link")

            entries = walk_entries(root)

            link = next(entry for entry in entries if entry.path == "link")
            self.assertFalse(link.is_dir)
            self.assertNotIn("link/file.txt", _paths(entries))

    def test_match_prefix_roots_patterns_outside_the_walk(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_sample_tree(root)
            options = ScanOptions(ignore_patterns=("b/*",))

            plain = walk(root / "b", options)
            prefixed = walk(root / "b", options, match_prefix="b/")

            self.assertEqual(_paths(plain.entries)[1:], ["c.txt"])
            self.assertEqual(_paths(prefixed.entries), ["b"])


class WalkOrderTests(unittest.TestCase):
    def test_entries_are_pre_order_with_contiguous_subtrees(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            for rel in ("x/y/z.txt", "x/y/w.txt", "x/q.txt", "m/n.txt", "top.txt"):
                target = root / rel
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text("x", encoding="utf-8")

            entries = walk_entries(root)

            for idx, entry in enumerate(entries):
                if not entry.is_dir or idx == 0:
                    continue
                later = idx + 1
                while later < len(entries) and entries[later].depth > entry.depth:
                    self.assertTrue(entries[later].path.startswith(entry.path + "/"))
                    later += 1
                for rest in entries[later:]:
                    self.assertFalse(rest.path.startswith(entry.path + "/"))
            for entry in entries[1:]:
                self.assertEqual(entry.depth, len(entry.path.split("/")))

    def test_metrics_counts_match_emitted_entries(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_sample_tree(root)
            (root / "b" / "d").mkdir()
            (root / ".hidden").write_text("x", encoding="utf-8")

            result = walk(root, ScanOptions(max_depth=2))

            metrics = result.metrics
            self.assertEqual(metrics.total_files + metrics.total_dirs, len(result.entries) - 1)

    def test_on_entry_receives_every_non_root_entry_in_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_sample_tree(root)
            seen = []

            result = walk(root, on_entry=seen.append)

            self.assertEqual(seen, list(result.entries[1:]))


class WalkCancellationTests(unittest.TestCase):
    def test_cancel_after_first_entry_reports_cancelled(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_sample_tree(root)
            token = CancellationToken()
            seen = []

            def on_entry(entry) -> None:
                seen.append(entry)
                token.cancel()

            with self.assertRaises(WalkCancelled):
                walk(root, token=token, on_entry=on_entry)
            self.assertEqual(len(seen), 1)

    def test_pre_cancelled_token_aborts_before_first_child(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_sample_tree(root)
            token = CancellationToken()
            token.cancel()
            seen = []

            with self.assertRaises(WalkCancelled):
                walk(root, token=token, on_entry=seen.append)
            self.assertEqual(seen, [])


class WalkErrorModeTests(unittest.TestCase):
    def test_missing_root_raises_not_found(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(RootNotFoundError):
                walk(Path(tmp) / "missing")

    def test_file_root_raises_not_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "file.txt"
            target.write_text("x", encoding="utf-8")
            with self.assertRaises(RootNotDirectoryError):
                walk(target)

    def test_relative_root_is_resolved_to_absolute(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_sample_tree(root)
            previous_cwd = Path.cwd()
            try:
                os.chdir(root / "b")
                result = walk(Path(".."))
            finally:
                os.chdir(previous_cwd)

            self.assertEqual(result.root, root)
            self.assertEqual(result.entries[0].path, root.name)

    def _patched_scan(self, locked_name: str):
        original = walker._scan_sorted

        def scan(directory):
            if Path(directory).name == locked_name:
                raise PermissionError(13, "Permission denied", str(directory))
            return original(directory)

        return mock.patch.object(walker, "_scan_sorted", side_effect=scan)

    def _make_locked_tree(self, root: Path) -> None:
        (root / "locked").mkdir()
        (root / "locked" / "secret.txt").write_text("x", encoding="utf-8")
        (root / "open").mkdir()
        (root / "open" / "file.txt").write_text("x", encoding="utf-8")

    def test_lenient_mode_keeps_unreadable_directory_without_contents(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            self._make_locked_tree(root)

            with self._patched_scan("locked"):
                entries = walk_entries(root, ScanOptions(mode=WalkMode.LENIENT))

            self.assertEqual(_paths(entries)[1:], ["locked", "open", "open/file.txt"])

    def test_strict_mode_aborts_on_unreadable_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            self._make_locked_tree(root)

            with self._patched_scan("locked"), self.assertRaises(WalkPermissionError) as ctx:
                walk(root, ScanOptions(mode=WalkMode.STRICT))
            self.assertEqual(ctx.exception.path.name, "locked")

    def test_unreadable_root_raises_permission_error_in_any_mode(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve() / "locked"
            root.mkdir()

            with self._patched_scan("locked"), self.assertRaises(WalkPermissionError):
                walk(root, ScanOptions(mode=WalkMode.LENIENT))

    def test_lenient_mode_omits_entries_whose_stat_fails(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_sample_tree(root)
            original = walker._read_metadata

            def read_metadata(child):
                if child.name == "a.txt":
                    raise OSError(5, "I/O error", child.path)
                return original(child)

            with mock.patch.object(walker, "_read_metadata", side_effect=read_metadata):
                lenient = walk(root)
                with self.assertRaises(WalkIOError) as ctx:
                    walk(root, ScanOptions(mode=WalkMode.STRICT))

            self.assertEqual(_paths(lenient.entries)[1:], ["b", "b/c.txt"])
            self.assertEqual(lenient.metrics.total_files, 1)
            self.assertEqual(ctx.exception.path.name, "a.txt")


if __name__ == "__main__":
    unittest.main()
