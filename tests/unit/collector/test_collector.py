"""Tests for collecting ranked entries from a target directory."""

from __future__ import annotations

import os
import tempfile
import threading
import time
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest import mock

from largest.collector import collect_entries
from largest.entry_model import Entry, compute_tree_size


def _build_layout(root: Path) -> None:
    """Files of 10/20/30 bytes plus a subdirectory holding 1000 bytes."""
    (root / "a.txt").write_bytes(b"a" * 10)
    (root / "b.txt").write_bytes(b"b" * 20)
    (root / "c.txt").write_bytes(b"c" * 30)
    sub = root / "sub"
    (sub / "nested").mkdir(parents=True)
    (sub / "part1.bin").write_bytes(b"x" * 600)
    (sub / "nested" / "part2.bin").write_bytes(b"y" * 400)


def _as_set(entries: list[Entry]) -> set[tuple[str, int]]:
    return {(entry.name, entry.size) for entry in entries}


class CollectEntriesTests(unittest.TestCase):
    def test_files_mode_omits_directories(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _build_layout(root)

            entries = collect_entries(root, include_dirs=False)

            self.assertEqual(len(entries), 3)
            self.assertSetEqual(_as_set(entries), {("a.txt", 10), ("b.txt", 20), ("c.txt", 30)})

    def test_directory_mode_adds_summed_subdirectory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _build_layout(root)

            entries = collect_entries(root, include_dirs=True)

            self.assertEqual(len(entries), 4)
            self.assertSetEqual(
                _as_set(entries),
                {("a.txt", 10), ("b.txt", 20), ("c.txt", 30), ("sub", 1000)},
            )

    def test_bounded_workers_match_unbounded_result(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _build_layout(root)
            for idx in range(6):
                (root / f"d{idx}").mkdir()
                (root / f"d{idx}" / "f").write_bytes(b"z" * (idx + 1) * 100)

            unbounded = collect_entries(root, include_dirs=True)
            bounded = collect_entries(root, include_dirs=True, max_workers=2)

            self.assertSetEqual(_as_set(bounded), _as_set(unbounded))
            self.assertEqual(len(bounded), 10)

    def test_repeated_collection_is_idempotent(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _build_layout(root)

            first = collect_entries(root, include_dirs=True)
            second = collect_entries(root, include_dirs=True)

            self.assertSetEqual(_as_set(first), _as_set(second))

    def test_missing_target_is_fatal(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "nope"

            with self.assertRaises(FileNotFoundError):
                collect_entries(missing, include_dirs=False)
            with self.assertRaises(FileNotFoundError):
                collect_entries(missing, include_dirs=True)

    def test_file_target_is_fatal(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "plain.txt"
            target.write_text("hello\n", encoding="utf-8")

            with self.assertRaises(NotADirectoryError):
                collect_entries(target, include_dirs=True)

    def test_vanished_child_is_skipped_only_in_directory_mode(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _build_layout(root)
            vanished = root / "b.txt"
            real_stat = os.stat

            def fake_stat(path, *args, **kwargs):
                if os.fspath(path) == os.fspath(vanished):
                    raise FileNotFoundError(2, "No such file or directory", os.fspath(path))
                return real_stat(path, *args, **kwargs)

            with mock.patch("largest.collector.os.stat", side_effect=fake_stat):
                entries = collect_entries(root, include_dirs=True)
                with self.assertRaises(FileNotFoundError):
                    collect_entries(root, include_dirs=False)

            self.assertSetEqual(_as_set(entries), {("a.txt", 10), ("c.txt", 30), ("sub", 1000)})

    def test_other_stat_errors_stay_fatal_in_directory_mode(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _build_layout(root)
            denied = root / "a.txt"
            real_stat = os.stat

            def fake_stat(path, *args, **kwargs):
                if os.fspath(path) == os.fspath(denied):
                    raise PermissionError(13, "Permission denied", os.fspath(path))
                return real_stat(path, *args, **kwargs)

            with mock.patch("largest.collector.os.stat", side_effect=fake_stat):
                with self.assertRaises(PermissionError):
                    collect_entries(root, include_dirs=True)

    @unittest.skipUnless(hasattr(os, "symlink"), "symlinks unsupported")
    def test_dangling_symlink_differs_between_modes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "kept.txt").write_bytes(b"k" * 5)
            os.symlink(root / "missing-target", root / "dangling")

            entries = collect_entries(root, include_dirs=True)
            self.assertSetEqual(_as_set(entries), {("kept.txt", 5)})

            with self.assertRaises(FileNotFoundError):
                collect_entries(root, include_dirs=False)

    def test_subdirectory_unreadable_at_measure_time_reports_zero(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _build_layout(root)
            sub = root / "sub"
            real_scandir = os.scandir

            def fake_scandir(path):
                if os.fspath(path) == os.fspath(sub):
                    raise PermissionError(13, "Permission denied", os.fspath(path))
                return real_scandir(path)

            with mock.patch("largest.entry_model.tree_size.os.scandir", side_effect=fake_scandir):
                entries = collect_entries(root, include_dirs=True)

            self.assertIn(("sub", 0), _as_set(entries))
            self.assertEqual(len(entries), 4)

    def test_each_subdirectory_is_measured_once(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for name in ("x", "y", "z"):
                (root / name).mkdir()
                (root / name / "f").write_bytes(b"1" * 3)
            calls: list[Path] = []

            def measure(path: Path) -> int:
                calls.append(path)
                return compute_tree_size(path)

            entries = collect_entries(root, include_dirs=True, measure=measure)

            self.assertEqual(sorted(path.name for path in calls), ["x", "y", "z"])
            self.assertSetEqual(_as_set(entries), {("x", 3), ("y", 3), ("z", 3)})

    def test_fatal_stat_error_cancels_queued_directory_measurements(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            listing = mock.MagicMock()
            listing.__enter__.return_value = iter(
                [SimpleNamespace(name=name) for name in ("a_dir", "b_dir", "c_dir", "zz.txt")]
            )
            real_stat = os.stat
            dir_stat = real_stat(root)

            def fake_stat(path, *args, **kwargs):
                name = Path(path).name
                if name == "zz.txt":
                    raise PermissionError(13, "Permission denied", os.fspath(path))
                if name.endswith("_dir"):
                    return dir_stat
                return real_stat(path, *args, **kwargs)

            release = threading.Event()
            calls: list[str] = []

            def measure(path: Path) -> int:
                calls.append(path.name)
                release.wait(timeout=2.0)
                return 0

            with mock.patch("largest.collector.os.scandir", return_value=listing), mock.patch(
                "largest.collector.os.stat", side_effect=fake_stat
            ):
                with self.assertRaises(PermissionError):
                    collect_entries(root, include_dirs=True, max_workers=1, measure=measure)
            release.set()

            def pool_alive() -> bool:
                return any(
                    thread.name.startswith("largest-dir-size_") and thread.is_alive()
                    for thread in threading.enumerate()
                )

            deadline = time.monotonic() + 2.0
            while pool_alive() and time.monotonic() < deadline:
                time.sleep(0.01)

            self.assertFalse(pool_alive())
            self.assertNotIn("b_dir", calls)
            self.assertNotIn("c_dir", calls)


if __name__ == "__main__":
    unittest.main()
