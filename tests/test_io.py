import tempfile
import unittest
from pathlib import Path

from knot_downloader.errors import DirectoryCreationError, WriteError
from knot_downloader.sync.io import atomic_write_text, ensure_parent_dir, read_text_or_empty


class SyncIoTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.tmp = Path(self._tmp.name)

    def test_missing_file_reads_as_empty(self) -> None:
        self.assertEqual(read_text_or_empty(self.tmp / "absent.txt"), "")

    def test_non_utf8_file_reads_as_empty(self) -> None:
        path = self.tmp / "binary.bin"
        path.write_bytes(b"\xff\xfe\x00garbage")

        self.assertEqual(read_text_or_empty(path), "")

    def test_read_preserves_line_endings(self) -> None:
        path = self.tmp / "crlf.txt"
        path.write_bytes(b"a\r\nb\r\n")

        self.assertEqual(read_text_or_empty(path), "a\r\nb\r\n")

    def test_atomic_write_replaces_content_and_leaves_no_temp_file(self) -> None:
        path = self.tmp / "a.txt"
        path.write_text("old\n", encoding="utf-8")

        atomic_write_text(path, "new\r\ncontent\n")

        self.assertEqual(path.read_bytes(), b"new\r\ncontent\n")
        self.assertEqual(sorted(p.name for p in self.tmp.iterdir()), ["a.txt"])

    def test_atomic_write_into_missing_directory_raises_write_error(self) -> None:
        path = self.tmp / "missing" / "a.txt"

        with self.assertRaises(WriteError) as ctx:
            atomic_write_text(path, "content")

        self.assertIsInstance(ctx.exception.__cause__, OSError)
        self.assertFalse(path.parent.exists())

    def test_ensure_parent_dir_is_idempotent(self) -> None:
        path = self.tmp / "out" / "nested" / "a.txt"

        ensure_parent_dir(path)
        ensure_parent_dir(path)

        self.assertTrue(path.parent.is_dir())

    def test_ensure_parent_dir_fails_when_a_file_is_in_the_way(self) -> None:
        blocker = self.tmp / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")

        with self.assertRaises(DirectoryCreationError):
            ensure_parent_dir(blocker / "a.txt")


if __name__ == "__main__":
    unittest.main()
