import unittest
from pathlib import Path

from dlkit.errors import MissingExtensionError
from dlkit.filenames import next_available_path, rename_increment_filename, sanitize_filename


class TestRenameIncrement(unittest.TestCase):
    def test_first_collision(self):
        self.assertEqual(rename_increment_filename("photo.jpg"), "photo(1).jpg")
        self.assertEqual(rename_increment_filename("archive.tar.gz"), "archive.tar(1).gz")

    def test_existing_marker(self):
        self.assertEqual(rename_increment_filename("photo(1).jpg"), "photo(2).jpg")
        self.assertEqual(rename_increment_filename("photo(9).jpg"), "photo(10).jpg")

    def test_all_markers_incremented(self):
        self.assertEqual(rename_increment_filename("a(2)_b(2).txt"), "a(3)_b(3).txt")
        self.assertEqual(rename_increment_filename("a(2)_b(5).txt"), "a(3)_b(3).txt")
        self.assertEqual(rename_increment_filename("x(7)_y(1).txt"), "x(8)_y(8).txt")

    def test_marker_without_extension(self):
        self.assertEqual(rename_increment_filename("README(3)"), "README(4)")

    def test_empty_parentheses_are_not_a_marker(self):
        self.assertEqual(rename_increment_filename("photo().jpg"), "photo()(1).jpg")

    def test_missing_extension(self):
        with self.assertRaises(MissingExtensionError) as ctx:
            rename_increment_filename("README")
        self.assertEqual(ctx.exception.filename, "README")


class TestSanitize(unittest.TestCase):
    def test_strips_illegal_characters(self):
        self.assertEqual(sanitize_filename('  a/b:c?"d".mp4 '), "a b c d .mp4")

    def test_default_when_empty(self):
        self.assertEqual(sanitize_filename("///"), "download")
        self.assertEqual(sanitize_filename("", default="file"), "file")


def test_next_available_path(tmp_path: Path):
    (tmp_path / "photo.jpg").write_bytes(b"x")
    (tmp_path / "photo(1).jpg").write_bytes(b"x")
    assert next_available_path(tmp_path / "photo.jpg") == tmp_path / "photo(2).jpg"
    assert next_available_path(tmp_path / "other.jpg") == tmp_path / "other.jpg"


def test_next_available_path_custom_exists():
    taken = {"clip.mp4", "clip(1).mp4", "clip(2).mp4"}
    result = next_available_path(Path("clip.mp4"), exists=lambda p: p.name in taken)
    assert result == Path("clip(3).mp4")


if __name__ == "__main__":
    unittest.main()
