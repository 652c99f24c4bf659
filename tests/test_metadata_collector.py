"""
Tests for the metadata collector.

Tests cover:
- Orientation-aware dimension correction
- Portrait filtering and rejection of unreadable or oversized files
- Capture date resolution and file system fallback
- Behaviour with a substituted imaging backend
"""

import os
import unittest
from unittest import mock
from datetime import datetime
from pathlib import Path

from PIL import Image

from SBS_Libs.constants import (
    ORIENTATION_BOTTOM_RIGHT,
    ORIENTATION_LEFT_BOTTOM,
    ORIENTATION_RIGHT_TOP,
    ORIENTATION_TOP_LEFT,
)
from SBS_Libs.CompositeLib.imaging_backend import ImageInfo, PillowBackend
from SBS_Libs.ImageInfoLib.metadata_collector import (
    MetadataCollector,
    corrected_dimensions,
    file_system_date,
)


class TestCorrectedDimensions(unittest.TestCase):
    """Test corrected_dimensions helper."""

    def test_default_orientation_unchanged(self):
        self.assertEqual(corrected_dimensions(800, 1200, ORIENTATION_TOP_LEFT), (800, 1200))

    def test_180_unchanged(self):
        self.assertEqual(corrected_dimensions(800, 1200, ORIENTATION_BOTTOM_RIGHT), (800, 1200))

    def test_90_and_270_swap(self):
        self.assertEqual(corrected_dimensions(1200, 800, ORIENTATION_RIGHT_TOP), (800, 1200))
        self.assertEqual(corrected_dimensions(1200, 800, ORIENTATION_LEFT_BOTTOM), (800, 1200))


class TestReadRecord:
    """Tests for MetadataCollector.read_record with real JPEG files."""

    def test_portrait_accepted(self, tmp_path, jpeg_factory):
        path = jpeg_factory(tmp_path / "p.jpg", (80, 120), date_taken=datetime(2013, 1, 1, 9, 30))

        record = MetadataCollector().read_record(path)

        assert record is not None
        assert record.file_name == "p.jpg"
        assert record.full_path == path
        assert (record.width, record.height) == (80, 120)
        assert record.creation_date == datetime(2013, 1, 1, 9, 30)

    def test_landscape_rejected(self, tmp_path, jpeg_factory):
        path = jpeg_factory(tmp_path / "l.jpg", (120, 80))
        assert MetadataCollector().read_record(path) is None

    def test_square_rejected(self, tmp_path, jpeg_factory):
        path = jpeg_factory(tmp_path / "s.jpg", (100, 100))
        assert MetadataCollector().read_record(path) is None

    def test_rotated_landscape_storage_accepted(self, tmp_path, jpeg_factory):
        """A 1200x800 image tagged 'rotated 90 CW' displays as 800x1200 portrait."""
        path = jpeg_factory(tmp_path / "r.jpg", (1200, 800), orientation=ORIENTATION_RIGHT_TOP)

        record = MetadataCollector().read_record(path)

        assert record is not None
        assert (record.width, record.height) == (800, 1200)

    def test_rotated_portrait_storage_rejected(self, tmp_path, jpeg_factory):
        """An 800x1200 image tagged 'rotated 270 CW' displays as landscape."""
        path = jpeg_factory(tmp_path / "r.jpg", (800, 1200), orientation=ORIENTATION_LEFT_BOTTOM)
        assert MetadataCollector().read_record(path) is None

    def test_undecodable_rejected(self, tmp_path):
        path = tmp_path / "broken.jpg"
        path.write_bytes(b"this is not a jpeg")

        assert MetadataCollector().read_record(path) is None

    def test_missing_file_rejected(self, tmp_path):
        assert MetadataCollector().read_record(tmp_path / "nope.jpg") is None


class TestCreationDate:
    """Tests for capture date resolution."""

    def test_missing_tag_falls_back_to_file_date(self, tmp_path, jpeg_factory):
        path = jpeg_factory(tmp_path / "p.jpg", (80, 120))
        stamp = datetime(2015, 6, 1, 12, 0).timestamp()
        os.utime(path, (stamp, stamp))

        record = MetadataCollector().read_record(path)

        assert record.creation_date <= datetime(2015, 6, 1, 12, 0)

    def test_corrupt_tag_falls_back_to_file_date(self, tmp_path, jpeg_factory):
        path = jpeg_factory(tmp_path / "p.jpg", (80, 120), raw_date="not a date")

        record = MetadataCollector().read_record(path)

        assert record is not None
        assert record.creation_date == file_system_date(path)

    def test_file_system_date_is_earlier_of_created_and_modified(self, tmp_path):
        path = tmp_path / "f.jpg"
        path.write_bytes(b"x")
        stamp = datetime(2001, 2, 3, 4, 5, 6).timestamp()
        os.utime(path, (stamp, stamp))

        stat = os.stat(path)
        created = getattr(stat, "st_birthtime", stat.st_ctime)
        expected = datetime.fromtimestamp(min(created, stat.st_mtime))

        assert file_system_date(path) == expected


class StubBackend(PillowBackend):
    """Backend returning canned metadata, keyed by file name."""

    def __init__(self, infos, dates=None, failures=()):
        self.infos = infos
        self.dates = dates or {}
        self.failures = set(failures)

    def probe(self, path):
        if Path(path).name in self.failures:
            raise OSError("cannot open")
        return self.infos[Path(path).name]

    def read_date_taken(self, path):
        value = self.dates.get(Path(path).name)
        if isinstance(value, Exception):
            raise value
        return value


class TestCollectWithBackend(unittest.TestCase):
    """Test MetadataCollector.collect using a substituted backend."""

    def setUp(self):
        self.backend = StubBackend(
            infos={
                "portrait.jpg": ImageInfo(600, 900),
                "landscape.jpg": ImageInfo(900, 600),
                "rotated.jpg": ImageInfo(900, 600, ORIENTATION_RIGHT_TOP),
                "empty.jpg": ImageInfo(0, 0),
            },
            dates={
                "portrait.jpg": datetime(2013, 1, 1),
                "rotated.jpg": datetime(2013, 1, 2),
            },
            failures={"broken.jpg"},
        )
        self.collector = MetadataCollector(self.backend)

    def test_collect_filters_to_portrait(self):
        paths = [Path("/p") / name for name in
                 ("portrait.jpg", "landscape.jpg", "rotated.jpg", "empty.jpg", "broken.jpg")]

        records = self.collector.collect(paths)

        self.assertEqual([r.file_name for r in records], ["portrait.jpg", "rotated.jpg"])
        self.assertTrue(all(r.is_portrait for r in records))

    def test_collect_logs_count(self):
        with self.assertLogs("SBS_Libs.ImageInfoLib.metadata_collector", level="INFO") as logs:
            self.collector.collect([Path("/p/portrait.jpg")])

        self.assertTrue(any("Found 1 suitable portrait images." in line for line in logs.output))

    def test_unreadable_date_falls_back(self):
        self.backend.dates["portrait.jpg"] = ValueError("bad tag")
        fallback = datetime(2010, 1, 1)

        with mock.patch(
            "SBS_Libs.ImageInfoLib.metadata_collector.file_system_date",
            return_value=fallback,
        ):
            record = self.collector.read_record(Path("/p/portrait.jpg"))

        self.assertEqual(record.creation_date, fallback)

    def test_oversized_image_rejected(self):
        self.backend.probe = mock.Mock(side_effect=Image.DecompressionBombError("too many pixels"))

        records = self.collector.collect([Path("/p/huge.jpg")])

        self.assertEqual(records, [])

    def test_oversized_image_does_not_stop_collection(self):
        real_info = self.backend.probe

        def info_or_bomb(path):
            if Path(path).name == "huge.jpg":
                raise Image.DecompressionBombError("too many pixels")
            return real_info(path)

        self.backend.probe = info_or_bomb

        records = self.collector.collect([Path("/p/huge.jpg"), Path("/p/portrait.jpg")])

        self.assertEqual([r.file_name for r in records], ["portrait.jpg"])


if __name__ == "__main__":
    unittest.main()
