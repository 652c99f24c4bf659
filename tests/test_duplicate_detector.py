"""
Unit tests for duplicate_detector module.

Tests content comparison, cheap rejections and digest caching.
"""

from pathlib import Path

import pytest

from SBS_Libs.ImageInfoLib.duplicate_detector import DuplicateDetector


@pytest.fixture
def detector():
    return DuplicateDetector()


class TestFilesAreEqual:
    """Tests for DuplicateDetector.files_are_equal."""

    def test_same_path_is_equal(self, detector, tmp_path):
        """Comparing a file with itself goes through the digest path and matches."""
        path = tmp_path / "a.jpg"
        path.write_bytes(b"photo-bytes")

        assert detector.files_are_equal(path, path)
        assert detector.cache_size == 1

    def test_identical_copies_are_equal(self, detector, tmp_path):
        a = tmp_path / "a.jpg"
        b = tmp_path / "b.jpg"
        a.write_bytes(b"same content")
        b.write_bytes(b"same content")

        assert detector.files_are_equal(a, b)

    def test_same_length_different_content(self, detector, tmp_path):
        """Equal sizes alone are not enough."""
        a = tmp_path / "a.jpg"
        b = tmp_path / "b.jpg"
        a.write_bytes(b"AAAA")
        b.write_bytes(b"AAAB")

        assert not detector.files_are_equal(a, b)

    def test_different_length_skips_hashing(self, detector, tmp_path):
        a = tmp_path / "a.jpg"
        b = tmp_path / "b.jpg"
        a.write_bytes(b"short")
        b.write_bytes(b"much longer content")

        assert not detector.files_are_equal(a, b)
        assert detector.cache_size == 0

    def test_missing_file(self, detector, tmp_path):
        a = tmp_path / "a.jpg"
        a.write_bytes(b"content")

        assert not detector.files_are_equal(a, tmp_path / "missing.jpg")
        assert not detector.files_are_equal(tmp_path / "missing.jpg", a)

    def test_io_error_is_not_equal(self, detector, tmp_path, monkeypatch):
        """Read failures are reported as 'not equal' instead of raising."""
        a = tmp_path / "a.jpg"
        b = tmp_path / "b.jpg"
        a.write_bytes(b"same")
        b.write_bytes(b"same")

        def failing_digest(path, length):
            raise OSError("disk error")

        monkeypatch.setattr(detector, "digest", failing_digest)

        assert not detector.files_are_equal(a, b)


class TestDigestCache:
    """Tests for digest caching."""

    def test_digest_is_cached(self, detector, tmp_path, monkeypatch):
        path = tmp_path / "a.jpg"
        path.write_bytes(b"content")

        first = detector.digest(path, 7)

        # A second request must not reopen the file
        def no_open(*args, **kwargs):
            raise AssertionError("file should not be reopened")

        monkeypatch.setattr("builtins.open", no_open)
        assert detector.digest(path, 7) == first

    def test_cache_keyed_by_length(self, detector, tmp_path):
        path = tmp_path / "a.jpg"
        path.write_bytes(b"content")

        detector.digest(path, 7)
        detector.digest(path, 8)

        assert detector.cache_size == 2

    def test_cache_keyed_by_absolute_path(self, detector, tmp_path, monkeypatch):
        path = tmp_path / "a.jpg"
        path.write_bytes(b"content")
        monkeypatch.chdir(tmp_path)

        detector.digest(Path("a.jpg"), 7)
        detector.digest(path, 7)

        assert detector.cache_size == 1

    def test_each_detector_has_its_own_cache(self, tmp_path):
        path = tmp_path / "a.jpg"
        path.write_bytes(b"content")

        first = DuplicateDetector()
        first.digest(path, 7)

        assert DuplicateDetector().cache_size == 0
