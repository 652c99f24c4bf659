"""
Pytest configuration and shared fixtures for SideBySide tests.

This module provides shared test fixtures used across multiple test
modules, most importantly a factory that writes real JPEG files with
optional EXIF orientation and DateTimeOriginal tags.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

import pytest
from PIL import Image

from SBS_Libs.constants import (
    EXIF_DATETIME_FORMAT,
    EXIF_IFD_POINTER,
    EXIF_TAG_DATETIME_ORIGINAL,
    EXIF_TAG_ORIENTATION,
)
from SBS_Libs.ImageInfoLib.image_models import ImageRecord


def write_jpeg(
    path: Path,
    size: Tuple[int, int],
    color=(200, 40, 40),
    orientation: Optional[int] = None,
    date_taken: Optional[datetime] = None,
    raw_date: Optional[str] = None,
) -> Path:
    """
    Write a solid-colour JPEG.

    Args:
        path: Destination file
        size: Stored (width, height)
        color: RGB fill colour
        orientation: EXIF orientation value to embed
        date_taken: DateTimeOriginal to embed
        raw_date: Literal DateTimeOriginal text (for malformed values)

    Returns:
        The written path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    exif = Image.Exif()
    if orientation is not None:
        exif[EXIF_TAG_ORIENTATION] = orientation
    if date_taken is not None:
        raw_date = date_taken.strftime(EXIF_DATETIME_FORMAT)
    if raw_date is not None:
        exif[EXIF_IFD_POINTER] = {EXIF_TAG_DATETIME_ORIGINAL: raw_date}

    kwargs = {"format": "JPEG", "quality": 95}
    if len(exif):
        kwargs["exif"] = exif.tobytes()

    with Image.new("RGB", size, color) as img:
        img.save(path, **kwargs)
    return path


@pytest.fixture
def jpeg_factory():
    """Provide the write_jpeg helper."""
    return write_jpeg


@pytest.fixture
def make_record():
    """
    Build ImageRecords without touching the file system.

    Returns:
        Callable(name, day=1, directory=Path("/photos")) -> ImageRecord
    """
    def _make(name: str, day: int = 1, directory: Path = Path("/photos"),
              width: int = 800, height: int = 1200) -> ImageRecord:
        return ImageRecord(
            full_path=directory / name,
            file_name=name,
            width=width,
            height=height,
            creation_date=datetime(2013, 1, day),
        )
    return _make


@pytest.fixture
def source_dir(tmp_path):
    """Provide an empty input directory."""
    directory = tmp_path / "photos"
    directory.mkdir()
    return directory


@pytest.fixture
def output_dir(tmp_path):
    """Provide an empty destination directory."""
    directory = tmp_path / "frame"
    directory.mkdir()
    return directory


@pytest.fixture
def restore_root_logging():
    """Remove any handlers a test adds to the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
