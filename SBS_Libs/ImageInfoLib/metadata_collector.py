"""
Metadata extraction for SideBySide.

Turns candidate file paths into ImageRecords, keeping only portrait images.
Dimensions are corrected for EXIF orientation before the portrait check, and
the capture date comes from EXIF DateTimeOriginal with a file system fallback.

Classes:
    MetadataCollector: Builds ImageRecords from candidate paths

Functions:
    corrected_dimensions: Apply the EXIF width/height swap
    file_system_date: Earlier of a file's creation and modification times
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from SBS_Libs.constants import SWAPPED_ORIENTATIONS
from SBS_Libs.CompositeLib.imaging_backend import IMAGE_ERRORS, ImagingBackend, get_default_backend
from SBS_Libs.ImageInfoLib.image_models import ImageRecord

logger = logging.getLogger(__name__)


def corrected_dimensions(width: int, height: int, orientation: int) -> Tuple[int, int]:
    """
    Get display dimensions for an encoded image.

    Args:
        width: Encoded width
        height: Encoded height
        orientation: EXIF orientation value

    Returns:
        (width, height), swapped for 90 and 270 degree origins
    """
    if orientation in SWAPPED_ORIENTATIONS:
        return height, width
    return width, height


def file_system_date(path: Path) -> datetime:
    """
    Get the earlier of the file's creation time and last-modified time.

    Uses ``st_birthtime`` where the platform provides it and ``st_ctime``
    otherwise.
    """
    stat = os.stat(path)
    created = datetime.fromtimestamp(getattr(stat, "st_birthtime", stat.st_ctime))
    modified = datetime.fromtimestamp(stat.st_mtime)

    if created < modified:
        logger.debug(f"Falling back to creation date: {created}")
        return created
    logger.debug(f"Falling back to modified date: {modified}")
    return modified


class MetadataCollector:
    """Builds the working set of portrait ImageRecords."""

    def __init__(self, backend: Optional[ImagingBackend] = None):
        self.backend = backend if backend is not None else get_default_backend()

    def resolve_creation_date(self, path: Path) -> datetime:
        """
        Resolve when a photo was taken.

        Uses EXIF DateTimeOriginal when present and parseable, otherwise the
        file system date. Never raises for metadata problems.
        """
        try:
            taken = self.backend.read_date_taken(path)
            if taken is not None:
                return taken
            logger.debug(f"No DateTimeOriginal EXIF tag found for {path}")
        except IMAGE_ERRORS as e:
            logger.debug(f"Failed to read EXIF data from {path}: {e}")

        return file_system_date(path)

    def read_record(self, path: Path) -> Optional[ImageRecord]:
        """
        Build an ImageRecord for one file.

        Args:
            path: Candidate image path

        Returns:
            ImageRecord, or None if the file is unreadable, empty or not portrait
        """
        path = Path(path)
        try:
            info = self.backend.probe(path)
        except IMAGE_ERRORS as e:
            logger.debug(f"Skipping {path} as it could not be opened: {e}")
            return None

        if info.width == 0 or info.height == 0:
            logger.debug(f"Skipping {path} as it is not a valid image file.")
            return None

        width, height = corrected_dimensions(info.width, info.height, info.orientation)
        if width >= height:
            logger.debug(f"Skipping {path} as it is not portrait ({width}x{height}).")
            return None

        record = ImageRecord(
            full_path=path,
            file_name=path.name,
            width=width,
            height=height,
            creation_date=self.resolve_creation_date(path),
        )
        logger.debug(f"Added {path} ({info.width}x{info.height})")
        return record

    def collect(self, paths: Iterable[Path]) -> List[ImageRecord]:
        """
        Examine candidate files and keep the portrait ones.

        Args:
            paths: Candidate file paths

        Returns:
            List of ImageRecords in candidate order
        """
        logger.info("Examining images and identifying candidates for processing...")

        records = []
        for path in paths:
            record = self.read_record(path)
            if record is not None:
                records.append(record)

        logger.info(f"Found {len(records)} suitable portrait images.")
        return records
