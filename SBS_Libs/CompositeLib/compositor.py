"""
Side-by-side compositor for SideBySide.

Combines two portrait images into one landscape canvas of exactly the frame
size. Each image is scaled to the frame height, centred on a black half-width
panel, and the two panels are placed next to each other. An optional black
separator bar is then drawn over the middle of the canvas, clipping a strip
of both images rather than widening the canvas.

Example:
    >>> frame = FrameConfig(frame_width=1000, frame_height=600, middle_bar_width=10)
    >>> compositor = Compositor(frame)
    >>> compositor.composite(record_a, record_b, Path("out/sideby-abc.jpg"))
    True

Classes:
    Compositor: Builds and writes composite images

Functions:
    set_file_dates: Stamp a file's timestamps with a given date
"""

import logging
import os
from contextlib import ExitStack
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from SBS_Libs.constants import OUTPUT_JPEG_QUALITY
from SBS_Libs.CompositeLib.frame_config import FrameConfig
from SBS_Libs.CompositeLib.imaging_backend import IMAGE_ERRORS, ImagingBackend, get_default_backend
from SBS_Libs.ImageInfoLib.image_models import ImageRecord

logger = logging.getLogger(__name__)


def set_file_dates(path: Path, when: datetime) -> bool:
    """
    Set a file's access and modification times to ``when``.

    The creation time is not changed: ``os.utime`` has no portable way to set
    it, so on platforms that record one it stays at the write time.

    Returns:
        True on success, False if the date cannot be represented as a
        timestamp or the file's times could not be changed
    """
    try:
        timestamp = when.timestamp()
        os.utime(path, (timestamp, timestamp))
        return True
    except (OSError, OverflowError, ValueError) as e:
        logger.warning(f"Failed to set dates on {Path(path).name}: {e}")
        return False


class Compositor:
    """Builds a frame-sized landscape image from two portrait images.

    Attributes:
        frame: Target frame dimensions and separator width
        backend: Imaging capabilities used for decode, resize, draw and encode
        stamp_dates: Set output timestamps to the earlier source date
        quality: JPEG quality for the written file
    """

    def __init__(
        self,
        frame: FrameConfig,
        backend: Optional[ImagingBackend] = None,
        stamp_dates: bool = True,
        quality: int = OUTPUT_JPEG_QUALITY,
    ):
        self.frame = frame
        self.backend = backend if backend is not None else get_default_backend()
        self.stamp_dates = stamp_dates
        self.quality = quality

    def _track(self, image: Any, resources: ExitStack) -> Any:
        resources.callback(self.backend.release, image)
        return image

    def _padded_panel(self, resized: Any, resources: ExitStack) -> Any:
        """Centre a resized image on a black half-width panel."""
        half_width = self.frame.half_width
        panel = self._track(self.backend.new_canvas(half_width, self.frame.frame_height), resources)
        image_width, _ = self.backend.size_of(resized)
        self.backend.draw(panel, resized, (half_width - image_width) // 2, 0)
        return panel

    def _load(self, record: ImageRecord, resources: ExitStack) -> Optional[Any]:
        try:
            image = self.backend.decode_oriented(record.full_path)
        except IMAGE_ERRORS as e:
            logger.debug(f"Failed to load image: {record.file_name} ({e})")
            return None
        return self._track(image, resources)

    def render(self, image_a: ImageRecord, image_b: ImageRecord, resources: ExitStack) -> Optional[Any]:
        """
        Build the composite canvas in memory.

        Every intermediate bitmap is registered with ``resources`` so it is
        released when the caller's ExitStack closes.

        Returns:
            The composite canvas, or None if either source failed to decode
        """
        original_a = self._load(image_a, resources)
        if original_a is None:
            return None
        original_b = self._load(image_b, resources)
        if original_b is None:
            return None

        height = self.frame.frame_height
        resized_a = self._track(self.backend.resize_to_height(original_a, height), resources)
        resized_b = self._track(self.backend.resize_to_height(original_b, height), resources)

        panel_a = self._padded_panel(resized_a, resources)
        panel_b = self._padded_panel(resized_b, resources)

        output = self._track(self.backend.new_canvas(self.frame.frame_width, height), resources)
        self.backend.draw(output, panel_a, 0, 0)
        self.backend.draw(output, panel_b, self.frame.half_width, 0)

        bar_width = self.frame.middle_bar_width
        if bar_width > 0:
            x_offset = (self.frame.frame_width - bar_width) // 2
            self.backend.fill_rect(output, x_offset, 0, bar_width, height)

        return output

    def composite(self, image_a: ImageRecord, image_b: ImageRecord, output_path: Path) -> bool:
        """
        Generate the composite for a pair and write it to ``output_path``.

        Never raises for imaging or file errors; they are logged and reported
        as a failed result so the run can carry on. A failed write may leave a
        partial file behind.

        Args:
            image_a: Left image
            image_b: Right image
            output_path: Destination JPEG path

        Returns:
            True if the composite was written
        """
        output_path = Path(output_path)
        logger.debug(
            f"Generating landscape for {image_a.file_name} and {image_b.file_name} => {output_path}"
        )

        with ExitStack() as resources:
            try:
                output = self.render(image_a, image_b, resources)
                if output is None:
                    return False
                self.backend.encode_jpeg(output, output_path, self.quality)
            except IMAGE_ERRORS as e:
                logger.error(f"Failed to generate {output_path.name}: {e}")
                return False

        logger.info(f"Landscape image created: {output_path.name}")

        if self.stamp_dates:
            creation_date = min(image_a.creation_date, image_b.creation_date)
            logger.debug(
                f"Setting access and last modified dates to {creation_date} for {output_path.name}"
            )
            set_file_dates(output_path, creation_date)

        return True
