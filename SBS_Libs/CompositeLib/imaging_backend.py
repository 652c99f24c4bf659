"""
Imaging backend for SideBySide.

The compositor and metadata collector only talk to images through the narrow
capability set defined by ``ImagingBackend``: probe, decode with orientation,
resize, draw onto a canvas, fill a rectangle and encode as JPEG. The concrete
implementation below uses Pillow; another backend can be dropped in without
touching the composition logic.

Classes:
    ImageInfo: Raw dimensions and EXIF orientation of an encoded image
    ImagingBackend: Protocol describing the required capabilities
    PillowBackend: Pillow implementation of ImagingBackend

Constants:
    IMAGE_ERRORS: Exceptions treated as a per-file imaging failure

Functions:
    get_default_backend: Get the shared Pillow backend instance
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Protocol, Tuple

from PIL import Image

from SBS_Libs.constants import (
    CANVAS_BACKGROUND,
    CANVAS_MODE,
    EXIF_DATETIME_FORMAT,
    EXIF_IFD_POINTER,
    EXIF_TAG_DATETIME_ORIGINAL,
    EXIF_TAG_ORIENTATION,
    ORIENTATION_ROTATIONS,
    ORIENTATION_TOP_LEFT,
    OUTPUT_FORMAT,
    SEPARATOR_COLOR,
)

# Failures from the imaging library that only affect the file being read
IMAGE_ERRORS = (OSError, ValueError, SyntaxError, Image.DecompressionBombError)

# Pillow's ROTATE_* transposes turn counter-clockwise
_CLOCKWISE_TRANSPOSE = {
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}


@dataclass(frozen=True)
class ImageInfo:
    """Encoded (not orientation-corrected) image properties."""
    width: int
    height: int
    orientation: int = ORIENTATION_TOP_LEFT


class ImagingBackend(Protocol):
    """Capabilities the composition pipeline needs from an imaging library."""

    def probe(self, path: Path) -> ImageInfo: ...

    def read_date_taken(self, path: Path) -> Optional[datetime]: ...

    def decode_oriented(self, path: Path) -> Any: ...

    def resize_to_height(self, image: Any, height: int) -> Any: ...

    def new_canvas(self, width: int, height: int) -> Any: ...

    def draw(self, canvas: Any, image: Any, x: int, y: int) -> None: ...

    def fill_rect(self, canvas: Any, x: int, y: int, width: int, height: int) -> None: ...

    def encode_jpeg(self, canvas: Any, path: Path, quality: int) -> None: ...

    def size_of(self, image: Any) -> Tuple[int, int]: ...

    def release(self, image: Any) -> None: ...


def _read_orientation(image: Any) -> int:
    """Read the EXIF orientation of an open Pillow image (1 if absent)."""
    try:
        value = image.getexif().get(EXIF_TAG_ORIENTATION, ORIENTATION_TOP_LEFT)
        return int(value)
    except (TypeError, ValueError):
        return ORIENTATION_TOP_LEFT


def resized_width(width: int, height: int, target_height: int) -> int:
    """Width that keeps the aspect ratio when scaling ``height`` to ``target_height``."""
    return max(1, int(width * target_height / height + 0.5))


class PillowBackend:
    """ImagingBackend built on Pillow.

    All methods raise ``OSError`` (Pillow's ``UnidentifiedImageError`` is a
    subclass) or ``ValueError`` on unreadable input; callers decide how to
    recover.
    """

    def probe(self, path: Path) -> ImageInfo:
        """
        Read dimensions and orientation without decoding pixel data.

        Args:
            path: Path to the image file

        Returns:
            ImageInfo with the encoded width, height and EXIF orientation
        """
        with Image.open(path) as img:
            width, height = img.size
            return ImageInfo(width=width, height=height, orientation=_read_orientation(img))

    def read_date_taken(self, path: Path) -> Optional[datetime]:
        """
        Read the EXIF DateTimeOriginal tag.

        Returns:
            The parsed date, or None when the tag is absent

        Raises:
            ValueError: If the tag is present but malformed
            OSError: If the file or its metadata cannot be read
        """
        with Image.open(path) as img:
            exif_ifd = img.getexif().get_ifd(EXIF_IFD_POINTER)
            value = exif_ifd.get(EXIF_TAG_DATETIME_ORIGINAL)

        if value is None:
            return None
        if isinstance(value, bytes):
            value = value.decode("ascii", errors="replace")
        text = str(value).replace("\x00", "").strip()
        if not text:
            return None
        return datetime.strptime(text, EXIF_DATETIME_FORMAT)

    def decode_oriented(self, path: Path) -> Any:
        """
        Decode an image and rotate it upright according to its EXIF origin.

        Only the pure rotations (180, 90 CW and 270 CW) are applied; mirrored
        origins are left as stored.

        Returns:
            A new RGB Pillow image detached from the source file
        """
        with Image.open(path) as img:
            orientation = _read_orientation(img)
            img.load()
            decoded = img.convert(CANVAS_MODE)

        degrees = ORIENTATION_ROTATIONS.get(orientation)
        if degrees is None:
            return decoded

        rotated = decoded.transpose(_CLOCKWISE_TRANSPOSE[degrees])
        decoded.close()
        return rotated

    def resize_to_height(self, image: Any, height: int) -> Any:
        width = resized_width(image.width, image.height, height)
        return image.resize((width, height), Image.Resampling.LANCZOS)

    def new_canvas(self, width: int, height: int) -> Any:
        return Image.new(CANVAS_MODE, (width, height), CANVAS_BACKGROUND)

    def draw(self, canvas: Any, image: Any, x: int, y: int) -> None:
        # Pillow clips anything outside the canvas, including negative offsets
        canvas.paste(image, (x, y))

    def fill_rect(self, canvas: Any, x: int, y: int, width: int, height: int) -> None:
        canvas.paste(SEPARATOR_COLOR, (x, y, x + width, y + height))

    def encode_jpeg(self, canvas: Any, path: Path, quality: int) -> None:
        canvas.save(path, format=OUTPUT_FORMAT, quality=quality)

    def size_of(self, image: Any) -> Tuple[int, int]:
        return image.size

    def release(self, image: Any) -> None:
        image.close()


_default_backend: Optional[PillowBackend] = None


def get_default_backend() -> PillowBackend:
    """
    Get the shared Pillow backend (singleton).

    Returns:
        PillowBackend instance
    """
    global _default_backend
    if _default_backend is None:
        _default_backend = PillowBackend()
    return _default_backend
