"""
Image data models for SideBySide.

This module defines the core data structure describing a candidate photo.

Classes:
    ImageRecord: Immutable description of a portrait source image
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class ImageRecord:
    """A portrait photo accepted for pairing.

    Attributes:
        full_path: Path to the source file
        file_name: Base name of the source file
        width: Orientation-corrected width in pixels
        height: Orientation-corrected height in pixels
        creation_date: Date taken, or the file system fallback
    """
    full_path: Path
    file_name: str
    width: int
    height: int
    creation_date: datetime

    @property
    def is_portrait(self) -> bool:
        return self.width < self.height
