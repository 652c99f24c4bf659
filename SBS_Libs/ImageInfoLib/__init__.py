"""
ImageInfoLib - Source image discovery and inspection

This module finds candidate JPEG files, extracts orientation-corrected
dimensions and capture dates, and detects byte-identical duplicates.
"""

from SBS_Libs.ImageInfoLib.image_models import ImageRecord
from SBS_Libs.ImageInfoLib.file_collector import (
    NoImagesFoundError,
    is_supported_file,
    collect_from_directory,
    collect_from_file_list,
    collect_candidates,
)
from SBS_Libs.ImageInfoLib.duplicate_detector import DuplicateDetector
from SBS_Libs.ImageInfoLib.metadata_collector import (
    MetadataCollector,
    corrected_dimensions,
    file_system_date,
)

__all__ = [
    "ImageRecord",
    "NoImagesFoundError",
    "is_supported_file",
    "collect_from_directory",
    "collect_from_file_list",
    "collect_candidates",
    "DuplicateDetector",
    "MetadataCollector",
    "corrected_dimensions",
    "file_system_date",
]
