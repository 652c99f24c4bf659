"""
CompositeLib - Side-by-side image composition

This module holds the frame geometry, the imaging backend, output filename
generation and the compositor that assembles two portrait images into one
landscape image.
"""

from SBS_Libs.CompositeLib.frame_config import FrameConfig, parse_dimensions
from SBS_Libs.CompositeLib.imaging_backend import (
    IMAGE_ERRORS,
    ImageInfo,
    ImagingBackend,
    PillowBackend,
    get_default_backend,
    resized_width,
)
from SBS_Libs.CompositeLib.output_namer import generate_filename, is_generated_filename
from SBS_Libs.CompositeLib.compositor import Compositor, set_file_dates

__all__ = [
    "FrameConfig",
    "parse_dimensions",
    "IMAGE_ERRORS",
    "ImageInfo",
    "ImagingBackend",
    "PillowBackend",
    "get_default_backend",
    "resized_width",
    "generate_filename",
    "is_generated_filename",
    "Compositor",
    "set_file_dates",
]
