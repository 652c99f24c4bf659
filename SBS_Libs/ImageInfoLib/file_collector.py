"""
Candidate file discovery for SideBySide.

Gathers JPEG paths from input directories and/or a plain-text file list.

Classes:
    NoImagesFoundError: Raised when no candidate files were found

Functions:
    is_supported_file: Check whether a path has a JPEG extension
    collect_from_directory: Find JPEG files in a directory
    collect_from_file_list: Read JPEG paths from a file list
    collect_candidates: Combine directory and file-list results
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from SBS_Libs.constants import SUPPORTED_INPUT_EXTENSIONS

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class NoImagesFoundError(RuntimeError):
    """No candidate image files were found in any input source."""


def is_supported_file(path: PathLike) -> bool:
    """
    Check if a path names a JPEG file (case-insensitive extension match).

    Args:
        path: File path or name

    Returns:
        True if the name ends in .jpg or .jpeg
    """
    return str(path).lower().endswith(SUPPORTED_INPUT_EXTENSIONS)


def collect_from_directory(directory: PathLike, recursive: bool = False) -> List[Path]:
    """
    Find all JPEG files in a directory.

    Args:
        directory: Directory to scan
        recursive: Also scan sub-directories

    Returns:
        Sorted list of matching file paths
    """
    directory = Path(directory)
    logger.info(
        f"Looking for images in: {directory}{' (and sub-directories)' if recursive else ''}"
    )

    pattern = "**/*" if recursive else "*"
    return sorted(
        path for path in directory.glob(pattern)
        if path.is_file() and is_supported_file(path.name)
    )


def collect_from_file_list(file_list: PathLike) -> List[Path]:
    """
    Read candidate paths from a file list.

    The file holds one path per line. Lines are stripped, blank and non-JPEG
    lines are ignored, and paths that do not exist are logged and skipped.

    Args:
        file_list: Path to the text file

    Returns:
        List of existing JPEG paths in file order
    """
    file_list = Path(file_list)
    if not file_list.is_file():
        logger.info(f"File list '{file_list}' does not exist.")
        return []

    logger.info(f"Looking for images in file: {file_list}")

    found: List[Path] = []
    with open(file_list, "r", encoding="utf-8") as handle:
        for line in handle:
            entry = line.strip()
            if not entry or not is_supported_file(entry):
                continue
            path = Path(entry)
            if path.is_file():
                found.append(path)
            else:
                logger.debug(f"Warning: '{entry}' listed in file list does not exist.")
    return found


def collect_candidates(
    input_dirs: Iterable[PathLike] = (),
    file_list: Optional[PathLike] = None,
    recursive: bool = False,
) -> List[Path]:
    """
    Collect candidate JPEG paths from directories and an optional file list.

    Args:
        input_dirs: Directories to scan
        file_list: Optional file containing one image path per line
        recursive: Scan directories recursively

    Returns:
        Combined list of candidate paths (directories first, then file list)

    Raises:
        NoImagesFoundError: If nothing was found
    """
    candidates: List[Path] = []
    for directory in input_dirs:
        candidates.extend(collect_from_directory(directory, recursive=recursive))

    if file_list:
        candidates.extend(collect_from_file_list(file_list))

    if not candidates:
        logger.info(
            "No image files found to process. Please check your input directories or file list."
        )
        raise NoImagesFoundError("No image files found to process")

    return candidates
