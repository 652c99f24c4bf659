"""
Output filename generation for SideBySide.

Composite names are derived from the two source filenames so that re-running
over the same photos produces the same outputs.
"""

import base64
import hashlib

from SBS_Libs.constants import (
    FILENAME_SEPARATOR,
    OUTPUT_FILE_PREFIX,
    OUTPUT_FILE_SUFFIX,
    OUTPUT_HASH_LENGTH,
)


def generate_filename(name1: str, name2: str) -> str:
    """
    Generate the composite filename for a pair of source files.

    The name is ``sideby-`` followed by the first 16 characters of the
    unpadded URL-safe base64 SHA-256 of ``"name1|name2"``, then ``.jpg``.
    The hash input is order-sensitive.

    Args:
        name1: Filename of the left image
        name2: Filename of the right image

    Returns:
        Output filename (no directory)

    Raises:
        ValueError: If either name is empty or the names are equal ignoring case

    Example:
        >>> generate_filename("a.jpg", "b.jpg")  # doctest: +SKIP
        'sideby-XXXXXXXXXXXXXXXX.jpg'
    """
    if not name1 or not name2:
        raise ValueError("Both file names must be provided.")
    if name1.lower() == name2.lower():
        raise ValueError("File names must be different.")

    digest = hashlib.sha256(f"{name1}{FILENAME_SEPARATOR}{name2}".encode("utf-8")).digest()
    encoded = base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")

    return f"{OUTPUT_FILE_PREFIX}{encoded[:OUTPUT_HASH_LENGTH]}{OUTPUT_FILE_SUFFIX}"


def is_generated_filename(name: str) -> bool:
    """Check if a filename matches the composite naming pattern."""
    return name.startswith(OUTPUT_FILE_PREFIX) and name.endswith(OUTPUT_FILE_SUFFIX)
