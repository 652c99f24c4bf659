"""
Content-based duplicate detection for SideBySide.

Two files are considered equal when they have the same length and the same
SHA-256 digest. Digests are cached per (absolute path, length) for the
lifetime of the detector, which is owned by a single run.
"""

import hashlib
import logging
import os
from pathlib import Path
from typing import Dict, Tuple, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
DigestKey = Tuple[str, int]

_READ_CHUNK_SIZE = 1024 * 1024


class DuplicateDetector:
    """
    Compares files by content.

    Example:
        >>> detector = DuplicateDetector()
        >>> detector.files_are_equal("a.jpg", "copy_of_a.jpg")
        True
    """

    def __init__(self):
        self._digest_cache: Dict[DigestKey, bytes] = {}

    @property
    def cache_size(self) -> int:
        return len(self._digest_cache)

    def digest(self, path: PathLike, length: int) -> bytes:
        """
        Get the SHA-256 digest of a file, computing it on first request.

        Args:
            path: File to hash
            length: File length in bytes (part of the cache key)

        Returns:
            Digest bytes

        Raises:
            OSError: If the file cannot be read
        """
        key = (os.path.abspath(path), length)
        cached = self._digest_cache.get(key)
        if cached is not None:
            return cached

        sha = hashlib.sha256()
        with open(path, "rb") as handle:
            for chunk in iter(lambda: handle.read(_READ_CHUNK_SIZE), b""):
                sha.update(chunk)

        digest = sha.digest()
        self._digest_cache[key] = digest
        return digest

    def files_are_equal(self, path_a: PathLike, path_b: PathLike) -> bool:
        """
        Check whether two files have identical content.

        Never raises: any I/O failure is logged and reported as "not equal".

        Args:
            path_a: First file
            path_b: Second file

        Returns:
            True if both exist, have the same length and the same digest
        """
        try:
            if not os.path.isfile(path_a) or not os.path.isfile(path_b):
                return False

            length_a = os.path.getsize(path_a)
            length_b = os.path.getsize(path_b)
            if length_a != length_b:
                return False

            return self.digest(path_a, length_a) == self.digest(path_b, length_b)
        except OSError as e:
            logger.debug(f"Error comparing {path_a} and {path_b}: {e}")
            return False
