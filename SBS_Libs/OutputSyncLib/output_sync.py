"""
Destination directory synchronization for SideBySide.

Only files named ``sideby-*.jpg`` directly inside the destination directory
are ever deleted; anything else is left alone.

Policies:
- Clean: delete every generated file before pairing starts
- Overwrite: decide whether an existing composite is regenerated or kept
- Mirror: after the run, delete generated files this run did not produce or keep

Classes:
    ProcessedFileSet: Output paths written or kept during the current run
    OutputSync: Applies the clean, overwrite and mirror policies

Functions:
    find_generated_files: List composite files in a directory
    delete_file: Delete one file, reporting success
"""

import logging
import os
from pathlib import Path
from typing import Iterator, List, Set, Union

from SBS_Libs.CompositeLib.output_namer import is_generated_filename

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _normalize(path: PathLike) -> str:
    return os.path.normcase(os.path.abspath(path))


class ProcessedFileSet:
    """
    Set of output paths produced or kept during this run.

    Paths are normalized so the same file compares equal however it was
    spelled.
    """

    def __init__(self):
        self._paths: Set[str] = set()

    def add(self, path: PathLike) -> None:
        self._paths.add(_normalize(path))

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return _normalize(path) in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._paths))


def find_generated_files(directory: PathLike) -> List[Path]:
    """
    List composite files directly inside ``directory``.

    Args:
        directory: Destination directory

    Returns:
        Sorted list of files matching ``sideby-*.jpg`` (empty if the
        directory does not exist)
    """
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(
        entry for entry in directory.iterdir()
        if entry.is_file() and is_generated_filename(entry.name)
    )


def delete_file(path: Path) -> bool:
    """
    Delete a file.

    Returns:
        True if deleted, False if the delete failed (the failure is logged)
    """
    try:
        path.unlink()
        return True
    except OSError as e:
        logger.warning(f"Failed to delete {path}: {e}")
        return False


class OutputSync:
    """Applies destination housekeeping for one run.

    Attributes:
        output_dir: Destination directory for composites
        processed: Paths written or kept this run
        overwrite_existing: Regenerate composites that already exist
    """

    def __init__(
        self,
        output_dir: PathLike,
        processed: ProcessedFileSet,
        overwrite_existing: bool = False,
    ):
        self.output_dir = Path(output_dir)
        self.processed = processed
        self.overwrite_existing = overwrite_existing

    def output_path_for(self, filename: str) -> Path:
        return self.output_dir / filename

    def clean(self) -> int:
        """
        Delete every generated file in the destination before a run.

        Individual delete failures are logged and do not stop the clean.

        Returns:
            Number of files deleted
        """
        logger.info(f"Cleaning existing files in: {self.output_dir}")

        if not self.output_dir.is_dir():
            logger.debug(f"Destination folder does not exist: {self.output_dir}")
            return 0

        existing = find_generated_files(self.output_dir)
        if not existing:
            logger.debug(f"No existing files to delete in: {self.output_dir}")
            return 0

        deleted = 0
        for path in existing:
            if delete_file(path):
                deleted += 1
                logger.debug(f"Deleted existing file: {path.name}")
        return deleted

    def should_generate(self, output_path: Path) -> bool:
        """
        Apply the overwrite policy to a computed output path.

        An existing composite is kept unless overwriting was requested; a kept
        file is still recorded as processed so mirroring leaves it alone.

        Returns:
            True if the composite should be (re)generated
        """
        if not output_path.exists():
            return True

        if not self.overwrite_existing:
            logger.info(f"Skipping existing image: {output_path.name}")
            self.processed.add(output_path)
            return False

        logger.debug(f"Overwriting existing image: {output_path.name}")
        return True

    def record(self, output_path: Path) -> None:
        """Mark an output path as produced by this run."""
        self.processed.add(output_path)

    def mirror(self) -> int:
        """
        Delete generated files that this run neither produced nor kept.

        Returns:
            Number of stale files deleted
        """
        deleted = 0
        for path in find_generated_files(self.output_dir):
            if path in self.processed:
                continue
            logger.debug(f"Mirror mode: deleting stale file: {path.name}")
            if delete_file(path):
                deleted += 1

        if deleted > 0:
            noun = "stale file" if deleted == 1 else "stale files"
            logger.info(f"Mirror mode: deleted {deleted} {noun} from destination folder.")
        return deleted
