"""
Run configuration and run-scoped state for SideBySide.

Classes:
    RunConfig: Immutable settings for one run
    RunContext: Mutable state owned by a single run
"""

import os
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from SBS_Libs.constants import FIELD_FRAME
from SBS_Libs.CompositeLib.frame_config import FrameConfig
from SBS_Libs.ImageInfoLib.duplicate_detector import DuplicateDetector
from SBS_Libs.OutputSyncLib.output_sync import ProcessedFileSet


def _same_directory(a: Path, b: Path) -> bool:
    return os.path.normcase(os.path.abspath(a)).lower() == os.path.normcase(os.path.abspath(b)).lower()


@dataclass(frozen=True)
class RunConfig:
    """Configuration for a SideBySide run.

    Attributes:
        frame: Frame geometry and separator width
        output_dir: Destination directory for composites
        input_dirs: Directories to scan for JPEG files
        file_list: Optional file listing one image path per line
        overwrite_existing: Regenerate composites that already exist
        delete_existing: Delete all composites before the run (clean)
        randomise_sorting: Shuffle instead of sorting by date
        recursive_search: Scan input directories recursively
        mirror_mode: Delete composites not produced or kept this run
        verbose: Show diagnostic messages on the console
    """
    frame: FrameConfig
    output_dir: Path
    input_dirs: Tuple[Path, ...] = ()
    file_list: Optional[Path] = None
    overwrite_existing: bool = False
    delete_existing: bool = False
    randomise_sorting: bool = False
    recursive_search: bool = False
    mirror_mode: bool = False
    verbose: bool = False

    def __post_init__(self):
        """Normalize paths and validate inputs."""
        object.__setattr__(self, "output_dir", Path(self.output_dir))
        object.__setattr__(self, "input_dirs", tuple(Path(d) for d in self.input_dirs))
        if self.file_list is not None:
            object.__setattr__(self, "file_list", Path(self.file_list))

        if not self.input_dirs and self.file_list is None:
            raise ValueError("At least one input directory or a file list must be specified.")

        for directory in self.input_dirs:
            if _same_directory(directory, self.output_dir):
                raise ValueError("Source and destination folders cannot be the same.")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary (paths as strings)."""
        return {
            FIELD_FRAME: self.frame.to_dict(),
            "output_dir": str(self.output_dir),
            "input_dirs": [str(d) for d in self.input_dirs],
            "file_list": str(self.file_list) if self.file_list is not None else None,
            "overwrite_existing": self.overwrite_existing,
            "delete_existing": self.delete_existing,
            "randomise_sorting": self.randomise_sorting,
            "recursive_search": self.recursive_search,
            "mirror_mode": self.mirror_mode,
            "verbose": self.verbose,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RunConfig":
        """Create from dictionary, ignoring unknown keys."""
        filtered = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        frame = filtered.get(FIELD_FRAME)
        if isinstance(frame, dict):
            filtered[FIELD_FRAME] = FrameConfig.from_dict(frame)
        return cls(**filtered)


@dataclass
class RunContext:
    """State that lives for exactly one run.

    Attributes:
        detector: Duplicate detector holding the run's digest cache
        processed: Output paths produced or kept this run
        rng: Random source used when shuffling
    """
    detector: DuplicateDetector = field(default_factory=DuplicateDetector)
    processed: ProcessedFileSet = field(default_factory=ProcessedFileSet)
    rng: random.Random = field(default_factory=random.Random)
