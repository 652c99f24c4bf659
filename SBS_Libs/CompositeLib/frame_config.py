"""
Frame geometry for SideBySide.

Classes:
    FrameConfig: Target photo frame dimensions and separator bar width

Functions:
    parse_dimensions: Parse a "WxH" or "W,H" dimension string
"""

import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple

DIMENSION_PATTERN = re.compile(r"^(\d+)[x,](\d+)$")


def parse_dimensions(text: str) -> Tuple[int, int]:
    """
    Parse frame dimensions.

    Args:
        text: Dimensions such as "1024x600" or "1024,600"

    Returns:
        (width, height)

    Raises:
        ValueError: If the text is not in either format
    """
    match = DIMENSION_PATTERN.match(str(text).strip().lower())
    if not match:
        raise ValueError(f"Invalid dimensions '{text}', expected WIDTHxHEIGHT")
    return int(match.group(1)), int(match.group(2))


@dataclass(frozen=True)
class FrameConfig:
    """Geometry of the target display.

    Attributes:
        frame_width: Output width in pixels (must exceed frame_height)
        frame_height: Output height in pixels
        middle_bar_width: Width of the black separator drawn over the centre
    """
    frame_width: int
    frame_height: int
    middle_bar_width: int = 0

    def __post_init__(self):
        """Validate frame geometry."""
        if self.frame_width <= 0 or self.frame_height <= 0:
            raise ValueError(
                f"Frame dimensions must be positive, got {self.frame_width}x{self.frame_height}"
            )

        if self.frame_width <= self.frame_height:
            raise ValueError(
                f"Photo frame width ({self.frame_width}) must be greater than "
                f"height ({self.frame_height})."
            )

        if not (0 <= self.middle_bar_width <= self.frame_width):
            raise ValueError(
                f"Middle bar width ({self.middle_bar_width}) must be between 0 and "
                f"frame width ({self.frame_width})."
            )

    @property
    def half_width(self) -> int:
        """Width of each image panel (integer division)."""
        return self.frame_width // 2

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FrameConfig":
        """Create from dictionary, ignoring unknown keys."""
        filtered = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**filtered)
