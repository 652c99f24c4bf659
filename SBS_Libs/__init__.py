"""
SBS_Libs - SideBySide Library Modules

This package combines pairs of portrait photographs into single landscape
images sized for a digital photo frame. It is organized into specialized
sub-packages:

- ImageInfoLib: Candidate discovery, metadata extraction and duplicate detection
- CompositeLib: Bitmap composition, imaging backend and output naming
- OutputSyncLib: Destination directory housekeeping (clean / mirror)
- RunLib: Configuration, pairing and whole-run orchestration
"""

__version__ = "1.4.0"
