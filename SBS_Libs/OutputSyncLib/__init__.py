"""
OutputSyncLib - Destination directory housekeeping

Clean, overwrite and mirror policies for generated sideby-*.jpg files.
"""

from SBS_Libs.OutputSyncLib.output_sync import (
    ProcessedFileSet,
    OutputSync,
    find_generated_files,
    delete_file,
)

__all__ = [
    "ProcessedFileSet",
    "OutputSync",
    "find_generated_files",
    "delete_file",
]
