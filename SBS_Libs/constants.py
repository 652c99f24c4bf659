"""
Fixed values shared by the SideBySide libraries.

Output naming and encoding, accepted input files, the EXIF tags and
orientation codes that are read, and the log file location and retention.
"""

# Output file naming
OUTPUT_FILE_PREFIX = "sideby-"
OUTPUT_FILE_SUFFIX = ".jpg"
OUTPUT_HASH_LENGTH = 16
FILENAME_SEPARATOR = "|"

# Output encoding
OUTPUT_FORMAT = "JPEG"
OUTPUT_JPEG_QUALITY = 80
CANVAS_MODE = "RGB"
CANVAS_BACKGROUND = (0, 0, 0)
SEPARATOR_COLOR = (0, 0, 0)

# Supported input formats
SUPPORTED_INPUT_EXTENSIONS = (".jpg", ".jpeg")

# EXIF tag ids
EXIF_TAG_ORIENTATION = 0x0112
EXIF_TAG_DATETIME_ORIGINAL = 0x9003
EXIF_IFD_POINTER = 0x8769
EXIF_DATETIME_FORMAT = "%Y:%m:%d %H:%M:%S"

# EXIF orientation values
ORIENTATION_TOP_LEFT = 1       # Default, no rotation
ORIENTATION_BOTTOM_RIGHT = 3   # Rotated 180
ORIENTATION_RIGHT_TOP = 6      # Rotated 90 CW
ORIENTATION_LEFT_BOTTOM = 8    # Rotated 270 CW

# Orientations whose stored width/height are swapped relative to display
SWAPPED_ORIENTATIONS = {ORIENTATION_RIGHT_TOP, ORIENTATION_LEFT_BOTTOM}

# Clockwise rotation (degrees) needed to display an image upright
ORIENTATION_ROTATIONS = {
    ORIENTATION_BOTTOM_RIGHT: 180,
    ORIENTATION_RIGHT_TOP: 90,
    ORIENTATION_LEFT_BOTTOM: 270,
}

# Logging
LOG_DIR_NAME = "Logs"
APP_DATA_DIR_NAME = "SideBySide"
LOG_FILE_NAME = "sidebyside.log"
LOG_RETENTION_DAYS = 14
CONSOLE_LOG_FORMAT = "[%(asctime)s] %(message)s"
CONSOLE_DATE_FORMAT = "%H:%M:%S"
FILE_LOG_FORMAT = "[%(asctime)s] %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Configuration field names
FIELD_FRAME = "frame"
