"""
SideBySide command line.

Combine pairs of portrait photos into single landscape images sized for a
digital photo frame, so the frame does not have to pillarbox them.

Usage:
    python side_by_side.py <input_dir>... -o <output_dir> -d <WxH> [options]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from SBS_Libs import __version__
from SBS_Libs.CompositeLib.frame_config import FrameConfig, parse_dimensions
from SBS_Libs.ImageInfoLib.file_collector import NoImagesFoundError
from SBS_Libs.RunLib.logging_setup import configure_logging, default_log_dir
from SBS_Libs.RunLib.run_config import RunConfig
from SBS_Libs.RunLib.runner import run

logger = logging.getLogger("side_by_side")


def _dimensions(text: str):
    try:
        return parse_dimensions(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid value '{text}', expected a whole number")
    if value < 0:
        raise argparse.ArgumentTypeError(f"value must be 0 or more, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="side-by-side",
        description=(
            "Combine two portrait photos into a single landscape image, useful for "
            "digital photo frames that display vertical images awkwardly."
        ),
    )
    parser.add_argument("input_dirs", nargs="*", type=Path,
                        help="Source directories containing portrait JPEG images")
    parser.add_argument("-o", "--output", required=True, type=Path,
                        help="Destination directory (created if missing)")
    parser.add_argument("-d", "--dimensions", required=True, type=_dimensions,
                        help="Frame resolution, e.g. 1024x600")

    inputs = parser.add_argument_group("input control")
    inputs.add_argument("-r", "--recursive", action="store_true",
                        help="Search input directories recursively")
    inputs.add_argument("-f", "--filelist", type=Path,
                        help="File listing image paths, one per line")

    outputs = parser.add_argument_group("output control")
    outputs.add_argument("-g", "--gap", type=_non_negative_int, default=0,
                         help="Width of the black bar between the two images")
    outputs.add_argument("-w", "--write", action="store_true",
                         help="Overwrite composites that already exist")
    outputs.add_argument("-c", "--clean", action="store_true",
                         help="Delete existing sideby-*.jpg files before processing")
    outputs.add_argument("-m", "--mirror", action="store_true",
                         help="Delete sideby-*.jpg files not produced by this run")
    outputs.add_argument("-s", "--shuffle", action="store_true",
                         help="Pair images randomly instead of by date taken")

    other = parser.add_argument_group("other")
    other.add_argument("-v", "--verbose", action="store_true",
                       help="Show diagnostic messages")
    other.add_argument("--log-dir", type=Path, default=None,
                       help="Directory for log files (default: per-user app data)")
    other.add_argument("--no-log-file", action="store_true",
                       help="Only log to the console")
    other.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def config_from_args(parser: argparse.ArgumentParser, args: argparse.Namespace) -> RunConfig:
    """
    Build a RunConfig from parsed arguments.

    Invalid combinations exit through ``parser.error``.
    """
    if args.filelist is not None and not args.filelist.is_file():
        parser.error(f"File list '{args.filelist}' does not exist.")

    for directory in args.input_dirs:
        if not directory.is_dir():
            parser.error(f"Input directory '{directory}' does not exist.")

    width, height = args.dimensions
    try:
        frame = FrameConfig(width, height, middle_bar_width=args.gap)
        return RunConfig(
            frame=frame,
            output_dir=args.output,
            input_dirs=tuple(args.input_dirs),
            file_list=args.filelist,
            overwrite_existing=args.write,
            delete_existing=args.clean,
            randomise_sorting=args.shuffle,
            recursive_search=args.recursive,
            mirror_mode=args.mirror,
            verbose=args.verbose,
        )
    except ValueError as e:
        parser.error(str(e))


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = config_from_args(parser, args)

    log_dir = None if args.no_log_file else (args.log_dir or default_log_dir())
    configure_logging(verbose=config.verbose, log_dir=log_dir)

    try:
        run(config)
    except NoImagesFoundError:
        return 1
    except OSError as e:
        logger.error(f"Fatal: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
