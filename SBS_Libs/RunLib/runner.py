"""
Whole-run orchestration for SideBySide.

A run collects candidate files, keeps the portrait ones, optionally cleans the
destination, pairs and composites the images, and optionally mirrors the
destination so only this run's composites remain.

Example:
    >>> config = RunConfig(
    ...     frame=FrameConfig(1024, 600, middle_bar_width=8),
    ...     output_dir=Path("frame"),
    ...     input_dirs=(Path("photos"),),
    ...     mirror_mode=True,
    ... )
    >>> summary = run(config)
    >>> summary.generated
    12

Classes:
    RunSummary: Counts reported at the end of a run

Functions:
    process_images: Pair and composite an already-collected image set
    run: Execute a complete run from configuration
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from SBS_Libs.CompositeLib.compositor import Compositor
from SBS_Libs.CompositeLib.imaging_backend import ImagingBackend
from SBS_Libs.CompositeLib.output_namer import generate_filename
from SBS_Libs.ImageInfoLib.file_collector import collect_candidates
from SBS_Libs.ImageInfoLib.image_models import ImageRecord
from SBS_Libs.ImageInfoLib.metadata_collector import MetadataCollector
from SBS_Libs.OutputSyncLib.output_sync import OutputSync
from SBS_Libs.RunLib.pairer import Pairer, order_images
from SBS_Libs.RunLib.run_config import RunConfig, RunContext

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    """Outcome counts for a run.

    Attributes:
        generated: Composites written
        skipped: Pairs or images not turned into a new composite
        duplicates: Duplicate pairs skipped (included in skipped)
        cleaned: Files deleted by the pre-run clean
        mirrored: Stale files deleted by mirror mode
    """
    generated: int = 0
    skipped: int = 0
    duplicates: int = 0
    cleaned: int = 0
    mirrored: int = 0


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


def process_images(
    images: Sequence[ImageRecord],
    config: RunConfig,
    context: RunContext,
    sync: OutputSync,
    compositor: Compositor,
    summary: Optional[RunSummary] = None,
) -> RunSummary:
    """
    Order, pair and composite a set of portrait images.

    Args:
        images: Portrait ImageRecords
        config: Run configuration
        context: Run-scoped state (duplicate detector, processed set, rng)
        sync: Output policy for the destination directory
        compositor: Compositor for accepted pairs
        summary: Summary to update (a new one is created if omitted)

    Returns:
        The updated RunSummary
    """
    summary = summary if summary is not None else RunSummary()

    if not images:
        logger.info("No images found to process.")
        return summary

    ordered = order_images(images, shuffle=config.randomise_sorting, rng=context.rng)

    if len(ordered) < 2:
        logger.info(f"Not enough images to process: need at least 2, found {len(ordered)}.")
        return summary

    logger.info("Generating landscape images...")

    pairer = Pairer(context.detector.files_are_equal)
    for image_a, image_b in pairer.walk(ordered):
        try:
            filename = generate_filename(image_a.file_name, image_b.file_name)
        except ValueError as e:
            logger.error(f"Cannot pair {image_a.full_path} with {image_b.full_path}: {e}")
            summary.skipped += 1
            continue

        output_path = sync.output_path_for(filename)

        if not sync.should_generate(output_path):
            summary.skipped += 1
            continue

        if compositor.composite(image_a, image_b, output_path):
            summary.generated += 1
            sync.record(output_path)
        else:
            summary.skipped += 1

    summary.duplicates += pairer.duplicates_skipped
    summary.skipped += pairer.duplicates_skipped
    if pairer.unpaired is not None:
        summary.skipped += 1

    logger.info(
        f"Finished generating {_plural(summary.generated, 'landscape image', 'landscape images')} "
        f"({summary.skipped} skipped)"
    )
    return summary


def run(
    config: RunConfig,
    context: Optional[RunContext] = None,
    backend: Optional[ImagingBackend] = None,
) -> RunSummary:
    """
    Execute a complete SideBySide run.

    Args:
        config: Run configuration
        context: Run-scoped state (a fresh one is created if omitted)
        backend: Imaging backend (defaults to Pillow)

    Returns:
        RunSummary with the run's counts

    Raises:
        NoImagesFoundError: If no candidate files were found
        OSError: If the destination directory cannot be created
    """
    context = context if context is not None else RunContext()
    summary = RunSummary()

    config.output_dir.mkdir(parents=True, exist_ok=True)

    candidates = collect_candidates(
        config.input_dirs,
        file_list=config.file_list,
        recursive=config.recursive_search,
    )
    images = MetadataCollector(backend).collect(candidates)

    sync = OutputSync(config.output_dir, context.processed, config.overwrite_existing)
    if config.delete_existing:
        summary.cleaned = sync.clean()

    compositor = Compositor(
        config.frame,
        backend=backend,
        stamp_dates=not config.randomise_sorting,
    )
    process_images(images, config, context, sync, compositor, summary)

    if config.mirror_mode:
        summary.mirrored = sync.mirror()

    logger.info("SideBySide finished.")
    return summary
