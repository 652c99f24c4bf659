"""
Image ordering and pairing for SideBySide.

Images are ordered by capture date (or shuffled) and walked two at a time.
A pair whose files are byte-identical is not composited: the walk advances by
one so the second image is tried against the next one, which also steps past
longer runs of identical files.

An odd-sized set reports its last image as unpaired. This is decided by the
size of the set alone, so an image dropped by the duplicate skip is not
reported, and the reported image may already have been paired.
"""

import logging
import random
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from SBS_Libs.ImageInfoLib.image_models import ImageRecord

logger = logging.getLogger(__name__)

ImagePair = Tuple[ImageRecord, ImageRecord]
EqualityCheck = Callable[[object, object], bool]


def order_images(
    images: Sequence[ImageRecord],
    shuffle: bool = False,
    rng: Optional[random.Random] = None,
) -> List[ImageRecord]:
    """
    Order images for pairing.

    Args:
        images: Images to order (not modified)
        shuffle: Randomize instead of sorting
        rng: Random source for shuffling (default: module random)

    Returns:
        New list sorted ascending by creation date, or shuffled
    """
    ordered = list(images)
    if shuffle:
        logger.info("Shuffling files found randomly...")
        (rng or random).shuffle(ordered)
    else:
        logger.info("Sorting files found by creation date...")
        ordered.sort(key=lambda record: record.creation_date)
    return ordered


class Pairer:
    """Walks an ordered image list and yields pairs to composite.

    Attributes:
        files_are_equal: Content equality check used to skip duplicates
        duplicates_skipped: Duplicate pairs seen during the last walk
        unpaired: Last image of an odd-sized set, if any
    """

    def __init__(self, files_are_equal: EqualityCheck):
        self.files_are_equal = files_are_equal
        self.duplicates_skipped = 0
        self.unpaired: Optional[ImageRecord] = None

    def walk(self, images: Sequence[ImageRecord]) -> Iterator[ImagePair]:
        """
        Yield accepted pairs in order.

        Args:
            images: Ordered images

        Yields:
            (left, right) image pairs that are not duplicates of each other
        """
        self.duplicates_skipped = 0
        self.unpaired = None

        count = len(images)
        i = 0
        while i + 1 < count:
            image_a = images[i]
            image_b = images[i + 1]

            if self.files_are_equal(image_a.full_path, image_b.full_path):
                logger.debug(
                    f"Skipping duplicate image pair: {image_a.file_name} and {image_b.file_name}"
                )
                self.duplicates_skipped += 1
                i += 1
                continue

            yield image_a, image_b
            i += 2

        if count % 2 != 0:
            self.unpaired = images[-1]
            logger.info(f"Unpaired image skipped: {self.unpaired.file_name}")
