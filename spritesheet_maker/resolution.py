"""Dominant-resolution filtering.

Images are grouped by their exact ``(height, width)`` pair and only the most
common group is kept.  Groups are kept in first-seen order, so when two
resolutions tie the one that appeared first in the input wins.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

from PIL import Image

from .errors import FilterError

LOGGER = logging.getLogger(__name__)

ResolutionKey = Tuple[int, int]


def resolution_key(image: Image.Image) -> ResolutionKey:
    """Return the ``(height, width)`` grouping key for ``image``."""
    return image.height, image.width


def group_by_resolution(images: Sequence[Image.Image]) -> Dict[ResolutionKey, List[Image.Image]]:
    """Group ``images`` by resolution in a single pass, preserving order."""
    groups: Dict[ResolutionKey, List[Image.Image]] = {}
    for image in images:
        groups.setdefault(resolution_key(image), []).append(image)
    return groups


def dominant_resolution(images: Sequence[Image.Image]) -> ResolutionKey:
    """Return the most common resolution among ``images``.

    Raises:
        FilterError: If ``images`` is empty or no resolution has a positive count
    """
    if not images:
        raise FilterError("cannot filter an empty image list")

    best_key = None
    best_count = 0
    for key, group in group_by_resolution(images).items():
        # strict comparison keeps the earliest key on ties
        if len(group) > best_count:
            best_key, best_count = key, len(group)

    if best_key is None:
        raise FilterError("no resolution group found")
    return best_key


def filter_dominant_resolution(images: Sequence[Image.Image]) -> List[Image.Image]:
    """
    Keep only the images sharing the dominant resolution.

    Args:
        images: Decoded images in discovery order

    Returns:
        List[Image.Image]: The largest same-resolution subset, in input order

    Raises:
        FilterError: If no dominant resolution can be determined
    """
    height, width = dominant_resolution(images)
    filtered = [image for image in images if resolution_key(image) == (height, width)]

    dropped = len(images) - len(filtered)
    LOGGER.info("Dominant resolution %dx%d: keeping %d image(s), dropping %d",
                width, height, len(filtered), dropped)
    return filtered


__all__ = [
    "ResolutionKey",
    "resolution_key",
    "group_by_resolution",
    "dominant_resolution",
    "filter_dominant_resolution",
]
