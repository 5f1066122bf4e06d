"""Grid layout and composition for spritesheets.

A :class:`GridLayout` describes where every image goes before any pixel is
copied: ``row_count`` cells per row, as many rows as needed, cells filled
left-to-right then top-to-bottom in input order.  It is image agnostic so the
geometry can be unit tested without decoding anything.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from PIL import Image

from .errors import CompositionError
from .utils.image_operations import new_canvas, paste_cell

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutCell:
    """Placement of one source image on the sheet."""

    index: int
    row: int
    column: int
    x: int
    y: int


@dataclass(frozen=True)
class GridLayout:
    """Geometry of a spritesheet with equally sized cells."""

    row_count: int
    image_count: int
    cell_width: int
    cell_height: int

    def __post_init__(self) -> None:
        if self.row_count <= 0:
            raise CompositionError("row count must be positive")
        if self.image_count <= 0:
            raise CompositionError("no images to place")
        if self.cell_width <= 0 or self.cell_height <= 0:
            raise CompositionError("cells must have positive dimensions")

    @classmethod
    def for_images(cls, images: Sequence[Image.Image], row_count: int) -> "GridLayout":
        """Build the layout for ``images``, sized from the first image."""
        if not images:
            raise CompositionError("no images to place")
        first = images[0]
        return cls(
            row_count=row_count,
            image_count=len(images),
            cell_width=first.width,
            cell_height=first.height,
        )

    @property
    def required_rows(self) -> int:
        """Number of grid rows needed, ``ceil(image_count / row_count)``."""
        return -(-self.image_count // self.row_count)

    @property
    def canvas_size(self) -> Tuple[int, int]:
        """Sheet size as ``(width, height)`` in pixels."""
        return (
            self.row_count * self.cell_width,
            self.required_rows * self.cell_height,
        )

    def cell_offset(self, index: int) -> Tuple[int, int]:
        """Pixel offset ``(x, y)`` of the cell holding image ``index``."""
        if not 0 <= index < self.image_count:
            raise IndexError(f"image index {index} out of range")
        return (
            (index % self.row_count) * self.cell_width,
            (index // self.row_count) * self.cell_height,
        )

    def cells(self) -> Iterator[LayoutCell]:
        """Yield filled cells in row-major order.

        Placement stops at the first exhausted index; the remaining cells of
        the last row stay empty.
        """
        index = 0
        for row in range(self.required_rows):
            for column in range(self.row_count):
                if index >= self.image_count:
                    return
                x, y = self.cell_offset(index)
                yield LayoutCell(
                    index=index,
                    row=row,
                    column=column,
                    x=x,
                    y=y,
                )
                index += 1


def compose_spritesheet(images: Sequence[Image.Image], row_count: int) -> Image.Image:
    """
    Arrange same-sized ``images`` into a single transparent RGBA sheet.

    Args:
        images: Images sharing one resolution, in placement order
        row_count: Number of cells per grid row

    Returns:
        Image.Image: The composed RGBA canvas

    Raises:
        CompositionError: If ``row_count`` is not positive, ``images`` is empty
            or an image does not match the cell size
    """
    layout = GridLayout.for_images(images, row_count)
    cell_size = (layout.cell_width, layout.cell_height)

    mismatched: List[int] = [i for i, image in enumerate(images) if image.size != cell_size]
    if mismatched:
        raise CompositionError(
            f"images {mismatched} do not match cell size {cell_size[0]}x{cell_size[1]}"
        )

    canvas = new_canvas(layout.canvas_size)
    for cell in layout.cells():
        paste_cell(canvas, images[cell.index], (cell.x, cell.y))

    LOGGER.info(
        "Composed %dx%d sheet: %d image(s) in %d row(s) of %d",
        *layout.canvas_size, layout.image_count, layout.required_rows, layout.row_count,
    )
    return canvas


__all__ = ["LayoutCell", "GridLayout", "compose_spritesheet"]
