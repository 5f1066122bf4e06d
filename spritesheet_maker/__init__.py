"""Spritesheet Maker: combine same-sized images into a grid."""

from .errors import (
    CompositionError,
    FilterError,
    ImageSaveError,
    NoImagesFoundError,
    ParseError,
    SpritesheetError,
)
from .grid_layout import GridLayout, LayoutCell, compose_spritesheet
from .resolution import filter_dominant_resolution
from .row_count import auto_row_count, parse_row_count

__version__ = "0.1.0"

__all__ = [
    "CompositionError",
    "FilterError",
    "ImageSaveError",
    "NoImagesFoundError",
    "ParseError",
    "SpritesheetError",
    "GridLayout",
    "LayoutCell",
    "compose_spritesheet",
    "filter_dominant_resolution",
    "auto_row_count",
    "parse_row_count",
]
