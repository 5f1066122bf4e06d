"""Error taxonomy for the spritesheet pipeline.

Every error is fatal for the run.  The top level prints ``message`` and exits,
so each subclass carries a fixed, user-facing text.
"""


class SpritesheetError(Exception):
    """Base class for failures that abort spritesheet creation."""

    message = "Error: spritesheet error"

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.message)
        self.detail = detail


class NoImagesFoundError(SpritesheetError):
    """No file with a supported extension exists in the source directory."""

    message = "Error: no images found"


class FilterError(SpritesheetError):
    """Resolution grouping produced no dominant group."""

    message = "Error: filter image error"


class ImageSaveError(SpritesheetError):
    """Decoding a source image or encoding/writing the sheet failed."""

    message = "Error: save image error"


class ParseError(SpritesheetError):
    """The manual row count is not a positive integer."""

    message = "Error: parse error"


class CompositionError(SpritesheetError):
    """The grid cannot be laid out (no rows, no images, mixed sizes)."""

    message = "Error: composition error"


__all__ = [
    "SpritesheetError",
    "NoImagesFoundError",
    "FilterError",
    "ImageSaveError",
    "ParseError",
    "CompositionError",
]
