"""Canvas helpers used when composing a spritesheet.

Functions are small and pure (apart from ``paste_cell``, which writes into the
canvas it is given) so they are easy to test on their own.
"""

from __future__ import annotations

from PIL import Image

from .. import config


def new_canvas(size: tuple[int, int]) -> Image.Image:
    """Return a fully transparent RGBA canvas of ``size``."""
    return Image.new(config.CANVAS_MODE, size, config.TRANSPARENT)


def to_rgba(image: Image.Image) -> Image.Image:
    """Return ``image`` in RGBA mode.

    A new image is always returned so callers never alias the source.
    """
    if image.mode == config.CANVAS_MODE:
        return image.copy()
    return image.convert(config.CANVAS_MODE)


def paste_cell(canvas: Image.Image, image: Image.Image, offset: tuple[int, int]) -> None:
    """Copy every pixel of ``image`` into ``canvas`` at ``offset``.

    Pixels are replaced, not alpha blended, so transparent source pixels stay
    transparent on the sheet.
    """
    canvas.paste(to_rgba(image), offset)


__all__ = ["new_canvas", "to_rgba", "paste_cell"]
