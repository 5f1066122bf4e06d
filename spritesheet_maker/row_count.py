"""Row-count policy: how many cells go side by side in each grid row."""

from __future__ import annotations

import logging
import math
import sys
from typing import Callable, Optional, TextIO

from . import config
from .errors import ParseError

LOGGER = logging.getLogger(__name__)


def auto_row_count(image_count: int) -> int:
    """Return ``floor(sqrt(image_count))`` clamped to at least one.

    This gives a near-square sheet; the clamp covers an empty or single image
    list, where the root would be 0 or 1.
    """
    if image_count < 0:
        raise ValueError("image_count must not be negative")
    return max(config.MIN_ROW_COUNT, math.isqrt(image_count))


def parse_row_count(text: str) -> int:
    """Parse a user supplied row count.

    Surrounding whitespace is ignored.  Only plain decimal digits, with an
    optional leading ``+``, are accepted and the value must be at least one.

    Raises:
        ParseError: If ``text`` is not a positive unsigned integer
    """
    value = text.strip()
    digits = value[1:] if value.startswith("+") else value
    if not digits.isascii() or not digits.isdigit():
        raise ParseError(f"invalid row count: {text!r}")
    row_count = int(digits)
    if row_count < config.MIN_ROW_COUNT:
        raise ParseError(f"row count must be at least {config.MIN_ROW_COUNT}")
    return row_count


def prompt_row_count(
    image_count: int,
    *,
    input_func: Optional[Callable[[], str]] = None,
    output: Optional[TextIO] = None,
) -> int:
    """Ask for a row count on the console and parse the answer."""
    stream = output or sys.stdout
    read_line = input_func or sys.stdin.readline
    stream.write(f"Image count: {image_count}\n")
    stream.write("Enter row count: ")
    stream.flush()

    line = read_line()
    if not line:
        raise ParseError("no row count entered")
    return parse_row_count(line)


def resolve_row_count(
    image_count: int,
    *,
    auto: bool,
    rows: Optional[str] = None,
    input_func: Optional[Callable[[], str]] = None,
    output: Optional[TextIO] = None,
) -> int:
    """
    Pick the row count for ``image_count`` images.

    Args:
        image_count: Number of images that will be placed
        auto: Use the automatic square-root policy
        rows: Row count given up front (e.g. on the command line); skips the prompt
        input_func: Reads one line of console input
        output: Stream the prompt is written to (defaults to stdout)

    Returns:
        int: A row count of at least one

    Raises:
        ParseError: If a manual row count is not a positive integer
    """
    if rows is not None:
        row_count = parse_row_count(rows)
        source = "argument"
    elif auto:
        row_count = auto_row_count(image_count)
        source = "auto"
    else:
        row_count = prompt_row_count(image_count, input_func=input_func, output=output)
        source = "prompt"

    LOGGER.info("Using row count %d (%s) for %d image(s)", row_count, source, image_count)
    return row_count


__all__ = ["auto_row_count", "parse_row_count", "prompt_row_count", "resolve_row_count"]
