# main.py
"""
Entry point for Spritesheet Maker.

Collects the images in a directory, keeps the dominant resolution, lays them
out in a grid and writes ``spritesheet.png``.
"""
import argparse
import logging
import os
import sys
import time
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Callable, Optional, Sequence, TextIO

from . import config
from .errors import SpritesheetError
from .grid_layout import compose_spritesheet
from .resolution import filter_dominant_resolution
from .row_count import resolve_row_count
from .utils.image_processor import ImageProcessor


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Configure and return the application logger.

    The handler setup is idempotent to avoid duplicate handlers when ``main``
    runs several times in one process (e.g., in tests).  Output goes to stderr
    so stdout stays free for the row-count prompt; setting
    ``SPRITESHEET_LOG_FILE`` also mirrors it to a rotating log file.
    """

    logger = logging.getLogger(config.LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(config.LOG_FORMAT)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    log_file = os.environ.get(config.LOG_FILE_ENV)
    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=config.LOG_MAX_BYTES,
            backupCount=config.LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


logger = logging.getLogger(config.LOGGER_NAME)


def global_exception_handler(exc_type, value, tb):
    logger.error("Uncaught exception", exc_info=(exc_type, value, tb))
    sys.__excepthook__(exc_type, value, tb)


@dataclass(frozen=True)
class RunSettings:
    """Options for one spritesheet run."""

    auto_row_count: bool
    source_dir: Path
    output_dir: Path
    rows: Optional[str] = None
    pause_on_error: bool = True
    verbose: bool = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spritesheet-maker",
        description="Combine the same-sized images in a directory into spritesheet.png.",
    )
    parser.add_argument(
        "mode",
        nargs="?",
        default=None,
        help=f"'{config.AUTO_MODE_KEYWORD}' picks the row count automatically; "
             "anything else asks for it",
    )
    parser.add_argument(
        "--source",
        type=Path,
        default=None,
        help="Directory to read images from (default: current directory)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory to write spritesheet.png to (default: current directory)",
    )
    parser.add_argument(
        "--rows",
        default=None,
        help="Cells per row; skips the interactive prompt",
    )
    parser.add_argument(
        "--no-pause",
        action="store_true",
        help="Exit immediately after an error instead of waiting",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def parse_settings(argv: Optional[Sequence[str]] = None) -> RunSettings:
    args = build_parser().parse_args(argv)
    cwd = Path.cwd()
    return RunSettings(
        auto_row_count=args.mode == config.AUTO_MODE_KEYWORD,
        source_dir=args.source if args.source is not None else cwd,
        output_dir=args.output_dir if args.output_dir is not None else cwd,
        rows=args.rows,
        pause_on_error=not args.no_pause,
        verbose=args.verbose,
    )


def create_spritesheet(
    settings: RunSettings,
    *,
    input_func: Optional[Callable[[], str]] = None,
    output: Optional[TextIO] = None,
) -> Path:
    """Run the whole pipeline and return the path of the written sheet.

    Raises:
        SpritesheetError: On any failure; nothing is written in that case
    """
    processor = ImageProcessor(settings.source_dir, settings.output_dir)
    images = processor.collect_images()
    images = filter_dominant_resolution(images)
    row_count = resolve_row_count(
        len(images),
        auto=settings.auto_row_count,
        rows=settings.rows,
        input_func=input_func,
        output=output,
    )
    spritesheet = compose_spritesheet(images, row_count)
    return processor.save_spritesheet(spritesheet)


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    input_func: Optional[Callable[[], str]] = None,
    output: Optional[TextIO] = None,
) -> int:
    settings = parse_settings(argv)
    configure_logging(settings.verbose)

    try:
        create_spritesheet(settings, input_func=input_func, output=output)
    except SpritesheetError as e:
        logger.error("%s (%s)", e.message, e)
        stream = output or sys.stdout
        print(e.message, file=stream, flush=True)
        if settings.pause_on_error:
            time.sleep(config.ERROR_PAUSE_SECONDS)
        return 1
    return 0


def run() -> None:
    """Console script entry point."""
    sys.excepthook = global_exception_handler
    sys.exit(main())


if __name__ == "__main__":
    run()
