from pathlib import Path
from typing import List, Optional, Union
from dataclasses import dataclass
import logging
import os
import tempfile

from PIL import Image, UnidentifiedImageError

from .. import config
from ..errors import ImageSaveError, NoImagesFoundError
from .validation import validate_directory, validate_output_path

LOGGER = logging.getLogger(__name__)


def _default_file_mode() -> int:
    """Return the mode a plain ``open()`` would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


@dataclass(frozen=True, slots=True)
class ImageSource:
    """
    A candidate image file found in the source directory.

    Attributes:
        path (Path): Location of the file
        format (str): Pillow format name the file is decoded as
    """
    path: Path
    format: str


class ImageProcessor:
    """Finds, decodes and writes images for spritesheet creation."""

    VALID_EXTENSIONS = dict(config.SUPPORTED_IMAGE_FORMATS)

    def __init__(self, source_dir: Union[str, Path], output_dir: Optional[Union[str, Path]] = None):
        """Initialize the processor for a source and output directory."""
        try:
            self.source_dir = validate_directory(source_dir)
        except ValueError as e:
            raise NoImagesFoundError(str(e)) from e
        try:
            self.output_dir = validate_directory(output_dir if output_dir is not None else source_dir)
        except ValueError as e:
            raise ImageSaveError(str(e)) from e

    @property
    def output_path(self) -> Path:
        """Path the spritesheet is written to."""
        return self.output_dir / config.OUTPUT_FILENAME

    @classmethod
    def image_format(cls, path: Union[str, Path]) -> Optional[str]:
        """
        Map a file name to the Pillow format it should be decoded as.

        Matching is exact and case sensitive: ``a.png`` qualifies, ``a.PNG``
        and ``a.jpg`` do not.

        Args:
            path: File path or name

        Returns:
            Optional[str]: Pillow format name, or None if unsupported
        """
        suffix = Path(path).suffix
        if not suffix:
            return None
        return cls.VALID_EXTENSIONS.get(suffix[1:])

    def find_image_sources(self) -> List[ImageSource]:
        """
        List supported image files directly inside the source directory.

        Returns:
            List[ImageSource]: Candidates sorted by file name

        Raises:
            NoImagesFoundError: If no file has a supported extension
            OSError: If the directory or a file cannot be inspected
        """
        skip = self.output_path if self.output_dir == self.source_dir else None
        sources: List[ImageSource] = []

        for entry in sorted(self.source_dir.iterdir(), key=lambda p: p.name):
            if not entry.is_file():
                continue
            fmt = self.image_format(entry)
            if fmt is None:
                continue
            if entry == skip:
                LOGGER.debug("Skipping previous output %s", entry)
                continue
            sources.append(ImageSource(path=entry, format=fmt))

        if not sources:
            raise NoImagesFoundError(f"no supported images in {self.source_dir}")

        LOGGER.info("Found %d image file(s) in %s", len(sources), self.source_dir)
        return sources

    @staticmethod
    def load_image(source: ImageSource) -> Image.Image:
        """
        Decode ``source`` fully into memory.

        Args:
            source: File and format to decode

        Returns:
            Image.Image: The loaded image, detached from the file

        Raises:
            ImageSaveError: If the file cannot be read or decoded
        """
        try:
            with Image.open(source.path, formats=[source.format]) as img:
                img.load()
                image = img.copy()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            LOGGER.error("Failed to decode %s: %s", source.path, e)
            raise ImageSaveError(f"cannot decode {source.path}: {e}") from e

        LOGGER.debug("Decoded %s (%s, %dx%d)", source.path.name, image.mode, image.width, image.height)
        return image

    def collect_images(self) -> List[Image.Image]:
        """
        Find and eagerly decode every supported image in the source directory.

        A single unreadable file aborts the whole collection.

        Returns:
            List[Image.Image]: Decoded images in file-name order

        Raises:
            NoImagesFoundError: If no file has a supported extension
            ImageSaveError: If any file fails to decode
        """
        return [self.load_image(source) for source in self.find_image_sources()]

    def save_spritesheet(self, image: Image.Image) -> Path:
        """
        Write ``image`` as ``spritesheet.png`` in the output directory.

        The PNG is encoded to a temporary file next to the target and moved
        over it afterwards, replacing any existing sheet.

        Args:
            image: Composed spritesheet

        Returns:
            Path: Location of the written file

        Raises:
            ImageSaveError: If encoding or writing fails
        """
        try:
            path = validate_output_path(self.output_path, {'.png'})
        except ValueError as e:
            raise ImageSaveError(str(e)) from e

        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=".spritesheet-", suffix=".png", dir=path.parent)
            with os.fdopen(fd, 'wb') as f:
                image.save(f, format=config.OUTPUT_FORMAT, **config.PNG_SAVE_OPTIONS)
            os.chmod(tmp_name, _default_file_mode())
            os.replace(tmp_name, path)
        except (OSError, ValueError) as e:
            LOGGER.error("Failed to save spritesheet to %s: %s", path, e)
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise ImageSaveError(f"cannot write {path}: {e}") from e

        LOGGER.info("Saved %dx%d spritesheet to %s", image.width, image.height, path)
        return path
