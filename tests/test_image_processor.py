import os
import stat
from pathlib import Path

import pytest
from PIL import Image

from spritesheet_maker.errors import ImageSaveError, NoImagesFoundError
from spritesheet_maker.utils.image_processor import ImageProcessor, ImageSource


def create_temp_image(directory: Path, name: str, size=(10, 10), fmt="PNG", color="red") -> Path:
    img = Image.new("RGB", size, color=color)
    path = directory / name
    img.save(path, format=fmt)
    return path


@pytest.mark.parametrize(
    "name, expected",
    [
        ("a.png", "PNG"),
        ("a.jpeg", "JPEG"),
        ("a.bmp", "BMP"),
        ("a.jpg", None),
        ("a.PNG", None),
        ("a.gif", None),
        ("noext", None),
    ],
)
def test_image_format_exact_extension_match(name, expected):
    assert ImageProcessor.image_format(name) == expected


def test_find_sources_is_sorted_and_non_recursive(tmp_path):
    create_temp_image(tmp_path, "b.png")
    create_temp_image(tmp_path, "a.bmp", fmt="BMP")
    (tmp_path / "notes.txt").write_text("hello")
    nested = tmp_path / "nested"
    nested.mkdir()
    create_temp_image(nested, "c.png")

    sources = ImageProcessor(tmp_path).find_image_sources()

    assert [s.path.name for s in sources] == ["a.bmp", "b.png"]
    assert [s.format for s in sources] == ["BMP", "PNG"]


def test_find_sources_skips_previous_sheet(tmp_path):
    create_temp_image(tmp_path, "spritesheet.png")
    create_temp_image(tmp_path, "frame.png")

    sources = ImageProcessor(tmp_path).find_image_sources()

    assert [s.path.name for s in sources] == ["frame.png"]


def test_find_sources_keeps_sheet_name_when_output_elsewhere(tmp_path):
    out = tmp_path / "out"
    out.mkdir()
    create_temp_image(tmp_path, "spritesheet.png")

    sources = ImageProcessor(tmp_path, out).find_image_sources()

    assert [s.path.name for s in sources] == ["spritesheet.png"]


def test_no_images_found(tmp_path):
    (tmp_path / "a.jpg").write_bytes(b"")
    with pytest.raises(NoImagesFoundError):
        ImageProcessor(tmp_path).collect_images()


def test_missing_source_directory(tmp_path):
    with pytest.raises(NoImagesFoundError):
        ImageProcessor(tmp_path / "missing")


def test_collect_decodes_all_images(tmp_path):
    create_temp_image(tmp_path, "a.png", size=(4, 6))
    create_temp_image(tmp_path, "b.jpeg", size=(8, 8), fmt="JPEG")

    images = ImageProcessor(tmp_path).collect_images()

    assert [img.size for img in images] == [(4, 6), (8, 8)]
    assert images[0].getpixel((0, 0)) == (255, 0, 0)


def test_corrupt_image_aborts_collection(tmp_path, caplog):
    create_temp_image(tmp_path, "a.png")
    (tmp_path / "b.png").write_bytes(b"not really a png")

    with pytest.raises(ImageSaveError):
        ImageProcessor(tmp_path).collect_images()
    assert "Failed to decode" in caplog.text


def test_format_mismatch_is_decode_error(tmp_path):
    path = create_temp_image(tmp_path, "x.bmp", fmt="PNG")
    with pytest.raises(ImageSaveError):
        ImageProcessor.load_image(ImageSource(path=path, format="BMP"))


def test_save_round_trip_is_lossless(tmp_path):
    sheet = Image.new("RGBA", (6, 4), (0, 0, 0, 0))
    sheet.putpixel((1, 1), (10, 20, 30, 128))

    path = ImageProcessor(tmp_path).save_spritesheet(sheet)

    assert path == tmp_path.resolve() / "spritesheet.png"
    with Image.open(path) as reloaded:
        assert reloaded.format == "PNG"
        assert reloaded.mode == "RGBA"
        assert reloaded.tobytes() == sheet.tobytes()
    assert [p.name for p in tmp_path.iterdir()] == ["spritesheet.png"]


def test_save_overwrites_existing_sheet(tmp_path):
    (tmp_path / "spritesheet.png").write_bytes(b"old")
    ImageProcessor(tmp_path).save_spritesheet(Image.new("RGBA", (2, 2)))
    with Image.open(tmp_path / "spritesheet.png") as reloaded:
        assert reloaded.size == (2, 2)


def test_save_failure_raises_and_leaves_no_file(tmp_path, monkeypatch):
    processor = ImageProcessor(tmp_path)

    def broken_save(*args, **kwargs):
        raise OSError("disk full")

    sheet = Image.new("RGBA", (2, 2))
    monkeypatch.setattr(sheet, "save", broken_save)

    with pytest.raises(ImageSaveError):
        processor.save_spritesheet(sheet)
    assert list(tmp_path.iterdir()) == []


def test_saved_sheet_uses_umask_permissions(tmp_path):
    old_umask = os.umask(0o022)
    try:
        path = ImageProcessor(tmp_path).save_spritesheet(Image.new("RGBA", (2, 2)))
    finally:
        os.umask(old_umask)
    assert stat.S_IMODE(path.stat().st_mode) == 0o644


def test_overwritten_sheet_is_readable_by_others(tmp_path):
    old_umask = os.umask(0o022)
    try:
        processor = ImageProcessor(tmp_path)
        processor.save_spritesheet(Image.new("RGBA", (2, 2)))
        path = processor.save_spritesheet(Image.new("RGBA", (4, 4)))
    finally:
        os.umask(old_umask)
    assert stat.S_IMODE(path.stat().st_mode) & stat.S_IROTH


def test_oversized_image_is_decode_error(tmp_path, monkeypatch):
    path = create_temp_image(tmp_path, "huge.png", size=(10, 10))
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)
    with pytest.raises(ImageSaveError):
        ImageProcessor.load_image(ImageSource(path=path, format="PNG"))


def test_missing_output_directory(tmp_path):
    with pytest.raises(ImageSaveError):
        ImageProcessor(tmp_path, tmp_path / "missing")
