"""Input validation helpers for source and output locations."""
from __future__ import annotations

from pathlib import Path
from typing import Union
from urllib.parse import urlparse


def _has_url_scheme(path_str: str) -> bool:
    """Return True if *path_str* looks like a URL with a scheme.

    Single-letter schemes such as ``"C"`` are treated as drive letters on
    Windows and therefore ignored.
    """
    parsed = urlparse(path_str)
    return bool(parsed.scheme and len(parsed.scheme) > 1)


def validate_directory(path: Union[str, Path]) -> Path:
    """Validate a user-supplied directory *path*.

    The path must be local, exist and be a directory.  Returns the resolved
    ``Path`` object.
    """
    path_str = str(path)
    if _has_url_scheme(path_str):
        raise ValueError("URLs are not allowed")

    p = Path(path_str).expanduser()
    try:
        p = p.resolve(strict=True)
    except FileNotFoundError as exc:
        raise ValueError(f"Directory does not exist: {path_str}") from exc

    if not p.is_dir():
        raise ValueError(f"Not a directory: {path_str}")

    return p


def validate_output_path(path: Union[str, Path], allowed_exts: set[str]) -> Path:
    """Validate an output file *path*.

    Ensures the directory exists and the extension is allowed.  Returns the
    resolved ``Path``.
    """
    path_str = str(path)
    if _has_url_scheme(path_str):
        raise ValueError("URLs are not allowed")

    p = Path(path_str).expanduser().resolve()

    if not p.parent.is_dir():
        raise ValueError(f"Directory does not exist: {p.parent}")

    if p.suffix not in allowed_exts:
        raise ValueError(f"Unsupported file extension: {p.suffix}")

    return p
