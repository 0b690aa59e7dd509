"""Input validation for text, font paths and sizes."""

from __future__ import annotations

import os

MAX_TEXT_LENGTH = 10240
"""Maximum text input length in bytes."""
MAX_TEXTURE_DIMENSION = 16384
"""Maximum texture size in pixels."""
MIN_FONT_SIZE = 0.1
"""Minimum font size in points."""
MAX_FONT_SIZE = 500.0
"""Maximum font size in points."""


class ValidationError(ValueError):
    """Raised when an input fails validation."""


def validate_text_input(text: str | bytes, max_len: int, location: str) -> None:
    """Check text is non-empty, within max_len bytes, valid UTF-8 and free of NULs."""
    if isinstance(text, bytes):
        raw = text
    else:
        raw = text.encode("utf-8", "surrogatepass")
    if not raw:
        raise ValidationError(f"empty string not allowed at {location}")
    if len(raw) > max_len:
        raise ValidationError(
            f"text exceeds max length {max_len} bytes at {location}"
        )
    try:
        decoded = raw.decode("utf-8")
    except UnicodeDecodeError:
        raise ValidationError(f"invalid UTF-8 encoding at {location}") from None
    if "\x00" in decoded:
        raise ValidationError(f"null byte in text at {location}")


def validate_font_path(path: str | os.PathLike[str], location: str) -> None:
    """Check a font path has no '..' component and names an existing file."""
    path_str = os.fspath(path)
    if not path_str:
        raise ValidationError(f"empty font path not allowed at {location}")
    if ".." in path_str.replace(os.sep, "/").split("/"):
        raise ValidationError(
            f"path traversal (..) not allowed in font path at {location}"
        )
    try:
        os.stat(os.path.normpath(path_str))
    except OSError as err:
        raise ValidationError(
            f"font file not accessible: {path_str!r} at {location}: {err}"
        ) from err


def validate_size(
    size: float, minimum: float, maximum: float, name: str, location: str
) -> None:
    """Check that size lies within [minimum, maximum]."""
    if size < minimum or size > maximum:
        raise ValidationError(
            f"{name} {size:g} out of range [{minimum:g}, {maximum:g}] at {location}"
        )


def validate_dimension(dim: int, name: str, location: str) -> None:
    """Check that an integer dimension is positive and within the texture limit."""
    if dim <= 0:
        raise ValidationError(f"{name} must be positive, got {dim} at {location}")
    if dim > MAX_TEXTURE_DIMENSION:
        raise ValidationError(
            f"{name} {dim} exceeds max {MAX_TEXTURE_DIMENSION} at {location}"
        )