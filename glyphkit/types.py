"""Geometry and shaping records shared by layouts and renderers."""

from __future__ import annotations

from dataclasses import dataclass, field

# Flag bit set on glyph indices that the shaper could not map to the font.
PANGO_GLYPH_UNKNOWN_FLAG = 0x10000000

Color = tuple[int, int, int, int]
"""An RGBA colour with 8-bit channels."""


@dataclass
class Rect:
    """An axis-aligned rectangle."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def right(self) -> float:
        """The x coordinate of the right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """The y coordinate of the bottom edge."""
        return self.y + self.height

    def contains(self, x: float, y: float) -> bool:
        """Return True if (x, y) lies inside the rectangle, edges included."""
        return self.x <= x <= self.right and self.y <= y <= self.bottom


@dataclass
class CursorPosition:
    """Geometry for rendering a text cursor."""

    x: float = 0.0
    y: float = 0.0
    height: float = 0.0


@dataclass
class LogAttr:
    """Character classification for cursor and word boundaries."""

    is_cursor_position: bool = False
    is_word_start: bool = False
    is_word_end: bool = False
    is_line_break: bool = False


@dataclass
class CharRect:
    """Bounding rectangle of the character at a byte index."""

    rect: Rect = field(default_factory=Rect)
    index: int = 0


@dataclass
class Line:
    """One line of a laid-out paragraph."""

    start_index: int = 0
    length: int = 0
    rect: Rect = field(default_factory=Rect)
    is_paragraph_start: bool = False

    @property
    def end_index(self) -> int:
        """The byte index just past the end of the line."""
        return self.start_index + self.length


@dataclass
class Item:
    """A run of glyphs sharing the same font and attributes."""

    run_text: str = ""
    font_family: str | None = None
    object_id: str = ""

    width: float = 0.0
    x: float = 0.0
    y: float = 0.0
    ascent: float = 0.0
    descent: float = 0.0

    glyph_start: int = 0
    glyph_count: int = 0
    start_index: int = 0
    length: int = 0

    underline_offset: float = 0.0
    underline_thickness: float = 0.0
    strikethrough_offset: float = 0.0
    strikethrough_thickness: float = 0.0

    color: Color = (0, 0, 0, 0)
    bg_color: Color = (0, 0, 0, 0)

    stroke_width: float = 0.0
    stroke_color: Color = (0, 0, 0, 0)

    has_underline: bool = False
    has_strikethrough: bool = False
    has_bg_color: bool = False
    has_stroke: bool = False
    use_original_color: bool = False
    is_object: bool = False

    @property
    def glyph_end(self) -> int:
        """Index one past the last glyph of the run."""
        return self.glyph_start + self.glyph_count

    def covers(self, index: int) -> bool:
        """Return True if the byte index falls inside this run."""
        return self.start_index <= index < self.start_index + self.length


@dataclass
class Glyph:
    """A shaped glyph index and its positioning offsets."""

    index: int = 0
    x_offset: float = 0.0
    y_offset: float = 0.0
    x_advance: float = 0.0
    y_advance: float = 0.0
    codepoint: int = 0

    @property
    def is_unknown(self) -> bool:
        """True if the shaper could not map this glyph to the font."""
        return bool(self.index & PANGO_GLYPH_UNKNOWN_FLAG)


@dataclass
class GlyphPlacement:
    """Absolute screen position and rotation of one glyph."""

    x: float = 0.0
    y: float = 0.0
    angle: float = 0.0


@dataclass
class GlyphInfo:
    """Absolute position and advance of a glyph within a layout."""

    x: float = 0.0
    y: float = 0.0
    advance: float = 0.0
    index: int = 0