"""Shaped text layouts and the hit-testing and cursor queries over them."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from glyphkit.types import (
    CharRect,
    CursorPosition,
    Glyph,
    GlyphInfo,
    Item,
    Line,
    LogAttr,
    Rect,
)

# Sentinel distance for "no match found" comparisons.
_MAX_DISTANCE = 1e9


def _last_below(values: Sequence[int], limit: int) -> int | None:
    """Largest value strictly below limit."""
    pos = bisect_left(values, limit)
    return values[pos - 1] if pos else None


def _last_at_most(values: Sequence[int], limit: int) -> int | None:
    """Largest value less than or equal to limit."""
    pos = bisect_right(values, limit)
    return values[pos - 1] if pos else None


def _first_above(values: Sequence[int], limit: int) -> int | None:
    """Smallest value strictly above limit."""
    pos = bisect_right(values, limit)
    return values[pos] if pos < len(values) else None


def _first_at_least(values: Sequence[int], limit: int) -> int | None:
    """Smallest value greater than or equal to limit."""
    pos = bisect_left(values, limit)
    return values[pos] if pos < len(values) else None


@dataclass
class Layout:
    """Result of text shaping: glyph runs, hit-test rectangles, lines and attributes.

    All indices are byte offsets into the UTF-8 encoding of ``text``.
    """

    text: str = ""
    cloned_object_ids: list[str] = field(default_factory=list)
    items: list[Item] = field(default_factory=list)
    glyphs: list[Glyph] = field(default_factory=list)
    char_rects: list[CharRect] = field(default_factory=list)
    char_rect_by_index: dict[int, int] = field(default_factory=dict)
    lines: list[Line] = field(default_factory=list)
    log_attrs: list[LogAttr] = field(default_factory=list)
    log_attr_by_index: dict[int, int] = field(default_factory=dict)
    width: float = 0.0
    height: float = 0.0
    visual_width: float = 0.0
    visual_height: float = 0.0

    _cursor_positions: list[int] | None = field(
        default=None, init=False, repr=False, compare=False
    )
    _word_starts: list[int] | None = field(
        default=None, init=False, repr=False, compare=False
    )
    _word_ends: list[int] | None = field(
        default=None, init=False, repr=False, compare=False
    )

    # --- glyph geometry ---

    def glyph_positions(self) -> list[GlyphInfo]:
        """Absolute position, advance and index of every known glyph."""
        result: list[GlyphInfo] = []
        if not self.glyphs:
            return result
        for item in self.items:
            cx = item.x
            cy = item.y
            for i in range(item.glyph_start, item.glyph_end):
                if not 0 <= i < len(self.glyphs):
                    continue
                g = self.glyphs[i]
                if not g.is_unknown:
                    result.append(
                        GlyphInfo(
                            x=cx + g.x_offset,
                            y=cy - g.y_offset,
                            advance=g.x_advance,
                            index=i,
                        )
                    )
                cx += g.x_advance
                cy -= g.y_advance
        return result

    # --- position caches ---

    def _collect_positions(self, pred: Callable[[LogAttr], bool]) -> list[int]:
        count = len(self.log_attrs)
        return sorted(
            byte_idx
            for byte_idx, attr_idx in self.log_attr_by_index.items()
            if 0 <= attr_idx < count and pred(self.log_attrs[attr_idx])
        )

    def _build_position_caches(self) -> None:
        self._cursor_positions = self._collect_positions(
            lambda a: a.is_cursor_position
        )
        self._word_starts = self._collect_positions(lambda a: a.is_word_start)
        self._word_ends = self._collect_positions(lambda a: a.is_word_end)

    def _get_word_starts(self) -> list[int]:
        if self._word_starts is None:
            self._build_position_caches()
        assert self._word_starts is not None
        return self._word_starts

    def _get_word_ends(self) -> list[int]:
        if self._word_ends is None:
            self._build_position_caches()
        assert self._word_ends is not None
        return self._word_ends

    def get_valid_cursor_positions(self) -> list[int]:
        """Sorted byte indices that are valid cursor positions."""
        if self._cursor_positions is None:
            self._build_position_caches()
        assert self._cursor_positions is not None
        return self._cursor_positions

    # --- hit testing ---

    def hit_test_rect(self, x: float, y: float) -> Rect | None:
        """Bounding box of the character at (x, y), or None if there is none."""
        for cr in self.char_rects:
            if cr.rect.contains(x, y):
                return cr.rect
        return None

    def get_char_rect(self, index: int) -> Rect | None:
        """Bounding box of the character at a byte index, or None."""
        ri = self.char_rect_by_index.get(index)
        if ri is None:
            return None
        return self.char_rects[ri].rect

    def hit_test(self, x: float, y: float) -> int:
        """Byte index of the character at (x, y), or -1 if there is none."""
        for cr in self.char_rects:
            if cr.rect.contains(x, y):
                return cr.index
        return -1

    def _line_char_rects(self, line: Line):
        for i in range(line.start_index, line.end_index):
            ri = self.char_rect_by_index.get(i)
            if ri is not None:
                yield i, self.char_rects[ri].rect

    def get_closest_offset(self, x: float, y: float) -> int:
        """Byte index of the character closest to (x, y), even outside the layout."""
        if not self.lines:
            return 0

        closest_line = self.lines[0]
        min_dist_y = _MAX_DISTANCE
        for line in self.lines:
            if line.rect.y <= y <= line.rect.bottom:
                dist = 0.0
            else:
                dist = abs(y - (line.rect.y + line.rect.height / 2))
            if dist < min_dist_y:
                min_dist_y = dist
                closest_line = line

        line_end = closest_line.end_index
        closest_char = closest_line.start_index
        min_dist_x = _MAX_DISTANCE
        found_any = False
        last_right = -_MAX_DISTANCE
        for i, rect in self._line_char_rects(closest_line):
            dist = abs(x - (rect.x + rect.width / 2))
            if dist < min_dist_x:
                min_dist_x = dist
                closest_char = i
                found_any = True
            last_right = max(last_right, rect.right)

        if not found_any:
            return closest_line.start_index
        if last_right > 0 and x > last_right and line_end in self.log_attr_by_index:
            return line_end
        return closest_char

    def get_selection_rects(self, start: int, end: int) -> list[Rect]:
        """Rectangles covering the byte range [start, end), one per line."""
        if start >= end or not self.lines:
            return []
        s = max(start, 0)
        rects: list[Rect] = []
        for line in self.lines:
            overlap_start = max(s, line.start_index)
            overlap_end = min(end, line.end_index)
            if overlap_start >= overlap_end:
                continue
            covered = [
                self.char_rects[ri].rect
                for ri in (
                    self.char_rect_by_index.get(i)
                    for i in range(overlap_start, overlap_end)
                )
                if ri is not None
            ]
            if covered:
                min_x = min(r.x for r in covered)
                max_x = max(r.right for r in covered)
                rects.append(
                    Rect(min_x, line.rect.y, max_x - min_x, line.rect.height)
                )
        return rects

    # --- cursor geometry ---

    def _line_for_byte_index(self, byte_index: int) -> Line | None:
        for line in self.lines:
            if line.start_index <= byte_index <= line.end_index:
                return line
        return None

    def get_cursor_pos(self, byte_index: int) -> CursorPosition | None:
        """Cursor geometry at a byte index, or None if it is not a cursor position."""
        if byte_index < 0:
            return None

        attr_idx = self.log_attr_by_index.get(byte_index)
        if attr_idx is None and byte_index != 0:
            return None
        if attr_idx is not None and 0 <= attr_idx < len(self.log_attrs):
            if not self.log_attrs[attr_idx].is_cursor_position:
                return None

        # A newline's rect sits at the start of the next line; the cursor
        # belongs at the end of the current one, handled below.
        raw = self.text.encode("utf-8")
        if byte_index >= len(raw) or raw[byte_index] != 0x0A:
            rect = self.get_char_rect(byte_index)
            if rect is not None:
                line = self._line_for_byte_index(byte_index)
                if line is not None:
                    return CursorPosition(rect.x, line.rect.y, line.rect.height)
                return CursorPosition(rect.x, rect.y, rect.height)

        for line in self.lines:
            if line.start_index <= byte_index <= line.end_index:
                if byte_index == line.end_index:
                    return CursorPosition(
                        line.rect.right, line.rect.y, line.rect.height
                    )
                if byte_index == line.start_index:
                    return CursorPosition(line.rect.x, line.rect.y, line.rect.height)

        if byte_index == 0 and self.lines:
            first = self.lines[0]
            return CursorPosition(first.rect.x, first.rect.y, first.rect.height)
        return None

    # --- cursor movement ---

    def move_cursor_left(self, byte_index: int) -> int:
        """The previous valid cursor position."""
        if byte_index <= 0 or not self.log_attrs:
            return 0
        found = _last_below(self.get_valid_cursor_positions(), byte_index)
        return 0 if found is None else found

    def move_cursor_right(self, byte_index: int) -> int:
        """The next valid cursor position."""
        if not self.log_attrs:
            return byte_index
        positions = self.get_valid_cursor_positions()
        found = _first_above(positions, byte_index)
        if found is not None:
            return found
        return positions[-1] if positions else byte_index

    def move_cursor_word_left(self, byte_index: int) -> int:
        """The previous word start."""
        if byte_index <= 0 or not self.log_attrs:
            return 0
        found = _last_below(self._get_word_starts(), byte_index)
        return 0 if found is None else found

    def move_cursor_word_right(self, byte_index: int) -> int:
        """The next word start, or the last cursor position."""
        if not self.log_attrs:
            return byte_index
        found = _first_above(self._get_word_starts(), byte_index)
        if found is not None:
            return found
        positions = self.get_valid_cursor_positions()
        return positions[-1] if positions else byte_index

    def _current_line_index(self, byte_index: int) -> int | None:
        """Index of the line holding byte_index, preferring the later line at a wrap."""
        for i, line in enumerate(self.lines):
            if line.start_index <= byte_index <= line.end_index:
                if (
                    byte_index == line.end_index
                    and i + 1 < len(self.lines)
                    and self.lines[i + 1].start_index == byte_index
                ):
                    continue
                return i
        return None

    def move_cursor_line_start(self, byte_index: int) -> int:
        """The start of the current line."""
        i = self._current_line_index(byte_index)
        return 0 if i is None else self.lines[i].start_index

    def move_cursor_line_end(self, byte_index: int) -> int:
        """The end of the current line."""
        i = self._current_line_index(byte_index)
        return byte_index if i is None else self.lines[i].end_index

    def _vertical_origin(
        self, byte_index: int, preferred_x: float
    ) -> tuple[int | None, float]:
        i = self._current_line_index(byte_index)
        target_x = preferred_x
        if i is not None and target_x < 0:
            pos = self.get_cursor_pos(byte_index)
            target_x = pos.x if pos is not None else self.lines[i].rect.x
        return i, target_x

    def move_cursor_up(self, byte_index: int, preferred_x: float) -> int:
        """Byte index on the previous line nearest x; a negative preferred_x uses the cursor's x."""
        if not self.lines:
            return byte_index
        i, target_x = self._vertical_origin(byte_index, preferred_x)
        if i is None or i == 0:
            return byte_index
        return self._find_closest_index_in_line(self.lines[i - 1], target_x)

    def move_cursor_down(self, byte_index: int, preferred_x: float) -> int:
        """Byte index on the next line nearest x; a negative preferred_x uses the cursor's x."""
        if not self.lines:
            return byte_index
        i, target_x = self._vertical_origin(byte_index, preferred_x)
        if i is None or i >= len(self.lines) - 1:
            return byte_index
        return self._find_closest_index_in_line(self.lines[i + 1], target_x)

    def _find_closest_index_in_line(self, line: Line, target_x: float) -> int:
        closest = line.start_index
        min_dist = _MAX_DISTANCE
        for i, rect in self._line_char_rects(line):
            dist = abs(target_x - (rect.x + rect.width / 2))
            if dist < min_dist:
                min_dist = dist
                closest = i
        if abs(target_x - line.rect.right) < min_dist:
            return line.end_index
        return closest

    # --- text ranges ---

    def get_word_at_index(self, byte_index: int) -> tuple[int, int]:
        """(start, end) of the word at byte_index; (index, index) if there is none."""
        if not self.log_attrs:
            return byte_index, byte_index
        starts = self._get_word_starts()
        ends = self._get_word_ends()

        found = _last_at_most(starts, byte_index)
        start = byte_index if found is None else found
        found = _first_at_least(ends, byte_index)
        end = byte_index if found is None else found

        if start > end:
            nearest_start = _first_above(starts, byte_index)
            nearest_end = _last_below(ends, byte_index)
            dist_to_start = (
                int(_MAX_DISTANCE)
                if nearest_start is None
                else nearest_start - byte_index
            )
            dist_to_end = (
                int(_MAX_DISTANCE) if nearest_end is None else byte_index - nearest_end
            )
            if nearest_start is not None and dist_to_start < dist_to_end:
                start = nearest_start
                found = _first_at_least(ends, start)
                if found is not None:
                    end = found
            elif nearest_end is not None:
                end = nearest_end
                found = _last_at_most(starts, end)
                if found is not None:
                    start = found

        if start > end:
            return byte_index, byte_index
        return start, end

    def get_paragraph_at_index(self, byte_index: int, text: str) -> tuple[int, int]:
        """(start, end) byte range of the paragraph holding byte_index; paragraphs split on blank lines."""
        raw = text.encode("utf-8")
        if not raw:
            return 0, 0
        idx = min(max(byte_index, 0), len(raw))
        before = raw.rfind(b"\n\n", 0, idx)
        para_start = 0 if before < 0 else before + 2
        after = raw.find(b"\n\n", idx)
        para_end = len(raw) if after < 0 else after
        return para_start, para_end

    def get_font_name_at_index(self, index: int) -> str:
        """Family name of the font used at a byte index, or "Unknown"."""
        for item in self.items:
            if item.covers(index) and item.font_family is not None:
                return item.font_family or "Unknown"
        return "Unknown"