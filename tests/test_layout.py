import pytest

from glyphkit.layout import Layout
from glyphkit.types import CharRect, Glyph, Item, Line, LogAttr, Rect


def make_layout() -> Layout:
    """Two lines: "Hello" (0..5) and "World" (6..11), chars 10x20."""
    char_rects = [
        CharRect(Rect(x * 10, 0, 10, 20), x) for x in range(5)
    ] + [CharRect(Rect(x * 10, 20, 10, 20), 6 + x) for x in range(5)]
    char_rect_by_index = {0: 0, 1: 1, 2: 2, 3: 3, 4: 4, 6: 5, 7: 6, 8: 7, 9: 8, 10: 9}
    lines = [
        Line(start_index=0, length=5, rect=Rect(0, 0, 50, 20)),
        Line(start_index=6, length=5, rect=Rect(0, 20, 50, 20)),
    ]
    log_attrs = [
        LogAttr(is_cursor_position=True, is_word_start=True),
        LogAttr(is_cursor_position=True),
        LogAttr(is_cursor_position=True),
        LogAttr(is_cursor_position=True),
        LogAttr(is_cursor_position=True),
        LogAttr(is_cursor_position=True, is_word_end=True),
        LogAttr(is_cursor_position=True, is_word_start=True),
        LogAttr(is_cursor_position=True),
        LogAttr(is_cursor_position=True),
        LogAttr(is_cursor_position=True),
        LogAttr(is_cursor_position=True),
        LogAttr(is_cursor_position=True, is_word_end=True),
    ]
    return Layout(
        text="Hello\nWorld",
        char_rects=char_rects,
        char_rect_by_index=char_rect_by_index,
        lines=lines,
        log_attrs=log_attrs,
        log_attr_by_index={i: i for i in range(12)},
        width=50,
        height=40,
    )


def with_line_spacing(layout: Layout, spacing: float) -> Layout:
    """Grow each line by spacing and push later lines down accordingly."""
    for i, line in enumerate(layout.lines):
        line.rect.y += i * spacing
        line.rect.height += spacing
        for cr in layout.char_rects:
            if line.start_index <= cr.index < line.end_index:
                cr.rect.y += i * spacing
    return layout


def test_hit_test():
    assert make_layout().hit_test(15, 5) == 1


def test_hit_test_miss():
    assert make_layout().hit_test(200, 200) == -1


def test_hit_test_rect():
    rect = make_layout().hit_test_rect(5, 5)
    assert rect is not None
    assert (rect.x, rect.width) == (0, 10)


def test_hit_test_rect_miss():
    assert make_layout().hit_test_rect(500, 500) is None


def test_get_char_rect():
    rect = make_layout().get_char_rect(2)
    assert rect is not None
    assert rect.x == 20


def test_get_char_rect_missing():
    assert make_layout().get_char_rect(5) is None


def test_get_closest_offset():
    assert make_layout().get_closest_offset(35, 10) == 3


def test_get_closest_offset_past_line():
    assert make_layout().get_closest_offset(200, 10) == 5


def test_get_closest_offset_below_layout_picks_last_line():
    assert make_layout().get_closest_offset(25, 500) == 8


def test_get_selection_rects():
    rects = make_layout().get_selection_rects(1, 4)
    assert len(rects) == 1
    assert rects[0].width == 30


def test_get_selection_rects_multi_line():
    rects = make_layout().get_selection_rects(2, 8)
    assert len(rects) == 2
    assert rects[0] == Rect(20, 0, 30, 20)
    assert rects[1] == Rect(0, 20, 20, 20)


def test_get_selection_rects_empty_range():
    assert make_layout().get_selection_rects(4, 4) == []


def test_get_cursor_pos():
    pos = make_layout().get_cursor_pos(0)
    assert pos is not None
    assert pos.x == 0
    assert pos.height == 20


def test_get_cursor_pos_line_end():
    pos = make_layout().get_cursor_pos(5)
    assert pos is not None
    assert pos.x == 50


def test_get_cursor_pos_negative():
    assert make_layout().get_cursor_pos(-1) is None


def test_get_cursor_pos_not_cursor_position():
    layout = make_layout()
    layout.log_attrs[3] = LogAttr(is_cursor_position=False)
    assert layout.get_cursor_pos(3) is None


def test_get_selection_rects_include_line_spacing():
    layout = with_line_spacing(make_layout(), 8)
    rects = layout.get_selection_rects(2, 8)
    assert len(rects) == 2
    assert rects[0].height == 28
    assert rects[1].y == 28


def test_get_cursor_pos_uses_line_height_after_line_spacing():
    layout = with_line_spacing(make_layout(), 6)
    pos = layout.get_cursor_pos(1)
    assert pos is not None
    assert pos.height == 26


def test_get_valid_cursor_positions_sorted():
    positions = make_layout().get_valid_cursor_positions()
    assert positions
    assert all(a < b for a, b in zip(positions, positions[1:]))
    assert positions == list(range(12))


def test_move_cursor_left():
    layout = make_layout()
    assert layout.move_cursor_left(3) == 2
    assert layout.move_cursor_left(0) == 0


def test_move_cursor_right():
    layout = make_layout()
    assert layout.move_cursor_right(3) == 4
    assert layout.move_cursor_right(11) == 11


def test_move_cursor_word_left():
    assert make_layout().move_cursor_word_left(8) == 6


def test_move_cursor_word_right():
    layout = make_layout()
    assert layout.move_cursor_word_right(0) == 6
    assert layout.move_cursor_word_right(7) == 11


def test_move_cursor_line_start():
    assert make_layout().move_cursor_line_start(8) == 6


def test_move_cursor_line_end():
    assert make_layout().move_cursor_line_end(2) == 5


def test_move_cursor_line_end_soft_wrap():
    layout = make_layout()
    layout.lines[0].length = 6
    layout.lines[1].start_index = 6
    assert layout.move_cursor_line_end(6) == 11


def test_move_cursor_line_start_soft_wrap():
    layout = make_layout()
    layout.lines[0].length = 6
    layout.lines[1].start_index = 6
    assert layout.move_cursor_line_start(6) == 6


def test_move_cursor_up():
    got = make_layout().move_cursor_up(8, -1)
    assert 0 <= got <= 5


def test_move_cursor_down():
    got = make_layout().move_cursor_down(2, -1)
    assert 6 <= got <= 11


def test_move_cursor_up_first_line():
    assert make_layout().move_cursor_up(2, -1) == 2


def test_move_cursor_down_last_line():
    assert make_layout().move_cursor_down(8, -1) == 8


def test_move_cursor_down_preferred_x_past_line_end():
    assert make_layout().move_cursor_down(1, 100) == 11


def test_get_word_at_index():
    assert make_layout().get_word_at_index(2) == (0, 5)


def test_get_word_at_index_empty_layout():
    assert Layout().get_word_at_index(4) == (4, 4)


def test_get_paragraph_at_index():
    text = "First paragraph\n\nSecond paragraph"
    assert make_layout().get_paragraph_at_index(5, text) == (0, 15)


def test_get_paragraph_at_index_second():
    text = "First\n\nSecond"
    assert make_layout().get_paragraph_at_index(8, text) == (7, len(text))


def test_get_paragraph_at_index_empty_text():
    assert make_layout().get_paragraph_at_index(3, "") == (0, 0)


def test_empty_layout_defaults():
    layout = Layout()
    assert layout.hit_test(0, 0) == -1
    assert layout.get_closest_offset(0, 0) == 0


def test_get_font_name_at_index():
    layout = make_layout()
    layout.items = [Item(font_family="Sans", start_index=0, length=5)]
    assert layout.get_font_name_at_index(2) == "Sans"
    assert layout.get_font_name_at_index(7) == "Unknown"


def test_glyph_positions_skips_unknown_but_advances():
    layout = Layout(
        items=[Item(x=10, y=20, glyph_start=0, glyph_count=3)],
        glyphs=[
            Glyph(index=1, x_offset=1, y_offset=2, x_advance=5),
            Glyph(index=0x10000000 | 3, x_advance=7),
            Glyph(index=4, x_advance=3),
        ],
    )
    infos = layout.glyph_positions()
    assert [(g.x, g.y, g.advance, g.index) for g in infos] == [
        (11, 18, 5, 0),
        (22, 20, 3, 2),
    ]


def test_glyph_positions_empty():
    assert Layout().glyph_positions() == []


@pytest.mark.parametrize("index", [0, 3, 6, 10])
def test_hit_test_round_trip_with_char_rect(index):
    layout = make_layout()
    rect = layout.get_char_rect(index)
    assert rect is not None
    assert layout.hit_test(rect.x + rect.width / 2, rect.y + rect.height / 2) == index