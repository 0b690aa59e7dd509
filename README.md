# glyphkit

Pure-Python building blocks for text editing on top of a text layout that
has already been shaped:

- **Layout queries** (`glyphkit.layout.Layout`): hit-testing, character
  rectangles, closest-offset lookup for clicks, selection rectangles,
  cursor geometry, cursor movement by character, word and line and
  vertically between lines, word and paragraph extents, the font family
  at an index, and absolute glyph positions (`glyph_positions`).
- **Geometry and glyph records** (`glyphkit.types`): `Rect`, `Line`,
  `CharRect`, `LogAttr`, `Item`, `Glyph`, `GlyphInfo`, `GlyphPlacement`
  and `CursorPosition`.
- **Undo/redo** (`glyphkit.undo`): `UndoManager` with a history limit and
  merging of consecutive typing or deleting within one second, plus
  `MutationResult`, `UndoOperation`, `UndoResult`, `OperationType` and
  `mutation_to_undo_op`.
- **Input validation** (`glyphkit.validation`): checks for text, font
  paths, sizes and texture dimensions that raise `ValidationError`.

All positions are byte indices into the UTF-8 encoding of the text.

## Installation

```
pip install glyphkit
```

There are no third-party dependencies.

## Layout queries

You fill a `Layout` with the lines, character rectangles and log
attributes your shaper produced; the queries then work on that data.

```python
from glyphkit.layout import Layout
from glyphkit.types import CharRect, Line, LogAttr, Rect

layout = Layout(
    text="Hi",
    char_rects=[
        CharRect(Rect(0, 0, 10, 20), 0),
        CharRect(Rect(10, 0, 10, 20), 1),
    ],
    char_rect_by_index={0: 0, 1: 1},
    lines=[Line(start_index=0, length=2, rect=Rect(0, 0, 20, 20))],
    log_attrs=[
        LogAttr(is_cursor_position=True, is_word_start=True),
        LogAttr(is_cursor_position=True),
        LogAttr(is_cursor_position=True, is_word_end=True),
    ],
    log_attr_by_index={0: 0, 1: 1, 2: 2},
)

layout.hit_test(15, 5)              # 1
layout.get_closest_offset(200, 10)  # 2 (past the end of the line)
layout.move_cursor_right(0)         # 1
layout.get_word_at_index(1)         # (0, 2)
layout.get_selection_rects(0, 2)    # [Rect(x=0, y=0, width=20, height=20)]
```

`get_char_rect`, `hit_test_rect` and `get_cursor_pos` return `None` when
there is nothing at the given place; `hit_test` returns `-1`.
`move_cursor_up` and `move_cursor_down` take a preferred x; pass a
negative value to use the cursor's current x. At a soft-wrap boundary the
line-start, line-end and vertical moves treat the cursor as being on the
later line. `get_paragraph_at_index(index, text)` splits paragraphs on
blank lines (`"\n\n"`).

Each `Item` carries a `font_family` name; `get_font_name_at_index`
returns it, or `"Unknown"` when no run with a family covers the index.

## Undo and redo

```python
from glyphkit.undo import MutationResult, UndoManager

history = UndoManager(100)
result = MutationResult(
    new_text="Hello World", cursor_pos=11, range_start=5, range_end=11
)
history.record_mutation(result, " World", 5, 5)

undone = history.undo("Hello World")
undone.text      # "Hello"
redone = history.redo(undone.text)
redone.text      # "Hello World"
```

`undo` and `redo` return `None` when there is nothing to apply or the
recorded range no longer fits the text. Consecutive inserts (or deletes)
that touch each other within `coalesce_timeout_ms` (1000 ms) are merged
into one entry; call `break_coalescing()` when the cursor moves so the next
edit starts a new one. A new mutation clears the redo stack. A
`max_history` of zero or less falls back to 100. `UndoManager` also
accepts a `clock` callable returning milliseconds, which is useful in
tests.

## Validation

```python
from glyphkit.validation import ValidationError, validate_dimension

try:
    validate_dimension(0, "width", "atlas")
except ValidationError as exc:
    print(exc)  # width must be positive, got 0 at atlas
```

`ValidationError` is a subclass of `ValueError`. The module also defines
`MAX_TEXT_LENGTH`, `MAX_TEXTURE_DIMENSION`, `MIN_FONT_SIZE` and
`MAX_FONT_SIZE`.

## What this package does not do

glyphkit does not shape text, load fonts, rasterise glyphs, manage a
glyph atlas or draw anything. It works only on layout data that you
supply, and `GlyphPlacement` is a plain record for your own renderer.

## Running the tests

```
pip install -e ".[test]"
pytest
```