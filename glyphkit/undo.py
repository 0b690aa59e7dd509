"""Undo and redo history for text edits, with coalescing of rapid typing."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum, auto

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"
_DEFAULT_MAX_HISTORY = 100
_COALESCE_TIMEOUT_MS = 1000


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _encode(text: str) -> bytes:
    return text.encode(_ENCODING, _ERRORS)


def _decode(raw: bytes) -> str:
    return raw.decode(_ENCODING, _ERRORS)


class OperationType(Enum):
    """Kind of text mutation."""

    INSERT = auto()
    DELETE = auto()
    REPLACE = auto()


@dataclass
class MutationResult:
    """Outcome of a text mutation; ranges are UTF-8 byte offsets."""

    new_text: str = ""
    cursor_pos: int = 0
    deleted_text: str = ""
    range_start: int = 0
    range_end: int = 0


@dataclass
class UndoOperation:
    """Data needed to reverse or reapply one mutation."""

    op_type: OperationType
    cursor_before: int = 0
    anchor_before: int = 0
    range_start: int = 0
    range_end: int = 0
    deleted_text: str = ""
    inserted_text: str = ""
    cursor_after: int = 0
    anchor_after: int = 0


@dataclass(frozen=True)
class UndoResult:
    """Text and selection after an undo or redo."""

    text: str
    cursor: int
    anchor: int


def mutation_to_undo_op(
    result: MutationResult, inserted: str, cursor_before: int, anchor_before: int
) -> UndoOperation:
    """Build the undo record for a mutation that inserted ``inserted``."""
    if result.deleted_text and inserted:
        op_type = OperationType.REPLACE
    elif inserted:
        op_type = OperationType.INSERT
    else:
        op_type = OperationType.DELETE
    return UndoOperation(
        op_type=op_type,
        range_start=result.range_start,
        range_end=result.range_end,
        deleted_text=result.deleted_text,
        inserted_text=inserted,
        cursor_before=cursor_before,
        cursor_after=result.cursor_pos,
        anchor_before=anchor_before,
        anchor_after=result.cursor_pos,
    )


class UndoManager:
    """Undo and redo stacks; consecutive inserts or deletes within a second merge."""

    def __init__(
        self,
        max_history: int = _DEFAULT_MAX_HISTORY,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.max_history = max_history if max_history > 0 else _DEFAULT_MAX_HISTORY
        self.coalesce_timeout_ms = _COALESCE_TIMEOUT_MS
        self._clock = clock if clock is not None else _now_ms
        self._undo_stack: list[UndoOperation] = []
        self._redo_stack: list[UndoOperation] = []
        self._last_mutation_time = 0
        self._pending: UndoOperation | None = None

    def _should_coalesce(self, op: UndoOperation, now: int) -> bool:
        pending = self._pending
        if pending is None:
            return False
        if now - self._last_mutation_time > self.coalesce_timeout_ms:
            return False
        if pending.op_type is not op.op_type:
            return False
        if op.op_type is OperationType.INSERT:
            return op.range_start == pending.range_end
        if op.op_type is OperationType.DELETE:
            return op.range_end == pending.range_start
        return False

    def _coalesce(self, op: UndoOperation) -> None:
        pending = self._pending
        if pending is None:
            return
        if op.op_type is OperationType.INSERT:
            pending.inserted_text += op.inserted_text
            pending.range_end = op.range_end
        elif op.op_type is OperationType.DELETE:
            pending.deleted_text = op.deleted_text + pending.deleted_text
            pending.range_start = op.range_start
        else:
            return
        pending.cursor_after = op.cursor_after
        pending.anchor_after = op.anchor_after

    def _push_undo(self, op: UndoOperation) -> None:
        if len(self._undo_stack) >= self.max_history:
            del self._undo_stack[0]
        self._undo_stack.append(op)

    def record_mutation(
        self,
        result: MutationResult,
        inserted: str,
        cursor_before: int,
        anchor_before: int,
    ) -> None:
        """Record a mutation, merging it into the pending one when possible."""
        now = self._clock()
        op = mutation_to_undo_op(result, inserted, cursor_before, anchor_before)
        if self._should_coalesce(op, now):
            self._coalesce(op)
        else:
            if self._pending is not None:
                self._undo_stack.append(self._pending)
            self._pending = replace(op)
            self._redo_stack.clear()
        self._last_mutation_time = now

    def flush_pending(self) -> None:
        """Move the pending operation onto the undo stack."""
        if self._pending is not None:
            self._push_undo(self._pending)
            self._pending = None

    def undo(self, text: str) -> UndoResult | None:
        """Reverse the last operation on ``text``; None if there is nothing to undo."""
        self.flush_pending()
        if not self._undo_stack:
            return None
        op = self._undo_stack.pop()

        raw = _encode(text)
        if (
            op.range_start > len(raw)
            or op.range_end > len(raw)
            or op.range_start > op.range_end
        ):
            return None

        head = raw[: op.range_start]
        deleted = _encode(op.deleted_text)
        if op.op_type is OperationType.INSERT:
            new_raw = head + raw[op.range_end :]
        elif op.op_type is OperationType.DELETE:
            new_raw = head + deleted + raw[op.range_start :]
        else:
            new_raw = head + deleted + raw[op.range_end :]

        self._redo_stack.append(op)
        return UndoResult(_decode(new_raw), op.cursor_before, op.anchor_before)

    def redo(self, text: str) -> UndoResult | None:
        """Reapply the last undone operation; None if there is nothing to redo."""
        if not self._redo_stack:
            return None
        op = self._redo_stack.pop()

        raw = _encode(text)
        if op.range_start > len(raw):
            return None

        head = raw[: op.range_start]
        inserted = _encode(op.inserted_text)
        if op.op_type is OperationType.INSERT:
            new_raw = head + inserted + raw[op.range_start :]
        elif op.op_type is OperationType.DELETE:
            if op.range_end > len(raw) or op.range_start > op.range_end:
                return None
            new_raw = head + raw[op.range_end :]
        else:
            old_end = op.range_start + len(_encode(op.deleted_text))
            if old_end > len(raw):
                return None
            new_raw = head + inserted + raw[old_end:]

        self._push_undo(op)
        return UndoResult(_decode(new_raw), op.cursor_after, op.anchor_after)

    def break_coalescing(self) -> None:
        """End the current run of merged edits, e.g. on cursor navigation."""
        self.flush_pending()

    def can_undo(self) -> bool:
        """True if there is an operation to undo."""
        return self._pending is not None or bool(self._undo_stack)

    def can_redo(self) -> bool:
        """True if there is an operation to redo."""
        return bool(self._redo_stack)

    def clear(self) -> None:
        """Forget all undo and redo history."""
        self._undo_stack.clear()
        self._redo_stack.clear()
        self._pending = None

    def undo_depth(self) -> int:
        """Number of operations available for undo, the pending one included."""
        return len(self._undo_stack) + (1 if self._pending is not None else 0)