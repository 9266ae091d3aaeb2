"""Delete, yank and change over a range, plus put from the yank register."""

from __future__ import annotations

from enum import Enum

from viedit.buffer import Position
from viedit.buffer.registers import CHARACTER, LINE
from viedit.config import EditorMode
from viedit.modes.base_mode import ModeContext, ModeResult
from viedit.runtime import telemetry


class Operator(str, Enum):
    DELETE = "d"
    YANK = "y"
    CHANGE = "c"


OPERATOR_KEYS = {operator.value: operator for operator in Operator}


def _ordered(start: Position, end: Position) -> tuple[Position, Position]:
    if start <= end:
        return start, end
    return end, start


def apply_operator(
    context: ModeContext, operator: Operator, start: Position, end: Position
) -> ModeResult:
    """Apply ``operator`` over the half-open range ``[start, end)``."""

    buffer = context.buffer
    if buffer.document.row_count == 0:
        return ModeResult(consumed=True, status="operator_empty")
    start, end = _ordered(start, end)
    with telemetry.span(
        "operator::apply",
        component="operators",
        metadata={"operator": operator.value, "start": start, "end": end},
    ):
        if operator is Operator.YANK:
            text = buffer.get_text_range(start, end)
            buffer.state.set_cursor(*start)
        else:
            text = buffer.delete_range(start, end)
        context.registers.yank(text, register_type=CHARACTER)

    context.bus.emit(
        "operator.apply",
        {"operator": operator.value, "text": text, "range": (start, end)},
    )
    if operator is Operator.CHANGE:
        return ModeResult(
            consumed=True, switch_to=EditorMode.INSERT, status="operator_change"
        )
    return ModeResult(consumed=True, status=f"operator_{operator.name.lower()}")


def apply_linewise(context: ModeContext, operator: Operator, count: int) -> ModeResult:
    """``dd``/``yy``/``cc``: apply ``operator`` to ``count`` rows from the cursor."""

    buffer = context.buffer
    document = buffer.document
    if document.row_count == 0:
        return ModeResult(consumed=True, status="operator_empty")
    first = buffer.cursor.row
    last = min(first + max(1, count), document.row_count)

    if operator is Operator.YANK:
        text = "".join(f"{document.row(row).chars}\n" for row in range(first, last))
        buffer.state.set_cursor(first, 0)
    else:
        text = buffer.delete_rows(first, last - first)
        if operator is Operator.CHANGE:
            buffer.insert_rows(first, [""])
            buffer.state.set_cursor(first, 0)
    context.registers.yank(text, register_type=LINE)
    context.bus.emit(
        "operator.apply",
        {"operator": operator.value, "text": text, "rows": (first, last)},
    )
    if operator is Operator.CHANGE:
        return ModeResult(
            consumed=True, switch_to=EditorMode.INSERT, status="operator_change"
        )
    return ModeResult(consumed=True, status=f"operator_{operator.name.lower()}")


def put(context: ModeContext, *, after: bool = True) -> ModeResult:
    """Insert the yank register next to the cursor (``p`` / ``P``)."""

    buffer = context.buffer
    value = context.registers.get()
    if not value.text:
        return ModeResult(consumed=True, status="put_empty")

    row, col = buffer.cursor
    if value.type == LINE:
        lines = value.text.split("\n")[:-1]
        at = row + 1 if after and buffer.document.row_count else row
        buffer.insert_rows(at, lines)
        buffer.state.set_cursor(at, 0)
    else:
        if after:
            col = min(col + 1, buffer.document.row_length(row))
        end = buffer.insert_text(Position(row, col), value.text)
        buffer.state.set_cursor(*buffer.clamp(end.row, max(0, end.col - 1)))
    return ModeResult(consumed=True, status="put")


__all__ = ["Operator", "OPERATOR_KEYS", "apply_operator", "apply_linewise", "put"]
