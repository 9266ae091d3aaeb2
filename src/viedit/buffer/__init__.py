"""Line buffer, cursor/viewport state and the buffer façade."""

from .buffer import Buffer, SaveResult, StatusMessage, Transaction
from .document import Document, Row, render_column, render_form
from .registers import RegisterValue, YankRegister
from .state import BufferState, Position, Viewport
from .validation import BufferValidationError, clamp_position, ensure_position

__all__ = [
    "Buffer",
    "SaveResult",
    "StatusMessage",
    "Transaction",
    "Document",
    "Row",
    "render_form",
    "render_column",
    "RegisterValue",
    "YankRegister",
    "BufferState",
    "Position",
    "Viewport",
    "BufferValidationError",
    "clamp_position",
    "ensure_position",
]
