"""Terminal modal text editor with a UI-agnostic editing engine."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "config",
    "modes",
    "motions",
    "persistence",
    "render",
    "runtime",
]

__version__ = "0.1.0"
