"""Runtime services (telemetry) shared across the editor."""

from . import telemetry

__all__ = ["telemetry"]
