"""Runtime services shared by the editor: telemetry and logging."""

from . import telemetry

__all__ = ["telemetry"]
