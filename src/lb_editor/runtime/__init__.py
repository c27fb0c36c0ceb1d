"""Runtime services: telemetry and configuration."""

from . import telemetry
from .config import VERSION, EditorConfig

__all__ = ["telemetry", "EditorConfig", "VERSION"]
