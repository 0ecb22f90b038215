"""telemconf — XML configuration loader for the telemetry SDK."""

from __future__ import annotations

__version__ = "0.1.0"
