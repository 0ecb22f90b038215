"""Telemetry and context initializers, plus the built-in defaults."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import Any


class TelemetryInitializer(ABC):
    """Stamps properties on each telemetry item before it is sent."""

    @abstractmethod
    def initialize_telemetry(self, telemetry: Any) -> None:
        """Populate properties of *telemetry*."""


class ContextInitializer(ABC):
    """Populates the shared telemetry context once per client."""

    @abstractmethod
    def initialize_context(self, context: Any) -> None:
        """Populate properties of *context*."""


class TimestampPropertyInitializer(TelemetryInitializer):
    """Sets ``timestamp`` to the current UTC time when the item has none."""

    def initialize_telemetry(self, telemetry: Any) -> None:
        if getattr(telemetry, "timestamp", None) is None:
            telemetry.timestamp = datetime.now(UTC)


class SdkVersionPropertyContextInitializer(ContextInitializer):
    """Records the SDK version on the context."""

    def initialize_context(self, context: Any) -> None:
        from telemconf import __version__

        if not getattr(context, "sdk_version", None):
            context.sdk_version = f"py:{__version__}"
