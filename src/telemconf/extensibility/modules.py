"""TelemetryModule — the "attach to configuration" capability."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from telemconf.extensibility.configuration import TelemetryConfiguration


class TelemetryModule(ABC):
    """Implemented by objects that need the finished configuration.

    After binding completes, the factory calls :meth:`initialize` exactly
    once on every bound channel, initializer and module implementing it.
    """

    @abstractmethod
    def initialize(self, configuration: TelemetryConfiguration) -> None:
        """Receive the fully-bound configuration."""
