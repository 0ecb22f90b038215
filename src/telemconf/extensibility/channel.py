"""Telemetry channels.

Only the configurable surface lives here; transmission is handled
elsewhere. ``InMemoryChannel`` is the default installed by the factory.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any

DEFAULT_ENDPOINT_ADDRESS = "https://dc.services.visualstudio.com/v2/track"


class TelemetryChannel(ABC):
    """Base class for anything that can sit in ``TelemetryConfiguration.TelemetryChannel``."""

    developer_mode: bool | None
    endpoint_address: str | None

    def __init__(self) -> None:
        self.developer_mode = None
        self.endpoint_address = None

    @abstractmethod
    def send(self, item: Any) -> None:
        """Queue *item* for transmission."""

    @abstractmethod
    def flush(self) -> list[Any]:
        """Hand over everything queued so far."""


class InMemoryChannel(TelemetryChannel):
    """Buffers items in memory until capacity is reached or ``flush`` is called."""

    max_telemetry_buffer_capacity: int
    sending_interval: timedelta

    def __init__(self) -> None:
        super().__init__()
        self.endpoint_address = DEFAULT_ENDPOINT_ADDRESS
        self.max_telemetry_buffer_capacity = 500
        self.sending_interval = timedelta(seconds=30)
        self._items: list[Any] = []

    def send(self, item: Any) -> None:
        self._items.append(item)
        if len(self._items) > self.max_telemetry_buffer_capacity:
            # Oldest items are dropped first.
            del self._items[: len(self._items) - self.max_telemetry_buffer_capacity]

    def flush(self) -> list[Any]:
        items, self._items = self._items, []
        return items

    def __len__(self) -> int:
        return len(self._items)
