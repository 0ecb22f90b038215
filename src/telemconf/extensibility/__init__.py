"""Collaborators wired by the binder: configuration, channel, initializers, modules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from telemconf.extensibility.channel import InMemoryChannel, TelemetryChannel
from telemconf.extensibility.configuration import TelemetryConfiguration
from telemconf.extensibility.initializers import (
    ContextInitializer,
    SdkVersionPropertyContextInitializer,
    TelemetryInitializer,
    TimestampPropertyInitializer,
)
from telemconf.extensibility.modules import TelemetryModule

if TYPE_CHECKING:
    from telemconf.binding.registry import TypeRegistry

BUILTIN_TYPES: tuple[type, ...] = (
    InMemoryChannel,
    TimestampPropertyInitializer,
    SdkVersionPropertyContextInitializer,
)


def register_builtin_types(registry: TypeRegistry) -> TypeRegistry:
    """Register the built-in channel and initializers, by qualified and short name."""
    for cls in BUILTIN_TYPES:
        registry.register(cls, aliases=(cls.__name__,))
    return registry


__all__ = [
    "BUILTIN_TYPES",
    "ContextInitializer",
    "InMemoryChannel",
    "SdkVersionPropertyContextInitializer",
    "TelemetryChannel",
    "TelemetryConfiguration",
    "TelemetryInitializer",
    "TelemetryModule",
    "register_builtin_types",
]
