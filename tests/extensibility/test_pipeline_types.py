"""Tests for the built-in channel, initializers and type registration."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from types import SimpleNamespace

from telemconf import __version__
from telemconf.binding.registry import TypeRegistry, qualified_name
from telemconf.extensibility import BUILTIN_TYPES, register_builtin_types
from telemconf.extensibility.channel import DEFAULT_ENDPOINT_ADDRESS, InMemoryChannel
from telemconf.extensibility.configuration import TelemetryConfiguration
from telemconf.extensibility.initializers import (
    SdkVersionPropertyContextInitializer,
    TimestampPropertyInitializer,
)


class TestInMemoryChannel:
    def test_defaults(self) -> None:
        channel = InMemoryChannel()
        assert channel.developer_mode is None
        assert channel.endpoint_address == DEFAULT_ENDPOINT_ADDRESS
        assert channel.max_telemetry_buffer_capacity == 500
        assert channel.sending_interval == timedelta(seconds=30)

    def test_flush_drains_buffer(self) -> None:
        channel = InMemoryChannel()
        channel.send("a")
        channel.send("b")
        assert channel.flush() == ["a", "b"]
        assert len(channel) == 0

    def test_capacity_drops_oldest(self) -> None:
        channel = InMemoryChannel()
        channel.max_telemetry_buffer_capacity = 2
        for item in ("a", "b", "c"):
            channel.send(item)
        assert channel.flush() == ["b", "c"]


class TestInitializers:
    def test_timestamp_is_set_when_missing(self) -> None:
        item = SimpleNamespace(timestamp=None)
        TimestampPropertyInitializer().initialize_telemetry(item)
        assert isinstance(item.timestamp, datetime)
        assert item.timestamp.tzinfo is UTC

    def test_existing_timestamp_is_kept(self) -> None:
        stamp = datetime(2020, 1, 1, tzinfo=UTC)
        item = SimpleNamespace(timestamp=stamp)
        TimestampPropertyInitializer().initialize_telemetry(item)
        assert item.timestamp is stamp

    def test_sdk_version_is_recorded(self) -> None:
        context = SimpleNamespace()
        SdkVersionPropertyContextInitializer().initialize_context(context)
        assert context.sdk_version == f"py:{__version__}"

    def test_existing_sdk_version_is_kept(self) -> None:
        context = SimpleNamespace(sdk_version="custom")
        SdkVersionPropertyContextInitializer().initialize_context(context)
        assert context.sdk_version == "custom"


class TestConfigurationModel:
    def test_defaults(self) -> None:
        configuration = TelemetryConfiguration()
        assert configuration.instrumentation_key is None
        assert configuration.disable_telemetry is False
        assert configuration.telemetry_channel is None
        assert configuration.telemetry_initializers == []
        assert configuration.context_initializers == []
        assert configuration.telemetry_modules == []

    def test_populate_by_alias_or_name(self) -> None:
        assert TelemetryConfiguration(InstrumentationKey="k").instrumentation_key == "k"
        assert TelemetryConfiguration(instrumentation_key="k").instrumentation_key == "k"

    def test_lists_are_not_shared(self) -> None:
        first = TelemetryConfiguration()
        second = TelemetryConfiguration()
        first.telemetry_initializers.append(TimestampPropertyInitializer())
        assert second.telemetry_initializers == []


class TestRegisterBuiltinTypes:
    def test_short_and_qualified_names(self) -> None:
        registry = register_builtin_types(TypeRegistry())
        for cls in BUILTIN_TYPES:
            assert registry.resolve(cls.__name__) is cls
            assert registry.resolve(qualified_name(cls)) is cls
