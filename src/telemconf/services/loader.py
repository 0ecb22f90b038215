"""ConfigurationService — load a configuration file and report on it.

Used by the CLI. Binding errors become ``ok=False`` results with a
stable error code so callers can tell failure kinds apart.
"""

from __future__ import annotations

from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Any

from telemconf.binding.binder import ConfigurationBinder
from telemconf.binding.descriptors import property_table
from telemconf.binding.errors import (
    ConfigurationBindingError,
    ConfigurationFileError,
    MissingTypeInformationError,
    TypeResolutionError,
    UnknownPropertyError,
    ValueFormatError,
)
from telemconf.binding.registry import qualified_name
from telemconf.extensibility.configuration import TelemetryConfiguration
from telemconf.factory import TelemetryConfigurationFactory
from telemconf.services.result import ServiceError, ServiceResult

ERROR_CODES: dict[type[ConfigurationBindingError], str] = {
    TypeResolutionError: "TYPE_RESOLUTION",
    ValueFormatError: "VALUE_FORMAT",
    UnknownPropertyError: "UNKNOWN_PROPERTY",
    MissingTypeInformationError: "MISSING_TYPE",
    ConfigurationFileError: "FILE_ERROR",
}


def error_code(exc: ConfigurationBindingError) -> str:
    for cls in type(exc).__mro__:
        code = ERROR_CODES.get(cls)  # type: ignore[call-overload]
        if code is not None:
            return code
    return "BINDING_ERROR"


def _render_value(value: Any) -> Any:
    if value is None or isinstance(value, bool | int | float | str):
        return value
    if isinstance(value, timedelta):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return [_render_value(item) for item in value]
    return qualified_name(type(value))


def describe_object(obj: Any) -> dict[str, Any] | None:
    """Return ``{"type": ..., "properties": {...}}`` for a bound object."""
    if obj is None:
        return None
    properties = {
        name: _render_value(descriptor.get(obj))
        for name, descriptor in property_table(type(obj)).items()
    }
    return {"type": qualified_name(type(obj)), "properties": properties}


def describe_configuration(configuration: TelemetryConfiguration) -> dict[str, Any]:
    """Return a JSON-friendly summary of a bound configuration."""
    return {
        "instrumentation_key": configuration.instrumentation_key,
        "disable_telemetry": configuration.disable_telemetry,
        "telemetry_channel": describe_object(configuration.telemetry_channel),
        "telemetry_initializers": [describe_object(i) for i in configuration.telemetry_initializers],
        "context_initializers": [describe_object(i) for i in configuration.context_initializers],
        "telemetry_modules": [describe_object(m) for m in configuration.telemetry_modules],
    }


class ConfigurationService:
    """Loads configuration files through an injected binder."""

    def __init__(self, binder: ConfigurationBinder) -> None:
        self._binder = binder

    def load(self, path: Path | None, *, op: str = "load") -> ServiceResult:
        """Bind the file at *path* and return its description in ``data``."""
        if path is None:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code="NO_CONFIG", message="No configuration file found"),
            )

        configuration = TelemetryConfiguration()
        try:
            factory = TelemetryConfigurationFactory(self._binder, config_path=path)
            factory.initialize(configuration)
        except ConfigurationBindingError as exc:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code=error_code(exc),
                    message=str(exc),
                    detail={"path": str(path)},
                ),
            )

        warnings: list[str] = []
        if not configuration.instrumentation_key:
            warnings.append("InstrumentationKey is not set")

        return ServiceResult(
            ok=True,
            op=op,
            data={"path": str(path), "configuration": describe_configuration(configuration)},
            warnings=warnings,
        )

    def validate(self, path: Path | None) -> ServiceResult:
        return self.load(path, op="validate")

    def show(self, path: Path | None) -> ServiceResult:
        return self.load(path, op="show")
