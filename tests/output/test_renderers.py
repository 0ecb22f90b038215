"""Tests for ServiceResult rendering."""

import json

from telemconf.output.renderers import format_result
from telemconf.services.result import ServiceError, ServiceResult

_CONFIGURATION = {
    "instrumentation_key": "key",
    "disable_telemetry": False,
    "telemetry_channel": {
        "type": "telemconf.extensibility.channel.InMemoryChannel",
        "properties": {"DeveloperMode": None, "MaxTelemetryBufferCapacity": 500},
    },
    "telemetry_initializers": [
        {"type": "telemconf.extensibility.initializers.TimestampPropertyInitializer", "properties": {}}
    ],
    "context_initializers": [],
    "telemetry_modules": [],
}


def _ok(op: str, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        result = ServiceResult(
            ok=False,
            op="validate",
            error=ServiceError(code="VALUE_FORMAT", message="Element <DeveloperMode>: bad"),
        )
        output = format_result(result)
        assert "ERROR" in output
        assert "[VALUE_FORMAT]" in output
        assert "Element <DeveloperMode>: bad" in output

    def test_no_error_object(self) -> None:
        output = format_result(ServiceResult(ok=False, op="validate"))
        assert "Unknown error" in output


class TestSuccessRenderer:
    def test_validate_prints_path(self) -> None:
        output = format_result(_ok("validate", path="/etc/ApplicationInsights.config"))
        assert output.strip() == "OK /etc/ApplicationInsights.config"

    def test_show_prints_tree(self) -> None:
        output = format_result(_ok("show", path="app.config", configuration=_CONFIGURATION))
        assert "app.config" in output
        assert "InstrumentationKey: key" in output
        assert "telemconf.extensibility.channel.InMemoryChannel" in output
        assert "MaxTelemetryBufferCapacity: 500" in output
        assert "TimestampPropertyInitializer" in output
        assert "TelemetryModules" in output


class TestJsonOutput:
    def test_json_round_trips_result(self) -> None:
        result = _ok("show", path="app.config", configuration=_CONFIGURATION)
        parsed = json.loads(format_result(result, json_output=True))
        assert parsed["ok"] is True
        assert parsed["data"]["configuration"]["instrumentation_key"] == "key"
