"""TelemetryConfiguration — root object of the bound pipeline.

Field aliases are the XML element names (``InstrumentationKey``,
``TelemetryChannel``, ...). Unknown top-level sections are tolerated so
other tools can keep their own settings in the same document.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_pascal

from telemconf.extensibility.channel import TelemetryChannel
from telemconf.extensibility.initializers import ContextInitializer, TelemetryInitializer
from telemconf.extensibility.modules import TelemetryModule


class TelemetryConfiguration(BaseModel):
    """Mutable configuration populated by :class:`~telemconf.factory.TelemetryConfigurationFactory`."""

    model_config = {
        "alias_generator": to_pascal,
        "populate_by_name": True,
        "arbitrary_types_allowed": True,
    }

    __binding_lenient__ = True

    instrumentation_key: str | None = None
    disable_telemetry: bool = False
    telemetry_channel: TelemetryChannel | None = None
    telemetry_initializers: list[TelemetryInitializer] = Field(default_factory=list)
    context_initializers: list[ContextInitializer] = Field(default_factory=list)
    # Read-only: populated in place from <TelemetryModules><Add .../></TelemetryModules>.
    telemetry_modules: list[TelemetryModule] = Field(default_factory=list, frozen=True)
