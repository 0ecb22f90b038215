"""TelemetryConfigurationFactory — defaults, XML binding, module notification.

``initialize`` runs three steps in order:

1. install the built-in defaults (in-memory channel, timestamp
   initializer, SDK-version context initializer);
2. bind the XML document, if any, onto the configuration;
3. call ``TelemetryModule.initialize`` once on every bound object that
   implements it.

The factory receives its binder by injection; there is no process-wide
instance.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, TypeAlias

import structlog
from lxml import etree

from telemconf.binding.binder import ConfigurationBinder
from telemconf.binding.errors import ConfigurationFileError
from telemconf.binding.registry import TypeRegistry
from telemconf.extensibility import register_builtin_types
from telemconf.extensibility.channel import InMemoryChannel
from telemconf.extensibility.configuration import TelemetryConfiguration
from telemconf.extensibility.initializers import (
    SdkVersionPropertyContextInitializer,
    TimestampPropertyInitializer,
)
from telemconf.extensibility.modules import TelemetryModule

log = structlog.get_logger(__name__)

XmlSource: TypeAlias = str | bytes | etree._Element | etree._ElementTree


def _parser() -> etree.XMLParser:
    return etree.XMLParser(remove_comments=True, resolve_entities=False, no_network=True)


def parse_xml(source: str | bytes, *, origin: str = "<string>") -> etree._Element:
    """Parse an XML document and return its root element.

    Raises:
        ConfigurationFileError: If the document is not well-formed.
    """
    data = source.encode("utf-8") if isinstance(source, str) else source
    try:
        return etree.fromstring(data, _parser())
    except etree.XMLSyntaxError as exc:
        raise ConfigurationFileError(origin, str(exc)) from exc


def read_xml(path: Path) -> etree._Element:
    """Read and parse the configuration file at *path*.

    Raises:
        ConfigurationFileError: If the file cannot be read or parsed.
    """
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ConfigurationFileError(str(path), exc.strerror or str(exc)) from exc
    return parse_xml(data, origin=str(path))


def create_default_binder(registry: TypeRegistry | None = None) -> ConfigurationBinder:
    """Return a binder whose registry includes the built-in types."""
    return ConfigurationBinder(register_builtin_types(registry or TypeRegistry()))


class TelemetryConfigurationFactory:
    """Builds a ready-to-use :class:`TelemetryConfiguration`."""

    def __init__(self, binder: ConfigurationBinder, *, config_path: Path | None = None) -> None:
        self._binder = binder
        self._config_path = config_path

    @property
    def binder(self) -> ConfigurationBinder:
        return self._binder

    @property
    def config_path(self) -> Path | None:
        return self._config_path

    def create(self, xml: XmlSource | None = None) -> TelemetryConfiguration:
        """Return a new, fully initialized configuration."""
        configuration = TelemetryConfiguration()
        self.initialize(configuration, xml)
        return configuration

    def initialize(self, configuration: TelemetryConfiguration, xml: XmlSource | None = None) -> None:
        """Install defaults, bind *xml* (or the configured file), and notify modules.

        Raises:
            ConfigurationBindingError: On any binding or parsing failure;
                the configuration may be partially populated and should be
                discarded.
        """
        self._install_defaults(configuration)

        root = self._load_root(xml)
        if root is not None:
            self._binder.load_from_xml(configuration, root)
            log.debug("configuration.bound", root=etree.QName(root).localname)

        self._notify_modules(configuration)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _load_root(self, xml: XmlSource | None) -> etree._Element | None:
        if xml is None:
            if self._config_path is None:
                return None
            return read_xml(self._config_path)
        if isinstance(xml, etree._ElementTree):
            return xml.getroot()
        if isinstance(xml, etree._Element):
            return xml
        return parse_xml(xml)

    @staticmethod
    def _install_defaults(configuration: TelemetryConfiguration) -> None:
        if configuration.telemetry_channel is None:
            configuration.telemetry_channel = InMemoryChannel()
            log.debug("defaults.channel", channel="InMemoryChannel")

        if not any(type(i) is TimestampPropertyInitializer for i in configuration.telemetry_initializers):
            configuration.telemetry_initializers.append(TimestampPropertyInitializer())

        if not any(
            type(i) is SdkVersionPropertyContextInitializer for i in configuration.context_initializers
        ):
            configuration.context_initializers.insert(0, SdkVersionPropertyContextInitializer())

    @staticmethod
    def _notify_modules(configuration: TelemetryConfiguration) -> None:
        candidates: list[Any] = [
            configuration.telemetry_channel,
            *configuration.telemetry_initializers,
            *configuration.context_initializers,
            *configuration.telemetry_modules,
        ]
        seen: set[int] = set()
        for candidate in candidates:
            if not isinstance(candidate, TelemetryModule) or id(candidate) in seen:
                continue
            seen.add(id(candidate))
            candidate.initialize(configuration)
            log.debug("module.initialized", module=type(candidate).__qualname__)
