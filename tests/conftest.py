"""Shared pytest fixtures and test helpers for telemconf tests."""

from __future__ import annotations

import pytest
from click.testing import CliRunner
from lxml import etree

from telemconf.binding.binder import ConfigurationBinder
from telemconf.binding.registry import TypeRegistry
from telemconf.extensibility import register_builtin_types

SETTINGS_NAMESPACE = "http://schemas.microsoft.com/ApplicationInsights/2013/Settings"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def registry() -> TypeRegistry:
    """Registry holding only the built-in channel and initializers."""
    return register_builtin_types(TypeRegistry())


@pytest.fixture
def binder(registry: TypeRegistry) -> ConfigurationBinder:
    return ConfigurationBinder(registry)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def configuration_xml(inner_xml: str) -> str:
    """Wrap *inner_xml* in a namespaced ApplicationInsights root document."""
    return (
        '<?xml version="1.0" encoding="utf-8" ?>\n'
        f'<ApplicationInsights xmlns="{SETTINGS_NAMESPACE}">\n'
        f"{inner_xml}\n"
        "</ApplicationInsights>"
    )


def configuration_root(inner_xml: str) -> etree._Element:
    """Parse :func:`configuration_xml` and return the root element."""
    return etree.fromstring(configuration_xml(inner_xml).encode("utf-8"))


def element(xml: str) -> etree._Element:
    return etree.fromstring(xml)
