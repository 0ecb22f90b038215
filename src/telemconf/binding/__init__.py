"""XML-to-object configuration binding."""

from telemconf.binding.binder import ConfigurationBinder
from telemconf.binding.errors import (
    ConfigurationBindingError,
    ConfigurationFileError,
    MissingTypeInformationError,
    TypeResolutionError,
    UnknownPropertyError,
    ValueFormatError,
)
from telemconf.binding.registry import TypeRegistry

__all__ = [
    "ConfigurationBinder",
    "ConfigurationBindingError",
    "ConfigurationFileError",
    "MissingTypeInformationError",
    "TypeRegistry",
    "TypeResolutionError",
    "UnknownPropertyError",
    "ValueFormatError",
]
