"""Binding error taxonomy.

INVARIANT: every error aborts the whole configuration load. Nothing in the
binding layer catches one of these and carries on with partial wiring.
"""

from __future__ import annotations

from typing import Any


def describe_type(target: Any) -> str:
    """Return a fully-qualified, human-readable name for *target*.

    Classes render as ``module.QualName``; annotations such as
    ``int | None`` fall back to their ``repr``.
    """
    if isinstance(target, type):
        if target.__module__ == "builtins":
            return target.__qualname__
        return f"{target.__module__}.{target.__qualname__}"
    return repr(target)


class ConfigurationBindingError(Exception):
    """Base class for all XML-to-object binding failures."""


class TypeResolutionError(ConfigurationBindingError):
    """A ``Type`` identifier did not resolve, or resolved to the wrong kind of type."""

    def __init__(
        self,
        type_name: str,
        required_type: Any = None,
        *,
        reason: str | None = None,
    ) -> None:
        self.type_name = type_name
        self.required_type = required_type
        if required_type is not None:
            msg = (
                f"Type {type_name!r} does not implement the required type "
                f"{describe_type(required_type)!r}"
            )
        else:
            msg = f"Type {type_name!r} could not be resolved"
            if reason:
                msg = f"{msg}: {reason}"
        super().__init__(msg)


class ValueFormatError(ConfigurationBindingError):
    """Element text could not be converted to the target type."""

    def __init__(self, text: str, target_type: Any, *, element_name: str | None = None) -> None:
        self.text = text
        self.target_type = target_type
        self.element_name = element_name
        msg = f"Invalid value {text!r} for type {describe_type(target_type)!r}"
        if element_name is not None:
            msg = f"Element <{element_name}>: {msg}"
        super().__init__(msg)


class UnknownPropertyError(ConfigurationBindingError):
    """A child element names no settable property on the target type."""

    def __init__(self, element_name: str, target_type: type) -> None:
        self.element_name = element_name
        self.target_type = target_type
        msg = (
            f"Element <{element_name}> does not match any property of type "
            f"{describe_type(target_type)!r}"
        )
        super().__init__(msg)


class MissingTypeInformationError(ConfigurationBindingError):
    """An instance must be constructed but nothing says which type to use."""

    def __init__(self, element_name: str, expected_type: Any = None) -> None:
        self.element_name = element_name
        self.expected_type = expected_type
        msg = f"Element <{element_name}> must specify a 'Type' attribute"
        if expected_type is not None:
            msg = f"{msg}; {describe_type(expected_type)!r} cannot be constructed directly"
        super().__init__(msg)


class ConfigurationFileError(ConfigurationBindingError):
    """The configuration document could not be read or parsed."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot load configuration from {source}: {reason}")
