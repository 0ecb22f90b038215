"""Per-type property descriptor tables.

A table maps the XML-facing property name (PascalCase, matched exactly)
to a get/set accessor pair and the declared type. Tables are built once
per class and cached.

Two kinds of classes are understood:

- Pydantic models: one descriptor per field, named by the field alias
  (or the PascalCase field name when no alias is set). Frozen models and
  frozen fields are read-only.
- Plain classes: public annotated attributes are read-write; public
  ``property`` objects are read-write only when they define a setter.
"""

from __future__ import annotations

import functools
import inspect
import logging
import sys
import typing
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, ClassVar

from pydantic import BaseModel
from pydantic.alias_generators import to_pascal

logger = logging.getLogger(__name__)

_CLASS_VAR_NAMES = frozenset({"ClassVar", "typing.ClassVar"})


@dataclass(frozen=True)
class PropertyDescriptor:
    """Accessor pair for one externally settable property."""

    name: str
    attribute: str
    annotation: Any
    writable: bool

    def get(self, instance: object) -> Any:
        return getattr(instance, self.attribute, None)

    def set(self, instance: object, value: Any) -> None:
        setattr(instance, self.attribute, value)


def is_lenient(cls: type) -> bool:
    """Whether unknown child elements are tolerated on instances of *cls*."""
    return bool(getattr(cls, "__binding_lenient__", False))


@functools.cache
def property_table(cls: type) -> Mapping[str, PropertyDescriptor]:
    """Return the cached descriptor table for *cls*."""
    if issubclass(cls, BaseModel):
        table = _model_table(cls)
    else:
        table = _class_table(cls)
    return MappingProxyType(table)


def _model_table(cls: type[BaseModel]) -> dict[str, PropertyDescriptor]:
    frozen_model = bool(cls.model_config.get("frozen", False))
    table: dict[str, PropertyDescriptor] = {}
    for field_name, info in cls.model_fields.items():
        name = info.alias or to_pascal(field_name)
        table[name] = PropertyDescriptor(
            name=name,
            attribute=field_name,
            annotation=info.annotation,
            writable=not (frozen_model or bool(info.frozen)),
        )
    return table


def _resolve_hint(
    hint: Any,
    globalns: dict[str, Any],
    localns: dict[str, Any] | None = None,
) -> Any:
    """Evaluate a string annotation, falling back to ``Any``.

    Names imported only under ``TYPE_CHECKING`` do not exist at runtime;
    such properties are still bound, just without conversion.
    """
    if not isinstance(hint, str):
        return hint
    try:
        return eval(hint, globalns, localns)  # noqa: S307
    except (NameError, AttributeError, TypeError, SyntaxError):
        logger.debug("Annotation %r is not resolvable at runtime; using Any", hint)
        return Any


def _is_class_var(raw: Any, resolved: Any) -> bool:
    if isinstance(raw, str) and raw.split("[", 1)[0].strip() in _CLASS_VAR_NAMES:
        return True
    return resolved is ClassVar or typing.get_origin(resolved) is ClassVar


def _class_hints(cls: type) -> dict[str, Any]:
    """Resolve annotations across the MRO one attribute at a time."""
    hints: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        module = sys.modules.get(klass.__module__)
        globalns = dict(vars(module)) if module is not None else {}
        localns = dict(vars(klass))
        for attr, raw in inspect.get_annotations(klass).items():
            resolved = _resolve_hint(raw, globalns, localns)
            if _is_class_var(raw, resolved):
                hints.pop(attr, None)
                continue
            hints[attr] = resolved
    return hints


def _class_table(cls: type) -> dict[str, PropertyDescriptor]:
    table: dict[str, PropertyDescriptor] = {}

    for attr, hint in _class_hints(cls).items():
        if attr.startswith("_"):
            continue
        name = to_pascal(attr)
        table[name] = PropertyDescriptor(name=name, attribute=attr, annotation=hint, writable=True)

    seen: set[str] = set()
    for klass in cls.__mro__:
        for attr, value in vars(klass).items():
            if attr in seen or attr.startswith("_") or not isinstance(value, property):
                continue
            seen.add(attr)
            if value.fget is None:
                continue
            name = to_pascal(attr)
            returns = inspect.get_annotations(value.fget).get("return", Any)
            table[name] = PropertyDescriptor(
                name=name,
                attribute=attr,
                annotation=_resolve_hint(returns, value.fget.__globals__),
                writable=value.fset is not None,
            )
    return table
