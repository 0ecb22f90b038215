"""ConfigurationBinder — binds XML definition nodes onto Python objects.

Control flow:

- ``load_from_xml`` hands the document root to ``load_properties``.
- ``load_properties`` walks the target's descriptor table; each property
  matched by a child element (or, failing that, an attribute) goes through
  ``load_instance``, or ``load_instances`` when the property holds a list.
- ``load_instance`` picks the concrete type (``Type`` attribute, existing
  instance, or expected type), constructs or reuses the instance and
  recurses, or converts text for primitive nodes.
- ``load_instances`` processes ``Add`` children, updating a member of the
  same runtime type in place or appending a newly loaded one.

Unknown child elements are an error for properties but silently ignored
inside collections. Both policies are deliberate.

The binder holds no state beyond its registry; one instance can serve
any number of independent loads.
"""

from __future__ import annotations

import inspect
import logging
import typing
from collections.abc import Iterator, MutableSequence
from datetime import timedelta
from decimal import Decimal
from enum import Enum
from typing import Any

from lxml import etree

from telemconf.binding.converters import convert_text, unwrap_optional
from telemconf.binding.descriptors import PropertyDescriptor, is_lenient, property_table
from telemconf.binding.errors import (
    MissingTypeInformationError,
    TypeResolutionError,
    UnknownPropertyError,
    ValueFormatError,
)
from telemconf.binding.registry import TypeRegistry

logger = logging.getLogger(__name__)

TYPE_ATTRIBUTE = "Type"
ADD_ELEMENT = "Add"
NAMESPACE_DECLARATION = "xmlns"

_PRIMITIVE_TYPES: frozenset[type] = frozenset(
    {str, bytes, int, float, bool, Decimal, timedelta}
)


# ---------------------------------------------------------------------------
# Element helpers
# ---------------------------------------------------------------------------


def local_name(node: etree._Element | str) -> str:
    """Return the namespace-free name of an element or attribute key."""
    return etree.QName(node).localname


def child_elements(definition: etree._Element) -> Iterator[etree._Element]:
    """Yield element children, skipping comments and processing instructions."""
    for child in definition:
        if isinstance(child.tag, str):
            yield child


def value_attributes(definition: etree._Element) -> dict[str, str]:
    """Return attributes usable as property values, keyed by local name."""
    attributes: dict[str, str] = {}
    for key, value in definition.attrib.items():
        name = local_name(key)
        if name == NAMESPACE_DECLARATION:
            continue
        attributes[name] = value
    return attributes


def element_text(definition: etree._Element) -> str:
    """Return the trimmed text content of a leaf element.

    Text split by comments or processing instructions is joined back
    together; the comment bodies themselves are not part of the value.
    """
    parts = [definition.text or ""]
    parts.extend(child.tail or "" for child in definition)
    return "".join(parts).strip()


def has_nested_content(definition: etree._Element) -> bool:
    return any(True for _ in child_elements(definition)) or bool(value_attributes(definition))


def _attribute_as_element(name: str, value: str) -> etree._Element:
    element = etree.Element(name)
    element.text = value
    return element


def _is_primitive(target: Any) -> bool:
    inner, _ = unwrap_optional(target)
    if inner in _PRIMITIVE_TYPES:
        return True
    return isinstance(inner, type) and issubclass(inner, Enum)


def _is_assignable(cls: type, expected_type: Any) -> bool:
    inner, _ = unwrap_optional(expected_type)
    if inner is Any or inner is object:
        return True
    if typing.get_origin(inner) is typing.Union:
        return any(_is_assignable(cls, arg) for arg in typing.get_args(inner))
    try:
        return issubclass(cls, inner)
    except TypeError:
        return False


def _is_constructible(target: Any) -> bool:
    """Whether *target* can be built with no arguments and then populated."""
    if not isinstance(target, type) or target is object or _is_primitive(target):
        return False
    if inspect.isabstract(target) or getattr(target, "_is_protocol", False):
        return False
    try:
        signature = inspect.signature(target)
    except (TypeError, ValueError):
        return False
    return all(
        param.default is not inspect.Parameter.empty
        or param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        for param in signature.parameters.values()
    )


def _list_item_type(annotation: Any) -> Any:
    inner, _ = unwrap_optional(annotation)
    if typing.get_origin(inner) is list:
        args = typing.get_args(inner)
        if args:
            return args[0]
    return object


def _is_list_annotation(annotation: Any) -> bool:
    inner, _ = unwrap_optional(annotation)
    return inner is list or typing.get_origin(inner) is list


# ---------------------------------------------------------------------------
# Binder
# ---------------------------------------------------------------------------


class ConfigurationBinder:
    """Reflection-free XML-to-object binder driven by a :class:`TypeRegistry`."""

    def __init__(self, registry: TypeRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> TypeRegistry:
        return self._registry

    def create_instance(self, expected_type: Any, type_name: str) -> Any:
        """Resolve *type_name*, check it against *expected_type*, and build it.

        Raises:
            TypeResolutionError: If the name does not resolve or the type is
                not a subclass of *expected_type*.
        """
        cls = self._registry.resolve(type_name)
        if not _is_assignable(cls, expected_type):
            raise TypeResolutionError(type_name, expected_type)
        instance = self._registry.create(type_name)
        logger.debug("Created %s from Type=%r", cls.__qualname__, type_name)
        return instance

    def load_from_xml(self, configuration: object, document: etree._Element | etree._ElementTree) -> None:
        """Populate *configuration* from the root element of *document*."""
        root = document.getroot() if isinstance(document, etree._ElementTree) else document
        self.load_properties(root, configuration)

    def load_instance(
        self,
        definition: etree._Element | None,
        expected_type: Any,
        instance: Any,
    ) -> Any:
        """Return the object described by *definition*.

        A missing definition returns *instance* unchanged. A ``Type``
        attribute always produces a new instance. Nested content without a
        ``Type`` populates *instance*, or a new *expected_type* when there
        is none. A text-only node is converted to *expected_type*.
        """
        if definition is None:
            return instance

        type_name = definition.get(TYPE_ATTRIBUTE)
        if type_name is not None:
            created = self.create_instance(expected_type, type_name)
            self.load_properties(definition, created)
            return created

        if has_nested_content(definition):
            if instance is None:
                instance = self._construct(definition, expected_type)
            self.load_properties(definition, instance)
            return instance

        text = element_text(definition)
        try:
            return convert_text(text, expected_type)
        except Exception as exc:
            raise ValueFormatError(text, expected_type, element_name=local_name(definition)) from exc

    def load_properties(self, definition: etree._Element, instance: object) -> None:
        """Assign matching child elements and attributes to *instance*'s properties.

        Raises:
            UnknownPropertyError: If a child element (other than ``Add``)
                matches no property and the type is not lenient.
        """
        cls = type(instance)
        table = property_table(cls)
        lenient = is_lenient(cls)

        elements: dict[str, etree._Element] = {}
        for child in child_elements(definition):
            name = local_name(child)
            if name not in table:
                if name == ADD_ELEMENT or lenient:
                    continue
                raise UnknownPropertyError(name, cls)
            elements.setdefault(name, child)
        attributes = value_attributes(definition)

        for name, descriptor in table.items():
            element = elements.get(name)
            if element is not None:
                self._load_property(element, instance, descriptor, from_element=True)
            elif name in attributes:
                source = _attribute_as_element(name, attributes[name])
                self._load_property(source, instance, descriptor, from_element=False)

    def load_instances(
        self,
        definition: etree._Element,
        instances: MutableSequence[Any],
        item_type: Any = object,
    ) -> None:
        """Populate *instances* from the ``Add`` children of *definition*.

        Non-``Add`` children are ignored. A member whose runtime type equals
        the resolved type is updated in place instead of appending a
        duplicate; primitive values are always appended.
        """
        for entry in child_elements(definition):
            if local_name(entry) != ADD_ELEMENT:
                continue

            type_name = entry.get(TYPE_ATTRIBUTE)
            resolved = self._registry.resolve(type_name) if type_name is not None else item_type

            existing = None
            if not _is_primitive(resolved):
                existing = next((item for item in instances if type(item) is resolved), None)

            if existing is not None:
                logger.debug("Updating existing %s in place", type(existing).__qualname__)
                self.load_properties(entry, existing)
                continue

            instances.append(self.load_instance(entry, item_type, None))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _construct(self, definition: etree._Element, expected_type: Any) -> Any:
        inner, _ = unwrap_optional(expected_type)
        if not _is_constructible(inner):
            raise MissingTypeInformationError(local_name(definition), expected_type)
        logger.debug("Constructing default %s for <%s>", inner.__qualname__, local_name(definition))
        return inner()

    def _load_property(
        self,
        source: etree._Element,
        instance: object,
        descriptor: PropertyDescriptor,
        *,
        from_element: bool,
    ) -> None:
        current = descriptor.get(instance)

        if from_element and source.get(TYPE_ATTRIBUTE) is None:
            if isinstance(current, list):
                self.load_instances(source, current, _list_item_type(descriptor.annotation))
                return
            if current is None and descriptor.writable and _is_list_annotation(descriptor.annotation):
                items: list[Any] = []
                self.load_instances(source, items, _list_item_type(descriptor.annotation))
                descriptor.set(instance, items)
                return

        value = self.load_instance(source, descriptor.annotation, current)
        if not descriptor.writable:
            logger.debug("Skipping read-only property %s", descriptor.name)
            return
        descriptor.set(instance, value)
