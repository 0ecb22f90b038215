"""Type registry — maps ``Type`` attribute identifiers to factories.

Replaces runtime reflection: the host application registers every class
a configuration document may name, once, at startup. Identifiers are
fully-qualified Python names (``package.module.ClassName``) plus any
aliases given at registration time. An assembly-qualified suffix
(``Name, Assembly, Version=1.0``) is tolerated and ignored for lookup.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from telemconf.binding.errors import TypeResolutionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Registration:
    """A registered type and the zero-argument callable that builds it."""

    cls: type
    factory: Callable[[], Any]


def qualified_name(cls: type) -> str:
    """Return the canonical registry identifier for *cls*."""
    return f"{cls.__module__}.{cls.__qualname__}"


def normalize_type_name(type_name: str) -> str:
    """Strip an assembly-qualified suffix and validate the bare type name.

    Raises:
        TypeResolutionError: If the identifier is empty or the type name
            part contains whitespace.
    """
    bare = type_name.split(",", 1)[0].strip()
    if not bare:
        raise TypeResolutionError(type_name, reason="type name is empty")
    if any(ch.isspace() for ch in bare):
        raise TypeResolutionError(type_name, reason="type name is malformed")
    return bare


class TypeRegistry:
    """Identifier -> factory table consulted when a definition carries ``Type``."""

    def __init__(self) -> None:
        self._entries: dict[str, Registration] = {}

    def register(
        self,
        cls: type,
        *,
        aliases: Iterable[str] = (),
        factory: Callable[[], Any] | None = None,
    ) -> type:
        """Register *cls* under its qualified name and any *aliases*.

        Returns *cls* so the method also works as a class decorator.

        Raises:
            TypeError: If *cls* is not a class.
            ValueError: If a name is already bound to a different class.
        """
        if not isinstance(cls, type):
            msg = f"Only classes can be registered, got {cls!r}"
            raise TypeError(msg)

        registration = Registration(cls=cls, factory=factory or cls)
        for name in (qualified_name(cls), *aliases):
            key = normalize_type_name(name)
            existing = self._entries.get(key)
            if existing is not None and existing.cls is not cls:
                msg = f"Type name {key!r} is already registered to {qualified_name(existing.cls)}"
                raise ValueError(msg)
            self._entries[key] = registration
            logger.debug("Registered type %s as %r", cls.__qualname__, key)
        return cls

    def lookup(self, type_name: str) -> Registration:
        """Return the registration for *type_name*.

        Raises:
            TypeResolutionError: If the name is malformed or unknown.
        """
        key = normalize_type_name(type_name)
        registration = self._entries.get(key)
        if registration is None:
            raise TypeResolutionError(type_name, reason="type is not registered")
        return registration

    def resolve(self, type_name: str) -> type:
        """Return the class registered for *type_name*."""
        return self.lookup(type_name).cls

    def create(self, type_name: str) -> Any:
        """Build a new instance of the type registered for *type_name*."""
        return self.lookup(type_name).factory()

    def names(self) -> list[str]:
        """Return every registered identifier, sorted."""
        return sorted(self._entries)

    def __contains__(self, type_name: object) -> bool:
        if not isinstance(type_name, str):
            return False
        try:
            self.lookup(type_name)
        except TypeResolutionError:
            return False
        return True

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._entries)
