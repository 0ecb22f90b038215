"""Tests for TypeRegistry — registration, lookup, identifier parsing."""

from __future__ import annotations

import pytest

from telemconf.binding.errors import TypeResolutionError
from telemconf.binding.registry import TypeRegistry, normalize_type_name, qualified_name


class _Widget:
    pass


class _Gadget:
    def __init__(self, size: int) -> None:
        self.size = size


class TestNormalizeTypeName:
    def test_strips_assembly_qualification(self) -> None:
        assert normalize_type_name("Pkg.Widget, Pkg, Version=1.0.0.0") == "Pkg.Widget"

    def test_strips_whitespace(self) -> None:
        assert normalize_type_name("  Pkg.Widget  ") == "Pkg.Widget"

    @pytest.mark.parametrize("name", ["", "   ", ", Assembly"])
    def test_empty_name_rejected(self, name: str) -> None:
        with pytest.raises(TypeResolutionError):
            normalize_type_name(name)

    def test_embedded_whitespace_rejected(self) -> None:
        with pytest.raises(TypeResolutionError) as exc_info:
            normalize_type_name("Invalid Type Name")
        assert "Invalid Type Name" in str(exc_info.value)


class TestTypeRegistry:
    def test_resolves_qualified_name(self) -> None:
        registry = TypeRegistry()
        registry.register(_Widget)
        assert registry.resolve(qualified_name(_Widget)) is _Widget

    def test_resolves_alias(self) -> None:
        registry = TypeRegistry()
        registry.register(_Widget, aliases=("Widget",))
        assert registry.resolve("Widget") is _Widget
        assert registry.resolve("Widget, SomeAssembly") is _Widget

    def test_register_works_as_decorator(self) -> None:
        registry = TypeRegistry()

        @registry.register
        class Local:
            pass

        assert registry.resolve(qualified_name(Local)) is Local

    def test_unknown_name_includes_identifier(self) -> None:
        registry = TypeRegistry()
        with pytest.raises(TypeResolutionError) as exc_info:
            registry.resolve("MissingType, MissingAssembly")
        assert "MissingType" in str(exc_info.value)
        assert exc_info.value.type_name == "MissingType, MissingAssembly"

    def test_conflicting_alias_rejected(self) -> None:
        registry = TypeRegistry()
        registry.register(_Widget, aliases=("Thing",))
        with pytest.raises(ValueError, match="already registered"):
            registry.register(_Gadget, aliases=("Thing",))

    def test_re_registering_same_class_is_allowed(self) -> None:
        registry = TypeRegistry()
        registry.register(_Widget)
        registry.register(_Widget, aliases=("Widget",))
        assert registry.resolve("Widget") is _Widget

    def test_non_class_rejected(self) -> None:
        registry = TypeRegistry()
        with pytest.raises(TypeError):
            registry.register(lambda: None)  # type: ignore[arg-type]

    def test_create_uses_class_by_default(self) -> None:
        registry = TypeRegistry()
        registry.register(_Widget, aliases=("Widget",))
        first = registry.create("Widget")
        second = registry.create("Widget")
        assert isinstance(first, _Widget)
        assert first is not second

    def test_create_uses_custom_factory(self) -> None:
        registry = TypeRegistry()
        registry.register(_Gadget, aliases=("Gadget",), factory=lambda: _Gadget(size=3))
        assert registry.create("Gadget").size == 3

    def test_contains_and_names(self) -> None:
        registry = TypeRegistry()
        registry.register(_Widget, aliases=("Widget",))
        assert "Widget" in registry
        assert "Widget, Asm" in registry
        assert "Nope" not in registry
        assert "Bad Name" not in registry
        assert 42 not in registry
        assert registry.names() == sorted([qualified_name(_Widget), "Widget"])
        assert len(registry) == 2
