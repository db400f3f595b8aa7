"""Tests for scalar mappings."""

import pytest

from gql_csgen.core.scalars import (
    CSHARP_SCALARS,
    ScalarMapping,
    ScalarRegistry,
    is_value_type,
)


class TestIsValueType:
    """Tests for is_value_type."""

    @pytest.mark.parametrize("name", ["int", "bool", "double", "decimal", "DateTime"])
    def test_value_types(self, name):
        assert is_value_type(name)

    @pytest.mark.parametrize("name", ["string", "object", "Uri", "List<int>"])
    def test_reference_types(self, name):
        assert not is_value_type(name)


class TestScalarMapping:
    """Tests for ScalarMapping."""

    def test_value_type_derived(self):
        assert ScalarMapping("decimal").value_type is True
        assert ScalarMapping("string").value_type is False

    def test_value_type_override(self):
        assert ScalarMapping("Cursor", value_type=True).value_type is True
        assert ScalarMapping("int", value_type=False).value_type is False


class TestScalarRegistry:
    """Tests for ScalarRegistry."""

    def test_default_mappings(self):
        registry = ScalarRegistry()
        for scalar_name, csharp_type in CSHARP_SCALARS.items():
            assert registry.get(scalar_name).csharp_type == csharp_type

    def test_standard_scalars(self):
        registry = ScalarRegistry()
        assert registry.get("ID").csharp_type == "string"
        assert registry.get("Int").value_type is True
        assert registry.get("Float").csharp_type == "double"
        assert registry.get("Date").csharp_type == "DateTime"

    def test_unknown_scalar(self):
        registry = ScalarRegistry()
        assert registry.get("Money") is None
        assert not registry.has("Money")

    def test_register_custom(self):
        registry = ScalarRegistry()
        registry.register("Money", ScalarMapping("decimal"))
        assert registry.has("Money")
        assert registry.get("Money").csharp_type == "decimal"

    def test_constructor_mappings_override_defaults(self):
        registry = ScalarRegistry({"ID": ScalarMapping("Guid", value_type=True)})
        mapping = registry.get("ID")
        assert mapping.csharp_type == "Guid"
        assert mapping.value_type is True
