"""Scalar mappings for C# code generation.

Maps GraphQL scalar names to C# type names, and records whether the C# type
has value (struct) semantics so optional values can be rendered as nullable.

Example usage:
    from gql_csgen.core.scalars import ScalarMapping, ScalarRegistry

    registry = ScalarRegistry()
    registry.register("Money", ScalarMapping("decimal"))
    registry.register("Cursor", ScalarMapping("CursorToken", value_type=True))

    mapping = registry.get("Money")
    if mapping:
        csharp_type = mapping.csharp_type  # "decimal"
"""

from dataclasses import dataclass

# Built-in C# value types. Types outside this list are treated as references
# unless a mapping says otherwise.
CSHARP_VALUE_TYPES = frozenset({
    "bool", "byte", "sbyte", "char", "decimal", "double", "float", "int",
    "uint", "long", "ulong", "short", "ushort", "DateTime",
})

CSHARP_SCALARS = {
    "ID": "string",
    "String": "string",
    "Boolean": "bool",
    "Int": "int",
    "Float": "double",
    "Date": "DateTime",
}


def is_value_type(csharp_type: str) -> bool:
    """Check whether a C# type name is a known built-in value type."""
    return csharp_type in CSHARP_VALUE_TYPES


@dataclass
class ScalarMapping:
    """How one GraphQL scalar is represented in C#.

    Attributes:
        csharp_type: The C# type name (e.g., "decimal", "DateTime")
        value_type: True for struct semantics; derived from the type name
                    when not given
    """
    csharp_type: str
    value_type: bool | None = None

    def __post_init__(self):
        if self.value_type is None:
            self.value_type = is_value_type(self.csharp_type)


class ScalarRegistry:
    """Registry of scalar mappings.

    Starts with the standard GraphQL scalars; custom mappings registered later
    take precedence.

    Example:
        registry = ScalarRegistry()
        registry.register("DateTime", ScalarMapping("DateTime"))

        mapping = registry.get("DateTime")
        if mapping:
            csharp_type = mapping.csharp_type  # "DateTime"
    """

    def __init__(self, mappings: dict[str, ScalarMapping] | None = None):
        self._mappings: dict[str, ScalarMapping] = {}
        # Register default mappings
        self._register_defaults()
        for scalar_name, mapping in (mappings or {}).items():
            self.register(scalar_name, mapping)

    def _register_defaults(self):
        """Register built-in default mappings."""
        for scalar_name, csharp_type in CSHARP_SCALARS.items():
            self.register(scalar_name, ScalarMapping(csharp_type))

    def register(self, scalar_name: str, mapping: ScalarMapping):
        """Register a mapping for a scalar type."""
        self._mappings[scalar_name] = mapping

    def get(self, scalar_name: str) -> ScalarMapping | None:
        """Get the mapping for a scalar type, or None if not registered."""
        return self._mappings.get(scalar_name)

    def has(self, scalar_name: str) -> bool:
        """Check if a mapping is registered for a scalar type."""
        return scalar_name in self._mappings
