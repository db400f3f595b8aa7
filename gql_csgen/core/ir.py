"""Intermediate Representation (IR) for generated C# declarations.

This module defines immutable dataclasses for the value-type descriptors
produced by the type resolver and for the declaration tree produced by the
selection and operation compilers. The renderer turns them into source text.
"""

from dataclasses import dataclass, replace
from typing import Union

from graphql import FragmentDefinitionNode


@dataclass(frozen=True)
class IRBaseType:
    """Represents the element type of a field, variable or input."""
    name: str
    required: bool = False
    value_type: bool = False  # C# struct semantics; nullable form needs '?'


@dataclass(frozen=True)
class IRListType:
    """Represents one list wrapper layer, outermost first."""
    required: bool = False
    inner: "IRListType | None" = None

    @property
    def depth(self) -> int:
        """Number of list layers from this one inwards."""
        return 1 + (self.inner.depth if self.inner else 0)


@dataclass(frozen=True)
class IRFieldType:
    """Resolved value type descriptor for a field, variable or input field."""
    base_type: IRBaseType
    list_type: IRListType | None = None

    @property
    def is_list(self) -> bool:
        return self.list_type is not None

    @property
    def list_depth(self) -> int:
        return self.list_type.depth if self.list_type else 0

    @property
    def is_outer_required(self) -> bool:
        if self.list_type:
            return self.list_type.required
        return self.base_type.required

    @property
    def inner_type_name(self) -> str:
        """Element type name, with '?' for optional value types."""
        nullable = "?" if self.base_type.value_type and not self.base_type.required else ""
        return f"{self.base_type.name}{nullable}"

    def wrap(self, list_name: str = "List") -> str:
        """Return the full C# type name, wrapping one generic per list layer."""
        return f"{list_name}<" * self.list_depth + self.inner_type_name + ">" * self.list_depth

    def as_optional(self) -> "IRFieldType":
        """Copy with the outermost layer (list if any, else base) made optional."""
        if self.list_type:
            return replace(self, list_type=replace(self.list_type, required=False))
        return replace(self, base_type=replace(self.base_type, required=False))

    def with_base_name(self, name: str) -> "IRFieldType":
        """Copy with the element replaced by a generated class of the given name."""
        return replace(self, base_type=IRBaseType(name=name))


@dataclass(frozen=True)
class IRProperty:
    """A serializable property.

    The wire name is the literal key used in the GraphQL payload; the member
    name is the C# identifier. Both are kept explicitly.
    """
    wire_name: str
    member_name: str
    type_name: str


@dataclass(frozen=True)
class IRParameter:
    """A constructor or method parameter."""
    type_name: str
    name: str
    default: str | None = None


@dataclass(frozen=True)
class IRConstructor:
    """Constructor assigning each parameter to its matching property."""
    class_name: str
    parameters: tuple[IRParameter, ...]
    assignments: tuple[tuple[str, str], ...]  # (member_name, parameter_name)


@dataclass(frozen=True)
class IRClass:
    """A generated C# class; members keep declaration order."""
    name: str
    members: tuple["IRMember", ...] = ()
    constructor: IRConstructor | None = None

    @property
    def properties(self) -> tuple[IRProperty, ...]:
        return tuple(m for m in self.members if isinstance(m, IRProperty))

    @property
    def nested_classes(self) -> tuple["IRClass", ...]:
        return tuple(m for m in self.members if isinstance(m, IRClass))


IRMember = Union[IRProperty, IRClass]


@dataclass(frozen=True)
class IREnum:
    """A generated C# enum."""
    name: str
    values: tuple[str, ...]


@dataclass(frozen=True)
class IRMethod:
    """A client method; body is None for interface signatures."""
    return_type: str
    name: str
    parameters: tuple[IRParameter, ...]
    body: str | None = None


@dataclass(frozen=True)
class CompiledField:
    """Result of compiling one field selection."""
    prop: IRProperty
    nested_class: IRClass | None = None

    @property
    def members(self) -> tuple[IRMember, ...]:
        if self.nested_class is not None:
            return (self.nested_class, self.prop)
        return (self.prop,)


@dataclass
class IRFragment:
    """A fragment available for spreading.

    External fragments are supplied by the caller instead of the document set
    and are otherwise compiled identically.
    """
    node: FragmentDefinitionNode
    name: str = ""
    on_type: str = ""
    is_external: bool = False

    def __post_init__(self):
        if not self.name:
            self.name = self.node.name.value
        if not self.on_type:
            self.on_type = self.node.type_condition.name.value
