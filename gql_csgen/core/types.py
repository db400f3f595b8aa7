"""Type resolution: GraphQL type references to C# value type descriptors."""

from graphql import (
    GraphQLList,
    GraphQLNonNull,
    GraphQLSchema,
    GraphQLType,
    TypeNode,
    get_named_type,
    is_enum_type,
    is_input_object_type,
    is_scalar_type,
    print_ast,
    type_from_ast,
)

from .errors import TypeSchemaNotFoundError
from .ir import IRBaseType, IRFieldType, IRListType
from .naming import NamingEngine
from .scalars import ScalarRegistry

UNTYPED_FALLBACK = "object"


def get_list_type_field(type_: GraphQLType) -> IRListType | None:
    """Build the list layer chain of a type, outermost first.

    Each layer carries its own requiredness; None when the type is not a list.
    """
    if isinstance(type_, GraphQLList):
        return IRListType(required=False, inner=get_list_type_field(type_.of_type))
    if isinstance(type_, GraphQLNonNull):
        inner = type_.of_type
        if isinstance(inner, GraphQLList):
            return IRListType(required=True, inner=get_list_type_field(inner.of_type))
        return get_list_type_field(inner)
    return None


def get_list_inner_type(type_: GraphQLType) -> GraphQLType:
    """Strip every list layer, keeping the innermost non-null wrapper."""
    if isinstance(type_, GraphQLList):
        return get_list_inner_type(type_.of_type)
    if isinstance(type_, GraphQLNonNull) and isinstance(type_.of_type, GraphQLList):
        return get_list_inner_type(type_.of_type)
    return type_


class TypeResolver:
    """Resolves GraphQL types against the schema and scalar mappings."""

    def __init__(
        self,
        schema: GraphQLSchema,
        scalars: ScalarRegistry | None = None,
        naming: NamingEngine | None = None,
    ):
        self.schema = schema
        self.scalars = scalars or ScalarRegistry()
        self.naming = naming or NamingEngine()

    def resolve(self, type_: GraphQLType, has_default_value: bool = False) -> IRFieldType:
        """Resolve a schema type reference to an IRFieldType.

        Args:
            type_: Field, argument or input field type, wrappers included
            has_default_value: Forces the outermost layer optional, since a
                               declared default lets the caller omit the value
        """
        named_type = get_named_type(type_)
        list_type = get_list_type_field(type_)
        required = isinstance(get_list_inner_type(type_), GraphQLNonNull)

        if is_scalar_type(named_type):
            mapping = self.scalars.get(named_type.name)
            if mapping:
                base_type = IRBaseType(mapping.csharp_type, required, mapping.value_type)
            else:
                base_type = IRBaseType(UNTYPED_FALLBACK, required, False)
        elif is_input_object_type(named_type):
            base_type = IRBaseType(self.naming.type_name(named_type.name), required, False)
        elif is_enum_type(named_type):
            base_type = IRBaseType(self.naming.type_name(named_type.name), required, True)
        else:
            base_type = IRBaseType(named_type.name, required, False)

        result = IRFieldType(base_type=base_type, list_type=list_type)
        if has_default_value:
            result = result.as_optional()
        return result

    def resolve_type_node(self, type_node: TypeNode, has_default_value: bool = False) -> IRFieldType:
        """Resolve a type written in a document, such as a variable type."""
        type_ = type_from_ast(self.schema, type_node)
        if type_ is None:
            raise TypeSchemaNotFoundError(print_ast(type_node))
        return self.resolve(type_, has_default_value)
