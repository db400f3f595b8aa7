"""Selection compiler: GraphQL selection sets to nested C# classes.

Each selection is compiled against the schema type it is selected on. Leaf
fields become properties; composite fields become a nested "<Field>Result"
class plus a property typed with it; a field whose only selection is one
fragment spread reuses the fragment's class instead.
"""

import logging
from copy import copy

from graphql import (
    FieldNode,
    FragmentSpreadNode,
    GraphQLField,
    GraphQLNamedType,
    InlineFragmentNode,
    SelectionNode,
    SelectionSetNode,
    TypeNameMetaFieldDef,
    get_named_type,
    is_interface_type,
    is_object_type,
)

from .errors import (
    FieldSchemaNotFoundError,
    FragmentSchemaNotFoundError,
    UnsupportedSelectionError,
)
from .ir import CompiledField, IRClass, IRFragment, IRMember, IRProperty
from .naming import RESULT_SUFFIX, MemberScope, NamingEngine
from .types import TypeResolver

logger = logging.getLogger(__name__)

TYPENAME_FIELD = "__typename"


def response_key(node: FieldNode) -> str:
    """The key a field is returned under: its alias, or its name."""
    return node.alias.value if node.alias else node.name.value


def merge_fields(nodes: list[FieldNode]) -> FieldNode:
    """Merge selections sharing a response key into one field.

    GraphQL returns one value per response key, carrying the union of the
    sub-selections. The first node supplies name, alias and arguments.
    """
    if len(nodes) == 1:
        return nodes[0]
    logger.debug("Merging %d selections of %s", len(nodes), response_key(nodes[0]))
    selections = [
        selection
        for node in nodes if node.selection_set
        for selection in node.selection_set.selections
    ]
    merged = copy(nodes[0])
    merged.selection_set = SelectionSetNode(selections=tuple(selections)) if selections else None
    return merged


class SelectionCompiler:
    """Compiles field selections into IR properties and classes.

    Args:
        resolver: Type resolver bound to the schema
        fragments: Every fragment available for spreading; the first
                   fragment with a given name wins
    """

    def __init__(self, resolver: TypeResolver, fragments: list[IRFragment]):
        self.resolver = resolver
        self.schema = resolver.schema
        self.naming: NamingEngine = resolver.naming
        self.fragments: dict[str, IRFragment] = {}
        for fragment in fragments:
            self.fragments.setdefault(fragment.name, fragment)

    def get_fragment(self, name: str) -> IRFragment:
        fragment = self.fragments.get(name)
        if fragment is None:
            raise FragmentSchemaNotFoundError(name)
        return fragment

    def compile_class(
        self,
        class_name: str,
        selections: list[SelectionNode],
        parent_type: GraphQLNamedType,
        allow_spreads: bool = True,
    ) -> IRClass:
        """Compile a selection set into a class named class_name.

        Args:
            class_name: Name of the generated class
            selections: Selections to compile, in document order
            parent_type: Schema type the selections apply to
            allow_spreads: False for operation and fragment roots, where
                           only fields may appear
        """
        if not allow_spreads:
            for selection in selections:
                if not isinstance(selection, FieldNode):
                    raise UnsupportedSelectionError(class_name, selection.kind)
        scope = MemberScope(class_name)
        members = self.compile_selections(selections, parent_type, scope)
        return IRClass(name=class_name, members=members)

    def compile_selections(
        self,
        selections: list[SelectionNode],
        parent_type: GraphQLNamedType,
        scope: MemberScope,
    ) -> tuple[IRMember, ...]:
        """Compile selections into a flat member list, inlining fragment spreads."""
        members: list[IRMember] = []
        for nodes in self.collect_fields(selections, parent_type).values():
            node = merge_fields(nodes)
            members.extend(self.compile_field(node, parent_type, scope).members)
        return tuple(members)

    def collect_fields(
        self,
        selections: list[SelectionNode],
        parent_type: GraphQLNamedType,
        expanding: frozenset[str] = frozenset(),
    ) -> dict[str, list[FieldNode]]:
        """Group field selections by response key, expanding fragment spreads.

        Keys keep the order of their first occurrence.
        """
        fields: dict[str, list[FieldNode]] = {}
        for selection in selections:
            if isinstance(selection, InlineFragmentNode):
                raise UnsupportedSelectionError(parent_type.name, selection.kind)
            if isinstance(selection, FragmentSpreadNode):
                name = selection.name.value
                fragment = self.get_fragment(name)
                if name in expanding:
                    continue
                spread_fields = self.collect_fields(
                    list(fragment.node.selection_set.selections),
                    parent_type,
                    expanding | {name},
                )
                for key, nodes in spread_fields.items():
                    fields.setdefault(key, []).extend(nodes)
                continue
            fields.setdefault(response_key(selection), []).append(selection)
        return fields

    def _field_schema(self, node: FieldNode, parent_type: GraphQLNamedType) -> GraphQLField:
        field_name = node.name.value
        if field_name == TYPENAME_FIELD:
            return TypeNameMetaFieldDef
        if not is_object_type(parent_type) and not is_interface_type(parent_type):
            # Unions expose no fields without inline fragments
            raise UnsupportedSelectionError(parent_type.name, node.kind)
        field_schema = parent_type.fields.get(field_name)
        if field_schema is None:
            raise FieldSchemaNotFoundError(field_name, parent_type.name)
        return field_schema

    def compile_field(
        self,
        node: FieldNode,
        parent_type: GraphQLNamedType,
        scope: MemberScope | None = None,
    ) -> CompiledField:
        """Compile one field selection into a property and optional nested class."""
        scope = scope or MemberScope()
        field_schema = self._field_schema(node, parent_type)
        field_type = self.resolver.resolve(field_schema.type)
        wire_name = response_key(node)

        if not node.selection_set:
            return CompiledField(
                prop=IRProperty(
                    wire_name=wire_name,
                    member_name=scope.claim(self.naming.property_name(wire_name)),
                    type_name=field_type.wrap(),
                )
            )

        selections = list(node.selection_set.selections)
        if len(selections) == 1 and isinstance(selections[0], FragmentSpreadNode):
            fragment = self.get_fragment(selections[0].name.value)
            type_name = self.naming.fragment_class_name(fragment.name)
            member_name = f"{type_name}s" if field_type.is_list else type_name
            return CompiledField(
                prop=IRProperty(
                    wire_name=wire_name,
                    member_name=scope.claim(member_name),
                    type_name=field_type.with_base_name(type_name).wrap(),
                )
            )

        class_name = scope.claim(self.naming.result_class_name(wire_name, field_type.is_list))
        inner_type = get_named_type(field_schema.type)
        nested_class = self.compile_class(class_name, selections, inner_type)
        return CompiledField(
            prop=IRProperty(
                wire_name=wire_name,
                member_name=scope.claim(RESULT_SUFFIX),
                type_name=field_type.with_base_name(class_name).wrap(),
            ),
            nested_class=nested_class,
        )

    def compile_fragment(self, fragment: IRFragment) -> IRClass:
        """Compile a fragment definition into its own top-level class."""
        type_condition = self.schema.get_type(fragment.on_type)
        if type_condition is None:
            raise FragmentSchemaNotFoundError(fragment.name)
        logger.debug("Compiling fragment %s on %s", fragment.name, fragment.on_type)
        return self.compile_class(
            self.naming.fragment_class_name(fragment.name),
            list(fragment.node.selection_set.selections),
            type_condition,
            allow_spreads=False,
        )
