"""Code generator for C# GraphQL operations.

Compiles every input type, fragment and operation, accumulates the generated
declarations in fixed order and renders the final source file through Jinja2
templates.

Supports custom templates via the template_dir parameter:
    generator = CodeGenerator(schema, documents, config, template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import logging
import os
from pathlib import Path

from graphql import (
    DocumentNode,
    FragmentDefinitionNode,
    GraphQLEnumType,
    GraphQLInputObjectType,
    GraphQLSchema,
    OperationDefinitionNode,
    Undefined,
    is_enum_type,
    is_input_object_type,
)
from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .client_generator import ClientGenerator
from .config import CSharpOperationsConfig
from .errors import OutputExtensionError
from .ir import IRClass, IREnum, IRFragment, IRProperty
from .naming import MemberScope, NamingEngine, convert_safe_name
from .operations import OperationCompiler
from .renderer import render_class, render_enum
from .selection import SelectionCompiler
from .types import TypeResolver

logger = logging.getLogger(__name__)

OUTPUT_EXTENSION = ".cs"

# Lets operations bind to a named client
NAMED_CLIENT_DIRECTIVE = "directive @namedClient(name: String!) on OBJECT | FIELD"

BASE_USINGS = [
    "System",
    "System.Collections.Generic",
    "System.Threading.Tasks",
    "System.Net.Http",
    "System.Net.Http.Headers",
    "Newtonsoft.Json",
    "GraphQL",
    "GraphQL.Client.Abstractions",
]
HTTP_CLIENT_USINGS = ["GraphQL.Client.Serializer.Newtonsoft", "GraphQL.Client.Http"]


def validate_output_file(output_file: str | os.PathLike):
    """Reject output paths without the .cs extension."""
    if os.path.splitext(os.fspath(output_file))[1] != OUTPUT_EXTENSION:
        raise OutputExtensionError(os.fspath(output_file))


class CodeGenerator:
    """Generates one C# source file from a schema and operation documents.

    Args:
        schema: The GraphQL schema operations are compiled against
        documents: Parsed documents holding operations and fragments
        config: Generation options (defaults apply when omitted)
        external_fragments: Fragments supplied from outside the documents
        template_dir: Optional directory with custom Jinja2 templates.
                      Templates here override the built-in templates.

    Available templates to override:
        - operations.cs.j2: file layout (usings and namespace)
        - http_request_class.cs.j2: header-carrying request class
        - response_extensions.cs.j2: HasError helper
    """

    def __init__(
        self,
        schema: GraphQLSchema,
        documents: list[DocumentNode],
        config: CSharpOperationsConfig | None = None,
        external_fragments: list[IRFragment] | None = None,
        template_dir: str | None = None,
    ):
        self.schema = schema
        self.documents = documents
        self.config = config or CSharpOperationsConfig()

        self.fragments = self._collect_fragments(external_fragments or [])
        self.operations = [
            d for doc in documents for d in doc.definitions
            if isinstance(d, OperationDefinitionNode)
        ]

        self.naming = NamingEngine(self.config.naming_convention)
        self.resolver = TypeResolver(schema, self.config.build_scalar_registry(), self.naming)
        self.selection_compiler = SelectionCompiler(self.resolver, self.fragments)
        self.operation_compiler = OperationCompiler(self.selection_compiler, self.config)
        self.client_generator = ClientGenerator(self.config)

        # Build template loader - custom templates take precedence
        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_csgen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
        )

    def _collect_fragments(self, external_fragments: list[IRFragment]) -> list[IRFragment]:
        """Document fragments first, then external ones."""
        fragments = [
            IRFragment(node=d)
            for doc in self.documents for d in doc.definitions
            if isinstance(d, FragmentDefinitionNode)
        ]
        return fragments + list(external_fragments)

    @property
    def input_types(self) -> list[GraphQLInputObjectType]:
        return [
            t for name, t in self.schema.type_map.items()
            if not name.startswith("__") and is_input_object_type(t)
        ]

    @property
    def enum_types(self) -> list[GraphQLEnumType]:
        return [
            t for name, t in self.schema.type_map.items()
            if not name.startswith("__") and is_enum_type(t)
        ]

    def input_class(self, input_type: GraphQLInputObjectType) -> IRClass:
        """Class mirroring an input object type."""
        class_name = self.naming.type_name(input_type.name)
        scope = MemberScope(class_name)
        properties = []
        for field_name, input_field in input_type.fields.items():
            field_type = self.resolver.resolve(
                input_field.type, has_default_value=input_field.default_value is not Undefined
            )
            properties.append(
                IRProperty(
                    field_name, scope.claim(self.naming.property_name(field_name)), field_type.wrap()
                )
            )
        return IRClass(name=class_name, members=tuple(properties))

    def enum_declaration(self, enum_type: GraphQLEnumType) -> IREnum:
        return IREnum(
            name=self.naming.type_name(enum_type.name),
            values=tuple(convert_safe_name(v) for v in enum_type.values),
        )

    def generate(self) -> str:
        """Generate the complete C# source text."""
        typesafe = self.config.typesafe_operation
        logger.info(
            "Generating %s: %d operations, %d fragments (typesafe=%s)",
            self.config.operations_class_name, len(self.operations), len(self.fragments), typesafe,
        )

        input_definitions = []
        fragment_definitions = []
        request_definitions = []
        response_definitions = []
        enum_definitions = []
        if typesafe:
            for input_type in self.input_types:
                input_definitions.append(render_class(self.input_class(input_type)))
            for fragment in self.selection_compiler.fragments.values():
                fragment_definitions.append(
                    render_class(self.selection_compiler.compile_fragment(fragment))
                )

        interface_methods = []
        concrete_methods = []
        for operation in self.operations:
            logger.debug("Compiling operation %s", operation.name.value if operation.name else None)
            interface_methods.extend(self.operation_compiler.method_signatures(operation))
            concrete_methods.extend(self.operation_compiler.concrete_methods(operation))
            # Checked against the schema in every mode
            request = self.operation_compiler.request_class(operation)
            response = self.operation_compiler.response_class(operation)
            if typesafe:
                if request is not None:
                    request_definitions.append(render_class(request))
                response_definitions.append(render_class(response))

        if typesafe:
            for enum_type in self.enum_types:
                enum_definitions.append(render_enum(self.enum_declaration(enum_type)))

        blocks = [
            self.client_generator.generate_interface(interface_methods),
            self.client_generator.generate_class(concrete_methods),
            *request_definitions,
            *response_definitions,
            *fragment_definitions,
            *input_definitions,
            *enum_definitions,
        ]
        if self.config.http_client_config:
            blocks.append(self.env.get_template("http_request_class.cs.j2").render())
        blocks.append(self.env.get_template("response_extensions.cs.j2").render())

        return self.env.get_template("operations.cs.j2").render(
            usings=self.usings,
            namespace_name=self.config.namespace_name,
            content="\n\n".join(blocks),
        ) + "\n"

    @property
    def usings(self) -> list[str]:
        if self.config.http_client_config:
            return BASE_USINGS + HTTP_CLIENT_USINGS
        return list(BASE_USINGS)

    def write(self, output_file: str | os.PathLike) -> str:
        """Validate the output path, generate and write the file."""
        validate_output_file(output_file)
        content = self.generate()
        output_path = Path(output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content)
        logger.info("Wrote %s", output_path)
        return content
