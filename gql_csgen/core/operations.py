"""Operation compiler.

Turns one GraphQL operation into its request (variables) class, response
class, client interface signatures and concrete client methods.
"""

import logging

from graphql import (
    FragmentSpreadNode,
    GraphQLObjectType,
    OperationDefinitionNode,
    OperationType,
    Visitor,
    print_ast,
    visit,
)

from .config import CSharpOperationsConfig
from .errors import (
    OperationSchemaNotFoundError,
    UnknownOperationTypeError,
    UnsupportedSelectionError,
)
from .ir import IRClass, IRConstructor, IRMethod, IRParameter, IRProperty
from .naming import MemberScope
from .renderer import indent_multiline
from .selection import SelectionCompiler

logger = logging.getLogger(__name__)

UNTYPED = "object"
REQUEST_PARAMETER = "request"
TRANSPORT_CLIENT = IRParameter("GraphQL.Client.Abstractions.IGraphQLClient", "client")
AUTH_TOKEN = IRParameter("string", "authToken", '""')
HEADERS = IRParameter("Dictionary<string, string>", "headers", "null")
CANCELLATION_TOKEN = IRParameter(
    "System.Threading.CancellationToken", "cancellationToken", "default"
)
EXCEPTION_HANDLER = IRParameter("Action<Exception>", "exceptionHandler")

SEND_METHODS = {
    OperationType.QUERY: "SendQueryAsync",
    OperationType.MUTATION: "SendMutationAsync",
}


class _SpreadCollector(Visitor):
    def __init__(self):
        super().__init__()
        self.names: list[str] = []

    def enter_fragment_spread(self, node: FragmentSpreadNode, *_args):
        if node.name.value not in self.names:
            self.names.append(node.name.value)


def collect_fragment_spreads(node) -> list[str]:
    """Names of fragments spread directly inside a node, in document order."""
    collector = _SpreadCollector()
    visit(node, collector)
    return collector.names


class OperationCompiler:
    """Compiles operations against the schema root types.

    Args:
        selections: Selection compiler holding schema, naming and fragments
        config: Generation options
    """

    def __init__(self, selections: SelectionCompiler, config: CSharpOperationsConfig):
        self.selections = selections
        self.resolver = selections.resolver
        self.schema = selections.schema
        self.naming = selections.naming
        self.config = config

    @property
    def has_http_client(self) -> bool:
        return self.config.http_client_config is not None

    @staticmethod
    def check_operation(node: OperationDefinitionNode):
        """Fail on operation kinds and shapes the compiler cannot handle."""
        if node.operation not in (
            OperationType.QUERY, OperationType.MUTATION, OperationType.SUBSCRIPTION
        ):
            raise UnknownOperationTypeError(getattr(node.operation, "value", str(node.operation)))
        if node.name is None or not node.name.value:
            raise UnsupportedSelectionError("<anonymous>", node.kind)

    def root_type(self, node: OperationDefinitionNode) -> GraphQLObjectType:
        self.check_operation(node)
        root = {
            OperationType.QUERY: self.schema.query_type,
            OperationType.MUTATION: self.schema.mutation_type,
            OperationType.SUBSCRIPTION: self.schema.subscription_type,
        }[node.operation]
        if root is None:
            raise OperationSchemaNotFoundError(node.operation.value)
        return root

    # -------------------------------------------------------------------------
    # Declarations
    # -------------------------------------------------------------------------

    def request_class(self, node: OperationDefinitionNode) -> IRClass | None:
        """Variables class, or None when the operation declares no variables."""
        self.check_operation(node)
        variables = node.variable_definitions or ()
        if not variables:
            return None

        class_name = self.naming.request_class_name(node)
        scope = MemberScope(class_name)
        properties = []
        parameters = []
        assignments = []
        for variable in variables:
            wire_name = variable.variable.name.value
            variable_type = self.resolver.resolve_type_node(
                variable.type, has_default_value=variable.default_value is not None
            )
            type_name = variable_type.wrap()
            member_name = scope.claim(self.naming.property_name(wire_name))
            parameter_name = self.naming.parameter_name(wire_name)
            properties.append(IRProperty(wire_name, member_name, type_name))
            parameters.append(IRParameter(type_name, parameter_name))
            assignments.append((member_name, parameter_name))

        return IRClass(
            name=class_name,
            members=tuple(properties),
            constructor=IRConstructor(class_name, tuple(parameters), tuple(assignments)),
        )

    def response_class(self, node: OperationDefinitionNode) -> IRClass:
        """Response payload class for the operation's root selections."""
        root = self.root_type(node)
        logger.debug("Compiling response of %s %s", node.operation.value, node.name.value)
        return self.selections.compile_class(
            self.naming.response_class_name(node),
            list(node.selection_set.selections),
            root,
            allow_spreads=False,
        )

    # -------------------------------------------------------------------------
    # Document text
    # -------------------------------------------------------------------------

    def fragment_dependencies(self, node: OperationDefinitionNode) -> list[str]:
        """Names of every fragment the operation needs, transitively.

        Returned in fragment-collection order so the output is stable.
        """
        pending = collect_fragment_spreads(node)
        seen: set[str] = set()
        while pending:
            name = pending.pop()
            if name in seen:
                continue
            seen.add(name)
            fragment = self.selections.get_fragment(name)
            pending.extend(collect_fragment_spreads(fragment.node))
        return [name for name in self.selections.fragments if name in seen]

    def document_text(self, node: OperationDefinitionNode) -> str:
        """Operation text plus dependent fragments, quotes doubled for @"..."."""
        parts = [print_ast(node)]
        for name in self.fragment_dependencies(node):
            parts.append(print_ast(self.selections.get_fragment(name).node))
        return "\n".join(parts).replace('"', '""')

    def document_expression(self, node: OperationDefinitionNode) -> str:
        if self.config.document_mode == "external":
            return f"Operations.{node.name.value}"
        return '@"\n' + indent_multiline(self.document_text(node), 2) + '"'

    # -------------------------------------------------------------------------
    # Client methods
    # -------------------------------------------------------------------------

    def payload_type(self, node: OperationDefinitionNode) -> str:
        if not self.config.typesafe_operation:
            return UNTYPED
        return self.naming.response_class_name(node)

    def _leading_parameters(self, node: OperationDefinitionNode) -> list[IRParameter]:
        parameters = []
        if not self.has_http_client:
            parameters.append(TRANSPORT_CLIENT)
        if node.variable_definitions:
            request_type = (
                self.naming.request_class_name(node)
                if self.config.typesafe_operation else UNTYPED
            )
            parameters.append(IRParameter(request_type, REQUEST_PARAMETER))
        return parameters

    def _http_parameters(self) -> list[IRParameter]:
        return [AUTH_TOKEN, HEADERS] if self.has_http_client else []

    def method_signatures(self, node: OperationDefinitionNode) -> list[IRMethod]:
        """Interface signatures: one for queries and mutations, two for subscriptions."""
        self.check_operation(node)
        response = f"GraphQLResponse<{self.payload_type(node)}>"
        leading = self._leading_parameters(node)

        if node.operation == OperationType.SUBSCRIPTION:
            name = self.naming.subscription_method_name(node)
            return_type = f"IObservable<{response}>"
            return [
                IRMethod(return_type, name, tuple(leading + self._http_parameters())),
                IRMethod(
                    return_type,
                    name,
                    tuple(leading + [EXCEPTION_HANDLER] + self._http_parameters()),
                ),
            ]

        return [
            IRMethod(
                f"Task<{response}>",
                self.naming.method_name(node),
                tuple(leading + self._http_parameters() + [CANCELLATION_TOKEN]),
            )
        ]

    def request_statement(self, node: OperationDefinitionNode) -> str:
        """C# statement building the `gqlRequest` object."""
        request_class = "GraphQLHttpRequestWithHeaders" if self.has_http_client else "GraphQLRequest"
        assignments = [f"Query = {self.document_expression(node)}"]
        if self.has_http_client:
            assignments.append("AuthToken = authToken")
            assignments.append("Headers = headers")
        assignments.append(f'OperationName = "{node.name.value}"')
        if node.variable_definitions:
            assignments.append(f"Variables = {REQUEST_PARAMETER}")
        body = indent_multiline(",\n".join(assignments))
        return f"var gqlRequest = new {request_class} {{\n{body}\n}};"

    def concrete_methods(self, node: OperationDefinitionNode) -> list[IRMethod]:
        """Method implementations delegating to the transport client."""
        signatures = self.method_signatures(node)
        payload = self.payload_type(node)
        request = self.request_statement(node)

        if node.operation == OperationType.SUBSCRIPTION:
            plain, with_handler = signatures
            return [
                IRMethod(
                    plain.return_type, plain.name, plain.parameters,
                    f"{request}\nreturn client.CreateSubscriptionStream<{payload}>(gqlRequest);",
                ),
                IRMethod(
                    with_handler.return_type, with_handler.name, with_handler.parameters,
                    f"{request}\nreturn client.CreateSubscriptionStream<{payload}>"
                    "(gqlRequest, exceptionHandler);",
                ),
            ]

        (signature,) = signatures
        send = SEND_METHODS[node.operation]
        return [
            IRMethod(
                signature.return_type, signature.name, signature.parameters,
                f"{request}\nreturn client.{send}<{payload}>(gqlRequest, cancellationToken);",
            )
        ]
