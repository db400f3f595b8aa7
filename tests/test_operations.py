"""Tests for the operation compiler."""

import pytest
from graphql import parse

from gql_csgen.core.errors import (
    OperationSchemaNotFoundError,
    TypeSchemaNotFoundError,
    UnknownOperationTypeError,
    UnsupportedSelectionError,
)
from gql_csgen.core.generator import CodeGenerator
from gql_csgen.core.ir import IRConstructor, IRMethod, IRParameter, IRProperty
from gql_csgen.core.operations import (
    AUTH_TOKEN,
    CANCELLATION_TOKEN,
    EXCEPTION_HANDLER,
    HEADERS,
    TRANSPORT_CLIENT,
    collect_fragment_spreads,
)
from gql_csgen.core.parser import build_schema_from_sdl
from gql_csgen.core.renderer import render_class

GET_USERS = "query GetUsers($ids: [String!]!) { users(ids: $ids) { id name } }"
UPDATE_USER = (
    "mutation UpdateUser($id: ID!, $name: String) "
    "{ updateUser(id: $id, name: $name) { id } }"
)
ON_USER_CHANGED = "subscription OnUserChanged($id: ID!) { userChanged(id: $id) { id } }"
HTTP_CONFIG = {"prodEndpoint": "https://api.example.com/graphql"}


def compiled(make_generator, document, **options):
    generator = make_generator(document, **options)
    return generator.operation_compiler, generator.operations[0]


class TestRequestClass:
    """Tests for request (variables) classes."""

    def test_no_variables(self, make_generator):
        compiler, node = compiled(make_generator, "query GetVersion { version }")
        assert compiler.request_class(node) is None

    def test_list_variable(self, make_generator):
        compiler, node = compiled(make_generator, GET_USERS)
        request = compiler.request_class(node)
        assert request.name == "GetUsersRequest"
        assert request.properties == (IRProperty("ids", "Ids", "List<string>"),)
        assert request.constructor == IRConstructor(
            "GetUsersRequest",
            (IRParameter("List<string>", "ids"),),
            (("Ids", "ids"),),
        )

    def test_variables_keep_order(self, make_generator):
        compiler, node = compiled(make_generator, UPDATE_USER)
        request = compiler.request_class(node)
        assert [p.wire_name for p in request.properties] == ["id", "name"]
        assert [p.name for p in request.constructor.parameters] == ["id", "name"]

    def test_default_value_makes_variable_optional(self, make_generator):
        compiler, node = compiled(
            make_generator, "query Count($flag: Boolean! = true) { version }"
        )
        assert compiler.request_class(node).properties[0].type_name == "bool?"

    def test_capitalized_variable_assigned_through_this(self, make_generator):
        compiler, node = compiled(
            make_generator,
            'mutation Upd($Name: String) { updateUser(id: "1", name: $Name) { id } }',
        )
        code = render_class(compiler.request_class(node))
        assert "  public UpdRequest(string Name) {\n    this.Name = Name;\n  }" in code

    def test_member_named_like_class_is_renamed(self, make_generator):
        compiler, node = compiled(make_generator, "query Foo($fooRequest: String) { version }")
        request = compiler.request_class(node)
        assert request.name == "FooRequest"
        assert request.properties == (IRProperty("fooRequest", "FooRequest2", "string"),)
        assert request.constructor.assignments == (("FooRequest2", "fooRequest"),)

    def test_colliding_member_names(self, make_generator):
        compiler, node = compiled(
            make_generator, "query Find($userId: ID, $user_id: ID) { version }"
        )
        request = compiler.request_class(node)
        assert [p.member_name for p in request.properties] == ["UserId", "UserId2"]
        assert [p.name for p in request.constructor.parameters] == ["userId", "user_id"]

    def test_keyword_variable(self, make_generator):
        compiler, node = compiled(make_generator, "query Find($class: ID!) { version }")
        request = compiler.request_class(node)
        assert request.properties[0].member_name == "Class"
        assert request.constructor.parameters[0].name == "@class"

    def test_input_and_enum_variables(self, make_generator):
        compiler, node = compiled(
            make_generator,
            "query Filter($filter: UserFilter, $role: Role) { version }",
        )
        request = compiler.request_class(node)
        assert [p.type_name for p in request.properties] == ["UserFilter", "Role?"]

    def test_unknown_variable_type(self, make_generator):
        compiler, node = compiled(make_generator, "query Broken($x: Nope) { version }")
        with pytest.raises(TypeSchemaNotFoundError):
            compiler.request_class(node)


class TestOperationChecks:
    """Tests for operations the compiler rejects."""

    def test_anonymous_operation(self, make_generator):
        compiler, node = compiled(make_generator, "{ version }")
        with pytest.raises(UnsupportedSelectionError):
            compiler.method_signatures(node)

    def test_unknown_operation_type(self, make_generator):
        compiler, node = compiled(make_generator, "query GetVersion { version }")
        node.operation = "fragment"
        with pytest.raises(UnknownOperationTypeError, match="fragment"):
            compiler.method_signatures(node)

    def test_missing_root_type(self):
        schema = build_schema_from_sdl("type Query { version: String }")
        generator = CodeGenerator(schema, [parse("mutation Bump { version }")])
        with pytest.raises(OperationSchemaNotFoundError, match="mutation"):
            generator.operation_compiler.response_class(generator.operations[0])


class TestDocumentText:
    """Tests for the embedded operation document."""

    FRAGMENTS = (
        "fragment Unused on User { id }\n"
        "fragment PostInfo on Post { id title }\n"
        "fragment UserWithPosts on User { name posts { ...PostInfo } }\n"
    )

    def test_collect_fragment_spreads(self):
        node = parse('query GetUser { user(id: "1") { ...A bestFriend { ...B ...A } } }')
        assert collect_fragment_spreads(node.definitions[0]) == ["A", "B"]

    def test_transitive_dependencies(self, make_generator):
        compiler, node = compiled(
            make_generator,
            self.FRAGMENTS + 'query GetUser { user(id: "1") { ...UserWithPosts } }',
        )
        assert compiler.fragment_dependencies(node) == ["PostInfo", "UserWithPosts"]

    def test_document_text_appends_fragments(self, make_generator):
        generator = make_generator(
            self.FRAGMENTS + 'query GetUser { user(id: "1") { ...UserWithPosts } }'
        )
        text = generator.operation_compiler.document_text(generator.operations[0])
        assert text.startswith("query GetUser {")
        assert "fragment Unused" not in text
        assert text.index("fragment PostInfo") < text.index("fragment UserWithPosts")

    def test_quotes_doubled(self, make_generator):
        compiler, node = compiled(make_generator, 'query GetUser { user(id: "1") { id } }')
        assert 'user(id: ""1"")' in compiler.document_text(node)

    def test_external_document_mode(self, make_generator):
        compiler, node = compiled(
            make_generator, "query GetVersion { version }", document_mode="external"
        )
        assert compiler.document_expression(node) == "Operations.GetVersion"

    def test_request_statement(self, make_generator):
        compiler, node = compiled(make_generator, "query GetVersion { version }")
        assert compiler.request_statement(node) == (
            "var gqlRequest = new GraphQLRequest {\n"
            '  Query = @"\n'
            "      query GetVersion {\n"
            "        version\n"
            '      }",\n'
            '  OperationName = "GetVersion"\n'
            "};"
        )

    def test_request_statement_with_headers(self, make_generator):
        compiler, node = compiled(make_generator, GET_USERS, http_client_config=HTTP_CONFIG)
        statement = compiler.request_statement(node)
        assert statement.startswith("var gqlRequest = new GraphQLHttpRequestWithHeaders {")
        assert "  AuthToken = authToken,\n  Headers = headers,\n" in statement
        assert statement.endswith('  OperationName = "GetUsers",\n  Variables = request\n};')


class TestMethodSignatures:
    """Tests for client interface signatures."""

    def test_untyped_query(self, make_generator):
        compiler, node = compiled(make_generator, GET_USERS)
        assert compiler.method_signatures(node) == [
            IRMethod(
                "Task<GraphQLResponse<object>>",
                "GetUsersAsync",
                (TRANSPORT_CLIENT, IRParameter("object", "request"), CANCELLATION_TOKEN),
            )
        ]

    def test_typesafe_query(self, make_generator):
        compiler, node = compiled(make_generator, GET_USERS, typesafe_operation=True)
        (method,) = compiler.method_signatures(node)
        assert method.return_type == "Task<GraphQLResponse<UsersPayload>>"
        assert method.parameters[1] == IRParameter("GetUsersRequest", "request")

    def test_no_request_parameter_without_variables(self, make_generator):
        compiler, node = compiled(make_generator, "query GetVersion { version }")
        (method,) = compiler.method_signatures(node)
        assert method.parameters == (TRANSPORT_CLIENT, CANCELLATION_TOKEN)

    def test_http_client_parameters(self, make_generator):
        compiler, node = compiled(make_generator, GET_USERS, http_client_config=HTTP_CONFIG)
        (method,) = compiler.method_signatures(node)
        assert method.parameters == (
            IRParameter("object", "request"), AUTH_TOKEN, HEADERS, CANCELLATION_TOKEN
        )

    def test_subscription_overloads(self, make_generator):
        compiler, node = compiled(make_generator, ON_USER_CHANGED, typesafe_operation=True)
        plain, with_handler = compiler.method_signatures(node)
        assert plain.name == with_handler.name == "CreateOnUserChangedStream"
        assert plain.return_type == "IObservable<GraphQLResponse<OnUserChangedPayload>>"
        assert plain.parameters == (
            TRANSPORT_CLIENT, IRParameter("OnUserChangedRequest", "request")
        )
        assert with_handler.parameters == plain.parameters + (EXCEPTION_HANDLER,)

    def test_subscription_with_http_client(self, make_generator):
        compiler, node = compiled(make_generator, ON_USER_CHANGED, http_client_config=HTTP_CONFIG)
        _, with_handler = compiler.method_signatures(node)
        assert with_handler.parameters == (
            IRParameter("object", "request"), EXCEPTION_HANDLER, AUTH_TOKEN, HEADERS
        )


class TestConcreteMethods:
    """Tests for client method bodies."""

    def test_query_body(self, make_generator):
        compiler, node = compiled(make_generator, GET_USERS, typesafe_operation=True)
        (method,) = compiler.concrete_methods(node)
        assert method.body.startswith("var gqlRequest = new GraphQLRequest {")
        assert method.body.endswith(
            "return client.SendQueryAsync<UsersPayload>(gqlRequest, cancellationToken);"
        )

    def test_mutation_body(self, make_generator):
        compiler, node = compiled(make_generator, UPDATE_USER)
        (method,) = compiler.concrete_methods(node)
        assert method.name == "UpdateUserAsync"
        assert method.body.endswith(
            "return client.SendMutationAsync<object>(gqlRequest, cancellationToken);"
        )

    def test_subscription_bodies(self, make_generator):
        compiler, node = compiled(make_generator, ON_USER_CHANGED)
        plain, with_handler = compiler.concrete_methods(node)
        assert plain.body.endswith("return client.CreateSubscriptionStream<object>(gqlRequest);")
        assert with_handler.body.endswith(
            "return client.CreateSubscriptionStream<object>(gqlRequest, exceptionHandler);"
        )
