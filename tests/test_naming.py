"""Tests for name derivation."""

import pytest
from graphql import parse

from gql_csgen.core.naming import (
    MemberScope,
    NamingEngine,
    convert_safe_name,
    pascal_case,
)


def operation(text):
    return parse(text).definitions[0]


class TestPascalCase:
    """Tests for pascal_case."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("getUser", "GetUser"),
            ("user_name", "UserName"),
            ("user-name", "UserName"),
            ("Users", "Users"),
            ("userID", "UserId"),
            ("getHTTPStatus", "GetHttpStatus"),
            ("ALL_CAPS", "AllCaps"),
            ("version2", "Version2"),
            ("address_2", "Address_2"),
            ("__typename", "Typename"),
        ],
    )
    def test_conversion(self, name, expected):
        assert pascal_case(name) == expected


class TestConvertSafeName:
    """Tests for keyword escaping."""

    def test_keyword_is_prefixed(self):
        assert convert_safe_name("class") == "@class"
        assert convert_safe_name("namespace") == "@namespace"

    def test_non_keyword_unchanged(self):
        assert convert_safe_name("Class") == "Class"
        assert convert_safe_name("userId") == "userId"


class TestNamingEngine:
    """Tests for NamingEngine."""

    def test_unknown_convention(self):
        with pytest.raises(ValueError, match="Unknown naming convention"):
            NamingEngine("snake_case")

    def test_response_class_strips_get(self):
        naming = NamingEngine()
        assert naming.response_class_name(operation("query GetUser { version }")) == "UserPayload"
        assert naming.response_class_name(operation("query ListUsers { version }")) == "ListUsersPayload"

    def test_response_class_pascal_cases_first(self):
        naming = NamingEngine()
        assert naming.response_class_name(operation("query getUser { version }")) == "UserPayload"

    def test_request_class_name(self):
        naming = NamingEngine()
        assert naming.request_class_name(operation("query GetUser { version }")) == "GetUserRequest"

    def test_keep_convention(self):
        naming = NamingEngine("keep")
        node = operation("query get_user { version }")
        assert naming.request_class_name(node) == "get_userRequest"
        assert naming.type_name("user_filter") == "user_filter"

    def test_type_name_escapes_keywords(self):
        assert NamingEngine("keep").type_name("event") == "@event"

    @pytest.mark.parametrize(
        "field_name,is_list,expected",
        [
            ("users", True, "UserResult"),
            ("user", False, "UserResult"),
            ("bestFriend", False, "BestFriendResult"),
            ("status", False, "StatusResult"),
            ("data", True, "DataResult"),
        ],
    )
    def test_result_class_name(self, field_name, is_list, expected):
        assert NamingEngine.result_class_name(field_name, is_list) == expected

    def test_property_name(self):
        assert NamingEngine.property_name("firstName") == "FirstName"
        assert NamingEngine.property_name("v2") == "V2"

    def test_parameter_name_escapes_only(self):
        assert NamingEngine.parameter_name("userId") == "userId"
        assert NamingEngine.parameter_name("event") == "@event"

    def test_method_names(self):
        naming = NamingEngine()
        assert naming.method_name(operation("query GetUser { version }")) == "GetUserAsync"
        node = operation("subscription OnUserChanged { version }")
        assert naming.subscription_method_name(node) == "CreateOnUserChangedStream"


class TestMemberScope:
    """Tests for MemberScope."""

    def test_claim_unique(self):
        scope = MemberScope()
        assert scope.claim("Id") == "Id"
        assert scope.claim("Name") == "Name"

    def test_claim_collision_appends_counter(self):
        scope = MemberScope()
        assert scope.claim("Result") == "Result"
        assert scope.claim("Result") == "Result2"
        assert scope.claim("Result") == "Result3"

    def test_class_name_reserved(self):
        scope = MemberScope("Result")
        assert scope.claim("Result") == "Result2"
