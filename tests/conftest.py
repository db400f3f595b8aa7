"""Shared fixtures: a small schema and a generator factory."""

import pytest
from graphql import parse

from gql_csgen.core.config import CSharpOperationsConfig
from gql_csgen.core.generator import CodeGenerator
from gql_csgen.core.parser import build_schema_from_sdl

SCHEMA_SDL = """
scalar Money
scalar Upload

enum Role {
  ADMIN
  USER
}

input UserFilter {
  role: Role
  limit: Int! = 10
  tags: [String!]!
}

interface Node {
  id: ID!
}

type Post implements Node {
  id: ID!
  title: String
  tags: [String]
}

type User implements Node {
  id: ID!
  name: String
  age: Int
  balance: Money
  avatar: Upload
  role: Role!
  posts: [Post!]!
  bestFriend: User
  matrix: [[Int!]]
  labels: [String]!
}

union SearchResult = User | Post

type Query {
  user(id: ID!): User
  users(ids: [String!]!, filter: UserFilter): [User]
  search(term: String!): [SearchResult]
  node(id: ID!): Node
  version: String!
}

type Mutation {
  updateUser(id: ID!, name: String): User
}

type Subscription {
  userChanged(id: ID!): User
}
"""


@pytest.fixture
def schema():
    return build_schema_from_sdl(SCHEMA_SDL)


@pytest.fixture
def make_generator(schema):
    """Build a CodeGenerator for document text and config options."""

    def _make(document: str, **options) -> CodeGenerator:
        config = CSharpOperationsConfig.model_validate(options)
        return CodeGenerator(schema, [parse(document)], config)

    return _make
