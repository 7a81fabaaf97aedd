"""
Shared test fixtures and configuration for the relay_walker test suite.
"""

import dataclasses

import graphql
import pytest

from relay_walker.language import Document, Field, InlineFragment, OperationDefinition
from relay_walker.schema import GraphQLSchema

PERSON_SDL = """
interface Node {
  id: ID!
}

type Query {
  node(id: ID!): Node
}

type Person implements Node {
  id: ID!
  name: String
  friends(first: Int, after: String): PersonConnection
}

type PersonConnection {
  edges: [PersonEdge]
}

type PersonEdge {
  cursor: String
  node: Person
}
"""

SOCIAL_SDL = """
interface Node {
  id: ID!
}

interface Actor {
  login: String!
}

type Query {
  node(id: ID!): Node
  viewer: User
}

enum Privacy {
  PUBLIC
  PRIVATE
}

input StarOrder {
  field: String!
}

type PageInfo {
  hasNextPage: Boolean!
  endCursor: String
}

type Tag {
  name: String!
}

union SearchResult = Repository | Tag

type User implements Node & Actor {
  id: ID!
  login: String!
  name: String
  avatar(size: Int!): String
  bestFriend: User
  pinned(kind: String!): Repository
  lastActor: Actor
  lastResult: SearchResult
  tags: [Tag!]!
  repositories(first: Int, after: String): RepositoryConnection!
  starred(first: Int, orderBy: StarOrder!): RepositoryConnection
  owned(first: Int, privacy: Privacy = PUBLIC): RepositoryConnection
}

type Organization implements Node & Actor {
  id: ID!
  login: String!
}

type Repository implements Node {
  id: ID!
  name: String!
  owner: User!
  watchers(first: Int): UserConnection
}

type RepositoryConnection {
  edges: [RepositoryEdge]
  pageInfo: PageInfo!
  totalCount: Int!
}

type RepositoryEdge {
  cursor: String!
  node: Repository
}

type UserConnection {
  edges: [UserEdge]
}

type UserEdge {
  node: User
}
"""


@pytest.fixture
def person_sdl() -> str:
    return PERSON_SDL


@pytest.fixture
def social_sdl() -> str:
    return SOCIAL_SDL


@pytest.fixture
def person_schema() -> GraphQLSchema:
    """Schema with a single Person node type and a friends connection."""
    return GraphQLSchema.from_sdl(PERSON_SDL)


@pytest.fixture
def social_schema() -> GraphQLSchema:
    """Schema exercising references, interfaces, unions and gated arguments."""
    return GraphQLSchema.from_sdl(SOCIAL_SDL)


def validate_query(sdl: str, query_text: str) -> list:
    """Validate query text against SDL with graphql-core; returns error messages."""
    errors = graphql.validate(graphql.build_schema(sdl), graphql.parse(query_text))
    return [error.message for error in errors]


def strip_aliases(node):
    """Return a copy of a document node with every alias removed."""
    if isinstance(node, Document):
        return dataclasses.replace(
            node, definitions=tuple(strip_aliases(d) for d in node.definitions)
        )
    selections = tuple(strip_aliases(s) for s in node.selections)
    if isinstance(node, Field):
        return dataclasses.replace(node, alias=None, selections=selections)
    if isinstance(node, (InlineFragment, OperationDefinition)):
        return dataclasses.replace(node, selections=selections)
    raise TypeError(node)


def fragment_types(document: Document) -> list:
    """Type conditions of the fragments directly under ``node``."""
    node_field = document.operation.selections[0]
    return [
        selection.type_condition
        for selection in node_field.selections
        if isinstance(selection, InlineFragment)
    ]


def find_field(node, name: str):
    """First field named ``name`` below ``node``, depth first."""
    for selection in node.selections:
        if isinstance(selection, Field) and selection.name == name:
            return selection
        found = find_field(selection, name)
        if found is not None:
            return found
    return None
