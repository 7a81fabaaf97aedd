"""
Walker query synthesis.

The QueryBuilder turns a schema into a single reusable query which, starting
from ``node(id: $id)``, selects the ID of everything directly reachable from
the node: node references and the nodes of connections, one hop deep, for
every node type in the schema.
"""

from __future__ import annotations

import logging
import random
import string
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

from .exceptions import SchemaIntrospectionError
from .language import (
    Argument,
    Document,
    Field,
    InlineFragment,
    OperationDefinition,
    Selection,
    Variable,
    VariableDefinition,
)
from .models import QueryBuilderOptions
from .schema import FieldDefinition, GraphQLSchema, TypeDefinition

logger = logging.getLogger(__name__)

UNALIASED_FIELDS = ("id", "node")


class QueryBuilder:
    """
    Build the generic walker query for a schema.

    The query selects an inline fragment for every node type. Inside each
    fragment there is one selection per node field and per connection, each
    selecting only IDs. Fields whose required arguments cannot be supplied,
    and selections left empty, are dropped.

    Examples:
        ```python
        schema = GraphQLSchema.from_sdl(sdl)
        builder = QueryBuilder(schema, QueryBuilderOptions(connection_arguments={"first": 20}))
        print(builder.query_string)
        ```
    """

    def __init__(
        self,
        schema: GraphQLSchema,
        options: Optional[QueryBuilderOptions] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the builder and build the query.

        Args:
            schema: Schema to build the query for
            options: Builder options
            rng: Randomness source for aliases (seeded from options when omitted)

        Raises:
            SchemaIntrospectionError: If the schema has no usable identity interface
        """
        self.schema = schema
        self.options = options or QueryBuilderOptions()
        self.connection_arguments: Dict[str, Any] = dict(self.options.connection_arguments)
        self._rng = rng or random.Random(self.options.seed)
        self._aliases: Set[str] = set()

        self.node_types = self._find_node_types()
        self._node_type_names = {type_def.name for type_def in self.node_types}

        self.ast = self._build_query()
        self.query_string = self.ast.to_string()

        logger.debug(
            "Built walker query covering %d node types (%d characters)",
            len(self.ast.operation.selections[0].selections) - 1,
            len(self.query_string),
        )

    def _find_node_types(self) -> List[TypeDefinition]:
        """Get the included types implementing the identity interface."""
        name = self.options.node_interface
        interface = self.schema.get_type(name)
        if interface is None:
            raise SchemaIntrospectionError(
                f"Schema has no {name} interface", type_name=name
            )
        if not interface.is_interface:
            raise SchemaIntrospectionError(
                f"{name} is a {interface.kind}, not an interface", type_name=name
            )

        node_types = []
        for type_def in self.schema.implementers(name):
            if type_def.get_field("id") is None:
                raise SchemaIntrospectionError(
                    f"Node type {type_def.name} has no id field", type_name=type_def.name
                )
            if self.include(type_def):
                node_types.append(type_def)
        return node_types

    def include(self, type_def: TypeDefinition) -> bool:
        """
        Check the configured filters for a type.

        Args:
            type_def: Type to check

        Returns:
            True if the type may appear in the query
        """
        if self.options.exclude and self.options.exclude(type_def):
            return False
        if self.options.only and not self.options.only(type_def):
            return False
        if self.options.type_filter and not self.options.type_filter(type_def):
            return False
        return True

    def _build_query(self) -> Document:
        fragments = [self._inline_fragment(type_def) for type_def in self.node_types]

        node_field = Field(
            name="node",
            arguments=(Argument("id", Variable("id")),),
            selections=(Field("id"),) + _compact(fragments),
        )
        operation = OperationDefinition(
            operation="query",
            variable_definitions=(VariableDefinition("id", "ID!"),),
            selections=(node_field,),
        )
        return Document(definitions=(operation,))

    def _inline_fragment(
        self, type_def: TypeDefinition, with_children: bool = True
    ) -> Optional[InlineFragment]:
        """
        Make an inline fragment for a node type.

        With children, the fragment selects every node field and connection
        of the type; without, it selects only the type's ID.
        """
        selections: List[Optional[Selection]] = []
        if with_children:
            for field_def in type_def.fields or ():
                field_type = self.schema.unwrap(field_def.type)
                if self.is_node_field(field_def) and self.include(field_type):
                    selections.append(self._node_field(field_def))
                elif self.is_connection_field(field_def) and self.include(field_type):
                    selections.append(self._connection_field(field_def))
        else:
            id_field = type_def.get_field("id")
            if id_field is not None:
                selections.append(self._field(id_field))

        compacted = _compact(selections)
        if not compacted:
            return None
        return InlineFragment(type_condition=type_def.name, selections=compacted)

    def _field(
        self,
        field_def: FieldDefinition,
        arguments: Optional[Mapping[str, Any]] = None,
        selections: Tuple[Selection, ...] = (),
    ) -> Optional[Field]:
        """
        Make a field node, or None when a required argument is missing.

        Only arguments the field declares are passed on.
        """
        arguments = arguments or {}
        for arg in field_def.args:
            if arg.is_required and arg.name not in arguments:
                return None

        f_args = tuple(
            Argument(name, value)
            for name, value in arguments.items()
            if field_def.get_argument(name) is not None
        )
        f_alias = None if field_def.name in UNALIASED_FIELDS else self._random_alias()
        return Field(
            name=field_def.name, alias=f_alias, arguments=f_args, selections=selections
        )

    def _node_field(self, field_def: FieldDefinition) -> Optional[Field]:
        """Make a field selecting the ID(s) of a referenced node."""
        field_type = self.schema.unwrap(field_def.type)
        if field_type is None:
            return None

        if field_type.is_object:
            id_field = field_type.get_field("id")
            selections = _compact([self._field(id_field)]) if id_field else ()
        else:
            selections = _compact(
                self._inline_fragment(if_type, with_children=False)
                for if_type in self.possible_node_types(field_type)
            )

        if not selections:
            return None
        return self._field(field_def, selections=selections)

    def _edges_field(self, field_def: FieldDefinition) -> Optional[Field]:
        edges_type = self.schema.unwrap(field_def.type)
        node_def = edges_type.get_field("node") if edges_type else None
        if node_def is None:
            return None
        selections = _compact([self._node_field(node_def)])
        if not selections:
            return None
        return self._field(field_def, selections=selections)

    def _connection_field(self, field_def: FieldDefinition) -> Optional[Field]:
        connection_type = self.schema.unwrap(field_def.type)
        edges_def = connection_type.get_field("edges") if connection_type else None
        if edges_def is None:
            return None
        selections = _compact([self._edges_field(edges_def)])
        if not selections:
            return None
        return self._field(field_def, self.connection_arguments, selections=selections)

    def is_node_field(self, field_def: FieldDefinition) -> bool:
        """
        Is this field a reference to a node?

        True if the field's type is a node type, or an interface or union
        with at least one possible node type.
        """
        field_type = self.schema.unwrap(field_def.type)
        if field_type is None:
            return False
        if field_type.is_object:
            return field_type.name in self._node_type_names
        if field_type.is_abstract:
            return bool(self.possible_node_types(field_type))
        return False

    def is_connection_field(self, field_def: FieldDefinition) -> bool:
        """
        Is this field a connection?

        True if the field's type has an ``edges`` field whose type has a
        ``node`` field referencing a node.
        """
        field_type = self.schema.unwrap(field_def.type)
        edges_def = field_type.get_field("edges") if field_type else None
        if edges_def is None:
            return False
        edges_type = self.schema.unwrap(edges_def.type)
        node_def = edges_type.get_field("node") if edges_type else None
        if node_def is None:
            return False
        return self.is_node_field(node_def)

    def possible_node_types(self, type_def: TypeDefinition) -> List[TypeDefinition]:
        """Possible types of an interface or union that are node types."""
        return [
            possible
            for possible in self.schema.possible_types(type_def)
            if possible.name in self._node_type_names
        ]

    def _random_alias(self) -> str:
        """Make a lowercase alias not yet used in this document."""
        while True:
            alias = "".join(
                self._rng.choice(string.ascii_lowercase)
                for _ in range(self.options.alias_length)
            )
            if alias not in self._aliases:
                self._aliases.add(alias)
                return alias


def _compact(selections) -> Tuple[Selection, ...]:
    return tuple(selection for selection in selections if selection is not None)


def build_query(
    schema: GraphQLSchema,
    options: Optional[QueryBuilderOptions] = None,
    rng: Optional[random.Random] = None,
) -> Tuple[Document, str]:
    """
    Build the walker query for a schema.

    Args:
        schema: Schema to build the query for
        options: Builder options
        rng: Randomness source for aliases

    Returns:
        Tuple of (document, query text)
    """
    builder = QueryBuilder(schema, options, rng)
    return builder.ast, builder.query_string
