"""
Read-only schema adapter.

The walker treats a schema as plain data: the standard introspection result,
validated into small pydantic models. Schemas can be loaded from an
introspection payload, from SDL text or from a graphql-core schema object.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

import graphql
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from .exceptions import SchemaIntrospectionError

WRAPPER_KINDS = ("NON_NULL", "LIST")


class TypeRef(BaseModel):
    """Reference to a type, possibly wrapped in NON_NULL / LIST."""

    kind: str
    name: Optional[str] = None
    of_type: Optional[TypeRef] = Field(default=None, alias="ofType")

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    @property
    def is_non_null(self) -> bool:
        return self.kind == "NON_NULL"

    def unwrap(self) -> TypeRef:
        """Strip every NON_NULL and LIST wrapper."""
        ref = self
        while ref.kind in WRAPPER_KINDS and ref.of_type is not None:
            ref = ref.of_type
        return ref

    def __str__(self) -> str:
        if self.kind == "NON_NULL" and self.of_type is not None:
            return f"{self.of_type}!"
        if self.kind == "LIST" and self.of_type is not None:
            return f"[{self.of_type}]"
        return self.name or ""


class InputValue(BaseModel):
    """Field argument."""

    name: str
    type: TypeRef
    default_value: Optional[str] = Field(default=None, alias="defaultValue")

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    @property
    def is_required(self) -> bool:
        """An argument must be supplied when it is non-null and has no default."""
        return self.type.is_non_null and self.default_value is None


class FieldDefinition(BaseModel):
    """Output field of an object or interface type."""

    name: str
    args: List[InputValue] = Field(default_factory=list)
    type: TypeRef

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    def get_argument(self, name: str) -> Optional[InputValue]:
        for arg in self.args:
            if arg.name == name:
                return arg
        return None


class TypeDefinition(BaseModel):
    """Named type from the schema."""

    kind: str
    name: str
    fields: Optional[List[FieldDefinition]] = None
    interfaces: Optional[List[TypeRef]] = None
    possible_types: Optional[List[TypeRef]] = Field(default=None, alias="possibleTypes")

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    @property
    def is_object(self) -> bool:
        return self.kind == "OBJECT"

    @property
    def is_interface(self) -> bool:
        return self.kind == "INTERFACE"

    @property
    def is_union(self) -> bool:
        return self.kind == "UNION"

    @property
    def is_abstract(self) -> bool:
        return self.kind in ("INTERFACE", "UNION")

    def get_field(self, name: str) -> Optional[FieldDefinition]:
        """Get field definition by name."""
        for field_def in self.fields or ():
            if field_def.name == name:
                return field_def
        return None

    def implements(self, interface_name: str) -> bool:
        return any(ref.name == interface_name for ref in self.interfaces or ())


class GraphQLSchema(BaseModel):
    """GraphQL schema information, as returned by introspection."""

    types: List[TypeDefinition] = Field(default_factory=list, description="Schema types")
    query_type: Optional[str] = Field(default=None, description="Root query type name")

    _types_by_name: Dict[str, TypeDefinition] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        self._types_by_name = {type_def.name: type_def for type_def in self.types}

    @classmethod
    def from_introspection(cls, data: Mapping[str, Any]) -> GraphQLSchema:
        """
        Build a schema from an introspection result.

        Args:
            data: ``{"__schema": {...}}``, optionally wrapped in ``{"data": ...}``

        Returns:
            GraphQLSchema instance

        Raises:
            SchemaIntrospectionError: If the payload has no ``__schema`` entry
        """
        if "data" in data and isinstance(data["data"], Mapping):
            data = data["data"]

        schema_data = data.get("__schema")
        if not isinstance(schema_data, Mapping):
            raise SchemaIntrospectionError("Introspection result has no __schema entry")

        query_type = schema_data.get("queryType") or {}
        return cls(
            types=schema_data.get("types") or [],
            query_type=query_type.get("name"),
        )

    @classmethod
    def from_sdl(cls, sdl: str) -> GraphQLSchema:
        """Build a schema from SDL text using graphql-core."""
        return cls.from_graphql_core(graphql.build_schema(sdl))

    @classmethod
    def from_graphql_core(cls, schema: graphql.GraphQLSchema) -> GraphQLSchema:
        """Build a schema from a graphql-core schema object."""
        return cls.from_introspection(graphql.introspection_from_schema(schema))

    def get_type(self, name: Optional[str]) -> Optional[TypeDefinition]:
        """Get type definition by name."""
        if name is None:
            return None
        return self._types_by_name.get(name)

    def unwrap(self, ref: TypeRef) -> Optional[TypeDefinition]:
        """Resolve a (possibly wrapped) type reference to its named type."""
        return self.get_type(ref.unwrap().name)

    def implementers(self, interface_name: str) -> List[TypeDefinition]:
        """Object types implementing the named interface, in schema order."""
        interface = self.get_type(interface_name)
        names = set()
        if interface is not None and interface.possible_types:
            names = {ref.name for ref in interface.possible_types}

        return [
            type_def
            for type_def in self.types
            if type_def.is_object
            and (type_def.name in names or type_def.implements(interface_name))
        ]

    def possible_types(self, type_def: TypeDefinition) -> List[TypeDefinition]:
        """Concrete object types of an interface or union, in schema order."""
        if type_def.is_interface:
            return self.implementers(type_def.name)
        if type_def.is_union:
            names = {ref.name for ref in type_def.possible_types or ()}
            return [t for t in self.types if t.is_object and t.name in names]
        return []


TypeRef.model_rebuild()
