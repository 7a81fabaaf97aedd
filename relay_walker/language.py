"""
Query document nodes and printer.

The walker query is an explicit tree of frozen dataclasses. ``print_ast``
serializes any node to GraphQL text accepted by a server; the output
reparses with graphql-core.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union


@dataclass(frozen=True)
class Variable:
    """Variable reference used as an argument value (``$name``)."""

    name: str


@dataclass(frozen=True)
class EnumValue:
    """Enum literal used as an argument value (printed unquoted)."""

    name: str


@dataclass(frozen=True)
class Argument:
    """Field argument: a name and a literal or variable value."""

    name: str
    value: Any


@dataclass(frozen=True)
class Field:
    """Field selection with an optional alias."""

    name: str
    alias: Optional[str] = None
    arguments: Tuple[Argument, ...] = ()
    selections: Tuple[Selection, ...] = ()

    @property
    def response_key(self) -> str:
        return self.alias or self.name


@dataclass(frozen=True)
class InlineFragment:
    """``... on Type { ... }`` selection."""

    type_condition: str
    selections: Tuple[Selection, ...] = ()


Selection = Union[Field, InlineFragment]


@dataclass(frozen=True)
class VariableDefinition:
    """Operation variable such as ``$id: ID!``."""

    name: str
    type: str


@dataclass(frozen=True)
class OperationDefinition:
    """Single operation of a document."""

    operation: str = "query"
    name: Optional[str] = None
    variable_definitions: Tuple[VariableDefinition, ...] = ()
    selections: Tuple[Selection, ...] = ()


@dataclass(frozen=True)
class Document:
    """Query document."""

    definitions: Tuple[OperationDefinition, ...] = ()

    @property
    def operation(self) -> OperationDefinition:
        return self.definitions[0]

    def to_string(self) -> str:
        return print_ast(self)

    def __str__(self) -> str:
        return print_ast(self)


Node = Union[Document, OperationDefinition, Field, InlineFragment]


def print_ast(node: Node, indent: int = 0) -> str:
    """
    Convert a node to GraphQL text.

    Args:
        node: Document, operation or selection node
        indent: Indentation level

    Returns:
        GraphQL string
    """
    if isinstance(node, Document):
        return "\n\n".join(print_ast(definition, indent) for definition in node.definitions)

    if isinstance(node, OperationDefinition):
        head = node.operation
        if node.name:
            head += f" {node.name}"
        if node.variable_definitions:
            var_defs = ", ".join(
                f"${var.name}: {var.type}" for var in node.variable_definitions
            )
            head += f"({var_defs})"
        return head + _print_selection_set(node.selections, indent)

    if isinstance(node, InlineFragment):
        return f"... on {node.type_condition}" + _print_selection_set(node.selections, indent)

    if isinstance(node, Field):
        result = f"{node.alias}: {node.name}" if node.alias else node.name
        if node.arguments:
            args_str = ", ".join(
                f"{arg.name}: {format_value(arg.value)}" for arg in node.arguments
            )
            result += f"({args_str})"
        if node.selections:
            result += _print_selection_set(node.selections, indent)
        return result

    raise TypeError(f"Cannot print {type(node).__name__}")


def _print_selection_set(selections: Tuple[Selection, ...], indent: int) -> str:
    spaces = "  " * indent
    inner = "  " * (indent + 1)
    lines = [inner + print_ast(selection, indent + 1) for selection in selections]
    return " {\n" + "\n".join(lines) + "\n" + spaces + "}"


def format_value(value: Any) -> str:
    """Format an argument value as a GraphQL literal."""
    if isinstance(value, Variable):
        return f"${value.name}"
    elif isinstance(value, EnumValue):
        return value.name
    elif value is None:
        return "null"
    elif isinstance(value, bool):
        return "true" if value else "false"
    elif isinstance(value, float) and not math.isfinite(value):
        raise TypeError(f"Non-finite float is not a GraphQL literal: {value!r}")
    elif isinstance(value, (int, float)):
        return str(value)
    elif isinstance(value, str):
        return json.dumps(value)
    elif isinstance(value, (list, tuple)):
        items = [format_value(item) for item in value]
        return f"[{', '.join(items)}]"
    elif isinstance(value, dict):
        items = [f"{key}: {format_value(val)}" for key, val in value.items()]
        return f"{{{', '.join(items)}}}"
    else:
        raise TypeError(f"Unsupported argument value: {value!r}")


def iter_fields(node: Node):
    """Yield every Field below ``node``, depth first."""
    if isinstance(node, Document):
        children: Tuple[Any, ...] = node.definitions
    else:
        children = node.selections
    for child in children:
        if isinstance(child, Field):
            yield child
        yield from iter_fields(child)
