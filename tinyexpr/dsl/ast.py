"""Expression tree definitions for the tinyexpr language.

The language has a closed set of node variants: integer and boolean literals,
a sentinel standing in for input that failed to lex or parse, and four binary
operators.  Nodes are frozen dataclasses so a tree is immutable once the parser
hands it out, and traversal never has side effects.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import ClassVar, Iterator, Union

# ---------------------------------------------------------------------------
# Shared base


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all expression nodes."""

    def children(self) -> Iterator[Node]:
        """Yield child nodes in declaration order.

        ``dataclasses.fields`` is used so the traversal automatically stays in
        sync with the variant definitions below.
        """

        for spec in fields(self):
            value = getattr(self, spec.name)
            if isinstance(value, Node):
                yield value

    def walk(self) -> Iterator[Node]:
        """Depth-first, pre-order traversal starting at this node."""

        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(tuple(node.children())))


# ---------------------------------------------------------------------------
# Leaves


@dataclass(frozen=True, slots=True)
class SyntaxErrorNode(Node):
    """Sentinel produced for any lexical or syntactic failure."""


@dataclass(frozen=True, slots=True)
class IntLiteral(Node):
    """Integer literal; only ``0``, ``1`` and ``2`` exist in the language."""

    value: int

    def __post_init__(self) -> None:
        if type(self.value) is not int or self.value not in INT_LITERAL_VALUES:
            raise ValueError(f"integer literal must be one of 0, 1, 2 (got {self.value!r})")


@dataclass(frozen=True, slots=True)
class BoolLiteral(Node):
    """``true`` or ``false``."""

    value: bool

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise ValueError(f"boolean literal must be True or False (got {self.value!r})")


# ---------------------------------------------------------------------------
# Binary operators


@dataclass(frozen=True, slots=True)
class BinaryNode(Node):
    """Shared shape of the four operator nodes (``left <op> right``)."""

    symbol: ClassVar[str] = ""

    left: Expression
    right: Expression


@dataclass(frozen=True, slots=True)
class Multiply(BinaryNode):
    symbol: ClassVar[str] = "*"


@dataclass(frozen=True, slots=True)
class Add(BinaryNode):
    symbol: ClassVar[str] = "+"


@dataclass(frozen=True, slots=True)
class And(BinaryNode):
    symbol: ClassVar[str] = "&&"


@dataclass(frozen=True, slots=True)
class Or(BinaryNode):
    symbol: ClassVar[str] = "||"


Expression = Union[SyntaxErrorNode, IntLiteral, BoolLiteral, Multiply, Add, And, Or]

INT_LITERAL_VALUES = (0, 1, 2)


# ---------------------------------------------------------------------------
# Helper functions


def is_node(value: object) -> bool:
    """Return True when ``value`` is an expression node instance."""

    return isinstance(value, Node)


def postorder(root: Node) -> Iterator[Node]:
    """Yield every node of ``root`` after all of its children.

    The passes over the tree (type checking, printing) consume this order so
    each node can be handled once its operands are done.  An explicit stack
    keeps long left-folded chains such as ``1+1+...+1`` away from the
    interpreter recursion limit.
    """

    stack: list[tuple[Node, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            yield node
            continue
        stack.append((node, True))
        for child in reversed(tuple(node.children())):
            stack.append((child, False))


def contains_syntax_error(root: Node) -> bool:
    """Return True when any node below (or at) ``root`` is the error sentinel."""

    return any(isinstance(node, SyntaxErrorNode) for node in root.walk())


__all__ = [
    "Add",
    "And",
    "BinaryNode",
    "BoolLiteral",
    "Expression",
    "INT_LITERAL_VALUES",
    "IntLiteral",
    "Multiply",
    "Node",
    "Or",
    "SyntaxErrorNode",
    "contains_syntax_error",
    "is_node",
    "postorder",
]
