"""Structural type checking for tinyexpr expressions.

There are no variables and hence no environment: the type of a node follows
from its variant and the types of its two children alone.  Three verdicts
exist.  ``ILL_TYPED`` is absorbing: it never satisfies an operator's operand
requirement, so one bad operand makes every enclosing expression ill typed.

The pass is a post-order fold over the tree driven by an explicit stack, so it
handles arbitrarily long operator chains without touching the recursion limit.
"""

from __future__ import annotations

from enum import Enum

from . import ast

__all__ = ["Type", "TypeSystemError", "format_type", "infer", "infer_all"]


class TypeSystemError(TypeError):
    """Raised when the checker is handed something that is not an expression."""


class Type(Enum):
    INT = "Int"
    BOOL = "Bool"
    ILL_TYPED = "IllTyped"


def format_type(value: Type) -> str:
    """Render ``value`` the way reports display it (``Int``/``Bool``/``IllTyped``)."""

    return value.value


def _require(operand: Type, other: Type, expected: Type) -> Type:
    if operand is expected and other is expected:
        return expected
    return Type.ILL_TYPED


def _infer_node(node: ast.Node, types: dict[int, Type]) -> Type:
    match node:
        case ast.IntLiteral():
            return Type.INT
        case ast.BoolLiteral():
            return Type.BOOL
        case ast.SyntaxErrorNode():
            return Type.ILL_TYPED
        case ast.Add(left=left, right=right) | ast.Multiply(left=left, right=right):
            return _require(types[id(left)], types[id(right)], Type.INT)
        case ast.And(left=left, right=right) | ast.Or(left=left, right=right):
            return _require(types[id(left)], types[id(right)], Type.BOOL)
        case _:
            raise TypeSystemError(f"cannot type {type(node).__name__}")


def infer_all(expr: ast.Expression) -> dict[int, Type]:
    """Return the type of every node in ``expr`` keyed by ``id(node)``."""

    if not ast.is_node(expr):
        raise TypeSystemError(f"expected an expression node, got {type(expr).__name__}")
    types: dict[int, Type] = {}
    for node in ast.postorder(expr):
        types[id(node)] = _infer_node(node, types)
    return types


def infer(expr: ast.Expression) -> Type:
    """Return the type verdict for ``expr``."""

    return infer_all(expr)[id(expr)]
