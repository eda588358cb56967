"""Canonical text rendering for expression trees.

The printer normalizes rather than preserves: source whitespace is gone and
every binary node is wrapped in parentheses, so ``1 + 1 + 0`` prints as
``((1+1)+0)``.  Reparsing printed text yields the same tree shape.
"""

from __future__ import annotations

from . import ast

SYNTAX_ERROR_TEXT = "Syntax Error"


def _render_node(node: ast.Node, rendered: dict[int, str]) -> str:
    match node:
        case ast.IntLiteral(value=value):
            return str(value)
        case ast.BoolLiteral(value=value):
            return "true" if value else "false"
        case ast.SyntaxErrorNode():
            return SYNTAX_ERROR_TEXT
        case ast.Multiply() | ast.Add() | ast.And() | ast.Or():
            return f"({rendered[id(node.left)]}{node.symbol}{rendered[id(node.right)]})"
        case _:
            raise TypeError(f"cannot print {type(node).__name__}")


def pretty(expr: ast.Expression) -> str:
    """Return the canonical infix text of ``expr``."""

    if not ast.is_node(expr):
        raise TypeError(f"expected an expression node, got {type(expr).__name__}")
    rendered: dict[int, str] = {}
    for node in ast.postorder(expr):
        rendered[id(node)] = _render_node(node, rendered)
    return rendered[id(expr)]


__all__ = ["SYNTAX_ERROR_TEXT", "pretty"]
