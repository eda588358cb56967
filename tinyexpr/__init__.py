"""tinyexpr: lexer, parser, type checker and printer for a tiny expression language."""

from tinyexpr.dsl import infer, parse, pretty

__all__ = ["infer", "parse", "pretty"]
