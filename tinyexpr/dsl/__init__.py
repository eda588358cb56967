"""Public entry points for the tinyexpr language front end."""

from tinyexpr.dsl.grammar import parse
from tinyexpr.dsl.printer import pretty
from tinyexpr.dsl.type_system import Type, format_type, infer

__all__ = ["Type", "format_type", "infer", "parse", "pretty"]
