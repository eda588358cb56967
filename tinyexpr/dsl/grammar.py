"""Tokenizer and operator-precedence parser for the tinyexpr language.

The grammar is tiny but its operator ladder is unusual: precedence is purely
syntactic and interleaves arithmetic and logical operators.  From loosest to
tightest binding::

    Expr     := OrLevel  ( '+'  OrLevel  )*
    OrLevel  := MulLevel ( '||' MulLevel )*
    MulLevel := AndLevel ( '*'  AndLevel )*
    AndLevel := Atom     ( '&&' Atom     )*
    Atom     := '0' | '1' | '2' | 'true' | 'false' | '(' Expr ')'

Every chain is left-associative.  Parsing never raises for bad input: each
step returns an explicit :class:`Parsed` or :class:`Failed` result, and the
public :func:`parse` entry point collapses any failure into a
:class:`~tinyexpr.dsl.ast.SyntaxErrorNode`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from typing import Callable, Union

from tinyexpr.telemetry.logger import get_logger

from . import ast

_LOGGER = get_logger("tinyexpr.dsl.grammar")

DEFAULT_MAX_NESTING: int | None = None


class TokenKind(Enum):
    """Lexical categories.  Tokens carry no payload beyond their kind."""

    END_OF_INPUT = "EOS"
    ZERO = "0"
    ONE = "1"
    TWO = "2"
    OPEN = "("
    CLOSE = ")"
    PLUS = "+"
    MULT = "*"
    AND = "&&"
    OR = "||"
    TRUE = "true"
    FALSE = "false"
    LEX_ERROR = "ERR"


# ---------------------------------------------------------------------------
# Tokenizer

_SINGLE_CHARACTER: dict[str, TokenKind] = {
    "0": TokenKind.ZERO,
    "1": TokenKind.ONE,
    "2": TokenKind.TWO,
    "+": TokenKind.PLUS,
    "*": TokenKind.MULT,
    "(": TokenKind.OPEN,
    ")": TokenKind.CLOSE,
}

# ASCII whitespace only; other separators such as U+00A0 are lexical errors.
_WHITESPACE = frozenset(" \t\n\v\f\r")

# Prefix checks only: "truex" scans as TRUE and then a LEX_ERROR for "x".
_PREFIXES: tuple[tuple[str, TokenKind], ...] = (
    ("&&", TokenKind.AND),
    ("||", TokenKind.OR),
    ("true", TokenKind.TRUE),
    ("false", TokenKind.FALSE),
)


def _scan_at(text: str, index: int) -> tuple[int, TokenKind]:
    """Scan one token of ``text`` starting at ``index``.

    Returns the index just past the token together with its kind.  The checks
    run in priority order: end of input, single characters, two/four/five
    character prefixes, whitespace (skipped), then a one character error.
    """

    length = len(text)
    while True:
        if index >= length:
            return index, TokenKind.END_OF_INPUT
        head = text[index]
        kind = _SINGLE_CHARACTER.get(head)
        if kind is not None:
            return index + 1, kind
        for prefix, prefix_kind in _PREFIXES:
            if text.startswith(prefix, index):
                return index + len(prefix), prefix_kind
        if head in _WHITESPACE:
            index += 1
            continue
        return index + 1, TokenKind.LEX_ERROR


def scan(remaining: str) -> tuple[str, TokenKind]:
    """Return ``(rest, kind)`` for the first token of ``remaining``.

    >>> scan("  true && 1")
    (' && 1', <TokenKind.TRUE: 'true'>)
    """

    index, kind = _scan_at(remaining, 0)
    return remaining[index:], kind


def tokenize(source: str) -> list[TokenKind]:
    """Return every token kind of ``source`` up to and including END_OF_INPUT."""

    tokens: list[TokenKind] = []
    index = 0
    while True:
        index, kind = _scan_at(source, index)
        tokens.append(kind)
        if kind is TokenKind.END_OF_INPUT:
            return tokens


# ---------------------------------------------------------------------------
# Parser state and results


@dataclass(frozen=True, slots=True)
class Cursor:
    """Position in the source plus the single token of lookahead."""

    text: str
    position: int
    token: TokenKind

    @classmethod
    def start(cls, text: str) -> "Cursor":
        position, token = _scan_at(text, 0)
        return cls(text, position, token)

    @property
    def remaining(self) -> str:
        """Source text that has not been scanned yet."""

        return self.text[self.position :]

    def advance(self) -> "Cursor":
        """Consume the lookahead token and scan the next one."""

        position, token = _scan_at(self.text, self.position)
        return Cursor(self.text, position, token)


@dataclass(frozen=True, slots=True)
class Parsed:
    """Successful sub-parse: the expression and the cursor after it."""

    expr: ast.Expression
    cursor: Cursor


@dataclass(frozen=True, slots=True)
class Failed:
    """Failed sub-parse.  ``reason`` only feeds debug logging."""

    cursor: Cursor
    reason: str


ParseResult = Union[Parsed, Failed]
# ---------------------------------------------------------------------------
# Parser

# Loosest level first; the index into this table is the precedence level.
_LEVELS: tuple[tuple[TokenKind, type[ast.BinaryNode]], ...] = (
    (TokenKind.PLUS, ast.Add),
    (TokenKind.OR, ast.Or),
    (TokenKind.MULT, ast.Multiply),
    (TokenKind.AND, ast.And),
)

_OPERATOR_LEVELS: dict[TokenKind, int] = {
    operator: level for level, (operator, _) in enumerate(_LEVELS)
}

_LITERALS: dict[TokenKind, Callable[[], ast.Expression]] = {
    TokenKind.ZERO: partial(ast.IntLiteral, 0),
    TokenKind.ONE: partial(ast.IntLiteral, 1),
    TokenKind.TWO: partial(ast.IntLiteral, 2),
    TokenKind.TRUE: partial(ast.BoolLiteral, True),
    TokenKind.FALSE: partial(ast.BoolLiteral, False),
}


@dataclass(slots=True)
class _Frame:
    """Pending operands and operator levels of one parenthesized expression.

    Operator levels on the stack are strictly increasing; a new operator first
    folds every pending operator at the same or a tighter level, which keeps
    each chain left-associative.
    """

    operands: list[ast.Expression] = field(default_factory=list)
    levels: list[int] = field(default_factory=list)

    def _reduce(self) -> None:
        combine = _LEVELS[self.levels.pop()][1]
        right = self.operands.pop()
        left = self.operands.pop()
        self.operands.append(combine(left=left, right=right))

    def push_operator(self, level: int) -> None:
        while self.levels and self.levels[-1] >= level:
            self._reduce()
        self.levels.append(level)

    def finish(self) -> ast.Expression:
        while self.levels:
            self._reduce()
        return self.operands.pop()


class Parser:
    """Precedence-ladder parser over an explicit :class:`Cursor`.

    Parenthesized groups are tracked on an explicit stack of frames instead of
    the Python call stack, so nesting depth is bounded only by memory.  The
    parser holds no per-parse state and a single instance may be shared.
    """

    def __init__(self, *, max_nesting: int | None = DEFAULT_MAX_NESTING) -> None:
        if max_nesting is not None and max_nesting < 1:
            raise ValueError("max_nesting must be at least 1")
        self.max_nesting = max_nesting

    # ------------------------------------------------------------------
    # Entry points

    def parse(self, source: str) -> ParseResult:
        """Parse the whole of ``source``; trailing tokens are a failure."""

        result = self.parse_expression(Cursor.start(source))
        if isinstance(result, Failed):
            return result
        if result.cursor.token is not TokenKind.END_OF_INPUT:
            return Failed(result.cursor, f"unexpected trailing {result.cursor.token.name}")
        return result

    def parse_expression(self, cursor: Cursor) -> ParseResult:
        """Parse one expression, stopping at the first token that cannot extend it."""

        frames: list[_Frame] = [_Frame()]
        while True:
            while cursor.token is TokenKind.OPEN:
                if self.max_nesting is not None and len(frames) > self.max_nesting:
                    return Failed(cursor, f"parentheses nested deeper than {self.max_nesting}")
                frames.append(_Frame())
                cursor = cursor.advance()
            factory = _LITERALS.get(cursor.token)
            if factory is None:
                return Failed(cursor, f"expected operand, found {cursor.token.name}")
            frames[-1].operands.append(factory())
            cursor = cursor.advance()

            while True:
                level = _OPERATOR_LEVELS.get(cursor.token)
                if level is not None:
                    frames[-1].push_operator(level)
                    cursor = cursor.advance()
                    break
                expr = frames.pop().finish()
                if not frames:
                    return Parsed(expr, cursor)
                if cursor.token is not TokenKind.CLOSE:
                    return Failed(cursor, f"expected CLOSE, found {cursor.token.name}")
                frames[-1].operands.append(expr)
                cursor = cursor.advance()


def _preview(source: str, limit: int = 40) -> str:
    if len(source) <= limit:
        return source
    return source[:limit] + "..."


def parse(
    source: str | bytes, *, max_nesting: int | None = DEFAULT_MAX_NESTING
) -> ast.Expression:
    """Parse ``source`` into an expression tree.

    Total over text: lexical and syntactic failures (including trailing input
    such as ``"1)"``) yield a fresh :class:`ast.SyntaxErrorNode`.  ``bytes`` are
    decoded as latin-1, one character per byte, so arbitrary byte sequences
    are accepted too.  ``max_nesting`` optionally caps parenthesis depth.
    """

    if isinstance(source, (bytes, bytearray)):
        source = bytes(source).decode("latin-1")
    if not isinstance(source, str):
        raise TypeError(f"source must be str or bytes, not {type(source).__name__}")
    result = Parser(max_nesting=max_nesting).parse(source)
    if isinstance(result, Failed):
        _LOGGER.debug(
            "rejected %r at offset %d: %s",
            _preview(source),
            result.cursor.position,
            result.reason,
        )
        return ast.SyntaxErrorNode()
    return result.expr


__all__ = [
    "Cursor",
    "DEFAULT_MAX_NESTING",
    "Failed",
    "ParseResult",
    "Parsed",
    "Parser",
    "TokenKind",
    "parse",
    "scan",
    "tokenize",
]
