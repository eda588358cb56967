"""
Property-based tests using Hypothesis.

These cover the pipeline-wide invariants: parse/infer/pretty are total, the
printer reaches a fixed point after one pass, and type verdicts survive a
print/reparse cycle.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from tinyexpr.dsl import ast, grammar, printer, type_system

_ALPHABET = st.sampled_from(list("012+*()&|truefalsx \t\n"))

_leaves = st.one_of(
    st.sampled_from(ast.INT_LITERAL_VALUES).map(ast.IntLiteral),
    st.booleans().map(ast.BoolLiteral),
)

_expressions = st.recursive(
    _leaves,
    lambda children: st.one_of(
        st.builds(ast.Add, children, children),
        st.builds(ast.Multiply, children, children),
        st.builds(ast.And, children, children),
        st.builds(ast.Or, children, children),
    ),
    max_leaves=30,
)


class TestPipelineProperties:
    """Invariants across arbitrary source text and generated trees."""

    @given(st.text(max_size=200))
    @settings(max_examples=200)
    def test_pipeline_is_total_on_arbitrary_text(self, source: str) -> None:
        """Invariant: every string parses to a node that can be typed and printed."""
        expr = grammar.parse(source)
        assert ast.is_node(expr)
        assert isinstance(type_system.infer(expr), type_system.Type)
        assert isinstance(printer.pretty(expr), str)

    @given(st.binary(max_size=200))
    @settings(max_examples=200)
    def test_pipeline_is_total_on_arbitrary_bytes(self, source: bytes) -> None:
        expr = grammar.parse(source)
        assert ast.is_node(expr)
        assert printer.pretty(expr) == printer.pretty(grammar.parse(source.decode("latin-1")))

    @given(st.text(alphabet=_ALPHABET, max_size=60))
    @settings(max_examples=300)
    def test_pipeline_is_total_on_grammar_like_text(self, source: str) -> None:
        expr = grammar.parse(source)
        text = printer.pretty(expr)
        if isinstance(expr, ast.SyntaxErrorNode):
            assert text == printer.SYNTAX_ERROR_TEXT
            assert type_system.infer(expr) is type_system.Type.ILL_TYPED

    @given(_expressions)
    @settings(max_examples=200)
    def test_printed_text_reparses_to_the_same_tree(self, expr: ast.Expression) -> None:
        """Invariant: printing is a fixed point after one normalization pass."""
        text = printer.pretty(expr)
        reparsed = grammar.parse(text)
        assert reparsed == expr
        assert printer.pretty(reparsed) == text

    @given(_expressions)
    @settings(max_examples=200)
    def test_type_survives_round_trip(self, expr: ast.Expression) -> None:
        reparsed = grammar.parse(printer.pretty(expr))
        assert type_system.infer(reparsed) is type_system.infer(expr)

    @given(_expressions)
    @settings(max_examples=100)
    def test_walk_and_postorder_visit_the_same_nodes(self, expr: ast.Expression) -> None:
        pre = [id(node) for node in expr.walk()]
        post = [id(node) for node in ast.postorder(expr)]
        assert sorted(pre) == sorted(post)
        assert post[-1] == id(expr)
        assert not ast.contains_syntax_error(expr)
