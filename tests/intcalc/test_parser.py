"""
Tests for expression parser.
"""

# pyright: reportAttributeAccessIssue=false

import sys

import pytest

from intcalc import (
    BinaryOperator,
    ExpressionLimits,
    LexError,
    LimitExceededError,
    ParseError,
    ParseErrorKind,
    ast_to_source,
    ast_to_string,
    calculate_ast_depth,
    count_ast_nodes,
    parse,
)
from intcalc.parser import Parser
from intcalc.tokenizer import tokenize


class TestLiterals:
    """Tests for literal parsing."""

    def test_parses_integer_literal(self):
        ast = parse("42")
        assert ast.type == "Literal"
        assert ast.position == 0
        assert ast.value == 42

    def test_parses_leading_zeros_as_integer(self):
        ast = parse("0042")
        assert ast.value == 42

    def test_parses_large_integer(self):
        ast = parse("123456789012345678901234567890")
        assert ast.value == 123456789012345678901234567890

    def test_parenthesized_literal_yields_inner_node(self):
        ast = parse("((7))")
        assert ast.type == "Literal"
        assert ast.value == 7
        assert ast.position == 2


class TestBinaryOperators:
    """Tests for binary operator parsing."""

    @pytest.mark.parametrize(
        "source,operator",
        [
            ("1 + 2", BinaryOperator.ADD),
            ("1 - 2", BinaryOperator.SUB),
            ("1 * 2", BinaryOperator.MUL),
            ("1 / 2", BinaryOperator.DIV),
        ],
    )
    def test_parses_binary_operator(self, source, operator):
        ast = parse(source)
        assert ast.type == "BinaryOp"
        assert ast.operator == operator
        assert ast.left.value == 1
        assert ast.right.value == 2
        assert ast.position == 2

    def test_operator_values_are_symbols(self):
        assert [op.value for op in BinaryOperator] == ["+", "-", "*", "/"]


class TestOperatorPrecedence:
    """Tests for operator precedence."""

    def test_multiplication_before_addition(self):
        ast = parse("1 + 2 * 3")
        assert ast.operator == BinaryOperator.ADD
        assert ast.right.type == "BinaryOp"
        assert ast.right.operator == BinaryOperator.MUL

    def test_division_before_subtraction(self):
        ast = parse("8 / 2 - 1")
        assert ast.operator == BinaryOperator.SUB
        assert ast.left.operator == BinaryOperator.DIV

    def test_parentheses_override_precedence(self):
        ast = parse("(1 + 2) * 3")
        assert ast.operator == BinaryOperator.MUL
        assert ast.left.type == "BinaryOp"
        assert ast.left.operator == BinaryOperator.ADD


class TestAssociativity:
    """Tests for left-associative folding."""

    def test_subtraction_is_left_associative(self):
        ast = parse("10 - 2 - 3")
        assert ast_to_source(ast) == "((10 - 2) - 3)"

    def test_division_is_left_associative(self):
        ast = parse("100 / 10 / 2")
        assert ast_to_source(ast) == "((100 / 10) / 2)"

    def test_mixed_tiers_fold_left(self):
        ast = parse("1 - 2 + 3 * 4 / 5")
        assert ast_to_source(ast) == "((1 - 2) + ((3 * 4) / 5))"

    def test_long_chain_parses_without_recursion(self):
        source = "+".join(["1"] * 2000)
        ast = parse(source)
        assert count_ast_nodes(ast) == 3999
        assert calculate_ast_depth(ast) == 2000


class TestErrorHandling:
    """Tests for error handling."""

    def test_throws_on_empty_input(self):
        with pytest.raises(ParseError) as exc_info:
            parse("")
        assert exc_info.value.kind == ParseErrorKind.UNEXPECTED_END

    def test_throws_on_missing_operand(self):
        with pytest.raises(ParseError) as exc_info:
            parse("1 +")
        assert exc_info.value.kind == ParseErrorKind.UNEXPECTED_END
        assert exc_info.value.position == 3

    def test_throws_on_unclosed_parenthesis(self):
        with pytest.raises(ParseError) as exc_info:
            parse("(1+2")
        assert exc_info.value.kind == ParseErrorKind.EXPECTED_CLOSE_PAREN
        assert exc_info.value.position == 4

    def test_throws_when_group_is_followed_by_other_token(self):
        with pytest.raises(ParseError) as exc_info:
            parse("(1 2)")
        assert exc_info.value.kind == ParseErrorKind.EXPECTED_CLOSE_PAREN
        assert exc_info.value.position == 3

    @pytest.mark.parametrize("source", ["-5", "3*-2", "(-1)", "1+-1", "()", ")"])
    def test_throws_invalid_primary(self, source):
        with pytest.raises(ParseError) as exc_info:
            parse(source)
        assert exc_info.value.kind == ParseErrorKind.INVALID_PRIMARY

    def test_invalid_primary_points_at_token(self):
        with pytest.raises(ParseError) as exc_info:
            parse("3 * -2")
        assert exc_info.value.position == 4

    @pytest.mark.parametrize("source", ["1 2", "(1))", "2 (3)"])
    def test_throws_on_trailing_tokens(self, source):
        with pytest.raises(ParseError) as exc_info:
            parse(source)
        assert exc_info.value.kind == ParseErrorKind.UNEXPECTED_TOKEN

    def test_lex_errors_surface_before_parsing(self):
        with pytest.raises(LexError):
            parse("(1 + x")


class TestLimits:
    """Tests for parse-time resource limits."""

    def test_allows_nesting_up_to_limit(self):
        limits = ExpressionLimits(max_nesting_depth=3)
        ast = parse("(((1)))", limits)
        assert ast.value == 1

    def test_rejects_nesting_beyond_limit(self):
        limits = ExpressionLimits(max_nesting_depth=3)
        with pytest.raises(LimitExceededError) as exc_info:
            parse("((((1))))", limits)
        assert exc_info.value.limit_name == "max_nesting_depth"
        assert exc_info.value.position == 3

    def test_sequential_groups_do_not_accumulate_depth(self):
        limits = ExpressionLimits(max_nesting_depth=1)
        ast = parse("(1) + (2) + (3)", limits)
        assert count_ast_nodes(ast) == 5

    def test_default_nesting_limit(self):
        source = "(" * 65 + "1" + ")" * 65
        with pytest.raises(LimitExceededError):
            parse(source)

    def test_rejects_too_many_nodes(self):
        limits = ExpressionLimits(max_ast_nodes=5)
        with pytest.raises(LimitExceededError) as exc_info:
            parse("1+2+3+4", limits)
        assert exc_info.value.limit_name == "max_ast_nodes"

    @pytest.mark.skipif(
        not hasattr(sys, "get_int_max_str_digits"),
        reason="interpreter has no int string conversion limit",
    )
    def test_rejects_literal_beyond_int_conversion_limit(self):
        limits = ExpressionLimits(max_expression_length=10000, max_ast_nodes=10000)
        source = "2+" + "1" * 5000
        with pytest.raises(LimitExceededError) as exc_info:
            parse(source, limits)
        assert exc_info.value.limit_name == "max_integer_digits"
        assert exc_info.value.limit == sys.get_int_max_str_digits()
        assert exc_info.value.actual == 5000
        assert exc_info.value.position == 2


class TestParserClass:
    """Tests for using the Parser class directly."""

    def test_parses_pre_tokenized_input(self):
        source = "6 / 3"
        parser = Parser(tokenize(source), source)
        ast = parser.parse()
        assert ast.operator == BinaryOperator.DIV


class TestAstUtilities:
    """Tests for AST helper functions."""

    def test_ast_to_string(self):
        ast = parse("1 + 2 * 3")
        assert ast_to_string(ast) == (
            "BinaryOp: +\n"
            "  Literal: 1\n"
            "  BinaryOp: *\n"
            "    Literal: 2\n"
            "    Literal: 3"
        )

    def test_count_and_depth_of_literal(self):
        ast = parse("5")
        assert count_ast_nodes(ast) == 1
        assert calculate_ast_depth(ast) == 1

    def test_ast_to_source_is_stable_under_reparsing(self):
        ast = parse("((2+3)*(4-1))/5")
        assert ast_to_source(parse(ast_to_source(ast))) == ast_to_source(ast)
