"""
Parser for integer arithmetic expressions.

Parses a list of tokens into an Abstract Syntax Tree (AST).
Uses recursive descent parsing with operator precedence.

Grammar:
    expr    := term
    term    := factor ( ("+" | "-") factor )*
    factor  := primary ( ("*" | "/") primary )*
    primary := INTEGER | "(" expr ")"

Precedence (lowest to highest):
1. Additive: +, -
2. Multiplicative: *, /
3. Primary: integer literals, parentheses

Both binary tiers are left-associative. There is no unary minus: a '-'
where a primary is expected is rejected.
"""

import sys
from typing import Dict, List, Optional

from .ast import (
    AstNode,
    BinaryOperator,
    BinaryOpNode,
    LiteralNode,
    count_ast_nodes,
)
from .errors import LimitExceededError, ParseError, ParseErrorKind
from .limits import (
    DEFAULT_EXPRESSION_LIMITS,
    ExpressionLimits,
    check_ast_node_count,
    check_nesting_depth,
)
from .tokenizer import Token, TokenKind, tokenize

ADDITIVE_OPERATORS: Dict[TokenKind, BinaryOperator] = {
    TokenKind.PLUS: BinaryOperator.ADD,
    TokenKind.MINUS: BinaryOperator.SUB,
}

MULTIPLICATIVE_OPERATORS: Dict[TokenKind, BinaryOperator] = {
    TokenKind.STAR: BinaryOperator.MUL,
    TokenKind.SLASH: BinaryOperator.DIV,
}


class Parser:
    """Parser for expression token lists."""

    def __init__(
        self,
        tokens: List[Token],
        source: str,
        limits: ExpressionLimits = DEFAULT_EXPRESSION_LIMITS,
    ):
        self._tokens = tokens
        self._source = source
        self._limits = limits
        self._current = 0
        self._depth = 0

    def parse(self) -> AstNode:
        """Parses the token list into an AST."""
        ast = self._parse_expression()

        if not self._is_at_end():
            token = self._peek()
            assert token is not None
            raise ParseError(
                ParseErrorKind.UNEXPECTED_TOKEN,
                f"Unexpected token: {token.text}",
                token.position,
                self._source,
            )

        check_ast_node_count(count_ast_nodes(ast), self._limits)

        return ast

    # ============================================================
    # Token Helpers
    # ============================================================

    def _is_at_end(self) -> bool:
        return self._current >= len(self._tokens)

    def _peek(self) -> Optional[Token]:
        if self._is_at_end():
            return None
        return self._tokens[self._current]

    def _advance(self) -> Optional[Token]:
        token = self._peek()
        if token is not None:
            self._current += 1
        return token

    def _end_position(self) -> int:
        return len(self._source)

    # ============================================================
    # Expression Parsing (by precedence, lowest to highest)
    # ============================================================

    def _parse_expression(self) -> AstNode:
        """Grammar entry point."""
        return self._parse_term()

    def _parse_term(self) -> AstNode:
        """Parses additive: +, -"""
        node = self._parse_factor()

        while True:
            token = self._peek()
            if token is None or token.kind not in ADDITIVE_OPERATORS:
                break
            self._advance()
            right = self._parse_factor()
            node = BinaryOpNode(
                position=token.position,
                operator=ADDITIVE_OPERATORS[token.kind],
                left=node,
                right=right,
            )

        return node

    def _parse_factor(self) -> AstNode:
        """Parses multiplicative: *, /"""
        node = self._parse_primary()

        while True:
            token = self._peek()
            if token is None or token.kind not in MULTIPLICATIVE_OPERATORS:
                break
            self._advance()
            right = self._parse_primary()
            node = BinaryOpNode(
                position=token.position,
                operator=MULTIPLICATIVE_OPERATORS[token.kind],
                left=node,
                right=right,
            )

        return node

    def _parse_primary(self) -> AstNode:
        """Parses primary expressions: integer literals and parentheses."""
        token = self._advance()

        if token is None:
            raise ParseError(
                ParseErrorKind.UNEXPECTED_END,
                "Unexpected end of expression",
                self._end_position(),
                self._source,
            )

        if token.kind == TokenKind.INTEGER:
            return LiteralNode(
                position=token.position, value=self._parse_integer(token)
            )

        if token.kind == TokenKind.LPAREN:
            self._depth += 1
            check_nesting_depth(
                self._depth, self._limits, token.position, self._source
            )
            expr = self._parse_expression()
            self._depth -= 1

            closing = self._advance()
            if closing is None or closing.kind != TokenKind.RPAREN:
                raise ParseError(
                    ParseErrorKind.EXPECTED_CLOSE_PAREN,
                    "Expected closing parenthesis",
                    closing.position if closing is not None else self._end_position(),
                    self._source,
                )
            return expr

        raise ParseError(
            ParseErrorKind.INVALID_PRIMARY,
            f"Invalid expression: unexpected '{token.text}'",
            token.position,
            self._source,
        )

    def _parse_integer(self, token: Token) -> int:
        """Converts an INTEGER token's digit run to an int."""
        try:
            return int(token.text)
        except ValueError:
            # Digit run is longer than the interpreter's int conversion limit
            raise LimitExceededError(
                "max_integer_digits",
                sys.get_int_max_str_digits(),
                len(token.text),
                token.position,
                self._source,
            ) from None


def parse(
    source: str, limits: ExpressionLimits = DEFAULT_EXPRESSION_LIMITS
) -> AstNode:
    """
    Parses an expression string into an AST.

    Args:
        source: The expression string to parse
        limits: Optional expression limits

    Returns:
        The parsed AST

    Raises:
        LexError: If tokenization fails
        ParseError: If parsing fails
        LimitExceededError: If the expression is too long, too deeply nested,
            or holds a literal with too many digits
    """
    tokens = tokenize(source, limits)
    parser = Parser(tokens, source, limits)
    return parser.parse()
