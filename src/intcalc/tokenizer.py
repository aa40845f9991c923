"""
Tokenizer (lexer) for integer arithmetic expressions.

Converts expression strings into a list of tokens for the parser.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from .errors import LexError
from .limits import ExpressionLimits, check_expression_length


class TokenKind(Enum):
    """Token kinds produced by the tokenizer."""

    # Literals
    INTEGER = "INTEGER"

    # Operators
    PLUS = "PLUS"
    MINUS = "MINUS"
    STAR = "STAR"
    SLASH = "SLASH"

    # Delimiters
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"


@dataclass(frozen=True)
class Token:
    """A token produced by the tokenizer."""

    kind: TokenKind
    text: str
    position: int


SINGLE_CHAR_TOKENS: Dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}


def _is_digit(ch: str) -> bool:
    """Checks if a character is an ASCII digit."""
    return "0" <= ch <= "9"


def _is_whitespace(ch: str) -> bool:
    """Checks if a character is whitespace."""
    return ch in (" ", "\t", "\n", "\r", "\v", "\f")


class Tokenizer:
    """Tokenizer for expression strings."""

    def __init__(self, source: str, limits: Optional[ExpressionLimits] = None):
        self._source = source
        self._limits = limits
        self._position = 0
        self._tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """Tokenizes the source expression and returns all tokens."""
        check_expression_length(self._source, self._limits)

        while not self._is_at_end():
            self._scan_token()

        return self._tokens

    def _is_at_end(self) -> bool:
        return self._position >= len(self._source)

    def _peek(self) -> str:
        if self._is_at_end():
            return "\0"
        return self._source[self._position]

    def _advance(self) -> str:
        ch = self._source[self._position]
        self._position += 1
        return ch

    def _add_token(self, kind: TokenKind, text: str, position: int) -> None:
        self._tokens.append(Token(kind, text, position))

    def _scan_token(self) -> None:
        ch = self._advance()
        start_position = self._position - 1

        if _is_whitespace(ch):
            return

        if ch in SINGLE_CHAR_TOKENS:
            self._add_token(SINGLE_CHAR_TOKENS[ch], ch, start_position)
            return

        if _is_digit(ch):
            self._scan_integer(start_position)
            return

        raise LexError(ch, start_position, self._source)

    def _scan_integer(self, start_position: int) -> None:
        # Back up to include the first digit
        self._position -= 1

        while _is_digit(self._peek()):
            self._advance()

        text = self._source[start_position : self._position]
        self._add_token(TokenKind.INTEGER, text, start_position)


def tokenize(source: str, limits: Optional[ExpressionLimits] = None) -> List[Token]:
    """
    Tokenizes an expression string into tokens.

    Args:
        source: The expression string to tokenize
        limits: Optional expression limits

    Returns:
        List of tokens in source order

    Raises:
        LexError: If the expression contains a character that starts no token
        LimitExceededError: If the expression is longer than allowed
    """
    tokenizer = Tokenizer(source, limits)
    return tokenizer.tokenize()
