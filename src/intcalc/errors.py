"""
Error types for the integer expression calculator.

All expression errors extend ExpressionError for consistent handling.
"""

from enum import Enum
from typing import Optional


class ParseErrorKind(Enum):
    """Reasons a token sequence can fail to parse."""

    UNEXPECTED_END = "UnexpectedEnd"
    EXPECTED_CLOSE_PAREN = "ExpectedCloseParen"
    INVALID_PRIMARY = "InvalidPrimary"
    UNEXPECTED_TOKEN = "UnexpectedToken"


class ArithmeticErrorKind(Enum):
    """Reasons an expression tree can fail to evaluate."""

    DIVISION_BY_ZERO = "DivisionByZero"


class ExpressionError(Exception):
    """
    Base error class for all expression-related errors.
    """

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.position = position
        self.expression = expression

    def format_with_context(self) -> str:
        """
        Returns a formatted error message with position context.
        """
        if self.expression is None or self.position is None:
            return self.message

        pointer = " " * self.position + "^"
        return f"{self.message}\n  {self.expression}\n  {pointer}"


class LexError(ExpressionError):
    """
    Error thrown during tokenization when a character cannot start a token.
    """

    def __init__(
        self,
        unexpected_char: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        message = f"Unknown character in expression: '{unexpected_char}'"
        super().__init__(message, position, expression)
        self.unexpected_char = unexpected_char


class ParseError(ExpressionError):
    """
    Error thrown during parsing (syntax analysis).
    """

    def __init__(
        self,
        kind: ParseErrorKind,
        message: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(message, position, expression)
        self.kind = kind


class EvaluationError(ExpressionError):
    """
    Error thrown during evaluation (runtime error).
    """

    pass


class ArithmeticError(EvaluationError):
    """
    Error thrown when an arithmetic operation has no integer result.
    """

    def __init__(
        self,
        kind: ArithmeticErrorKind,
        message: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(message, position, expression)
        self.kind = kind


class LimitExceededError(ExpressionError):
    """
    Error thrown when expression limits are exceeded.
    """

    def __init__(
        self,
        limit_name: str,
        limit: int,
        actual: int,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        message = f"Limit exceeded: {limit_name} (limit: {limit}, actual: {actual})"
        super().__init__(message, position, expression)
        self.limit_name = limit_name
        self.limit = limit
        self.actual = actual
