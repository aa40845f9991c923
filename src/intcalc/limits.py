"""
Resource limits for expression parsing and evaluation.

These limits protect against resource exhaustion from overly long or
deeply nested expressions.
"""

from dataclasses import dataclass
from typing import Optional

from .errors import LimitExceededError


@dataclass(frozen=True)
class ExpressionLimits:
    """Expression limits configuration."""

    # Maximum expression string length in characters
    max_expression_length: int = 4096

    # Maximum parenthesis nesting level
    max_nesting_depth: int = 64

    # Maximum number of AST nodes
    max_ast_nodes: int = 4096


# Default expression limits.
#
# Parenthesis nesting is the only construct the parser recurses on, so
# max_nesting_depth keeps it well below the interpreter recursion limit.
DEFAULT_EXPRESSION_LIMITS = ExpressionLimits()


def check_expression_length(
    expression: str, limits: Optional[ExpressionLimits] = None
) -> None:
    """Validates that expression length is within limits."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if len(expression) > limits.max_expression_length:
        raise LimitExceededError(
            "max_expression_length",
            limits.max_expression_length,
            len(expression),
        )


def check_nesting_depth(
    depth: int,
    limits: Optional[ExpressionLimits] = None,
    position: Optional[int] = None,
    expression: Optional[str] = None,
) -> None:
    """Validates parenthesis nesting depth during parsing."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if depth > limits.max_nesting_depth:
        raise LimitExceededError(
            "max_nesting_depth",
            limits.max_nesting_depth,
            depth,
            position,
            expression,
        )


def check_ast_node_count(
    count: int, limits: Optional[ExpressionLimits] = None
) -> None:
    """Validates AST node count after parsing."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if count > limits.max_ast_nodes:
        raise LimitExceededError("max_ast_nodes", limits.max_ast_nodes, count)
