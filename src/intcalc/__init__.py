"""
Integer arithmetic expression engine.

This module provides a deterministic, side-effect-free pipeline that
tokenizes, parses and evaluates expressions over integers using
+, -, *, / and parentheses.
"""

# Core types and utilities
from .ast import (
    AstNode,
    AstNodeBase,
    BinaryOperator,
    BinaryOpNode,
    LiteralNode,
    ast_to_source,
    ast_to_string,
    calculate_ast_depth,
    count_ast_nodes,
)
from .errors import (
    ArithmeticError,
    ArithmeticErrorKind,
    EvaluationError,
    ExpressionError,
    LexError,
    LimitExceededError,
    ParseError,
    ParseErrorKind,
)

# Evaluator
from .evaluator import (
    EvaluationResult,
    Evaluator,
    evaluate,
    evaluate_ast,
    try_evaluate,
)
from .limits import (
    DEFAULT_EXPRESSION_LIMITS,
    ExpressionLimits,
    check_ast_node_count,
    check_expression_length,
    check_nesting_depth,
)

# Parser
from .parser import (
    Parser,
    parse,
)

# Tokenizer
from .tokenizer import (
    Token,
    TokenKind,
    Tokenizer,
    tokenize,
)

__all__ = [
    # AST types
    "AstNode",
    "AstNodeBase",
    "LiteralNode",
    "BinaryOpNode",
    "BinaryOperator",
    "count_ast_nodes",
    "calculate_ast_depth",
    "ast_to_string",
    "ast_to_source",
    # Errors
    "ExpressionError",
    "LexError",
    "ParseError",
    "ParseErrorKind",
    "EvaluationError",
    "ArithmeticError",
    "ArithmeticErrorKind",
    "LimitExceededError",
    # Limits
    "ExpressionLimits",
    "DEFAULT_EXPRESSION_LIMITS",
    "check_expression_length",
    "check_nesting_depth",
    "check_ast_node_count",
    # Tokenizer
    "Token",
    "TokenKind",
    "Tokenizer",
    "tokenize",
    # Parser
    "Parser",
    "parse",
    # Evaluator
    "EvaluationResult",
    "Evaluator",
    "evaluate",
    "evaluate_ast",
    "try_evaluate",
]
