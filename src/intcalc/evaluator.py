"""
Expression evaluator.

Reduces an AST to a single integer.

Arithmetic semantics:
- Integers are unbounded Python ints; there is no overflow.
- Division truncates toward zero, so -7 / 2 == -3.
- Division by zero raises ArithmeticError before any division happens.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .ast import AstNode, BinaryOperator, BinaryOpNode
from .errors import ArithmeticError as ExprArithmeticError
from .errors import ArithmeticErrorKind, EvaluationError, ExpressionError
from .limits import DEFAULT_EXPRESSION_LIMITS, ExpressionLimits
from .parser import parse


@dataclass
class EvaluationResult:
    """Result of expression evaluation."""

    value: Optional[int]
    """The evaluated value."""

    success: bool
    """Whether evaluation succeeded."""

    error: Optional[str] = None
    """Error message if evaluation failed."""

    exception: Optional[ExpressionError] = None
    """The error raised by the failing pipeline stage."""


def _truncating_divide(dividend: int, divisor: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(dividend) // abs(divisor)
    if (dividend < 0) != (divisor < 0):
        return -quotient
    return quotient


class Evaluator:
    """Evaluates an AST node and returns the result."""

    def __init__(self, source: Optional[str] = None):
        self._source = source

    def evaluate(self, node: AstNode) -> int:
        """
        Evaluates an AST node and returns its integer value.

        The tree is folded in post-order with an explicit work stack, so a
        long operator chain does not consume interpreter stack frames.
        """
        # Work items are (node, stage): 0 = not started, 1 = divisor ready,
        # 2 = both operands ready. Division evaluates and checks its right
        # operand before touching the left one, so its operands land on
        # `values` in reverse order.
        work: List[Tuple[AstNode, int]] = [(node, 0)]
        values: List[int] = []

        while work:
            current, stage = work.pop()

            if current.type == "Literal":
                values.append(current.value)
                continue

            if current.type != "BinaryOp":
                raise EvaluationError(
                    f"Unknown node type: {current.type}",
                    current.position,
                    self._source,
                )

            if current.operator == BinaryOperator.DIV:
                if stage == 0:
                    work.append((current, 1))
                    work.append((current.right, 0))
                elif stage == 1:
                    if values[-1] == 0:
                        raise ExprArithmeticError(
                            ArithmeticErrorKind.DIVISION_BY_ZERO,
                            "Division by zero",
                            current.position,
                            self._source,
                        )
                    work.append((current, 2))
                    work.append((current.left, 0))
                else:
                    left_value = values.pop()
                    right_value = values.pop()
                    values.append(self._apply(current, left_value, right_value))
                continue

            if stage == 0:
                work.append((current, 2))
                work.append((current.right, 0))
                work.append((current.left, 0))
                continue

            right_value = values.pop()
            left_value = values.pop()
            values.append(self._apply(current, left_value, right_value))

        return values.pop()

    def _apply(self, node: BinaryOpNode, left_value: int, right_value: int) -> int:
        """Applies a binary operator to evaluated operands (divisor already checked)."""
        operator = node.operator

        if operator == BinaryOperator.ADD:
            return left_value + right_value

        if operator == BinaryOperator.SUB:
            return left_value - right_value

        if operator == BinaryOperator.MUL:
            return left_value * right_value

        if operator == BinaryOperator.DIV:
            return _truncating_divide(left_value, right_value)

        raise EvaluationError(
            f"Unknown operator: {operator}", node.position, self._source
        )


def evaluate_ast(ast: AstNode, source: Optional[str] = None) -> int:
    """
    Evaluates an already parsed AST.

    Args:
        ast: The AST to evaluate
        source: Source expression, used only for error context

    Returns:
        The integer value of the tree

    Raises:
        ArithmeticError: On division by zero
    """
    return Evaluator(source).evaluate(ast)


def evaluate(expression: str, limits: Optional[ExpressionLimits] = None) -> int:
    """
    Tokenizes, parses and evaluates an expression string.

    Args:
        expression: The expression to evaluate, e.g. "(1 + 2) * 3"
        limits: Optional expression limits

    Returns:
        The integer result

    Raises:
        LexError: If the expression contains an unknown character
        ParseError: If the expression does not match the grammar
        ArithmeticError: On division by zero
        LimitExceededError: If the expression exceeds a resource limit
    """
    ast = parse(expression, limits or DEFAULT_EXPRESSION_LIMITS)
    return evaluate_ast(ast, expression)


def try_evaluate(
    expression: str, limits: Optional[ExpressionLimits] = None
) -> EvaluationResult:
    """
    Evaluates an expression string and reports failure as a result.

    Args:
        expression: The expression to evaluate
        limits: Optional expression limits

    Returns:
        The evaluation result with value and success status
    """
    try:
        value = evaluate(expression, limits)
        return EvaluationResult(value=value, success=True)
    except ExpressionError as error:
        return EvaluationResult(
            value=None,
            success=False,
            error=error.message,
            exception=error,
        )
