"""
Abstract Syntax Tree (AST) node types for integer arithmetic expressions.

The AST is produced by the parser and consumed by the evaluator.
"""

from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import List, Literal, Tuple, Union

# ============================================================
# Operator Types
# ============================================================


class BinaryOperator(Enum):
    """Binary operators, valued by their source symbol."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


# ============================================================
# AST Node Types
# ============================================================


@dataclass(frozen=True)
class AstNodeBase(ABC):
    """Base class for all AST nodes."""

    position: int
    """Position in source expression (for error reporting)."""


@dataclass(frozen=True)
class LiteralNode(AstNodeBase):
    """Integer literal node."""

    value: int

    @property
    def type(self) -> Literal["Literal"]:
        return "Literal"


@dataclass(frozen=True)
class BinaryOpNode(AstNodeBase):
    """Binary operator node."""

    operator: BinaryOperator
    left: "AstNode"
    right: "AstNode"

    @property
    def type(self) -> Literal["BinaryOp"]:
        return "BinaryOp"


# Union type for all AST nodes
AstNode = Union[LiteralNode, BinaryOpNode]


# ============================================================
# AST Utilities
# ============================================================
#
# Left-fold chains produce trees as deep as the chain is long, so these
# walk the tree with an explicit stack instead of recursing.


def count_ast_nodes(node: AstNode) -> int:
    """Counts the total number of nodes in an AST."""
    count = 0
    stack: List[AstNode] = [node]

    while stack:
        current = stack.pop()
        count += 1
        if current.type == "BinaryOp":
            stack.append(current.right)
            stack.append(current.left)

    return count


def calculate_ast_depth(node: AstNode) -> int:
    """Calculates the maximum depth of an AST."""
    max_depth = 0
    stack: List[Tuple[AstNode, int]] = [(node, 1)]

    while stack:
        current, depth = stack.pop()
        max_depth = max(max_depth, depth)
        if current.type == "BinaryOp":
            stack.append((current.right, depth + 1))
            stack.append((current.left, depth + 1))

    return max_depth


def ast_to_string(node: AstNode, indent: int = 0) -> str:
    """Returns a human-readable representation of an AST node for debugging."""
    lines: List[str] = []
    stack: List[Tuple[AstNode, int]] = [(node, indent)]

    while stack:
        current, level = stack.pop()
        prefix = "  " * level

        if current.type == "Literal":
            lines.append(f"{prefix}Literal: {current.value}")
        elif current.type == "BinaryOp":
            lines.append(f"{prefix}BinaryOp: {current.operator.value}")
            stack.append((current.right, level + 1))
            stack.append((current.left, level + 1))
        else:
            lines.append(f"{prefix}Unknown: {current}")

    return "\n".join(lines)


def ast_to_source(node: AstNode) -> str:
    """Renders an AST back to a fully parenthesized expression string."""
    parts: List[str] = []
    # Entries are either nodes still to render or literal text to emit.
    stack: List[Union[AstNode, str]] = [node]

    while stack:
        current = stack.pop()
        if isinstance(current, str):
            parts.append(current)
        elif current.type == "Literal":
            parts.append(str(current.value))
        else:
            stack.append(")")
            stack.append(current.right)
            stack.append(f" {current.operator.value} ")
            stack.append(current.left)
            stack.append("(")

    return "".join(parts)
