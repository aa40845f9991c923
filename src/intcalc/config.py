"""
Configuration for the interactive calculator front end.

Environment variables:
    INTCALC_PROMPT - Prompt printed before each line
    INTCALC_EXIT_COMMAND - Line that stops the loop (default: exit)
    INTCALC_LOG_LEVEL - Log level (debug, info, warning, error)
    INTCALC_SHOW_ERROR_CONTEXT - Print a caret under the failing position
    INTCALC_MAX_EXPRESSION_LENGTH - Maximum expression length in characters
    INTCALC_MAX_NESTING_DEPTH - Maximum parenthesis nesting depth
    INTCALC_MAX_AST_NODES - Maximum number of AST nodes
"""

from __future__ import annotations

import os
from dataclasses import asdict
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .limits import DEFAULT_EXPRESSION_LIMITS, ExpressionLimits

ENV_VAR_PROMPT = "INTCALC_PROMPT"
ENV_VAR_EXIT_COMMAND = "INTCALC_EXIT_COMMAND"
ENV_VAR_LOG_LEVEL = "INTCALC_LOG_LEVEL"
ENV_VAR_SHOW_ERROR_CONTEXT = "INTCALC_SHOW_ERROR_CONTEXT"

# Maps ExpressionLimits fields to the environment variables overriding them
LIMIT_ENV_VARS = {
    "max_expression_length": "INTCALC_MAX_EXPRESSION_LENGTH",
    "max_nesting_depth": "INTCALC_MAX_NESTING_DEPTH",
    "max_ast_nodes": "INTCALC_MAX_AST_NODES",
}

DEFAULT_PROMPT = "Enter an expression (or type 'exit' to quit): "

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class CalculatorConfig(BaseModel):
    """Configuration for the read-evaluate-print loop."""

    model_config = ConfigDict(populate_by_name=True)

    prompt: str = DEFAULT_PROMPT

    exit_command: str = Field(default="exit", alias="exitCommand")

    log_level: str = Field(default="warning", alias="logLevel")

    # Whether failures print the source line with a caret under the error
    show_error_context: bool = Field(default=False, alias="showErrorContext")

    expression_limits: ExpressionLimits | dict[str, Any] | None = Field(
        default=None, alias="expressionLimits"
    )

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got '{value}'"
            )
        return normalized

    @field_validator("exit_command")
    @classmethod
    def _validate_exit_command(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("exit_command must not be blank")
        return value.strip()

    @field_validator("expression_limits")
    @classmethod
    def _validate_expression_limits(
        cls, value: ExpressionLimits | dict[str, Any] | None
    ) -> ExpressionLimits | None:
        if value is None or isinstance(value, ExpressionLimits):
            return value

        merged = asdict(DEFAULT_EXPRESSION_LIMITS)
        for key, raw in value.items():
            if key not in merged:
                raise ValueError(f"Unknown expression limit: {key}")
            try:
                limit = int(raw)
            except (TypeError, ValueError):
                raise ValueError(f"{key} must be an integer, got '{raw}'") from None
            if limit < 1:
                raise ValueError(f"{key} must be positive, got {limit}")
            merged[key] = limit
        return ExpressionLimits(**merged)

    def resolved_limits(self) -> ExpressionLimits:
        """Returns the configured limits, falling back to the defaults."""
        if isinstance(self.expression_limits, ExpressionLimits):
            return self.expression_limits
        return DEFAULT_EXPRESSION_LIMITS

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> CalculatorConfig:
        """Builds a configuration from INTCALC_* environment variables."""
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        if ENV_VAR_PROMPT in env:
            values["prompt"] = env[ENV_VAR_PROMPT]
        if ENV_VAR_EXIT_COMMAND in env:
            values["exit_command"] = env[ENV_VAR_EXIT_COMMAND]
        if ENV_VAR_LOG_LEVEL in env:
            values["log_level"] = env[ENV_VAR_LOG_LEVEL]
        if ENV_VAR_SHOW_ERROR_CONTEXT in env:
            values["show_error_context"] = env[ENV_VAR_SHOW_ERROR_CONTEXT]

        limits = {
            field: env[var] for field, var in LIMIT_ENV_VARS.items() if var in env
        }
        if limits:
            values["expression_limits"] = limits

        return cls(**values)
