"""
Line-oriented front end for the calculator.

Reads one expression per line, evaluates it and prints either the result
or a description of the error. A failing line never stops the loop; only
the exit command or end of input does.

Usage:
    python -m intcalc
    INTCALC_LOG_LEVEL=debug INTCALC_SHOW_ERROR_CONTEXT=1 python -m intcalc
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from .config import CalculatorConfig
from .evaluator import try_evaluate

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def enable_logging(log_level: str = "warning") -> None:
    """Configures root logging at the given level name."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def run_repl(
    config: Optional[CalculatorConfig] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    """
    Runs the read-evaluate-print loop until exit or end of input.

    Args:
        config: Front end configuration (defaults apply when omitted)
        stdin: Stream to read expressions from
        stdout: Stream for prompts and results
        stderr: Stream for error descriptions

    Returns:
        The number of lines that failed to evaluate
    """
    config = config or CalculatorConfig()
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    limits = config.resolved_limits()

    logger.debug(
        "repl_started",
        extra={
            "exit_command": config.exit_command,
            "max_expression_length": limits.max_expression_length,
            "max_nesting_depth": limits.max_nesting_depth,
        },
    )

    evaluated = 0
    failures = 0

    while True:
        stdout.write(config.prompt)
        stdout.flush()

        line = stdin.readline()
        if not line:
            break

        expression = line.strip()
        if expression == config.exit_command:
            break
        # Blank lines are skipped rather than reported as an unexpected end
        if not expression:
            continue

        evaluated += 1
        result = try_evaluate(expression, limits)

        if result.success:
            logger.debug(
                "expression_evaluated",
                extra={"expression": expression, "value": result.value},
            )
            print(f"Result: {result.value}", file=stdout)
            continue

        failures += 1
        error = result.exception
        logger.info(
            "expression_failed",
            extra={
                "expression": expression,
                "error_type": type(error).__name__,
                "position": error.position if error is not None else None,
                "error": result.error,
            },
        )
        if config.show_error_context and error is not None:
            message = error.format_with_context()
        else:
            message = result.error
        print(f"Error: {message}", file=stderr)

    logger.debug(
        "repl_stopped", extra={"evaluated": evaluated, "failures": failures}
    )
    return failures


def main() -> int:
    """Console entry point."""
    config = CalculatorConfig.from_env()
    enable_logging(config.log_level)
    run_repl(config)
    return 0
