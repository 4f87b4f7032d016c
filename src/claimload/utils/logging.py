"""
Structured logging for batch loads.

Every log line goes to stderr. stdout carries only what the CLI prints
(the load summary, validation tables, inferred schema YAML), so a
`claimload infer --yaml` result can be piped without log noise.
"""

import logging
import sys
from typing import Any

import structlog


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
) -> None:
    """
    Configure logging for one load, validation or inference run.

    Args:
        level: Lowest level emitted (DEBUG shows per-file and per-field
            detail, INFO one line per file plus the run summary).
        json_output: Emit one JSON object per line, for scheduled loads
            whose stderr is collected by a log shipper.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    # Warnings from libraries using the standard logging module
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=log_level)

    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_output:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # sys.stderr is looked up per logger so redirected streams are honoured
        logger_factory=lambda *args: structlog.PrintLogger(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Module logger; pass __name__."""
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> structlog.contextvars.bound_contextvars:
    """
    Bind fields to every log line emitted inside the block.

    Used around the parsing of one file so that coercion and header
    warnings carry the file they came from:

        with log_context(path=str(path)):
            log.warning("Ignoring unknown columns", columns=unknown)
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
