"""
Structured logging configuration using structlog.

Provides JSON-formatted logging with context processors for
timestamps and log levels, or a colored console renderer in development.
"""
import logging
import sys
from typing import Any, Optional

import structlog


def setup_logging(level: str = "INFO", environment: str = "production") -> None:
    """
    Configure structured logging with structlog.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        environment: "development" switches to human-readable console output

    Sets up:
        - JSON output format for production
        - Console output with colors for development
        - Context processors for timestamps and metadata
        - Integration with standard library logging
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    # MCP stdio transport owns stdout, so logs go to stderr
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if environment == "development":
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of calling module)

    Returns:
        Configured structlog logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("listing_fetched", subreddit="pics", children=25)
    """
    return structlog.get_logger(name)


def log_tool_execution(
    tool_name: str,
    duration_ms: float,
    token_cached: bool,
    error: Optional[str] = None,
    **extra: Any,
) -> None:
    """
    Log tool execution metrics in structured format.

    Args:
        tool_name: Name of the MCP tool executed
        duration_ms: Execution time in milliseconds
        token_cached: Whether the access token was served from cache
        error: Error message if execution failed
        **extra: Additional context to log

    Example:
        >>> log_tool_execution(
        ...     tool_name="scrape_trendy_images",
        ...     duration_ms=412.7,
        ...     token_cached=True,
        ...     images_returned=12,
        ... )
    """
    logger = get_logger("tool_execution")

    log_data = {
        "tool": tool_name,
        "duration_ms": round(duration_ms, 2),
        "token_cached": token_cached,
        "error": error,
        **extra,
    }

    if error:
        logger.error("tool_execution_failed", **log_data)
    else:
        logger.info("tool_execution_success", **log_data)
