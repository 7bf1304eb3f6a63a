"""
Structured logging utilities.

Configures structlog on top of the standard library logging module and
provides a context manager for timed operation logging.
"""

from __future__ import annotations

import logging
import sys
import time
from contextlib import asynccontextmanager
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
    """
    Configure stdlib logging and structlog for a single run.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...)
        fmt: "json" for one JSON object per line, anything else for console output
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        stream=sys.stderr,
        force=True,
    )

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if fmt.lower() == "json":
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


@asynccontextmanager
async def log_operation(
    operation: str,
    subject_ids: dict[str, str] | None = None,
    **context: Any,
) -> Any:  # AsyncGenerator[None, None]
    """
    Context manager for structured operation logging.

    Logs operation start, completion, and errors with timing information.

    Args:
        operation: Name of the operation being performed
        subject_ids: Dictionary of subject identifiers (e.g., {"repo": "owner/repo", "pr": "123"})
        **context: Additional context to include in logs

    Example:
        async with log_operation("approval_check", repo=repo, pr=pr_number):
            approved = await check_approvals(...)
    """
    start_time = time.time()
    log_context = {
        **(subject_ids or {}),
        **context,
    }

    logger.info(f"🚀 Starting {operation}", operation=operation, **log_context)

    try:
        yield
    except Exception as e:
        latency_ms = int((time.time() - start_time) * 1000)
        logger.error(
            f"❌ {operation} failed after {latency_ms}ms",
            operation=operation,
            error=str(e),
            latency_ms=latency_ms,
            **log_context,
        )
        raise
    else:
        latency_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"✅ {operation} completed in {latency_ms}ms",
            operation=operation,
            latency_ms=latency_ms,
            **log_context,
        )
