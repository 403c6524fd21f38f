"""Batch context binding for structured logging.

Binds batch-scoped context (a batch identifier and any extra keys) so
every log line emitted while a batch of files is processed can be
correlated.

Usage:
    from infrastructure.logging import bind_batch_context

    with bind_batch_context(file_count=len(files)):
        logger.info("batch_started")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_batch_context(
    batch_id: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind batch-scoped context to all logs within the context manager.

    Args:
        batch_id: Unique batch identifier. Auto-generated if not provided.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        The batch identifier bound for the duration of the block.
    """
    context: dict[str, Any] = {"batch_id": batch_id or str(uuid.uuid4())}
    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["batch_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_batch_id() -> Optional[str]:
    """Get the current batch ID from the logging context.

    Returns:
        The batch ID if set, None otherwise.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("batch_id")


def clear_batch_context() -> None:
    """Clear all batch-scoped context from the logging context."""
    structlog.contextvars.clear_contextvars()
