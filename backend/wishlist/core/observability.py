"""
Observability Infrastructure

Structured logging with correlation tracking, plus the Prometheus metrics
recorded by the HTTP middleware and the wishlist command orchestrator.
"""

import contextvars
import logging
import sys
import uuid
from typing import TYPE_CHECKING, Any

import structlog
from prometheus_client import Counter, Histogram

if TYPE_CHECKING:
    from .config import Settings

# Context variables for correlation tracking
correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)

# Prometheus metrics
REQUEST_COUNT = Counter(
    "wishlist_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

REQUEST_DURATION = Histogram(
    "wishlist_http_request_duration_seconds",
    "HTTP request duration",
    ["method", "endpoint"],
)

COMMAND_COUNT = Counter(
    "wishlist_commands_total",
    "Wishlist commands by outcome",
    ["command", "outcome"],
)

COMMAND_DURATION = Histogram(
    "wishlist_command_duration_seconds",
    "Wishlist command latency",
    ["command"],
)

CONCURRENCY_CONFLICTS = Counter(
    "wishlist_concurrency_conflicts_total",
    "Version conflicts observed on conditional writes",
    ["command"],
)


class CorrelationIdProcessor:
    """Structlog processor to add correlation ID to all log entries."""

    def __call__(
        self, logger: Any, name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        correlation_id = correlation_id_var.get("")
        if correlation_id:
            event_dict.setdefault("correlation_id", correlation_id)
        return event_dict


def setup_structured_logging(settings: "Settings") -> None:
    """Configure structured logging with JSON output and correlation tracking."""
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        CorrelationIdProcessor(),
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
    ]

    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(colors=settings.ENVIRONMENT == "local")
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=settings.ENVIRONMENT != "test",
    )

    # Standard library logging for uvicorn and the mongo driver
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    logging.getLogger("pymongo").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set correlation ID for request tracking."""
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())

    correlation_id_var.set(correlation_id)
    return correlation_id


def record_command(
    command: str,
    outcome: str,
    duration_seconds: float,
    **context: Any,
) -> None:
    """Emit the single structured event and metrics for a finished command."""
    COMMAND_COUNT.labels(command=command, outcome=outcome).inc()
    COMMAND_DURATION.labels(command=command).observe(duration_seconds)

    logger = get_logger("wishlist.commands")
    log = logger.warning if outcome not in ("ok", "noop") else logger.info
    log(
        "Wishlist command completed",
        command=command,
        outcome=outcome,
        duration_seconds=round(duration_seconds, 6),
        **context,
    )
