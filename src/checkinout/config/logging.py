"""structlog configuration for checkinout.

Two output modes:
- Human (default): colored console output to stderr
- JSON (--log-json): Structured JSON lines to stderr

Outcomes and session records passed as event fields are flattened by
:func:`flatten_domain_values` so both renderers get plain values.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from checkinout.domain.errors import ErrorDetail
from checkinout.domain.outcome import Outcome, UnitOutcome
from checkinout.domain.session import SessionRecord

APP_LOGGER = "checkinout"


def _flatten(value: Any) -> Any:
    if isinstance(value, Outcome | UnitOutcome):
        if value.ok:
            return {"ok": True}
        return {"ok": False, "category": str(value.category), "codes": value.codes}
    if isinstance(value, SessionRecord):
        return {
            "status": str(value.status),
            "check_in": value.check_in.isoformat(),
            "check_out": value.check_out.isoformat(),
        }
    if isinstance(value, ErrorDetail):
        return value.code
    return value


def flatten_domain_values(
    _logger: Any, _method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    """structlog processor: replace domain objects with JSON-friendly values."""
    for key, value in event_dict.items():
        event_dict[key] = _flatten(value)
    return event_dict


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        verbose: Enable DEBUG-level output. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
    """
    app_level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        flatten_domain_values,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(APP_LOGGER).setLevel(app_level)
