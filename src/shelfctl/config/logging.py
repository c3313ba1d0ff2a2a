"""structlog configuration for shelfctl.

Human mode (default) renders colored console lines to stderr; ``--log-json``
switches to one JSON object per line. Either way, records carrying a
:class:`~shelfctl.domain.errors.ShelfError` gain ``error_code`` and
``causes`` fields so a failed lookup can be traced to its driver or parser
error without reading the traceback.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from shelfctl.domain.errors import ShelfError

# Logger names whose level follows --verbose.
_SHELF_LOGGER = "shelfctl"
# Driver chatter stays off unless it is a real problem.
_QUIET_LOGGERS = ("sqlalchemy", "sqlalchemy.engine", "sqlalchemy.pool")


def add_error_chain(
    _logger: Any, _method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Lift the code and cause types of a logged ShelfError into the event."""
    exc = event_dict.get("exc_info")
    if isinstance(exc, tuple):
        exc = exc[1]
    if isinstance(exc, ShelfError):
        event_dict.setdefault("error_code", exc.code)
        event_dict.setdefault("causes", [type(cause).__name__ for cause in exc.chain()])
    return event_dict


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route stdlib and structlog records through one stderr handler.

    Args:
        verbose: Let ``shelfctl.*`` DEBUG records through (secondary
            repository failures are logged there). Otherwise WARNING+.
        log_json: Render JSON lines instead of console output.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_error_chain,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if log_json:
        # JSON lines need the traceback pre-rendered into a string field.
        shared_processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(_SHELF_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
