"""structlog configuration for taskcatalog.

Human console output by default, JSON lines with ``--log-json``. Both go
to stderr so stdout stays clean for reports and ``--json`` payloads.

Every record emitted while a catalog is open carries ``catalog_root``, so
logs from several catalogs can be told apart.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog

LOGGER_NAME = "taskcatalog"

# Chatty libraries stay at WARNING even under --verbose.
_QUIET_LIBRARIES = ("pluggy",)


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _build_formatter(
    shared: list[structlog.types.Processor], *, log_json: bool
) -> structlog.stdlib.ProcessorFormatter:
    final: list[structlog.types.Processor] = [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta
    ]
    if log_json:
        # Tracebacks become structured dicts instead of multi-line text.
        final += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        final.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    return structlog.stdlib.ProcessorFormatter(foreign_pre_chain=shared, processors=final)


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Configure structlog processors and route stdlib logging through them.

    Safe to call repeatedly: the root handler is replaced and any bound
    catalog context is dropped.

    Args:
        verbose: DEBUG for the ``taskcatalog`` logger instead of WARNING.
        log_json: Use JSON renderer instead of console renderer.
    """
    shared = _shared_processors()
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    structlog.contextvars.clear_contextvars()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_build_formatter(shared, log_json=log_json))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_catalog_root(root: Path) -> None:
    """Attach *root* to every subsequent log record as ``catalog_root``."""
    structlog.contextvars.bind_contextvars(catalog_root=str(root))
