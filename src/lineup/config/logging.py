"""structlog setup for the lineup CLI.

Every record, whether from ``structlog.get_logger`` or from a module's
``logging.getLogger(__name__)``, goes through one stderr handler:
console lines by default, one JSON object per line with ``--log-json``.
Tracebacks attached with ``exc_info`` become structured data in JSON mode.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Library loggers that stay at WARNING even under --verbose.
_LIBRARY_LOGGERS = ("pluggy",)


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route lineup logging to stderr.

    The ``lineup`` logger is DEBUG with *verbose* and WARNING otherwise;
    everything else stays at WARNING.
    """
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if log_json:
        pre_chain.append(structlog.processors.dict_tracebacks)

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)

    logging.getLogger("lineup").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
