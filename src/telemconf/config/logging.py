"""structlog configuration for telemconf.

Library modules log through the stdlib (``logging.getLogger(__name__)``)
or ``structlog.get_logger``; both end up in one ``ProcessorFormatter``
handler on stderr, rendered for humans or as JSON lines.

Levels by logger:

- ``telemconf``: DEBUG with ``--verbose``, WARNING otherwise.
- ``telemconf.binding``: the binder logs every resolved type, constructed
  instance and skipped property, so it stays at INFO under ``--verbose``
  and only drops to DEBUG with ``--trace-binding``.
- ``pluggy``: always WARNING.
"""

from __future__ import annotations

import logging
import sys

import structlog

BINDING_LOGGER = "telemconf.binding"

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def logger_levels(*, verbose: bool, trace_binding: bool) -> dict[str, int]:
    """Return the level for each telemconf-managed logger."""
    verbose = verbose or trace_binding
    if trace_binding:
        binding_level = logging.DEBUG
    elif verbose:
        binding_level = logging.INFO
    else:
        binding_level = logging.WARNING
    return {
        "telemconf": logging.DEBUG if verbose else logging.WARNING,
        BINDING_LOGGER: binding_level,
        "pluggy": logging.WARNING,
    }


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    trace_binding: bool = False,
) -> None:
    """Route structlog and stdlib logging to a single stderr handler.

    Safe to call more than once; the root handler is replaced, not stacked.

    Args:
        verbose: DEBUG output for ``telemconf`` loggers (binder at INFO).
        log_json: JSON lines instead of the console renderer.
        trace_binding: DEBUG output from the binder too; implies *verbose*.
    """
    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_SHARED_PROCESSORS,
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

    for name, level in logger_levels(verbose=verbose, trace_binding=trace_binding).items():
        logging.getLogger(name).setLevel(level)
