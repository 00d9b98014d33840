"""Log routing for siteext: structlog rendering on top of stdlib logging.

Library modules log with ``logging.getLogger(__name__)``; structlog's
``ProcessorFormatter`` renders those records (and native structlog
events) to stderr, as colored console lines or as JSON lines with
``--log-json``.

While a lifecycle stage is being applied, ``stage`` is bound in
structlog's context variables and appears on every record.
"""

from __future__ import annotations

import logging
import logging.config
import sys

import structlog

# Third-party loggers that stay at WARNING even in verbose mode.
QUIET_LOGGERS = ("pluggy",)


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install the stderr handler and structlog pipeline.

    Safe to call repeatedly; the root handler is replaced, not stacked.

    Args:
        verbose: ``siteext`` loggers emit DEBUG instead of WARNING.
        log_json: Render JSON lines instead of console output.
    """
    pre_chain = _pre_chain()
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "siteext": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": pre_chain,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        renderer,
                    ],
                },
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "siteext",
                },
            },
            "root": {"handlers": ["stderr"], "level": "WARNING"},
            "loggers": {
                "siteext": {"level": "DEBUG" if verbose else "WARNING"},
                **{name: {"level": "WARNING"} for name in QUIET_LOGGERS},
            },
        }
    )

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
