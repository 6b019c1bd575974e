"""Logging setup driven by :class:`~record_linkage.settings.Settings`.

Unset arguments to :func:`configure_logging` fall back to
``RECORD_LINKAGE_LOG_JSON`` and ``RECORD_LINKAGE_LOG_LEVEL`` (via
``get_settings()``), so a host can switch the scorer to console output
or a different level from the environment without code changes.
"""

import logging
import sys

import structlog

from record_linkage.settings import Settings, get_settings


def configure_logging(
    json_output: bool | None = None,
    log_level: str | None = None,
    settings: Settings | None = None,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        json_output: Render JSON lines if ``True``, console output if
            ``False``. Defaults to ``settings.log_json``.
        log_level: Root log level name. Defaults to ``settings.log_level``.
        settings: Source of defaults; ``get_settings()`` if omitted.
    """
    if settings is None:
        settings = get_settings()
    if json_output is None:
        json_output = settings.log_json
    if log_level is None:
        log_level = settings.log_level

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper()))
