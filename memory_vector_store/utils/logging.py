"""Structured logging for memory-vector-store.

The library only ever *emits* structlog events (``vector_store_saved``,
``vector_store_trimmed``, ...); applications decide how they render.
Nothing here runs on import.  An application opts in by calling
:func:`configure_logging` (or ``config.setup_logging``, which reads
``log_level`` and ``app_env`` from the layered config), choosing between two
renderings of one shared processor chain:

- development: coloured key=value lines via ``ConsoleRenderer``
- production (``json_output=True``): one JSON object per line

stdlib ``logging`` is routed through the same chain so records from httpx and
openai (used by the embedding providers) look like the library's own events.
"""

import logging
import sys

import structlog


def _shared_processors() -> list[structlog.types.Processor]:
    # contextvars first so bound request context lands in every event.
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _renderer(json_output: bool) -> structlog.types.Processor:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_logging(log_level: str = "INFO", json_output: bool = False) -> structlog.BoundLogger:
    """Configure structlog and bridge stdlib logging into it.

    Replaces the root logger's handlers, so only applications should call it.

    Args:
        log_level: Minimum level to emit (DEBUG, INFO, WARNING, ERROR).
        json_output: Emit JSON lines instead of console output.

    Returns:
        The root structlog logger.
    """
    level = logging.getLevelName(log_level.upper())
    processors = _shared_processors()
    renderer = _renderer(json_output)

    structlog.configure(
        processors=[*processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *processors,
                renderer,
            ],
        )
    )
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a structlog logger tagged with *name*.

    Never configures anything: output follows whatever the host application
    set up, or structlog's defaults until it does.
    """
    return structlog.get_logger(logger_name=name)


def truncate_for_log(text: str, max_length: int = 50) -> str:
    """Shorten *text* for a log field, appending ``...`` when cut."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."
