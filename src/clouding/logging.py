import logging
from typing import Any

import structlog

# Libraries whose per-request INFO lines duplicate our own ``http_exchange`` events.
NOISY_LOGGERS = ("httpx", "httpcore")


def _as_level(level: int | str) -> int:
    if isinstance(level, str):
        return logging.getLevelName(level.upper())
    return level


def configure_logging(level: int | str = logging.INFO, *, json: bool = True) -> None:
    """Route structlog through standard logging.

    Services keep the JSON renderer; the CLI passes ``json=False``.
    """

    level = _as_level(level)
    renderer: Any = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s")
    logging.getLogger().setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def bind_context(**kwargs: Any) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger().bind(**kwargs)
