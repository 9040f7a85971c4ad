# storefront/utils/logging.py
import logging
import sys

import structlog

from storefront.utils.settings import LOG_JSON, LOG_LEVEL


def configure_logging(level: str = LOG_LEVEL, json: bool = LOG_JSON) -> None:
    """Konfiguracja stdlib logging + structlog, wolana raz przy starcie aplikacji."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # mniej szumu z bibliotek
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("stripe").setLevel(logging.WARNING)


def get_logger(name: str):
    return structlog.get_logger(name)
