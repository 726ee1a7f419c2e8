import logging
import structlog
from app.core.config import settings


def setup_logging():
    """
    Setup structured logging with flat, readable format.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            # Flat console output instead of JSONRenderer
            structlog.dev.ConsoleRenderer(colors=False)
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = logging.Formatter(
        '%(asctime)s | %(name)s | %(levelname)s | %(message)s'
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, settings.log_level.upper()))

    uvicorn_logger = logging.getLogger("uvicorn")
    uvicorn_logger.setLevel(getattr(logging, settings.log_level.upper()))

    # Upstream calls go through httpx; only surface its errors
    httpx_logger = logging.getLogger("httpx")
    httpx_logger.setLevel(logging.ERROR)

    httpx_sub_loggers = [
        "httpx._client",
        "httpx._transports",
        "httpcore",
    ]

    for logger_name in httpx_sub_loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.WARNING)

    return structlog.get_logger()
