"""structlog setup for the API process.

Application events come from structlog loggers; uvicorn, SQLAlchemy and the
database drivers log through the stdlib, which is routed into the same
processor chain so every line carries the request id and ends up in one
format (JSON in production, colored console in debug).
"""

import logging
import logging.config

import structlog
from asgi_correlation_id.context import correlation_id

# Third-party loggers that are noisy at INFO/DEBUG for this stack.
# aiosqlite logs every statement it proxies at DEBUG; asyncpg and the
# SQLAlchemy pool log connection churn.
QUIET_LOGGERS = {
    "uvicorn.access": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "aiosqlite": "WARNING",
    "asyncpg": "WARNING",
    "watchfiles": "WARNING",
}


def add_correlation_id(logger, method, event_dict):
    """Attach the X-Request-ID of the request being served, if any."""
    cid = correlation_id.get(None)
    if cid:
        event_dict["request_id"] = cid
    return event_dict


def configure_structlog(log_level: str = "INFO", json_logs: bool = True, log_sql: bool = False) -> None:
    """Configure structlog and bridge stdlib logging into it.

    Must run before the first structlog logger is used, since loggers cache
    their processor chain.

    Args:
        log_level: Root log level
        json_logs: JSON lines when True, ConsoleRenderer otherwise
        log_sql: Emit every SQL statement (sqlalchemy.engine at INFO)
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_correlation_id,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        final_processors = [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        final_processors = [structlog.dev.ConsoleRenderer()]

    loggers = {name: {"level": level} for name, level in QUIET_LOGGERS.items()}
    loggers["sqlalchemy.engine"] = {"level": "INFO" if log_sql else "WARNING"}

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structlog": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    *final_processors,
                ],
                "foreign_pre_chain": shared_processors,
            },
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "structlog",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {"handlers": ["default"], "level": log_level},
        "loggers": loggers,
    })

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
