import sys
from logging.config import dictConfig

from app.core.config import LOG_LEVEL


def _handler(formatter: str) -> dict:
    return {
        "class": "logging.StreamHandler",
        "stream": sys.stdout,
        "formatter": formatter,
    }


def build_logging_config(level: str = LOG_LEVEL) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            },
            "access": {
                "format": (
                    "%(asctime)s | ACCESS | "
                    "%(client_addr)s | %(method)s | "
                    "%(path)s | %(status_code)s | "
                    "%(process_time_ms)sms"
                ),
            },
        },
        "handlers": {
            "console": _handler("default"),
            "access_console": _handler("access"),
        },
        "loggers": {
            # request_logging_middleware
            "access": {
                "handlers": ["access_console"],
                "level": "INFO",
                "propagate": False,
            },
            # Our middleware already logs every request.
            "uvicorn.access": {
                "handlers": [],
                "propagate": False,
            },
            # Rejected submissions log at INFO, failed saves at ERROR.
            "app.services.quotations": {"level": level},
            "sqlalchemy.engine": {"level": "WARNING"},
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
    }


def setup_logging(level: str = LOG_LEVEL) -> None:
    dictConfig(build_logging_config(level))
