import logging.config
import os


def setup_logging(level: str | None = None) -> None:
    """
    Configures console logging for the relay.

    Args:
        level (str | None): Root log level. Defaults to LOG_LEVEL or INFO.
    """
    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {
            "handlers": ["console"],
            "level": level,
        },
        "loggers": {
            # googleapiclient logs every discovery lookup at INFO
            "googleapiclient.discovery": {"level": "WARNING"},
        },
    })
