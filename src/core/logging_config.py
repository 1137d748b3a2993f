"""Process-wide logging setup."""
import logging
import logging.config

from core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """
    Configure root logging from settings.

    Safe to call more than once (e.g. one app per test); the config is
    replaced rather than handlers being stacked.
    """
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "root": {
            "handlers": ["console"],
            "level": settings.log_level.upper(),
        },
        "loggers": {
            # SQL echo is controlled by db_echo, keep the engine logger quiet otherwise
            "sqlalchemy.engine": {"level": "INFO" if settings.db_echo else "WARNING"},
        },
    })
