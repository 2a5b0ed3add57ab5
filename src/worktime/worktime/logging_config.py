"""Logging configuration shared by every entry point."""

import logging
import logging.config

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "stream": "ext://sys.stdout",
        },
    },
    "loggers": {
        "worktime": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
    },
}


def configure_logging(level: str = "INFO") -> None:
    config = dict(LOGGING_CONFIG)
    config["loggers"] = {"worktime": dict(LOGGING_CONFIG["loggers"]["worktime"], level=str(level).upper())}
    logging.config.dictConfig(config)
    logging.getLogger("worktime").debug("Logging configured at %s", level)
