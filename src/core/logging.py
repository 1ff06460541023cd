"""Logging setup for the API process."""
import logging.config


def configure_logging(level: str = "INFO") -> None:
    """Install a single stdout handler on the root logger."""
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {
            "level": level.upper(),
            "handlers": ["console"],
        },
        "loggers": {
            # boto3 is chatty at INFO (credential lookup, endpoint resolution)
            "botocore": {"level": "WARNING"},
            "boto3": {"level": "WARNING"},
        },
    })
