import logging
import logging.config

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """애플리케이션 시작 시 한 번 호출"""
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": {"format": LOG_FORMAT}},
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                }
            },
            "loggers": {
                "portal": {"handlers": ["console"], "level": level.upper(), "propagate": False},
            },
            "root": {"handlers": ["console"], "level": "WARNING"},
        }
    )
