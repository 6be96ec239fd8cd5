"""
Logging configuration for the agent process.
"""
import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s type=%(type)s %(message)s"


class CycleTypeFilter(logging.Filter):
    """
    Gives every record a ``type`` attribute so the format string never fails.
    Cycle records set it explicitly (started, completed, failed).
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "type"):
            record.type = "-"
        return True


def setup_logging(level: str = None) -> logging.Logger:
    """
    Configures the root logger.

    :param level: Level name, defaults to the LOG_LEVEL environment variable or INFO.
    :return: The package logger.
    """
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
    for handler in logging.getLogger().handlers:
        handler.addFilter(CycleTypeFilter())
    return logging.getLogger("marco_docker")
