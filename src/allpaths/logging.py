from __future__ import annotations

import json as _json
import logging
import sys

_PLAIN_FORMAT = "%(levelname)s | %(name)s | %(message)s"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        data = {
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return _json.dumps(data, ensure_ascii=False)


def get_logger(
    name: str = "allpaths", level: int | str | None = None, json: bool = False
) -> logging.Logger:
    """Return a logger with a single stdout handler.

    Loggers below the ``allpaths`` root propagate to it instead of getting their
    own handler, so ``configure_root`` controls the whole package at once.
    """
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    if name.startswith("allpaths."):
        get_logger("allpaths", json=json)
        return logger
    if logger.handlers:
        return logger
    if level is None:
        logger.setLevel(logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if json else logging.Formatter(_PLAIN_FORMAT))
    logger.addHandler(handler)
    return logger


def configure_root(level: int | str = logging.INFO, json: bool = False) -> logging.Logger:
    """Reset the package logger, used by the command-line tools."""
    logger = logging.getLogger("allpaths")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    return get_logger("allpaths", level=level, json=json)
