# medocr/core/logger.py
import logging
import os
import sys

_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"

_logger = logging.getLogger("medocr")
if not _logger.handlers:
    _logger.setLevel(os.getenv("MEDOCR_LOG_LEVEL", "INFO").upper())
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    _logger.addHandler(handler)
    # uvicorn installs its own root handlers; don't print twice
    _logger.propagate = False


def set_level(level: str | int) -> None:
    if isinstance(level, str):
        level = level.upper()
    _logger.setLevel(level)


def get_logger(name: str | None = None) -> logging.Logger:
    if name:
        return _logger.getChild(name)
    return _logger
