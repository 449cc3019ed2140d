# src/resource_packer/logger.py
from __future__ import annotations

import logging

from resource_packer.config import Config

formatter = logging.Formatter(
    fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def get_logger(name: str = "resource_packer") -> logging.Logger:
    """Return a configured logger instance."""
    logger = logging.getLogger(name)
    logger.setLevel(Config.LOG_LEVEL)

    # Avoid duplicate handlers if called multiple times
    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if Config.LOG_FILE:
            file_handler = logging.FileHandler(Config.LOG_FILE, encoding="utf-8")
            file_handler.setLevel(Config.LOG_LEVEL)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
