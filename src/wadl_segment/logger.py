"""Logging configuration for wadl-segment.

Handlers are attached to the ``wadl_segment`` logger only, so the root
logger of an embedding application is left alone.
"""

import logging

FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "WARNING", log_file: str | None = None) -> logging.Logger:
    logger = logging.getLogger("wadl_segment")
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
