import logging
import sys


logger = logging.getLogger("repovol")

_handler = None


def configure_logging(debug: bool, stream=None):
    """
    Send repovol's log records to stdout, at DEBUG level when debug is set.

    Safe to call repeatedly: the handler is installed once and only the
    level changes afterwards.
    """
    global _handler

    if _handler is None and not logger.hasHandlers():
        _handler = logging.StreamHandler(stream or sys.stdout)
        _handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(_handler)

    logger.setLevel(logging.DEBUG if debug else logging.INFO)
