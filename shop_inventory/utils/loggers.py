import logging

from ..config import LOG_LEVEL

FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name="shop_inventory", level=None):
    """
    Logger for `name` with one stream handler. Call once at start-up with the
    package name; module loggers (logging.getLogger(__name__)) propagate to it.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(level or LOG_LEVEL)
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter(FORMAT))
        logger.addHandler(ch)
    return logger
