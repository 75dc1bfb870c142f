import logging
import sys
from typing import Union

CONSOLE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s: %(message)s"


def new_console_logger(name: str = "scribedb", level: Union[int, str] = logging.DEBUG) -> logging.Logger:
    """Logger writing to stdout with full timestamps.

    Calling it again for the same name only updates the level; the stdout
    handler is attached once. The logger does not propagate, so nested console
    loggers (``scribedb`` and ``scribedb.store``) never print a message twice.
    """
    logger = logging.getLogger(name)
    if not any(getattr(h, "_scribedb_console", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z"))
        handler._scribedb_console = True
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
