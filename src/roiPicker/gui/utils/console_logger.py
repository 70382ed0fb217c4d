from __future__ import annotations

import logging
import sys

_HANDLER_NAME = "roiPicker-console"
_FORMAT = "%(levelname)s %(name)s: %(message)s"

# Third-party loggers that are chatty at DEBUG while decoding images.
_QUIET_LOGGERS = ("PIL",)


def install_console_logging(level: int = logging.INFO, *, root: str = "roiPicker") -> logging.Logger:
    """Attach a stdout handler to the *root* package logger and return it.

    Repeated calls reuse the existing handler and only adjust the level, so a
    ``--verbose`` launch after an earlier setup still takes effect.
    """

    logger = logging.getLogger(root)
    handler = next((h for h in logger.handlers if h.name == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
        handler.name = _HANDLER_NAME
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    handler.setLevel(level)
    logger.setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))
    return logger
