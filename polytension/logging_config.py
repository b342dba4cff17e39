"""
Logging Configuration
One handler set on the 'polytension' logger, shared by every front end.
Chatty third-party loggers (Flask's request log, Pillow's plugin probing)
are held at WARNING unless we run at DEBUG.
"""
import logging
import sys
from typing import Iterable, Optional

LOG_FORMAT = '%(asctime)s %(levelname)-7s %(name)s: %(message)s'
NOISY_LOGGERS = ("werkzeug", "PIL")


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    noisy: Iterable[str] = NOISY_LOGGERS,
) -> logging.Logger:
    """
    Configure the 'polytension' logger.

    Args:
        level: threshold for our own records.
        log_file: optional path; the file is truncated on each run.
        noisy: third-party loggers to hold at WARNING unless level is DEBUG.
    """
    logger = logging.getLogger("polytension")
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    third_party = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in noisy:
        logging.getLogger(name).setLevel(third_party)

    logger.debug("Logging at %s%s", logging.getLevelName(level), f", copy in {log_file}" if log_file else "")
    return logger
