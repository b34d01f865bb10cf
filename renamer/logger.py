import logging

from rich.console import Console
from rich.logging import RichHandler

LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def setup_logging(verbosity=0):
    """Route logging through rich on stderr. 0 = WARNING, 1 = INFO, 2+ = DEBUG."""
    level = LEVELS[min(max(verbosity, 0), len(LEVELS) - 1)]

    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicate messages
    for handler in logger.handlers[:]:
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=verbosity >= 2,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    logger.addHandler(handler)

    logging.getLogger(__name__).debug("Logging set to %s", logging.getLevelName(level))
    return logger
