import logging
import os

LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"


def level_for(verbosity: int) -> int:
    """Map a ``-v``/``-q`` count to a logging level.

    ``verbosity`` is the number of ``-v`` flags minus the number of ``-q``
    flags.  At zero the level comes from ``GRIMSCRIBE_LOG_LEVEL`` and falls
    back to WARNING.
    """

    if verbosity < 0:
        return logging.ERROR
    if verbosity == 1:
        return logging.INFO
    if verbosity >= 2:
        return logging.DEBUG
    name = os.getenv("GRIMSCRIBE_LOG_LEVEL", "WARNING").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(verbosity: int = 0) -> None:
    logging.basicConfig(level=level_for(verbosity), format=LOG_FORMAT)


def get_logger(name: str) -> logging.Logger:
    """Return a module-level logger."""
    return logging.getLogger(name)
