"""Logging setup for the sportspack CLI."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# SQLAlchemy logs every statement at INFO once the root logger allows it
QUIET_LOGGERS: tuple[str, ...] = ("sqlalchemy.engine", "sqlalchemy.pool")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger with a terse CLI format.

    ``--verbose`` passes ``logging.DEBUG``; SQL statement logging stays at
    WARNING either way. Pass ``force=True`` to reconfigure an already
    configured root logger.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
