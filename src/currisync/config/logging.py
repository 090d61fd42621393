"""Root logger setup for the currisync command line."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# libraries that log every request or statement at INFO
NOISY_LOGGERS = ("httpx", "sqlalchemy.engine")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger for import and export runs.

    INFO reports one line per import stage and the final summary; DEBUG (the
    CLI's ``--verbose``) adds every write and every skipped node. ``force=True``
    replaces handlers installed earlier, e.g. by tests.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
