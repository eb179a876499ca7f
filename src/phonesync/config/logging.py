"""Root logger setup for the phonesync CLI."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Attach one stderr handler to the root logger.

    Run summaries and duplicate-identifier warnings come out at INFO and WARNING;
    ``--verbose`` lowers the level to DEBUG to show each rejected row. Without
    ``force`` an already configured root logger is left alone.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
