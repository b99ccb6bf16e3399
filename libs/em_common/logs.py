"""
Console logger factory for electricityMap services.
Child loggers per module (electricitymap.assets, electricitymap.web, ...).
"""

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
ROOT_NAME = "electricitymap"


def get_logger(name: str = "", level: str | None = None) -> logging.Logger:
    root = logging.getLogger(ROOT_NAME)

    # Avoid double-attaching handlers
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    wanted = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    root.setLevel(getattr(logging, wanted, logging.INFO))

    return root.getChild(name) if name else root
