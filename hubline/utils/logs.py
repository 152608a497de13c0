"""
Logging setup for the hubline process.

Log records go to a rotating file in the data directory; set
HUBLINE_LOG_STDOUT=1 to also get them on stderr. Messages meant for the
user never pass through here, they go to the session's MessageLog.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logger(path: Path, level: int = logging.WARNING, max_bytes: int = 2_000_000,
                 backups: int = 3, name: str = "hubline") -> logging.Logger:
    path.parent.mkdir(parents=True, exist_ok=True)
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.handlers:
        return logger
    fh = RotatingFileHandler(path, encoding="utf-8", maxBytes=max_bytes, backupCount=backups)
    fmt = logging.Formatter(LOG_FORMAT)
    fh.setFormatter(fmt)
    logger.addHandler(fh)
    if os.environ.get("HUBLINE_LOG_STDOUT") == "1":
        sh = logging.StreamHandler()
        sh.setFormatter(fmt)
        logger.addHandler(sh)
    # records stay in our handlers, not the root logger's
    logger.propagate = False
    return logger
