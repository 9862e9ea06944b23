# scenehash/utils/logging_setup.py
from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Optional

import scenehash.utils.settings as settings


def configure_logging(
    level: int = logging.INFO,
    *,
    log_to_file: bool = False,
    log_dir: Optional[str] = None,
) -> Optional[str]:
    """
    Configure root logging with a readable format and optional file sink.
    Silences noisy third-party loggers by default.

    Returns the log file path when a file sink was added.
    """
    fmt = settings.LOG_FORMAT
    datefmt = settings.LOG_DATEFMT
    logging.basicConfig(level=level, format=fmt, datefmt=datefmt)

    # Tone down chatty libraries
    for noisy in settings.NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    if not log_to_file:
        return None

    directory = log_dir or settings.LOG_DIR
    os.makedirs(directory, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d-%H%M%S")
    path = os.path.join(directory, f"{settings.LOG_FILE_PREFIX}-{ts}.log")
    fh = logging.FileHandler(path, encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(logging.Formatter(fmt, datefmt))
    logging.getLogger().addHandler(fh)
    return path
