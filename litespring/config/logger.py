# litespring/config/logger.py

import os
from typing import Optional

from litespring.config.settings import Settings
from litespring.shared.logger import StructuredLogger


def get_logger(name: Optional[str] = None, settings: Optional[Settings] = None) -> StructuredLogger:
    """
    Build a StructuredLogger from application settings.
    The log directory is created on demand when a log file is configured.
    """
    settings = settings or Settings()
    log_file = settings.app.log_file

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

    return StructuredLogger(
        name=name or settings.app.app_name,
        log_file=log_file,
        level=settings.app.log_level,
    )
