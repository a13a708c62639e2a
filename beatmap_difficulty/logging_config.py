from __future__ import annotations

import logging
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO, stream=None) -> logging.Logger:
    """Attach a single stream handler to the package logger."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    package_logger = logging.getLogger("beatmap_difficulty")
    package_logger.setLevel(level)

    handler: Optional[logging.Handler] = None
    for existing in package_logger.handlers:
        if getattr(existing, "_beatmap_difficulty", False):
            handler = existing
            break
    if handler is None:
        handler = logging.StreamHandler(stream)
        handler._beatmap_difficulty = True  # type: ignore[attr-defined]
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    handler.setLevel(level)
    return package_logger
