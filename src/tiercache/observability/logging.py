from __future__ import annotations

import logging
from typing import Optional, Union


def get_logger(name: Optional[str] = None, level: Union[int, str, None] = None) -> logging.Logger:
    logger = logging.getLogger(name or "tiercache")
    if not logger.handlers:
        handler = logging.StreamHandler()
        fmt = logging.Formatter(fmt="%(asctime)s %(levelname)s %(name)s - %(message)s")
        handler.setFormatter(fmt)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    if level is not None:
        logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger
