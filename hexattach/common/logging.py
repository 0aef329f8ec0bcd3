# hexattach/common/logging.py
from __future__ import annotations

import logging
from typing import Optional

_ROOT = "hexattach"


def get_logger(name: Optional[str] = None, level: Optional[int | str] = None) -> logging.Logger:
    """
    Return a logger under the 'hexattach' namespace.
    If nothing configured logging yet (no server, no app), do a basicConfig once.
    Level defaults to settings.log_level for the package root logger only.
    """
    if not logging.getLogger().handlers:
        logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    root = logging.getLogger(_ROOT)
    if root.level == logging.NOTSET:
        from hexattach.common.settings import get_settings
        root.setLevel(str(get_settings().log_level).upper())

    if not name or name == _ROOT:
        logger = root
    elif name.startswith(_ROOT + "."):
        logger = logging.getLogger(name)
    else:
        logger = logging.getLogger(f"{_ROOT}.{name}")
    if level is not None:
        logger.setLevel(level)
    return logger
