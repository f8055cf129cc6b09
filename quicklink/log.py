from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass

from rich.console import Console
from rich.logging import RichHandler

# Link rows go to stdout; everything logged goes to stderr.
_PACKAGE_LOGGER = "quicklink"


@dataclass(frozen=True)
class LogConfig:
    level: str = "WARNING"
    no_color: bool = False


def setup_logging(cfg: LogConfig) -> logging.Logger:
    level = getattr(logging, cfg.level.upper(), logging.WARNING)

    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    for h in list(logger.handlers):
        logger.removeHandler(h)

    use_rich = not (cfg.no_color or os.getenv("NO_COLOR") is not None) and sys.stderr.isatty()
    if use_rich:
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_level=True,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    handler.setLevel(level)
    logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
