from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(*, level: str = "WARNING", log_file: Optional[str] = None, colors: str = "auto") -> None:
    lvl = getattr(logging, level.upper(), logging.WARNING)
    handlers: List[logging.Handler] = []
    # log to stderr so the card grid on stdout stays clean
    console = Console(stderr=True, no_color=(colors == "never"), force_terminal=(colors == "always") or None)
    handlers.append(RichHandler(console=console, rich_tracebacks=True, show_time=True, show_level=True, markup=False))
    if log_file:
        file_handler = RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=5)
        file_handler.setLevel(lvl)
        fmt = logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s')
        file_handler.setFormatter(fmt)
        handlers.append(file_handler)
    logging.basicConfig(level=lvl, handlers=handlers, force=True)
