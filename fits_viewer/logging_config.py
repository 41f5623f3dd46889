"""Настройка логирования приложения: консольный вывод, тихий Pillow."""
from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: str | int = "INFO") -> logging.Logger:
    """Настраивает корневой логгер и возвращает его.

    Повторный вызов заменяет обработчики, а не дублирует их.
    """
    # PIL пишет DEBUG на каждый открытый PNG/TIFF
    for noisy in ("PIL", "PIL.PngImagePlugin", "PIL.Image"):
        noisy_logger = logging.getLogger(noisy)
        noisy_logger.setLevel(logging.WARNING)
        noisy_logger.propagate = False

    root = logging.getLogger()
    root.setLevel(level.upper() if isinstance(level, str) else level)
    root.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(console)
    return root
