"""Точка входа в приложение."""
from __future__ import annotations

import argparse
from typing import Optional, Sequence

from fits_viewer.app import FitsViewerApp
from fits_viewer.config import load_settings
from fits_viewer.logging_config import setup_logging


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Создаёт и запускает главное окно приложения, при необходимости открывая файл."""
    parser = argparse.ArgumentParser(prog="fits-viewer", description="Просмотр FITS-изображений")
    parser.add_argument("file", nargs="?", help="FITS-файл для открытия")
    parser.add_argument("--config", help="JSON-файл настроек")
    args = parser.parse_args(argv)

    settings = load_settings(args.config)
    setup_logging(settings.log_level)

    app = FitsViewerApp(settings)
    if args.file:
        # wait until the canvas has a size to fit into
        app.after(100, lambda: app.open_path(args.file))
    app.mainloop()


if __name__ == "__main__":
    main()
