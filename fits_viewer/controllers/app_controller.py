"""Контроллер приложения: оркестрация UI и сеанса просмотра.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без декодирования и статистики).
- DIP: зависит от `ViewService` как от роли; конкретный конвейер инкапсулирован в нём.
Clean Code:
- Обработчики компактны; тяжёлая логика вынесена в сервисы.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from tkinter import filedialog, TclError
from typing import Optional

import customtkinter as ctk

from fits_viewer.errors import FitsError
from fits_viewer.services.view_service import RenderResult, ViewService
from fits_viewer.ui.bottom_bar import BottomBar
from fits_viewer.ui.image_viewer import ImageViewer
from fits_viewer.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)


@dataclass
class AppController:
    """Связывает элементы UI с сеансом просмотра.

    Ответственности:
    - Инициализация и бинд событий (UI -> контроллер).
    - Загрузка FITS через `ViewService`, показ ошибок загрузки.
    - Перерисовка при смене контраста или растяжки.
    - Показ значения пикселя под курсором.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk
    view_service: ViewService = field(default_factory=ViewService)

    _last_render: Optional[RenderResult] = None

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами.

        Сохраняет слабую связность: компоненты UI ничего не знают друг о друге,
        общаются через контроллер.
        """
        self.sidebar.on_open_file = self._handle_open_file
        self.viewer.on_cursor_move = self._handle_cursor_move

        self.bottom.on_contrast_change = self._handle_contrast_change
        self.bottom.on_stretch_change = self._handle_stretch_change

        self.bottom.set_contrast(self.view_service.contrast)
        self.bottom.set_stretch(self.view_service.stretch)

    def open_path(self, file_path: str | Path) -> bool:
        """Загружает файл и перерисовывает окно. Возвращает False при ошибке."""
        try:
            image = self.view_service.open_file(file_path)
        except (FitsError, OSError) as exc:
            logger.error("Не удалось открыть %s: %s", file_path, exc)
            self.sidebar.show_error(str(exc))
            return False

        self.window.title(f"FITS Viewer — {image.path.name if image.path else ''}")
        self.sidebar.set_image_info(image)
        self._refresh()
        return True

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите FITS-файл",
                filetypes=(
                    ("FITS", "*.fits *.fit *.fts"),
                    ("All files", "*.*"),
                ),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return

        if not file_path:
            return
        self.open_path(file_path)

    def _handle_contrast_change(self, contrast: float) -> None:
        self.view_service.set_contrast(contrast)
        self._refresh()

    def _handle_stretch_change(self, name: str) -> None:
        try:
            self.view_service.set_stretch(name)
        except FitsError as exc:
            logger.error("%s", exc)
            self.sidebar.show_error(str(exc))
            self.bottom.set_stretch(self.view_service.stretch)
            return
        self._refresh()

    def _handle_cursor_move(self, x: Optional[int], y: Optional[int]) -> None:
        if x is None or y is None or self._last_render is None:
            self.sidebar.update_cursor_info(None)
            return
        sample = self.view_service.sample(x, y, tone=self._last_render.tone)
        self.sidebar.update_cursor_info(sample)

    # ---- Helpers ----
    def _refresh(self) -> None:
        """Пересчитывает статистику и растр текущей области и показывает их."""
        result = self.view_service.render()
        self._last_render = result
        if result is None:
            self.viewer.set_image(None)
            self.sidebar.set_stats(None, None)
            return
        self.viewer.set_image(result.to_pil())
        self.sidebar.set_stats(result.stats, result.tone)
