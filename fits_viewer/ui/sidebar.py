"""Боковая панель: открытие файла, информация, статистика, курсор, заголовок.

Принципы:
- SRP: управляет только отображением, не содержит вычислений.
- ISP: данные принимает через компактные методы `set_*`, события отдаёт через `on_*`.
"""
from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

from fits_viewer.models.image_model import FitsImage
from fits_viewer.models.stats_model import PixelSample, RegionStats, ToneParams


def _format_number(value: float) -> str:
    """Компактное представление значения пикселя."""
    if value != value:  # NaN
        return "NaN"
    if float(value).is_integer() and abs(value) < 1e12:
        return str(int(value))
    return f"{value:.6g}"


class Sidebar(ctk.CTkFrame):
    """Панель с блоками: файл, информация, статистика, курсор, заголовок."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None

        # Controls
        self._title = ctk.CTkLabel(self, text="Инструменты", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Открыть FITS…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 4), sticky="ew")

        self._error_val = ctk.StringVar(value="")
        self._error_label = ctk.CTkLabel(
            self, textvariable=self._error_val, text_color="#d9534f", wraplength=250, anchor="w", justify="left"
        )
        self._error_label.grid(row=2, column=0, padx=8, pady=(0, 8), sticky="ew")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Информация", font=ctk.CTkFont(size=16, weight="bold"))
        self._info_title.grid(row=3, column=0, padx=8, pady=(8, 4), sticky="w")

        self._path_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")
        self._encoding_val = ctk.StringVar(value="—")

        self._info_path = ctk.CTkLabel(self, textvariable=self._path_val, wraplength=250, anchor="w", justify="left")
        self._info_size = ctk.CTkLabel(self, textvariable=self._size_val, anchor="w", justify="left")
        self._info_dims = ctk.CTkLabel(self, textvariable=self._dims_val, anchor="w", justify="left")
        self._info_encoding = ctk.CTkLabel(self, textvariable=self._encoding_val, anchor="w", justify="left")

        self._info_path.grid(row=4, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_size.grid(row=5, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_dims.grid(row=6, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_encoding.grid(row=7, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Stats section
        self._stats_title = ctk.CTkLabel(self, text="Статистика", font=ctk.CTkFont(size=16, weight="bold"))
        self._stats_title.grid(row=8, column=0, padx=8, pady=(8, 4), sticky="w")

        self._stats_val = ctk.StringVar(value="—")
        self._stats_label = ctk.CTkLabel(self, textvariable=self._stats_val, anchor="w", justify="left")
        self._stats_label.grid(row=9, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Cursor section
        self._cursor_title = ctk.CTkLabel(self, text="Курсор", font=ctk.CTkFont(size=16, weight="bold"))
        self._cursor_title.grid(row=10, column=0, padx=8, pady=(8, 4), sticky="w")

        self._cursor_xy_val = ctk.StringVar(value="—")
        self._cursor_fits_val = ctk.StringVar(value="—")
        self._cursor_value_val = ctk.StringVar(value="—")

        self._cursor_xy = ctk.CTkLabel(self, textvariable=self._cursor_xy_val, anchor="w", justify="left")
        self._cursor_fits = ctk.CTkLabel(self, textvariable=self._cursor_fits_val, anchor="w", justify="left")
        self._cursor_value = ctk.CTkLabel(self, textvariable=self._cursor_value_val, anchor="w", justify="left")

        self._cursor_xy.grid(row=11, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._cursor_fits.grid(row=12, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._cursor_value.grid(row=13, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Header cards
        self._header_title = ctk.CTkLabel(self, text="Заголовок", font=ctk.CTkFont(size=16, weight="bold"))
        self._header_title.grid(row=20, column=0, padx=8, pady=(8, 4), sticky="w")
        self._header_text = ctk.CTkTextbox(self, width=260, font=ctk.CTkFont(family="Courier", size=11), wrap="none")
        self._header_text.grid(row=21, column=0, padx=8, pady=(0, 8), sticky="nsew")
        self._header_text.configure(state="disabled")
        self.grid_rowconfigure(21, weight=1)

    # ---- Public API ----
    def set_image_info(self, image: FitsImage) -> None:
        """Отображает метаданные загруженного изображения и его карточки."""
        self._error_val.set("")
        self._path_val.set(str(image.path) if image.path else "—")
        self._size_val.set(self._format_size(image.size_bytes))
        self._dims_val.set(f"{image.width} × {image.height} px")
        header = image.header
        self._encoding_val.set(f"BITPIX {header.bitpix}, BZERO {header.bzero:g}, BSCALE {header.bscale:g}")

        self._header_text.configure(state="normal")
        self._header_text.delete("1.0", "end")
        self._header_text.insert("1.0", "\n".join(card.rstrip() for card in header.cards))
        self._header_text.configure(state="disabled")

    def set_stats(self, stats: Optional[RegionStats], tone: Optional[ToneParams]) -> None:
        """Обновляет блок статистики (min/max с координатами, среднее, медиана, СКО, точки ч/б)."""
        if stats is None or tone is None:
            self._stats_val.set("—")
            return
        lines = [
            f"Пикселей: {stats.count}",
            f"Min: {_format_number(stats.min)} @ ({stats.min_at.x}, {stats.min_at.y})",
            f"Max: {_format_number(stats.max)} @ ({stats.max_at.x}, {stats.max_at.y})",
            f"Среднее: {stats.mean:.4g}   Медиана: {_format_number(stats.median)}",
            f"СКО: {stats.stddev:.4g}",
            f"Чёрный: {tone.black:.4g}   Белый: {tone.white:.4g}",
        ]
        self._stats_val.set("\n".join(lines))

    def update_cursor_info(self, sample: Optional[PixelSample]) -> None:
        """Обновляет информацию по курсору (координаты изображения и FITS, значение, яркость)."""
        if sample is None:
            self._cursor_xy_val.set("—")
            self._cursor_fits_val.set("—")
            self._cursor_value_val.set("—")
            return
        self._cursor_xy_val.set(f"Изображение: ({sample.x}, {sample.y})")
        self._cursor_fits_val.set(f"FITS: ({sample.fits_x}, {sample.fits_y})")
        self._cursor_value_val.set(f"Значение: {_format_number(sample.value)}   Серый: {sample.gray}")

    def show_error(self, message: str) -> None:
        self._error_val.set(message)

    # ---- Events ----
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    # ---- Helpers ----
    def _format_size(self, size_bytes: Optional[int]) -> str:
        if size_bytes is None:
            return "—"
        thresholds = [("Б", 1024), ("КБ", 1024**2), ("МБ", 1024**3), ("ГБ", 1024**4)]
        for label, limit in thresholds:
            if size_bytes < limit:
                if label == "Б":
                    return f"{size_bytes} {label}"
                value = size_bytes / (limit // 1024)
                return f"{value:.1f} {label}"
        value = size_bytes / (1024**4)
        return f"{value:.1f} ТБ"
