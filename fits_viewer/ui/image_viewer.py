"""Виджет просмотра: растр, вписанный в область с сохранением пропорций.

Принципы:
- SRP: отвечает только за представление растра и перевод событий мыши в координаты изображения.
- Чистый код: чёткое разделение публичного API и внутренних обработчиков событий.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageTk

from fits_viewer.services.coordinate_service import device_to_image, fit_scale


class ImageViewer(ctk.CTkFrame):
    """Канва с растром FITS; масштаб всегда «вписать»."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas = tk.Canvas(self, highlightthickness=0, bg=self._get_canvas_bg())
        self._canvas.grid(row=0, column=0, sticky="nsew")

        self._image: Optional[Image.Image] = None
        self._tk_image: Optional[ImageTk.PhotoImage] = None

        self._scale_factor: float = 1.0
        self._image_top_left: Tuple[int, int] = (0, 0)

        self.on_cursor_move: Optional[Callable[[Optional[int], Optional[int]], None]] = None

        self._canvas.bind("<Configure>", self._on_canvas_resize)
        self._canvas.bind("<Motion>", self._on_mouse_move)
        self._canvas.bind("<Leave>", self._on_mouse_leave)

    # ---- Public API ----
    def set_image(self, image: Optional[Image.Image]) -> None:
        """Устанавливает растр (или None) и перерисовывает виджет."""
        self._image = image
        self._render_image()

    # ---- Internals ----
    def _on_canvas_resize(self, _event: tk.Event) -> None:
        if self._image is None:
            return
        self._render_image()

    def _render_image(self) -> None:
        self._canvas.delete("all")
        if self._image is None:
            self._tk_image = None
            return

        canvas_w = max(1, int(self._canvas.winfo_width()))
        canvas_h = max(1, int(self._canvas.winfo_height()))
        img_w, img_h = self._image.size
        self._scale_factor = fit_scale(canvas_w, canvas_h, img_w, img_h)

        scaled_w = max(1, int(img_w * self._scale_factor))
        scaled_h = max(1, int(img_h * self._scale_factor))
        # no smoothing: each image pixel stays a crisp block
        resized = self._image.resize((scaled_w, scaled_h), Image.Resampling.NEAREST)

        x = (canvas_w - scaled_w) // 2
        y = (canvas_h - scaled_h) // 2
        self._image_top_left = (x, y)

        self._tk_image = ImageTk.PhotoImage(resized)
        self._canvas.create_image(x, y, image=self._tk_image, anchor="nw")

    def _on_mouse_move(self, event: tk.Event) -> None:
        if self._image is None or self.on_cursor_move is None:
            return
        img_x, img_y = self._canvas_to_image_coords(event.x, event.y)
        self.on_cursor_move(img_x, img_y)

    def _on_mouse_leave(self, _event: tk.Event) -> None:
        if self.on_cursor_move:
            self.on_cursor_move(None, None)

    def _canvas_to_image_coords(self, cx: int, cy: int) -> Tuple[Optional[int], Optional[int]]:
        if self._image is None:
            return None, None
        ox, oy = self._image_top_left
        x, y = device_to_image(cx, cy, ox, oy, self._scale_factor)
        img_w, img_h = self._image.size
        if 0 <= x < img_w and 0 <= y < img_h:
            return x, y
        return None, None

    def _get_canvas_bg(self) -> str:
        # CTk does not expose canvas theme, so pick neutral
        return "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"
