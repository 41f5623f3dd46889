from __future__ import annotations

from typing import Callable, Optional, Sequence

import customtkinter as ctk


class BottomBar(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, stretches: Sequence[str], **kwargs) -> None:
        super().__init__(master, height=64, **kwargs)

        # callbacks
        self.on_contrast_change: Optional[Callable[[float], None]] = None
        self.on_stretch_change: Optional[Callable[[str], None]] = None

        # layout
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(1, weight=1)  # slider stretches

        # Contrast
        self._contrast_label = ctk.CTkLabel(self, text="Контраст")
        self._contrast_label.grid(row=0, column=0, padx=(10, 6), pady=8, sticky="w")

        self._contrast_value = ctk.StringVar(value="0.00")
        self._contrast_slider = ctk.CTkSlider(
            self, from_=0, to=100, number_of_steps=100, command=self._on_contrast_slider
        )
        self._contrast_slider.set(0)
        self._contrast_slider.grid(row=0, column=1, padx=6, pady=8, sticky="ew")
        self._contrast_value_label = ctk.CTkLabel(self, textvariable=self._contrast_value, width=48, anchor="w")
        self._contrast_value_label.grid(row=0, column=2, padx=(6, 12), pady=8, sticky="w")

        # Stretch
        self._stretch_label = ctk.CTkLabel(self, text="Растяжка")
        self._stretch_label.grid(row=0, column=3, padx=(6, 6), pady=8, sticky="w")
        self._stretch_buttons = ctk.CTkSegmentedButton(
            self, values=list(stretches), command=self._on_stretch_click
        )
        self._stretch_buttons.set(stretches[0])
        self._stretch_buttons.grid(row=0, column=4, padx=(0, 10), pady=8, sticky="w")

    # public API (sync from controller)
    def set_contrast(self, contrast: float) -> None:
        self._contrast_slider.set(contrast * 100)
        self._contrast_value.set(f"{contrast:.2f}")

    def set_stretch(self, name: str) -> None:
        self._stretch_buttons.set(name)

    # events
    def _on_contrast_slider(self, value: float) -> None:
        contrast = round(value) / 100.0
        self._contrast_value.set(f"{contrast:.2f}")
        if self.on_contrast_change:
            self.on_contrast_change(contrast)

    def _on_stretch_click(self, value: str) -> None:
        if self.on_stretch_change:
            self.on_stretch_change(value)
