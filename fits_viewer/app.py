import customtkinter as ctk

from fits_viewer.config import DEFAULT_SETTINGS, STRETCH_NAMES, ViewerSettings
from fits_viewer.controllers.app_controller import AppController
from fits_viewer.services.view_service import ViewService
from fits_viewer.ui.image_viewer import ImageViewer
from fits_viewer.ui.sidebar import Sidebar
from fits_viewer.ui.bottom_bar import BottomBar


class FitsViewerApp(ctk.CTk):
    def __init__(self, settings: ViewerSettings = DEFAULT_SETTINGS) -> None:
        super().__init__()
        ctk.set_appearance_mode("system")
        ctk.set_default_color_theme("blue")

        self.title("FITS Viewer")
        self.minsize(900, 600)

        # root layout: left viewer, right sidebar
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)

        self._viewer = ImageViewer(self)
        self._viewer.grid(row=0, column=0, sticky="nsew", padx=(12, 6), pady=(12, 6))

        self._sidebar = Sidebar(self)
        self._sidebar.grid(row=0, column=1, sticky="ns", padx=(6, 12), pady=(12, 6))

        self._bottom = BottomBar(self, stretches=STRETCH_NAMES)
        self._bottom.grid(row=1, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))

        self._controller = AppController(
            viewer=self._viewer,
            sidebar=self._sidebar,
            bottom=self._bottom,
            window=self,
            view_service=ViewService(settings),
        )
        self._controller.bind_events()

    def open_path(self, file_path: str) -> bool:
        return self._controller.open_path(file_path)
