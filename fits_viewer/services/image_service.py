"""Загрузка FITS-изображений с диска или из памяти.

Принципы:
- SRP: класс только склеивает разбор заголовка, проверку и декодирование.
- OCP: новые источники (стрим, URL) можно добавить отдельными методами поверх `load_bytes`.
- LSP/ISP: возвращает `FitsImage` с предсказуемыми полями; интерфейс узкий и конкретный.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

from fits_viewer.config import DEFAULT_SETTINGS, ViewerSettings
from fits_viewer.models.image_model import FitsImage
from fits_viewer.services.decode_service import PixelDecoder
from fits_viewer.services.header_service import HeaderParser, HeaderValidator

logger = logging.getLogger(__name__)


class ImageService:
    def __init__(self, settings: ViewerSettings = DEFAULT_SETTINGS) -> None:
        self._parser = HeaderParser(
            value_typing=settings.value_typing, max_cards=settings.max_header_cards
        )
        self._validator = HeaderValidator()
        self._decoder = PixelDecoder()

    def load_bytes(self, buffer: bytes) -> FitsImage:
        """Декодирует FITS из готового буфера.

        Raises:
            FitsError: любая ошибка разбора, проверки или декодирования.
        """
        header, header_length = self._parser.parse(buffer)
        offset = self._validator.validate(header, header_length)
        return self._decoder.decode(header, offset, buffer)

    def load_image(self, file_path: str | Path) -> FitsImage:
        """Загружает FITS-файл с диска и возвращает его вместе с метаданными.

        Args:
            file_path: Путь до файла.

        Returns:
            `FitsImage` с заголовком, физическими значениями пикселей, путём и размером файла.

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
            FitsError: если файл не распознан как поддерживаемый FITS.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")

        buffer = path.read_bytes()
        image = self.load_bytes(buffer)

        size_bytes: Optional[int] = len(buffer)
        logger.info(
            "Загружен %s: %d × %d, BITPIX=%d", path.name, image.width, image.height, image.header.bitpix
        )
        return replace(image, path=path, size_bytes=size_bytes)
