"""Исключения загрузки и отображения FITS.

Все ошибки наследуют `FitsError` (он же `ValueError`), чтобы вызывающий код
мог перехватить их одной веткой, как раньше перехватывался `ValueError`
при загрузке изображения.
"""
from __future__ import annotations

from typing import Any


class FitsError(ValueError):
    """Базовая ошибка обработки FITS-файла."""


class FormatError(FitsError):
    """Заголовок не разбирается: нет карточки END, мусор вместо ASCII и т.п."""


class ValidationError(FitsError):
    """Отсутствует или имеет неверный тип обязательный ключ заголовка."""

    def __init__(self, key: str, value: Any = None) -> None:
        self.key = key
        self.value = value
        super().__init__(f"некорректный FITS-файл: ключ {key}={value!r}")


class TruncatedDataError(FitsError):
    """Буфер короче, чем требуют размеры изображения."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"файл слишком короткий: {actual} < {expected} байт")


class UnsupportedEncodingError(FitsError):
    """BITPIX, для которого нет декодера."""

    def __init__(self, bitpix: int) -> None:
        self.bitpix = bitpix
        super().__init__(f"BITPIX {bitpix} не поддерживается")


class UnsupportedStretchError(FitsError):
    """Неизвестное имя функции растяжки."""

    def __init__(self, name: str, choices: tuple[str, ...] = ()) -> None:
        self.name = name
        self.choices = choices
        hint = f", варианты: {', '.join(choices)}" if choices else ""
        super().__init__(f"неизвестная растяжка: {name}{hint}")


class RegionError(FitsError):
    """Область интереса выходит за пределы изображения (строгий режим)."""

    def __init__(self, region: Any, width: int, height: int) -> None:
        self.region = region
        self.width = width
        self.height = height
        super().__init__(f"область {region} вне изображения {width} × {height}")
