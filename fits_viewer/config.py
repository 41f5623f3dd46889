"""Настройки просмотрщика: значения по умолчанию и загрузка из JSON.

Файл настроек необязателен. Ключи из файла накладываются поверх
`DEFAULT_SETTINGS`, неизвестные ключи пропускаются с предупреждением.
Путь можно передать явно или через переменную окружения `FITS_VIEWER_CONFIG`.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "FITS_VIEWER_CONFIG"

VALUE_TYPING_MODES = ("legacy", "strict")
STRETCH_NAMES = ("linear", "square", "sqrt")


@dataclass(frozen=True)
class ViewerSettings:
    """Параметры конвейера и окна.

    Fields:
        stretch: Функция растяжки по умолчанию.
        contrast: Контраст по умолчанию, [0, 1].
        value_typing: "legacy" — приоритет кавычка → T → F → точка → целое,
            "strict" — разбор по правилам фиксированного формата FITS.
        exclude_zero_pixels: Не учитывать нулевые (и NaN) пиксели в сумме и сумме квадратов.
        clamp_output: Ограничивать яркость растра диапазоном [0, 255].
        strict_bounds: Бросать `RegionError` вместо предупреждения при выходе области за кадр.
        max_header_cards: Сколько карточек читать в поисках END.
        log_level: Уровень логирования консоли.
    """
    stretch: str = "linear"
    contrast: float = 0.0
    value_typing: str = "legacy"
    exclude_zero_pixels: bool = True
    clamp_output: bool = True
    strict_bounds: bool = False
    max_header_cards: int = 3600
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        for name in ("exclude_zero_pixels", "clamp_output", "strict_bounds"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValueError(f"{name}: ожидалось true/false, получено {value!r}")
        if isinstance(self.contrast, bool) or not isinstance(self.contrast, (int, float)):
            raise ValueError(f"contrast: ожидалось число, получено {self.contrast!r}")
        if isinstance(self.max_header_cards, bool) or not isinstance(self.max_header_cards, int):
            raise ValueError(f"max_header_cards: ожидалось целое, получено {self.max_header_cards!r}")
        if not isinstance(self.log_level, str):
            raise ValueError(f"log_level: ожидалась строка, получено {self.log_level!r}")
        if self.stretch not in STRETCH_NAMES:
            raise ValueError(f"stretch: ожидалось одно из {STRETCH_NAMES}, получено {self.stretch!r}")
        if self.value_typing not in VALUE_TYPING_MODES:
            raise ValueError(
                f"value_typing: ожидалось одно из {VALUE_TYPING_MODES}, получено {self.value_typing!r}"
            )
        if not 0.0 <= self.contrast <= 1.0:
            raise ValueError(f"contrast вне [0, 1]: {self.contrast}")
        if self.max_header_cards < 1:
            raise ValueError(f"max_header_cards должно быть положительным: {self.max_header_cards}")


DEFAULT_SETTINGS = ViewerSettings()


def load_settings(path: Optional[str | Path] = None) -> ViewerSettings:
    """Читает настройки из JSON-файла поверх значений по умолчанию.

    Args:
        path: Путь к файлу. Если не задан, берётся из `FITS_VIEWER_CONFIG`;
            если и там пусто, возвращаются значения по умолчанию.

    Raises:
        FileNotFoundError: если указанный файл не существует.
        ValueError: если файл не является JSON-объектом или значения некорректны.
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if not env_path:
            return DEFAULT_SETTINGS
        path = env_path

    config_path = Path(path)
    if not config_path.is_file():
        raise FileNotFoundError(f"Файл настроек не найден: {config_path}")

    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Файл настроек не является JSON: {config_path}") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"Ожидался JSON-объект в {config_path}")

    known = {f.name for f in fields(ViewerSettings)}
    overrides: dict[str, Any] = {}
    for key, value in raw.items():
        if key not in known:
            logger.warning("Неизвестный ключ настроек %r в %s пропущен", key, config_path)
            continue
        overrides[key] = value

    settings = replace(DEFAULT_SETTINGS, **overrides)
    logger.debug("Настройки загружены из %s: %s", config_path, asdict(settings))
    return settings
